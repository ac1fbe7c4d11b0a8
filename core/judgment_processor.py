"""
판정 처리 모듈
레인 입력(누르는 순간)을 노트 판정으로 변환합니다.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Container, Optional

import constants
from core.config_manager import EngineRules
from core.feedback import FeedbackEmitter
from core.lanes import LaneRegistry
from core.logger import get_logger
from core.note import Note, NoteState
from core.note_manager import NoteManager

logger = get_logger()

ScoreCallback = Callable[[int, bool], object]
HealthCallback = Callable[[float], object]


class JudgementKind(Enum):
    PERFECT = "PERFECT"
    NEAR_MISS = "MISS"
    NONE = "NONE"


@dataclass(frozen=True)
class Judgement:
    """판정 결과"""
    kind: JudgementKind
    lane: int
    note: Optional[Note] = None
    distance: Optional[float] = None


class JudgmentProcessor:
    """판정 처리를 담당하는 클래스"""

    def __init__(
        self,
        lanes: LaneRegistry,
        rules: EngineRules,
        on_score: ScoreCallback,
        on_health: HealthCallback,
        feedback: FeedbackEmitter
    ):
        self.lanes = lanes
        self.rules = rules
        self.on_score = on_score
        self.on_health = on_health
        self.feedback = feedback

    def judge(self, lane: int, note_manager: NoteManager, held: Container[int]) -> Judgement:
        """
        레인 입력을 판정합니다.

        Args:
            lane: 눌린 레인 인덱스
            note_manager: 활성 노트 저장소
            held: 현재 눌린 레인 집합 (홀드 노트 진입 여부 결정)

        Returns:
            Judgement. 대상 노트가 없거나 너무 멀면 kind가 NONE
        """
        lane_config = self.lanes.get(lane)
        target = note_manager.find_judge_target(lane)
        if target is None:
            return Judgement(JudgementKind.NONE, lane)

        distance = abs(target.y - self.rules.hit_line_y)
        hit_window = self.rules.hit_window

        if distance <= hit_window:
            self._register_hit(target, lane in held)
            self.feedback.emit(constants.FEEDBACK_PERFECT, lane_config.x_percent)
            return Judgement(JudgementKind.PERFECT, lane, target, distance)

        # 어느 정도 가까울 때만 감점 (아무 데나 누르는 입력은 무시)
        if distance < hit_window * 2:
            self.on_score(self.rules.score_miss, True)
            self.on_health(-self.rules.health_penalty)
            self.feedback.emit(constants.FEEDBACK_MISS, lane_config.x_percent)
            logger.debug(f"near miss lane={lane} distance={distance:.2f}")
            return Judgement(JudgementKind.NEAR_MISS, lane, target, distance)

        return Judgement(JudgementKind.NONE, lane, target, distance)

    def _register_hit(self, note: Note, lane_held: bool) -> None:
        """히트 판정을 등록합니다."""
        if note.is_hold and lane_held:
            note.state = NoteState.HOLDING
        else:
            note.state = NoteState.HIT
        logger.debug(f"hit {note}")
        self.on_score(self.rules.score_hit, False)
        self.on_health(self.rules.health_gain)
