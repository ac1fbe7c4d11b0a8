"""
노트 이동 모듈
매 프레임 노트를 이동시키고 미스, 홀드 완료/실패, 정리를 처리합니다.
"""
from typing import Container, List, Tuple

import constants
from core.config_manager import EngineRules
from core.feedback import FeedbackEmitter
from core.judgment_processor import HealthCallback, ScoreCallback
from core.lanes import LaneRegistry
from core.logger import get_logger
from core.note import Note, NoteState
from core.note_manager import NoteManager

logger = get_logger()

Transition = Tuple[Note, NoteState]


class KinematicUpdater:
    """프레임 단위 노트 업데이트"""

    def __init__(
        self,
        lanes: LaneRegistry,
        rules: EngineRules,
        fall_speed: float,
        on_score: ScoreCallback,
        on_health: HealthCallback,
        feedback: FeedbackEmitter
    ):
        self.lanes = lanes
        self.rules = rules
        self.fall_speed = fall_speed
        self.on_score = on_score
        self.on_health = on_health
        self.feedback = feedback

    def update(self, note_manager: NoteManager, held: Container[int]) -> List[Transition]:
        """
        한 프레임을 진행합니다.

        Args:
            note_manager: 활성 노트 저장소
            held: 현재 눌린 레인 집합

        Returns:
            이번 프레임에 발생한 (노트, 새 상태) 리스트
        """
        transitions: List[Transition] = []
        hit_line = self.rules.hit_line_y

        for note in note_manager:
            note.advance(self.fall_speed)

        for note in note_manager:
            if note.state is NoteState.HOLDING:
                tail_passed = note.tail_y > hit_line
                if note.lane not in held and not tail_passed:
                    self._register_miss(note, NoteState.RELEASED_EARLY)
                    transitions.append((note, note.state))
                elif tail_passed:
                    self._register_hold_complete(note)
                    transitions.append((note, note.state))
            elif note.state is NoteState.FALLING and note.y > hit_line + self.rules.hit_window:
                self._register_miss(note, NoteState.MISSED)
                transitions.append((note, note.state))

        # 노트를 지우는 유일한 경로
        note_manager.cleanup(self.rules.cleanup_y)
        return transitions

    def _register_miss(self, note: Note, state: NoteState) -> None:
        """미스 판정을 등록합니다."""
        note.state = state
        logger.debug(f"miss {note}")
        self.on_score(self.rules.score_miss, True)
        self.on_health(-self.rules.health_penalty)
        self.feedback.emit(constants.FEEDBACK_MISS, self.lanes.get(note.lane).x_percent)

    def _register_hold_complete(self, note: Note) -> None:
        note.state = NoteState.COMPLETED
        logger.debug(f"hold complete {note}")
        self.on_score(self.rules.score_hold_bonus, False)
        self.feedback.emit(constants.FEEDBACK_HOLD, self.lanes.get(note.lane).x_percent)
