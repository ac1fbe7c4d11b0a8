"""
리듬 엔진 모듈
스폰, 노트 이동, 입력 판정을 하나의 세션으로 묶습니다.
"""
import random
from typing import Hashable, List, Optional, Tuple

from core.config_manager import DifficultySettings, EngineRules
from core.feedback import FeedbackEmitter, FeedbackMessage
from core.held_input import HeldInputSet
from core.judgment_processor import (
    HealthCallback, Judgement, JudgementKind, JudgmentProcessor, ScoreCallback
)
from core.kinematics import KinematicUpdater, Transition
from core.lanes import LaneRegistry
from core.logger import get_logger
from core.note import NoteView
from core.note_manager import NoteManager
from core.spawner import NoteSpawner

logger = get_logger()


class RhythmEngine:
    """노트 생명주기와 판정을 담당하는 세션 엔진.

    점수/체력 콜백은 생성 시 주입됩니다. 엔진은 콜백만 호출하고
    점수, 콤보, 체력을 직접 바꾸지 않습니다.
    """

    def __init__(
        self,
        lanes: LaneRegistry,
        rules: EngineRules,
        difficulty: DifficultySettings,
        on_score: ScoreCallback,
        on_health: HealthCallback,
        rng: Optional[random.Random] = None,
        fade_step: Optional[float] = None,
        drift_step: Optional[float] = None
    ):
        self.lanes = lanes
        self.rules = rules
        self.difficulty = difficulty
        self.running = False

        self.note_manager = NoteManager()
        self.held = HeldInputSet()
        feedback_kwargs = {}
        if fade_step is not None:
            feedback_kwargs["fade_step"] = fade_step
        if drift_step is not None:
            feedback_kwargs["drift_step"] = drift_step
        self.feedback = FeedbackEmitter(rules.hit_line_y, **feedback_kwargs)

        self.spawner = NoteSpawner(len(lanes), difficulty, rules.spawn_y, rng)
        self.updater = KinematicUpdater(
            lanes, rules, difficulty.fall_speed, on_score, on_health, self.feedback
        )
        self.judgment_processor = JudgmentProcessor(
            lanes, rules, on_score, on_health, self.feedback
        )

    # ------------------------------------------------------------------ #
    # Session lifecycle
    # ------------------------------------------------------------------ #
    def start(self, now: float) -> None:
        self.note_manager.reset()
        self.held.clear()
        self.feedback.clear()
        self.spawner.reset(now)
        self.running = True
        logger.info(f"Session started ({self.difficulty.name}, {len(self.lanes)} lanes)")

    def stop(self) -> None:
        if self.running:
            logger.info("Session stopped")
        self.running = False
        self.note_manager.reset()
        self.held.clear()
        self.feedback.clear()

    def pause(self) -> None:
        """틱과 입력을 멈추되 화면에 남은 노트는 유지합니다.

        프레임 진행 중 콜백에서 호출될 수 있으므로 눌린 레인은 건드리지 않습니다.
        눌린 레인은 start/stop에서 비웁니다.
        """
        self.running = False

    def set_difficulty(self, difficulty: DifficultySettings) -> None:
        """다음 세션부터 사용할 난이도를 바꿉니다."""
        self.difficulty = difficulty
        self.spawner.difficulty = difficulty
        self.updater.fall_speed = difficulty.fall_speed
        logger.info(f"Difficulty set to {difficulty.name}")

    # ------------------------------------------------------------------ #
    # Frame tick
    # ------------------------------------------------------------------ #
    def tick(self, now: float) -> List[Transition]:
        """한 프레임: 스폰 -> 이동/판정. 렌더링은 호출자가 이어서 수행합니다."""
        if not self.running:
            return []
        self.spawner.maybe_spawn(now, self.note_manager)
        return self.updater.update(self.note_manager, self.held)

    # ------------------------------------------------------------------ #
    # Input
    # ------------------------------------------------------------------ #
    def press(self, lane: int) -> Judgement:
        if not self.lanes.is_valid(lane):
            raise ValueError(f"존재하지 않는 레인: {lane}")
        if not self.running:
            return Judgement(JudgementKind.NONE, lane)
        # 이미 눌려 있는 레인은 다시 판정하지 않음
        if not self.held.press(lane):
            return Judgement(JudgementKind.NONE, lane)
        return self.judgment_processor.judge(lane, self.note_manager, self.held)

    def release(self, lane: int) -> None:
        self.held.release(lane)

    def press_key(self, key: str) -> Optional[Judgement]:
        """키 입력. 레인에 매핑되지 않은 키는 무시하고 None을 반환합니다."""
        lane = self.lanes.index_for_key(key)
        if lane is None:
            return None
        return self.press(lane)

    def release_key(self, key: str) -> None:
        lane = self.lanes.index_for_key(key)
        if lane is not None:
            self.release(lane)

    def touch_start(self, touch_id: Hashable, x_percent: float) -> Judgement:
        """포인터/터치 입력. 가장 가까운 레인에 매핑합니다."""
        lane = self.lanes.nearest(x_percent)
        if not self.running:
            return Judgement(JudgementKind.NONE, lane)
        if not self.held.touch_start(touch_id, lane):
            return Judgement(JudgementKind.NONE, lane)
        return self.judgment_processor.judge(lane, self.note_manager, self.held)

    def touch_end(self, touch_id: Hashable) -> None:
        self.held.touch_end(touch_id)

    # ------------------------------------------------------------------ #
    # Output
    # ------------------------------------------------------------------ #
    def snapshot(self) -> Tuple[NoteView, ...]:
        return self.note_manager.snapshot()

    @property
    def feedback_message(self) -> Optional[FeedbackMessage]:
        return self.feedback.message
