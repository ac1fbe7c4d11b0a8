import random
from typing import List, Tuple

import pytest

from core.config_manager import DifficultySettings, EngineRules
from core.engine import RhythmEngine
from core.feedback import FeedbackEmitter
from core.lanes import LaneRegistry
from core.note_manager import NoteManager

import constants


class CallbackRecorder:
    """apply_score / apply_health 호출을 기록하는 테스트 더블."""

    def __init__(self) -> None:
        self.score_calls: List[Tuple[int, bool]] = []
        self.health_calls: List[float] = []

    def on_score(self, delta: int, reset_combo: bool) -> None:
        self.score_calls.append((delta, reset_combo))

    def on_health(self, delta: float) -> None:
        self.health_calls.append(delta)

    @property
    def penalties(self) -> List[Tuple[int, bool]]:
        return [call for call in self.score_calls if call[1]]

    @property
    def rewards(self) -> List[Tuple[int, bool]]:
        return [call for call in self.score_calls if not call[1]]


@pytest.fixture
def lanes() -> LaneRegistry:
    return LaneRegistry.from_config(constants.DEFAULT_LANES)


@pytest.fixture
def rules() -> EngineRules:
    return EngineRules()


@pytest.fixture
def recorder() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture
def feedback(rules) -> FeedbackEmitter:
    return FeedbackEmitter(rules.hit_line_y)


@pytest.fixture
def note_manager() -> NoteManager:
    return NoteManager()


def make_difficulty(**overrides) -> DifficultySettings:
    values = dict(
        name="TEST",
        spawn_interval_ms=400,
        fall_speed=0.6,
        chord_probability=0.0,
        hold_probability=0.0,
        hold_length_range=(20.0, 30.0),
    )
    values.update(overrides)
    return DifficultySettings(**values)


@pytest.fixture
def make_engine(lanes, rules, recorder):
    def _make(seed: int = 7, **difficulty_overrides) -> RhythmEngine:
        return RhythmEngine(
            lanes,
            rules,
            make_difficulty(**difficulty_overrides),
            recorder.on_score,
            recorder.on_health,
            rng=random.Random(seed),
        )
    return _make
