import pytest

from core.judgment_processor import JudgementKind, JudgmentProcessor
from core.note import NoteState


@pytest.fixture
def processor(lanes, rules, recorder, feedback):
    return JudgmentProcessor(lanes, rules, recorder.on_score, recorder.on_health, feedback)


def test_press_on_hit_line_is_perfect(processor, note_manager, recorder, feedback):
    note = note_manager.spawn_note(0.0, 0, 1, 85)
    result = processor.judge(1, note_manager, held={1})
    assert result.kind is JudgementKind.PERFECT
    assert result.note is note
    assert note.state is NoteState.HIT
    assert recorder.score_calls == [(10, False)]
    assert recorder.health_calls == [2]
    assert feedback.message.text == "PERFECT"
    assert feedback.message.x_percent == 40


@pytest.mark.parametrize("y", [70, 100])
def test_window_edges_count_as_hits(processor, note_manager, y):
    note = note_manager.spawn_note(0.0, 0, 0, y)
    assert processor.judge(0, note_manager, held={0}).kind is JudgementKind.PERFECT
    assert note.state is NoteState.HIT


def test_near_miss_penalises_but_keeps_note(processor, note_manager, recorder, feedback):
    note = note_manager.spawn_note(0.0, 0, 2, 101)
    result = processor.judge(2, note_manager, held={2})
    assert result.kind is JudgementKind.NEAR_MISS
    assert result.distance == pytest.approx(16)
    assert note.state is NoteState.FALLING
    assert recorder.score_calls == [(-5, True)]
    assert recorder.health_calls == [-10]
    assert feedback.message.text == "MISS"


@pytest.mark.parametrize("y", [120, 115, 40])
def test_far_press_is_ignored(processor, note_manager, recorder, feedback, y):
    note_manager.spawn_note(0.0, 0, 3, y)
    assert processor.judge(3, note_manager, held={3}).kind is JudgementKind.NONE
    assert recorder.score_calls == []
    assert recorder.health_calls == []
    assert feedback.message is None


def test_empty_lane_is_ignored(processor, note_manager, recorder):
    note_manager.spawn_note(0.0, 0, 0, 85)
    assert processor.judge(1, note_manager, held={1}).kind is JudgementKind.NONE
    assert recorder.score_calls == []


def test_already_hit_note_is_never_reselected(processor, note_manager, recorder):
    first = note_manager.spawn_note(0.0, 0, 0, 88)
    second = note_manager.spawn_note(0.4, 0, 0, 72)
    assert processor.judge(0, note_manager, held={0}).note is first
    result = processor.judge(0, note_manager, held={0})
    assert result.note is second
    assert second.state is NoteState.HIT
    assert first.state is NoteState.HIT
    assert recorder.rewards == [(10, False), (10, False)]


def test_hold_note_enters_holding_when_lane_held(processor, note_manager):
    note = note_manager.spawn_note(0.0, 0, 0, 84, length=25)
    processor.judge(0, note_manager, held={0})
    assert note.state is NoteState.HOLDING
    assert note.hold_active


def test_hold_note_without_held_lane_is_plain_hit(processor, note_manager):
    note = note_manager.spawn_note(0.0, 0, 0, 84, length=25)
    processor.judge(0, note_manager, held=set())
    assert note.state is NoteState.HIT


def test_holding_note_is_not_a_judge_target(processor, note_manager, recorder):
    note_manager.spawn_note(0.0, 0, 0, 85, length=25)
    processor.judge(0, note_manager, held={0})
    assert processor.judge(0, note_manager, held={0}).kind is JudgementKind.NONE
    assert len(recorder.score_calls) == 1
