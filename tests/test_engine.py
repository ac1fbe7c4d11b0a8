import pytest

from conftest import make_difficulty
from core.judgment_processor import JudgementKind
from core.note import NoteState

FRAME = 1 / 60


def run_frames(engine, start, count):
    now = start
    for _ in range(count):
        now += FRAME
        engine.tick(now)
    return now


def test_inputs_ignored_until_started(make_engine, recorder):
    engine = make_engine()
    assert engine.press(0).kind is JudgementKind.NONE
    assert engine.tick(5.0) == []
    assert len(engine.note_manager) == 0
    assert recorder.score_calls == []


def test_first_spawn_one_interval_after_start(make_engine):
    engine = make_engine()
    engine.start(100.0)
    engine.tick(100.3)
    assert len(engine.note_manager) == 0
    engine.tick(100.41)
    assert len(engine.note_manager) == 1


def test_spawn_then_update_in_one_tick(make_engine):
    engine = make_engine()
    engine.start(0.0)
    engine.tick(0.5)
    (view,) = engine.snapshot()
    assert view.y == pytest.approx(-10 + 0.6)
    assert view.state is NoteState.FALLING


def test_unstruck_note_is_missed_after_passing_window(make_engine, recorder):
    engine = make_engine()
    engine.start(0.0)
    now = 0.0
    while len(engine.note_manager) == 0:
        now += FRAME
        engine.tick(now)
    spawn_time = now
    first = engine.note_manager.get_active_notes()[0]

    reached_line = None
    while first.state is NoteState.FALLING:
        now += FRAME
        engine.tick(now)
        if reached_line is None and first.y >= 85:
            reached_line = now - spawn_time
    missed_after = now - spawn_time

    # 0.6%/틱 * 60틱/초 = 36%/초: -10 에서 85까지 약 2.64초, 미스는 100%를 넘는 순간
    assert reached_line == pytest.approx(95 / 36, abs=0.05)
    assert missed_after == pytest.approx(183 / 60, abs=0.02)
    assert first.y > 100
    assert recorder.penalties[0] == (-5, True)


def test_press_is_edge_triggered(make_engine, recorder):
    engine = make_engine()
    engine.start(0.0)
    engine.note_manager.spawn_note(0.0, 0, 0, 85)
    engine.note_manager.spawn_note(0.1, 0, 0, 80)
    assert engine.press(0).kind is JudgementKind.PERFECT
    # 누르고 있는 동안 반복 입력은 판정하지 않음
    assert engine.press(0).kind is JudgementKind.NONE
    assert engine.press_key("A").kind is JudgementKind.NONE
    assert len(recorder.rewards) == 1
    engine.release(0)
    assert engine.press(0).kind is JudgementKind.PERFECT
    assert len(recorder.rewards) == 2


def test_release_never_judges(make_engine, recorder):
    engine = make_engine()
    engine.start(0.0)
    engine.note_manager.spawn_note(0.0, 0, 1, 85)
    engine.release(1)
    engine.release_key("s")
    assert recorder.score_calls == []


def test_unknown_key_is_ignored(make_engine, recorder):
    engine = make_engine()
    engine.start(0.0)
    engine.note_manager.spawn_note(0.0, 0, 0, 85)
    assert engine.press_key("q") is None
    engine.release_key("q")
    assert recorder.score_calls == []


def test_invalid_lane_is_a_programming_error(make_engine):
    engine = make_engine()
    engine.start(0.0)
    with pytest.raises(ValueError):
        engine.press(9)


def test_chord_notes_are_judged_independently(make_engine, recorder):
    engine = make_engine(chord_probability=1.0)
    engine.start(0.0)
    engine.tick(0.5)
    first, second = engine.note_manager.get_active_notes()
    assert first.lane != second.lane
    first.y = second.y = 85

    engine.press(first.lane)
    assert first.state is NoteState.HIT
    assert second.state is NoteState.FALLING
    engine.press(second.lane)
    assert second.state is NoteState.HIT
    assert recorder.rewards == [(10, False), (10, False)]


def test_hold_note_released_early_is_one_miss(make_engine, recorder):
    engine = make_engine()
    engine.start(0.0)
    note = engine.note_manager.spawn_note(0.0, 0, 2, 85, length=25)
    engine.press(2)
    assert note.state is NoteState.HOLDING
    now = run_frames(engine, 0.0, 5)
    engine.release(2)
    run_frames(engine, now, 60)
    assert note.state is NoteState.RELEASED_EARLY
    assert recorder.penalties == [(-5, True)]


def test_hold_note_held_through_completes(make_engine, recorder):
    engine = make_engine(spawn_interval_ms=100000)
    engine.start(0.0)
    note = engine.note_manager.spawn_note(0.0, 0, 3, 85, length=25)
    engine.press_key("k")
    run_frames(engine, 0.0, 60)
    assert note.state is NoteState.COMPLETED
    assert recorder.rewards == [(10, False), (5, False)]
    assert recorder.penalties == []


def test_touch_maps_to_nearest_lane_and_tracks_release(make_engine, recorder):
    engine = make_engine(spawn_interval_ms=100000)
    engine.start(0.0)
    note = engine.note_manager.spawn_note(0.0, 0, 1, 85, length=25)
    result = engine.touch_start("finger-1", 44.0)
    assert result.kind is JudgementKind.PERFECT
    assert note.state is NoteState.HOLDING
    # 다른 레인의 두 번째 터치는 홀드에 영향 없음
    engine.touch_start("finger-2", 78.0)
    engine.touch_end("finger-2")
    engine.tick(FRAME)
    assert note.state is NoteState.HOLDING
    engine.touch_end("finger-1")
    engine.tick(2 * FRAME)
    assert note.state is NoteState.RELEASED_EARLY


def test_stop_clears_notes_and_inputs(make_engine):
    engine = make_engine()
    engine.start(0.0)
    engine.tick(0.5)
    engine.press(0)
    engine.feedback.emit("MISS", 20)
    engine.stop()
    assert not engine.running
    assert engine.snapshot() == ()
    assert len(engine.held) == 0
    assert engine.feedback_message is None
    assert engine.tick(10.0) == []


def test_pause_keeps_notes_but_stops_ticking(make_engine):
    engine = make_engine()
    engine.start(0.0)
    engine.tick(0.5)
    (before,) = engine.snapshot()
    engine.pause()
    engine.tick(5.0)
    assert engine.snapshot() == (before,)


def test_restart_resets_session(make_engine):
    engine = make_engine()
    engine.start(0.0)
    engine.tick(0.5)
    engine.start(10.0)
    assert engine.snapshot() == ()
    engine.tick(10.2)
    assert engine.snapshot() == ()


def test_set_difficulty_changes_speed(make_engine):
    engine = make_engine()
    engine.set_difficulty(make_difficulty(name="FAST", fall_speed=1.5))
    engine.start(0.0)
    engine.tick(0.5)
    (view,) = engine.snapshot()
    assert view.y == pytest.approx(-8.5)


def test_game_over_through_real_score_manager(lanes, rules):
    from core.engine import RhythmEngine
    from core.game_state import GameState
    from core.score_manager import ScoreManager

    game_overs = []
    manager = ScoreManager(GameState(), rules.max_health, on_game_over=lambda: game_overs.append(True))
    manager.start_session()
    engine = RhythmEngine(lanes, rules, make_difficulty(), manager.apply_score, manager.apply_health)
    engine.start(0.0)
    for i in range(12):
        engine.note_manager.spawn_note(0.0, i, i % 4, 100.5)
    engine.tick(FRAME)
    assert manager.game_state.health == 0
    assert manager.game_state.combo == 0
    assert manager.game_state.score == -60
    assert game_overs == [True]


def test_pause_from_game_over_callback_keeps_later_holds(lanes, rules):
    from core.engine import RhythmEngine
    from core.game_state import GameState
    from core.score_manager import ScoreManager

    def pause_engine():
        engine.pause()

    manager = ScoreManager(GameState(), rules.max_health, on_game_over=pause_engine)
    manager.start_session()
    engine = RhythmEngine(lanes, rules, make_difficulty(), manager.apply_score, manager.apply_health)
    engine.start(0.0)
    manager.game_state.health = 8

    missed = engine.note_manager.spawn_note(0.0, 0, 0, 100.5)
    hold = engine.note_manager.spawn_note(0.0, 1, 1, 85, length=25)
    assert engine.press(1).kind is JudgementKind.PERFECT
    assert hold.state is NoteState.HOLDING

    engine.tick(FRAME)
    state = manager.game_state
    assert missed.state is NoteState.MISSED
    assert state.is_game_over and not engine.running
    # 게임 오버 이후 같은 프레임의 홀드는 판정되지 않음
    assert hold.state is NoteState.HOLDING
    assert 1 in engine.held
    assert (state.score, state.hits, state.misses) == (5, 1, 1)
    assert engine.tick(2 * FRAME) == []
    assert hold.state is NoteState.HOLDING
