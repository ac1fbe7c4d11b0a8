import random

import pytest

from conftest import make_difficulty
from core.note import NoteState
from core.spawner import NoteSpawner


def test_fires_only_after_interval(note_manager):
    spawner = NoteSpawner(4, make_difficulty(spawn_interval_ms=400), -10, random.Random(1))
    spawner.reset(10.0)
    assert spawner.maybe_spawn(10.2, note_manager) == []
    assert spawner.maybe_spawn(10.39, note_manager) == []
    spawned = spawner.maybe_spawn(10.45, note_manager)
    assert len(spawned) == 1
    assert spawner.last_spawn_time == 10.45
    # 다음 스폰은 다시 한 간격 뒤
    assert spawner.maybe_spawn(10.6, note_manager) == []


def test_new_notes_start_above_field(note_manager):
    spawner = NoteSpawner(4, make_difficulty(), -10, random.Random(2))
    (note,) = spawner.maybe_spawn(1.0, note_manager)
    assert note.y == -10
    assert note.state is NoteState.FALLING
    assert note.length == 0
    assert 0 <= note.lane < 4


def test_chord_uses_two_distinct_lanes(note_manager):
    spawner = NoteSpawner(4, make_difficulty(chord_probability=1.0), -10, random.Random(3))
    for step in range(1, 30):
        spawned = spawner.maybe_spawn(step * 1.0, note_manager)
        assert len(spawned) == 2
        assert spawned[0].lane != spawned[1].lane
        assert spawned[0].y == spawned[1].y
        assert spawned[0].note_id != spawned[1].note_id


def test_single_lane_never_chords(note_manager):
    spawner = NoteSpawner(1, make_difficulty(chord_probability=1.0), -10, random.Random(4))
    spawned = spawner.maybe_spawn(1.0, note_manager)
    assert [note.lane for note in spawned] == [0]


def test_hold_lengths_sampled_from_range(note_manager):
    difficulty = make_difficulty(hold_probability=1.0, hold_length_range=(15.0, 35.0))
    spawner = NoteSpawner(4, difficulty, -10, random.Random(5))
    for step in range(1, 50):
        for note in spawner.maybe_spawn(step * 1.0, note_manager):
            assert note.is_hold
            assert 15.0 <= note.length <= 35.0


def test_lane_choice_covers_every_lane(note_manager):
    spawner = NoteSpawner(4, make_difficulty(), -10, random.Random(6))
    for step in range(1, 200):
        spawner.maybe_spawn(step * 1.0, note_manager)
    assert {note.lane for note in note_manager} == {0, 1, 2, 3}


def test_rejects_zero_lanes():
    with pytest.raises(ValueError):
        NoteSpawner(0, make_difficulty(), -10)
