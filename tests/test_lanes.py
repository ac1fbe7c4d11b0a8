import pytest

from core.lanes import Lane, LaneRegistry


def test_reference_layout(lanes):
    assert len(lanes) == 4
    assert [lane.label for lane in lanes] == ["A", "S", "J", "K"]
    assert lanes.get(2).x_percent == 60


def test_index_for_key_is_case_insensitive(lanes):
    assert lanes.index_for_key("a") == 0
    assert lanes.index_for_key("K") == 3
    assert lanes.index_for_key("z") is None
    assert lanes.index_for_key("") is None


def test_nearest_lane_for_pointer(lanes):
    assert lanes.nearest(0) == 0
    assert lanes.nearest(43) == 1
    assert lanes.nearest(99) == 3
    # 40과 60 사이 정중앙은 낮은 인덱스
    assert lanes.nearest(50) == 1


def test_single_lane_registry():
    registry = LaneRegistry([Lane(0, 50, "blue", "X", "x")])
    assert len(registry) == 1
    assert registry.nearest(3) == 0


def test_invalid_registries():
    with pytest.raises(ValueError):
        LaneRegistry([])
    with pytest.raises(ValueError):
        LaneRegistry.from_config([{"key": "a", "x_percent": 10}, {"key": "A", "x_percent": 20}])
    with pytest.raises(ValueError):
        LaneRegistry.from_config([{"key": "a", "x_percent": 140}])


def test_get_rejects_unknown_lane(lanes):
    assert not lanes.is_valid(4)
    with pytest.raises(ValueError):
        lanes.get(4)
