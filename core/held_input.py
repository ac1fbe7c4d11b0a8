"""
입력 유지 상태 모듈
키보드로 눌린 레인과 터치 ID별로 잡고 있는 레인을 추적합니다.
"""
from typing import Dict, FrozenSet, Hashable, Optional, Set


class HeldInputSet:
    """현재 눌려 있는 레인 집합.

    키 입력과 터치 입력을 따로 보관하고, 둘 중 하나라도 레인을 잡고 있으면
    그 레인은 눌린 상태로 봅니다. press/touch_start는 레인이 새로 눌린 경우에만
    True를 돌려주므로 판정은 누르는 순간에 한 번만 일어납니다.
    """

    def __init__(self) -> None:
        self._keys: Set[int] = set()
        self._touches: Dict[Hashable, int] = {}

    def __contains__(self, lane: object) -> bool:
        return lane in self._keys or lane in self._touches.values()

    def __len__(self) -> int:
        return len(self.lanes)

    @property
    def lanes(self) -> FrozenSet[int]:
        return frozenset(self._keys) | frozenset(self._touches.values())

    def press(self, lane: int) -> bool:
        edge = lane not in self
        self._keys.add(lane)
        return edge

    def release(self, lane: int) -> None:
        self._keys.discard(lane)

    def touch_start(self, touch_id: Hashable, lane: int) -> bool:
        # 같은 touch_id가 다시 들어오면 이전 레인 매핑을 대체
        self._touches.pop(touch_id, None)
        edge = lane not in self
        self._touches[touch_id] = lane
        return edge

    def touch_end(self, touch_id: Hashable) -> Optional[int]:
        """터치를 해제하고, 매핑되어 있던 레인을 반환합니다."""
        return self._touches.pop(touch_id, None)

    def lane_for_touch(self, touch_id: Hashable) -> Optional[int]:
        return self._touches.get(touch_id)

    def clear(self) -> None:
        self._keys.clear()
        self._touches.clear()
