"""
레인 레지스트리 모듈
고정된 입력 레인의 위치, 색상, 키 바인딩을 조회합니다.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence


@dataclass(frozen=True)
class Lane:
    """하나의 입력 레인"""
    index: int
    x_percent: float
    color: str
    label: str
    key: str


class LaneRegistry:
    """세션 동안 변하지 않는 레인 목록"""

    def __init__(self, lanes: Sequence[Lane]):
        if not lanes:
            raise ValueError("레인이 최소 1개 이상 필요합니다.")
        self._lanes: List[Lane] = list(lanes)
        self._key_map: Dict[str, int] = {}
        for lane in self._lanes:
            key = lane.key.lower()
            if key in self._key_map:
                raise ValueError(f"중복된 키 바인딩: {lane.key!r}")
            self._key_map[key] = lane.index

    @classmethod
    def from_config(cls, items: Sequence[Dict[str, Any]]) -> "LaneRegistry":
        """설정 딕셔너리 리스트로부터 레지스트리를 만듭니다."""
        lanes = []
        for index, item in enumerate(items):
            x_percent = float(item["x_percent"])
            if not 0.0 <= x_percent <= 100.0:
                raise ValueError(f"레인 {index}의 x_percent 범위 오류: {x_percent}")
            lanes.append(
                Lane(
                    index=index,
                    x_percent=x_percent,
                    color=str(item.get("color", "white")),
                    label=str(item.get("label", item["key"])).upper(),
                    key=str(item["key"]).lower(),
                )
            )
        return cls(lanes)

    def __len__(self) -> int:
        return len(self._lanes)

    def __iter__(self) -> Iterator[Lane]:
        return iter(self._lanes)

    def is_valid(self, index: int) -> bool:
        return 0 <= index < len(self._lanes)

    def get(self, index: int) -> Lane:
        if not self.is_valid(index):
            raise ValueError(f"존재하지 않는 레인: {index}")
        return self._lanes[index]

    def index_for_key(self, key: str) -> Optional[int]:
        """키에 대응하는 레인 인덱스. 매핑이 없으면 None."""
        if not key:
            return None
        return self._key_map.get(key.lower())

    def nearest(self, x_percent: float) -> int:
        """포인터의 가로 위치(%)에 가장 가까운 레인 인덱스를 반환합니다."""
        return min(self._lanes, key=lambda lane: (abs(lane.x_percent - x_percent), lane.index)).index
