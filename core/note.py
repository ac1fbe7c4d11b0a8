from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NoteState(Enum):
    """노트 생명주기 상태"""
    FALLING = "falling"
    HIT = "hit"
    HOLDING = "holding"
    COMPLETED = "completed"
    MISSED = "missed"
    RELEASED_EARLY = "released_early"


# 판정 후 더 이상 상태가 바뀌지 않는 상태들
TERMINAL_STATES = frozenset(
    {NoteState.HIT, NoteState.COMPLETED, NoteState.MISSED, NoteState.RELEASED_EARLY}
)


@dataclass(frozen=True)
class NoteView:
    """렌더링용 읽기 전용 노트 스냅샷."""
    note_id: int
    lane: int
    y: float
    length: float
    state: NoteState

    @property
    def tail_y(self) -> float:
        return self.y - self.length


class Note:
    """낙하하는 리듬 노트. length가 0이면 탭, 양수면 홀드 노트."""

    def __init__(self, note_id: int, lane: int, y: float, length: float = 0.0) -> None:
        if length < 0:
            raise ValueError(f"노트 길이는 음수일 수 없습니다: {length}")
        self.note_id = note_id
        self.lane = lane
        self.y = float(y)
        self.length = float(length)
        self.state = NoteState.FALLING

    def __repr__(self) -> str:
        return f"Note(id={self.note_id}, lane={self.lane}, y={self.y:.2f}, length={self.length:.1f}, state={self.state.name})"

    @property
    def tail_y(self) -> float:
        return self.y - self.length

    @property
    def is_hold(self) -> bool:
        return self.length > 0

    @property
    def hold_active(self) -> bool:
        return self.state is NoteState.HOLDING

    @property
    def is_judged(self) -> bool:
        return self.state is not NoteState.FALLING

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self, distance: float) -> None:
        # 뒤로 움직이는 노트는 없음
        if distance < 0:
            raise ValueError(f"이동 거리는 음수일 수 없습니다: {distance}")
        self.y += distance

    def to_view(self) -> NoteView:
        return NoteView(self.note_id, self.lane, self.y, self.length, self.state)
