"""
노트 관리 모듈
활성 노트의 추가, 조회, 정리를 담당하는 단일 저장소입니다.
"""
from typing import Iterator, List, Optional, Tuple

from core.note import Note, NoteState, NoteView


class NoteManager:
    """노트 생명주기를 관리하는 클래스 (세션당 하나)"""

    def __init__(self) -> None:
        self.active_notes: List[Note] = []
        self._last_id: Optional[int] = None

    def __len__(self) -> int:
        return len(self.active_notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.active_notes)

    def reset(self) -> None:
        """모든 노트를 제거합니다."""
        self.active_notes.clear()

    def spawn_note(self, timestamp: float, offset: int, lane: int, y: float, length: float = 0.0) -> Note:
        """
        새로운 노트를 생성합니다.

        Args:
            timestamp: 스폰 시각 (초)
            offset: 같은 배치(코드) 안에서의 순번
            lane: 레인 인덱스
            y: 시작 위치 (%)
            length: 홀드 길이 (%), 탭 노트는 0

        Returns:
            생성된 Note 객체
        """
        note = Note(self._next_id(timestamp, offset), lane, y, length)
        self.active_notes.append(note)
        return note

    def _next_id(self, timestamp: float, offset: int) -> int:
        candidate = int(timestamp * 1000) + offset
        if self._last_id is not None and candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def notes_in_lane(self, lane: int, state: Optional[NoteState] = None) -> List[Note]:
        """레인의 노트 목록. state를 주면 해당 상태만 반환합니다."""
        return [
            note for note in self.active_notes
            if note.lane == lane and (state is None or note.state is state)
        ]

    def find_judge_target(self, lane: int) -> Optional[Note]:
        """판정선에 가장 가까운(가장 아래에 있는) 미판정 노트를 찾습니다."""
        candidates = self.notes_in_lane(lane, NoteState.FALLING)
        if not candidates:
            return None
        return max(candidates, key=lambda note: note.y)

    def cleanup(self, threshold: float) -> List[Note]:
        """꼬리가 threshold를 지난 노트를 제거하고 제거된 노트를 반환합니다."""
        removed = [note for note in self.active_notes if note.tail_y > threshold]
        if removed:
            self.active_notes = [note for note in self.active_notes if note.tail_y <= threshold]
        return removed

    def get_active_notes(self) -> List[Note]:
        """활성 노트 리스트를 반환합니다."""
        return self.active_notes

    def snapshot(self) -> Tuple[NoteView, ...]:
        """렌더링용 스냅샷을 반환합니다."""
        return tuple(note.to_view() for note in self.active_notes)
