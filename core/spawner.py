"""
노트 스폰 모듈
일정 간격마다 단일 노트 또는 2노트 코드를 절차적으로 생성합니다.
"""
import random
from typing import List, Optional

from core.config_manager import DifficultySettings
from core.logger import get_logger
from core.note import Note
from core.note_manager import NoteManager

logger = get_logger()


class NoteSpawner:
    """게임 내 노트 생성을 담당하는 클래스"""

    def __init__(
        self,
        lane_count: int,
        difficulty: DifficultySettings,
        spawn_y: float,
        rng: Optional[random.Random] = None
    ):
        if lane_count < 1:
            raise ValueError(f"lane_count는 1 이상이어야 합니다: {lane_count}")
        self.lane_count = lane_count
        self.difficulty = difficulty
        self.spawn_y = spawn_y
        self.rng = rng or random.Random()
        self.last_spawn_time: float = 0.0

    def reset(self, now: float) -> None:
        """스폰 기준 시각을 초기화합니다. 첫 노트는 한 간격 뒤에 나옵니다."""
        self.last_spawn_time = now

    def maybe_spawn(self, now: float, note_manager: NoteManager) -> List[Note]:
        """
        간격이 지났으면 노트를 생성합니다.

        Args:
            now: 현재 시각 (초)
            note_manager: 노트를 추가할 저장소

        Returns:
            이번 프레임에 생성된 노트 리스트 (없으면 빈 리스트)
        """
        if now - self.last_spawn_time <= self.difficulty.spawn_interval:
            return []

        count = 1
        if self.lane_count >= 2 and self.rng.random() < self.difficulty.chord_probability:
            count = 2

        lanes = list(range(self.lane_count))
        self.rng.shuffle(lanes)

        spawned = []
        for offset, lane in enumerate(lanes[:count]):
            length = 0.0
            if self.rng.random() < self.difficulty.hold_probability:
                low, high = self.difficulty.hold_length_range
                length = self.rng.uniform(low, high)
            spawned.append(note_manager.spawn_note(now, offset, lane, self.spawn_y, length))

        self.last_spawn_time = now
        logger.debug(f"spawned {spawned}")
        return spawned
