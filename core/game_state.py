"""
게임 상태 관리 모듈
게임의 상태를 중앙에서 관리합니다.
"""
from dataclasses import dataclass

import constants


@dataclass
class GameState:
    """게임 상태를 담는 데이터 클래스"""
    score: int = 0
    combo: int = 0
    max_combo: int = 0
    health: float = constants.MAX_HEALTH
    is_playing: bool = False
    is_game_over: bool = False
    hits: int = 0
    misses: int = 0
    status_text: str = "Ready!"

    def reset(self, max_health: float = constants.MAX_HEALTH) -> None:
        """상태를 초기화합니다."""
        self.score = 0
        self.combo = 0
        self.max_combo = 0
        self.health = max_health
        self.is_playing = False
        self.is_game_over = False
        self.hits = 0
        self.misses = 0
        self.status_text = "Ready!"

    def update_combo(self, reset_combo: bool) -> None:
        """판정에 따라 콤보를 업데이트합니다."""
        if reset_combo:
            self.combo = 0
            self.misses += 1
        else:
            self.combo += 1
            self.hits += 1
            self.max_combo = max(self.max_combo, self.combo)

    @property
    def accuracy(self) -> float:
        """성공 판정 비율 (0~1). 판정이 없으면 0."""
        total = self.hits + self.misses
        return self.hits / total if total else 0.0
