"""
점수 관리 모듈
점수, 콤보, 체력을 관리합니다.
"""
from typing import Callable, Optional

import numpy as np

from core.game_state import GameState
from core.logger import get_logger

logger = get_logger()


class ScoreManager:
    """점수, 콤보, 체력을 관리하는 클래스.

    apply_score와 apply_health가 세션 상태를 바꾸는 유일한 경로입니다.
    """

    def __init__(
        self,
        game_state: GameState,
        max_health: float,
        on_game_over: Optional[Callable[[], None]] = None
    ):
        self.game_state = game_state
        self.max_health = max_health
        self.on_game_over = on_game_over

    def start_session(self) -> None:
        """새 세션을 시작합니다."""
        self.game_state.reset(self.max_health)
        self.game_state.is_playing = True

    def apply_score(self, delta: int, reset_combo: bool) -> None:
        """
        점수를 반영하고 콤보를 갱신합니다.

        Args:
            delta: 점수 변화량 (감점은 음수)
            reset_combo: True면 콤보를 0으로, False면 1 증가
        """
        self.game_state.score += delta
        self.game_state.update_combo(reset_combo)

    def apply_health(self, delta: float) -> bool:
        """
        체력을 반영합니다.

        Args:
            delta: 체력 변화량

        Returns:
            이번 호출로 게임 오버가 발생했으면 True
        """
        state = self.game_state
        was_alive = state.health > 0
        state.health = float(np.clip(state.health + delta, 0.0, self.max_health))

        if state.health <= 0 and was_alive and state.is_playing and not state.is_game_over:
            state.is_playing = False
            state.is_game_over = True
            state.status_text = "GAME OVER"
            logger.info(f"Game over (score={state.score}, max_combo={state.max_combo})")
            if self.on_game_over:
                self.on_game_over()
            return True
        return False
