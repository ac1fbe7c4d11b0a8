from __future__ import annotations

import time

import arcade

from core.logger import get_logger
from scenes.base_scene import BaseScene

logger = get_logger()


class ResultScene(BaseScene):
    def __init__(self, window, audio_manager, config_manager) -> None:
        super().__init__(window, audio_manager, config_manager)
        self.final_score: int = 0
        self.max_combo: int = 0
        self.accuracy: float = 0.0
        self.game_over: bool = False
        self.restart_color = arcade.color.LIGHT_GRAY
        self.restart_pressed_color = arcade.color.YELLOW
        self.restart_flash_time: float = 0.0

    def startup(self, persistent_data):
        super().startup(persistent_data)
        self.final_score = self.persistent_data.get("final_score", 0)
        self.max_combo = self.persistent_data.get("max_combo", 0)
        self.accuracy = self.persistent_data.get("accuracy", 0.0)
        self.game_over = self.persistent_data.get("game_over", False)
        logger.info(f"ResultScene: final score {self.final_score}, max combo {self.max_combo}")
        self.restart_color = arcade.color.LIGHT_GRAY
        self.restart_flash_time = 0.0

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol == arcade.key.SPACE:
            self.next_scene_name = "GAME"
            self.restart_color = self.restart_pressed_color
            self.restart_flash_time = time.time()
        elif symbol == arcade.key.M:
            self.next_scene_name = "MENU"

    def update(self, delta_time: float, **kwargs):
        super().update(delta_time, **kwargs)
        now = kwargs.get("now", time.time())
        if self.restart_flash_time and (now - self.restart_flash_time) > 0.25:
            self.restart_color = arcade.color.LIGHT_GRAY
            self.restart_flash_time = 0.0

    def draw_scene(self) -> None:
        width = max(1, int(self.window.width))
        height = max(1, int(self.window.height))

        arcade.draw_text(
            "GAME OVER" if self.game_over else "FINISHED",
            width / 2,
            height / 2 + 100,
            arcade.color.RED if self.game_over else arcade.color.LIGHT_GREEN,
            font_size=42,
            anchor_x="center",
            anchor_y="center",
        )
        arcade.draw_text(
            f"Final Score: {self.final_score}",
            width / 2,
            height / 2 + 20,
            arcade.color.WHITE,
            font_size=28,
            anchor_x="center",
            anchor_y="center",
        )
        arcade.draw_text(
            f"Max Combo: {self.max_combo}    Accuracy: {self.accuracy * 100:.1f}%",
            width / 2,
            height / 2 - 30,
            arcade.color.LIGHT_GRAY,
            font_size=18,
            anchor_x="center",
            anchor_y="center",
        )
        arcade.draw_text(
            "Press SPACE to Restart, M for Menu",
            width / 2,
            height / 2 - 100,
            self.restart_color,
            font_size=20,
            anchor_x="center",
            anchor_y="center",
        )
