from __future__ import annotations

import time

import arcade

from constants import LANE_COLORS
from scenes.base_scene import BaseScene


class MainMenuScene(BaseScene):
    def __init__(self, window, audio_manager, config_manager) -> None:
        super().__init__(window, audio_manager, config_manager)
        self.title_text = "LANE BEAT"
        self.start_text = "Press SPACE to Start"
        self.levels = config_manager.get_difficulty_levels()
        self.level_index: int = 0
        self.key_press_time: float = 0.0
        self.start_color = arcade.color.WHITE
        self.start_pressed_color = arcade.color.YELLOW

    def startup(self, persistent_data):
        super().startup(persistent_data)
        self.key_press_time = 0.0
        self.start_color = arcade.color.WHITE
        level = self.persistent_data.get("difficulty") or self.config_manager.difficulty.get("default")
        self.level_index = self.levels.index(level) if level in self.levels else 0

    @property
    def selected_level(self) -> str:
        return self.levels[self.level_index]

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol == arcade.key.LEFT:
            self.level_index = (self.level_index - 1) % len(self.levels)
        elif symbol == arcade.key.RIGHT:
            self.level_index = (self.level_index + 1) % len(self.levels)
        elif arcade.key.KEY_1 <= symbol < arcade.key.KEY_1 + len(self.levels):
            self.level_index = symbol - arcade.key.KEY_1
        elif symbol == arcade.key.SPACE:
            self.persistent_data["difficulty"] = self.selected_level
            self.next_scene_name = "GAME"
            self.key_press_time = time.time()
            self.start_color = self.start_pressed_color

    def update(self, delta_time: float, **kwargs):
        super().update(delta_time, **kwargs)
        now = kwargs.get("now", time.time())
        if self.key_press_time > 0 and (now - self.key_press_time) > 0.2:
            self.start_color = arcade.color.WHITE
            self.key_press_time = 0.0

    def draw_scene(self) -> None:
        width = max(1, int(self.window.width))
        height = max(1, int(self.window.height))

        arcade.draw_text(
            self.title_text,
            width / 2,
            height / 2 + 80,
            arcade.color.WHITE,
            font_size=48,
            anchor_x="center",
            anchor_y="center",
        )

        # 난이도 선택
        spacing = 160
        start_x = width / 2 - spacing * (len(self.levels) - 1) / 2
        for index, level in enumerate(self.levels):
            settings = self.config_manager.get_difficulty_settings(level)
            selected = index == self.level_index
            color = LANE_COLORS.get(settings.color, arcade.color.WHITE) if selected else arcade.color.GRAY
            arcade.draw_text(
                f"[{level}]" if selected else level,
                start_x + index * spacing,
                height / 2,
                color,
                font_size=22 if selected else 18,
                anchor_x="center",
                anchor_y="center",
            )

        arcade.draw_text(
            self.start_text,
            width / 2,
            height / 2 - 80,
            self.start_color,
            font_size=24,
            anchor_x="center",
            anchor_y="center",
        )
        arcade.draw_text(
            "LEFT/RIGHT: difficulty    " + " ".join(lane.label for lane in self.config_manager.get_lanes()) + ": play",
            width / 2,
            height / 2 - 130,
            arcade.color.LIGHT_GRAY,
            font_size=14,
            anchor_x="center",
            anchor_y="center",
        )
