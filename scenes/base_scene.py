from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import arcade

from constants import COLOR_BACKGROUND


class BaseScene(arcade.View):
    """Arcade View 기반의 공통 Scene 베이스 클래스."""

    def __init__(self, window: arcade.Window, audio_manager, config_manager) -> None:
        super().__init__(window)
        self.window: arcade.Window = window
        self.audio_manager = audio_manager
        self.config_manager = config_manager

        self.next_scene_name: Optional[str] = None
        self.persistent_data: Dict[str, Any] = {}
        self.latest_inputs: Dict[str, Any] = {}

    # ------------------------------------------------------------------ #
    # Lifecycle helpers
    # ------------------------------------------------------------------ #
    def startup(self, persistent_data: Optional[Dict[str, Any]]) -> None:
        self.persistent_data = persistent_data or {}
        self.next_scene_name = None

    def cleanup(self) -> Dict[str, Any]:
        self.next_scene_name = None
        return self.persistent_data

    # ------------------------------------------------------------------ #
    # Arcade hooks
    # ------------------------------------------------------------------ #
    def on_show(self) -> None:
        self.window.background_color = COLOR_BACKGROUND

    def update(self, delta_time: float, **kwargs: Any) -> None:  # pragma: no cover - override as needed
        self.latest_inputs = kwargs

    def on_draw(self) -> None:  # pragma: no cover - override as needed
        self.window.clear()
        self.draw_scene()

    # ------------------------------------------------------------------ #
    # Helpers for subclasses
    # ------------------------------------------------------------------ #
    def draw_scene(self) -> None:  # pragma: no cover - override as needed
        """하위 클래스가 실제 렌더링을 구현하도록 비워둡니다."""
        pass

    def field_to_arcade_xy(self, x_percent: float, y_percent: float) -> Tuple[float, float]:
        """필드 퍼센트 좌표(위에서 아래로 증가)를 Arcade 픽셀 좌표로 변환합니다."""
        width = getattr(self.window, "width", 0) or 0
        return x_percent / 100.0 * width, self.to_arcade_y(y_percent)

    def to_arcade_y(self, y_percent: float) -> float:
        window_height = getattr(self.window, "height", 0) or 0
        return window_height - y_percent / 100.0 * window_height

    @staticmethod
    def draw_rect(left: float, bottom: float, right: float, top: float, color) -> None:
        points = [(left, bottom), (right, bottom), (right, top), (left, top)]
        arcade.draw_polygon_filled(points, color)
