"""
게임 씬
리듬 엔진을 프레임 틱에 연결하고 엔진 상태를 그립니다.
"""
from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

import arcade

from constants import (
    COLOR_GRAY, COLOR_GREEN, COLOR_RED, COLOR_WHITE, FEEDBACK_MISS, FRAME_RATE, LANE_COLORS
)
from core.engine import RhythmEngine
from core.game_factory import GameFactory, resource_path
from core.game_state import GameState
from core.judgment_processor import Judgement, JudgementKind
from core.kinematics import Transition
from core.logger import get_logger
from core.note import NoteState
from core.score_manager import ScoreManager
from core.ticker import FrameTicker
from scenes.base_scene import BaseScene

logger = get_logger()

# 판정 후 화면에 남지 않는 상태
HIDDEN_STATES = (NoteState.HIT, NoteState.COMPLETED)


class GameScene(BaseScene):
    """Arcade 기반 게임 플레이 씬"""

    def __init__(self, window: arcade.Window, audio_manager, config_manager) -> None:
        super().__init__(window, audio_manager, config_manager)

        styles = config_manager.ui.get("styles", {})
        self.note_radius: float = float(styles.get("note_radius", 20))
        self.hit_target_radius: float = float(styles.get("hit_target_radius", 25))
        self.hold_width: float = float(styles.get("hold_width", 16))
        self.feedback_font_size: int = int(styles.get("feedback_font_size", 40))

        self.game_state = GameState()
        self.difficulty_name: Optional[str] = None
        self.score_manager: Optional[ScoreManager] = None
        self.engine: Optional[RhythmEngine] = None
        self.ticker: Optional[FrameTicker] = None
        self.music_loaded: bool = False
        self.finish_delay: float = 1.5
        self.finish_trigger_time: Optional[float] = None
        self.game_over_pending: bool = False

    def startup(self, persistent_data):
        super().startup(persistent_data)

        self.difficulty_name = self.persistent_data.get("difficulty", "")
        difficulty = self.config_manager.get_difficulty_settings(self.difficulty_name)
        self.difficulty_name = difficulty.name

        self.score_manager = GameFactory.create_score_manager(
            self.config_manager, self.game_state, self._on_game_over
        )
        self.engine = GameFactory.create_engine(self.config_manager, difficulty, self.score_manager)
        self.ticker = FrameTicker(self._on_frame, 1 / FRAME_RATE)

        self.score_manager.start_session()
        self.game_state.status_text = "GO!"
        self.finish_trigger_time = None
        self.game_over_pending = False
        self.engine.start(self.ticker.clock())
        self.ticker.start()

        if self.audio_manager:
            music_path = self.config_manager.ui.get("music")
            self.music_loaded = bool(music_path) and self.audio_manager.load_music(resource_path(music_path))
            if self.music_loaded:
                self.audio_manager.play_music()

    def cleanup(self) -> Dict[str, Any]:
        self._stop_session()
        self.persistent_data.update({
            "final_score": self.game_state.score,
            "max_combo": self.game_state.max_combo,
            "accuracy": self.game_state.accuracy,
            "game_over": self.game_state.is_game_over,
            "difficulty": self.difficulty_name,
        })
        return super().cleanup()

    def _stop_session(self) -> None:
        if self.ticker:
            self.ticker.stop()
        if self.engine:
            self.engine.stop()
        if self.audio_manager:
            self.audio_manager.stop_music()

    # ------------------------------------------------------------------ #
    # Frame loop
    # ------------------------------------------------------------------ #
    def _on_frame(self, now: float) -> None:
        if self.engine is None:
            return
        transitions = self.engine.tick(now)
        self._play_transition_sounds(transitions)
        self._finish_if_game_over()

    def _on_game_over(self) -> None:
        logger.info("Health depleted. Stopping session.")
        self.game_over_pending = True

    def _finish_if_game_over(self) -> None:
        """엔진 호출이 끝난 뒤 보류된 게임 오버를 처리합니다."""
        if self.game_over_pending:
            self.game_over_pending = False
            self._trigger_finish(time.time())

    def _trigger_finish(self, now: float) -> None:
        """게임 종료를 트리거합니다."""
        if self.finish_trigger_time is not None:
            return
        self.finish_trigger_time = now
        self.game_state.is_playing = False
        if self.ticker:
            self.ticker.stop()
        if self.engine:
            self.engine.pause()
        if self.audio_manager:
            self.audio_manager.stop_music()

    def update(self, delta_time: float, **kwargs: Any) -> None:
        super().update(delta_time, **kwargs)
        now = kwargs.get("now", time.time())

        if self.finish_trigger_time is None and self.audio_manager and self.audio_manager.is_music_finished():
            self.game_state.status_text = "Finished!"
            self._trigger_finish(now)

        if self.finish_trigger_time is not None and (now - self.finish_trigger_time) > self.finish_delay:
            self.next_scene_name = "RESULT"

    # ------------------------------------------------------------------ #
    # Input
    # ------------------------------------------------------------------ #
    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if self.engine is None:
            return
        if symbol == arcade.key.BACKSPACE:
            self.game_state.status_text = "Stopped"
            self._trigger_finish(time.time())
            return
        judgement = self.engine.press_key(self._key_name(symbol))
        self._play_judgement_sound(judgement)
        self._finish_if_game_over()

    def on_key_release(self, symbol: int, modifiers: int) -> None:
        if self.engine is not None:
            self.engine.release_key(self._key_name(symbol))

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int) -> None:
        if self.engine is None:
            return
        x_percent = x / max(1, self.window.width) * 100.0
        judgement = self.engine.touch_start(("mouse", button), x_percent)
        self._play_judgement_sound(judgement)
        self._finish_if_game_over()

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int) -> None:
        if self.engine is not None:
            self.engine.touch_end(("mouse", button))

    @staticmethod
    def _key_name(symbol: int) -> str:
        return chr(symbol) if 32 < symbol < 127 else ""

    def _play_judgement_sound(self, judgement: Optional[Judgement]) -> None:
        if not self.audio_manager or judgement is None or judgement.kind is JudgementKind.NONE:
            return
        self.audio_manager.play_sfx(judgement.kind.value)

    def _play_transition_sounds(self, transitions: List[Transition]) -> None:
        if not self.audio_manager or not transitions:
            return
        # 효과음은 프레임당 하나, 마지막 전이 기준
        _, state = transitions[-1]
        self.audio_manager.play_sfx("HOLD" if state is NoteState.COMPLETED else FEEDBACK_MISS)

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #
    def draw_scene(self) -> None:
        if self.engine is None:
            return
        width = self.window.width
        height = self.window.height
        rules = self.engine.rules
        hit_y = self.to_arcade_y(rules.hit_line_y)

        for lane in self.engine.lanes:
            x = lane.x_percent / 100.0 * width
            arcade.draw_line(x, 0, x, height, (255, 255, 255, 25), 2)
            outline = COLOR_WHITE if lane.index in self.engine.held else (255, 255, 255, 128)
            arcade.draw_circle_outline(x, hit_y, self.hit_target_radius, outline, 3)
            arcade.draw_text(
                lane.label, x, hit_y, (255, 255, 255, 128),
                font_size=20, anchor_x="center", anchor_y="center", bold=True,
            )

        for view in self.engine.snapshot():
            if view.state in HIDDEN_STATES:
                continue
            lane = self.engine.lanes.get(view.lane)
            color = COLOR_GRAY if view.state in (NoteState.MISSED, NoteState.RELEASED_EARLY) \
                else LANE_COLORS.get(lane.color, COLOR_WHITE)
            x, head_y = self.field_to_arcade_xy(lane.x_percent, view.y)
            if view.length > 0:
                # 홀드 중에는 판정선 아래로 내려간 몸통을 잘라서 그림
                head_visible = min(view.y, rules.hit_line_y) if view.state is NoteState.HOLDING else view.y
                bottom = self.to_arcade_y(head_visible)
                top = self.to_arcade_y(view.tail_y)
                half = self.hold_width / 2
                body_color = color + (160,)
                self.draw_rect(x - half, bottom, x + half, top, body_color)
                if view.state is NoteState.HOLDING:
                    head_y = bottom
            arcade.draw_circle_filled(x, head_y, self.note_radius, color)
            arcade.draw_circle_filled(x - 5, head_y + 5, 8, (255, 255, 255, 76))

        self._draw_feedback(width)
        self._draw_hud(width, height)

    def _draw_feedback(self, width: int) -> None:
        message = self.engine.feedback_message
        if message is None:
            return
        x, y = self.field_to_arcade_xy(message.x_percent, message.y_percent)
        base = COLOR_RED if message.text == FEEDBACK_MISS else COLOR_GREEN
        alpha = int(max(0.0, min(1.0, message.alpha)) * 255)
        arcade.draw_text(
            message.text, x, y, base + (alpha,),
            font_size=self.feedback_font_size, anchor_x="center", bold=True,
        )
        self.engine.feedback.advance()

    def _draw_hud(self, width: int, height: int) -> None:
        stats_x = 40
        stats_y = height - 60
        arcade.draw_text(f"Score: {self.game_state.score}", stats_x, stats_y, arcade.color.WHITE, 24, bold=True)
        arcade.draw_text(f"Combo: {self.game_state.combo}", stats_x, stats_y - 34, arcade.color.LIGHT_GREEN, 18)
        arcade.draw_text(f"Max Combo: {self.game_state.max_combo}", stats_x, stats_y - 62, arcade.color.LIGHT_GREEN, 16)

        # 체력 바
        bar_width = 240
        bar_height = 16
        right = width - 40
        top = height - 40
        ratio = self.game_state.health / max(1e-6, self.score_manager.max_health) if self.score_manager else 0.0
        bar_color = COLOR_GREEN if ratio > 0.3 else COLOR_RED
        self.draw_rect(right - bar_width, top - bar_height, right, top, (55, 65, 81))
        self.draw_rect(right - bar_width, top - bar_height, right - bar_width * (1 - ratio), top, bar_color)
        arcade.draw_text(
            f"{self.difficulty_name}  HP {self.game_state.health:.0f}",
            right, top - bar_height - 24, arcade.color.LIGHT_GRAY, 14, anchor_x="right",
        )

        if self.finish_trigger_time is not None:
            arcade.draw_text(
                self.game_state.status_text, width / 2, height / 2, arcade.color.AQUA,
                font_size=36, anchor_x="center", anchor_y="center",
            )
