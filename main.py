import time
from typing import Any, Dict, Optional

import arcade

from constants import SCREEN_HEIGHT, SCREEN_TITLE, SCREEN_WIDTH
from core.config_manager import ConfigManager
from core.game_factory import GameFactory
from core.logger import configure_logging, get_logger
from scenes.game_scene import GameScene
from scenes.main_menu_scene import MainMenuScene
from scenes.result_scene import ResultScene

logger = get_logger()


class GameWindow(arcade.Window):
    """Arcade 기반 메인 윈도우. 씬(View) 전환과 프레임 갱신을 담당합니다."""

    def __init__(
        self,
        width: int,
        height: int,
        title: str,
        config_manager: ConfigManager,
        audio_manager: Optional[Any],
    ) -> None:
        super().__init__(width, height, title, resizable=True, update_rate=1 / 60)
        self.config_manager = config_manager
        self.audio_manager = audio_manager
        self._current_scene_name: Optional[str] = None

        self._setup_initial_view()

    # ---------------------------------------------------------------------- #
    # Arcade window lifecycle
    # ---------------------------------------------------------------------- #
    def _setup_initial_view(self) -> None:
        """초기 씬을 생성하여 표시합니다."""
        menu_scene = self._create_scene("MENU", {})
        if menu_scene is None:
            raise RuntimeError("초기 MainMenuScene을 생성할 수 없습니다.")
        self.show_view(menu_scene)
        self._current_scene_name = "MENU"
        logger.info("[GameWindow] initial view: MainMenuScene")

    def _create_scene(self, scene_name: str, persistent_data: Dict[str, Any]) -> Optional[arcade.View]:
        """씬 이름에 따라 새로운 View 인스턴스를 생성합니다."""
        scene: Optional[arcade.View] = None
        if scene_name == "MENU":
            scene = MainMenuScene(self, self.audio_manager, self.config_manager)
        elif scene_name == "GAME":
            scene = GameScene(self, self.audio_manager, self.config_manager)
        elif scene_name == "RESULT":
            scene = ResultScene(self, self.audio_manager, self.config_manager)
        else:
            logger.warning(f"알 수 없는 씬 요청: {scene_name}")
            return None

        scene.startup(persistent_data)
        return scene

    def _switch_scene(self, scene_name: str, persistent_data: Dict[str, Any]) -> None:
        """다음 씬으로 전환합니다."""
        next_scene = self._create_scene(scene_name, persistent_data)
        if next_scene is None:
            logger.warning(f"{scene_name} 씬을 생성하지 못했습니다. 전환을 취소합니다.")
            return

        self.show_view(next_scene)
        self._current_scene_name = scene_name
        logger.info(f"[GameWindow] scene switched to {scene_name}")

    # ---------------------------------------------------------------------- #
    # Arcade event handlers
    # ---------------------------------------------------------------------- #
    def on_update(self, delta_time: float) -> None:
        """현재 뷰를 갱신하고 씬 전환 요청을 처리합니다."""
        current_view = self.current_view
        if current_view is None:
            return

        current_view.update(delta_time, now=time.time())

        next_scene = getattr(current_view, "next_scene_name", None)
        if next_scene:
            persistent = current_view.cleanup()
            self._switch_scene(next_scene, persistent)

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        # 씬의 키 핸들러는 show_view가 등록하므로 여기서는 ESC만 처리
        if symbol == arcade.key.ESCAPE:
            logger.info("[GameWindow] ESC pressed. Closing window.")
            self.close()

    def on_close(self) -> None:
        current_view = self.current_view
        if current_view is not None and hasattr(current_view, "cleanup"):
            current_view.cleanup()
        super().on_close()


def main() -> None:
    # ------------------------------------------------------------------ #
    # 컴포넌트 초기화 (GameFactory 사용)
    # ------------------------------------------------------------------ #
    try:
        config_manager = GameFactory.create_config_manager()
    except FileNotFoundError as exc:
        logger.error(f"필수 config 파일을 찾을 수 없습니다: {exc}")
        return

    log_settings = config_manager.ui.get("logging", {})
    configure_logging(log_settings.get("level", "INFO"), log_settings.get("file"))

    audio_manager = GameFactory.create_audio_manager(config_manager.get_config())

    # ------------------------------------------------------------------ #
    # Arcade 윈도우 생성 및 실행
    # ------------------------------------------------------------------ #
    GameWindow(
        width=SCREEN_WIDTH,
        height=SCREEN_HEIGHT,
        title=SCREEN_TITLE,
        config_manager=config_manager,
        audio_manager=audio_manager,
    )
    arcade.run()


if __name__ == "__main__":
    main()
