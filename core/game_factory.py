"""
게임 팩토리 모듈
게임 컴포넌트 생성 및 의존성 주입을 담당합니다.
"""
import os
import random
import sys
from typing import Any, Callable, Dict, Optional

import pygame

from core.audio_manager import AudioManager
from core.config_manager import DEFAULT_CONFIG_DIR, ConfigManager, DifficultySettings
from core.engine import RhythmEngine
from core.game_state import GameState
from core.logger import get_logger
from core.score_manager import ScoreManager


logger = get_logger()


def resource_path(relative_path: str) -> str:
    """PyInstaller 지원을 위한 자원 경로 헬퍼."""
    base_path = getattr(sys, "_MEIPASS", os.path.abspath("."))
    return os.path.join(base_path, relative_path)


class GameFactory:
    """게임 컴포넌트 생성 및 의존성 주입"""

    @staticmethod
    def create_audio_manager(config: Dict[str, Any]) -> Optional[AudioManager]:
        """오디오 매니저를 생성합니다."""
        try:
            pygame.init()
            logger.info("Pygame 모듈 초기화 성공")
        except pygame.error as exc:
            logger.error(f"오디오 초기화 실패: {exc}")
            return None
        audio_manager = AudioManager(resource_path(os.path.join("assets", "sounds")))
        audio_manager.load_sounds(config.get("ui", {}).get("sounds", {}))
        return audio_manager

    @staticmethod
    def create_config_manager(config_dir: str = DEFAULT_CONFIG_DIR) -> ConfigManager:
        """설정 매니저를 생성합니다."""
        try:
            logger.info("Loading config files...")
            return ConfigManager(config_dir)
        except FileNotFoundError as exc:
            logger.error(f"필수 config 파일을 찾을 수 없습니다: {exc}")
            raise

    @staticmethod
    def create_score_manager(
        config_manager: ConfigManager,
        game_state: Optional[GameState] = None,
        on_game_over: Optional[Callable[[], None]] = None
    ) -> ScoreManager:
        """점수 매니저를 생성합니다."""
        rules = config_manager.get_rules()
        return ScoreManager(
            game_state or GameState(health=rules.max_health),
            rules.max_health,
            on_game_over,
        )

    @staticmethod
    def create_engine(
        config_manager: ConfigManager,
        difficulty: DifficultySettings,
        score_manager: ScoreManager,
        rng: Optional[random.Random] = None
    ) -> RhythmEngine:
        """점수 매니저의 콜백을 주입한 리듬 엔진을 생성합니다."""
        feedback = config_manager.ui.get("feedback", {})
        return RhythmEngine(
            config_manager.get_lanes(),
            config_manager.get_rules(),
            difficulty,
            score_manager.apply_score,
            score_manager.apply_health,
            rng=rng,
            fade_step=feedback.get("fade_step"),
            drift_step=feedback.get("drift_step"),
        )
