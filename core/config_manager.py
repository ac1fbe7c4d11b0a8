"""
설정 관리 모듈
모든 설정을 중앙에서 관리합니다.
"""
import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import constants
from core.lanes import LaneRegistry

DEFAULT_CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config")


@dataclass(frozen=True)
class EngineRules:
    """판정선, 판정 범위, 점수/체력 규칙"""
    hit_line_y: float = constants.HIT_LINE_Y
    hit_window: float = constants.HIT_WINDOW
    spawn_y: float = constants.SPAWN_Y
    cleanup_y: float = constants.CLEANUP_Y
    score_hit: int = constants.SCORE_HIT
    score_miss: int = constants.SCORE_MISS
    score_hold_bonus: int = constants.SCORE_HOLD_BONUS
    health_gain: float = constants.HEALTH_GAIN
    health_penalty: float = constants.HEALTH_PENALTY
    max_health: float = constants.MAX_HEALTH

    def __post_init__(self) -> None:
        if self.hit_window <= 0:
            raise ValueError(f"hit_window는 0보다 커야 합니다: {self.hit_window}")
        if self.max_health <= 0:
            raise ValueError(f"max_health는 0보다 커야 합니다: {self.max_health}")


@dataclass(frozen=True)
class DifficultySettings:
    """난이도별 스폰/낙하 파라미터"""
    name: str = constants.DEFAULT_DIFFICULTY
    spawn_interval_ms: float = constants.DEFAULT_SPAWN_INTERVAL_MS
    fall_speed: float = constants.DEFAULT_FALL_SPEED
    chord_probability: float = constants.DEFAULT_CHORD_PROBABILITY
    hold_probability: float = constants.DEFAULT_HOLD_PROBABILITY
    hold_length_range: Tuple[float, float] = constants.DEFAULT_HOLD_LENGTH_RANGE
    color: str = "yellow"

    def __post_init__(self) -> None:
        if self.spawn_interval_ms <= 0:
            raise ValueError(f"spawn_interval_ms는 0보다 커야 합니다: {self.spawn_interval_ms}")
        if self.fall_speed <= 0:
            raise ValueError(f"fall_speed는 0보다 커야 합니다: {self.fall_speed}")
        for field_name in ("chord_probability", "hold_probability"):
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{field_name}는 0~1 사이여야 합니다: {value}")
        low, high = self.hold_length_range
        if low < 0 or high < low:
            raise ValueError(f"hold_length_range 오류: {self.hold_length_range}")

    @property
    def spawn_interval(self) -> float:
        """스폰 간격 (초)"""
        return self.spawn_interval_ms / 1000.0


class ConfigManager:
    """게임 설정을 중앙에서 관리하는 클래스"""

    def __init__(self, config_dir: str = DEFAULT_CONFIG_DIR):
        self.config_dir = config_dir
        self.rules: Dict[str, Any] = {}
        self.difficulty: Dict[str, Any] = {}
        self.ui: Dict[str, Any] = {}

        self._load_all_configs()

    def _load_all_configs(self) -> None:
        """모든 설정 파일을 로드합니다."""
        try:
            self.rules = self._load_json("rules.json")
            self.difficulty = self._load_json("difficulty.json")
            self.ui = self._load_json("ui.json")
        except FileNotFoundError as e:
            from core.logger import get_logger
            logger = get_logger()
            logger.error(f"설정 파일을 찾을 수 없습니다: {e}")
            raise

    def _load_json(self, filename: str) -> Dict[str, Any]:
        """JSON 파일을 로드합니다."""
        filepath = os.path.join(self.config_dir, filename)
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)

    def get_rules(self) -> EngineRules:
        """판정 및 점수 규칙을 반환합니다."""
        judge = self.rules.get("judge", {})
        score = self.rules.get("score", {})
        health = self.rules.get("health", {})
        return EngineRules(
            hit_line_y=float(judge.get("hit_line_y", constants.HIT_LINE_Y)),
            hit_window=float(judge.get("hit_window", constants.HIT_WINDOW)),
            spawn_y=float(judge.get("spawn_y", constants.SPAWN_Y)),
            cleanup_y=float(judge.get("cleanup_y", constants.CLEANUP_Y)),
            score_hit=int(score.get("hit", constants.SCORE_HIT)),
            score_miss=int(score.get("miss", constants.SCORE_MISS)),
            score_hold_bonus=int(score.get("hold_bonus", constants.SCORE_HOLD_BONUS)),
            health_gain=float(health.get("gain", constants.HEALTH_GAIN)),
            health_penalty=float(health.get("penalty", constants.HEALTH_PENALTY)),
            max_health=float(health.get("max", constants.MAX_HEALTH)),
        )

    def get_lanes(self) -> LaneRegistry:
        """레인 레지스트리를 반환합니다."""
        return LaneRegistry.from_config(self.ui.get("lanes", constants.DEFAULT_LANES))

    def get_difficulty_levels(self) -> List[str]:
        """선택 가능한 난이도 이름 목록 (설정 파일 순서)"""
        return list(self.difficulty.get("levels", {}).keys()) or [constants.DEFAULT_DIFFICULTY]

    def get_difficulty_settings(self, level: str = constants.DEFAULT_DIFFICULTY) -> DifficultySettings:
        """
        난이도별 설정을 반환합니다.

        Args:
            level: 난이도 (EASY, MEDIUM, HARD)

        Returns:
            DifficultySettings 객체. 알 수 없는 난이도는 기본 난이도로 대체됩니다.
        """
        levels = self.difficulty.get("levels", {})
        default_level = self.difficulty.get("default", constants.DEFAULT_DIFFICULTY)
        name = level if level in levels else default_level
        settings = levels.get(name) or next(iter(levels.values()), {})

        hold_range = settings.get("hold_length_range", constants.DEFAULT_HOLD_LENGTH_RANGE)
        return DifficultySettings(
            name=name,
            spawn_interval_ms=float(settings.get("spawn_interval_ms", constants.DEFAULT_SPAWN_INTERVAL_MS)),
            fall_speed=float(settings.get("fall_speed", constants.DEFAULT_FALL_SPEED)),
            chord_probability=float(settings.get("chord_probability", constants.DEFAULT_CHORD_PROBABILITY)),
            hold_probability=float(settings.get("hold_probability", constants.DEFAULT_HOLD_PROBABILITY)),
            hold_length_range=(float(hold_range[0]), float(hold_range[1])),
            color=str(settings.get("color", "yellow")),
        )

    def get_config(self) -> Dict[str, Any]:
        """전체 설정을 반환합니다."""
        return {
            "rules": self.rules,
            "difficulty": self.difficulty,
            "ui": self.ui
        }
