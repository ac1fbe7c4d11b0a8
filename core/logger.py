"""
로깅 시스템 모듈
엔진, 씬, 오디오가 같은 "lane_beat" 로거를 공유합니다.
"""
import logging
import os
import sys
from typing import Optional, Union

from constants import LOG_FORMAT, LOG_LEVEL

LOGGER_NAME = "lane_beat"

LevelLike = Union[int, str]


def _resolve_level(level: LevelLike) -> int:
    """'DEBUG' 같은 이름이나 정수 레벨을 logging 레벨로 변환합니다."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"알 수 없는 로그 레벨: {level}")
    return resolved


class GameLogger:
    """프로젝트 공용 로거를 한 번만 구성하는 싱글톤"""

    _instance: Optional['GameLogger'] = None
    _logger: Optional[logging.Logger] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._logger is not None:
            return
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.DEBUG)
        if not logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(_resolve_level(LOG_LEVEL))
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
        type(self)._logger = logger

    def configure(self, level: LevelLike = LOG_LEVEL, log_file: Optional[str] = None) -> logging.Logger:
        """
        출력 레벨을 바꾸고, 필요하면 파일 핸들러를 추가합니다.

        Args:
            level: 로그 레벨 이름 또는 정수
            log_file: 로그를 함께 남길 파일 경로 (None이면 콘솔만)

        Returns:
            구성된 로거
        """
        resolved = _resolve_level(level)
        for handler in self._logger.handlers:
            handler.setLevel(resolved)

        if log_file:
            already = any(
                isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_file)
                for h in self._logger.handlers
            )
            if not already:
                file_handler = logging.FileHandler(log_file, encoding="utf-8")
                file_handler.setLevel(resolved)
                file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
                self._logger.addHandler(file_handler)
        return self._logger

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """로거 인스턴스를 반환합니다."""
        return cls()._logger


def get_logger() -> logging.Logger:
    return GameLogger.get_logger()


def configure_logging(level: LevelLike = LOG_LEVEL, log_file: Optional[str] = None) -> logging.Logger:
    """ui.json의 logging 섹션 값으로 로거를 구성하는 편의 함수"""
    return GameLogger().configure(level, log_file)
