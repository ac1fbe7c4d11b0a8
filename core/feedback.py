"""
판정 피드백 모듈
"PERFECT"/"MISS" 같은 일시적인 텍스트 오버레이 상태를 관리합니다.
"""
from dataclasses import dataclass
from typing import Optional

import constants


@dataclass
class FeedbackMessage:
    """화면에 떠 있는 판정 텍스트 하나."""
    text: str
    x_percent: float
    y_percent: float
    alpha: float = 1.0


class FeedbackEmitter:
    """마지막으로 들어온 메시지 하나만 유지합니다 (큐 없음)."""

    def __init__(
        self,
        anchor_y: float,
        fade_step: float = constants.FEEDBACK_FADE_STEP,
        drift_step: float = constants.FEEDBACK_DRIFT_STEP,
    ) -> None:
        if fade_step <= 0:
            raise ValueError(f"fade_step은 0보다 커야 합니다: {fade_step}")
        self.anchor_y = anchor_y
        self.fade_step = fade_step
        self.drift_step = drift_step
        self.message: Optional[FeedbackMessage] = None

    def emit(self, text: str, x_percent: float) -> FeedbackMessage:
        """현재 메시지를 무조건 덮어씁니다."""
        self.message = FeedbackMessage(text, x_percent, self.anchor_y)
        return self.message

    def advance(self) -> None:
        """렌더링 직후 호출: 투명도를 낮추고 위로 띄웁니다."""
        if self.message is None:
            return
        self.message.alpha -= self.fade_step
        self.message.y_percent -= self.drift_step
        if self.message.alpha <= 0:
            self.message = None

    def clear(self) -> None:
        self.message = None
