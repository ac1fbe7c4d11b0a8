"""
프레임 틱 모듈
주기적인 콜백 호출을 시작/정지할 수 있는 스케줄러 래퍼입니다.
"""
import time
from typing import Callable, Optional

FrameCallback = Callable[[float], object]
Scheduler = Callable[[Callable[[float], None], float], object]
Unscheduler = Callable[[Callable[[float], None]], object]


class FrameTicker:
    """interval 초마다 callback(now)을 호출합니다.

    schedule/unschedule을 지정하지 않으면 arcade의 스케줄러를 사용합니다.
    """

    def __init__(
        self,
        callback: FrameCallback,
        interval: float,
        schedule: Optional[Scheduler] = None,
        unschedule: Optional[Unscheduler] = None,
        clock: Callable[[], float] = time.perf_counter
    ):
        if interval <= 0:
            raise ValueError(f"interval은 0보다 커야 합니다: {interval}")
        if schedule is None or unschedule is None:
            import arcade
            schedule = schedule or arcade.schedule
            unschedule = unschedule or arcade.unschedule
        self.callback = callback
        self.interval = interval
        self._schedule = schedule
        self._unschedule = unschedule
        self.clock = clock
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._schedule(self._on_tick, self.interval)
        self._running = True

    def stop(self) -> None:
        if not self._running:
            return
        self._unschedule(self._on_tick)
        self._running = False

    def _on_tick(self, delta_time: float) -> None:
        self.callback(self.clock())
