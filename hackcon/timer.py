"""A pausable stopwatch measured in microseconds."""

from __future__ import annotations

from typing import Callable

from hackcon.perf import get_time_us


class Timer:
    """Stopwatch that can be started, paused, resumed and stopped."""

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock if clock is not None else get_time_us
        self._start_ticks = 0
        self._paused_ticks = 0
        self._started = False
        self._paused = False

    def start(self) -> None:
        self._started = True
        self._paused = False
        self._start_ticks = self._clock()
        self._paused_ticks = 0

    def stop(self) -> None:
        self._started = False
        self._paused = False
        self._start_ticks = 0
        self._paused_ticks = 0

    def pause(self) -> None:
        if self._started and not self._paused:
            self._paused = True
            self._paused_ticks = self._clock() - self._start_ticks
            self._start_ticks = 0

    def resume(self) -> None:
        if self._started and self._paused:
            self._paused = False
            self._start_ticks = self._clock() - self._paused_ticks
            self._paused_ticks = 0

    def reset(self) -> None:
        self.stop()
        self.start()

    def elapsed_us(self) -> int:
        if not self._started:
            return 0
        if self._paused:
            return self._paused_ticks
        return self._clock() - self._start_ticks

    @property
    def started(self) -> bool:
        return self._started

    @property
    def paused(self) -> bool:
        return self._paused and self._started