"""Performance counters and wall-clock helpers."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterator, Protocol, Union

TAG = "[PRF] "


class _InfoSink(Protocol):
    def info(self, message: str) -> None: ...


def get_time_us() -> int:
    """Return the current wall-clock time in microseconds."""
    return time.time_ns() // 1000


def get_time_ns() -> int:
    """Return the current wall-clock time in nanoseconds."""
    return time.time_ns()


@dataclass
class PerfCounter:
    """A named counter accumulating the time spent between start and stop."""

    ident: str
    start: int = 0
    total: int = 0
    call_count: int = 0
    registered: bool = False

    def reset(self) -> None:
        self.start = 0
        self.total = 0
        self.call_count = 0
        self.registered = True

    @property
    def ns_per_call(self) -> int:
        return self.total // self.call_count if self.call_count else 0


class Perf:
    """Registry of performance counters."""

    def __init__(self, logger: _InfoSink | None = None) -> None:
        self._logger = logger
        self._counters: dict[str, PerfCounter] = {}

    def get_time_usec(self) -> int:
        return get_time_us()

    def get_counter(self) -> int:
        return get_time_ns()

    def get_cpu_features(self) -> int:
        return 0

    def register(self, counter: PerfCounter) -> PerfCounter:
        """Register an external counter unless one with its ident exists."""
        existing = self._counters.get(counter.ident)

        if existing is not None:
            return existing

        counter.reset()
        self._counters[counter.ident] = counter
        return counter

    def register_ident(self, ident: str) -> PerfCounter:
        """Create and register a new counter; the ident must be unused."""
        if ident in self._counters:
            raise ValueError(f'counter "{ident}" already exists')

        counter = PerfCounter(ident)
        counter.reset()
        self._counters[ident] = counter
        return counter

    def counter(self, ident: str) -> PerfCounter:
        try:
            return self._counters[ident]
        except KeyError:
            raise KeyError(f'counter "{ident}" does not exist') from None

    def _resolve(self, target: Union[str, PerfCounter]) -> PerfCounter:
        if isinstance(target, PerfCounter):
            return target
        return self.counter(target)

    def start(self, ident: Union[str, PerfCounter]) -> None:
        counter = self._resolve(ident)
        counter.start = self.get_counter()

    def stop(self, ident: Union[str, PerfCounter]) -> None:
        counter = self._resolve(ident)
        tick = self.get_counter()
        counter.total += tick - counter.start
        counter.call_count += 1

    def __iter__(self) -> Iterator[PerfCounter]:
        return iter(list(self._counters.values()))

    def __len__(self) -> int:
        return len(self._counters)

    def __contains__(self, ident: object) -> bool:
        return ident in self._counters

    def format_lines(self) -> list[str]:
        """Return one summary line per counter: calls, ms.us per call, ident."""
        lines = []

        for counter in self._counters.values():
            us_per_call = counter.ns_per_call // 1000
            ms = us_per_call // 1000
            us = us_per_call - ms * 1000
            lines.append(f"{counter.call_count:6d} {ms:2d}.{us:03d} {counter.ident}")

        return lines

    def log(self) -> None:
        if self._logger is None:
            return

        for line in self.format_lines():
            self._logger.info(TAG + line)

    def clear(self) -> None:
        self._counters.clear()