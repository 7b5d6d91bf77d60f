"""Thread-safe bounded log that echoes non-debug messages to a stream."""

from __future__ import annotations

import sys
import threading
from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import TextIO


class LogLevel(IntEnum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3


_STREAM_PREFIX = {
    LogLevel.DEBUG: "[DBG] ",
    LogLevel.INFO: "[NFO] ",
    LogLevel.WARN: "[WRN] ",
    LogLevel.ERROR: "[ERR] ",
}

_COPY_PREFIX = {
    LogLevel.DEBUG: "[DEBUG] ",
    LogLevel.INFO: "[INFO ] ",
    LogLevel.WARN: "[WARN ] ",
    LogLevel.ERROR: "[ERROR] ",
}


@dataclass(frozen=True)
class LogRecord:
    level: LogLevel
    text: str


class Logger:
    """Keeps the most recent log lines, up to ``capacity`` characters of text."""

    def __init__(self, capacity: int = 1024 * 1024, stream: TextIO | None = None) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._stream = stream if stream is not None else sys.stderr
        self._records: deque[LogRecord] = deque()
        self._used = 0
        self._lock = threading.Lock()

    def log(self, level: int, message: str) -> None:
        try:
            known = LogLevel(level)
        except ValueError:
            known = None

        if known is None or known > LogLevel.DEBUG:
            prefix = _STREAM_PREFIX[known] if known is not None else "[???] "
            text = prefix + message
            if message and not message.endswith("\n"):
                text += "\n"
            self._stream.write(text)

        stored = known if known is not None else LogLevel.ERROR

        with self._lock:
            for line in message.splitlines() or [""]:
                self._append(LogRecord(stored, line))

    def _append(self, record: LogRecord) -> None:
        self._records.append(record)
        self._used += len(record.text) + 1

        while self._used > self._capacity and len(self._records) > 1:
            dropped = self._records.popleft()
            self._used -= len(dropped.text) + 1

    def debug(self, message: str) -> None:
        self.log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        self.log(LogLevel.INFO, message)

    def warn(self, message: str) -> None:
        self.log(LogLevel.WARN, message)

    def error(self, message: str) -> None:
        self.log(LogLevel.ERROR, message)

    def records(self) -> list[LogRecord]:
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
            self._used = 0

    def copy_text(self) -> str:
        """Render all stored lines with level labels, one per line."""
        return "".join(
            f"{_COPY_PREFIX[record.level]}{record.text}\n" for record in self.records()
        )