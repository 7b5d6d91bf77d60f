"""Read-only copies of a memory region taken at a point in time."""

from __future__ import annotations

import itertools
import threading
from datetime import datetime, timezone

from hackcon.memory import Memory

_ids = itertools.count(1)
_ids_lock = threading.Lock()


def _create_id() -> str:
    with _ids_lock:
        return f"snap{next(_ids)}"


def _create_name(memory_name: str) -> str:
    now = datetime.now(timezone.utc)
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S") + f".{now.microsecond:06d}Z"
    return f"Snapshot of {memory_name} created on {stamp}"


class Snapshot(Memory):
    """An immutable copy of ``size`` bytes starting at ``base``."""

    def __init__(self, base: int, size: int, data: bytes, source: Memory) -> None:
        self._id = _create_id()
        self._name = _create_name(source.name())
        self._base = base
        self._size = size
        self._data = bytes(data)
        self._source = source

    def source(self) -> Memory:
        return self._source

    def id(self) -> str:
        return self._id

    def name(self) -> str:
        return self._name

    def base(self) -> int:
        return self._base

    def size(self) -> int:
        return self._size

    def readonly(self) -> bool:
        return True

    def peek(self, address: int) -> int:
        offset = address - self._base
        if 0 <= offset < self._size:
            return self._data[offset]
        return 0

    def poke(self, address: int, value: int) -> None:
        pass


def take_snapshot(memory: Memory) -> Snapshot:
    """Copy every byte of ``memory`` into a new snapshot."""
    base = memory.base()
    size = memory.size()
    data = bytes(memory.peek(address) for address in range(base, base + size))
    return Snapshot(base, size, data, memory)