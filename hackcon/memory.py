"""Memory regions exposed by a core, plus a selector that hands out handles."""

from __future__ import annotations

import random
import struct
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable

_U64_MASK = 0xFFFF_FFFF_FFFF_FFFF


def format_u64(value: int) -> str:
    """Format an address as hex padded to 4, 8 or 16 digits."""
    value &= _U64_MASK

    if value <= 0xFFFF:
        return f"0x{value:04x}"
    if value <= 0xFFFF_FFFF:
        return f"0x{value:08x}"
    return f"0x{value:016x}"


class AddressOutOfBounds(IndexError):
    """Raised when an address falls outside a memory region."""

    def __init__(self, address: int) -> None:
        super().__init__(f"address out of bounds: {format_u64(address)}")
        self.address = address


class UnknownMemory(LookupError):
    """Raised when no memory region has the requested id."""

    def __init__(self, memory_id: str) -> None:
        super().__init__(f'unknown memory id "{memory_id}"')
        self.memory_id = memory_id


def _as_bytes(data: bytes | bytearray | memoryview | str | Iterable[int]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    return bytes(int(value) & 0xFF for value in data)


class Memory(ABC):
    """A byte-addressable region starting at ``base()`` with ``size()`` bytes."""

    @abstractmethod
    def id(self) -> str: ...

    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def base(self) -> int: ...

    @abstractmethod
    def size(self) -> int: ...

    @abstractmethod
    def readonly(self) -> bool: ...

    @abstractmethod
    def peek(self, address: int) -> int: ...

    @abstractmethod
    def poke(self, address: int, value: int) -> None: ...

    def required_digits(self) -> int:
        """Number of hex digits needed to show the highest address."""
        maximum = (self.base() + self.size() - 1) & _U64_MASK
        count = 0

        while maximum > 0:
            count += 1
            maximum >>= 4

        return count

    def find(
        self, data: bytes | bytearray | memoryview | str | Iterable[int], start: int = 0
    ) -> int | None:
        """Return the first offset at or after ``start`` where ``data`` occurs."""
        needle = _as_bytes(data)
        length = len(needle)

        if length < 1 or length > self.size() or start < 0:
            return None

        end = self.size() - length + 1
        first = needle[0]

        for i in range(start, end):
            if self.peek(i) == first and all(
                needle[j] == self.peek(i + j) for j in range(1, length)
            ):
                return i

        return None

    def _check_bounds(self, address: int) -> None:
        if ((address - self.base()) & _U64_MASK) >= self.size():
            raise AddressOutOfBounds(address)

    def read(self, address: int) -> int:
        """Bounds-checked ``peek``."""
        self._check_bounds(address)
        return self.peek(address)

    def write(self, address: int, value: int) -> None:
        """Bounds-checked ``poke``; the value is truncated to a byte."""
        self._check_bounds(address)
        self.poke(address, value & 0xFF)


class DebugMemory(Memory):
    """A small region of counters, random bytes and a fixed pattern."""

    _LAYOUT_SIZE = 40
    _COUNTER64 = 0
    _COUNTER32 = 8
    _COUNTER16 = 12
    _COUNTER8 = 14
    _RANDOM = 16
    _STATIC = 24
    STATIC_VALUE = 0xDEADBEEFBAADF00D

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._data = bytearray(self._LAYOUT_SIZE)
        struct.pack_into("<Q", self._data, self._STATIC, self.STATIC_VALUE)

    def id(self) -> str:
        return "debug"

    def name(self) -> str:
        return "Debug Memory"

    def base(self) -> int:
        return 0

    def size(self) -> int:
        return len(self._data)

    def readonly(self) -> bool:
        return False

    def peek(self, address: int) -> int:
        return self._data[address] if 0 <= address < len(self._data) else 0

    def poke(self, address: int, value: int) -> None:
        if 0 <= address < len(self._data):
            self._data[address] = value & 0xFF

    def _increment(self, fmt: str, offset: int, bits: int) -> None:
        (value,) = struct.unpack_from(fmt, self._data, offset)
        struct.pack_into(fmt, self._data, offset, (value + 1) & ((1 << bits) - 1))

    def tick(self) -> None:
        """Advance the counters and refill the random bytes."""
        self._increment("<Q", self._COUNTER64, 64)
        self._increment("<I", self._COUNTER32, 32)
        self._increment("<H", self._COUNTER16, 16)
        self._increment("<B", self._COUNTER8, 8)

        for i in range(8):
            self._data[self._RANDOM + i] = self._rng.randrange(0xFF)


class MemoryHandle(Memory):
    """A memory that resolves through a selector handle and degrades when stale."""

    def __init__(self, handle: int, selector: MemorySelector) -> None:
        self._handle = handle
        self._selector = selector

    def _target(self) -> Memory | None:
        return self._selector.translate(self._handle)

    def id(self) -> str:
        target = self._target()
        return target.id() if target is not None else "(invalid)"

    def name(self) -> str:
        target = self._target()
        return target.name() if target is not None else "(invalid)"

    def base(self) -> int:
        target = self._target()
        return target.base() if target is not None else 0

    def size(self) -> int:
        target = self._target()
        return target.size() if target is not None else 0

    def readonly(self) -> bool:
        target = self._target()
        return target.readonly() if target is not None else True

    def peek(self, address: int) -> int:
        target = self._target()
        return target.peek(address) if target is not None else 0

    def poke(self, address: int, value: int) -> None:
        target = self._target()
        if target is not None:
            target.poke(address, value)


class MemorySelector:
    """Keeps the known memory regions and issues handles that reset invalidates."""

    def __init__(self, debug: bool = False) -> None:
        self._debug = debug
        self._regions: list[Memory] = []
        self._handles: dict[int, Memory] = {}
        self._next_handle = 1
        self._lock = threading.Lock()

        if debug:
            self.add(DebugMemory())

    def add(self, memory: Memory) -> None:
        self._regions.append(memory)

    def regions(self) -> list[Memory]:
        return list(self._regions)

    def allocate(self, memory: Memory) -> int:
        with self._lock:
            handle = self._next_handle
            self._next_handle += 1
            self._handles[handle] = memory
            return handle

    def translate(self, handle: int) -> Memory | None:
        with self._lock:
            return self._handles.get(handle)

    def get(self, memory_id: str) -> MemoryHandle:
        """Return a handle-backed view of the region with the given id."""
        for region in self._regions:
            if region.id() == memory_id:
                return MemoryHandle(self.allocate(region), self)

        raise UnknownMemory(memory_id)

    def tick(self) -> None:
        if self._debug and self._regions:
            region = self._regions[0]
            if isinstance(region, DebugMemory):
                region.tick()

    def reset(self) -> None:
        """Invalidate every handle and drop the game's regions."""
        with self._lock:
            self._handles.clear()

        if self._debug:
            del self._regions[1:]
        else:
            self._regions.clear()