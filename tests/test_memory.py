import random
import struct

import pytest

from hackcon.memory import (
    AddressOutOfBounds,
    DebugMemory,
    Memory,
    MemoryHandle,
    MemorySelector,
    UnknownMemory,
    format_u64,
)


class Ram(Memory):
    def __init__(self, data, base=0, ident="ram"):
        self._data = bytearray(data)
        self._base = base
        self._ident = ident

    def id(self):
        return self._ident

    def name(self):
        return "RAM"

    def base(self):
        return self._base

    def size(self):
        return len(self._data)

    def readonly(self):
        return False

    def peek(self, address):
        offset = address - self._base
        return self._data[offset] if 0 <= offset < len(self._data) else 0

    def poke(self, address, value):
        offset = address - self._base
        if 0 <= offset < len(self._data):
            self._data[offset] = value


def test_format_u64_widths():
    assert format_u64(0x1234) == "0x1234"
    assert len(format_u64(0x12345)) == 10
    assert len(format_u64(0x1_0000_0000)) == 18


def test_required_digits():
    assert Memory.required_digits(Ram(bytes(0x10000))) == 4
    assert Memory.required_digits(Ram(bytes(1))) == 0
    assert Memory.required_digits(DebugMemory(random.Random(0))) == 2


def test_find_bytes_and_lists():
    ram = Ram(bytes([9, 1, 2, 3, 1, 2, 3]))
    assert Memory.find(ram, b"\x01\x02\x03") == 1
    assert Memory.find(ram, [1, 2, 3], 2) == 4
    assert Memory.find(ram, [1, 2, 3], 5) is None


def test_find_rejects_empty_and_oversized():
    ram = Ram(b"abc")
    assert Memory.find(ram, b"") is None
    assert Memory.find(ram, b"abcd") is None
    assert Memory.find(ram, "bc") == 1


def test_read_write_bounds():
    ram = Ram(bytes(4), base=0x100)
    ram.write(0x101, 0x1FF)
    assert ram.read(0x101) == 0xFF
    with pytest.raises(AddressOutOfBounds) as info:
        ram.read(0x104)
    assert format_u64(0x104) in str(info.value)
    with pytest.raises(AddressOutOfBounds):
        ram.write(0xFF, 1)


def test_debug_memory_static_pattern():
    mem = DebugMemory(random.Random(1))
    raw = bytes(mem.peek(24 + i) for i in range(8))
    assert struct.unpack("<Q", raw)[0] == DebugMemory.STATIC_VALUE
    assert mem.size() == 40
    assert mem.id() == "debug"


def test_debug_memory_tick_counters_and_random():
    mem = DebugMemory(random.Random(2))
    for _ in range(256):
        mem.tick()
    assert mem.peek(14) == 0
    assert struct.unpack("<H", bytes([mem.peek(12), mem.peek(13)]))[0] == 256
    assert all(mem.peek(16 + i) < 0xFF for i in range(8))


def test_selector_get_and_reset_invalidates():
    selector = MemorySelector(debug=True)
    handle = selector.get("debug")
    assert isinstance(handle, MemoryHandle)
    assert handle.name() == "Debug Memory"
    selector.reset()
    assert handle.id() == "(invalid)"
    assert handle.size() == 0
    assert handle.readonly() is True
    assert [r.id() for r in selector.regions()] == ["debug"]


def test_selector_without_debug_clears_regions():
    selector = MemorySelector()
    ram = Ram(b"xyz")
    selector.add(ram)
    view = selector.get("ram")
    view.poke(0, 0x41)
    assert ram.peek(0) == 0x41
    selector.reset()
    assert selector.regions() == []
    with pytest.raises(UnknownMemory):
        selector.get("ram")


def test_selector_translate():
    selector = MemorySelector()
    ram = Ram(b"q")
    handle = selector.allocate(ram)
    assert selector.translate(handle) is ram
    selector.reset()
    assert selector.translate(handle) is None