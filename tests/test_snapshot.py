from hackcon.memory import Memory
from hackcon.snapshot import Snapshot, take_snapshot


class Ram(Memory):
    def __init__(self, data, base=0):
        self._data = bytearray(data)
        self._base = base

    def id(self):
        return "ram"

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


def test_snapshot_copies_bytes():
    ram = Ram(b"\x01\x02\x03\x04", base=0x200)
    snap = take_snapshot(ram)
    assert snap.base() == 0x200
    assert snap.size() == 4
    assert [snap.peek(a) for a in range(0x200, 0x204)] == [1, 2, 3, 4]


def test_snapshot_is_independent_of_source():
    ram = Ram(b"\x10\x20")
    snap = take_snapshot(ram)
    ram.poke(0, 0x99)
    assert snap.peek(0) == 0x10
    assert snap.source() is ram


def test_snapshot_is_readonly():
    snap = take_snapshot(Ram(b"\x05"))
    snap.poke(0, 0x77)
    assert snap.peek(0) == 5
    assert snap.readonly() is True


def test_peek_outside_range_returns_zero():
    snap = Snapshot(0x10, 2, b"\xaa\xbb", Ram(b""))
    assert snap.peek(0x0F) == 0
    assert snap.peek(0x12) == 0
    assert snap.peek(0x11) == 0xBB


def test_ids_unique_and_name_format():
    ram = Ram(b"ab")
    first = take_snapshot(ram)
    second = take_snapshot(ram)
    assert first.id() != second.id()
    assert first.id().startswith("snap")
    assert first.name().startswith("Snapshot of RAM created on ")
    assert first.name().endswith("Z")


def test_find_works_on_snapshot():
    snap = take_snapshot(Ram(b"hello"))
    assert snap.find(b"llo") == 2