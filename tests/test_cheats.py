import pytest

from hackcon.cheats import FilterSettings, filter_memory, parse_operator, parse_settings
from hackcon.filter import Endianness, Operator, filter_signed, filter_unsigned
from hackcon.memory import Memory
from hackcon.snapshot import take_snapshot


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
            self._data[offset] = value & 0xFF


@pytest.mark.parametrize(
    "text, expected",
    [
        ("ub", FilterSettings(False, 1, Endianness.LITTLE)),
        ("sb", FilterSettings(True, 1, Endianness.LITTLE)),
        ("uwl", FilterSettings(False, 2, Endianness.LITTLE)),
        ("sdb", FilterSettings(True, 4, Endianness.BIG)),
        ("uql", FilterSettings(False, 8, Endianness.LITTLE)),
    ],
)
def test_parse_settings_valid(text, expected):
    assert parse_settings(text) == expected


@pytest.mark.parametrize(
    "text, message",
    [
        ("xb", "invalid signedness"),
        ("", "invalid signedness"),
        ("uz", "invalid operand size"),
        ("u", "invalid operand size"),
        ("uw", "invalid endianess"),
        ("uwx", "invalid endianess"),
        ("ubx", "invalid settings string"),
        ("uwlx", "invalid settings string"),
    ],
)
def test_parse_settings_errors(text, message):
    with pytest.raises(ValueError, match=message):
        parse_settings(text)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("<", Operator.LESS_THAN),
        ("<=", Operator.LESS_EQUAL),
        (">", Operator.GREATER_THAN),
        (">=", Operator.GREATER_EQUAL),
        ("==", Operator.EQUAL),
        ("~=", Operator.NOT_EQUAL),
    ],
)
def test_parse_operator(text, expected):
    assert parse_operator(text) is expected


@pytest.mark.parametrize("text", ["", "=", "!=", "<>", "x"])
def test_parse_operator_unknown(text):
    with pytest.raises(ValueError, match="unknown operator"):
        parse_operator(text)


def test_filter_memory_equal_constant():
    ram = Ram([1, 5, 3, 5, 0], base=0x100)
    result = filter_memory(ram, "==", 5, "ub")
    assert list(result) == [0x101, 0x103]


def test_filter_memory_matches_filter_unsigned():
    ram = Ram([0x10, 0x00, 0x20, 0x00, 0x10, 0x00])
    expected = filter_unsigned(ram, 0x10, Operator.GREATER_EQUAL, Endianness.LITTLE, 2)
    assert filter_memory(ram, ">=", 0x10, "uwl") == expected


def test_filter_memory_signedness_matters():
    ram = Ram([0xFF, 0x01])
    signed = filter_memory(ram, "<", 0, "sb")
    unsigned = filter_memory(ram, "<", 0, "ub")
    assert list(signed) == [0]
    assert list(unsigned) == []
    assert signed == filter_signed(ram, 0, Operator.LESS_THAN, Endianness.LITTLE, 1)


def test_filter_memory_against_snapshot_finds_changes():
    ram = Ram([1, 2, 3, 4])
    snapshot = take_snapshot(ram)
    ram.poke(2, 9)
    changed = filter_memory(ram, "~=", snapshot, "ub")
    assert list(changed) == [2]


def test_filter_memory_accepts_parsed_objects():
    ram = Ram([7, 7, 1])
    by_text = filter_memory(ram, "==", 7, "ub")
    by_objects = filter_memory(ram, Operator.EQUAL, 7, FilterSettings(False, 1))
    assert by_text == by_objects


def test_filter_memory_bad_settings_raise():
    with pytest.raises(ValueError, match="invalid operand size"):
        filter_memory(Ram([0]), "==", 0, "ux")