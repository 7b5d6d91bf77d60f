"""Scan memory for values that compare in a given way with a constant or another memory."""

from __future__ import annotations

import operator
from enum import Enum
from typing import Callable, Union

from hackcon.addrset import AddressSet
from hackcon.memory import Memory


class Endianness(Enum):
    LITTLE = "little"
    BIG = "big"


class Operator(Enum):
    LESS_THAN = "<"
    LESS_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_EQUAL = ">="
    EQUAL = "=="
    NOT_EQUAL = "~="


_COMPARE: dict[Operator, Callable[[int, int], bool]] = {
    Operator.LESS_THAN: operator.lt,
    Operator.LESS_EQUAL: operator.le,
    Operator.GREATER_THAN: operator.gt,
    Operator.GREATER_EQUAL: operator.ge,
    Operator.EQUAL: operator.eq,
    Operator.NOT_EQUAL: operator.ne,
}

_VALUE_SIZES = (1, 2, 4, 8)


def _contents(memory: Memory) -> bytes:
    base = memory.base()
    return bytes(memory.peek(address) & 0xFF for address in range(base, base + memory.size()))


def _cast(value: int, value_size: int, signed: bool) -> int:
    bits = value_size * 8
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _values(data: bytes, value_size: int, endianness: Endianness, signed: bool) -> list[int]:
    order = endianness.value
    return [
        int.from_bytes(data[i : i + value_size], order, signed=signed)
        for i in range(len(data) - value_size + 1)
    ]


def _filter(
    memory: Memory,
    other: Union[int, Memory],
    op: Operator,
    endianness: Endianness,
    value_size: int,
    signed: bool,
) -> AddressSet:
    if value_size not in _VALUE_SIZES:
        raise ValueError(f"invalid value size {value_size}")

    compare = _COMPARE[Operator(op)]
    endianness = Endianness(endianness)
    result = AddressSet.empty()
    base = memory.base()

    if memory.size() < value_size:
        return result

    left = _values(_contents(memory), value_size, endianness, signed)

    if isinstance(other, Memory):
        if other.base() != base or other.size() != memory.size():
            raise ValueError("memories must have the same base and size")
        right = _values(_contents(other), value_size, endianness, signed)
        pairs = zip(left, right)
    else:
        constant = _cast(int(other), value_size, signed)
        pairs = ((value, constant) for value in left)

    for offset, (a, b) in enumerate(pairs):
        if compare(a, b):
            result.add(base + offset)

    return result


def filter_signed(
    memory: Memory,
    other: Union[int, Memory],
    op: Operator,
    endianness: Endianness,
    value_size: int,
) -> AddressSet:
    """Addresses where the signed value in ``memory`` satisfies ``op`` against ``other``."""
    return _filter(memory, other, op, endianness, value_size, True)


def filter_unsigned(
    memory: Memory,
    other: Union[int, Memory],
    op: Operator,
    endianness: Endianness,
    value_size: int,
) -> AddressSet:
    """Addresses where the unsigned value in ``memory`` satisfies ``op`` against ``other``."""
    return _filter(memory, other, op, endianness, value_size, False)