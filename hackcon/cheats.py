"""Parse cheat-search settings and run memory filters from text descriptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from hackcon.addrset import AddressSet
from hackcon.filter import Endianness, Operator, filter_signed, filter_unsigned
from hackcon.memory import Memory

_SIGNEDNESS = {"s": True, "u": False}
_SIZES = {"b": 1, "w": 2, "d": 4, "q": 8}
_ENDIANNESS = {"l": Endianness.LITTLE, "b": Endianness.BIG}


@dataclass(frozen=True)
class FilterSettings:
    """How the values compared by a filter are read from memory."""

    signed: bool
    value_size: int
    endianness: Endianness = Endianness.LITTLE


def _char(text: str, index: int) -> str:
    return text[index] if index < len(text) else "\0"


def parse_settings(settings: str) -> FilterSettings:
    """Parse strings such as ``"ub"``, ``"swl"`` or ``"uqb"``.

    The first letter is the signedness (``s`` or ``u``), the second the value
    size (``b``, ``w``, ``d``, ``q``) and, for sizes above one byte, the third
    the endianness (``l`` or ``b``).
    """
    sign = _char(settings, 0)
    if sign not in _SIGNEDNESS:
        raise ValueError(f"invalid signedness '{sign}'")

    size_char = _char(settings, 1)
    if size_char not in _SIZES:
        raise ValueError(f"invalid operand size '{size_char}'")

    value_size = _SIZES[size_char]
    endianness = Endianness.LITTLE

    if value_size != 1:
        order = _char(settings, 2)
        if order not in _ENDIANNESS:
            raise ValueError(f"invalid endianess '{order}'")
        endianness = _ENDIANNESS[order]

    expected_length = 2 if value_size == 1 else 3
    if len(settings) != expected_length:
        raise ValueError(f'invalid settings string "{settings}"')

    return FilterSettings(_SIGNEDNESS[sign], value_size, endianness)


def parse_operator(text: str) -> Operator:
    """Map ``<``, ``<=``, ``>``, ``>=``, ``==`` or ``~=`` to an operator.

    Only the first two characters are examined.
    """
    try:
        return Operator(text[:2])
    except ValueError:
        raise ValueError(f"unknown operator {text}") from None


def filter_memory(
    memory: Memory,
    op: Union[str, Operator],
    other: Union[int, Memory],
    settings: Union[str, FilterSettings],
) -> AddressSet:
    """Return the addresses of ``memory`` whose values satisfy ``op`` against ``other``."""
    parsed = settings if isinstance(settings, FilterSettings) else parse_settings(settings)
    operator = op if isinstance(op, Operator) else parse_operator(op)

    if not isinstance(other, Memory):
        other = int(other)

    run = filter_signed if parsed.signed else filter_unsigned
    return run(memory, other, operator, parsed.endianness, parsed.value_size)