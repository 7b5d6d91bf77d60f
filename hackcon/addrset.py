"""Sets of addresses that may be stored as the complement of a finite set."""

from __future__ import annotations

from bisect import bisect_left, insort
from collections.abc import Iterable, Iterator


class AddressSet:
    """A sorted set of addresses, optionally complemented.

    When ``complemented`` is true the set holds every address except the
    stored elements, which lets the universal set be represented without
    knowing the size of the address space.
    """

    __slots__ = ("_elements", "_complemented")

    def __init__(self, elements: Iterable[int] = (), complemented: bool = False) -> None:
        self._elements: list[int] = sorted(set(elements))
        self._complemented = complemented

    @classmethod
    def empty(cls) -> AddressSet:
        return cls()

    @classmethod
    def universal(cls) -> AddressSet:
        return cls(complemented=True)

    @property
    def complemented(self) -> bool:
        return self._complemented

    def add(self, element: int) -> None:
        """Store ``element``; in a complemented set this excludes it."""
        index = bisect_left(self._elements, element)
        if index == len(self._elements) or self._elements[index] != element:
            insort(self._elements, element)

    def _stored(self, element: int) -> bool:
        index = bisect_left(self._elements, element)
        return index < len(self._elements) and self._elements[index] == element

    def contains(self, element: int) -> bool:
        return self._stored(element) != self._complemented

    def size_in(self, universal_size: int) -> int:
        """Number of members when the universe has ``universal_size`` addresses."""
        if self._complemented:
            return universal_size - len(self._elements)
        return len(self._elements)

    @classmethod
    def _make(cls, elements: set[int], complemented: bool) -> AddressSet:
        return cls(elements, complemented)

    def union(self, other: AddressSet) -> AddressSet:
        a, b = set(self._elements), set(other._elements)

        if not self._complemented and not other._complemented:
            return self._make(a | b, False)
        if not self._complemented and other._complemented:
            # A + ~B = ~(B - A)
            return self._make(b - a, True)
        if self._complemented and not other._complemented:
            # ~A + B = ~(A - B)
            return self._make(a - b, True)
        # ~A + ~B = ~(A * B)
        return self._make(a & b, True)

    def intersection(self, other: AddressSet) -> AddressSet:
        a, b = set(self._elements), set(other._elements)

        if not self._complemented and not other._complemented:
            return self._make(a & b, False)
        if not self._complemented and other._complemented:
            # A * ~B = A - B
            return self._make(a - b, False)
        if self._complemented and not other._complemented:
            # ~A * B = B - A
            return self._make(b - a, False)
        # ~A * ~B = ~(A + B)
        return self._make(a | b, True)

    def difference(self, other: AddressSet) -> AddressSet:
        a, b = set(self._elements), set(other._elements)

        if not self._complemented and not other._complemented:
            return self._make(a - b, False)
        if not self._complemented and other._complemented:
            # A - ~B = A * B
            return self._make(a & b, False)
        if self._complemented and not other._complemented:
            # ~A - B = ~(A + B)
            return self._make(a | b, True)
        # ~A - ~B = B - A
        return self._make(b - a, False)

    def complement(self) -> AddressSet:
        return self._make(set(self._elements), not self._complemented)

    def __contains__(self, element: object) -> bool:
        return isinstance(element, int) and self.contains(element)

    def __len__(self) -> int:
        """Number of stored elements, regardless of complementation."""
        return len(self._elements)

    def __iter__(self) -> Iterator[int]:
        """Iterate over the stored elements in ascending order."""
        return iter(list(self._elements))

    def __or__(self, other: AddressSet) -> AddressSet:
        return self.union(other)

    def __and__(self, other: AddressSet) -> AddressSet:
        return self.intersection(other)

    def __sub__(self, other: AddressSet) -> AddressSet:
        return self.difference(other)

    def __invert__(self) -> AddressSet:
        return self.complement()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressSet):
            return NotImplemented
        return self._complemented == other._complemented and self._elements == other._elements

    def __hash__(self) -> int:
        return hash((self._complemented, tuple(self._elements)))

    def __repr__(self) -> str:
        prefix = "~" if self._complemented else ""
        return f"{prefix}AddressSet({self._elements!r})"