"""Power set of ``[0, 1, …, length-1]``.

Index *i* maps to the subset of bit positions set in *i*, listed in
increasing order: ``0 → []``, ``1 → [0]``, ``2 → [1]``, ``3 → [0, 1]``.
Elements therefore vary in size; the family still has exactly
``2**length`` members.

Sequential access keeps a private binary counter (one flag per
element, element 0 least significant) and re-expresses it as the sorted
list of set positions after each increment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .._width import IndexType
from ._base import IndexedGenerator

POWER_SET_NATIVE_MAX_LENGTH = 63
"""Exclusive bound on native lengths: ``2**62`` is the largest native count."""

POWER_SET_MAX_LENGTH = 512
"""Exclusive bound on lengths under arbitrary precision."""


def power_set_count(length: int) -> int:
    return 1 << length


@dataclass(frozen=True)
class PowerSetTables:
    length: int
    count: int

    @classmethod
    def build(cls, length: int, index_type: IndexType) -> PowerSetTables:
        return cls(length=length, count=power_set_count(length))


class PowerSetGenerator(IndexedGenerator):
    """Generator for :class:`PowerSetTables`."""

    def __init__(self, tables: PowerSetTables, index_type: IndexType) -> None:
        self._bits = [0] * tables.length
        super().__init__(tables, index_type)

    def _unrank_values(self, index: Any) -> list[int]:
        members = []
        dividend = index
        element = 0
        while dividend != 0:
            if dividend & 1:
                members.append(element)
            dividend >>= 1
            element += 1
        return members

    def get(self, index: Any) -> Any:
        consecutive = self._last_index is not None and index == self._last_index + 1
        element = super().get(index)
        if not consecutive:
            self._sync_bits()
        return element

    def step(self) -> None:
        bits = self._bits
        pos = 0
        while pos < len(bits) and bits[pos] == 1:
            bits[pos] = 0
            pos += 1
        if pos == len(bits):
            # Last subset; restore the counter and leave the state as is.
            bits[:] = [1] * len(bits)
            return
        bits[pos] = 1
        self._buffer = [i for i, bit in enumerate(bits) if bit]

    def fork(self) -> PowerSetGenerator:
        clone = super().fork()
        clone._bits = list(self._bits)
        return clone

    def _sync_bits(self) -> None:
        self._bits = [0] * self._tables.length
        for member in self._buffer:
            self._bits[member] = 1
