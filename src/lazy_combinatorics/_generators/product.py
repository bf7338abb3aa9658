"""Cartesian products ``[0, d₀) × [0, d₁) × … × [0, dₘ₋₁)``.

Elements are mixed-radix digit vectors.  The last dimension varies
fastest, so the enumeration is lexicographic; unranking peels digits
off the index from the last dimension to the first, and sequential
access is an odometer increment with carry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .._width import IndexType
from ._base import IndexedGenerator


def cartesian_product_count(dimensions: tuple[int, ...]) -> int:
    """Return ``Π dimensions`` exactly (1 for no dimensions)."""
    return math.prod(dimensions)


@dataclass(frozen=True)
class CartesianProductTables:
    dimensions: tuple[int, ...]
    count: int

    @classmethod
    def build(
        cls, dimensions: tuple[int, ...], index_type: IndexType
    ) -> CartesianProductTables:
        return cls(dimensions=dimensions, count=cartesian_product_count(dimensions))


class CartesianProductGenerator(IndexedGenerator):
    """Generator for :class:`CartesianProductTables`."""

    def _unrank_values(self, index: Any) -> list[int]:
        dims = self._tables.dimensions
        digits = [0] * len(dims)
        dividend = index
        for pos in range(len(dims) - 1, -1, -1):
            dividend, digit = divmod(dividend, dims[pos])
            digits[pos] = int(digit)
        return digits

    def step(self) -> None:
        digits = self._buffer
        dims = self._tables.dimensions
        pos = len(dims) - 1
        while pos >= 0 and digits[pos] >= dims[pos] - 1:
            pos -= 1
        if pos < 0:
            return
        digits[pos] += 1
        for i in range(pos + 1, len(dims)):
            digits[i] = 0
