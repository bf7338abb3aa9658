"""Permutations of ``[0, 1, …, length-1]`` in lexicographic order.

Unranking uses the factorial number system (Lehmer code)
------------------------------------------------------------
Every permutation of ``[0..n-1]`` has a unique rank, its position in
the lexicographic enumeration of all n! orderings.  The factoradic
representation decomposes that rank into digits d₁, d₂, …, dₙ₋₁ where
the i-th digit is expressed in base (n−i)!:

    k = d₁·(n−1)! + d₂·(n−2)! + ··· + dₙ₋₁·1!

Starting from the identity, digit dᵢ moves the element dᵢ places to
the right of position i into position i, shifting the elements in
between one place to the right.

Example for n=3, k=4:
    divisors [2!, 1!] → digits [2, 0]
    [0,1,2] → move offset 2 to front → [2,0,1] → digit 0 → [2,0,1]

Sequential access uses the classic next-permutation rule: find the
longest non-increasing suffix, swap its left neighbour with the
rightmost larger element, reverse the suffix.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np

from .._errors import ArithmeticInvariantViolation
from .._width import IndexType, Width
from ._base import IndexedGenerator

PERMUTATION_NATIVE_MAX_LENGTH = 20
"""Largest length whose factorial fits the native index type."""

PERMUTATION_MAX_LENGTH = 20_000
"""Largest supported length under arbitrary precision."""


def permutation_count(length: int) -> int:
    """Return ``length!`` exactly."""
    return math.factorial(length)


@dataclass(frozen=True, eq=False)
class PermutationTables:
    """Immutable per-family data shared by every fork.

    Attributes:
        length: Permutation length.
        count: ``length!``.
        divisors: Native width only; a read-only ``int64`` array
            ``[(length-1)!, …, 1!]``.  Under arbitrary precision the
            divisors are derived from *count* on the fly instead of
            holding ``length`` huge factorials in memory.
    """

    length: int
    count: int
    divisors: np.ndarray | None = None

    @classmethod
    def build(cls, length: int, index_type: IndexType) -> PermutationTables:
        count = permutation_count(length)
        divisors = None
        if index_type.width is Width.NATIVE:
            divisors = index_type.table(
                math.factorial(i) for i in range(length - 1, 0, -1)
            )
        return cls(length=length, count=count, divisors=divisors)

    def iter_divisors(self) -> Iterator[Any]:
        if self.divisors is not None:
            return iter(self.divisors)
        return _derive_divisors(self.length, self.count)


def _derive_divisors(length: int, count: int) -> Iterator[int]:
    if length < 2:
        return
    divisor = count // length
    for remaining in range(length - 1, 0, -1):
        yield divisor
        divisor //= remaining


class PermutationGenerator(IndexedGenerator):
    """Generator for :class:`PermutationTables`."""

    def _unrank_values(self, index: Any) -> list[int]:
        length = self._tables.length
        perm = list(range(length))
        dividend = index
        for step, divisor in enumerate(self._tables.iter_divisors()):
            digit, dividend = divmod(dividend, divisor)
            offset = int(digit)
            if offset > 0:
                if step + offset >= length:
                    raise ArithmeticInvariantViolation(
                        f"Lehmer digit {offset} out of range at position {step}"
                    )
                perm.insert(step, perm.pop(step + offset))
        return perm

    def step(self) -> None:
        perm = self._buffer
        length = len(perm)
        pos = length - 1
        while pos > 0 and perm[pos] <= perm[pos - 1]:
            pos -= 1
        if pos == 0:
            return
        pivot = pos - 1
        swap = length - 1
        while swap > pivot and perm[swap] < perm[pivot]:
            swap -= 1
        perm[pivot], perm[swap] = perm[swap], perm[pivot]
        perm[pos:] = perm[pos:][::-1]
