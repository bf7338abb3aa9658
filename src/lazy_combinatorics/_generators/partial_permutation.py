"""Partial permutations: length-*n* sequences with holes.

A partial permutation places *s* distinct values from ``[0..n-1]`` into
*s* of the *n* slots and leaves the other slots empty (:data:`HOLE`,
``-1``).  Counting the value set, the arrangement and the slots::

    count(n) = Σ_{s=0}^{n} s!·C(n,s)²

Order
-----
1. by the number of occupied slots *s*, ascending;
2. within *s*, by the sorted value set, in combination order;
3. within a value set, lexicographically over the arrangement of the
   multiset ``{HOLE × (n−s)} ∪ values``; the hole is the smallest
   symbol.

Unranking
---------
The index first walks the bucket sizes ``s!·C(n,s)²`` to find *s*.  The
remainder splits into a value-set rank and an arrangement rank, with
``n!/(n−s)!`` arrangements per value set.  The value set is unranked
with UNRANKCOMB-D; the arrangement is decoded as a multiset rank: with
*L* slots left, *h* holes and ``T = L!/h!`` arrangements remaining,

* a leading hole accounts for ``T·h/L`` arrangements,
* each remaining value accounts for ``T/L``,

both exact integer divisions.

Sequential access steps the arrangement with next-permutation over the
multiset; when it is exhausted (values descending, holes last) the
value set advances to the next combination, and after the last value
set of size *s* the first value set of size *s+1* is seeded.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np

from .._errors import ArithmeticInvariantViolation
from .._width import IndexType, Width
from ._base import IndexedGenerator
from .combination import next_combination, unrank_combination

HOLE = -1
"""Marker for an empty slot."""

PARTIAL_PERMUTATION_NATIVE_MAX_LENGTH = 18
"""Length cap for the native path."""

PARTIAL_PERMUTATION_MAX_LENGTH = 10_000
"""Largest supported length under arbitrary precision."""


def _iter_buckets(length: int) -> Iterator[tuple[int, int, int]]:
    """Yield ``(s, C(n, s), n!/(n-s)!)`` for ``s = 0 … n``."""
    combos = 1
    arrangements = 1
    for size in range(length + 1):
        yield size, combos, arrangements
        combos = combos * (length - size) // (size + 1)
        arrangements *= length - size


def partial_permutation_count(length: int) -> int:
    """Return ``Σ s!·C(n,s)²`` exactly."""
    return sum(combos * arrangements for _, combos, arrangements in _iter_buckets(length))


@dataclass(frozen=True, eq=False)
class PartialPermutationTables:
    """Immutable per-family data shared by every fork.

    Attributes:
        length: Sequence length *n*.
        count: Exact family size.
        combos: Native width only, ``C(n, s)`` for every *s*.
        arrangements: Native width only, ``n!/(n−s)!`` for every *s*.
    """

    length: int
    count: int
    combos: np.ndarray | None = None
    arrangements: np.ndarray | None = None

    @classmethod
    def build(cls, length: int, index_type: IndexType) -> PartialPermutationTables:
        count = partial_permutation_count(length)
        if index_type.width is not Width.NATIVE:
            return cls(length=length, count=count)
        buckets = list(_iter_buckets(length))
        return cls(
            length=length,
            count=count,
            combos=index_type.table(c for _, c, _ in buckets),
            arrangements=index_type.table(a for _, _, a in buckets),
        )

    def iter_buckets(self) -> Iterator[tuple[int, Any, Any]]:
        if self.combos is None:
            return _iter_buckets(self.length)
        return zip(range(self.length + 1), self.combos, self.arrangements)


def initial_arrangement(values: list[int], length: int) -> list[int]:
    """Smallest arrangement of *values*: all holes first, then values ascending."""
    return [HOLE] * (length - len(values)) + list(values)


def next_arrangement(seq: list[int]) -> bool:
    """Advance *seq* in place to the next multiset permutation.

    Returns:
        ``False`` if *seq* was already the largest arrangement.
    """
    pos = len(seq) - 1
    while pos > 0 and seq[pos - 1] >= seq[pos]:
        pos -= 1
    if pos <= 0:
        return False
    pivot = pos - 1
    swap = len(seq) - 1
    while seq[swap] <= seq[pivot]:
        swap -= 1
    seq[pivot], seq[swap] = seq[swap], seq[pivot]
    seq[pos:] = seq[pos:][::-1]
    return True


class PartialPermutationGenerator(IndexedGenerator):
    """Generator for :class:`PartialPermutationTables`."""

    def _unrank_values(self, index: Any) -> list[int]:
        length = self._tables.length
        rank = index
        for size, combos, arrangements in self._tables.iter_buckets():
            bucket = combos * arrangements
            if rank < bucket:
                break
            rank -= bucket
        else:
            raise ArithmeticInvariantViolation(
                f"index {index} exceeds every subset-size bucket of length {length}"
            )

        combination_rank, arrangement_rank = divmod(rank, arrangements)
        values = unrank_combination(length, size, combos, combination_rank)
        return self._decode_arrangement(values, arrangement_rank, arrangements)

    def _decode_arrangement(self, values: list[int], rank: Any, total: Any) -> list[int]:
        length = self._tables.length
        holes = length - len(values)
        seq = []
        for slots in range(length, 0, -1):
            if holes > 0:
                hole_block = total * holes // slots
                if rank < hole_block:
                    seq.append(HOLE)
                    holes -= 1
                    total = hole_block
                    continue
                rank -= hole_block
            value_block = total // slots
            pick, rank = divmod(rank, value_block)
            pick = int(pick)
            if pick >= len(values):
                raise ArithmeticInvariantViolation(
                    f"arrangement digit {pick} out of range for {len(values)} values"
                )
            seq.append(values.pop(pick))
            total = value_block
        return seq

    def step(self) -> None:
        seq = self._buffer
        length = self._tables.length
        if next_arrangement(seq):
            return
        # Exhausted arrangements read as values descending, then holes.
        values = sorted(v for v in seq if v != HOLE)
        if next_combination(values, length):
            seq[:] = initial_arrangement(values, length)
        elif len(values) < length:
            seq[:] = initial_arrangement(list(range(len(values) + 1)), length)
