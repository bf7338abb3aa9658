"""k-combinations of ``[0, 1, …, n-1]`` in lexicographic order.

Each element is a strictly increasing array of length *k*.

Unranking: UNRANKCOMB-D
-----------------------
Kokosinski (1995), "Algorithms for unranking combinations and other
related choice functions".  Instead of evaluating a binomial
coefficient per candidate value, the algorithm carries a single
running threshold ``e``, the number of combinations that start with
the candidate currently under consideration, and rescales it with an
exact integer recurrence at every step:

* emit the candidate  → ``e ← e·m / p``
* skip the candidate  → ``e ← e·(p−m) / p``

so unranking costs O(n) exact integer operations and no floating point.
The rank is walked in reverse (``count − 1 − index``) because the
recurrence naturally enumerates co-lexicographic complements.

The largest intermediate value is ``e·(n−1) ≤ count·(n−1)``; the native
path is only chosen when that product fits in 64 bits.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .._width import IndexType
from ._base import IndexedGenerator

COMBINATION_MAX_N = 50_000
"""Largest supported set size *n*."""


def combination_count(n: int, k: int) -> int:
    """Return ``C(n, k)`` exactly."""
    return math.comb(n, k)


def unrank_combination(n: int, k: int, count: Any, index: Any) -> list[int]:
    """Return the combination of rank *index* among the ``C(n, k)`` = *count*.

    *count* and *index* may be native ``int64`` scalars or Python
    integers; they must share a representation.
    """
    if k == 0:
        return []
    combi = [0] * k
    rank = count - 1 - index
    e = (n - k) * count // n
    t = n - k + 1
    m = k
    p = n - 1
    while m > 0:
        if e <= rank:
            combi[k - m] = n - t - m + 1
            if e > 0:
                rank -= e
                e = m * e // p
            m -= 1
            p -= 1
        else:
            e = (p - m) * e // p
            t -= 1
            p -= 1
    return combi


def next_combination(combi: list[int], n: int) -> bool:
    """Advance *combi* in place to its lexicographic successor.

    Returns:
        ``False`` (leaving *combi* untouched) if it was the last
        combination.
    """
    k = len(combi)
    pos = k - 1
    while pos >= 0 and combi[pos] >= n - k + pos:
        pos -= 1
    if pos < 0:
        return False
    val = combi[pos]
    for i in range(pos, k):
        val += 1
        combi[i] = val
    return True


@dataclass(frozen=True)
class CombinationTables:
    """Immutable per-family data shared by every fork.

    ``typed_count`` is *count* in the family's index representation,
    which is what UNRANKCOMB-D computes with.
    """

    n: int
    k: int
    count: int
    typed_count: Any

    @classmethod
    def build(cls, n: int, k: int, index_type: IndexType) -> CombinationTables:
        count = combination_count(n, k)
        return cls(n=n, k=k, count=count, typed_count=index_type.cast(count))


class CombinationGenerator(IndexedGenerator):
    """Generator for :class:`CombinationTables`."""

    def _unrank_values(self, index: Any) -> list[int]:
        t = self._tables
        return unrank_combination(t.n, t.k, t.typed_count, index)

    def step(self) -> None:
        next_combination(self._buffer, self._tables.n)
