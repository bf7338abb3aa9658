"""Derangements: permutations of ``[0..length-1]`` with no fixed point.

The family has ``D(length)`` members, the subfactorial, with
``D(0) = 1``, ``D(1) = 0`` and ``D(n) = (n−1)·(D(n−1) + D(n−2))``.

Unranking builds the derangement cycle by cycle.  Positions are
processed left to right; at an unassigned position *i* with *r*
positions still open, the rank selects a target *j* among the open
targets other than the one *i* must avoid (``peer`` picks it in blocks
of ``D(r−1) + D(r−2)``), then decides between

* closing a 2-cycle ``i ↔ j``, with ``D(r−2)`` completions, or
* chaining ``i → j`` into a longer cycle, with ``D(r−1)`` completions,
  after which *j*'s position inherits *i*'s forbidden target.

``avoid[p]`` is the target position *p* may not take, ``reverse`` is
its inverse map, and ``taken`` marks assigned targets.

Derangements have **no sequential successor rule** here: every access,
consecutive or not, is a full O(length) unranking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from .._errors import ArithmeticInvariantViolation
from .._width import IndexType
from ._base import IndexedGenerator

DERANGEMENT_NATIVE_MAX_LENGTH = 21
"""Length cap for the native path; the exact count must also fit."""


def subfactorials(length: int) -> list[int]:
    """Return ``[D(0), D(1), …, D(length)]`` exactly."""
    subf = [1]
    if length >= 1:
        subf.append(0)
    for i in range(2, length + 1):
        subf.append((i - 1) * (subf[i - 1] + subf[i - 2]))
    return subf


def derangement_count(length: int) -> int:
    return subfactorials(length)[length]


@dataclass(frozen=True, eq=False)
class DerangementTables:
    """Immutable per-family data shared by every fork.

    Attributes:
        length: Derangement length.
        count: ``D(length)``.
        subfactorial: ``[D(0), …, D(length)]`` in the family's index
            representation (read-only ``int64`` array or tuple).
    """

    length: int
    count: int
    subfactorial: np.ndarray | tuple[int, ...]

    @classmethod
    def build(cls, length: int, index_type: IndexType) -> DerangementTables:
        subf = subfactorials(length)
        return cls(length=length, count=subf[length], subfactorial=index_type.table(subf))


class DerangementGenerator(IndexedGenerator):
    """Generator for :class:`DerangementTables` (unrank-only)."""

    supports_step = False

    def _unrank_values(self, index: Any) -> list[int]:
        length = self._tables.length
        subf = self._tables.subfactorial
        seq = [-1] * length
        avoid = list(range(length))
        reverse = list(range(length))
        taken = [False] * length
        remaining = length
        for i in range(length):
            if seq[i] != -1:
                continue
            peer = 0
            if remaining > 1:
                block = subf[remaining - 1] + subf[remaining - 2]
                peer = int(index // block)
                index -= peer * block
            j = 0
            while j < length and (taken[j] or j == avoid[i] or peer > 0):
                if not taken[j] and j != avoid[i]:
                    peer -= 1
                j += 1
            if j >= length:
                raise ArithmeticInvariantViolation(
                    f"no open target left for position {i} of {length}"
                )
            seq[i] = j
            taken[j] = True
            if index < subf[remaining - 1]:
                avoid[reverse[j]] = avoid[i]
                reverse[avoid[i]] = reverse[j]
                remaining -= 1
            else:
                seq[reverse[j]] = avoid[i]
                taken[avoid[i]] = True
                index -= subf[remaining - 1]
                remaining -= 2
        return seq
