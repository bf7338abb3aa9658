"""Dual-width index arithmetic.

Every family is enumerated over one of two index representations,
chosen once at construction from the family's exact cardinality:

* **native**: ``numpy.int64`` scalars and read-only ``int64`` tables.
  Only chosen when every value the family's unranking arithmetic can
  produce is provably below ``2**63 - 1``.
* **big**: arbitrary-precision Python integers and tuples of them.

The family algorithms are written once and run unchanged on either
representation; an index type only supplies constants, exact casts,
table construction, overflow-safe halving and index iteration.  The
choice is a tag carried by the range (:class:`Width`), never re-decided
per call.

Width selection
~~~~~~~~~~~~~~~
:func:`resolve_width` consults the policy from :mod:`._config`:

* ``"big"``: always arbitrary precision.
* ``"auto"``: native when ``count * margin`` fits; a
  :class:`~lazy_combinatorics.CapacityExceededError` from the native
  cast falls back to arbitrary precision.
* ``"native"``: like ``"auto"`` but the capacity error propagates.

*margin* bounds the largest intermediate product relative to the
count.  Combination unranking multiplies its running threshold by at
most ``n - 1``, so it passes ``margin=n - 1``; the other families divide
but never multiply past the count and use the default of 1.
"""

from __future__ import annotations

import enum
import logging
import operator
from collections.abc import Iterable, Iterator
from typing import Any

import numpy as np

from ._config import get_width_policy, normalise_policy
from ._errors import CapacityExceededError

logger = logging.getLogger(__name__)

NATIVE_LIMIT = int(np.iinfo(np.int64).max)
"""Largest value representable by the native index type."""


class Width(enum.Enum):
    """Index representation tag carried by every constructed range."""

    NATIVE = "native"
    BIG = "big"


class NativeIndex:
    """Fixed-width signed 64-bit index arithmetic backed by NumPy."""

    width = Width.NATIVE
    zero = np.int64(0)
    one = np.int64(1)

    def cast(self, value: Any) -> np.int64:
        """Exactly convert *value* to ``numpy.int64``.

        Raises:
            CapacityExceededError: If *value* is negative or larger
                than :data:`NATIVE_LIMIT`.
        """
        exact = operator.index(value)
        if exact < 0 or exact > NATIVE_LIMIT:
            raise CapacityExceededError(
                f"{exact} does not fit in a native 64-bit index"
            )
        return np.int64(exact)

    def table(self, values: Iterable[int]) -> np.ndarray:
        """Build a read-only ``int64`` table from exact integer *values*."""
        arr = np.array([self.cast(v) for v in values], dtype=np.int64)
        arr.setflags(write=False)
        return arr

    def midpoint(self, low: np.int64, high: np.int64) -> np.int64:
        # Unsigned add cannot overflow for two non-negative int64 values.
        total = np.uint64(low) + np.uint64(high)
        return np.int64(total >> np.uint64(1))

    def range(self, start: np.int64, stop: np.int64) -> Iterator[np.int64]:
        for i in range(int(start), int(stop)):
            yield np.int64(i)

    def __repr__(self) -> str:
        return "NativeIndex()"


class BigIndex:
    """Arbitrary-precision index arithmetic on Python integers."""

    width = Width.BIG
    zero = 0
    one = 1

    def cast(self, value: Any) -> int:
        return operator.index(value)

    def table(self, values: Iterable[int]) -> tuple[int, ...]:
        return tuple(operator.index(v) for v in values)

    def midpoint(self, low: int, high: int) -> int:
        return (low + high) >> 1

    def range(self, start: int, stop: int) -> Iterator[int]:
        return iter(range(start, stop))

    def __repr__(self) -> str:
        return "BigIndex()"


IndexType = NativeIndex | BigIndex

NATIVE = NativeIndex()
BIG = BigIndex()


def index_type_for(width: Width) -> IndexType:
    """Return the shared index-type instance for *width*."""
    return NATIVE if width is Width.NATIVE else BIG


def resolve_width(
    count: int,
    *,
    margin: int = 1,
    native_allowed: bool = True,
    policy: str | None = None,
    label: str = "family",
) -> IndexType:
    """Pick the index type for a family with exact cardinality *count*.

    Args:
        count: Exact number of elements in the family.
        margin: Multiplier bounding the largest intermediate value of
            the family's unranking arithmetic relative to *count*.
        native_allowed: ``False`` when a family-specific native cap
            (e.g. a maximum length) is exceeded regardless of *count*.
        policy: ``"auto"``, ``"native"`` or ``"big"``; ``None`` uses
            :func:`~lazy_combinatorics.get_width_policy`.
        label: Human-readable family description for messages.

    Returns:
        :data:`NATIVE` or :data:`BIG`.

    Raises:
        CapacityExceededError: If native width was requested explicitly
            but the family does not fit.
        ConfigurationError: If *policy* is not a recognised name.
    """
    policy = get_width_policy() if policy is None else normalise_policy(policy)
    if policy == "big":
        return BIG

    try:
        if not native_allowed:
            raise CapacityExceededError(f"{label} exceeds its native-width cap")
        NATIVE.cast(count * max(margin, 1))
    except CapacityExceededError as exc:
        if policy == "native":
            raise
        logger.debug("%s: falling back to arbitrary precision (%s)", label, exc)
        return BIG
    return NATIVE
