"""Splittable index ranges: the enumeration engine.

An :class:`IndexRange` owns a window ``[origin, fence)`` over the
indices of a family, a cursor, a bound generator and an optional
shuffler.  It is generic over the index representation (see
:mod:`._width`) and over the generator (anything satisfying
:class:`~lazy_combinatorics._generators.ElementGenerator`).

Consumption contract::

    ┌──────────────────────────────────────────────────────────┐
    │  rng = permutations(12)             # [0, 12!)           │
    │  rng.install_shuffler(seed=7)       # optional           │
    │                                                          │
    │  left = rng.split()                 # left  = [0, mid)   │
    │                                     # rng   = [mid, 12!) │
    │  ├─ worker A: left.drain_all(visit)                      │
    │  └─ worker B: while (e := rng.advance_one()) is not None │
    └──────────────────────────────────────────────────────────┘

Each pull maps the cursor through the shuffler (identity when none is
installed) and asks the generator for the element at the resulting
index.  Consecutive indices let family generators step their previous
element instead of unranking from scratch.

Splitting
~~~~~~~~~
``split()`` halves the remaining window at ``mid = (cursor + fence) / 2``
(an unsigned shift for native width), hands ``[cursor, mid)`` to a new
range carrying a **forked** generator and the same shuffler, and keeps
``[mid, fence)``.  Afterwards the two ranges share only immutable
tables, so each may be driven by a different worker.  Draining the
left part then the right part reproduces the unsplit order exactly.

A single range must not be pulled from two threads at once; that is the
caller's obligation and is not enforced here.
"""

from __future__ import annotations

import operator
import warnings
from collections.abc import Callable, Iterator
from typing import Any

from ._errors import ConfigurationError
from ._generators import ElementGenerator
from ._width import BIG, NATIVE_LIMIT, IndexType, Width
from .shuffler import IndexShuffler

Shuffler = Callable[[int], int]


class IndexRange:
    """Lazily enumerated window ``[origin, fence)`` of a family.

    Args:
        origin: First index of the window.
        fence: One past the last index of the window.
        generator: Maps indices to elements; forked on :meth:`split`.
        index_type: Index representation; arbitrary precision when
            omitted.
        shuffler: Optional bijection ``int -> int`` on ``[0, fence)``.

    Raises:
        ConfigurationError: If ``origin < 0`` or ``fence < origin``.
        CapacityExceededError: If the bounds do not fit *index_type*.
    """

    def __init__(
        self,
        origin: Any,
        fence: Any,
        generator: ElementGenerator,
        index_type: IndexType | None = None,
        *,
        shuffler: Shuffler | None = None,
    ) -> None:
        self._index_type: IndexType = index_type if index_type is not None else BIG
        if origin < 0 or fence < origin:
            raise ConfigurationError(f"Invalid range: origin={origin}, fence={fence}")
        self._origin = self._index_type.cast(origin)
        self._cursor = self._origin
        self._fence = self._index_type.cast(fence)
        self._generator = generator
        self._shuffler = shuffler

    # ---- Introspection --------------------------------------------

    @property
    def origin(self) -> int:
        return int(self._origin)

    @property
    def cursor(self) -> int:
        return int(self._cursor)

    @property
    def fence(self) -> int:
        return int(self._fence)

    @property
    def width(self) -> Width:
        """Index representation chosen at construction."""
        return self._index_type.width

    @property
    def generator(self) -> ElementGenerator:
        return self._generator

    @property
    def shuffler(self) -> Shuffler | None:
        return self._shuffler

    def count(self) -> int:
        """Exact size of the window, ``fence - origin``."""
        return int(self._fence) - int(self._origin)

    def native_count(self) -> int:
        """Size of the window, or ``-1`` if it does not fit in a signed 64-bit integer."""
        count = self.count()
        return count if count <= NATIVE_LIMIT else -1

    def remaining(self) -> int:
        """Number of elements not yet pulled, ``fence - cursor``."""
        return int(self._fence) - int(self._cursor)

    # ---- Configuration --------------------------------------------

    def install_shuffler(self, seed: Any = None) -> IndexRange:
        """Visit indices in a scattered order.

        Builds an :class:`~lazy_combinatorics.shuffler.IndexShuffler`
        over ``[0, fence)``.  Call before pulling or splitting; ranges
        split off later inherit the same shuffler.  Installing it on a
        range whose cursor is past zero emits a :class:`UserWarning`,
        since the remaining positions then no longer map onto a
        contiguous block of the family.

        Args:
            seed: Seed for the shuffler tables; identical seeds give
                identical visiting orders.

        Returns:
            This range.
        """
        if self._cursor != 0:
            warnings.warn(
                f"install_shuffler() on a range at cursor {self.cursor}: "
                f"positions [{self.cursor}, {self.fence}) are scattered over "
                f"all {self.fence} indices, not just the unvisited ones.",
                UserWarning,
                stacklevel=2,
            )
        self._shuffler = IndexShuffler(int(self._fence), seed)
        return self

    def with_shuffler(self, shuffler: Shuffler | None) -> IndexRange:
        """Install a custom bijection on ``[0, fence)`` (``None`` for identity)."""
        self._shuffler = shuffler
        return self

    def skip(self, n: int) -> IndexRange:
        """Advance the cursor by *n*, clamped to the fence.

        Raises:
            ValueError: If *n* is negative.
        """
        n = operator.index(n)
        if n < 0:
            raise ValueError(f"skip({n}): n must be non-negative")
        if n >= self.remaining():
            self._cursor = self._fence
        else:
            self._cursor = self._index_type.cast(int(self._cursor) + n)
        return self

    # ---- Consumption ----------------------------------------------

    def advance_one(self) -> Any | None:
        """Return the next element, or ``None`` once the range is exhausted."""
        if self._cursor >= self._fence:
            return None
        element = self._generator.get(self._map(self._cursor))
        self._cursor = self._cursor + self._index_type.one
        return element

    def drain_all(self, visit: Callable[[Any], Any]) -> None:
        """Call *visit* on every remaining element in order, then exhaust the range.

        The cursor moves past each element before *visit* sees it, so if
        *visit* raises, the range resumes after the failing element.
        """
        generator = self._generator
        one = self._index_type.one
        for position in self._index_type.range(self._cursor, self._fence):
            element = generator.get(self._map(position))
            self._cursor = position + one
            visit(element)
        self._cursor = self._fence

    def split(self) -> IndexRange | None:
        """Split off the first half of the remaining window.

        Returns:
            A new range over ``[cursor, mid)`` with a forked generator
            and the same shuffler (this range keeps ``[mid, fence)``),
            or ``None`` when at most one element remains.
        """
        mid = self._index_type.midpoint(self._cursor, self._fence)
        if self._cursor >= mid:
            return None
        prefix = IndexRange(
            self._cursor,
            mid,
            self._generator.fork(),
            self._index_type,
            shuffler=self._shuffler,
        )
        self._origin = mid
        self._cursor = mid
        return prefix

    def __iter__(self) -> Iterator[Any]:
        while (element := self.advance_one()) is not None:
            yield element

    # ---- Internals ------------------------------------------------

    def _map(self, position: Any) -> Any:
        if self._shuffler is None:
            return position
        return self._index_type.cast(self._shuffler(int(position)))

    def __repr__(self) -> str:
        return (
            f"IndexRange(origin={self.origin}, cursor={self.cursor}, "
            f"fence={self.fence}, width={self.width.value}, "
            f"generator={self._generator!r})"
        )
