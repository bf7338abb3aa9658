"""Generator protocol, shared base class and the identity generator."""

from __future__ import annotations

import copy
from typing import Any, Protocol, runtime_checkable

import numpy as np

from .._width import IndexType

# ------------------------------------------------------------------ #
# Protocol
# ------------------------------------------------------------------ #


@runtime_checkable
class ElementGenerator(Protocol):
    """Interface the range engine requires from a generator."""

    def get(self, index: Any) -> Any:
        """Return the element at *index* (never an alias of internal state)."""
        ...

    def fork(self) -> ElementGenerator:
        """Return a generator that shares no mutable state with this one."""
        ...


def as_element(values: list[int]) -> np.ndarray:
    """Copy a working buffer into a standalone element array."""
    return np.array(values, dtype=np.intp)


# ------------------------------------------------------------------ #
# Shared base class
# ------------------------------------------------------------------ #


class IndexedGenerator:
    """Stateful generator over a family with exact cardinality ``tables.count``.

    Subclasses implement :meth:`_unrank_values`, returning the element
    at a (validated, width-typed) index as a plain list, and usually
    :meth:`step`.  Families without a cheap successor rule set
    ``supports_step = False`` and every access unranks.

    Attributes:
        supports_step: Whether :meth:`get` may use :meth:`step` for
            consecutive indices.
    """

    supports_step: bool = True

    def __init__(self, tables: Any, index_type: IndexType) -> None:
        self._tables = tables
        self._index_type = index_type
        self._count = index_type.cast(tables.count)
        self._last_index: Any = None
        self._buffer: list[int] = (
            self._unrank_values(index_type.zero) if tables.count > 0 else []
        )

    @property
    def tables(self) -> Any:
        """The immutable precomputed tables shared by every fork."""
        return self._tables

    @property
    def index_type(self) -> IndexType:
        return self._index_type

    @property
    def count(self) -> int:
        """Exact number of elements in the family."""
        return self._tables.count

    @property
    def last_index(self) -> Any:
        """Index of the element last served by :meth:`get`, or ``None``."""
        return self._last_index

    def current(self) -> np.ndarray:
        """Return a copy of the current element."""
        return as_element(self._buffer)

    def step(self) -> None:
        """Advance the working buffer to its successor in place."""
        raise NotImplementedError(
            f"{type(self).__name__} has no sequential successor rule"
        )

    def unrank(self, index: Any) -> np.ndarray:
        """Compute the element at *index* from scratch, ignoring state.

        Raises:
            IndexError: If *index* is outside ``[0, count)``.
        """
        return as_element(self._unrank_values(self._checked(index)))

    def get(self, index: Any) -> np.ndarray:
        """Return the element at *index*, reusing the previous one if possible.

        When *index* is exactly one past the last index served, the
        working buffer is stepped; otherwise it is replaced by a fresh
        unranking.  Either way the returned array is a copy.

        Raises:
            IndexError: If *index* is outside ``[0, count)``.
        """
        if (
            self.supports_step
            and self._last_index is not None
            and index == self._last_index + 1
        ):
            if index >= self._count:
                raise IndexError(f"index {index} out of range for {self._count} elements")
            self.step()
        else:
            index = self._checked(index)
            self._buffer = self._unrank_values(index)
        self._last_index = index
        return as_element(self._buffer)

    def fork(self) -> IndexedGenerator:
        """Return a copy sharing the tables, with its state reset.

        The first :meth:`get` on the fork always unranks, so the two
        generators never observe each other's working buffer.
        """
        clone = copy.copy(self)
        clone._last_index = None
        clone._buffer = list(self._buffer)
        return clone

    # ---- hooks ----------------------------------------------------

    def _unrank_values(self, index: Any) -> list[int]:
        raise NotImplementedError(
            f"{type(self).__name__} must implement _unrank_values()"
        )

    def _checked(self, index: Any) -> Any:
        if index < 0 or index >= self._count:
            raise IndexError(f"index {index} out of range for {self._count} elements")
        return self._index_type.cast(index)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(count={self.count}, "
            f"width={self._index_type.width.value})"
        )


# ------------------------------------------------------------------ #
# Identity generator
# ------------------------------------------------------------------ #


class IdentityGenerator:
    """Trivial generator whose element at *index* is the index itself.

    Stateless, so :meth:`fork` returns the same instance.
    """

    def get(self, index: Any) -> int:
        return int(index)

    def fork(self) -> IdentityGenerator:
        return self

    def __repr__(self) -> str:
        return "IdentityGenerator()"
