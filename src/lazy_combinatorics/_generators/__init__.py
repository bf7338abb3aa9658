"""Element generators and the protocol the range engine programs against.

A generator turns an index into an element of its family.  The
:class:`~lazy_combinatorics.ranges.IndexRange` engine only needs two
operations, captured by :class:`ElementGenerator`:

* ``get(index)``: the element at *index*, and
* ``fork()``: an independent copy for the other half of a split.

The family generators in this subpackage share a richer contract,
implemented once in :class:`IndexedGenerator`:

* ``current()``: the last produced element (copy),
* ``step()``: advance the private working buffer to its lexicographic
  successor in place,
* ``unrank(index)``: compute an element from scratch,
* ``get(index)``: ``step()`` when *index* directly follows the last
  index served, ``unrank`` otherwise,
* ``fork()``: share the immutable tables, reset the mutable state.

Every element handed out is a fresh ``numpy.ndarray`` of dtype
``numpy.intp``; the working buffer itself never leaves the generator.

Adding a new family
~~~~~~~~~~~~~~~~~~~
1. Create a module here with a frozen tables dataclass exposing
   ``count`` and a subclass of :class:`IndexedGenerator` implementing
   ``_unrank_values`` (and ``step`` if the family has a cheap successor
   rule).
2. Add a builder in :mod:`lazy_combinatorics.families` and register it.
"""

from __future__ import annotations

from ._base import ElementGenerator, IdentityGenerator, IndexedGenerator, as_element
from .combination import CombinationGenerator, CombinationTables
from .derangement import DerangementGenerator, DerangementTables
from .partial_permutation import (
    HOLE,
    PartialPermutationGenerator,
    PartialPermutationTables,
)
from .permutation import PermutationGenerator, PermutationTables
from .power_set import PowerSetGenerator, PowerSetTables
from .product import CartesianProductGenerator, CartesianProductTables

__all__ = [
    "HOLE",
    "CartesianProductGenerator",
    "CartesianProductTables",
    "CombinationGenerator",
    "CombinationTables",
    "DerangementGenerator",
    "DerangementTables",
    "ElementGenerator",
    "IdentityGenerator",
    "IndexedGenerator",
    "PartialPermutationGenerator",
    "PartialPermutationTables",
    "PermutationGenerator",
    "PermutationTables",
    "PowerSetGenerator",
    "PowerSetTables",
    "as_element",
]
