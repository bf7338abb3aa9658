"""Family constructors and the family registry.

Each constructor validates its parameters eagerly, computes the exact
cardinality with Python integers, resolves the index width **once**
(see :mod:`._width`), builds the immutable tables for that width and
returns a ready :class:`~lazy_combinatorics.ranges.IndexRange` over
``[0, count)``.

================================  ==================================  ======================
Constructor                       Count                               Native-width condition
================================  ==================================  ======================
``permutations(length)``          ``length!``                         ``length ≤ 20``
``combinations(n, k)``            ``C(n, k)``                         ``C(n,k)·(n−1)`` fits
``cartesian_product(*dims)``      ``Π dims``                          count fits
``power_set(length)``             ``2**length``                       ``length < 63``
``derangements(length)``          ``D(length)``                       ``length ≤ 21``, count fits
``partial_permutations(length)``  ``Σ s!·C(length,s)²``               ``length ≤ 18``, count fits
``index_range(count)``            ``count``                           count fits
================================  ==================================  ======================

Arbitrary-precision caps: permutation length ≤ 20 000, combination
``n`` ≤ 50 000, partial-permutation length ≤ 10 000, power-set length
< 512.  Exceeding a cap raises
:class:`~lazy_combinatorics.ConfigurationError` before any table is
built.

Every constructor accepts ``width=`` (``"auto"``, ``"native"`` or
``"big"``) overriding the global policy for that call.

Registry
~~~~~~~~
Constructors are also registered by name so callers can build families
from configuration data::

    family_range("combination", 10, 3)
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable
from typing import Any

from ._errors import ConfigurationError
from ._generators import (
    CartesianProductGenerator,
    CartesianProductTables,
    CombinationGenerator,
    CombinationTables,
    DerangementGenerator,
    DerangementTables,
    IdentityGenerator,
    PartialPermutationGenerator,
    PartialPermutationTables,
    PermutationGenerator,
    PermutationTables,
    PowerSetGenerator,
    PowerSetTables,
)
from ._generators.combination import COMBINATION_MAX_N, combination_count
from ._generators.derangement import DERANGEMENT_NATIVE_MAX_LENGTH, derangement_count
from ._generators.partial_permutation import (
    PARTIAL_PERMUTATION_MAX_LENGTH,
    PARTIAL_PERMUTATION_NATIVE_MAX_LENGTH,
    partial_permutation_count,
)
from ._generators.permutation import (
    PERMUTATION_MAX_LENGTH,
    PERMUTATION_NATIVE_MAX_LENGTH,
    permutation_count,
)
from ._generators.power_set import (
    POWER_SET_MAX_LENGTH,
    POWER_SET_NATIVE_MAX_LENGTH,
    power_set_count,
)
from ._generators.product import cartesian_product_count
from ._width import resolve_width
from .ranges import IndexRange

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------ #
# Parameter validation
# ------------------------------------------------------------------ #


def _check_size(name: str, value: Any, cap: int | None = None) -> int:
    """Return *value* as an int, rejecting negatives and values above *cap*."""
    try:
        size = operator.index(value)
    except TypeError:
        raise ConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}"
        ) from None
    if size < 0:
        raise ConfigurationError(f"Invalid {name}: {size} (must be non-negative)")
    if cap is not None and size > cap:
        raise ConfigurationError(f"{name} too big: {size} (maximum {cap})")
    return size


def _build(
    label: str,
    count: int,
    tables_factory: Callable[..., Any],
    generator_cls: type,
    *,
    margin: int = 1,
    native_allowed: bool = True,
    width: str | None = None,
) -> IndexRange:
    index_type = resolve_width(
        count,
        margin=margin,
        native_allowed=native_allowed,
        policy=width,
        label=label,
    )
    tables = tables_factory(index_type)
    logger.debug("%s: count=%d, width=%s", label, count, index_type.width.value)
    generator = generator_cls(tables, index_type)
    return IndexRange(index_type.zero, count, generator, index_type)


# ------------------------------------------------------------------ #
# Constructors
# ------------------------------------------------------------------ #


def permutations(length: int, *, width: str | None = None) -> IndexRange:
    """All permutations of ``[0..length-1]`` in lexicographic order.

    Args:
        length: Permutation length, ``0 ≤ length ≤ 20 000``.
        width: Optional width-policy override for this family.

    Returns:
        A range over ``length!`` elements.

    Raises:
        ConfigurationError: If *length* is negative or above the cap.
    """
    length = _check_size("permutation length", length, PERMUTATION_MAX_LENGTH)
    return _build(
        f"permutations({length})",
        permutation_count(length),
        lambda it: PermutationTables.build(length, it),
        PermutationGenerator,
        native_allowed=length <= PERMUTATION_NATIVE_MAX_LENGTH,
        width=width,
    )


def combinations(n: int, k: int, *, width: str | None = None) -> IndexRange:
    """All k-subsets of ``[0..n-1]`` as increasing arrays, in lexicographic order.

    Args:
        n: Set size, ``0 ≤ n ≤ 50 000``.
        k: Subset size, ``0 ≤ k ≤ n``.
        width: Optional width-policy override for this family.

    Raises:
        ConfigurationError: If ``n`` or ``k`` is negative, ``k > n`` or
            ``n`` exceeds the cap.
    """
    n = _check_size("n", n, COMBINATION_MAX_N)
    k = _check_size("k", k)
    if k > n:
        raise ConfigurationError(f"Invalid (n,k): ({n},{k}); k must not exceed n")
    return _build(
        f"combinations({n}, {k})",
        combination_count(n, k),
        lambda it: CombinationTables.build(n, k, it),
        CombinationGenerator,
        margin=n - 1,
        width=width,
    )


def cartesian_product(*dimensions: int, width: str | None = None) -> IndexRange:
    """All digit vectors ``d`` with ``0 ≤ d[i] < dimensions[i]``, last digit fastest.

    Raises:
        ConfigurationError: If any dimension is negative.
    """
    dims = tuple(_check_size(f"dimension {i}", d) for i, d in enumerate(dimensions))
    return _build(
        f"cartesian_product{dims}",
        cartesian_product_count(dims),
        lambda it: CartesianProductTables.build(dims, it),
        CartesianProductGenerator,
        width=width,
    )


def power_set(length: int, *, width: str | None = None) -> IndexRange:
    """All subsets of ``[0..length-1]``; index bit *i* selects element *i*.

    Raises:
        ConfigurationError: If *length* is negative or ``≥ 512``.
    """
    length = _check_size("power set length", length, POWER_SET_MAX_LENGTH - 1)
    return _build(
        f"power_set({length})",
        power_set_count(length),
        lambda it: PowerSetTables.build(length, it),
        PowerSetGenerator,
        native_allowed=length < POWER_SET_NATIVE_MAX_LENGTH,
        width=width,
    )


def derangements(length: int, *, width: str | None = None) -> IndexRange:
    """All fixed-point-free permutations of ``[0..length-1]``.

    Every access unranks; there is no sequential stepping for this
    family.

    Raises:
        ConfigurationError: If *length* is negative.
    """
    length = _check_size("derangement length", length)
    return _build(
        f"derangements({length})",
        derangement_count(length),
        lambda it: DerangementTables.build(length, it),
        DerangementGenerator,
        native_allowed=length <= DERANGEMENT_NATIVE_MAX_LENGTH,
        width=width,
    )


def partial_permutations(length: int, *, width: str | None = None) -> IndexRange:
    """All length-*length* sequences of distinct values and holes (``-1``).

    Raises:
        ConfigurationError: If *length* is negative or above 10 000.
    """
    length = _check_size(
        "partial permutation length", length, PARTIAL_PERMUTATION_MAX_LENGTH
    )
    return _build(
        f"partial_permutations({length})",
        partial_permutation_count(length),
        lambda it: PartialPermutationTables.build(length, it),
        PartialPermutationGenerator,
        native_allowed=length <= PARTIAL_PERMUTATION_NATIVE_MAX_LENGTH,
        width=width,
    )


def index_range(count: int, *, width: str | None = None) -> IndexRange:
    """The raw indices ``0 .. count-1`` themselves, as Python ints."""
    count = _check_size("count", count)
    index_type = resolve_width(count, policy=width, label=f"index_range({count})")
    return IndexRange(index_type.zero, count, IdentityGenerator(), index_type)


# ------------------------------------------------------------------ #
# Registry
# ------------------------------------------------------------------ #

_FAMILIES: dict[str, Callable[..., IndexRange]] = {
    "permutation": permutations,
    "combination": combinations,
    "cartesian_product": cartesian_product,
    "power_set": power_set,
    "derangement": derangements,
    "partial_permutation": partial_permutations,
    "index": index_range,
}
"""Registry mapping family names to range constructors."""


def register_family(name: str, builder: Callable[..., IndexRange]) -> None:
    """Register *builder* under *name*, replacing any previous entry.

    Raises:
        TypeError: If *builder* is not callable.
    """
    if not callable(builder):
        raise TypeError(f"{builder!r} is not callable.")
    _FAMILIES[name] = builder


def resolve_family(name: str) -> Callable[..., IndexRange]:
    """Return the constructor registered under *name*.

    Raises:
        ConfigurationError: If no family is registered under *name*.
    """
    try:
        return _FAMILIES[name]
    except KeyError:
        available = ", ".join(sorted(_FAMILIES)) or "(none registered)"
        raise ConfigurationError(
            f"Unknown family {name!r}.  Available families: {available}."
        ) from None


def family_range(name: str, *params: Any, **kwargs: Any) -> IndexRange:
    """Build the family registered under *name* from positional parameters."""
    return resolve_family(name)(*params, **kwargs)
