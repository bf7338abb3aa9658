"""lazy_combinatorics — Splittable lazy enumeration of combinatorial families.

Enumerates permutations, k-combinations, Cartesian products, power
sets, derangements and partial permutations without materialising
them.  Every family is unrankable (index → element directly) and steps
sequentially when indices are visited in order.  Ranges split in half
for parallel consumption, may visit their indices through a keyed
shuffle, and pick a native ``int64`` or arbitrary-precision index
representation from the family's exact size.

Public API:
    .. autosummary::
        permutations
        combinations
        cartesian_product
        power_set
        derangements
        partial_permutations
        index_range
        family_range
        register_family
        resolve_family
        IndexRange
        IndexShuffler
        Width
        HOLE
        get_width_policy
        set_width_policy
        CombinatoricsError
        ConfigurationError
        CapacityExceededError
        ArithmeticInvariantViolation
"""

from ._config import get_width_policy, set_width_policy
from ._errors import (
    ArithmeticInvariantViolation,
    CapacityExceededError,
    CombinatoricsError,
    ConfigurationError,
)
from ._generators import HOLE
from ._width import Width
from .families import (
    cartesian_product,
    combinations,
    derangements,
    family_range,
    index_range,
    partial_permutations,
    permutations,
    power_set,
    register_family,
    resolve_family,
)
from .ranges import IndexRange
from .shuffler import IndexShuffler

__all__ = [
    "permutations",
    "combinations",
    "cartesian_product",
    "power_set",
    "derangements",
    "partial_permutations",
    "index_range",
    "family_range",
    "register_family",
    "resolve_family",
    "IndexRange",
    "IndexShuffler",
    "Width",
    "HOLE",
    "get_width_policy",
    "set_width_policy",
    "CombinatoricsError",
    "ConfigurationError",
    "CapacityExceededError",
    "ArithmeticInvariantViolation",
]

__version__ = "0.1.0"
