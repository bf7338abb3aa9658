"""Large-size smoke tests for regression detection.

These tests verify that enumeration, unranking and splitting complete
within a reasonable time bound on families near their caps.  They
catch accidental quadratic behaviour, memory blowouts, and regressions
in the sequential-stepping paths.

All tests are marked ``@pytest.mark.slow`` and excluded from the
default ``pytest`` run.  Run them explicitly::

    pytest -m slow
"""

from __future__ import annotations

import math
import time

import pytest
from joblib import Parallel, delayed

import lazy_combinatorics

# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #

TIME_LIMIT = 60.0


def _split_into(rng, parts):
    """Split *rng* repeatedly until there are at least *parts* ranges."""
    ranges = [rng]
    while len(ranges) < parts:
        next_ranges = []
        for r in ranges:
            left = r.split()
            if left is not None:
                next_ranges.append(left)
            next_ranges.append(r)
        if len(next_ranges) == len(ranges):
            break
        ranges = next_ranges
    return ranges


def _count_elements(rng):
    counter = [0]

    def visit(_):
        counter[0] += 1

    rng.drain_all(visit)
    return counter[0]


# ------------------------------------------------------------------ #
# Smoke tests
# ------------------------------------------------------------------ #


@pytest.mark.slow
def test_sequential_permutations_10():
    """All 10! permutations stepped sequentially."""
    t0 = time.perf_counter()
    rng = lazy_combinatorics.permutations(10)
    assert _count_elements(rng) == math.factorial(10)
    assert time.perf_counter() - t0 < TIME_LIMIT


@pytest.mark.slow
def test_parallel_split_drain():
    """Split C(24, 8) into 16 parts and drain them on a thread pool."""
    rng = lazy_combinatorics.combinations(24, 8)
    parts = _split_into(rng, 16)
    counts = Parallel(n_jobs=4, prefer="threads")(
        delayed(_count_elements)(part) for part in parts
    )
    assert sum(counts) == math.comb(24, 8)


@pytest.mark.slow
def test_permutation_unrank_at_cap():
    """Unranking a length-20 000 permutation stays tractable."""
    rng = lazy_combinatorics.permutations(20_000)
    t0 = time.perf_counter()
    element = rng.generator.unrank(rng.count() // 2)
    assert sorted(element.tolist()) == list(range(20_000))
    assert time.perf_counter() - t0 < TIME_LIMIT


@pytest.mark.slow
def test_shuffled_drain_is_bijective():
    """A shuffled range of 200 000 indices visits every index exactly once."""
    rng = lazy_combinatorics.index_range(200_000).install_shuffler(seed=123)
    seen = bytearray(200_000)
    for value in rng:
        assert not seen[value]
        seen[value] = 1
    assert all(seen)


@pytest.mark.slow
def test_partial_permutations_near_native_cap():
    """Random access across every bucket of a length-18 family."""
    rng = lazy_combinatorics.partial_permutations(18)
    assert rng.width is lazy_combinatorics.Width.NATIVE
    gen = rng.generator
    step = rng.count() // 997
    for index in range(0, rng.count(), step):
        element = gen.unrank(index).tolist()
        values = [v for v in element if v != lazy_combinatorics.HOLE]
        assert len(values) == len(set(values))
