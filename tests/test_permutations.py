"""Tests for the permutation family."""

import itertools
import math

import numpy as np
import pytest

from lazy_combinatorics import (
    CapacityExceededError,
    ConfigurationError,
    Width,
    permutations,
)
from lazy_combinatorics._generators.permutation import (
    PermutationGenerator,
    PermutationTables,
    permutation_count,
)
from lazy_combinatorics._width import BIG, NATIVE


def _unrank(length, index, index_type=NATIVE):
    gen = PermutationGenerator(PermutationTables.build(length, index_type), index_type)
    return gen.unrank(index).tolist()


class TestUnrankPermutation:
    """Tests for Lehmer-code unranking."""

    def test_rank_zero_is_identity(self):
        assert _unrank(4, 0) == [0, 1, 2, 3]

    def test_last_rank_is_reverse(self):
        assert _unrank(4, 23) == [3, 2, 1, 0]

    def test_known_rank(self):
        # rank 4 of [0,1,2] is [2,0,1]
        assert _unrank(3, 4) == [2, 0, 1]

    def test_matches_itertools_order(self):
        expected = [list(p) for p in itertools.permutations(range(5))]
        assert [_unrank(5, k) for k in range(120)] == expected

    def test_big_width_matches_native(self):
        for k in (0, 1, 17, 63, 119):
            assert _unrank(5, k, BIG) == _unrank(5, k, NATIVE)

    def test_big_width_large_length(self):
        length = 30
        last = _unrank(length, math.factorial(length) - 1, BIG)
        assert last == list(range(length - 1, -1, -1))

    def test_out_of_range(self):
        gen = PermutationGenerator(PermutationTables.build(3, NATIVE), NATIVE)
        with pytest.raises(IndexError):
            gen.unrank(6)
        with pytest.raises(IndexError):
            gen.unrank(-1)


class TestPermutationRange:
    def test_three_in_order(self):
        rng = permutations(3)
        assert rng.count() == 6
        np.testing.assert_array_equal(
            np.array(list(rng)),
            [[0, 1, 2], [0, 2, 1], [1, 0, 2], [1, 2, 0], [2, 0, 1], [2, 1, 0]],
        )

    def test_step_agrees_with_unrank(self):
        rng = permutations(6)
        gen = rng.generator
        for k, element in enumerate(rng):
            assert element.tolist() == gen.unrank(k).tolist()

    def test_elements_are_intp_arrays(self):
        element = permutations(4).advance_one()
        assert isinstance(element, np.ndarray)
        assert element.dtype == np.intp

    def test_width_selection(self):
        assert permutations(20).width is Width.NATIVE
        assert permutations(21).width is Width.BIG

    def test_native_policy_raises_above_cap(self):
        with pytest.raises(CapacityExceededError):
            permutations(21, width="native")

    def test_length_zero(self):
        rng = permutations(0)
        assert rng.count() == 1
        assert [e.tolist() for e in rng] == [[]]

    def test_length_one(self):
        assert [e.tolist() for e in permutations(1)] == [[0]]

    def test_cap(self):
        with pytest.raises(ConfigurationError, match="too big"):
            permutations(20_001)

    def test_negative_length(self):
        with pytest.raises(ConfigurationError, match="Invalid permutation length"):
            permutations(-1)

    def test_non_integer_length(self):
        with pytest.raises(ConfigurationError, match="must be an integer"):
            permutations(3.5)

    def test_count_helper(self):
        assert permutation_count(10) == 3628800

    def test_native_tables_are_read_only(self):
        tables = PermutationTables.build(5, NATIVE)
        assert tables.divisors.tolist() == [24, 6, 2, 1]
        assert not tables.divisors.flags.writeable

    def test_big_tables_have_no_divisors(self):
        tables = PermutationTables.build(5, BIG)
        assert tables.divisors is None
        assert list(tables.iter_divisors()) == [24, 6, 2, 1]
