"""Tests for the family registry and the shared generator contract."""

import logging

import numpy as np
import pytest

import lazy_combinatorics
from lazy_combinatorics import (
    ConfigurationError,
    IndexRange,
    family_range,
    index_range,
    register_family,
    resolve_family,
)
from lazy_combinatorics._generators import ElementGenerator, IdentityGenerator
from lazy_combinatorics.families import _FAMILIES

# ------------------------------------------------------------------ #
# Registry
# ------------------------------------------------------------------ #


class TestRegistry:
    def test_builtin_names(self):
        for name in (
            "permutation",
            "combination",
            "cartesian_product",
            "power_set",
            "derangement",
            "partial_permutation",
            "index",
        ):
            assert callable(resolve_family(name))

    def test_family_range_builds(self):
        rng = family_range("combination", 5, 2)
        assert rng.count() == 10

    def test_family_range_forwards_keywords(self):
        rng = family_range("permutation", 4, width="big")
        assert rng.width is lazy_combinatorics.Width.BIG

    def test_unknown_family(self):
        with pytest.raises(ConfigurationError, match="Unknown family 'catalan'"):
            resolve_family("catalan")

    def test_register_custom_family(self):
        def reversed_indices(count):
            return index_range(count).with_shuffler(lambda i: count - 1 - i)

        register_family("reversed", reversed_indices)
        try:
            assert resolve_family("reversed") is reversed_indices
            assert list(family_range("reversed", 3)) == [2, 1, 0]
        finally:
            _FAMILIES.pop("reversed", None)

    def test_register_rejects_non_callable(self):
        with pytest.raises(TypeError, match="not callable"):
            register_family("broken", 42)


# ------------------------------------------------------------------ #
# Generator contract
# ------------------------------------------------------------------ #


_BUILDERS = [
    ("permutations", (5,)),
    ("combinations", (7, 3)),
    ("cartesian_product", (3, 2, 4)),
    ("power_set", (5,)),
    ("derangements", (5,)),
    ("partial_permutations", (3,)),
]


class TestGeneratorContract:
    @pytest.mark.parametrize("name,params", _BUILDERS)
    def test_satisfies_protocol(self, name, params):
        rng = getattr(lazy_combinatorics, name)(*params)
        assert isinstance(rng.generator, ElementGenerator)

    @pytest.mark.parametrize("name,params", _BUILDERS)
    def test_agreement_law(self, name, params):
        """Sequential and random access produce the same elements."""
        rng = getattr(lazy_combinatorics, name)(*params)
        gen = rng.generator.fork()
        sequential = [e.tolist() for e in rng]
        for i in reversed(range(len(sequential))):
            assert gen.get(i).tolist() == sequential[i]

    @pytest.mark.parametrize("name,params", _BUILDERS)
    def test_get_out_of_range(self, name, params):
        rng = getattr(lazy_combinatorics, name)(*params)
        gen = rng.generator
        with pytest.raises(IndexError):
            gen.get(rng.count())
        with pytest.raises(IndexError):
            gen.get(-1)

    @pytest.mark.parametrize("name,params", _BUILDERS)
    def test_consecutive_get_past_end(self, name, params):
        rng = getattr(lazy_combinatorics, name)(*params)
        gen = rng.generator
        gen.get(rng.count() - 1)
        with pytest.raises(IndexError):
            gen.get(rng.count())

    @pytest.mark.parametrize("name,params", _BUILDERS)
    def test_native_and_big_agree(self, name, params):
        build = getattr(lazy_combinatorics, name)
        native = build(*params)
        big = build(*params, width="big")
        assert native.width is lazy_combinatorics.Width.NATIVE
        assert big.width is lazy_combinatorics.Width.BIG
        for a, b in zip(native, big, strict=True):
            np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize("name,params", _BUILDERS)
    def test_fork_is_independent(self, name, params):
        gen = getattr(lazy_combinatorics, name)(*params).generator
        first = gen.get(0).tolist()
        clone = gen.fork()
        clone.get(3)
        assert gen.get(1).tolist() == gen.unrank(1).tolist()
        assert clone.last_index == 3
        assert gen.last_index == 1
        assert first == gen.unrank(0).tolist()

    def test_current_is_a_copy(self):
        gen = lazy_combinatorics.permutations(3).generator
        gen.get(2)
        current = gen.current()
        current[:] = 0
        assert gen.current().tolist() == [1, 0, 2]

    def test_repr(self):
        gen = lazy_combinatorics.combinations(5, 2).generator
        assert repr(gen) == "CombinationGenerator(count=10, width=native)"


class TestIdentityGenerator:
    def test_index_range_yields_ints(self):
        values = list(index_range(4))
        assert values == [0, 1, 2, 3]
        assert all(type(v) is int for v in values)

    def test_fork_is_self(self):
        gen = IdentityGenerator()
        assert gen.fork() is gen

    def test_huge_index_range(self):
        rng = index_range(2**100)
        assert rng.width is lazy_combinatorics.Width.BIG
        rng.skip(2**99)
        assert rng.advance_one() == 2**99

    def test_manual_range(self):
        rng = IndexRange(3, 6, IdentityGenerator())
        assert list(rng) == [3, 4, 5]


class TestConstructionLogging:
    def test_debug_record(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="lazy_combinatorics.families"):
            lazy_combinatorics.combinations(6, 2)
        assert "combinations(6, 2): count=15, width=native" in caplog.text

    def test_elements_are_arrays(self):
        element = lazy_combinatorics.cartesian_product(2, 2).advance_one()
        assert isinstance(element, np.ndarray)
