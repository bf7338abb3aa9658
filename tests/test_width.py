"""Tests for dual-width index arithmetic and width resolution."""

import logging

import numpy as np
import pytest

from lazy_combinatorics import CapacityExceededError, ConfigurationError, Width
from lazy_combinatorics._width import (
    BIG,
    NATIVE,
    NATIVE_LIMIT,
    index_type_for,
    resolve_width,
)


class TestNativeIndex:
    def test_limit_is_int64_max(self):
        assert NATIVE_LIMIT == 2**63 - 1

    def test_cast_returns_int64(self):
        value = NATIVE.cast(42)
        assert isinstance(value, np.int64)
        assert value == 42

    def test_cast_accepts_limit(self):
        assert NATIVE.cast(NATIVE_LIMIT) == NATIVE_LIMIT

    def test_cast_rejects_overflow(self):
        with pytest.raises(CapacityExceededError, match="does not fit"):
            NATIVE.cast(NATIVE_LIMIT + 1)

    def test_capacity_error_is_overflow_error(self):
        with pytest.raises(OverflowError):
            NATIVE.cast(2**64)

    def test_cast_rejects_negative(self):
        with pytest.raises(CapacityExceededError):
            NATIVE.cast(-1)

    def test_table_is_read_only(self):
        table = NATIVE.table([1, 2, 6])
        assert table.dtype == np.int64
        with pytest.raises(ValueError):
            table[0] = 5

    def test_midpoint_does_not_overflow(self):
        low = np.int64(NATIVE_LIMIT - 4)
        high = np.int64(NATIVE_LIMIT)
        assert int(NATIVE.midpoint(low, high)) == NATIVE_LIMIT - 2

    def test_range_yields_int64(self):
        values = list(NATIVE.range(np.int64(2), np.int64(5)))
        assert [int(v) for v in values] == [2, 3, 4]
        assert all(isinstance(v, np.int64) for v in values)


class TestBigIndex:
    def test_cast_is_exact(self):
        assert BIG.cast(2**100) == 2**100

    def test_table_is_tuple(self):
        assert BIG.table([1, 2**80]) == (1, 2**80)

    def test_midpoint(self):
        assert BIG.midpoint(2**100, 2**100 + 4) == 2**100 + 2


class TestResolveWidth:
    def test_small_count_is_native(self):
        assert resolve_width(100, policy="auto") is NATIVE

    def test_large_count_falls_back(self):
        assert resolve_width(2**70, policy="auto") is BIG

    def test_margin_counts(self):
        assert resolve_width(2**62, margin=4, policy="auto") is BIG
        assert resolve_width(2**60, margin=4, policy="auto") is NATIVE

    def test_native_cap_forces_big(self):
        assert resolve_width(10, native_allowed=False, policy="auto") is BIG

    def test_big_policy(self):
        assert resolve_width(1, policy="big") is BIG

    def test_native_policy_raises(self):
        with pytest.raises(CapacityExceededError, match="native-width cap"):
            resolve_width(10, native_allowed=False, policy="native", label="demo")

    def test_native_policy_fits(self):
        assert resolve_width(10, policy="native") is NATIVE

    def test_unknown_policy(self):
        with pytest.raises(ConfigurationError):
            resolve_width(10, policy="huge")

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="lazy_combinatorics._width"):
            resolve_width(2**70, policy="auto", label="demo")
        assert "falling back" in caplog.text

    def test_index_type_for(self):
        assert index_type_for(Width.NATIVE) is NATIVE
        assert index_type_for(Width.BIG) is BIG
