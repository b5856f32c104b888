"""Tests for the integer domains behind the hex word and the base bridge."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis.strategies import integers

from bounds import INT64, UINT64, Bounds, OverflowStrategy


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestBoundsConstruction:
    def test_valid_bounds(self):
        b = Bounds(lo=-10, hi=10)
        assert b.width == 21
        assert b.overflow == OverflowStrategy.WRAP

    def test_invalid_bounds_raises(self):
        with pytest.raises(ValueError, match="lo.*must be <= hi"):
            Bounds(lo=10, hi=-10)

    def test_presets(self):
        assert UINT64.lo == 0
        assert UINT64.hi == 0xFFFF_FFFF_FFFF_FFFF
        assert UINT64.width == 2**64
        assert INT64.lo == -(2**63)
        assert INT64.hi == 2**63 - 1


# ---------------------------------------------------------------------------
# Wrap (the hex word)
# ---------------------------------------------------------------------------

class TestWrap:
    def test_in_range_unchanged(self):
        assert UINT64.apply(12345) == 12345

    def test_overflow_wraps_to_zero(self):
        assert UINT64.apply(2**64) == 0

    def test_underflow_wraps_to_max(self):
        assert UINT64.apply(-1) == UINT64.hi

    @given(raw=integers(min_value=-(2**70), max_value=2**70))
    def test_matches_modulo(self, raw):
        assert UINT64.apply(raw) == raw % 2**64


# ---------------------------------------------------------------------------
# Zero (the integer bridge)
# ---------------------------------------------------------------------------

class TestZero:
    def test_in_range_unchanged(self):
        assert INT64.apply(-5) == -5
        assert INT64.apply(INT64.hi) == INT64.hi

    def test_out_of_range_becomes_zero(self):
        assert INT64.apply(2**63) == 0
        assert INT64.apply(-(2**63) - 1) == 0

    @given(raw=integers(min_value=-(2**80), max_value=2**80))
    def test_result_in_range(self, raw):
        assert INT64.contains(INT64.apply(raw))


# ---------------------------------------------------------------------------
# Clamp
# ---------------------------------------------------------------------------

class TestClamp:
    def test_clamp_low(self):
        assert UINT64.clamp(-7) == 0

    def test_clamp_high(self):
        assert UINT64.clamp(2**65) == UINT64.hi

    @given(value=integers(min_value=-(2**70), max_value=2**70))
    def test_clamp_in_range(self, value):
        assert UINT64.contains(UINT64.clamp(value))
