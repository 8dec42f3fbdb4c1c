"""
Tests for the Bounds layer.

These verify that the bounds enforcement itself is correct -
wrapping, clamping and error raising.
"""

import pytest
from hypothesis import given
from hypothesis.strategies import integers

from bounds import (
    Bounds,
    OverflowStrategy,
    INT8,
    INT16,
    INT32,
    INT64,
    TINY,
)


# ---------------------------------------------------------------------------
# Bounds construction
# ---------------------------------------------------------------------------

class TestBoundsConstruction:
    def test_valid_bounds(self):
        b = Bounds(lo=-10, hi=10)
        assert b.lo == -10
        assert b.hi == 10
        assert b.width == 21
        assert b.overflow == OverflowStrategy.WRAP

    def test_single_value_bounds(self):
        b = Bounds(lo=0, hi=0)
        assert b.width == 1
        assert b.contains(0)
        assert not b.contains(1)

    def test_invalid_bounds_raises(self):
        with pytest.raises(ValueError, match="lo.*must be <= hi"):
            Bounds(lo=10, hi=-10)

    def test_signed(self):
        b = Bounds.signed(4)
        assert (b.lo, b.hi) == (-8, 7)
        assert b == TINY

    def test_signed_keeps_strategy(self):
        assert Bounds.signed(8, OverflowStrategy.CLAMP).overflow == OverflowStrategy.CLAMP

    @pytest.mark.parametrize("bits", [0, -1])
    def test_signed_rejects_non_positive_width(self, bits):
        with pytest.raises(ValueError, match="bit width"):
            Bounds.signed(bits)

    def test_presets(self):
        assert (INT8.lo, INT8.hi) == (-128, 127)
        assert (INT16.lo, INT16.hi) == (-32_768, 32_767)
        assert (INT32.lo, INT32.hi) == (-2_147_483_648, 2_147_483_647)
        assert INT64.width == 2 ** 64
        assert TINY.width == 16

    def test_all_values(self):
        assert list(TINY.all_values()) == list(range(-8, 8))


# ---------------------------------------------------------------------------
# Wrapping strategy
# ---------------------------------------------------------------------------

class TestWrapStrategy:
    bounds = INT8

    def test_within_bounds_unchanged(self):
        for v in [-128, -1, 0, 1, 127]:
            assert self.bounds.apply(v) == v

    def test_wrap_overflow(self):
        assert self.bounds.apply(128) == -128
        assert self.bounds.apply(255) == -1
        assert self.bounds.apply(256) == 0

    def test_wrap_underflow(self):
        assert self.bounds.apply(-129) == 127
        assert self.bounds.apply(-256) == 0

    def test_matches_twos_complement_int32(self):
        assert INT32.apply(2 ** 31) == -(2 ** 31)
        assert INT32.apply(46_341 * 46_341) == -2_147_479_015

    @given(v=integers(min_value=-10 ** 6, max_value=10 ** 6))
    def test_wrap_always_in_bounds(self, v):
        assert self.bounds.contains(self.bounds.apply(v))

    @given(v=integers(min_value=-10 ** 6, max_value=10 ** 6))
    def test_wrap_is_congruent(self, v):
        assert (self.bounds.apply(v) - v) % 256 == 0


# ---------------------------------------------------------------------------
# Clamping strategy
# ---------------------------------------------------------------------------

class TestClampStrategy:
    bounds = Bounds(lo=-10, hi=10, overflow=OverflowStrategy.CLAMP)

    def test_above_hi_clamps(self):
        assert self.bounds.apply(11) == 10
        assert self.bounds.apply(1000) == 10

    def test_below_lo_clamps(self):
        assert self.bounds.apply(-11) == -10
        assert self.bounds.apply(-1000) == -10

    @given(v=integers(min_value=-10, max_value=10))
    def test_in_range_identity(self, v):
        assert self.bounds.apply(v) == v

    @given(v=integers(min_value=11, max_value=10_000))
    def test_overflow_clamps_to_hi(self, v):
        assert self.bounds.apply(v) == 10


# ---------------------------------------------------------------------------
# Error strategy
# ---------------------------------------------------------------------------

class TestErrorStrategy:
    bounds = Bounds(lo=-10, hi=10, overflow=OverflowStrategy.ERROR)

    def test_within_bounds_ok(self):
        assert self.bounds.apply(-10) == -10
        assert self.bounds.apply(10) == 10

    def test_overflow_raises(self):
        with pytest.raises(OverflowError, match="outside bounds"):
            self.bounds.apply(11)

    def test_underflow_raises(self):
        with pytest.raises(OverflowError):
            self.bounds.apply(-11)
