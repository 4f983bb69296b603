"""Unit tests for WAD fixed-point arithmetic."""

import pytest

from src.core.constants import SECONDS_PER_YEAR, WAD
from src.core.errors import DivisionByZero
from src.core.fixed_point import (
    compound,
    div_wad,
    mul_div_down,
    mul_wad,
    w_taylor_compounded,
    wad_to_percent,
)


class TestMulDiv:
    """Tests for mul_wad, div_wad and mul_div_down."""

    def test_mul_wad(self):
        assert mul_wad(2 * WAD, 3 * WAD) == 6 * WAD
        assert mul_wad(WAD // 2, WAD // 2) == WAD // 4

    def test_mul_wad_truncates(self):
        """Sub-unit products truncate to zero."""
        assert mul_wad(1, 1) == 0
        assert mul_wad(3, WAD // 2) == 1

    def test_mul_div_down_truncates_toward_zero(self):
        """Negative quotients truncate toward zero, not toward -inf."""
        assert mul_div_down(-3, WAD // 2, WAD) == -1
        assert mul_div_down(3, -1, 2) == -1

    def test_div_wad(self):
        assert div_wad(6 * WAD, 3 * WAD) == 2 * WAD
        assert div_wad(500_000, 1_000_000) == WAD // 2
        assert div_wad(1, 3 * WAD) == 0

    def test_div_wad_by_zero(self):
        with pytest.raises(DivisionByZero):
            div_wad(WAD, 0)

    def test_division_by_zero_is_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            mul_div_down(1, 1, 0)

    @pytest.mark.parametrize(
        "a,b",
        [
            (5 * WAD, 3 * WAD),
            (123_456_789, 7),
            (10**30, 10**17),
            (WAD, 1000 * WAD),
        ],
    )
    def test_div_then_mul_recovers_value(self, a, b):
        """mul_wad(div_wad(a, b), b) is within truncation error of a."""
        result = mul_wad(div_wad(a, b), b)
        assert result <= a
        assert a - result <= b // WAD + 1


class TestTaylorCompounding:
    """Tests for the three-term compounding series."""

    def test_zero_rate(self):
        assert compound(0, SECONDS_PER_YEAR) == 0

    def test_zero_time(self):
        assert compound(10**9, 0) == 0

    def test_exact_terms(self):
        """x = 1e12, x2 = 1e24 / 2e18, x3 truncates to zero."""
        assert compound(10**9, 1000) == 1_000_000_000_000 + 500_000

    def test_alias(self):
        assert compound is w_taylor_compounded

    def test_exceeds_simple_interest(self):
        rate = 1_585_489_599  # ~5% APR per second
        assert compound(rate, SECONDS_PER_YEAR) > rate * SECONDS_PER_YEAR

    def test_underestimates_exponential_at_large_products(self):
        """At rate*time ~ WAD the series lands at ~1.667, below e - 1."""
        rate = WAD // SECONDS_PER_YEAR
        result = compound(rate, SECONDS_PER_YEAR)
        assert WAD * 166 // 100 < result < WAD * 172 // 100


class TestWadToPercent:
    """Tests for the display conversion."""

    def test_conversion(self):
        assert wad_to_percent(5 * 10**16) == 5.0
        assert wad_to_percent(WAD) == 100.0
        assert wad_to_percent(0) == 0.0
