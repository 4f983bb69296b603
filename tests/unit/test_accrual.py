"""Unit tests for the accrual engine."""

import pytest

from src.core.constants import SECONDS_PER_YEAR, WAD
from src.core.errors import ClockSkew
from src.core.fixed_point import compound, mul_wad, wad_to_percent
from src.core.models import MarketParams, MarketState
from src.engine.accrual import accrue, evaluate_market, quote_matches

RATE = 1_585_489_599  # ~5% APR per second, WAD-scaled
NOW = 1_700_000_000


def make_state(supply: int, borrow: int, last_update: int = NOW, fee: int = 0) -> MarketState:
    return MarketState(
        total_supply_assets=supply,
        total_borrow_assets=borrow,
        last_update=last_update,
        fee=fee,
    )


class TestAccrue:
    """Tests for accrue."""

    def test_zero_elapsed(self):
        """Half-borrowed market accrued at its own timestamp."""
        snapshot = accrue(make_state(1_000_000, 500_000), RATE, NOW)

        assert snapshot.elapsed == 0
        assert snapshot.interest == 0
        assert snapshot.accrued_supply == 1_000_000
        assert snapshot.accrued_borrow == 500_000
        assert snapshot.utilization == WAD // 2

    def test_interest_added_to_both_sides(self):
        supply, borrow = 2 * WAD, WAD
        snapshot = accrue(make_state(supply, borrow, last_update=NOW - 1000), 10**9, NOW)

        assert snapshot.elapsed == 1000
        assert snapshot.interest == mul_wad(borrow, compound(10**9, 1000))
        assert snapshot.interest == 1_000_000_500_000
        assert snapshot.accrued_borrow - borrow == snapshot.interest
        assert snapshot.accrued_supply - supply == snapshot.interest

    def test_interest_accrues_on_borrow_only(self):
        """Idle supply earns nothing when nothing is borrowed."""
        snapshot = accrue(make_state(WAD, 0, last_update=NOW - 86_400), RATE, NOW)

        assert snapshot.interest == 0
        assert snapshot.accrued_supply == WAD
        assert snapshot.utilization == 0

    def test_clock_skew(self):
        """A state recorded in the future is rejected, not clamped."""
        with pytest.raises(ClockSkew) as exc_info:
            accrue(make_state(WAD, WAD // 2, last_update=NOW + 1), RATE, NOW)

        assert exc_info.value.last_update == NOW + 1
        assert exc_info.value.now == NOW

    def test_zero_supply(self):
        snapshot = accrue(make_state(0, 0), RATE, NOW)

        assert snapshot.utilization == 0
        assert snapshot.supply_apy == 0
        assert snapshot.borrow_apy == compound(RATE, SECONDS_PER_YEAR)

    def test_borrow_apy_independent_of_elapsed(self):
        fresh = accrue(make_state(WAD, WAD // 2), RATE, NOW)
        stale = accrue(make_state(WAD, WAD // 2, last_update=NOW - 3600), RATE, NOW)

        assert fresh.borrow_apy == stale.borrow_apy

    def test_fee_applied_to_supply_apy(self):
        fee = WAD // 10
        snapshot = accrue(make_state(1_000_000, 500_000, fee=fee), RATE, NOW)

        expected = mul_wad(mul_wad(snapshot.borrow_apy, WAD // 2), WAD - fee)
        assert snapshot.supply_apy == expected

    def test_full_fee_leaves_no_supply_yield(self):
        snapshot = accrue(make_state(1_000_000, 900_000, fee=WAD), RATE, NOW)
        assert snapshot.supply_apy == 0

    @pytest.mark.parametrize("fee", [0, WAD // 10, WAD // 4, WAD])
    @pytest.mark.parametrize("borrow", [0, 250_000, 900_000, 1_000_000])
    def test_supply_apy_bounded_by_borrow_apy(self, fee, borrow):
        snapshot = accrue(make_state(1_000_000, borrow, last_update=NOW - 600, fee=fee), RATE, NOW)

        assert 0 <= snapshot.utilization <= WAD
        assert 0 <= snapshot.supply_apy <= snapshot.borrow_apy


class TestEvaluateMarket:
    """Tests for evaluate_market and quote_matches."""

    def test_percentages(self):
        state = make_state(1_000_000, 500_000, fee=WAD // 10)
        snapshot = accrue(state, RATE, NOW)

        result = evaluate_market("0xabc", state, RATE, NOW)

        assert result.market_id == "0xabc"
        assert result.borrow_apy == pytest.approx(wad_to_percent(snapshot.borrow_apy))
        assert result.supply_apy == pytest.approx(wad_to_percent(snapshot.supply_apy))
        assert 5.0 < result.borrow_apy < 5.2

    def test_clock_skew_propagates(self):
        with pytest.raises(ClockSkew):
            evaluate_market("0xabc", make_state(1, 1, last_update=NOW + 60), RATE, NOW)

    def test_quote_matches_ignores_case(self, sample_params: MarketParams):
        assert quote_matches(sample_params, sample_params.quote_asset.lower())
        assert quote_matches(sample_params, sample_params.quote_asset.upper().replace("0X", "0x"))
        assert not quote_matches(sample_params, sample_params.collateral_asset)
