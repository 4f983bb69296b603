"""Interest accrual and APY computation for Morpho Blue markets.

Mirrors the on-chain ``_accrueInterest`` bookkeeping, then annualizes the
per-second borrow rate with the same Taylor compounding series.
"""

import logging

from src.core.constants import SECONDS_PER_YEAR, WAD
from src.core.errors import ClockSkew
from src.core.fixed_point import compound, div_wad, mul_wad, wad_to_percent
from src.core.models import AccrualResult, AccrualSnapshot, MarketParams, MarketState

logger = logging.getLogger(__name__)


def accrue(state: MarketState, borrow_rate: int, now: int) -> AccrualSnapshot:
    """
    Accrue interest on a market state up to ``now``.

    Interest grows the borrow principal and is credited one-to-one to the
    supply side. The protocol fee only enters the supply APY, never the
    accrued totals.

    Args:
        state: Market state as recorded on-chain
        borrow_rate: Per-second borrow rate, WAD-scaled
        now: Reference timestamp (unix seconds)

    Returns:
        AccrualSnapshot with WAD-scaled figures

    Raises:
        ClockSkew: If the state was recorded after ``now``
    """
    elapsed = now - state.last_update
    if elapsed < 0:
        raise ClockSkew(state.last_update, now)

    if elapsed == 0:
        interest = 0
    else:
        interest = mul_wad(state.total_borrow_assets, compound(borrow_rate, elapsed))

    accrued_borrow = state.total_borrow_assets + interest
    accrued_supply = state.total_supply_assets + interest

    # No supply means no yield
    if accrued_supply == 0:
        utilization = 0
    else:
        utilization = div_wad(accrued_borrow, accrued_supply)

    borrow_apy = compound(borrow_rate, SECONDS_PER_YEAR)
    supply_apy = mul_wad(mul_wad(borrow_apy, utilization), WAD - state.fee)

    return AccrualSnapshot(
        elapsed=elapsed,
        interest=interest,
        accrued_supply=accrued_supply,
        accrued_borrow=accrued_borrow,
        utilization=utilization,
        borrow_apy=borrow_apy,
        supply_apy=supply_apy,
    )


def quote_matches(params: MarketParams, quote_asset: str) -> bool:
    """Check whether a market lends the quote asset (address, any case)."""
    return params.quote_asset.lower() == quote_asset.lower()


def evaluate_market(
    market_id: str,
    state: MarketState,
    borrow_rate: int,
    now: int,
) -> AccrualResult:
    """Accrue a market and convert its APYs to percentages."""
    snapshot = accrue(state, borrow_rate, now)
    result = AccrualResult(
        market_id=market_id,
        borrow_apy=wad_to_percent(snapshot.borrow_apy),
        supply_apy=wad_to_percent(snapshot.supply_apy),
    )
    logger.debug(
        f"Market {market_id}: elapsed={snapshot.elapsed}s "
        f"utilization={snapshot.utilization} borrow={result.borrow_apy:.4f}% "
        f"supply={result.supply_apy:.4f}%"
    )
    return result
