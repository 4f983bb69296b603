"""Interest rate models for Morpho Blue markets.

A market's borrow rate comes from its own IRM contract. The accrual engine
only needs "a WAD-scaled per-second borrow rate for this (params, state)",
so every model implements the same one-method interface.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Union

from src.core.constants import SECONDS_PER_YEAR, WAD, ZERO_ADDRESS
from src.core.errors import UpstreamUnavailable
from src.core.fixed_point import div_wad, mul_div_down, mul_wad
from src.core.models import MarketParams, MarketState
from src.data.sources.rpc import RPC_ERRORS
from src.protocols.morpho.abi import IRM_ABI
from src.protocols.morpho.config import IRM_PARAMS

logger = logging.getLogger(__name__)


class RateModel(ABC):
    """Source of a market's per-second borrow rate."""

    @abstractmethod
    async def borrow_rate(self, params: MarketParams, state: MarketState) -> int:
        """Return the WAD-scaled per-second borrow rate for a market."""
        ...


class OnChainRateModel(RateModel):
    """Calls ``borrowRateView`` on the market's IRM contract.

    The IRM address is taken from the params at call time, so one instance
    serves every market read at the same block.
    """

    def __init__(self, web3: Any, block_identifier: Union[int, str] = "latest"):
        self._web3 = web3
        self.block_identifier = block_identifier

    async def borrow_rate(self, params: MarketParams, state: MarketState) -> int:
        if params.rate_model.lower() == ZERO_ADDRESS:
            # Markets created without an IRM accrue nothing
            return 0

        irm = self._web3.eth.contract(
            address=self._web3.to_checksum_address(params.rate_model),
            abi=IRM_ABI,
        )
        try:
            rate = await irm.functions.borrowRateView(
                params.as_tuple(), state.as_tuple()
            ).call(block_identifier=self.block_identifier)
        except RPC_ERRORS as e:
            raise UpstreamUnavailable("irm", f"borrowRateView on {params.rate_model}: {e}") from e
        return int(rate)


class CurveRateModel(RateModel):
    """
    Off-chain replica of the AdaptiveCurveIRM curve for a fixed rate at target.

    Below target utilization the rate falls linearly to
    rate_at_target / steepness at zero utilization; above target it rises
    linearly to rate_at_target * steepness at full utilization. The
    rate-at-target adaptation over time is not modelled.

    Reference: https://docs.morpho.org/morpho/concepts/irm
    """

    def __init__(
        self,
        rate_at_target: int = IRM_PARAMS["INITIAL_RATE_AT_TARGET"],
        curve_steepness: int = IRM_PARAMS["CURVE_STEEPNESS"],
        target_utilization: int = IRM_PARAMS["TARGET_UTILIZATION"],
    ):
        self.rate_at_target = rate_at_target
        self.curve_steepness = curve_steepness
        self.target_utilization = target_utilization

    @classmethod
    def from_annual_rate(cls, apr: Union[Decimal, str, float], **kwargs: Any) -> "CurveRateModel":
        """Build from an annual rate at target (e.g. 0.04 = 4% APR).

        The rate is bounded like the on-chain adaptation: 0.1% to 200% APR.
        """
        per_second = int(Decimal(str(apr)) * WAD) // SECONDS_PER_YEAR
        per_second = max(IRM_PARAMS["MIN_RATE_AT_TARGET"], min(per_second, IRM_PARAMS["MAX_RATE_AT_TARGET"]))
        return cls(per_second, **kwargs)

    def rate_for_utilization(self, utilization: int) -> int:
        """Per-second borrow rate for a WAD-scaled utilization."""
        target = self.target_utilization
        if utilization > target:
            err_norm_factor = WAD - target
        else:
            err_norm_factor = target
        err = mul_div_down(utilization - target, WAD, err_norm_factor)

        if err < 0:
            coeff = WAD - div_wad(WAD, self.curve_steepness)
        else:
            coeff = self.curve_steepness - WAD
        return mul_wad(mul_wad(coeff, err) + WAD, self.rate_at_target)

    async def borrow_rate(self, params: MarketParams, state: MarketState) -> int:
        if state.total_supply_assets == 0:
            utilization = 0
        else:
            utilization = div_wad(state.total_borrow_assets, state.total_supply_assets)
        return self.rate_for_utilization(utilization)
