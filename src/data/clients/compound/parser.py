"""Compound v3 REST API response parser.

The market summary is a flat list of Comet deployments across networks.
Rates are plain JSON numbers expressing a fraction (``0.045`` = 4.5%).
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from src.core.errors import InvalidUpstreamShape
from src.core.models import ReserveRates
from src.data.clients.normalizer import RateEncoding, RawRate, normalize_rates, select_reserve
from src.protocols.compound.config import (
    BASE_ASSET_ADDRESS_FIELD,
    BASE_ASSET_FIELD,
    BORROW_APR_FIELD,
    CHAIN_ID_FIELD,
    SUPPLY_APR_FIELD,
)

SOURCE = "compound"


@dataclass(frozen=True)
class CompoundMarket:
    """One Comet deployment from the summary list, rates still raw."""

    symbol: str
    address: Optional[str]
    chain_id: Optional[int]
    supply_apr: RawRate
    borrow_apr: RawRate


class CompoundParser:
    """Parser for Compound v3 REST API responses."""

    @staticmethod
    def parse_summary(payload: Any) -> List[CompoundMarket]:
        """Validate and parse the market summary list.

        Every element must be an object with a base asset symbol and both
        rate fields.

        Raises:
            InvalidUpstreamShape: If any element fails validation
        """
        if not isinstance(payload, list):
            raise InvalidUpstreamShape(SOURCE, f"summary is {type(payload).__name__}, expected a list")

        markets = []
        for index, item in enumerate(payload):
            if not isinstance(item, dict):
                raise InvalidUpstreamShape(SOURCE, f"market #{index} is not an object")
            if not isinstance(item.get(BASE_ASSET_FIELD), str):
                raise InvalidUpstreamShape(SOURCE, f"market #{index} has no {BASE_ASSET_FIELD}")
            for field_name in (SUPPLY_APR_FIELD, BORROW_APR_FIELD):
                if item.get(field_name) is None:
                    raise InvalidUpstreamShape(SOURCE, f"market #{index} has no {field_name}")
            markets.append(
                CompoundMarket(
                    symbol=item[BASE_ASSET_FIELD],
                    address=item.get(BASE_ASSET_ADDRESS_FIELD),
                    chain_id=item.get(CHAIN_ID_FIELD),
                    supply_apr=RawRate(RateEncoding.FRACTION_NUMBER, item[SUPPLY_APR_FIELD], SOURCE),
                    borrow_apr=RawRate(RateEncoding.FRACTION_NUMBER, item[BORROW_APR_FIELD], SOURCE),
                )
            )
        return markets

    @staticmethod
    def select_rates(
        markets: List[CompoundMarket],
        symbol: str,
        chain_id: Optional[int] = None,
        address: Optional[str] = None,
    ) -> Optional[ReserveRates]:
        """Normalize the rates of the first deployment lending the target asset.

        Args:
            markets: Parsed summary
            symbol: Target asset symbol
            chain_id: Restrict to one network when set
            address: Target asset address, matched instead of the symbol
        """
        if chain_id is not None:
            markets = [m for m in markets if m.chain_id == chain_id]
        market = select_reserve(
            markets,
            symbol,
            symbol_of=lambda m: m.symbol,
            address=address,
            address_of=lambda m: m.address,
        )
        if market is None:
            return None
        return normalize_rates(market.supply_apr, market.borrow_apr)
