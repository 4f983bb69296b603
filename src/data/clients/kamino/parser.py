"""Kamino Lend REST API response parser.

Contains the structural validation and parsing of Kamino market lists and
reserve metrics. Kamino returns rates as decimal fraction strings
(``"0.0523"`` = 5.23%).
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from src.core.errors import InvalidUpstreamShape
from src.core.models import ReserveRates
from src.data.clients.normalizer import RateEncoding, RawRate, normalize_rates, select_reserve

SOURCE = "kamino"

MARKET_ID_FIELD = "lendingMarket"
PRIMARY_FLAG_FIELD = "isPrimary"
TOKEN_FIELD = "liquidityToken"
MINT_FIELD = "liquidityTokenMint"
SUPPLY_RATE_FIELD = "supplyApy"
BORROW_RATE_FIELD = "borrowApy"


@dataclass(frozen=True)
class KaminoMarket:
    """A Kamino lending market from the market list."""

    address: str
    is_primary: bool
    name: Optional[str] = None


@dataclass(frozen=True)
class KaminoReserve:
    """Metrics of one Kamino reserve, rates still raw."""

    symbol: str
    mint: Optional[str]
    supply_apy: RawRate
    borrow_apy: RawRate


class KaminoParser:
    """Parser for Kamino REST API responses."""

    @staticmethod
    def _require_list(payload: Any, what: str) -> List[Any]:
        if not isinstance(payload, list):
            raise InvalidUpstreamShape(SOURCE, f"{what} is {type(payload).__name__}, expected a list")
        return payload

    @classmethod
    def parse_market_list(cls, payload: Any) -> List[KaminoMarket]:
        """Validate and parse the market list.

        Every element must be an object with a market identifier and a
        primary-market flag.

        Raises:
            InvalidUpstreamShape: If any element fails validation
        """
        markets = []
        for index, item in enumerate(cls._require_list(payload, "market list")):
            if not isinstance(item, dict):
                raise InvalidUpstreamShape(SOURCE, f"market #{index} is not an object")
            if not isinstance(item.get(MARKET_ID_FIELD), str):
                raise InvalidUpstreamShape(SOURCE, f"market #{index} has no {MARKET_ID_FIELD}")
            if not isinstance(item.get(PRIMARY_FLAG_FIELD), bool):
                raise InvalidUpstreamShape(SOURCE, f"market #{index} has no {PRIMARY_FLAG_FIELD} flag")
            markets.append(
                KaminoMarket(
                    address=item[MARKET_ID_FIELD],
                    is_primary=item[PRIMARY_FLAG_FIELD],
                    name=item.get("name"),
                )
            )
        return markets

    @staticmethod
    def primary_market(markets: List[KaminoMarket]) -> Optional[KaminoMarket]:
        """Return the first market flagged as primary."""
        for market in markets:
            if market.is_primary:
                return market
        return None

    @classmethod
    def parse_reserve_metrics(cls, payload: Any) -> List[KaminoReserve]:
        """Validate and parse reserve metrics.

        Every element must carry a liquidity-token identifier and both
        rate fields.

        Raises:
            InvalidUpstreamShape: If any element fails validation
        """
        reserves = []
        for index, item in enumerate(cls._require_list(payload, "reserve metrics")):
            if not isinstance(item, dict):
                raise InvalidUpstreamShape(SOURCE, f"reserve #{index} is not an object")
            if not isinstance(item.get(TOKEN_FIELD), str):
                raise InvalidUpstreamShape(SOURCE, f"reserve #{index} has no {TOKEN_FIELD}")
            for field_name in (SUPPLY_RATE_FIELD, BORROW_RATE_FIELD):
                if item.get(field_name) is None:
                    raise InvalidUpstreamShape(SOURCE, f"reserve #{index} has no {field_name}")
            reserves.append(
                KaminoReserve(
                    symbol=item[TOKEN_FIELD],
                    mint=item.get(MINT_FIELD),
                    supply_apy=RawRate(RateEncoding.FRACTION_STRING, item[SUPPLY_RATE_FIELD], SOURCE),
                    borrow_apy=RawRate(RateEncoding.FRACTION_STRING, item[BORROW_RATE_FIELD], SOURCE),
                )
            )
        return reserves

    @staticmethod
    def select_rates(
        reserves: List[KaminoReserve],
        symbol: str,
        mint: Optional[str] = None,
    ) -> Optional[ReserveRates]:
        """Normalize the rates of the reserve matching the target asset."""
        reserve = select_reserve(
            reserves,
            symbol,
            symbol_of=lambda r: r.symbol,
            address=mint,
            address_of=lambda r: r.mint,
        )
        if reserve is None:
            return None
        return normalize_rates(reserve.supply_apy, reserve.borrow_apy)
