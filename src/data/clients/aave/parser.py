"""Aave v3 on-chain response parser.

Contains the validation and parsing of AaveProtocolDataProvider call
results. Rates come back as ray-scaled (1e27) per-year integers.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from src.core.errors import InvalidUpstreamShape
from src.core.models import ReserveRates
from src.data.clients.normalizer import RateEncoding, RawRate, normalize_rates, select_reserve
from src.protocols.aave.config import (
    RESERVE_DATA_LIQUIDITY_RATE_INDEX,
    RESERVE_DATA_VARIABLE_BORROW_RATE_INDEX,
)

SOURCE = "aave"


@dataclass(frozen=True)
class AaveReserveToken:
    """A listed Aave reserve."""

    symbol: str
    address: str


class AaveParser:
    """Parser for AaveProtocolDataProvider results."""

    @staticmethod
    def parse_reserve_tokens(payload: Any) -> List[AaveReserveToken]:
        """Validate and parse ``getAllReservesTokens`` output.

        Raises:
            InvalidUpstreamShape: If an entry is not a (symbol, address) pair
        """
        if not isinstance(payload, (list, tuple)):
            raise InvalidUpstreamShape(SOURCE, "reserve token list is not a sequence")
        tokens = []
        for index, entry in enumerate(payload):
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise InvalidUpstreamShape(SOURCE, f"reserve token #{index} is not a (symbol, address) pair")
            symbol, address = entry
            if not isinstance(symbol, str) or not isinstance(address, str):
                raise InvalidUpstreamShape(SOURCE, f"reserve token #{index} has non-string fields")
            tokens.append(AaveReserveToken(symbol=symbol, address=address))
        return tokens

    @staticmethod
    def select_token(
        tokens: List[AaveReserveToken],
        symbol: str,
        address: Optional[str] = None,
    ) -> Optional[AaveReserveToken]:
        """Pick the reserve for the target asset."""
        return select_reserve(
            tokens,
            symbol,
            symbol_of=lambda t: t.symbol,
            address=address,
            address_of=lambda t: t.address,
        )

    @staticmethod
    def parse_reserve_rates(payload: Sequence[Any]) -> Tuple[RawRate, RawRate]:
        """Extract ray-encoded liquidity and variable borrow rates from ``getReserveData``.

        Raises:
            InvalidUpstreamShape: If the result is too short
        """
        needed = max(RESERVE_DATA_LIQUIDITY_RATE_INDEX, RESERVE_DATA_VARIABLE_BORROW_RATE_INDEX) + 1
        if not isinstance(payload, (list, tuple)) or len(payload) < needed:
            raise InvalidUpstreamShape(SOURCE, "reserve data has too few fields")
        supply = RawRate(RateEncoding.RAY, payload[RESERVE_DATA_LIQUIDITY_RATE_INDEX], SOURCE)
        borrow = RawRate(RateEncoding.RAY, payload[RESERVE_DATA_VARIABLE_BORROW_RATE_INDEX], SOURCE)
        return supply, borrow

    @classmethod
    def parse_reserve_data(cls, payload: Sequence[Any]) -> ReserveRates:
        """Normalize ``getReserveData`` output to percentages."""
        supply, borrow = cls.parse_reserve_rates(payload)
        return normalize_rates(supply, borrow)
