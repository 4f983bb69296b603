"""Normalization of comparison-protocol rates into percentages.

Each upstream encodes rates differently. Rather than guessing from the
value's shape, every source tags its raw values with a ``RateEncoding`` and
one converter per encoding does the conversion. A new source with a new
encoding adds a variant and a converter.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional, TypeVar

from src.core.constants import RAY
from src.core.errors import InvalidUpstreamShape
from src.core.models import ReserveRates


class RateEncoding(Enum):
    """How an upstream rate value is encoded."""

    FRACTION_STRING = "fraction_string"  # "0.0523" (Kamino REST)
    RAY = "ray"  # 52300000000000000000000000 (Aave on-chain)
    FRACTION_NUMBER = "fraction_number"  # 0.0523 (Compound REST)


@dataclass(frozen=True)
class RawRate:
    """An upstream rate value tagged with its encoding."""

    encoding: RateEncoding
    value: Any
    source: str = "upstream"


def _fraction_string_to_percent(raw: RawRate) -> float:
    if not isinstance(raw.value, str):
        raise InvalidUpstreamShape(raw.source, f"expected rate string, got {type(raw.value).__name__}")
    try:
        fraction = Decimal(raw.value)
    except InvalidOperation as e:
        raise InvalidUpstreamShape(raw.source, f"unparseable rate {raw.value!r}") from e
    if not fraction.is_finite():
        raise InvalidUpstreamShape(raw.source, f"non-finite rate {raw.value!r}")
    return float(fraction * 100)


def _ray_to_percent(raw: RawRate) -> float:
    if isinstance(raw.value, bool) or not isinstance(raw.value, int):
        raise InvalidUpstreamShape(raw.source, f"expected ray integer, got {type(raw.value).__name__}")
    fraction = Decimal(raw.value) / Decimal(RAY)
    return float(fraction * 100)


def _fraction_number_to_percent(raw: RawRate) -> float:
    if isinstance(raw.value, bool) or not isinstance(raw.value, (int, float)):
        raise InvalidUpstreamShape(raw.source, f"expected rate number, got {type(raw.value).__name__}")
    return float(raw.value) * 100


_CONVERTERS: Dict[RateEncoding, Callable[[RawRate], float]] = {
    RateEncoding.FRACTION_STRING: _fraction_string_to_percent,
    RateEncoding.RAY: _ray_to_percent,
    RateEncoding.FRACTION_NUMBER: _fraction_number_to_percent,
}


def to_percent(raw: RawRate) -> float:
    """Convert a tagged raw rate to a plain percentage number."""
    return _CONVERTERS[raw.encoding](raw)


def normalize_rates(supply: RawRate, borrow: RawRate) -> ReserveRates:
    """Convert a reserve's raw supply and borrow rates."""
    return ReserveRates(supply_apy=to_percent(supply), borrow_apy=to_percent(borrow))


T = TypeVar("T")


def select_reserve(
    reserves: Iterable[T],
    symbol: str,
    symbol_of: Callable[[T], Optional[str]],
    address: Optional[str] = None,
    address_of: Optional[Callable[[T], Optional[str]]] = None,
) -> Optional[T]:
    """
    Pick the first reserve matching the target asset.

    A reserve matches when its symbol equals ``symbol`` ignoring case, or
    when its address/mint equals ``address``. Solana mints are base58 and
    case-sensitive, so addresses are compared exactly unless both are
    0x-prefixed hex.

    Returns:
        The matching reserve, or None when nothing matches
    """
    target_symbol = symbol.casefold()
    for reserve in reserves:
        reserve_symbol = symbol_of(reserve)
        if reserve_symbol is not None and reserve_symbol.casefold() == target_symbol:
            return reserve
        if address and address_of is not None:
            reserve_address = address_of(reserve)
            if reserve_address and _same_address(reserve_address, address):
                return reserve
    return None


def _same_address(a: str, b: str) -> bool:
    if a.startswith("0x") and b.startswith("0x"):
        return a.lower() == b.lower()
    return a == b
