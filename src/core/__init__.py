"""Core module - models, constants, errors and fixed-point math."""

from .models import MarketParams, MarketState, AccrualResult, ReserveRates
from .constants import WAD, RAY, SECONDS_PER_YEAR

__all__ = [
    "MarketParams",
    "MarketState",
    "AccrualResult",
    "ReserveRates",
    "WAD",
    "RAY",
    "SECONDS_PER_YEAR",
]
