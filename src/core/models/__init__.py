"""Core data models for Lending Yield Tracker."""

from .market import (
    MarketParams,
    MarketState,
    BlockRef,
    AccrualSnapshot,
    AccrualResult,
    MarketFailure,
    EvaluationReport,
)
from .rates import ReserveRates, ComparisonReport

__all__ = [
    "MarketParams",
    "MarketState",
    "BlockRef",
    "AccrualSnapshot",
    "AccrualResult",
    "MarketFailure",
    "EvaluationReport",
    "ReserveRates",
    "ComparisonReport",
]
