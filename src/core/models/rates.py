"""Normalized comparison-protocol rate models."""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class ReserveRates:
    """Supply and borrow APY of one reserve, in percent."""

    supply_apy: float
    borrow_apy: float


@dataclass
class ComparisonReport:
    """Per-source outcome of a comparison run.

    ``rates`` holds ``None`` for a source that had no matching reserve.
    A source that raised appears only in ``failures``.
    """

    rates: Dict[str, Optional[ReserveRates]] = field(default_factory=dict)
    failures: Dict[str, Exception] = field(default_factory=dict)
