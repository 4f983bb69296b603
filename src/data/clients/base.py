"""Base comparison source interface.

Defines the abstract interface that every comparison protocol client must
implement, so the pipeline can query them side by side without knowing
how each one fetches or encodes its rates.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from src.core.models import ReserveRates


class ProtocolType(Enum):
    """Supported comparison protocol types."""

    KAMINO = "kamino"
    AAVE = "aave"
    COMPOUND = "compound"


class ComparisonSource(ABC):
    """Abstract base class for comparison-protocol rate sources.

    Implementations validate upstream payloads and raise
    ``InvalidUpstreamShape``, ``FetchExhausted`` or ``UpstreamUnavailable``
    on failure. A missing reserve is not a failure.
    """

    @property
    @abstractmethod
    def protocol_type(self) -> ProtocolType:
        """Return the protocol type for this source."""
        ...

    @property
    @abstractmethod
    def protocol_name(self) -> str:
        """Return a human-readable protocol name."""
        ...

    @abstractmethod
    async def fetch_rates(self, symbol: str) -> Optional[ReserveRates]:
        """Fetch normalized rates for the reserve of one asset.

        Args:
            symbol: Target asset symbol, matched case-insensitively

        Returns:
            ReserveRates in percent, or None if no reserve matches
        """
        ...

    # ========== LIFECYCLE ==========

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections and clean up resources."""
        ...
