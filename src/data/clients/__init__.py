"""Comparison protocol clients.

Provides a unified interface for reading supply/borrow rates from
Kamino, Aave and Compound.
"""

from src.data.clients.base import ComparisonSource, ProtocolType
from src.data.clients.registry import (
    ComparisonSourceRegistry,
    register_default_sources,
)

__all__ = [
    "ComparisonSource",
    "ProtocolType",
    "ComparisonSourceRegistry",
    "register_default_sources",
]
