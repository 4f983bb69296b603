"""Core constants module.

Re-exports all constants for convenience.
"""

from src.core.constants.generic import (
    SECONDS_PER_YEAR,
    WAD,
    RAY,
    WAD_PERCENT_DIVISOR,
    ETHEREUM_MAINNET_CHAIN_ID,
    ZERO_ADDRESS,
)

__all__ = [
    "SECONDS_PER_YEAR",
    "WAD",
    "RAY",
    "WAD_PERCENT_DIVISOR",
    "ETHEREUM_MAINNET_CHAIN_ID",
    "ZERO_ADDRESS",
]
