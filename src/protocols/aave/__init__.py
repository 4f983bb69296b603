"""Aave v3 protocol configuration."""

from src.protocols.aave.abi import POOL_DATA_PROVIDER_ABI
from src.protocols.aave.config import (
    AAVE_V3_POOL_DATA_PROVIDER,
    RESERVE_DATA_LIQUIDITY_RATE_INDEX,
    RESERVE_DATA_VARIABLE_BORROW_RATE_INDEX,
)

__all__ = [
    "AAVE_V3_POOL_DATA_PROVIDER",
    "POOL_DATA_PROVIDER_ABI",
    "RESERVE_DATA_LIQUIDITY_RATE_INDEX",
    "RESERVE_DATA_VARIABLE_BORROW_RATE_INDEX",
]
