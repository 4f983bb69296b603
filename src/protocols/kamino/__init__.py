"""Kamino Lend protocol configuration."""

from src.protocols.kamino.config import (
    KAMINO_API_URL,
    KAMINO_ENV,
    KAMINO_MARKETS_PATH,
    KAMINO_RESERVE_METRICS_PATH,
    USDC_MINT,
)

__all__ = [
    "KAMINO_API_URL",
    "KAMINO_ENV",
    "KAMINO_MARKETS_PATH",
    "KAMINO_RESERVE_METRICS_PATH",
    "USDC_MINT",
]
