"""Compound v3 protocol configuration."""

from src.protocols.compound.config import (
    BASE_ASSET_ADDRESS_FIELD,
    BASE_ASSET_FIELD,
    BORROW_APR_FIELD,
    CHAIN_ID_FIELD,
    COMPOUND_API_URL,
    SUPPLY_APR_FIELD,
)

__all__ = [
    "BASE_ASSET_ADDRESS_FIELD",
    "BASE_ASSET_FIELD",
    "BORROW_APR_FIELD",
    "CHAIN_ID_FIELD",
    "COMPOUND_API_URL",
    "SUPPLY_APR_FIELD",
]
