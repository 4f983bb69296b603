"""Compound v3 (Comet) protocol-specific configuration and constants."""

# Public market summary endpoint (no API key required)
COMPOUND_API_URL = "https://v3-api.compound.finance/market/all-networks/all-contracts/summary"

# Summary fields
BASE_ASSET_FIELD = "base_asset"
BASE_ASSET_ADDRESS_FIELD = "base_asset_address"
SUPPLY_APR_FIELD = "supply_apr"
BORROW_APR_FIELD = "borrow_apr"
CHAIN_ID_FIELD = "chain_id"
