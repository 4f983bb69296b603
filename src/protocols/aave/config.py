"""Aave v3 protocol-specific configuration and constants."""

# Aave v3 contract addresses (Ethereum Mainnet)
AAVE_V3_POOL_DATA_PROVIDER = "0x7B4EB56E7CD4b454BA8ff71E4518426369a138a3"

# getReserveData output positions
RESERVE_DATA_LIQUIDITY_RATE_INDEX = 5
RESERVE_DATA_VARIABLE_BORROW_RATE_INDEX = 6
