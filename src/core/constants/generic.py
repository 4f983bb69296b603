"""Generic constants for DeFi protocol calculations.

These constants are protocol-agnostic and can be used across different protocols.
"""

# Time constants
# Fixed 365-day year, matching the on-chain per-second rate convention
SECONDS_PER_YEAR = 31_536_000

# Precision constants
WAD = 10**18  # Standard 18 decimal precision (used in Morpho, Aave, etc.)
RAY = 10**27  # 27 decimal precision (used in Aave)

# WAD fraction -> plain percentage number
WAD_PERCENT_DIVISOR = 1e16

# Chain IDs
ETHEREUM_MAINNET_CHAIN_ID = 1

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
