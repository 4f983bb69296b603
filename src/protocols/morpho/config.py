"""Morpho Blue protocol-specific configuration and constants."""

from src.core.constants.generic import SECONDS_PER_YEAR, WAD

# Morpho Blue AdaptiveCurveIRM parameters, WAD-scaled like the contract
# Reference: https://docs.morpho.org/morpho/concepts/irm
IRM_PARAMS = {
    # Target utilization (90%)
    "TARGET_UTILIZATION": 9 * WAD // 10,
    # Curve steepness
    "CURVE_STEEPNESS": 4 * WAD,
    # Min/Max rate at target (per second)
    "MIN_RATE_AT_TARGET": WAD // 1000 // SECONDS_PER_YEAR,  # 0.1% APR
    "MAX_RATE_AT_TARGET": 2 * WAD // SECONDS_PER_YEAR,  # 200% APR
    # Initial rate at target (per second)
    "INITIAL_RATE_AT_TARGET": 4 * WAD // 100 // SECONDS_PER_YEAR,  # 4% APR
}

# Morpho Blue contract addresses (Ethereum Mainnet)
MORPHO_BLUE_ADDRESS = "0xBBBBBbbBBb9cC5e90e3b3Af64bdAF62C37EEFFCb"

# Default API URL
MORPHO_API_URL = "https://blue-api.morpho.org/graphql"
