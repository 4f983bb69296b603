"""Morpho protocol-specific implementations.

Configuration: src.protocols.morpho.config
Contract ABIs: src.protocols.morpho.abi
IRM Models: src.protocols.morpho.irm
GraphQL Queries: src.protocols.morpho.queries
"""

# Export config constants directly (no circular import issues)
from .config import (
    IRM_PARAMS,
    MORPHO_BLUE_ADDRESS,
    MORPHO_API_URL,
)

# Lazy imports for modules that have potential circular dependencies
# Use: from src.protocols.morpho.irm import OnChainRateModel
# Use: from src.protocols.morpho.queries import MorphoQueries

__all__ = [
    "IRM_PARAMS",
    "MORPHO_BLUE_ADDRESS",
    "MORPHO_API_URL",
]
