"""Protocol-specific implementations.

This module contains protocol-specific configurations, contract ABIs,
rate models and GraphQL queries.

Currently supported:
- Morpho Blue (src.protocols.morpho), evaluated on-chain
- Kamino Lend (src.protocols.kamino), comparison
- Aave v3 (src.protocols.aave), comparison
- Compound v3 (src.protocols.compound), comparison
"""

# Note: We don't import morpho here to avoid circular imports
# Import specific modules as needed:
#   from src.protocols.morpho.config import IRM_PARAMS
#   from src.protocols.morpho.irm import OnChainRateModel
#   from src.protocols.morpho.queries import MorphoQueries
