"""Minimal Morpho Blue ABIs - only the view functions we call."""

_MARKET_PARAMS_COMPONENTS = [
    {"name": "loanToken", "type": "address"},
    {"name": "collateralToken", "type": "address"},
    {"name": "oracle", "type": "address"},
    {"name": "irm", "type": "address"},
    {"name": "lltv", "type": "uint256"},
]

_MARKET_COMPONENTS = [
    {"name": "totalSupplyAssets", "type": "uint128"},
    {"name": "totalSupplyShares", "type": "uint128"},
    {"name": "totalBorrowAssets", "type": "uint128"},
    {"name": "totalBorrowShares", "type": "uint128"},
    {"name": "lastUpdate", "type": "uint128"},
    {"name": "fee", "type": "uint128"},
]

MORPHO_BLUE_ABI = [
    {
        "inputs": [{"name": "id", "type": "bytes32"}],
        "name": "idToMarketParams",
        "outputs": _MARKET_PARAMS_COMPONENTS,
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "id", "type": "bytes32"}],
        "name": "market",
        "outputs": _MARKET_COMPONENTS,
        "stateMutability": "view",
        "type": "function",
    },
]

IRM_ABI = [
    {
        "inputs": [
            {"components": _MARKET_PARAMS_COMPONENTS, "name": "marketParams", "type": "tuple"},
            {"components": _MARKET_COMPONENTS, "name": "market", "type": "tuple"},
        ],
        "name": "borrowRateView",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]
