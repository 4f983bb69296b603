"""Kamino Lend protocol-specific configuration and constants."""

# Public REST API (no API key required)
KAMINO_API_URL = "https://api.kamino.finance"

# Endpoint paths, relative to the API base URL
KAMINO_MARKETS_PATH = "/v2/kamino-market"
KAMINO_RESERVE_METRICS_PATH = "/kamino-market/{market}/reserves/metrics"

# Solana cluster queried for reserve metrics
KAMINO_ENV = "mainnet-beta"

# USDC mint on Solana
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
