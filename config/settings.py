"""Pydantic settings for Lending Yield Tracker configuration."""

from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from src.protocols.aave.config import AAVE_V3_POOL_DATA_PROVIDER
from src.protocols.compound.config import COMPOUND_API_URL
from src.protocols.kamino.config import KAMINO_API_URL, USDC_MINT
from src.protocols.morpho.config import MORPHO_API_URL, MORPHO_BLUE_ADDRESS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ethereum RPC
    eth_alchemy_api_key: Optional[str] = Field(default=None, description="Alchemy API key for Ethereum RPC")
    eth_rpc_url_override: Optional[str] = Field(default=None, description="Explicit JSON-RPC URL, wins over Alchemy")
    rpc_timeout_seconds: float = Field(default=15.0, gt=0, le=120, description="JSON-RPC request timeout")

    # Morpho Blue
    morpho_blue_address: str = Field(
        default=MORPHO_BLUE_ADDRESS,
        description="Morpho Blue singleton contract",
    )
    morpho_api_url: str = Field(
        default=MORPHO_API_URL,
        description="Morpho GraphQL API URL (market discovery only)",
    )
    market_ids: Annotated[List[str], NoDecode] = Field(
        default_factory=list, description="Morpho market identifiers to evaluate"
    )
    max_concurrency: int = Field(default=8, ge=1, le=64, description="Markets evaluated in parallel")

    # Quote asset
    quote_asset_address: str = Field(
        default="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        description="Loan asset whose yield is measured (USDC)",
    )
    quote_asset_symbol: str = Field(default="USDC", description="Symbol used by comparison sources")

    # Comparison sources
    enabled_sources: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["kamino", "aave", "compound"],
        description="Comparison sources to query",
    )
    kamino_api_url: str = Field(default=KAMINO_API_URL, description="Kamino REST API")
    kamino_target_mint: Optional[str] = Field(
        default=USDC_MINT,
        description="Solana mint matched in addition to the symbol",
    )
    aave_pool_data_provider: str = Field(
        default=AAVE_V3_POOL_DATA_PROVIDER,
        description="Aave v3 AaveProtocolDataProvider",
    )
    aave_target_asset: Optional[str] = Field(
        default=None, description="Reserve token address matched in addition to the symbol"
    )
    compound_api_url: str = Field(
        default=COMPOUND_API_URL,
        description="Compound v3 market summary endpoint",
    )

    # HTTP fetch behaviour
    fetch_retries: int = Field(default=3, ge=1, le=10, description="Attempts per off-chain request")
    fetch_delay_ms: int = Field(default=500, ge=0, le=60_000, description="Fixed delay between attempts")
    http_timeout_seconds: float = Field(default=10.0, gt=0, le=120, description="Total HTTP request timeout")

    # Logging
    log_level: str = Field(default="INFO", description="Root logging level for the CLI")

    @field_validator("market_ids", "enabled_sources", mode="before")
    @classmethod
    def parse_comma_list(cls, v):
        """Parse comma-separated lists."""
        if isinstance(v, str):
            if not v.strip():
                return []
            return [item.strip() for item in v.split(",") if item.strip()]
        return v or []

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Upper-case the level name and reject unknown ones."""
        level = str(v).strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def eth_rpc_url(self) -> Optional[str]:
        """Resolve the Ethereum RPC URL: explicit override, then Alchemy."""
        if self.eth_rpc_url_override:
            return self.eth_rpc_url_override
        if self.eth_alchemy_api_key:
            return f"https://eth-mainnet.g.alchemy.com/v2/{self.eth_alchemy_api_key}"
        return None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
