"""Pytest configuration and fixtures."""

import pytest

from config.settings import Settings
from src.core.models import BlockRef, MarketParams, MarketState


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        eth_rpc_url_override="http://localhost:8545",
        market_ids=[],
        max_concurrency=2,
        fetch_retries=3,
        fetch_delay_ms=0,
        enabled_sources=["kamino", "aave", "compound"],
    )


@pytest.fixture
def sample_params() -> MarketParams:
    """USDC loan / WETH collateral market params."""
    return MarketParams(
        quote_asset="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        collateral_asset="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        oracle="0x48F7E36EB6B826B2dF4B2E630B62Cd25e89E40e2",
        rate_model="0x870aC11D48B15DB9a138Cf899d20F13F79Ba00BC",
        liquidation_threshold=860000000000000000,
    )


@pytest.fixture
def sample_state() -> MarketState:
    """A market 85% utilized with a 10% fee, last accrued at block time 1_700_000_000."""
    return MarketState(
        total_supply_assets=150_000_000_000_000,
        total_borrow_assets=127_500_000_000_000,
        last_update=1_700_000_000,
        fee=100_000_000_000_000_000,
        total_supply_shares=145_000_000_000_000_000_000_000,
        total_borrow_shares=125_000_000_000_000_000_000_000,
    )


@pytest.fixture
def sample_block() -> BlockRef:
    """Reference block one hour after the sample state was recorded."""
    return BlockRef(number=19_000_000, timestamp=1_700_003_600)
