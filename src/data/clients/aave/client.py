"""Aave v3 on-chain client implementing ComparisonSource.

Reads ray-scaled reserve rates straight from the AaveProtocolDataProvider.
On-chain reads are not retried; failures surface as UpstreamUnavailable.
"""

import logging
from typing import Optional

from web3 import AsyncWeb3

from config.settings import Settings, get_settings
from src.core.errors import UpstreamUnavailable
from src.core.models import ReserveRates
from src.data.clients.aave.parser import AaveParser
from src.data.clients.base import ComparisonSource, ProtocolType
from src.data.sources.rpc import RPC_ERRORS, build_web3
from src.protocols.aave.abi import POOL_DATA_PROVIDER_ABI

logger = logging.getLogger(__name__)


class AaveClient(ComparisonSource):
    """On-chain client for Aave v3 reserve rates."""

    def __init__(self, settings: Optional[Settings] = None, web3: Optional[AsyncWeb3] = None):
        self.settings = settings or get_settings()
        self._web3 = web3
        self._data_provider = None
        self._parser = AaveParser()

    @property
    def protocol_type(self) -> ProtocolType:
        return ProtocolType.AAVE

    @property
    def protocol_name(self) -> str:
        return "Aave v3"

    def _get_data_provider(self):
        """Get or create the data provider contract object (no RPC call)."""
        if self._data_provider is None:
            if self._web3 is None:
                self._web3 = build_web3(self.settings)
            self._data_provider = self._web3.eth.contract(
                address=self._web3.to_checksum_address(self.settings.aave_pool_data_provider),
                abi=POOL_DATA_PROVIDER_ABI,
            )
        return self._data_provider

    async def fetch_rates(self, symbol: str) -> Optional[ReserveRates]:
        """Fetch liquidity and variable borrow rates of the target reserve."""
        provider = self._get_data_provider()
        try:
            raw_tokens = await provider.functions.getAllReservesTokens().call()
        except RPC_ERRORS as e:
            raise UpstreamUnavailable("aave", f"getAllReservesTokens: {e}") from e

        tokens = self._parser.parse_reserve_tokens(raw_tokens)
        token = self._parser.select_token(tokens, symbol, address=self.settings.aave_target_asset)
        if token is None:
            logger.info(f"No {symbol} reserve listed on Aave")
            return None

        try:
            raw_data = await provider.functions.getReserveData(
                self._web3.to_checksum_address(token.address)
            ).call()
        except RPC_ERRORS as e:
            raise UpstreamUnavailable("aave", f"getReserveData({token.address}): {e}") from e

        return self._parser.parse_reserve_data(raw_data)

    async def close(self) -> None:
        """Drop the provider; AsyncHTTPProvider sessions are managed by web3."""
        self._data_provider = None
        self._web3 = None
