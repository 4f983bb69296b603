"""Compound v3 REST client implementing ComparisonSource."""

import logging
from typing import Optional

import aiohttp

from config.settings import Settings, get_settings
from src.core.constants import ETHEREUM_MAINNET_CHAIN_ID
from src.core.models import ReserveRates
from src.data.clients.base import ComparisonSource, ProtocolType
from src.data.clients.compound.parser import CompoundParser
from src.data.http import fetch_with_retry

logger = logging.getLogger(__name__)


class CompoundClient(ComparisonSource):
    """REST client for the Compound v3 market summary."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None,
        chain_id: Optional[int] = ETHEREUM_MAINNET_CHAIN_ID,
    ):
        self.settings = settings or get_settings()
        self._session = session
        self._parser = CompoundParser()
        self.chain_id = chain_id

    @property
    def protocol_type(self) -> ProtocolType:
        return ProtocolType.COMPOUND

    @property
    def protocol_name(self) -> str:
        return "Compound v3"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.http_timeout_seconds)
            )
        return self._session

    async def fetch_rates(self, symbol: str) -> Optional[ReserveRates]:
        """Fetch rates of the Comet market whose base asset is the target."""
        session = await self._get_session()
        payload = await fetch_with_retry(
            session,
            self.settings.compound_api_url,
            retries=self.settings.fetch_retries,
            delay_ms=self.settings.fetch_delay_ms,
        )
        markets = self._parser.parse_summary(payload)
        rates = self._parser.select_rates(
            markets,
            symbol,
            chain_id=self.chain_id,
            address=self.settings.quote_asset_address,
        )
        if rates is None:
            logger.info(f"No Compound market lends {symbol} (chain {self.chain_id})")
        return rates

    async def close(self) -> None:
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()
