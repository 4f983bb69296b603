"""Kamino Lend REST client implementing ComparisonSource."""

import logging
from typing import Any, Optional

import aiohttp

from config.settings import Settings, get_settings
from src.core.models import ReserveRates
from src.data.clients.base import ComparisonSource, ProtocolType
from src.data.clients.kamino.parser import KaminoParser
from src.data.http import fetch_with_retry
from src.protocols.kamino.config import (
    KAMINO_ENV,
    KAMINO_MARKETS_PATH,
    KAMINO_RESERVE_METRICS_PATH,
)

logger = logging.getLogger(__name__)


class KaminoClient(ComparisonSource):
    """REST client for Kamino Lend: market list, then primary-market reserves."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[aiohttp.ClientSession] = None):
        self.settings = settings or get_settings()
        self._session = session
        self._parser = KaminoParser()

    @property
    def protocol_type(self) -> ProtocolType:
        return ProtocolType.KAMINO

    @property
    def protocol_name(self) -> str:
        return "Kamino Lend"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.http_timeout_seconds)
            )
        return self._session

    async def _get_json(self, path: str, **params: Any) -> Any:
        session = await self._get_session()
        url = self.settings.kamino_api_url.rstrip("/") + path
        return await fetch_with_retry(
            session,
            url,
            retries=self.settings.fetch_retries,
            delay_ms=self.settings.fetch_delay_ms,
            params=params or None,
        )

    async def fetch_rates(self, symbol: str) -> Optional[ReserveRates]:
        """Fetch rates of the target reserve in Kamino's primary market."""
        markets = self._parser.parse_market_list(await self._get_json(KAMINO_MARKETS_PATH))
        primary = self._parser.primary_market(markets)
        if primary is None:
            logger.warning(f"Kamino returned {len(markets)} markets, none primary")
            return None

        payload = await self._get_json(
            KAMINO_RESERVE_METRICS_PATH.format(market=primary.address),
            env=KAMINO_ENV,
        )
        reserves = self._parser.parse_reserve_metrics(payload)
        rates = self._parser.select_rates(reserves, symbol, mint=self.settings.kamino_target_mint)
        if rates is None:
            logger.info(f"No {symbol} reserve in Kamino market {primary.address}")
        return rates

    async def close(self) -> None:
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()
