"""Morpho GraphQL API market directory.

Discovers Morpho Blue market identifiers for a quote asset. Only the
identifiers are taken from the API; params, state and rates are always
read on-chain.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from gql import Client, gql
from gql.transport.aiohttp import AIOHTTPTransport
from gql.transport.exceptions import TransportError

from config.settings import Settings, get_settings
from src.core.constants import ETHEREUM_MAINNET_CHAIN_ID
from src.core.errors import InvalidUpstreamShape, UpstreamUnavailable
from src.protocols.morpho.queries import MorphoQueries

logger = logging.getLogger(__name__)

SOURCE = "morpho-api"


class MorphoMarketDirectory:
    """GraphQL lookup of Morpho Blue market identifiers."""

    def __init__(self, settings: Optional[Settings] = None, chain_id: int = ETHEREUM_MAINNET_CHAIN_ID):
        self.settings = settings or get_settings()
        self._chain_id = chain_id

    async def _execute(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """Execute a GraphQL query."""
        # Create fresh transport and client for each request to avoid connection issues
        transport = AIOHTTPTransport(url=self.settings.morpho_api_url)
        client = Client(
            transport=transport,
            fetch_schema_from_transport=False,
            execute_timeout=self.settings.http_timeout_seconds,
        )
        try:
            async with client as session:
                return await session.execute(gql(query), variable_values=variables)
        except (TransportError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise UpstreamUnavailable(SOURCE, str(e)) from e

    @staticmethod
    def parse_market_ids(result: Any) -> List[str]:
        """Extract ``uniqueKey`` values from a markets query result.

        Raises:
            InvalidUpstreamShape: If the result is not a list of markets with keys
        """
        markets = result.get("markets") if isinstance(result, dict) else None
        items = markets.get("items") if isinstance(markets, dict) else None
        if not isinstance(items, list):
            raise InvalidUpstreamShape(SOURCE, "markets.items is not a list")
        market_ids = []
        for index, item in enumerate(items):
            if not isinstance(item, dict) or not isinstance(item.get("uniqueKey"), str):
                raise InvalidUpstreamShape(SOURCE, f"market #{index} has no uniqueKey")
            market_ids.append(item["uniqueKey"])
        return market_ids

    async def list_market_ids(self, loan_asset: str, first: int = 50) -> List[str]:
        """List identifiers of markets whose loan token is ``loan_asset``.

        Args:
            loan_asset: Loan token address
            first: Maximum number of markets to return

        Returns:
            Market unique keys, ordered by supplied USD value descending
        """
        variables = {
            "first": first,
            "skip": 0,
            "chainId": self._chain_id,
            "loanAsset": loan_asset,
        }
        result = await self._execute(MorphoQueries.MARKET_IDS_QUERY, variables)
        market_ids = self.parse_market_ids(result)
        logger.info(f"Discovered {len(market_ids)} Morpho markets lending {loan_asset}")
        return market_ids
