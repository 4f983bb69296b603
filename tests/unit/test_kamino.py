"""Unit tests for Kamino Lend client and parser."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.core.errors import FetchExhausted, InvalidUpstreamShape
from src.data.clients.base import ProtocolType
from src.data.clients.kamino.client import KaminoClient
from src.data.clients.kamino.parser import KaminoParser

MAIN_MARKET = "7u3HeHxYDLhnCoErrtycNokbQYbWGzLs6JSDqGAv5PfF"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


@pytest.fixture
def market_list():
    """Kamino market list response."""
    return [
        {"lendingMarket": "DxXdAyU3kCjnyggvHmY5nAwg5cRbbmdyX3npfDMjjMek", "isPrimary": False, "name": "JLP Market"},
        {"lendingMarket": MAIN_MARKET, "isPrimary": True, "name": "Main Market"},
    ]


@pytest.fixture
def reserve_metrics():
    """Kamino reserve metrics response."""
    return [
        {
            "reserve": "d4A2prbA2whesmvHaL88BH6Ewn5N4bTSU2Ze8P6Bc4Q",
            "liquidityToken": "SOL",
            "liquidityTokenMint": "So11111111111111111111111111111111111111112",
            "supplyApy": "0.0612",
            "borrowApy": "0.0811",
        },
        {
            "reserve": "D6q6wuQSrifJKZYpR1M8R4YawnLDtDsMmWM1NbBmgJ59",
            "liquidityToken": "USDC",
            "liquidityTokenMint": USDC_MINT,
            "supplyApy": "0.0523",
            "borrowApy": "0.0712",
        },
    ]


class TestKaminoParser:
    """Tests for KaminoParser."""

    @pytest.fixture
    def parser(self):
        return KaminoParser()

    def test_parse_market_list(self, parser, market_list):
        markets = parser.parse_market_list(market_list)

        assert len(markets) == 2
        assert parser.primary_market(markets).address == MAIN_MARKET
        assert markets[1].name == "Main Market"

    def test_market_list_must_be_list(self, parser):
        with pytest.raises(InvalidUpstreamShape):
            parser.parse_market_list({"markets": []})

    @pytest.mark.parametrize(
        "item",
        [
            "not-an-object",
            {"isPrimary": True},
            {"lendingMarket": MAIN_MARKET},
            {"lendingMarket": MAIN_MARKET, "isPrimary": "true"},
        ],
    )
    def test_invalid_market(self, parser, item):
        with pytest.raises(InvalidUpstreamShape) as exc_info:
            parser.parse_market_list([item])
        assert exc_info.value.source == "kamino"

    def test_no_primary_market(self, parser, market_list):
        markets = parser.parse_market_list(market_list[:1])
        assert parser.primary_market(markets) is None

    def test_parse_reserve_metrics(self, parser, reserve_metrics):
        reserves = parser.parse_reserve_metrics(reserve_metrics)

        assert [r.symbol for r in reserves] == ["SOL", "USDC"]
        assert reserves[1].mint == USDC_MINT
        assert reserves[1].supply_apy.value == "0.0523"

    @pytest.mark.parametrize("missing", ["liquidityToken", "supplyApy", "borrowApy"])
    def test_reserve_missing_field(self, parser, reserve_metrics, missing):
        del reserve_metrics[1][missing]
        with pytest.raises(InvalidUpstreamShape):
            parser.parse_reserve_metrics(reserve_metrics)

    def test_select_rates_by_symbol(self, parser, reserve_metrics):
        rates = parser.select_rates(parser.parse_reserve_metrics(reserve_metrics), "usdc")

        assert rates.supply_apy == pytest.approx(5.23)
        assert rates.borrow_apy == pytest.approx(7.12)

    def test_select_rates_by_mint(self, parser, reserve_metrics):
        reserve_metrics[1]["liquidityToken"] = "USDC-legacy"
        reserves = parser.parse_reserve_metrics(reserve_metrics)

        assert parser.select_rates(reserves, "USDC") is None
        assert parser.select_rates(reserves, "USDC", mint=USDC_MINT).supply_apy == pytest.approx(5.23)


class TestKaminoClient:
    """Tests for KaminoClient."""

    @pytest.fixture
    def session(self):
        session = MagicMock()
        session.closed = False
        session.close = AsyncMock()
        return session

    @pytest.fixture
    def client(self, test_settings, session):
        return KaminoClient(test_settings, session=session)

    def test_protocol(self, client):
        assert client.protocol_type == ProtocolType.KAMINO
        assert client.protocol_name == "Kamino Lend"

    @pytest.mark.asyncio
    async def test_fetch_rates(self, client, session, market_list, reserve_metrics):
        with patch(
            "src.data.clients.kamino.client.fetch_with_retry",
            new=AsyncMock(side_effect=[market_list, reserve_metrics]),
        ) as fetch:
            rates = await client.fetch_rates("USDC")

        assert rates.supply_apy == pytest.approx(5.23)
        assert fetch.await_count == 2

        markets_call, metrics_call = fetch.await_args_list
        assert markets_call.args == (session, "https://api.kamino.finance/v2/kamino-market")
        assert metrics_call.args[1] == f"https://api.kamino.finance/kamino-market/{MAIN_MARKET}/reserves/metrics"
        assert metrics_call.kwargs["params"] == {"env": "mainnet-beta"}
        assert metrics_call.kwargs["retries"] == 3

    @pytest.mark.asyncio
    async def test_fetch_rates_without_primary_market(self, client, market_list):
        with patch(
            "src.data.clients.kamino.client.fetch_with_retry",
            new=AsyncMock(return_value=market_list[:1]),
        ) as fetch:
            assert await client.fetch_rates("USDC") is None
        assert fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_fetch_rates_no_matching_reserve(self, client, market_list, reserve_metrics):
        with patch(
            "src.data.clients.kamino.client.fetch_with_retry",
            new=AsyncMock(side_effect=[market_list, reserve_metrics[:1]]),
        ):
            assert await client.fetch_rates("USDC") is None

    @pytest.mark.asyncio
    async def test_fetch_exhausted_propagates(self, client):
        with patch(
            "src.data.clients.kamino.client.fetch_with_retry",
            new=AsyncMock(side_effect=FetchExhausted("https://api.kamino.finance/v2/kamino-market", 3)),
        ):
            with pytest.raises(FetchExhausted):
                await client.fetch_rates("USDC")

    @pytest.mark.asyncio
    async def test_close(self, client, session):
        await client.close()
        session.close.assert_awaited_once()
