"""Yield pipeline orchestration for the lending yield tracker.

Runs market identifiers through the on-chain reader and the accrual engine
with bounded parallelism, and queries comparison protocols side by side.
"""

import asyncio
import logging
from typing import AsyncIterator, Dict, List, Optional, Sequence, Tuple

from config.settings import Settings, get_settings
from src.core.errors import YieldTrackerError
from src.core.models import (
    AccrualResult,
    BlockRef,
    ComparisonReport,
    EvaluationReport,
    MarketFailure,
    ReserveRates,
)
from src.data.clients.base import ComparisonSource, ProtocolType
from src.data.clients.registry import ComparisonSourceRegistry, register_default_sources
from src.data.sources.morpho_api import MorphoMarketDirectory
from src.data.sources.morpho_onchain import MorphoBlueReader
from src.engine import accrual

logger = logging.getLogger(__name__)

# (market_id, result, error): result is None when the market was skipped or failed
MarketOutcome = Tuple[str, Optional[AccrualResult], Optional[YieldTrackerError]]


class YieldPipeline:
    """Orchestrates market evaluation and cross-protocol comparison.

    Every evaluation cycle pins one reference block: all markets of the
    cycle are read at that block and accrued up to its timestamp.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        reader: Optional[MorphoBlueReader] = None,
        sources: Optional[Dict[ProtocolType, ComparisonSource]] = None,
        directory: Optional[MorphoMarketDirectory] = None,
    ):
        """Initialize the pipeline.

        Args:
            settings: Application settings
            reader: Morpho Blue reader (built from settings if None)
            sources: Comparison sources (enabled sources from the registry if None)
            directory: Market directory used when no identifiers are given
        """
        self.settings = settings or get_settings()
        self.reader = reader or MorphoBlueReader(self.settings)
        self._directory = directory

        # Registry-built sources are shared, so the registry closes them
        self._sources_from_registry = sources is None
        if sources is None:
            register_default_sources()
            self._sources = ComparisonSourceRegistry.get_enabled_sources(self.settings)
        else:
            self._sources = sources

    @property
    def available_sources(self) -> List[ProtocolType]:
        """Get list of configured comparison sources."""
        return list(self._sources.keys())

    def _get_directory(self) -> MorphoMarketDirectory:
        if self._directory is None:
            self._directory = MorphoMarketDirectory(self.settings)
        return self._directory

    # ========== MARKET EVALUATION ==========

    async def evaluate_market(
        self,
        market_id: str,
        block: BlockRef,
        quote_asset: str,
    ) -> Optional[AccrualResult]:
        """Evaluate one market at the reference block.

        Returns:
            AccrualResult, or None if the market lends another asset
        """
        params, state = await self.reader.read_market(market_id, block_identifier=block.number)
        if not accrual.quote_matches(params, quote_asset):
            logger.debug(f"Skipping market {market_id}: loan token {params.quote_asset}")
            return None
        borrow_rate = await self.reader.read_borrow_rate(params, state, block_identifier=block.number)
        return accrual.evaluate_market(market_id, state, borrow_rate, block.timestamp)

    async def stream_markets(
        self,
        market_ids: Sequence[str],
        quote_asset: Optional[str] = None,
        block: Optional[BlockRef] = None,
    ) -> AsyncIterator[MarketOutcome]:
        """Evaluate markets concurrently and yield outcomes in input order.

        At most ``settings.max_concurrency`` markets are in flight. A
        failing market yields its error and does not affect the others.
        Closing the iterator early cancels evaluations still in flight;
        outcomes already yielded stay valid.

        Args:
            market_ids: Market identifiers, in the order outcomes are wanted
            quote_asset: Loan token to keep (defaults to settings)
            block: Reference block (defaults to the latest block)

        Raises:
            UpstreamUnavailable: If the reference block cannot be read
        """
        quote_asset = quote_asset or self.settings.quote_asset_address
        if block is None:
            block = await self.reader.latest_block()
        logger.info(f"Evaluating {len(market_ids)} markets at block {block.number}")

        semaphore = asyncio.Semaphore(self.settings.max_concurrency)

        async def guarded(market_id: str) -> MarketOutcome:
            async with semaphore:
                try:
                    return market_id, await self.evaluate_market(market_id, block, quote_asset), None
                except YieldTrackerError as e:
                    logger.warning(f"Market {market_id} failed: {e}")
                    return market_id, None, e

        tasks = [asyncio.create_task(guarded(market_id)) for market_id in market_ids]
        try:
            for task in tasks:
                yield await task
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

    async def evaluate_markets(
        self,
        market_ids: Optional[Sequence[str]] = None,
        quote_asset: Optional[str] = None,
    ) -> EvaluationReport:
        """Evaluate a list of markets into an ordered report.

        Args:
            market_ids: Identifiers to evaluate. Falls back to
                ``settings.market_ids``, then to the market directory.
            quote_asset: Loan token to keep (defaults to settings)

        Returns:
            EvaluationReport with results in input order, failures and
            skipped identifiers
        """
        quote_asset = quote_asset or self.settings.quote_asset_address
        if market_ids is None:
            market_ids = self.settings.market_ids
        if not market_ids:
            market_ids = await self._get_directory().list_market_ids(quote_asset)

        report = EvaluationReport()
        async for market_id, result, error in self.stream_markets(market_ids, quote_asset):
            if error is not None:
                report.failures.append(MarketFailure(market_id=market_id, error=error))
            elif result is None:
                report.skipped.append(market_id)
            else:
                report.results.append(result)

        logger.info(
            f"Evaluated {len(report.results)} markets "
            f"({len(report.skipped)} skipped, {len(report.failures)} failed)"
        )
        return report

    # ========== COMPARISON ==========

    async def _fetch_source(
        self,
        protocol_type: ProtocolType,
        source: ComparisonSource,
        symbol: str,
    ) -> Tuple[ProtocolType, Optional[ReserveRates], Optional[YieldTrackerError]]:
        try:
            return protocol_type, await source.fetch_rates(symbol), None
        except YieldTrackerError as e:
            logger.warning(f"{source.protocol_name} comparison failed: {e}")
            return protocol_type, None, e

    async def compare(self, symbol: Optional[str] = None) -> ComparisonReport:
        """Fetch normalized rates from every comparison source.

        Sources run independently; a failing source is reported without
        affecting the others, and a source with no matching reserve maps
        to None.

        Args:
            symbol: Asset symbol (defaults to ``settings.quote_asset_symbol``)
        """
        symbol = symbol or self.settings.quote_asset_symbol
        outcomes = await asyncio.gather(
            *(self._fetch_source(protocol_type, source, symbol) for protocol_type, source in self._sources.items())
        )

        report = ComparisonReport()
        for protocol_type, rates, error in outcomes:
            if error is not None:
                report.failures[protocol_type.value] = error
            else:
                report.rates[protocol_type.value] = rates
        return report

    # ========== CLEANUP ==========

    async def close(self) -> None:
        """Close the reader and all comparison sources."""
        await self.reader.close()
        if self._sources_from_registry:
            await ComparisonSourceRegistry.close_all()
            return
        for protocol_type, source in self._sources.items():
            try:
                await source.close()
            except Exception as e:
                logger.error(f"Error closing {protocol_type.value} source: {e}")
