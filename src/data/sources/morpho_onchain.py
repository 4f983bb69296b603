"""Morpho Blue market-state reader over JSON-RPC."""

import asyncio
import logging
from typing import Optional, Tuple, Union

from web3 import AsyncWeb3

from config.settings import Settings, get_settings
from src.core.errors import UpstreamUnavailable
from src.core.models import BlockRef, MarketParams, MarketState
from src.data.sources.rpc import RPC_ERRORS, build_web3
from src.protocols.morpho.abi import MORPHO_BLUE_ABI
from src.protocols.morpho.irm import OnChainRateModel, RateModel

logger = logging.getLogger(__name__)

BlockIdentifier = Union[int, str]


def normalize_market_id(market_id: str) -> str:
    """Format a market id as a 0x-prefixed 32-byte hex string."""
    if market_id.startswith("0x"):
        market_id = market_id[2:]
    return "0x" + market_id.lower().zfill(64)


class MorphoBlueReader:
    """
    Reads Morpho Blue market params, state and borrow rate.

    Reads are never retried here and never cached: every call hits the node.
    Params and state of one market are read concurrently but pinned to the
    same block so the state timestamp cannot run ahead of the reference
    block used for accrual.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        web3: Optional[AsyncWeb3] = None,
        rate_model: Optional[RateModel] = None,
    ):
        self.settings = settings or get_settings()
        self._web3 = web3
        self._morpho = None
        # Overrides the market's own IRM when set
        self._rate_model = rate_model

    def _get_web3(self) -> AsyncWeb3:
        """Get or create Web3 instance."""
        if self._web3 is None:
            self._web3 = build_web3(self.settings)
        return self._web3

    def _get_morpho(self):
        """Get or create the Morpho Blue contract object (no RPC call)."""
        if self._morpho is None:
            web3 = self._get_web3()
            self._morpho = web3.eth.contract(
                address=web3.to_checksum_address(self.settings.morpho_blue_address),
                abi=MORPHO_BLUE_ABI,
            )
        return self._morpho

    async def latest_block(self) -> BlockRef:
        """Fetch number and timestamp of the latest block."""
        web3 = self._get_web3()
        try:
            block = await web3.eth.get_block("latest")
        except RPC_ERRORS as e:
            raise UpstreamUnavailable("rpc", f"latest block: {e}") from e
        return BlockRef(number=int(block["number"]), timestamp=int(block["timestamp"]))

    async def current_timestamp(self) -> int:
        """Reference clock for accrual: timestamp of the latest block."""
        block = await self.latest_block()
        return block.timestamp

    async def read_market(
        self,
        market_id: str,
        block_identifier: BlockIdentifier = "latest",
    ) -> Tuple[MarketParams, MarketState]:
        """
        Read immutable params and mutable state of one market.

        Args:
            market_id: Market unique key (bytes32 as hex string)
            block_identifier: Block both reads are pinned to

        Returns:
            Tuple of (MarketParams, MarketState)

        Raises:
            UpstreamUnavailable: If either read fails
        """
        morpho = self._get_morpho()
        key = normalize_market_id(market_id)

        try:
            raw_params, raw_state = await asyncio.gather(
                morpho.functions.idToMarketParams(key).call(block_identifier=block_identifier),
                morpho.functions.market(key).call(block_identifier=block_identifier),
            )
        except RPC_ERRORS as e:
            raise UpstreamUnavailable("morpho", f"market {market_id}: {e}") from e

        # idToMarketParams(address,address,address,address,uint256)
        params = MarketParams(
            quote_asset=raw_params[0],
            collateral_asset=raw_params[1],
            oracle=raw_params[2],
            rate_model=raw_params[3],
            liquidation_threshold=int(raw_params[4]),
        )
        # market(uint128 x6): supplyAssets, supplyShares, borrowAssets, borrowShares, lastUpdate, fee
        state = MarketState(
            total_supply_assets=int(raw_state[0]),
            total_supply_shares=int(raw_state[1]),
            total_borrow_assets=int(raw_state[2]),
            total_borrow_shares=int(raw_state[3]),
            last_update=int(raw_state[4]),
            fee=int(raw_state[5]),
        )
        return params, state

    async def read_borrow_rate(
        self,
        params: MarketParams,
        state: MarketState,
        block_identifier: BlockIdentifier = "latest",
    ) -> int:
        """Ask the market's rate model for its per-second borrow rate."""
        model = self._rate_model or OnChainRateModel(self._get_web3(), block_identifier)
        return await model.borrow_rate(params, state)

    async def close(self):
        """Close the reader."""
        self._morpho = None
        self._web3 = None
