"""Shared AsyncWeb3 construction for on-chain readers."""

import asyncio
from typing import Optional

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception

from config.settings import Settings

# Exceptions an on-chain read can surface: contract reverts, decoding
# failures and transport errors from the aiohttp-backed provider
RPC_ERRORS = (Web3Exception, aiohttp.ClientError, asyncio.TimeoutError, ConnectionError)


def build_web3(settings: Settings, rpc_url: Optional[str] = None) -> AsyncWeb3:
    """Create an AsyncWeb3 bound to the configured RPC endpoint.

    Raises:
        ValueError: If no RPC URL is configured
    """
    url = rpc_url or settings.eth_rpc_url
    if not url:
        raise ValueError(
            "Ethereum RPC URL not configured. Set ETH_RPC_URL_OVERRIDE or ETH_ALCHEMY_API_KEY in .env"
        )
    provider = AsyncHTTPProvider(
        url,
        request_kwargs={"timeout": aiohttp.ClientTimeout(total=settings.rpc_timeout_seconds)},
    )
    return AsyncWeb3(provider)
