"""Retrying JSON fetch for off-chain metric sources."""

import asyncio
import logging
from typing import Any

import aiohttp

from src.core.errors import FetchExhausted

logger = logging.getLogger(__name__)

DEFAULT_RETRIES = 3
DEFAULT_DELAY_MS = 500


async def fetch_with_retry(
    session: aiohttp.ClientSession,
    url: str,
    retries: int = DEFAULT_RETRIES,
    delay_ms: int = DEFAULT_DELAY_MS,
    **request_kwargs: Any,
) -> Any:
    """
    GET a JSON document, retrying transient failures with a fixed delay.

    A non-2xx status or a transport error counts as a failed attempt. The
    delay is constant between attempts and there is no sleep after the last
    one.

    Args:
        session: aiohttp session to issue requests with
        url: Endpoint URL
        retries: Total number of attempts
        delay_ms: Milliseconds to wait between attempts
        **request_kwargs: Passed through to ``session.get``

    Returns:
        Decoded JSON payload

    Raises:
        FetchExhausted: If every attempt failed
    """
    if retries < 1:
        raise ValueError(f"retries must be at least 1, got {retries}")

    for attempt in range(1, retries + 1):
        try:
            async with session.get(url, **request_kwargs) as resp:
                if 200 <= resp.status < 300:
                    return await resp.json(content_type=None)
                logger.warning(
                    f"GET {url} returned HTTP {resp.status} (attempt {attempt}/{retries})"
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"GET {url} failed: {e} (attempt {attempt}/{retries})")

        if attempt < retries:
            await asyncio.sleep(delay_ms / 1000)

    raise FetchExhausted(url, retries)
