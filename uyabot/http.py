from __future__ import annotations

import asyncio
import aiohttp
from typing import Any, Dict
from .config import logger
from .errors import FetchError


def build_headers() -> Dict[str, str]:
    return {
        "accept": "application/json",
        "user-agent": "uya-online-bot/1.0",
        "pragma": "no-cache",
        "cache-control": "no-cache",
    }


def make_session() -> aiohttp.ClientSession:
    timeout = aiohttp.ClientTimeout(total=25)
    return aiohttp.ClientSession(
        timeout=timeout,
        headers=build_headers(),
        trust_env=True,
    )


async def fetch_json(session: aiohttp.ClientSession, url: str, source: str) -> Any:
    """GET ``url`` and decode its JSON body; ``source`` names the endpoint in errors."""
    logger.debug(f"API request: {url}")
    try:
        async with session.get(url) as r:
            if not r.ok:
                txt = await r.text()
                logger.error(f"API error for {url}: {r.status}")
                raise FetchError(source, f"HTTP {r.status} :: {txt[:300]}")
            logger.debug(f"API success: {url}")
            return await r.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"API request failed for {url}: {e!r}")
        raise FetchError(source, f"Request failed: {e!r}") from e
    except ValueError as e:
        raise FetchError(source, f"Invalid JSON from {url}: {e}") from e
