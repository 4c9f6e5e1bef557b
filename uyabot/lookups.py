"""
Display name tables for maps, game modes and time limits.

The Robo API reports maps and time limits as codes. The human-readable names
are configuration data: a bundled JSON file, optionally replaced by a remote
JSON document at ``LOOKUPS_URL``.
"""

import asyncio
import json
import logging
import os
from dataclasses import dataclass, field
from functools import wraps
from typing import Dict

import aiohttp
from cachetools import TTLCache

from .config import LOOKUPS_URL, LOOKUPS_CACHE_TTL

logger = logging.getLogger(__name__)

BUNDLED_LOOKUPS_PATH = os.path.join(os.path.dirname(__file__), "data", "lookups.json")
LOOKUPS_API_TIMEOUT = int(os.getenv("LOOKUPS_API_TIMEOUT", "10"))

# Tables rarely change, keep them for a long time
lookup_cache = TTLCache(maxsize=4, ttl=LOOKUPS_CACHE_TTL)


@dataclass(frozen=True)
class LookupTables:
    maps: Dict[str, str] = field(default_factory=dict)
    modes: Dict[str, str] = field(default_factory=dict)
    time_limits: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict) -> "LookupTables":
        return cls(
            maps={str(k): str(v) for k, v in (data.get("maps") or {}).items()},
            modes={str(k): str(v) for k, v in (data.get("modes") or {}).items()},
            time_limits={str(k): str(v) for k, v in (data.get("time_limits") or {}).items()},
        )

    def map_name(self, code: str) -> str:
        return self.maps.get(code, "")

    def mode_name(self, code: str) -> str:
        return self.modes.get(code, code)

    def time_limit_name(self, code: str) -> str:
        return self.time_limits.get(code, "")


def cached_lookup_call(cache_key_func):
    """Cache the result of an async loader in ``lookup_cache``."""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            key = cache_key_func(*args, **kwargs)

            if key in lookup_cache:
                logger.debug(f"Lookup cache hit for: {key}")
                return lookup_cache[key]

            logger.debug(f"Lookup cache miss, loading: {key}")
            result = await func(*args, **kwargs)

            lookup_cache[key] = result
            return result
        return wrapper
    return decorator


def load_bundled_tables(path: str = BUNDLED_LOOKUPS_PATH) -> LookupTables:
    with open(path, "r", encoding="utf-8") as f:
        return LookupTables.from_dict(json.load(f))


async def _load_remote_tables(url: str) -> LookupTables:
    timeout = aiohttp.ClientTimeout(total=LOOKUPS_API_TIMEOUT)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        logger.debug(f"Fetching lookup tables from: {url}")
        async with session.get(url) as response:
            response.raise_for_status()
            data = await response.json(content_type=None)
    return LookupTables.from_dict(data)


@cached_lookup_call(lambda url=None: f"lookups:{url if url is not None else LOOKUPS_URL}")
async def load_lookup_tables(url: str | None = None) -> LookupTables:
    """
    Load the display name tables.

    Args:
        url: Remote JSON document to use instead of ``LOOKUPS_URL``. An empty
            value selects the bundled tables.

    Returns:
        LookupTables; the bundled tables when the remote source fails
    """
    source = LOOKUPS_URL if url is None else url
    if source:
        try:
            tables = await _load_remote_tables(source)
            logger.info(
                f"Loaded {len(tables.maps)} maps and {len(tables.time_limits)} time limits "
                f"from {source} (cached for {LOOKUPS_CACHE_TTL // 3600}h)"
            )
            return tables
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError, AttributeError) as e:
            logger.error(f"Error loading lookup tables from {source}: {e}")

    return load_bundled_tables()
