from __future__ import annotations

import asyncio
from typing import Any, List

import aiohttp

from .config import logger
from .errors import FetchError
from .http import fetch_json
from .models import GameRecord, PlayerRecord, Snapshot


def _expect_list(data: Any, source: str) -> List[Any]:
    if not isinstance(data, list):
        raise FetchError(source, f"Expected a JSON array, got {type(data).__name__}")
    return data


async def get_players(session: aiohttp.ClientSession, base_url: str) -> List[PlayerRecord]:
    data = await fetch_json(session, f"{base_url}/robo/players", source="players")
    return [PlayerRecord.from_api(item) for item in _expect_list(data, "players")]


async def get_games(session: aiohttp.ClientSession, base_url: str) -> List[GameRecord]:
    data = await fetch_json(session, f"{base_url}/robo/games", source="games")
    return [GameRecord.from_api(item) for item in _expect_list(data, "games")]


async def fetch_snapshot(session: aiohttp.ClientSession, base_url: str) -> Snapshot:
    """Fetch online players and game lobbies; both must succeed."""
    base_url = base_url.rstrip("/")
    players, games = await asyncio.gather(
        get_players(session, base_url),
        get_games(session, base_url),
        return_exceptions=True,
    )
    # Report the players failure first when both endpoints fail
    for result in (players, games):
        if isinstance(result, BaseException):
            raise result
    logger.debug(f"Fetched snapshot: {len(players)} players, {len(games)} games")
    return Snapshot(players=players, games=games)
