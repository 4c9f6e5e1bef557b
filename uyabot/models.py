from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, NamedTuple, Optional

from .errors import FetchError

# Zero-width space; Telegram and the renderer treat it as "nothing to show"
PLACEHOLDER = "\u200b"


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass(frozen=True)
class PlayerRecord:
    username: str
    region: str = ""
    clan: str = ""
    clan_tag: str = ""
    status: int = 0

    @classmethod
    def from_api(cls, item: Dict[str, Any], source: str = "players") -> "PlayerRecord":
        if not isinstance(item, dict) or not item.get("username"):
            raise FetchError(source, f"Player record without username: {item!r}"[:300])
        try:
            status = int(item.get("status") or 0)
        except (TypeError, ValueError):
            status = 0
        return cls(
            username=_str(item["username"]),
            region=_str(item.get("region")),
            clan=_str(item.get("clan")),
            clan_tag=_str(item.get("clan_tag")),
            status=status,
        )


@dataclass(frozen=True)
class GameRecord:
    encoded_name: str
    mode: str
    submode: str
    map: str
    length_code: str
    max_players: int
    started_at: float = 0
    frag_limit: Optional[int] = None
    cap_limit: Optional[int] = None
    players: List[PlayerRecord] = field(default_factory=list)

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "GameRecord":
        if not isinstance(item, dict):
            raise FetchError("games", f"Game record is not an object: {item!r}"[:300])
        try:
            lobby = item.get("players") or []
            return cls(
                encoded_name=_str(item["game_name"]),
                mode=_str(item.get("game_mode")),
                submode=_str(item.get("submode")),
                map=_str(item.get("map")),
                length_code=_str(item.get("game_length")),
                max_players=int(item.get("max_players") or 0),
                started_at=float(item.get("started_date") or 0),
                frag_limit=_optional_int(item.get("frag")),
                cap_limit=_optional_int(item.get("cap_limit")),
                players=[PlayerRecord.from_api(p, source="games") for p in lobby],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise FetchError("games", f"Malformed game record ({e}): {item!r}"[:300]) from e


class Snapshot(NamedTuple):
    players: List[PlayerRecord]
    games: List[GameRecord]


@dataclass(frozen=True)
class Section:
    name: str
    value: str
    monospace: bool = False


@dataclass(frozen=True)
class DisplayDocument:
    title: str
    header_block: str
    sections: List[Section]
    timestamp: datetime
    accent: str = "#FFA000"
