from __future__ import annotations

import base64
import binascii
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .lookups import LookupTables
from .models import PLACEHOLDER, DisplayDocument, GameRecord, PlayerRecord, Section


def _clan_tag(player: PlayerRecord) -> str:
    return f"[{player.clan_tag}]" if player.clan_tag != "" else ""


def build_header_block(players: List[PlayerRecord]) -> str:
    if not players:
        return PLACEHOLDER
    return " ".join(
        f"\n {('[' + p.region + ']').ljust(6)} {p.username} {_clan_tag(p)} " for p in players
    )


def build_clans_section(players: List[PlayerRecord]) -> Section:
    # First tag seen for a clan wins; dicts keep insertion order
    clans: Dict[str, str] = {}
    for p in players:
        if p.clan != "" and p.clan not in clans:
            clans[p.clan] = p.clan_tag

    if not clans:
        return Section(name="No Clans online", value=PLACEHOLDER)
    lines = [f"{clan} [{tag}]" for clan, tag in clans.items()]
    return Section(name="Clans Online", value="\n".join(lines), monospace=True)


def decode_game_name(encoded_name: str) -> str:
    """Decode a base64 lobby name, keeping the first 16 characters."""
    # Missing "=" padding is tolerated
    cleaned = "".join(encoded_name.split()).rstrip("=")
    try:
        raw = base64.b64decode(cleaned + "=" * (-len(cleaned) % 4))
    except (binascii.Error, ValueError):
        return ""
    name = raw.decode("ascii", errors="replace")[:16]
    return name.replace("\x00", "").strip()


def format_elapsed(started_at: float, now: datetime) -> str:
    """Return ``" @H:MM:SS"`` since ``started_at``, or "" if not started."""
    if started_at <= 0:
        return ""
    elapsed = int(now.timestamp() - started_at)
    if elapsed < 0:
        return ""
    hours, rem = divmod(elapsed, 3600)
    minutes, seconds = divmod(rem, 60)
    return f" @{hours}:{minutes:02d}:{seconds:02d}"


def _limit_line(game: GameRecord) -> str:
    label = "" if game.mode == "Siege" else "Frag/Cap Limit: "
    frag = str(game.frag_limit) if game.frag_limit else ""
    cap = str(game.cap_limit) if game.cap_limit else ""
    return f"{label}{frag}{cap}"


def build_game_section(game: GameRecord, tables: LookupTables, now: datetime) -> Section:
    names = sorted(p.username for p in game.players)
    name = (
        decode_game_name(game.encoded_name)
        + f"  -  ({len(game.players)}/{game.max_players}){format_elapsed(game.started_at, now)}"
    )
    value = (
        f"{tables.mode_name(game.mode)} ({game.submode}) @ {tables.map_name(game.map)}\n"
        f"Time limit: {tables.time_limit_name(game.length_code)}\n"
        f"{_limit_line(game)}\n"
        "Players:" + " ".join(f"\n  {n}  " for n in names)
    )
    return Section(name=name, value=value, monospace=True)


def render_status(
    players: List[PlayerRecord],
    games: List[GameRecord],
    tables: LookupTables,
    now: Optional[datetime] = None,
) -> DisplayDocument:
    """Build the "Players Online" document for one snapshot.

    Games whose lobby is empty are skipped; when none remain a single
    "No Games" section is emitted instead.
    """
    now = now or datetime.now(timezone.utc)

    sections: List[Section] = [build_clans_section(players)]
    sections.append(Section(name=PLACEHOLDER, value="Active Games:"))

    game_sections = [build_game_section(g, tables, now) for g in games if g.players]
    if game_sections:
        sections.extend(game_sections)
    else:
        sections.append(Section(name="No Games", value=PLACEHOLDER))

    return DisplayDocument(
        title=f"Players Online - {len(players)}",
        header_block=build_header_block(players),
        sections=sections,
        timestamp=now,
    )
