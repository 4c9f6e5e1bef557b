#!/usr/bin/env python3
"""
Status rendering tests: snapshot -> display document -> Telegram HTML
"""

import base64
from datetime import datetime, timezone

import pytest

from uyabot import (
    PLACEHOLDER,
    GameRecord,
    LookupTables,
    PlayerRecord,
    decode_game_name,
    fmt_status_message,
    format_elapsed,
    render_status,
)

NOW = datetime(2024, 3, 1, 20, 0, 0, tzinfo=timezone.utc)

TABLES = LookupTables(
    maps={"Bakisi_Isles": "Bakisi Isles", "Hoven_Gorge": "Hoven Gorge"},
    modes={"CTF": "CTF", "Siege": "Siege"},
    time_limits={"10_minutes": "10 Minutes", "no_time_limit": "None"},
)


def encode(name: bytes) -> str:
    return base64.b64encode(name).decode()


def player(username, region="US", clan="", clan_tag=""):
    return PlayerRecord(username=username, region=region, clan=clan, clan_tag=clan_tag)


def game(name=b"Lobby", lobby=("alice",), **kwargs):
    fields = dict(
        encoded_name=encode(name),
        mode="CTF",
        submode="Chaos",
        map="Bakisi_Isles",
        length_code="10_minutes",
        max_players=8,
        players=[PlayerRecord(username=u) for u in lobby],
    )
    fields.update(kwargs)
    return GameRecord(**fields)


def section_names(document):
    return [s.name for s in document.sections]


def test_title_counts_players():
    document = render_status([player("a"), player("b"), player("c")], [], TABLES, now=NOW)
    assert document.title == "Players Online - 3"

    document = render_status([], [], TABLES, now=NOW)
    assert document.title == "Players Online - 0"


def test_render_is_deterministic():
    players = [player("alice", clan="Nef", clan_tag="NEF"), player("bob", region="EU")]
    games = [game(lobby=("zeta", "alpha"), started_at=NOW.timestamp() - 90)]

    first = render_status(players, games, TABLES, now=NOW)
    second = render_status(players, games, TABLES, now=NOW)

    assert first == second
    assert fmt_status_message(first) == fmt_status_message(second)


def test_header_block_lists_players():
    players = [player("alice", region="US", clan_tag="CT"), player("bob", region="EU")]
    document = render_status(players, [], TABLES, now=NOW)
    assert document.header_block == "\n [US]   alice [CT]  \n [EU]   bob  "


def test_header_block_placeholder_when_empty():
    document = render_status([], [], TABLES, now=NOW)
    assert document.header_block == PLACEHOLDER


def test_clans_deduplicated_first_tag_wins():
    players = [
        player("p1", clan="A", clan_tag="1"),
        player("p2", clan="A", clan_tag="2"),
        player("p3", clan="B", clan_tag="3"),
        player("p4", clan="", clan_tag=""),
    ]
    clans = render_status(players, [], TABLES, now=NOW).sections[0]

    assert clans.name == "Clans Online"
    assert clans.value.splitlines() == ["A [1]", "B [3]"]


def test_no_clans_online():
    clans = render_status([player("solo")], [], TABLES, now=NOW).sections[0]
    assert clans.name == "No Clans online"
    assert clans.value == PLACEHOLDER


def test_active_games_separator_precedes_games():
    document = render_status([], [game()], TABLES, now=NOW)
    separator = document.sections[1]
    assert separator.name == PLACEHOLDER
    assert separator.value == "Active Games:"


def test_empty_lobbies_are_skipped():
    games = [game(name=b"Empty", lobby=()), game(name=b"Full", lobby=("bob",)), game(name=b"Also", lobby=())]
    names = section_names(render_status([], games, TABLES, now=NOW))

    assert names[2:] == ["Full  -  (1/8)"]
    assert "No Games" not in names


def test_all_empty_lobbies_yield_single_no_games():
    games = [game(lobby=()), game(lobby=())]
    document = render_status([], games, TABLES, now=NOW)

    assert section_names(document).count("No Games") == 1
    assert document.sections[-1].name == "No Games"
    assert document.sections[-1].value == PLACEHOLDER
    assert len(document.sections) == 3


def test_no_games_at_all():
    document = render_status([], [], TABLES, now=NOW)
    assert section_names(document)[-1] == "No Games"


def test_lobby_players_sorted_ascending():
    section = render_status([], [game(lobby=("zeta", "alpha", "mike"))], TABLES, now=NOW).sections[2]
    assert section.value.endswith("Players:\n  alpha   \n  mike   \n  zeta  ")


def test_game_section_value():
    section = render_status([], [game(cap_limit=3)], TABLES, now=NOW).sections[2]
    assert section.monospace
    assert section.value == (
        "CTF (Chaos) @ Bakisi Isles\n"
        "Time limit: 10 Minutes\n"
        "Frag/Cap Limit: 3\n"
        "Players:\n  alice  "
    )


def test_frag_and_cap_concatenated():
    section = render_status([], [game(frag_limit=10, cap_limit=5)], TABLES, now=NOW).sections[2]
    assert "\nFrag/Cap Limit: 105\n" in section.value

    section = render_status([], [game(frag_limit=0, cap_limit=0)], TABLES, now=NOW).sections[2]
    assert "\nFrag/Cap Limit: \n" in section.value


def test_siege_omits_limit_label():
    siege = game(mode="Siege", submode="Attrition", map="Hoven_Gorge", length_code="no_time_limit")
    section = render_status([], [siege], TABLES, now=NOW).sections[2]
    assert section.value.splitlines()[:3] == [
        "Siege (Attrition) @ Hoven Gorge",
        "Time limit: None",
        "",
    ]


def test_missing_lookup_entries_degrade_to_empty():
    unknown = game(map="Unknown_Map", length_code="99_minutes", mode="Juggernaut")
    section = render_status([], [unknown], TABLES, now=NOW).sections[2]
    assert section.value.startswith("Juggernaut (Chaos) @ \nTime limit: \n")


def test_game_name_decoded_and_truncated():
    assert decode_game_name(encode(b"ABCDEFGHIJKLMNOPQRSTUVWXYZ")) == "ABCDEFGHIJKLMNOP"
    assert decode_game_name(encode(b"  padded  ")) == "padded"
    assert decode_game_name(encode(b"cool\x00\x00\x00\x00")) == "cool"
    assert decode_game_name("%%%not base64") == ""


def test_game_name_without_padding():
    assert decode_game_name("QUJDREU") == "ABCDE"
    assert decode_game_name("QUJDREU=") == "ABCDE"
    assert decode_game_name(encode(b"Lobby").rstrip("=")) == "Lobby"


def test_game_name_and_counts():
    g = game(name=b"Friday Night", lobby=("a", "b", "c"), max_players=6)
    section = render_status([], [g], TABLES, now=NOW).sections[2]
    assert section.name == "Friday Night  -  (3/6)"


@pytest.mark.parametrize(
    "started_offset, expected",
    [
        (None, ""),
        (3723, " @1:02:03"),
        (59, " @0:00:59"),
        (36000 + 5, " @10:00:05"),
        (-30, ""),
    ],
)
def test_format_elapsed(started_offset, expected):
    started_at = 0 if started_offset is None else NOW.timestamp() - started_offset
    assert format_elapsed(started_at, NOW) == expected


def test_in_progress_suffix_in_section_name():
    g = game(name=b"Ranked", started_at=NOW.timestamp() - 3723)
    section = render_status([], [g], TABLES, now=NOW).sections[2]
    assert section.name == "Ranked  -  (1/8) @1:02:03"


def test_status_message_html():
    players = [player("<script>", clan="A&B", clan_tag="AB")]
    document = render_status(players, [game(lobby=("<script>",))], TABLES, now=NOW)
    message = fmt_status_message(document)

    assert message.startswith("🟠 <b>Players Online - 1</b>")
    assert "&lt;script&gt;" in message
    assert "<script>" not in message
    assert "<b>Clans Online</b>\n<pre>A&amp;B [AB]</pre>" in message
    assert "Active Games:" in message
    assert message.endswith("🕒 <i>Last Updated 2024-03-01 20:00:00 UTC</i>")


def test_status_message_omits_placeholders():
    message = fmt_status_message(render_status([], [], TABLES, now=NOW))
    assert PLACEHOLDER not in message
    assert "<b>No Clans online</b>" in message
    assert "<b>No Games</b>" in message
    assert "<pre>" not in message
