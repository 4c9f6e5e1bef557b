"""UYA Online Bot package.

Keeps one live "Players Online" message in a Telegram chat, built from the
game server's Robo API:
- config: environment and logging
- http: session and request helpers
- api: Robo API surface (players, games)
- models: typed records and the display document
- lookups: map / mode / time limit display names
- render: snapshot to display document
- formatting: display document to Telegram HTML
- watchers: publisher, status cycle and loop
- commands: telegram command handlers
- app: application bootstrap and wiring
"""

from .config import Config, BASE, BOT_TOKEN, PLAYERS_ONLINE_CHAT_ID, POLL_SECS
from .errors import UyaBotError, FetchError, PublishError
from .http import make_session, fetch_json, build_headers
from .api import get_players, get_games, fetch_snapshot
from .models import PLACEHOLDER, PlayerRecord, GameRecord, Snapshot, Section, DisplayDocument
from .lookups import LookupTables, load_lookup_tables, load_bundled_tables
from .render import render_status, decode_game_name, format_elapsed
from .formatting import fmt_status_message
from .state import PublisherState
from .watchers import (
    resolve_chat,
    publish_status,
    build_status_document,
    check_online_players,
    status_loop,
    start_status_watcher,
)
from .commands import start_cmd, online_cmd
from .app import main, startup_health_check

__all__ = [
    # Config / HTTP
    "Config", "BASE", "BOT_TOKEN", "PLAYERS_ONLINE_CHAT_ID", "POLL_SECS",
    "make_session", "fetch_json", "build_headers",
    # Errors
    "UyaBotError", "FetchError", "PublishError",
    # API / Records
    "get_players", "get_games", "fetch_snapshot",
    "PLACEHOLDER", "PlayerRecord", "GameRecord", "Snapshot", "Section", "DisplayDocument",
    # Rendering
    "LookupTables", "load_lookup_tables", "load_bundled_tables",
    "render_status", "decode_game_name", "format_elapsed", "fmt_status_message",
    # Publishing
    "PublisherState", "resolve_chat", "publish_status", "build_status_document",
    "check_online_players", "status_loop", "start_status_watcher",
    # Commands / App
    "start_cmd", "online_cmd", "main", "startup_health_check",
]
