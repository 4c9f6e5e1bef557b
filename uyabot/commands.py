from __future__ import annotations

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from .config import PLAYERS_ONLINE_CHAT_ID, logger
from .errors import FetchError
from .formatting import escape_html, fmt_status_message
from .http import make_session
from .watchers import build_status_document


async def start_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE):
    tracked = (
        f"📌 Live status is kept in chat <code>{PLAYERS_ONLINE_CHAT_ID}</code>"
        if PLAYERS_ONLINE_CHAT_ID
        else "❓ No live status chat configured"
    )
    await update.message.reply_text(
        "🤖 <b>UYA Online Bot</b>\n\n"
        f"{tracked}\n\n"
        "<b>Commands:</b>\n"
        "/online - Show players and games online right now\n"
        "/start - Show this help",
        parse_mode=ParseMode.HTML,
    )


async def online_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Reply with a one-off status snapshot; the live message is left alone."""
    try:
        async with make_session() as session:
            document = await build_status_document(session)
    except FetchError as e:
        logger.warning(f"/online failed for chat {update.effective_chat.id}: {e}")
        await update.message.reply_text(
            f"❌ Could not reach the game server ({escape_html(e.source)}).",
            parse_mode=ParseMode.HTML,
        )
        return

    await update.message.reply_text(fmt_status_message(document), parse_mode=ParseMode.HTML)
