from __future__ import annotations

import asyncio
from typing import Any, Optional

import aiohttp
from telegram.constants import ChatMemberStatus, ChatType, ParseMode
from telegram.error import BadRequest, Forbidden, TelegramError

from .api import fetch_snapshot
from .config import BASE, POLL_SECS, logger
from .errors import FetchError, PublishError
from .formatting import fmt_status_message
from .http import make_session
from .lookups import load_lookup_tables
from .models import DisplayDocument
from .render import render_status
from .state import PublisherState

POSTABLE_CHAT_TYPES = {ChatType.PRIVATE, ChatType.GROUP, ChatType.SUPERGROUP, ChatType.CHANNEL}


def _member_can_post(chat, member) -> bool:
    status = member.status
    if status == ChatMemberStatus.OWNER:
        return True
    if status == ChatMemberStatus.ADMINISTRATOR:
        # Channel admins need the explicit posting right
        return chat.type != ChatType.CHANNEL or getattr(member, "can_post_messages", None) is not False
    if status == ChatMemberStatus.RESTRICTED:
        return getattr(member, "can_send_messages", False) is True
    if status == ChatMemberStatus.MEMBER:
        if chat.type == ChatType.CHANNEL:
            return False
        permissions = getattr(chat, "permissions", None)
        return permissions is None or permissions.can_send_messages is not False
    return False


async def resolve_chat(bot, chat_id: int | str) -> Optional[Any]:
    """Return the chat if the bot can post the status there, else None.

    Raises PublishError when Telegram cannot be reached.
    """
    if not chat_id:
        return None
    try:
        chat = await bot.get_chat(chat_id)
        if chat.type not in POSTABLE_CHAT_TYPES:
            logger.debug(f"Status chat {chat_id} has unsupported type {chat.type}")
            return None
        if chat.type == ChatType.PRIVATE:
            return chat
        member = await bot.get_chat_member(chat_id, bot.id)
    except (BadRequest, Forbidden) as e:
        logger.debug(f"Status chat {chat_id} unavailable: {e}")
        return None
    except TelegramError as e:
        raise PublishError(chat_id, str(e)) from e

    if not _member_can_post(chat, member):
        logger.debug(f"Bot may not post in status chat {chat_id} (status {member.status})")
        return None
    return chat


async def publish_status(bot, chat_id: int | str, document: DisplayDocument, state: PublisherState) -> int:
    """Edit the tracked status message, or send it the first time."""
    message = fmt_status_message(document)

    if state.message_id is not None:
        try:
            await bot.edit_message_text(
                chat_id=chat_id,
                message_id=state.message_id,
                text=message,
                parse_mode=ParseMode.HTML,
            )
            logger.debug(f"Edited status message {state.message_id} in chat {chat_id}")
        except BadRequest as e:
            if "message is not modified" in str(e).lower():
                return state.message_id
            raise PublishError(chat_id, str(e)) from e
        except TelegramError as e:
            raise PublishError(chat_id, str(e)) from e
        return state.message_id

    try:
        sent_message = await bot.send_message(chat_id, message, parse_mode=ParseMode.HTML)
    except TelegramError as e:
        raise PublishError(chat_id, str(e)) from e
    state.message_id = sent_message.message_id
    logger.info(f"Sent new status message {state.message_id} to chat {chat_id}")
    return state.message_id


async def build_status_document(
    session: aiohttp.ClientSession, base_url: str = BASE
) -> DisplayDocument:
    """Fetch one snapshot and render it."""
    snapshot = await fetch_snapshot(session, base_url)
    tables = await load_lookup_tables()
    return render_status(snapshot.players, snapshot.games, tables)


async def check_online_players(
    bot,
    chat_id: int | str,
    state: PublisherState,
    session: Optional[aiohttp.ClientSession] = None,
    base_url: str = BASE,
) -> None:
    """Run one status cycle: fetch, render and publish.

    Returns silently when the chat cannot be used. FetchError and
    PublishError propagate to the caller.
    """
    chat = await resolve_chat(bot, chat_id)
    if chat is None:
        return

    if session is None:
        async with make_session() as own_session:
            document = await build_status_document(own_session, base_url)
    else:
        document = await build_status_document(session, base_url)

    await publish_status(bot, chat_id, document, state)
    logger.debug(f"Status cycle done for chat {chat_id}: {document.title}")


async def status_loop(bot, chat_id: int | str, state: PublisherState, stop_event: asyncio.Event,
                      poll_secs: float = POLL_SECS) -> None:
    """Run status cycles every ``poll_secs`` until ``stop_event`` is set."""
    logger.info(f"Started status loop for chat {chat_id} every {poll_secs}s")
    try:
        while not stop_event.is_set():
            try:
                await check_online_players(bot, chat_id, state)
            except FetchError as e:
                logger.error(f"Robo API error ({e.source}): {e.detail}")
            except PublishError as e:
                logger.error(f"Status publish error for chat {e.chat_id}: {e.detail}")
            except Exception as e:
                logger.exception(f"Status cycle error for chat {chat_id}: {e}")

            try:
                await asyncio.wait_for(stop_event.wait(), timeout=poll_secs)
            except asyncio.TimeoutError:
                pass
    finally:
        logger.info(f"Status loop stopped for chat {chat_id}")


def start_status_watcher(bot, chat_id: int | str, state: PublisherState, stop_event: asyncio.Event) -> asyncio.Task:
    """Start the status loop as a background task."""
    async def runner():
        await status_loop(bot, chat_id, state, stop_event)

    return asyncio.create_task(runner())
