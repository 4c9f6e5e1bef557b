from __future__ import annotations

from telegram import BotCommand
from telegram.ext import Application, CommandHandler
from telegram.request import HTTPXRequest

from .config import BOT_TOKEN, PLAYERS_ONLINE_CHAT_ID, config, logger
from .commands import start_cmd, online_cmd
from .state import STATUS_TASK_KEY, get_publisher_state, get_stop_event
from .watchers import start_status_watcher


async def startup_health_check() -> bool:
    """Perform health check on bot startup"""
    from .api import fetch_snapshot
    from .errors import FetchError
    from .http import make_session

    logger.info("🏥 Running startup health check...")

    try:
        async with make_session() as session:
            snapshot = await fetch_snapshot(session, config.get_api_base_url())
    except FetchError as e:
        logger.error(f"❌ Robo API health check failed on {e.source}: {e.detail}")
        return False

    logger.info(f"✅ Robo API reachable: {len(snapshot.players)} players, {len(snapshot.games)} games")
    return True


def main():
    try:
        config.validate_config()
    except ValueError as e:
        raise SystemExit(f"❌ {e}. Check your .env file.")

    # Configure request with longer timeout to prevent startup failures
    request = HTTPXRequest(
        connection_pool_size=8,
        connect_timeout=30.0,
        read_timeout=30.0,
        write_timeout=30.0,
        pool_timeout=30.0,
    )

    app = Application.builder().token(BOT_TOKEN).request(request).build()

    commands = [
        BotCommand("start", "Show help and available commands"),
        BotCommand("online", "Show players and games online"),
    ]

    async def post_init(application: Application) -> None:
        try:
            logger.info("🔧 Setting up bot commands...")
            await application.bot.set_my_commands(commands)
            logger.info("✅ Bot commands configured successfully")
        except Exception as e:
            logger.error(f"❌ Failed to set bot commands: {e}")
            logger.warning("⚠️ Bot will continue but commands may not be visible in Telegram")

        await startup_health_check()

        if not PLAYERS_ONLINE_CHAT_ID:
            return
        application.bot_data[STATUS_TASK_KEY] = start_status_watcher(
            application.bot,
            PLAYERS_ONLINE_CHAT_ID,
            get_publisher_state(application.bot_data),
            get_stop_event(application.bot_data),
        )

    async def post_shutdown(application: Application) -> None:
        get_stop_event(application.bot_data).set()
        task = application.bot_data.get(STATUS_TASK_KEY)
        if task is not None:
            await task

    app.post_init = post_init
    app.post_shutdown = post_shutdown

    app.add_handler(CommandHandler("start", start_cmd))
    app.add_handler(CommandHandler("online", online_cmd))

    app.run_polling(drop_pending_updates=True)
