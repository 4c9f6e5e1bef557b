import os
import logging


def parse_chat_id(value: str) -> int | str:
    """Numeric ids become ints; "@channelusername" is kept as a string."""
    value = value.strip()
    if not value:
        return 0
    if value.lstrip("-").isdigit():
        return int(value)
    return value


def load_env() -> None:
    """Load environment variables from a .env file if available."""
    from dotenv import load_dotenv
    load_dotenv()


# Load env early
load_env()

# Logging configuration
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, log_level, logging.INFO),
)
logger = logging.getLogger(__name__)

# Reduce noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("telegram.ext.ExtBot").setLevel(logging.WARNING)
logging.getLogger("telegram.ext.Updater").setLevel(logging.WARNING)
logging.getLogger("telegram.ext.Application").setLevel(logging.WARNING)
logging.getLogger("telegram.bot").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)


class Config:
    """Application configuration read from the environment."""

    # Telegram Bot Configuration
    BOT_TOKEN: str | None = os.getenv("BOT_TOKEN")

    # Chat that holds the live "Players Online" message: numeric id or @channelusername (0 disables it)
    PLAYERS_ONLINE_CHAT_ID: int | str = parse_chat_id(os.getenv("UYA_PLAYERS_ONLINE_CHAT_ID", ""))

    # Robo API Configuration
    UYA_API_URL: str = os.getenv("UYA_SERVER_API_URL", "").strip().rstrip("/")

    # Status loop interval
    POLL_SECS: int = int(os.getenv("POLL_SECS", "30"))

    # Map / mode / time limit display names
    LOOKUPS_URL: str = os.getenv("LOOKUPS_URL", "").strip()
    LOOKUPS_CACHE_TTL: int = int(os.getenv("LOOKUPS_CACHE_TTL", "86400"))  # 24 hours default

    @classmethod
    def validate_config(cls) -> None:
        if not cls.BOT_TOKEN:
            raise ValueError("BOT_TOKEN environment variable is required")
        if not cls.UYA_API_URL:
            raise ValueError("UYA_SERVER_API_URL environment variable is required")
        if not cls.PLAYERS_ONLINE_CHAT_ID:
            logger.warning("UYA_PLAYERS_ONLINE_CHAT_ID not configured - status message disabled")
        if cls.POLL_SECS <= 0:
            raise ValueError("POLL_SECS must be a positive number of seconds")

    @classmethod
    def get_api_base_url(cls) -> str:
        logger.info(f"Using Robo API endpoint: {cls.UYA_API_URL}")
        return cls.UYA_API_URL


# Expose commonly used constants
config = Config()
BASE = config.UYA_API_URL
BOT_TOKEN = config.BOT_TOKEN
PLAYERS_ONLINE_CHAT_ID = config.PLAYERS_ONLINE_CHAT_ID
POLL_SECS = config.POLL_SECS
LOOKUPS_URL = config.LOOKUPS_URL
LOOKUPS_CACHE_TTL = config.LOOKUPS_CACHE_TTL
