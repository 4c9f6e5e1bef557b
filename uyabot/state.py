from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional


@dataclass
class PublisherState:
    """Handle of the live status message, reused for in-place edits.

    Lives as long as the process; it is never persisted or cleared, so a
    message deleted by hand makes later edits fail until restart.
    """
    message_id: Optional[int] = None


# Runtime handles stored in application.bot_data
PUBLISHER_STATE_KEY = "publisher_state"
STATUS_TASK_KEY = "status_task"
STOP_EVENT_KEY = "status_stop_event"


def get_publisher_state(bot_data: dict) -> PublisherState:
    return bot_data.setdefault(PUBLISHER_STATE_KEY, PublisherState())


def get_stop_event(bot_data: dict) -> asyncio.Event:
    return bot_data.setdefault(STOP_EVENT_KEY, asyncio.Event())
