from __future__ import annotations


class UyaBotError(Exception):
    """Base class for errors raised by the bot."""


class FetchError(UyaBotError):
    """A Robo API endpoint answered non-ok or returned an unusable payload."""

    def __init__(self, source: str, detail: str):
        self.source = source
        self.detail = detail
        super().__init__(f"Failed to fetch {source}: {detail}")


class PublishError(UyaBotError):
    """The status message could not be sent or edited."""

    def __init__(self, chat_id: int | str, detail: str):
        self.chat_id = chat_id
        self.detail = detail
        super().__init__(f"Failed to publish status to chat {chat_id}: {detail}")
