from __future__ import annotations

from datetime import datetime
from typing import List

from .models import PLACEHOLDER, DisplayDocument, Section

# Telegram has no embed colors, mark the accent with a matching emoji
ACCENT_EMOJIS = {
    "#FFA000": "🟠",
}


def escape_html(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _is_blank(text: str) -> bool:
    return text.replace(PLACEHOLDER, "").strip() == ""


def _fmt_block(text: str) -> str:
    # <pre> keeps leading spaces and newlines; drop the leading newline of the first entry
    return f"<pre>{escape_html(text.lstrip(chr(10)))}</pre>"


def format_section(section: Section) -> str:
    lines: List[str] = []
    if not _is_blank(section.name):
        lines.append(f"<b>{escape_html(section.name)}</b>")
    if not _is_blank(section.value):
        if section.monospace:
            lines.append(_fmt_block(section.value))
        else:
            lines.append(escape_html(section.value))
    return "\n".join(lines)


def format_timestamp(ts: datetime) -> str:
    return ts.strftime("%Y-%m-%d %H:%M:%S UTC")


def fmt_status_message(document: DisplayDocument) -> str:
    accent = ACCENT_EMOJIS.get(document.accent.upper(), "🎮")
    parts: List[str] = [f"{accent} <b>{escape_html(document.title)}</b>"]

    if not _is_blank(document.header_block):
        parts.append(_fmt_block(document.header_block))

    for section in document.sections:
        text = format_section(section)
        if text:
            parts.append(text)

    parts.append(f"🕒 <i>Last Updated {format_timestamp(document.timestamp)}</i>")
    return "\n\n".join(parts)
