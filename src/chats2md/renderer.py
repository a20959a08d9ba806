"""Render a ChatSession as flat Markdown.

System messages are wrapped in a fence tagged ``system``. Content that itself
contains a triple backtick closes that fence early; the content is not escaped.
"""

from __future__ import annotations

from .config import EMPTY_SESSION_PLACEHOLDER
from .models import ChatSession, Link, Message, Role
from .timestamps import format_date_time


def heading_label(message: Message) -> str:
    """Label for a message heading: the model for assistant replies, else the role."""
    if message.kind is Role.ASSISTANT and message.model:
        return message.model
    return message.role.upper()


def _render_links(marker: str, links: list[Link], bullet: str = "") -> str:
    lines = [f"\n{marker}\n"]
    lines.extend(f"{bullet}[{link.label}]({link.url})\n" for link in links)
    return "".join(lines)


def render_message(message: Message, time: str) -> str:
    """Render one message block, without its date heading or trailing separator."""
    if message.kind is Role.SYSTEM:
        return f"```system\n{message.content}\n```\n"

    parts = [f"### {heading_label(message)} | {time}\n", f"{message.content}\n"]

    if message.attachments.has_pictures:
        parts.append("\n{pictures}\n")
    if message.attachments.has_files:
        parts.append("\n{files}\n")
    if message.links:
        parts.append(_render_links("{links}", message.links))
    if message.web_search_links:
        parts.append(_render_links("{web search links}", message.web_search_links, bullet="- "))

    return "".join(parts)


def render_session(session: ChatSession) -> str:
    """Render a whole session, emitting a date heading whenever the day changes."""
    if not session.messages:
        return f"{EMPTY_SESSION_PLACEHOLDER}\n"

    parts: list[str] = []
    last_date = ""

    for message in session.messages:
        date, time = format_date_time(message.timestamp)
        if date != last_date:
            parts.append(f"## {date}\n\n")
            last_date = date
        parts.append(render_message(message, time))
        parts.append("\n")

    return "".join(parts)
