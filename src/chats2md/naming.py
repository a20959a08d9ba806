"""Derive output file names from session metadata."""

from __future__ import annotations

import re
from datetime import datetime

from .config import MARKDOWN_SUFFIX, MAX_NAME_LENGTH, PLACEHOLDER_NAME
from .models import ChatSession
from .timestamps import current_time, format_file_prefix

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_UNDERSCORE_RUNS = re.compile(r"_+")


def sanitize_file_name(name: str, max_length: int = MAX_NAME_LENGTH) -> str:
    """Reduce a title to ``[A-Za-z0-9_-]``, at most ``max_length`` characters.

    Falls back to the placeholder name when nothing usable remains.
    """
    sanitized = _UNSAFE_CHARS.sub("_", name)
    sanitized = _UNDERSCORE_RUNS.sub("_", sanitized).strip("_")
    if len(sanitized) > max_length:
        # Re-strip so truncation cannot leave a trailing underscore
        sanitized = sanitized[:max_length].rstrip("_")
    return sanitized or PLACEHOLDER_NAME


def build_file_name(
    session: ChatSession,
    now: datetime | None = None,
    max_length: int = MAX_NAME_LENGTH,
) -> str:
    """Build ``YYYY-MM-DD_HHMM_<title>.md`` from the first message time and the title."""
    if session.messages:
        started = session.messages[0].timestamp
    else:
        started = now or current_time()
    prefix = format_file_prefix(started)
    return f"{prefix}_{sanitize_file_name(session.title, max_length)}{MARKDOWN_SUFFIX}"


def unique_file_name(file_name: str, taken: set[str]) -> str:
    """Append ``_2``, ``_3``, ... before the suffix until the name is not in ``taken``."""
    if file_name not in taken:
        return file_name

    stem = file_name.removesuffix(MARKDOWN_SUFFIX)
    counter = 2
    while f"{stem}_{counter}{MARKDOWN_SUFFIX}" in taken:
        counter += 1
    return f"{stem}_{counter}{MARKDOWN_SUFFIX}"
