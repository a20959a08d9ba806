"""Validate, repair and format message timestamps.

Every function takes an optional ``now`` so callers (and tests) can pin the
clock. Without it the wall clock is read at call time.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

# Numeric epochs at or above this magnitude are milliseconds
_MILLISECONDS_THRESHOLD = 1e11


def current_time() -> datetime:
    """Return the current wall-clock time in the local time zone."""
    return datetime.now().astimezone()


def parse_timestamp(raw: Any) -> datetime | None:
    """Parse a raw timestamp into an aware local datetime, or None."""
    if raw is None or isinstance(raw, bool):
        return None

    try:
        if isinstance(raw, datetime):
            parsed = raw
        elif isinstance(raw, (int, float)):
            seconds = raw / 1000 if abs(raw) >= _MILLISECONDS_THRESHOLD else raw
            parsed = datetime.fromtimestamp(seconds, tz=timezone.utc)
        elif isinstance(raw, str):
            text = raw.strip()
            if not text:
                return None
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
        else:
            return None
        # Naive values are taken as local time
        return parsed.astimezone()
    except (ValueError, OverflowError, OSError):
        return None


def is_valid_timestamp(raw: Any, now: datetime | None = None) -> bool:
    """A timestamp is valid if it parses and is not in the future."""
    parsed = parse_timestamp(raw)
    if parsed is None:
        return False
    return parsed <= (now or current_time()).astimezone()


def normalize(raw: Any, now: datetime | None = None) -> datetime:
    """Return the parsed timestamp, or ``now`` if it is missing, invalid or in the future."""
    now = (now or current_time()).astimezone()
    parsed = parse_timestamp(raw)
    if parsed is None or parsed > now:
        return now
    return parsed


def format_date_time(ts: datetime) -> tuple[str, str]:
    """Split a timestamp into local ``YYYY-MM-DD`` and ``HH:MM`` display strings."""
    local = ts.astimezone()
    return local.strftime("%Y-%m-%d"), local.strftime("%H:%M")


def format_file_prefix(ts: datetime) -> str:
    return ts.astimezone().strftime("%Y-%m-%d_%H%M")
