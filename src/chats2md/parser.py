"""Parse chat export files into canonical ChatSession models.

Two source schemas are supported:

- Format-A: ``{"chat-sessions": [{"name": ..., "messages": [...]}, ...]}``,
  or a single session with a top-level ``messages`` array.
- Format-B: ``{"title": ..., "log": [...]}``, either as a plain JSON file or
  as the first ``.json`` entry of a zip archive.
"""

from __future__ import annotations

import json
import logging
import math
import zipfile
import zlib
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from .config import FORMAT_A, FORMAT_B, PLACEHOLDER_NAME, USER_ROLE_ALIASES
from .errors import InputReadError, ParseError, UnknownFormatError
from .models import Attachments, ChatSession, ConversionWarning, Link, Message, ParseResult
from .timestamps import current_time, normalize

logger = logging.getLogger(__name__)

Adapter = Callable[..., ParseResult]


def _warn(
    warnings: list[ConversionWarning], kind: str, message: str, session: str | None = None
) -> None:
    logger.warning("%s%s", f"{session}: " if session else "", message)
    warnings.append(ConversionWarning(kind=kind, message=message, session=session))


def _first_present(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _normalize_role(raw: str) -> str:
    role = raw.strip().lower()
    return "user" if role in USER_ROLE_ALIASES else role


def _count(value: Any) -> int:
    """Reduce an attachment field (list, string, number or flag) to a presence count."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0) if math.isfinite(value) else 0
    if isinstance(value, (str, list, tuple, dict)):
        return len(value)
    return 0


def _extract_links(raw: Any) -> list[Link]:
    if not isinstance(raw, list):
        return []
    links: list[Link] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        url = item.get("url")
        if not isinstance(url, str) or not url:
            continue
        title = item.get("title")
        links.append(Link(title=title if isinstance(title, str) and title else None, url=url))
    return links


def _extract_web_search_links(data: dict[str, Any]) -> list[Link]:
    browsing = data.get("webBrowsing")
    if isinstance(browsing, dict) and browsing.get("links"):
        return _extract_links(browsing["links"])
    return _extract_links(data.get("webSearchLinks"))


def _build_message(
    data: Any,
    now: datetime,
    warnings: list[ConversionWarning],
    session: str,
    position: int,
    role_keys: tuple[str, ...] = ("role",),
    content_keys: tuple[str, ...] = ("content",),
    timestamp_keys: tuple[str, ...] = ("timestamp",),
) -> Message | None:
    """Build one Message, or return None (with a warning) if it must be skipped."""
    if not isinstance(data, dict):
        _warn(warnings, "message_field", f"message {position} is not an object, skipped", session)
        return None

    role = _first_present(data, *role_keys)
    if not isinstance(role, str) or not role.strip():
        _warn(warnings, "message_field", f"message {position} has no role, skipped", session)
        return None

    content = _first_present(data, *content_keys)
    if content is None:
        content = ""
    elif not isinstance(content, str):
        content = json.dumps(content, ensure_ascii=False)

    model = data.get("model")

    return Message(
        role=_normalize_role(role),
        content=content,
        timestamp=normalize(_first_present(data, *timestamp_keys), now=now),
        model=model if isinstance(model, str) and model else None,
        attachments=Attachments(
            pictures=_count(data.get("pictures")),
            files=_count(data.get("files")),
        ),
        links=_extract_links(data.get("links")),
        web_search_links=_extract_web_search_links(data),
    )


def _build_messages(
    raw_messages: list[Any],
    now: datetime,
    warnings: list[ConversionWarning],
    session: str,
    **keys: tuple[str, ...],
) -> list[Message]:
    messages: list[Message] = []
    for position, raw in enumerate(raw_messages, start=1):
        message = _build_message(raw, now, warnings, session, position, **keys)
        if message is not None:
            messages.append(message)
    return messages


def _load_json_text(text: str, path: Path) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Not valid JSON: {path} ({e})") from e


def _read_json_file(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"Cannot read {path}: {e}") from e
    return _load_json_text(text, path)


def _file_title(path: Path) -> str:
    """Title taken from the input file name, never empty."""
    return path.stem.strip() or PLACEHOLDER_NAME


def _title_of(data: dict[str, Any]) -> str | None:
    for key in ("name", "threadName"):
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


# ---------------------------------------------------------------------------
# Format-A
# ---------------------------------------------------------------------------


def _parse_format_a_session(
    data: dict[str, Any],
    fallback_title: str,
    now: datetime,
    warnings: list[ConversionWarning],
    source: str,
) -> ChatSession:
    title = _title_of(data) or fallback_title
    raw_messages = data.get("messages")

    if not isinstance(raw_messages, list):
        _warn(warnings, "message_field", "session has no messages array", title)
        return ChatSession(title=title, messages=[], source=source)

    messages = _build_messages(raw_messages, now, warnings, title)
    return ChatSession(title=title, messages=messages, source=source)


def parse_format_a(path: str | Path, now: datetime | None = None) -> ParseResult:
    """Parse a Format-A export (a ``chat-sessions`` collection) into sessions."""
    path = Path(path)
    now = now or current_time()
    data = _read_json_file(path)
    warnings: list[ConversionWarning] = []

    if not isinstance(data, dict):
        _warn(warnings, "schema_mismatch", f"{path.name}: top level is not an object")
        return ParseResult(warnings=warnings)

    collection = data.get("chat-sessions")

    if collection is None and isinstance(data.get("messages"), list):
        logger.debug("%s: no chat-sessions collection, reading as one session", path.name)
        session = _parse_format_a_session(data, _file_title(path), now, warnings, path.name)
        return ParseResult(sessions=[session], warnings=warnings)

    if not isinstance(collection, list):
        _warn(
            warnings,
            "schema_mismatch",
            f"{path.name}: no chat-sessions collection or messages array found",
        )
        return ParseResult(warnings=warnings)

    sessions: list[ChatSession] = []
    for index, raw_session in enumerate(collection, start=1):
        fallback_title = f"Session {index}"
        if not isinstance(raw_session, dict):
            _warn(warnings, "session", "session entry is not an object, skipped", fallback_title)
            continue
        try:
            sessions.append(
                _parse_format_a_session(raw_session, fallback_title, now, warnings, path.name)
            )
        except Exception as e:
            title = _title_of(raw_session) or fallback_title
            logger.warning("Failed to parse session '%s'", title, exc_info=True)
            warnings.append(ConversionWarning(kind="session", message=str(e), session=title))

    return ParseResult(sessions=sessions, warnings=warnings)


# ---------------------------------------------------------------------------
# Format-B
# ---------------------------------------------------------------------------


def _read_json_from_archive(path: Path) -> Any | None:
    """Load the first JSON entry of a zip archive, or None if it has none."""
    try:
        with zipfile.ZipFile(path, "r") as zf:
            entry = next(
                (
                    info
                    for info in zf.infolist()
                    if not info.is_dir() and info.filename.lower().endswith(".json")
                ),
                None,
            )
            if entry is None:
                return None
            logger.debug("%s: reading archive entry %s", path.name, entry.filename)
            raw = zf.read(entry)
    except (
        OSError,
        EOFError,
        RuntimeError,
        NotImplementedError,
        zipfile.BadZipFile,
        zlib.error,
    ) as e:
        raise InputReadError(f"Cannot read archive {path}: {e}") from e

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"Archive entry in {path} is not UTF-8 text") from e
    return _load_json_text(text, path)


def parse_format_b(path: str | Path, now: datetime | None = None) -> ParseResult:
    """Parse a Format-B export (a ``log`` array, optionally zipped) into one session."""
    path = Path(path)
    now = now or current_time()
    warnings: list[ConversionWarning] = []

    if not path.is_file():
        raise InputReadError(f"File not found: {path}")

    if zipfile.is_zipfile(path):
        data = _read_json_from_archive(path)
        if data is None:
            _warn(warnings, "schema_mismatch", f"{path.name}: archive contains no JSON entry")
            return ParseResult(warnings=warnings)
    else:
        data = _read_json_file(path)

    if not isinstance(data, dict) or not isinstance(data.get("log"), list):
        _warn(warnings, "schema_mismatch", f"{path.name}: no log array found")
        return ParseResult(warnings=warnings)

    title = data.get("title")
    if isinstance(title, str) and title.strip():
        title = title.strip()
    else:
        title = _file_title(path)

    messages = _build_messages(
        data["log"],
        now,
        warnings,
        title,
        role_keys=("role", "sender"),
        content_keys=("content", "text"),
        timestamp_keys=("timestamp", "time"),
    )
    session = ChatSession(title=title, messages=messages, source=path.name)
    return ParseResult(sessions=[session], warnings=warnings)


ADAPTERS: dict[str, Adapter] = {
    FORMAT_A: parse_format_a,
    FORMAT_B: parse_format_b,
}


def get_adapter(source_format: str) -> Adapter:
    """Look up the adapter for a format tag."""
    try:
        return ADAPTERS[source_format]
    except KeyError:
        supported = ", ".join(ADAPTERS)
        raise UnknownFormatError(
            f"Unknown source format '{source_format}' (expected one of: {supported})"
        ) from None
