"""
Shared pytest fixtures for chats2md tests.

Timestamps are built as naive local times and made aware with
``astimezone()`` so assertions hold in any time zone.
"""

import json
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import pytest

from chats2md.models import Attachments, ChatSession, Link, Message


def local(*args: int) -> datetime:
    """Aware datetime for a wall-clock time in the local zone."""
    return datetime(*args).astimezone()


@pytest.fixture
def now() -> datetime:
    """Fixed 'current time' injected into the pipeline."""
    return local(2025, 1, 15, 12, 0)


@pytest.fixture
def write_json(tmp_path) -> Callable[[str, Any], Path]:
    """Write a JSON payload into tmp_path and return its path."""

    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_zip(tmp_path) -> Callable[..., Path]:
    """Build a zip archive from {entry name: payload} (dicts are JSON-encoded)."""

    def _make(name: str, entries: dict[str, Any]) -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            for entry, payload in entries.items():
                if entry.endswith("/"):
                    zf.writestr(entry, "")
                elif isinstance(payload, (dict, list)):
                    zf.writestr(entry, json.dumps(payload))
                else:
                    zf.writestr(entry, payload)
        return path

    return _make


@pytest.fixture
def trip_planning_payload() -> dict:
    return {
        "chat-sessions": [
            {
                "name": "Trip Planning",
                "messages": [
                    {
                        "role": "user",
                        "content": "Where to go?",
                        "timestamp": "2024-03-01T10:15:00",
                    },
                    {
                        "role": "assistant",
                        "model": "gpt-4",
                        "content": "Try Kyoto.",
                        "timestamp": "2024-03-01T10:16:00",
                    },
                ],
            }
        ]
    }


@pytest.fixture
def format_b_payload() -> dict:
    return {
        "title": "Debugging session",
        "log": [
            {"role": "Human", "content": "Why does it crash?", "timestamp": "2024-05-02T09:00:00"},
            {
                "role": "Assistant",
                "content": "Check the stack trace.",
                "timestamp": "2024-05-02T09:01:00",
                "model": "claude-3",
            },
        ],
    }


@pytest.fixture
def rich_message() -> Message:
    return Message(
        role="user",
        content="See attached.",
        timestamp=local(2024, 3, 1, 10, 15),
        attachments=Attachments(pictures=2, files=1),
        links=[Link(title="Docs", url="https://x")],
        web_search_links=[Link(url="https://search.example/result")],
    )


@pytest.fixture
def two_day_session() -> ChatSession:
    return ChatSession(
        title="Two days",
        messages=[
            Message(role="user", content="first", timestamp=local(2024, 3, 1, 23, 50)),
            Message(role="assistant", content="second", timestamp=local(2024, 3, 1, 23, 55)),
            Message(role="user", content="third", timestamp=local(2024, 3, 2, 8, 0)),
        ],
    )
