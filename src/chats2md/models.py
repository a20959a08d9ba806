"""Data models for parsed chat sessions and rendered output."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    OTHER = "other"


class Link(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str | None = None
    url: str

    @property
    def label(self) -> str:
        return self.title or self.url


class Attachments(BaseModel):
    """Presence counts for binary content the export does not include."""

    model_config = ConfigDict(frozen=True)

    pictures: int = 0
    files: int = 0

    @property
    def has_pictures(self) -> bool:
        return self.pictures > 0

    @property
    def has_files(self) -> bool:
        return self.files > 0


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    content: str = ""
    timestamp: datetime
    model: str | None = None
    attachments: Attachments = Attachments()
    links: list[Link] = []
    web_search_links: list[Link] = []

    @property
    def kind(self) -> Role:
        try:
            return Role(self.role)
        except ValueError:
            return Role.OTHER


class ChatSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    messages: list[Message] = []
    source: str | None = None


class RenderedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: str
    content: str
    title: str


class ConversionWarning(BaseModel):
    kind: str  # schema_mismatch | message_field | session | write
    message: str
    session: str | None = None

    def __str__(self) -> str:
        if self.session:
            return f"[{self.kind}] {self.session}: {self.message}"
        return f"[{self.kind}] {self.message}"


class ParseResult(BaseModel):
    sessions: list[ChatSession] = []
    warnings: list[ConversionWarning] = []


class ConversionResult(BaseModel):
    source: str
    documents: list[RenderedDocument] = []
    warnings: list[ConversionWarning] = []
    failed_sessions: int = 0


class RunSummary(BaseModel):
    result: ConversionResult
    written: list[str] = []
    write_failures: int = 0
