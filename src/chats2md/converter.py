"""Conversion pipeline: adapter → rendering → naming → writer."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from .config import MAX_NAME_LENGTH
from .errors import WriteError
from .models import ConversionResult, ConversionWarning, RenderedDocument, RunSummary
from .naming import build_file_name, unique_file_name
from .parser import get_adapter
from .renderer import render_session
from .timestamps import current_time

logger = logging.getLogger(__name__)


class DocumentWriter(Protocol):
    def write(self, file_name: str, content: str) -> object: ...


def convert_file(
    path: str | Path,
    source_format: str,
    now: datetime | None = None,
    max_name_length: int = MAX_NAME_LENGTH,
) -> ConversionResult:
    """Convert one input file into rendered Markdown documents.

    File-level problems (unreadable input, invalid JSON, unknown format) raise.
    A failure in one session is logged and recorded; its siblings still render.
    """
    path = Path(path)
    now = now or current_time()
    adapter = get_adapter(source_format)

    logger.debug("Parsing %s as %s", path, source_format)
    parsed = adapter(path, now=now)

    result = ConversionResult(source=path.name, warnings=list(parsed.warnings))
    taken: set[str] = set()

    for session in parsed.sessions:
        try:
            content = render_session(session)
            file_name = build_file_name(session, now=now, max_length=max_name_length)
        except Exception as e:
            logger.warning("Failed to render session '%s'", session.title, exc_info=True)
            result.warnings.append(
                ConversionWarning(kind="session", message=str(e), session=session.title)
            )
            result.failed_sessions += 1
            continue

        unique = unique_file_name(file_name, taken)
        if unique != file_name:
            logger.info("File name %s already used in this run, writing %s", file_name, unique)
        taken.add(unique)
        result.documents.append(
            RenderedDocument(file_name=unique, content=content, title=session.title)
        )

    return result


def write_documents(result: ConversionResult, writer: DocumentWriter) -> RunSummary:
    """Hand every document to the writer; a failed write does not stop the others."""
    summary = RunSummary(result=result)

    for document in result.documents:
        try:
            writer.write(document.file_name, document.content)
        except WriteError as e:
            logger.warning("Failed to write %s: %s", document.file_name, e.message)
            result.warnings.append(
                ConversionWarning(kind="write", message=e.message, session=document.title)
            )
            summary.write_failures += 1
            continue
        summary.written.append(document.file_name)

    return summary


def run_conversion(
    path: str | Path,
    source_format: str,
    writer: DocumentWriter,
    now: datetime | None = None,
    max_name_length: int = MAX_NAME_LENGTH,
) -> RunSummary:
    """Convert one input file and persist the results through ``writer``."""
    result = convert_file(path, source_format, now=now, max_name_length=max_name_length)
    return write_documents(result, writer)
