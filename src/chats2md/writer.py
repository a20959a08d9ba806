"""Persist rendered Markdown documents into an output directory."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import OutputDirectoryError, WriteError

logger = logging.getLogger(__name__)


class MarkdownDirectoryWriter:
    """Writes documents as UTF-8 files into a directory owned by the current run."""

    def __init__(self, output_dir: Path, clean: bool = True):
        self.output_dir = Path(output_dir)
        self.clean = clean

    def prepare(self) -> None:
        """Create the output directory, or empty it when ``clean`` is set."""
        try:
            if self.output_dir.exists():
                if not self.output_dir.is_dir():
                    raise OutputDirectoryError(f"Not a directory: {self.output_dir}")
                if self.clean:
                    removed = 0
                    for entry in self.output_dir.iterdir():
                        if entry.is_file():
                            entry.unlink()
                            removed += 1
                    logger.debug("Removed %d files from %s", removed, self.output_dir)
            else:
                self.output_dir.mkdir(parents=True)
        except OSError as e:
            raise OutputDirectoryError(
                f"Cannot prepare output directory {self.output_dir}: {e}"
            ) from e

    def write(self, file_name: str, content: str) -> Path:
        target = self.output_dir / file_name
        try:
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WriteError(f"Cannot write {target}: {e}", file_name=file_name) from e
        return target
