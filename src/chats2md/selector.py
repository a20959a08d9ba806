"""Find input files and pick one to convert."""

from __future__ import annotations

import json
import logging
import zipfile
from pathlib import Path

import click

from .config import FORMAT_A, FORMAT_B, INPUT_SUFFIXES

logger = logging.getLogger(__name__)


def list_input_files(input_dir: Path) -> list[Path]:
    """Return the JSON and zip files in ``input_dir``, sorted by name."""
    if not input_dir.is_dir():
        return []
    return sorted(
        p for p in input_dir.iterdir() if p.is_file() and p.suffix.lower() in INPUT_SUFFIXES
    )


def guess_format(path: Path) -> str:
    """Guess the source format: archives and ``log`` payloads are Format-B."""
    if zipfile.is_zipfile(path):
        return FORMAT_B
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        logger.debug("Could not inspect %s, assuming %s", path, FORMAT_A)
        return FORMAT_A
    if isinstance(data, dict) and isinstance(data.get("log"), list):
        return FORMAT_B
    return FORMAT_A


def choose_file(files: list[Path]) -> Path:
    """Prompt for one of ``files`` by number."""
    if not files:
        raise click.ClickException("No JSON or zip files found in the input directory.")
    if len(files) == 1:
        return files[0]

    click.echo("Select a file to process:\n")
    for index, path in enumerate(files, start=1):
        click.echo(f"  {index}) {path.name}")
    click.echo()

    choice = click.prompt("File number", type=click.IntRange(1, len(files)), default=1)
    return files[choice - 1]
