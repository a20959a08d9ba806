"""CLI interface for chats2md."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import INPUT_DIR, MAX_NAME_LENGTH, OUTPUT_DIR, SUPPORTED_FORMATS


def _configure_logging(verbose: bool) -> None:
    # Logging to stderr only; stdout carries the conversion report
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.version_option(version=__version__, prog_name="chats2md")
def cli():
    """chats2md — Turn chat exports into Markdown notes.

    Converts each conversation in a chat export into its own Markdown file,
    ready to drop into a note-taking vault.
    """
    pass


@cli.command()
@click.argument("path", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--format",
    "source_format",
    type=click.Choice(SUPPORTED_FORMATS),
    help="Source format of the export (guessed when omitted).",
)
@click.option(
    "--input-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=INPUT_DIR,
    show_default=True,
    help="Directory to pick a file from when PATH is omitted.",
)
@click.option(
    "--output",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=OUTPUT_DIR,
    show_default=True,
    help="Directory the Markdown files are written to.",
)
@click.option("--no-clean", is_flag=True, help="Keep existing files in the output directory.")
@click.option(
    "--max-name-length",
    type=click.IntRange(min=1),
    default=MAX_NAME_LENGTH,
    show_default=True,
    help="Maximum length of the title part of file names.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def convert(
    path: Path | None,
    source_format: str | None,
    input_dir: Path,
    output_dir: Path,
    no_clean: bool,
    max_name_length: int,
    verbose: bool,
):
    """Convert a chat export into Markdown files.

    Without PATH, the files in the input directory are listed and you pick one.

    Example:
        chats2md convert input/chats.json --format formatA
    """
    from .converter import convert_file, write_documents
    from .selector import choose_file, guess_format, list_input_files
    from .writer import MarkdownDirectoryWriter

    _configure_logging(verbose)

    if path is None:
        path = choose_file(list_input_files(input_dir))

    if source_format is None:
        source_format = guess_format(path)
        click.echo(f"Reading {path.name} as {source_format}.")

    result = convert_file(path, source_format, max_name_length=max_name_length)

    writer = MarkdownDirectoryWriter(output_dir, clean=not no_clean)
    writer.prepare()
    summary = write_documents(result, writer)

    for name in summary.written:
        click.echo(f"Created: {name}")

    click.echo()
    if summary.written:
        click.echo(click.style("Conversion complete!", fg="green", bold=True))
    else:
        click.echo(click.style("No documents generated.", fg="yellow", bold=True))
    click.echo(f"  Documents: {len(summary.written)} written to {output_dir}")
    if result.failed_sessions:
        click.echo(f"  Failed:    {result.failed_sessions} sessions could not be rendered")
    if summary.write_failures:
        click.echo(f"  Unwritten: {summary.write_failures} documents")

    if result.warnings:
        click.echo()
        click.echo(click.style(f"Warnings ({len(result.warnings)}):", fg="yellow"))
        for warning in result.warnings:
            click.echo(f"  {warning}")


@cli.command("list")
@click.option(
    "--input-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=INPUT_DIR,
    show_default=True,
)
def list_cmd(input_dir: Path):
    """List the export files available in the input directory."""
    from .selector import guess_format, list_input_files

    files = list_input_files(input_dir)
    if not files:
        click.echo(f"No JSON or zip files found in {input_dir}")
        return

    for path in files:
        click.echo(f"  {path.name}  ({guess_format(path)})")
