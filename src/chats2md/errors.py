"""Error taxonomy for the conversion pipeline.

Fatal errors derive from ``click.ClickException`` so the CLI reports them and
exits with a non-zero status. Non-fatal problems are collected as
``ConversionWarning`` records instead (see ``models.py``).
"""

from __future__ import annotations

import click


class ConversionError(click.ClickException):
    """Base class for errors that abort processing of one input file."""


class ParseError(ConversionError):
    """The input file is not valid structured data."""


class InputReadError(ParseError):
    """The input file is missing, unreadable, or a corrupt archive."""


class UnknownFormatError(ConversionError):
    """The declared source format has no adapter."""


class OutputDirectoryError(ConversionError):
    """The output directory cannot be created or cleaned."""


class WriteError(ConversionError):
    """A single rendered document could not be persisted."""

    def __init__(self, message: str, file_name: str):
        super().__init__(message)
        self.file_name = file_name
