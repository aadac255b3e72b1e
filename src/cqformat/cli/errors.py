# topmark:header:start
#
#   project      : CQFormat
#   file         : errors.py
#   file_relpath : src/cqformat/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the CQFormat CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. `from_pipeline_error` translates the pipeline
    exceptions of `cqformat.core.errors` into the matching CLI error.

Styling:
    Messages go to stderr in bright red; stdout only ever carries query output.
"""

from __future__ import annotations

from typing import IO, Any

import click

from cqformat.cli.exit_codes import ExitCode
from cqformat.core.errors import (
    AggregationStateError,
    AttributeValueError,
    ConfigurationAmbiguityError,
    InputDocumentError,
    UnknownFormatError,
)


class CQFormatCliError(click.ClickException):
    """Base class for all CQFormat CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error on stderr (or ``file``) in bright red."""
        click.secho(
            f"Error: {self.format_message()}", file=file, err=file is None, fg="bright_red"
        )


class CQFormatUsageError(CQFormatCliError):
    """Error for command-line invocation errors (invalid flag combinations)."""

    exit_code = ExitCode.USAGE_ERROR


class CQFormatDataError(CQFormatCliError):
    """Error for invalid input data (document, ambiguity, value types)."""

    exit_code = ExitCode.DATA_ERROR


class CQFormatFileNotFoundError(CQFormatCliError):
    """Error when the input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class CQFormatSoftwareError(CQFormatCliError):
    """Error for internal pipeline lifecycle violations."""

    exit_code = ExitCode.SOFTWARE_ERROR


class CQFormatIOError(CQFormatCliError):
    """Error for I/O errors reading input or writing output."""

    exit_code = ExitCode.IO_ERROR


class CQFormatConfigError(CQFormatCliError):
    """Error for configuration errors (unknown format, unreadable config file)."""

    exit_code = ExitCode.CONFIG_ERROR


def from_pipeline_error(exc: Exception) -> CQFormatCliError:
    """Return the CLI error matching a pipeline or I/O exception."""
    if isinstance(exc, UnknownFormatError):
        return CQFormatConfigError(str(exc))
    if isinstance(exc, (InputDocumentError, ConfigurationAmbiguityError, AttributeValueError)):
        return CQFormatDataError(str(exc))
    if isinstance(exc, AggregationStateError):
        return CQFormatSoftwareError(str(exc))
    if isinstance(exc, FileNotFoundError):
        return CQFormatFileNotFoundError(f"No such file: {exc.filename}")
    if isinstance(exc, UnicodeDecodeError):
        return CQFormatDataError(f"Input is not valid UTF-8: {exc}")
    if isinstance(exc, OSError):
        return CQFormatIOError(str(exc))
    return CQFormatCliError(str(exc))
