# topmark:header:start
#
#   project      : PicaData
#   file         : errors.py
#   file_relpath : src/picadata/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Exceptions for the picadata CLI.

Usage:
    Library code raises `picadata.core.errors.PicadataError` subclasses. The
    command translates them with `translate_error` into the Click exceptions
    below, which carry the process exit code.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from picadata.core.errors import (
    ConfigError,
    InputError,
    PathSyntaxError,
    PicadataError,
    PicaParseError,
    SchemaError,
    UnknownTypeError,
)
from picadata.core.exit_codes import ExitCode


class PicadataCliError(click.ClickException):
    """Base class for all picadata CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"picadata: {self.format_message()}")
                return
        super().show(file)


class PicadataUsageError(PicadataCliError):
    """Error for command-line invocation errors (unknown type, malformed path)."""

    exit_code = ExitCode.USAGE_ERROR


class PicadataDataError(PicadataCliError):
    """Error for malformed input records."""

    exit_code = ExitCode.DATA_ERROR


class PicadataFileNotFoundError(PicadataCliError):
    """Error when the input file cannot be opened."""

    exit_code = ExitCode.FILE_NOT_FOUND


class PicadataIOError(PicadataCliError):
    """Error for I/O errors writing the output."""

    exit_code = ExitCode.IO_ERROR


class PicadataConfigError(PicadataCliError):
    """Error for configuration errors (schema or config file)."""

    exit_code = ExitCode.CONFIG_ERROR


def translate_error(exc: PicadataError) -> PicadataCliError:
    """Return the CLI exception matching a library error."""
    message = str(exc)
    if isinstance(exc, (UnknownTypeError, PathSyntaxError)):
        return PicadataUsageError(message)
    if isinstance(exc, (SchemaError, ConfigError)):
        return PicadataConfigError(message)
    if isinstance(exc, InputError):
        return PicadataFileNotFoundError(message)
    if isinstance(exc, PicaParseError):
        return PicadataDataError(message)
    return PicadataCliError(message)
