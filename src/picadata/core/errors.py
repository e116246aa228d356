# topmark:header:start
#
#   project      : PicaData
#   file         : errors.py
#   file_relpath : src/picadata/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Library-level exceptions for picadata.

These exceptions carry no CLI concerns (no exit codes, no styling). The CLI
layer translates them into `click.ClickException` subclasses, see
`picadata.cli.errors`.
"""

from __future__ import annotations


class PicadataError(Exception):
    """Base class for all picadata library errors."""


class UnknownTypeError(PicadataError):
    """Raised when a serialization type name is not in the format registry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown serialization type: {name}")
        self.name = name


class InputError(PicadataError):
    """Raised when the input source cannot be opened."""


class PicaParseError(PicadataError):
    """Raised by a parser when the input stream is malformed.

    Attributes:
        record_number (int | None): 1-based number of the record being parsed.
        position (str | None): Format-specific location (line number, byte offset).
    """

    def __init__(
        self,
        message: str,
        *,
        record_number: int | None = None,
        position: str | None = None,
    ) -> None:
        self.record_number = record_number
        self.position = position
        details: list[str] = []
        if record_number is not None:
            details.append(f"record {record_number}")
        if position is not None:
            details.append(position)
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class PathSyntaxError(PicadataError):
    """Raised when a path expression cannot be compiled."""

    def __init__(self, expression: str) -> None:
        super().__init__(f"invalid PICA path expression: {expression!r}")
        self.expression = expression


class SchemaError(PicadataError):
    """Raised when a schema document cannot be read or is malformed."""


class ConfigError(PicadataError):
    """Raised when a configuration file cannot be read or is malformed."""
