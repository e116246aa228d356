# topmark:header:start
#
#   project      : PicaData
#   file         : reporter.py
#   file_relpath : src/picadata/pipeline/reporter.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Validation error reporting.

Error lines are emitted as soon as a record has been checked, one line per
message, prefixed with the record identifier when the record has one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from picadata.record import Record


def format_error(identifier: str | None, message: str) -> str:
    """Return the report line for one validation message.

    >>> format_error("123", "missing field 021A")
    '123: missing field 021A'
    >>> format_error(None, "missing field 003@")
    'missing field 003@'
    """
    return f"{identifier}: {message}" if identifier else message


class ErrorReporter:
    """Emits formatted validation errors through a line callback.

    Attributes:
        emit (Callable[[str], None]): Receives one formatted line per message.
        reported (int): Number of lines emitted so far.
    """

    def __init__(self, emit: Callable[[str], None]) -> None:
        self.emit = emit
        self.reported = 0

    def report(self, record: Record, errors: Sequence[str]) -> None:
        """Emit all ``errors`` of ``record`` immediately."""
        identifier = record.identifier
        for message in errors:
            self.emit(format_error(identifier, message))
            self.reported += 1
