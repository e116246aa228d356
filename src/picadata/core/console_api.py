# topmark:header:start
#
#   project      : PicaData
#   file         : console_api.py
#   file_relpath : src/picadata/core/console_api.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Output sink protocol shared by the CLI and its helpers.

The pipeline itself only needs a ``Callable[[str], None]`` for report lines;
the CLI passes `ConsoleLike.print`.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleLike(Protocol):
    """Where report lines and error messages go."""

    def print(self, text: str = "") -> None:
        """Write one report line."""
        ...

    def error(self, text: str) -> None:
        """Write an error message."""
        ...
