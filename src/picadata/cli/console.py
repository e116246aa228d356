# topmark:header:start
#
#   project      : PicaData
#   file         : console.py
#   file_relpath : src/picadata/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Click-backed console for report lines, the summary and CLI error messages.

Report lines and the summary go to stdout so they interleave with records
written there; error messages go to stderr. Diagnostics use `logging`.
"""

from __future__ import annotations

import sys
from typing import TextIO

import click

from picadata.core.console_api import ConsoleLike


class ClickConsole(ConsoleLike):
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): Color error messages with ANSI codes.
        out (TextIO | None): Stream for report lines. Defaults to `sys.stdout`.
        err (TextIO | None): Stream for error messages. Defaults to `sys.stderr`.
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "") -> None:
        """Write one report line to stdout."""
        click.echo(text, file=self.out, color=self.enable_color)

    def error(self, text: str) -> None:
        """Write an error message to stderr, in red when color is enabled."""
        click.secho(text, file=self.err, color=self.enable_color, fg="bright_red")
