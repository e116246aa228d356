# topmark:header:start
#
#   project      : PicaData
#   file         : options.py
#   file_relpath : src/picadata/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes the verbosity options and their resolution logic so
the command stays thin. The helpers here are Click-aware.
"""

from __future__ import annotations

import logging
from typing import Callable, ParamSpec, TypeVar

import click

from picadata.cli.errors import PicadataUsageError
from picadata.config.logging import TRACE_LEVEL

P = ParamSpec("P")
R = TypeVar("R")

#: Help option names; ``-?`` is kept for users of the classic tool.
HELP_OPTION_NAMES = ["-h", "--help", "-?"]


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int | None:
    """Resolve the logging level from the ``-v``/``-q`` counts.

    Args:
        verbose_count (int): Number of times ``-v`` was passed.
        quiet_count (int): Number of times ``-q`` was passed.

    Returns:
        int | None: The logging level, or None to keep the environment/default level.

    Raises:
        PicadataUsageError: If both verbose and quiet flags are used.

    Behavior:
        Three or more ``-v`` select TRACE, two DEBUG, one INFO.
        One or more ``-q`` select ERROR.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise PicadataUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return TRACE_LEVEL
    if verbose_count == 2:  # -vv
        return logging.DEBUG
    if verbose_count == 1:  # -v
        return logging.INFO
    if quiet_count >= 1:  # -q
        return logging.ERROR
    return None


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the counting ``-v/--verbose`` and ``-q/--quiet`` options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Log more to stderr (-v info, -vv debug, -vvv trace).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Log errors only.",
    )(f)
    return f


def config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config`` and ``--no-config`` to a command."""
    f = click.option(
        "--config",
        "config_file",
        type=click.Path(dir_okay=False),
        default=None,
        help="Read settings from this TOML file.",
    )(f)
    f = click.option(
        "--no-config",
        is_flag=True,
        default=False,
        help="Do not look for picadata.toml or [tool.picadata] in pyproject.toml.",
    )(f)
    return f
