# topmark:header:start
#
#   project      : PicaData
#   file         : main.py
#   file_relpath : src/picadata/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""The ``picadata`` command.

Reads PICA+ records from FILE (or standard input) and, in one pass, projects
them to a path, writes them in another serialization, validates them against
a schema and counts them.

Key ideas:
- Options are collected into a `MutableConfig` (defaults, config files, CLI)
  and frozen into a `PipelineConfig` before the first record is read.
- Library errors are translated into `PicadataCliError` subclasses so the
  process exits with a sysexits-aligned code.
- Validation error lines and the summary go through the console (stdout);
  serialized records go to ``--output`` or stdout.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, TYPE_CHECKING, cast

import click

from picadata.cli.console import ClickConsole
from picadata.cli.errors import PicadataIOError, translate_error
from picadata.cli.options import (
    HELP_OPTION_NAMES,
    common_verbose_options,
    config_options,
    resolve_verbosity,
)
from picadata.config.io import discover_config_file, load_config_table
from picadata.config.logging import get_logger, setup_logging
from picadata.config.model import MutableConfig
from picadata.constants import PICADATA_VERSION
from picadata.core.errors import PicadataError
from picadata.formats import make_parser
from picadata.formats.types import type_names
from picadata.pipeline.driver import PipelineDriver
from picadata.pipeline.input import STDIN_NAME, open_input
from picadata.pipeline.reporter import ErrorReporter

if TYPE_CHECKING:
    from picadata.config.logging import PicadataLogger
    from picadata.core.console_api import ConsoleLike

logger: PicadataLogger = get_logger(__name__)

_TYPES_HELP = ", ".join(type_names())


def stdin_is_interactive() -> bool:
    """Return True if standard input is attached to a terminal."""
    return click.get_text_stream("stdin").isatty()


def collect_config(
    builder: MutableConfig, *, config_file: str | None, no_config: bool
) -> MutableConfig:
    """Apply discovered and explicit config files to ``builder``, in that order."""
    sources: list[Path] = []
    if not no_config:
        discovered = discover_config_file(Path.cwd())
        if discovered is not None:
            sources.append(discovered)
    if config_file is not None:
        sources.append(Path(config_file))
    for source in sources:
        builder.update_from_toml(load_config_table(source), source=source)
    return builder


def open_output(output: str | None) -> IO[str] | None:
    """Return the lazily opened ``--output`` file, or None for stdout."""
    if output is None or output == STDIN_NAME:
        return None
    return cast("IO[str]", click.open_file(output, "w", encoding="utf-8", lazy=True))


@click.command(
    name="picadata",
    context_settings={"help_option_names": HELP_OPTION_NAMES},
    help=(
        "Read PICA+ records from FILE (standard input if omitted) and project, "
        f"convert, validate and count them in one pass. Types: {_TYPES_HELP}."
    ),
)
@click.argument("file", required=False, type=click.Path(dir_okay=False, allow_dash=True))
@click.option(
    "--from",
    "-f",
    "from_type",
    metavar="TYPE",
    default=None,
    help="Input serialization type (guessed from the file extension if omitted).",
)
@click.option(
    "--to",
    "-t",
    "to_type",
    metavar="[TYPE]",
    is_flag=False,
    flag_value="",
    default=None,
    help="Write records in TYPE (the input type if no value is given).",
)
@click.option(
    "--schema",
    "-s",
    type=click.Path(dir_okay=False),
    default=None,
    help="Validate records against this JSON schema.",
)
@click.option(
    "--unknown",
    "-u",
    is_flag=True,
    default=False,
    help="Report fields and subfields that are not in the schema.",
)
@click.option(
    "--count",
    "-c",
    is_flag=True,
    default=False,
    help="Print the number of records, invalid records, holdings, items and fields.",
)
@click.option(
    "--path",
    "-p",
    "path_expr",
    metavar="EXPR",
    default=None,
    help="Restrict every record to the fields matching EXPR (e.g. '003@|021A').",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, allow_dash=True),
    default=None,
    help="Write records to this file instead of stdout.",
)
@config_options
@common_verbose_options
@click.version_option(PICADATA_VERSION, "--version", prog_name="picadata")
@click.pass_context
def cli(
    ctx: click.Context,
    *,
    file: str | None,
    from_type: str | None,
    to_type: str | None,
    schema: str | None,
    unknown: bool,
    count: bool,
    path_expr: str | None,
    output: str | None,
    config_file: str | None,
    no_config: bool,
    verbose: int,
    quiet: int,
) -> None:
    """Entry point of the picadata CLI."""
    ctx.ensure_object(dict)
    console: ConsoleLike = ClickConsole(enable_color=click.get_text_stream("stderr").isatty())
    ctx.obj["console"] = console

    setup_logging(level=resolve_verbosity(verbose, quiet))

    if file is None and stdin_is_interactive():
        console.print(ctx.get_help())
        ctx.exit(0)

    try:
        builder = collect_config(
            MutableConfig.from_defaults(), config_file=config_file, no_config=no_config
        )
        builder.update_from_cli(
            from_type=from_type,
            to_type=to_type,
            schema=schema,
            unknown=unknown,
            count=count,
            path=path_expr,
            output=output,
        )
        logger.debug("Applied config files: %s", builder.config_files)
        source = open_input(file, builder.from_type, stdin=click.get_binary_stream("stdin"))
    except PicadataError as exc:
        raise translate_error(exc) from exc

    out = None
    try:
        config = builder.freeze(input_type=source.pica_type)
        out = open_output(builder.output)
        driver = PipelineDriver(config, reporter=ErrorReporter(console.print), output=out)
        counters = driver.run(make_parser(config.input_type, source.stream))
        if counters is not None:
            for line in counters.summary_lines():
                console.print(line)
    except PicadataError as exc:
        raise translate_error(exc) from exc
    except click.FileError as exc:
        raise PicadataIOError(exc.format_message()) from exc
    except OSError as exc:
        raise PicadataIOError(f"{exc.strerror or exc}") from exc
    finally:
        source.close()
        if out is not None:
            out.close()
