# topmark:header:start
#
#   project      : PicaData
#   file         : input.py
#   file_relpath : src/picadata/pipeline/input.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Input resolution: byte source and effective input type.

Rules:
    1. A named source is opened as a binary stream; without one, the given
       standard input stream is used.
    2. Without a declared type, a named source's file extension is looked up
       in the format registry.
    3. Otherwise the type defaults to Plain.
    4. The resulting type must be recognized, else `UnknownTypeError`.

A declared type always wins over the extension.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING

from picadata.config.logging import get_logger
from picadata.core.errors import InputError
from picadata.formats.types import PicaType, guess_type_from_filename, require_type

if TYPE_CHECKING:
    from picadata.config.logging import PicadataLogger

logger: PicadataLogger = get_logger(__name__)

STDIN_NAME = "-"


@dataclass(frozen=True)
class InputSource:
    """An opened input stream with its effective serialization type.

    Attributes:
        name (str): File name, or ``"-"`` for standard input.
        stream (IO[bytes]): The binary stream to parse.
        pica_type (PicaType): The effective input type.
        owned (bool): True if the stream was opened here and must be closed.
    """

    name: str
    stream: IO[bytes]
    pica_type: PicaType
    owned: bool = False

    def close(self) -> None:
        """Close the stream if it was opened by `open_input`."""
        if self.owned:
            self.stream.close()


def resolve_input_type(source: str | None, declared_type: str | None) -> PicaType:
    """Return the effective input type for ``source``.

    Raises:
        UnknownTypeError: If ``declared_type`` is not a recognized type name.
    """
    if declared_type:
        return require_type(declared_type)
    if source and source != STDIN_NAME:
        guessed = guess_type_from_filename(source)
        if guessed is not None:
            logger.info("Guessed input type %s from %s", guessed.value, source)
            return guessed
    return PicaType.PLAIN


def open_input(
    source: str | None,
    declared_type: str | None = None,
    *,
    stdin: IO[bytes] | None = None,
) -> InputSource:
    """Open the input source and determine its type.

    Args:
        source (str | None): File name; ``None`` or ``"-"`` selects standard input.
        declared_type (str | None): Type name given by the user, if any.
        stdin (IO[bytes] | None): Standard input stream (defaults to ``sys.stdin.buffer``).

    Returns:
        InputSource: The opened source.

    Raises:
        InputError: If the named file cannot be opened.
        UnknownTypeError: If the effective type is not recognized.
    """
    if source is None or source == STDIN_NAME:
        stream: IO[bytes] = stdin if stdin is not None else sys.stdin.buffer
        name, owned = STDIN_NAME, False
    else:
        try:
            stream = open(source, "rb")  # noqa: SIM115 - closed by InputSource.close()
        except OSError as exc:
            raise InputError(f"cannot open {source}: {exc.strerror or exc}") from exc
        name, owned = source, True

    try:
        pica_type = resolve_input_type(source, declared_type)
    except Exception:
        if owned:
            stream.close()
        raise
    logger.debug("Reading %s as %s", name, pica_type.value)
    return InputSource(name=name, stream=stream, pica_type=pica_type, owned=owned)
