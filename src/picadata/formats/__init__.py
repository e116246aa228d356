# topmark:header:start
#
#   project      : PicaData
#   file         : __init__.py
#   file_relpath : src/picadata/formats/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Codec dispatch for the five PICA+ serializations.

Parsers and writers are selected once per run from a fixed table keyed by
`PicaType`; no implementation is looked up by name at runtime.

Example:
    ```python
    from picadata.formats import PicaType, make_parser

    with open("records.dat", "rb") as fh:
        for record in make_parser(PicaType.BINARY, fh):
            print(record.identifier)
    ```
"""

from __future__ import annotations

from types import MappingProxyType
from typing import IO, TYPE_CHECKING, Final

from picadata.formats.base import RecordParser, RecordWriter
from picadata.formats.normalized import BinaryParser, BinaryWriter, PlusParser, PlusWriter
from picadata.formats.plain import PlainParser, PlainWriter
from picadata.formats.types import (
    PicaType,
    guess_type_from_filename,
    require_type,
    resolve_type,
    type_names,
)
from picadata.formats.xml import PPXmlParser, PPXmlWriter, XmlParser, XmlWriter

if TYPE_CHECKING:
    from collections.abc import Mapping

PARSERS: Final[Mapping[PicaType, type[RecordParser]]] = MappingProxyType(
    {
        PicaType.BINARY: BinaryParser,
        PicaType.PLAIN: PlainParser,
        PicaType.PLUS: PlusParser,
        PicaType.XML: XmlParser,
        PicaType.PPXML: PPXmlParser,
    }
)

WRITERS: Final[Mapping[PicaType, type[RecordWriter]]] = MappingProxyType(
    {
        PicaType.BINARY: BinaryWriter,
        PicaType.PLAIN: PlainWriter,
        PicaType.PLUS: PlusWriter,
        PicaType.XML: XmlWriter,
        PicaType.PPXML: PPXmlWriter,
    }
)


def make_parser(pica_type: PicaType, stream: IO[bytes]) -> RecordParser:
    """Return a parser for ``pica_type`` reading from the binary ``stream``."""
    return PARSERS[pica_type](stream)


def make_writer(pica_type: PicaType, stream: IO[str]) -> RecordWriter:
    """Return a writer for ``pica_type`` writing to the text ``stream``."""
    return WRITERS[pica_type](stream)


__all__ = [
    "PARSERS",
    "WRITERS",
    "PicaType",
    "RecordParser",
    "RecordWriter",
    "guess_type_from_filename",
    "make_parser",
    "make_writer",
    "require_type",
    "resolve_type",
    "type_names",
]
