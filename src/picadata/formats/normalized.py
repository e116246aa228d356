# topmark:header:start
#
#   project      : PicaData
#   file         : normalized.py
#   file_relpath : src/picadata/formats/normalized.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Normalized PICA: the Plus and Binary serializations.

Both formats encode a field as ``TAG[/OCC] `` followed by subfields, each
introduced by ``\\x1F`` and a one-character code, and terminate it with
``\\x1E``. They only differ in the record terminator:

- Plus: one record per line (``\\n``),
- Binary: records end with ``\\x1D``; newlines between records are ignored.

A leading segment without subfields (a leader) is skipped when parsing.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar, Final

from picadata.constants import FIELD_TERMINATOR, RECORD_TERMINATOR, SUBFIELD_SEPARATOR
from picadata.core.errors import PicaParseError
from picadata.formats.base import RecordParser, RecordWriter
from picadata.formats.types import PicaType
from picadata.record import Record

if TYPE_CHECKING:
    from collections.abc import Iterator

    from picadata.record import Field

CHUNK_SIZE: Final[int] = 64 * 1024

FIELD_HEAD: Final[re.Pattern[str]] = re.compile(r"^(\S{4})(?:/(\S+))?$")


class NormalizedParser(RecordParser):
    """Shared parser for Plus and Binary; subclasses set the record terminator."""

    terminator: ClassVar[bytes]

    def _iter_chunks(self) -> Iterator[bytes]:
        buffer = b""
        while True:
            block = self.stream.read(CHUNK_SIZE)
            if not block:
                break
            buffer += block
            *complete, buffer = buffer.split(self.terminator)
            yield from complete
        if buffer:
            yield buffer

    def _iter_records(self) -> Iterator[Record]:
        for chunk in self._iter_chunks():
            text = self.decode(chunk).strip("\r\n")
            if not text:
                continue
            yield Record.from_fields(self._parse_fields(text))

    def _parse_fields(self, text: str) -> list[Field]:
        segments = text.split(FIELD_TERMINATOR)
        if segments and segments[-1].strip() == "":
            segments.pop()
        if segments and SUBFIELD_SEPARATOR not in segments[0]:
            segments.pop(0)
        fields: list[Field] = []
        for number, segment in enumerate(segments, start=1):
            position = f"field {number}"
            head, sep, rest = segment.partition(SUBFIELD_SEPARATOR)
            match = FIELD_HEAD.match(head.strip())
            if not sep or match is None:
                raise PicaParseError(
                    f"invalid field {segment!r}",
                    record_number=self.count + 1,
                    position=position,
                )
            subfields: list[tuple[str, str]] = []
            for part in rest.split(SUBFIELD_SEPARATOR):
                if not part:
                    raise PicaParseError(
                        "empty subfield",
                        record_number=self.count + 1,
                        position=position,
                    )
                subfields.append((part[0], part[1:]))
            fields.append(
                self.make_field(match.group(1), match.group(2) or "", subfields, position=position)
            )
        return fields


class PlusParser(NormalizedParser):
    """Parser for line-oriented normalized PICA (PICA Plus)."""

    pica_type = PicaType.PLUS
    terminator = b"\n"


class BinaryParser(NormalizedParser):
    """Parser for binary normalized PICA."""

    pica_type = PicaType.BINARY
    terminator = RECORD_TERMINATOR.encode("ascii")


class NormalizedWriter(RecordWriter):
    """Shared writer for Plus and Binary."""

    record_terminator: ClassVar[str]

    def serialize(self, record: Record) -> str:
        fields = "".join(
            f"{f.identifier} "
            + "".join(f"{SUBFIELD_SEPARATOR}{code}{value}" for code, value in f.subfields)
            + FIELD_TERMINATOR
            for f in record
        )
        return fields + self.record_terminator


class PlusWriter(NormalizedWriter):
    """Writer for PICA Plus (one record per line)."""

    pica_type = PicaType.PLUS
    record_terminator = "\n"


class BinaryWriter(NormalizedWriter):
    """Writer for binary normalized PICA."""

    pica_type = PicaType.BINARY
    record_terminator = RECORD_TERMINATOR
