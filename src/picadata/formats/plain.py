# topmark:header:start
#
#   project      : PicaData
#   file         : plain.py
#   file_relpath : src/picadata/formats/plain.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""PICA Plain: the human-readable line format.

Each field is written on its own line::

    003@ $0123456789
    021A $aA title$hby someone
    203@/01 $0987654321

Subfields start with ``$`` followed by a one-character code; a literal ``$``
in a value is written as ``$$``. Records are separated by an empty line.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from picadata.core.errors import PicaParseError
from picadata.formats.base import RecordParser, RecordWriter
from picadata.formats.types import PicaType
from picadata.record import Record

if TYPE_CHECKING:
    from collections.abc import Iterator

    from picadata.record import Field

FIELD_LINE: Final[re.Pattern[str]] = re.compile(r"^(\S{4})(?:/(\S+))?[ \t]+(\$.*)$")


def parse_subfields(text: str) -> list[tuple[str, str]]:
    """Split a PICA Plain subfield string into ``(code, value)`` pairs.

    Raises:
        ValueError: If the text does not start with ``$`` or ends with a dangling ``$``.
    """
    if not text.startswith("$"):
        raise ValueError("subfields must start with '$'")
    subfields: list[tuple[str, str]] = []
    i, n = 0, len(text)
    while i < n:
        if i + 1 >= n:
            raise ValueError("dangling '$' at end of field")
        code = text[i + 1]
        i += 2
        value: list[str] = []
        while i < n:
            ch = text[i]
            if ch == "$":
                if i + 1 < n and text[i + 1] == "$":
                    value.append("$")
                    i += 2
                    continue
                break
            value.append(ch)
            i += 1
        subfields.append((code, "".join(value)))
    return subfields


class PlainParser(RecordParser):
    """Parser for PICA Plain."""

    pica_type = PicaType.PLAIN

    def _iter_records(self) -> Iterator[Record]:
        fields: list[Field] = []
        for lineno, raw in enumerate(self.stream, start=1):
            position = f"line {lineno}"
            line = self.decode(raw, position=position).rstrip("\r\n")
            if not line.strip():
                if fields:
                    yield Record.from_fields(fields)
                    fields = []
                continue
            match = FIELD_LINE.match(line)
            if match is None:
                raise PicaParseError(
                    f"invalid PICA Plain field line {line!r}",
                    record_number=self.count + 1,
                    position=position,
                )
            tag, occurrence, text = match.group(1), match.group(2) or "", match.group(3)
            try:
                subfields = parse_subfields(text)
            except ValueError as exc:
                raise PicaParseError(
                    str(exc), record_number=self.count + 1, position=position
                ) from exc
            fields.append(self.make_field(tag, occurrence, subfields, position=position))
        if fields:
            yield Record.from_fields(fields)


class PlainWriter(RecordWriter):
    """Writer for PICA Plain."""

    pica_type = PicaType.PLAIN

    def serialize(self, record: Record) -> str:
        lines = [
            f"{f.identifier} "
            + "".join(f"${code}{value.replace('$', '$$')}" for code, value in f.subfields)
            + "\n"
            for f in record
        ]
        return "".join(lines) + "\n"
