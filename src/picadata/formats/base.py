# topmark:header:start
#
#   project      : PicaData
#   file         : base.py
#   file_relpath : src/picadata/formats/base.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Base classes for record parsers and writers.

Parsers consume a binary stream and yield `Record` values one at a time.
Writers serialize records to a text stream. Every writer has a `finalize()`
method; it defaults to a no-op so callers can invoke it unconditionally.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, ClassVar

from picadata.config.logging import get_logger
from picadata.core.errors import PicaParseError
from picadata.record import Field

if TYPE_CHECKING:
    from collections.abc import Iterator

    from picadata.config.logging import PicadataLogger
    from picadata.formats.types import PicaType
    from picadata.record import Record

logger: PicadataLogger = get_logger(__name__)


class RecordParser:
    """Iterator over the records of one input stream.

    Subclasses implement `_iter_records()`. The base class counts records so
    parse errors can name the record that failed.

    Attributes:
        pica_type (PicaType): The serialization type handled by the parser.
        stream (IO[bytes]): The binary input stream.
        count (int): Number of records yielded so far.
    """

    pica_type: ClassVar[PicaType]
    encoding: ClassVar[str] = "utf-8"

    def __init__(self, stream: IO[bytes]) -> None:
        self.stream = stream
        self.count = 0

    def __iter__(self) -> Iterator[Record]:
        for record in self._iter_records():
            self.count += 1
            logger.trace("parsed record %d with %d fields", self.count, len(record))
            yield record

    def _iter_records(self) -> Iterator[Record]:
        raise NotImplementedError

    def decode(self, data: bytes, *, position: str | None = None) -> str:
        """Decode raw bytes, turning decoding failures into parse errors."""
        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise PicaParseError(
                f"invalid {self.encoding} data: {exc.reason}",
                record_number=self.count + 1,
                position=position,
            ) from exc

    def make_field(
        self,
        tag: str,
        occurrence: str,
        subfields: list[tuple[str, str]],
        *,
        position: str | None = None,
    ) -> Field:
        """Build a field and reject malformed tags, occurrences or codes."""
        f = Field(tag, occurrence, tuple(subfields))
        if not f.is_well_formed():
            raise PicaParseError(
                f"malformed field {f.identifier!r}",
                record_number=self.count + 1,
                position=position,
            )
        if not subfields:
            raise PicaParseError(
                f"field {f.identifier} has no subfields",
                record_number=self.count + 1,
                position=position,
            )
        return f


class RecordWriter:
    """Serializer for a stream of records.

    Attributes:
        pica_type (PicaType): The serialization type produced by the writer.
        stream (IO[str]): Text stream receiving the serialization.
        count (int): Number of records written so far.
    """

    pica_type: ClassVar[PicaType]

    def __init__(self, stream: IO[str]) -> None:
        self.stream = stream
        self.count = 0

    def write(self, record: Record) -> None:
        """Serialize one record and flush the stream."""
        self.stream.write(self.serialize(record))
        self.stream.flush()
        self.count += 1

    def serialize(self, record: Record) -> str:
        """Return the serialization of one record."""
        raise NotImplementedError

    def finalize(self) -> None:
        """Emit closing syntax after the last record. No-op by default."""
        return None
