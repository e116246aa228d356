# topmark:header:start
#
#   project      : PicaData
#   file         : record.py
#   file_relpath : src/picadata/record.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""PICA+ record model.

A `Record` is an ordered sequence of `Field` values. Each field has a four
character tag, an optional occurrence and an ordered list of subfields. The
first digit of the tag is the field *level*:

- level 0: bibliographic (title) data,
- level 1: holdings data of one library (a holding starts with ``101@``),
- level 2: copy (item) data; consecutive fields with the same occurrence
  belong to the same item.

Records are immutable. Projections (`Record.select`) return new records, so a
parser may hand out a record and the pipeline may replace it with a filtered
copy without affecting anything else.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from picadata.constants import HOLDING_TAG, PPN_CODE, PPN_TAG

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

TAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[012][0-9][0-9][A-Z@]$")
OCCURRENCE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9]{2,3}$")
SUBFIELD_CODE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[_A-Za-z0-9]$")


@dataclass(frozen=True, slots=True)
class Field:
    """A single PICA+ field.

    Attributes:
        tag (str): Four character field tag, e.g. ``"021A"``.
        occurrence (str): Two or three digit occurrence, or ``""`` when absent.
        subfields (tuple[tuple[str, str], ...]): Ordered ``(code, value)`` pairs.
    """

    tag: str
    occurrence: str = ""
    subfields: tuple[tuple[str, str], ...] = ()

    @property
    def level(self) -> int:
        """Field level derived from the first tag digit (0, 1 or 2)."""
        return int(self.tag[0])

    @property
    def occurrence_number(self) -> int:
        """Occurrence as integer; ``0`` when the field has no occurrence."""
        return int(self.occurrence) if self.occurrence else 0

    @property
    def identifier(self) -> str:
        """Tag with occurrence (``TAG/OCC``) or the bare tag without occurrence."""
        return f"{self.tag}/{self.occurrence}" if self.occurrence else self.tag

    def values(self, code: str) -> list[str]:
        """Return all values of subfields with the given code."""
        return [value for sf_code, value in self.subfields if sf_code == code]

    def first_value(self, code: str) -> str | None:
        """Return the first value of a subfield with the given code, if any."""
        for sf_code, value in self.subfields:
            if sf_code == code:
                return value
        return None

    def is_well_formed(self) -> bool:
        """Return True if tag, occurrence and subfield codes are syntactically valid."""
        if not TAG_PATTERN.match(self.tag):
            return False
        if self.occurrence and not OCCURRENCE_PATTERN.match(self.occurrence):
            return False
        return all(SUBFIELD_CODE_PATTERN.match(code) for code, _ in self.subfields)


def _find_ppn(fields: Iterable[Field]) -> str | None:
    for f in fields:
        if f.tag == PPN_TAG:
            value = f.first_value(PPN_CODE)
            if value:
                return value
    return None


@dataclass(frozen=True, slots=True)
class Record:
    """An ordered, immutable sequence of PICA+ fields.

    Attributes:
        fields (tuple[Field, ...]): Fields in serialization order.
        ppn (str | None): Record identifier. Taken from the first ``003@ $0``
            when not given. Projections keep the identifier of their source
            record even if ``003@`` is filtered out.
    """

    fields: tuple[Field, ...] = field(default_factory=tuple)
    ppn: str | None = None

    def __post_init__(self) -> None:
        if self.ppn is None:
            object.__setattr__(self, "ppn", _find_ppn(self.fields))

    @classmethod
    def from_fields(cls, fields: Iterable[Field]) -> Record:
        """Build a record from any iterable of fields."""
        return cls(tuple(fields))

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    @property
    def identifier(self) -> str | None:
        """Record identifier (PPN), or None."""
        return self.ppn

    @property
    def holdings(self) -> list[tuple[Field, ...]]:
        """Level 1 and level 2 fields grouped per holding.

        A new holding starts at every ``101@`` field. Level 0 fields are
        ignored; level 1/2 fields before the first ``101@`` form a holding of
        their own.
        """
        holdings: list[tuple[Field, ...]] = []
        buffer: list[Field] = []
        for f in self.fields:
            if f.level == 0:
                continue
            if f.tag == HOLDING_TAG and buffer:
                holdings.append(tuple(buffer))
                buffer = []
            buffer.append(f)
        if buffer:
            holdings.append(tuple(buffer))
        return holdings

    @property
    def items(self) -> list[tuple[Field, ...]]:
        """Level 2 fields grouped per item (copy).

        Consecutive level 2 fields with the same occurrence form one item. A
        change of occurrence or any field of another level closes the item.
        """
        items: list[tuple[Field, ...]] = []
        buffer: list[Field] = []
        occurrence: str | None = None
        for f in self.fields:
            if f.level == 2:
                if buffer and f.occurrence != occurrence:
                    items.append(tuple(buffer))
                    buffer = []
                occurrence = f.occurrence
                buffer.append(f)
            elif buffer:
                items.append(tuple(buffer))
                buffer = []
                occurrence = None
        if buffer:
            items.append(tuple(buffer))
        return items

    def select(self, predicate: Callable[[Field], bool]) -> Record:
        """Return a new record with the fields for which ``predicate`` holds."""
        return Record(tuple(f for f in self.fields if predicate(f)), ppn=self.ppn)
