# topmark:header:start
#
#   project      : PicaData
#   file         : counters.py
#   file_relpath : src/picadata/pipeline/counters.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Summary counters accumulated over a record stream.

A `Counters` value exists only when counting was requested. ``invalid`` is
part of the summary only when a schema is configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from picadata.record import Record

#: Fixed reporting order of the summary.
COUNTER_ORDER: Final[tuple[str, ...]] = ("records", "invalid", "holdings", "items", "fields")


@dataclass
class Counters:
    """Running totals over the (possibly projected) record stream.

    Attributes:
        track_invalid (bool): Whether ``invalid`` is part of the summary.
        records (int): Number of records processed.
        invalid (int): Number of records that failed validation.
        holdings (int): Total number of holdings.
        items (int): Total number of items.
        fields (int): Total number of fields.
    """

    track_invalid: bool = False
    records: int = 0
    invalid: int = 0
    holdings: int = 0
    items: int = 0
    fields: int = 0

    def add_record(self, record: Record) -> None:
        """Account for one processed record."""
        self.records += 1
        self.holdings += len(record.holdings)
        self.items += len(record.items)
        self.fields += len(record.fields)

    def add_invalid(self) -> None:
        """Account for one record that failed validation."""
        self.invalid += 1

    def requested(self) -> tuple[str, ...]:
        """Names of the counters that belong to the summary, in reporting order."""
        return tuple(
            name for name in COUNTER_ORDER if name != "invalid" or self.track_invalid
        )

    def snapshot(self) -> list[tuple[str, int]]:
        """Return ``(name, value)`` pairs of the requested counters in reporting order."""
        return [(name, getattr(self, name)) for name in self.requested()]

    def summary_lines(self) -> list[str]:
        """Return the summary as ``"<value> <name>"`` lines."""
        return [f"{value} {name}" for name, value in self.snapshot()]
