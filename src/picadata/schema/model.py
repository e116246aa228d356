# topmark:header:start
#
#   project      : PicaData
#   file         : model.py
#   file_relpath : src/picadata/schema/model.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Schema model and record validation.

A `Schema` describes which fields and subfields may occur in a record, how
often, and which values they may take. `Schema.check` returns a list of
human-readable error messages; an empty list means the record is valid.

Cardinality is evaluated per level:
    - level 0 fields once per record,
    - level 1 fields once per holding,
    - level 2 fields once per item.

Field definitions are looked up by exact ``TAG/OCC`` first, then by an
occurrence range (``TAG/OCC-OCC``), then by the bare tag.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from picadata.config.logging import get_logger

if TYPE_CHECKING:
    import re
    from collections.abc import Iterable, Mapping, Sequence

    from picadata.config.logging import PicadataLogger
    from picadata.record import Field, Record

logger: PicadataLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SubfieldSchema:
    """Rules for one subfield code.

    Attributes:
        code (str): The subfield code.
        required (bool): Whether the subfield must occur in the field.
        repeatable (bool): Whether the subfield may occur more than once.
        pattern (re.Pattern[str] | None): Regular expression values must match (searched).
        codes (frozenset[str] | None): Allowed values, if restricted.
    """

    code: str
    required: bool = False
    repeatable: bool = False
    pattern: re.Pattern[str] | None = None
    codes: frozenset[str] | None = None


@dataclass(frozen=True, slots=True)
class FieldSchema:
    """Rules for one field (or range of occurrences of a field).

    Attributes:
        key (str): Identifier as written in the schema (``021A``, ``045Q/01-09``).
        tag (str): The field tag.
        occurrence (tuple[int, int] | None): Inclusive occurrence range, or None.
        required (bool): Whether the field must occur.
        repeatable (bool): Whether the field may occur more than once.
        subfields (Mapping[str, SubfieldSchema] | None): Subfield rules; ``None``
            disables subfield checks for this field.
    """

    key: str
    tag: str
    occurrence: tuple[int, int] | None = None
    required: bool = False
    repeatable: bool = False
    subfields: Mapping[str, SubfieldSchema] | None = None

    @property
    def level(self) -> int:
        """Field level derived from the first tag digit."""
        return int(self.tag[0])


@dataclass(frozen=True)
class Schema:
    """A compiled record schema.

    Attributes:
        fields (Mapping[str, FieldSchema]): Field rules keyed by schema identifier.
        ignore_unknown (bool): Default for `check` when no explicit flag is given.
        title (str | None): Optional schema title.
    """

    fields: Mapping[str, FieldSchema]
    ignore_unknown: bool = False
    title: str | None = None
    _by_tag: dict[str, list[FieldSchema]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        for fs in self.fields.values():
            self._by_tag.setdefault(fs.tag, []).append(fs)

    def lookup(self, pica_field: Field) -> FieldSchema | None:
        """Return the rules applying to ``pica_field``, or None if it is unknown."""
        number = pica_field.occurrence_number
        exact: FieldSchema | None = None
        ranged: FieldSchema | None = None
        bare: FieldSchema | None = None
        for fs in self._by_tag.get(pica_field.tag, ()):
            if fs.occurrence is None:
                bare = fs
                continue
            lo, hi = fs.occurrence
            if lo <= number <= hi:
                if lo == hi:
                    exact = fs
                elif ranged is None:
                    ranged = fs
        return exact or ranged or bare

    def check(self, record: Record, *, ignore_unknown: bool | None = None) -> list[str]:
        """Validate ``record`` and return a list of error messages.

        Args:
            record (Record): The record to check.
            ignore_unknown (bool | None): If True, fields and subfields that
                are not defined in the schema are accepted silently. ``None``
                uses the schema default.

        Returns:
            list[str]: Error messages in field order; empty if the record is valid.
        """
        ignore = self.ignore_unknown if ignore_unknown is None else ignore_unknown
        errors: list[str] = []

        self._check_group([f for f in record if f.level == 0], 0, ignore, errors)
        holdings = record.holdings
        for holding in holdings:
            self._check_group([f for f in holding if f.level == 1], 1, ignore, errors)
        for item in record.items:
            self._check_group(item, 2, ignore, errors)

        if errors:
            logger.debug("record %s: %d schema errors", record.identifier, len(errors))
        return errors

    def _check_group(
        self,
        group: Sequence[Field],
        level: int,
        ignore_unknown: bool,
        errors: list[str],
    ) -> None:
        counts: Counter[str] = Counter()
        for pica_field in group:
            fs = self.lookup(pica_field)
            if fs is None:
                if not ignore_unknown:
                    errors.append(f"unknown field {pica_field.identifier}")
                continue
            counts[fs.key] += 1
            if counts[fs.key] == 2 and not fs.repeatable:
                errors.append(f"field {fs.key} is not repeatable")
            if fs.subfields is not None:
                self._check_subfields(pica_field, fs, ignore_unknown, errors)

        if level > 0 and not group:
            return
        errors.extend(
            f"missing field {fs.key}"
            for fs in self._required(level)
            if counts[fs.key] == 0
        )

    def _required(self, level: int) -> Iterable[FieldSchema]:
        return (fs for fs in self.fields.values() if fs.required and fs.level == level)

    @staticmethod
    def _check_subfields(
        pica_field: Field,
        fs: FieldSchema,
        ignore_unknown: bool,
        errors: list[str],
    ) -> None:
        rules = fs.subfields or {}
        counts: Counter[str] = Counter()
        for code, value in pica_field.subfields:
            sfs = rules.get(code)
            if sfs is None:
                if not ignore_unknown:
                    errors.append(f"unknown subfield {fs.key}${code}")
                continue
            counts[code] += 1
            if counts[code] == 2 and not sfs.repeatable:
                errors.append(f"subfield {fs.key}${code} is not repeatable")
            if sfs.pattern is not None and not sfs.pattern.search(value):
                errors.append(
                    f"value '{value}' in subfield {fs.key}${code} "
                    f"does not match pattern '{sfs.pattern.pattern}'"
                )
            if sfs.codes is not None and value not in sfs.codes:
                errors.append(f"value '{value}' in subfield {fs.key}${code} is not a known code")
        errors.extend(
            f"missing subfield {fs.key}${code}"
            for code, sfs in rules.items()
            if sfs.required and counts[code] == 0
        )
