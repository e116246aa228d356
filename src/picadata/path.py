# topmark:header:start
#
#   project      : PicaData
#   file         : path.py
#   file_relpath : src/picadata/path.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""PICA path expressions.

A path expression selects fields by tag and occurrence, optionally naming
subfield codes and a character range::

    003@            field 003@
    0...            any level 0 field
    045Q/01         field 045Q with occurrence 01
    045Q/01-09      occurrences 01 to 09
    045Q/*          any occurrence
    045Q[01]        bracket notation for occurrence 01
    021A$ah         field 021A, subfields a and h
    003@$0/0-3      characters 0 to 3 of 003@ $0

Several expressions may be combined with ``|``; a field matches the
combination if it matches any of them.

Occurrence rules:
    - No occurrence in the expression matches fields without occurrence or
      with occurrence zero. Level 2 fields match regardless of occurrence,
      since their occurrence only numbers the copies of a record.
    - ``/*`` matches any occurrence.

Projection (`PathMatcher.project`) keeps whole fields in their original order;
subfield codes and character ranges do not trim fields. Because projection is
a filter, applying it twice yields the same record as applying it once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from picadata.config.logging import get_logger
from picadata.core.errors import PathSyntaxError

if TYPE_CHECKING:
    from picadata.config.logging import PicadataLogger
    from picadata.record import Field, Record

logger: PicadataLogger = get_logger(__name__)

PATH_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"""^
    (?P<tag>[012.][0-9.][0-9.][A-Z@.])
    (?:
        \[(?P<bracket>[0-9]{2})(?:-(?P<bracket_to>[0-9]{2}))?\]
      | /(?P<occ>\*|[0-9]{2,3})(?:-(?P<occ_to>[0-9]{2,3}))?
    )?
    (?:
        \$?(?P<codes>[_A-Za-z0-9]+)
        (?P<pos>/(?:[0-9]+(?:-[0-9]*)?|-[0-9]+))?
    )?
    $""",
    re.VERBOSE,
)

ANY_OCCURRENCE: Final[str] = "*"


@dataclass(frozen=True, slots=True)
class PicaPath:
    """A single compiled path expression.

    Attributes:
        expression (str): The source text.
        tag (re.Pattern[str]): Tag pattern (``.`` matches any character).
        occurrence (tuple[int, int] | str | None): ``None`` (no occurrence given),
            ``"*"`` (any), or an inclusive numeric range.
        codes (str): Subfield codes (may be empty).
        start (int | None): First character position, if given.
        end (int | None): Last character position, if given.
    """

    expression: str
    tag: re.Pattern[str]
    occurrence: tuple[int, int] | str | None = None
    codes: str = ""
    start: int | None = None
    end: int | None = None

    @classmethod
    def parse(cls, expression: str) -> PicaPath:
        """Compile one expression (no ``|``).

        Raises:
            PathSyntaxError: If the expression is malformed.
        """
        m = PATH_PATTERN.match(expression)
        if m is None:
            raise PathSyntaxError(expression)

        occurrence: tuple[int, int] | str | None = None
        occ = m.group("occ") or m.group("bracket")
        occ_to = m.group("occ_to") or m.group("bracket_to")
        if occ == ANY_OCCURRENCE:
            if occ_to is not None:
                raise PathSyntaxError(expression)
            occurrence = ANY_OCCURRENCE
        elif occ is not None:
            lo = int(occ)
            hi = int(occ_to) if occ_to is not None else lo
            if hi < lo:
                raise PathSyntaxError(expression)
            occurrence = (lo, hi)

        start: int | None = None
        end: int | None = None
        pos = m.group("pos")
        if pos:
            first, dash, last = pos[1:].partition("-")
            start = int(first) if first else 0
            end = int(last) if last else (None if dash else start)
            if end is not None and end < start:
                raise PathSyntaxError(expression)

        return cls(
            expression=expression,
            tag=re.compile(f"^{m.group('tag')}$"),
            occurrence=occurrence,
            codes=m.group("codes") or "",
            start=start,
            end=end,
        )

    def match_field(self, field: Field) -> bool:
        """Return True if ``field`` matches tag and occurrence of this path."""
        if not self.tag.match(field.tag):
            return False
        if self.occurrence == ANY_OCCURRENCE:
            return True
        number = field.occurrence_number
        if self.occurrence is None:
            return number == 0 or field.level == 2
        lo, hi = self.occurrence
        return lo <= number <= hi

    def __str__(self) -> str:
        return self.expression


@dataclass(frozen=True, slots=True)
class PathMatcher:
    """A union of path expressions used to project records.

    The matcher holds no state besides its compiled paths and can be shared
    across records.
    """

    paths: tuple[PicaPath, ...]

    def matches(self, field: Field) -> bool:
        """Return True if ``field`` matches any of the paths."""
        return any(p.match_field(field) for p in self.paths)

    def project(self, record: Record) -> Record:
        """Return a new record containing only the matching fields, in order."""
        return record.select(self.matches)

    def __str__(self) -> str:
        return "|".join(str(p) for p in self.paths)


def compile_path(expression: str) -> PathMatcher:
    """Compile a (possibly ``|``-separated) path expression into a `PathMatcher`.

    Args:
        expression (str): The expression, e.g. ``"003@|021A"``.

    Returns:
        PathMatcher: The reusable matcher.

    Raises:
        PathSyntaxError: If the expression or any of its parts is malformed.
    """
    parts = [part.strip() for part in expression.split("|")]
    if not parts or any(not part for part in parts):
        raise PathSyntaxError(expression)
    matcher = PathMatcher(tuple(PicaPath.parse(part) for part in parts))
    logger.debug("compiled path expression %s", matcher)
    return matcher
