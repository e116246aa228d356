# topmark:header:start
#
#   project      : PicaData
#   file         : test_path.py
#   file_relpath : tests/test_path.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Path expressions: syntax, field matching and projection."""

from __future__ import annotations

import pytest

from picadata.core.errors import PathSyntaxError
from picadata.path import ANY_OCCURRENCE, PicaPath, compile_path
from picadata.record import Field, Record
from tests.conftest import make_record, parametrize


@parametrize(
    ("expression", "occurrence", "codes", "start", "end"),
    [
        ("003@", None, "", None, None),
        ("045Q/01", (1, 1), "", None, None),
        ("045Q/01-09", (1, 9), "", None, None),
        ("045Q[02]", (2, 2), "", None, None),
        ("045Q/*", ANY_OCCURRENCE, "", None, None),
        ("021A$ah", None, "ah", None, None),
        ("021Aa", None, "a", None, None),
        ("003@$0/0-3", None, "0", 0, 3),
        ("003@$0/2", None, "0", 2, 2),
        ("003@$0/2-", None, "0", 2, None),
        ("003@$0/-3", None, "0", 0, 3),
    ],
)
def test_parse(
    expression: str,
    occurrence: tuple[int, int] | str | None,
    codes: str,
    start: int | None,
    end: int | None,
) -> None:
    path = PicaPath.parse(expression)

    assert path.occurrence == occurrence
    assert path.codes == codes
    assert (path.start, path.end) == (start, end)
    assert str(path) == expression


@parametrize(
    "expression",
    ["", "003", "003@/", "003@/1", "003@/*-09", "003@/09-01", "003@$0/3-1", "4XYZ", "003@ 021A"],
)
def test_syntax_errors(expression: str) -> None:
    with pytest.raises(PathSyntaxError, match="invalid PICA path expression"):
        compile_path(expression)


def test_empty_alternative_is_an_error() -> None:
    with pytest.raises(PathSyntaxError):
        compile_path("003@||021A")


@parametrize(
    ("expression", "f", "expected"),
    [
        ("003@", Field("003@"), True),
        ("003@", Field("003@", "00"), True),
        ("045Q", Field("045Q", "01"), False),
        ("045Q/01", Field("045Q", "01"), True),
        ("045Q/01-03", Field("045Q", "03"), True),
        ("045Q/01-03", Field("045Q", "04"), False),
        ("045Q/*", Field("045Q", "07"), True),
        ("045Q/*", Field("045Q"), True),
        ("0...", Field("021A"), True),
        ("0...", Field("101@"), False),
        ("2..@", Field("203@", "01"), True),
        ("203@", Field("203@", "05"), True),
        ("203@/02", Field("203@", "05"), False),
    ],
)
def test_match_field(expression: str, f: Field, expected: bool) -> None:
    assert PicaPath.parse(expression).match_field(f) is expected


def test_project_keeps_only_matching_fields_in_order() -> None:
    record = make_record(
        ("003@", "", (("0", "1"),)),
        ("021A", "", (("a", "x"),)),
        ("012@", "00", (("a", "y"),)),
    )

    projected = compile_path("003@").project(record)

    assert [f.tag for f in projected] == ["003@"]
    assert projected.identifier == "1"
    assert compile_path("021A").project(record).identifier == "1"


def test_union(sample_record: Record) -> None:
    matcher = compile_path("003@ | 101@")

    assert [f.tag for f in matcher.project(sample_record)] == ["003@", "101@", "101@"]
    assert str(matcher) == "003@|101@"
