# topmark:header:start
#
#   project      : PicaData
#   file         : test_path_property.py
#   file_relpath : tests/test_path_property.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Property tests for path projection over generated records.

These run many examples and are excluded from the default QA session;
run them with ``nox -s property_test``.
"""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from picadata.path import compile_path
from picadata.record import Field, Record

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

TAGS = st.sampled_from(["003@", "021A", "028A", "045Q", "101@", "144Z", "201B", "203@"])
OCCURRENCES = st.sampled_from(["", "00", "01", "02", "10"])
FIELDS = st.builds(
    lambda tag, occ, value: Field(tag, occ, (("0" if tag == "003@" else "a", value),)),
    TAGS,
    OCCURRENCES,
    st.text(alphabet="0123456789X", min_size=1, max_size=9),
)
EXPRESSIONS = st.sampled_from(
    ["003@", "0...", "2...", "045Q/01-02", "045Q/*", "1..@|021A", "203@$0", "...A"]
)


@settings(max_examples=500, suppress_health_check=[HealthCheck.too_slow], deadline=None)
@given(fields=st.lists(FIELDS, max_size=30), expression=EXPRESSIONS)
def test_projection_is_idempotent(fields: list[Field], expression: str) -> None:
    matcher = compile_path(expression)
    record = Record.from_fields(fields)

    once = matcher.project(record)

    assert matcher.project(once) == once
    assert all(f in record.fields for f in once)


@settings(max_examples=500, suppress_health_check=[HealthCheck.too_slow], deadline=None)
@given(fields=st.lists(FIELDS, max_size=30), expression=EXPRESSIONS)
def test_projection_keeps_identifier(fields: list[Field], expression: str) -> None:
    record = Record.from_fields(fields)

    projected = compile_path(expression).project(record)

    assert projected.identifier == record.identifier


@settings(max_examples=300, deadline=None)
@given(fields=st.lists(FIELDS, max_size=30), left=EXPRESSIONS, right=EXPRESSIONS)
def test_union_keeps_fields_matched_by_either_side(
    fields: list[Field], left: str, right: str
) -> None:
    record = Record.from_fields(fields)
    left_matcher = compile_path(left)
    right_matcher = compile_path(right)

    union = compile_path(f"{left}|{right}").project(record)

    assert list(union) == [
        f for f in record if left_matcher.matches(f) or right_matcher.matches(f)
    ]
