# topmark:header:start
#
#   project      : PicaData
#   file         : test_pipeline_cli.py
#   file_relpath : tests/cli/test_pipeline_cli.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""End-to-end runs of the picadata command: projection, writing, validation, counting."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import SAMPLE_PLAIN_TWO, mark_cli

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result

ABC_PLAIN = """\
003@ $0A
021A $aErster

003@ $0B
021A $hohne Titel
028A $aX
028A $aY

003@ $0C
021A $aDritter

"""

ABC_SCHEMA = {
    "fields": {
        "003@": {"required": True},
        "021A": {"required": True, "subfields": {"a": {"required": True}}},
        "028A": {"repeatable": False},
    }
}


def _abc_files(tmp_path: Path) -> tuple[Path, Path]:
    records = tmp_path / "abc.plain"
    records.write_text(ABC_PLAIN, encoding="utf-8")
    schema = tmp_path / "schema.json"
    schema.write_text(json.dumps(ABC_SCHEMA), encoding="utf-8")
    return records, schema


@mark_cli
def test_invalid_record_errors_and_summary(tmp_path: Path) -> None:
    """Only B fails; its two errors are prefixed, and it counts once as invalid."""
    records, schema = _abc_files(tmp_path)

    result: Result = run_cli(["--no-config", "-c", "-s", str(schema), str(records)])

    assert_SUCCESS(result)
    assert result.stdout.splitlines() == [
        "B: missing subfield 021A$a",
        "B: field 028A is not repeatable",
        "3 records",
        "1 invalid",
        "0 holdings",
        "0 items",
        "8 fields",
    ]


@mark_cli
def test_no_summary_without_count(tmp_path: Path) -> None:
    records, schema = _abc_files(tmp_path)

    result: Result = run_cli(["--no-config", "-s", str(schema), str(records)])

    assert_SUCCESS(result)
    lines = result.stdout.splitlines()
    assert [line for line in lines if line.startswith("B: ")] == lines
    assert len(lines) == 2


@mark_cli
def test_errors_keep_identifier_when_path_drops_ppn_field(tmp_path: Path) -> None:
    records, _ = _abc_files(tmp_path)
    schema = tmp_path / "title.json"
    schema.write_text(
        json.dumps({"fields": {"021A": {"subfields": {"a": {"required": True}}}}}),
        encoding="utf-8",
    )

    result: Result = run_cli(["--no-config", "-p", "021A", "-s", str(schema), str(records)])

    assert_SUCCESS(result)
    assert result.stdout.splitlines() == ["B: missing subfield 021A$a"]


@mark_cli
def test_unknown_reports_elements_missing_from_schema(tmp_path: Path) -> None:
    records, schema = _abc_files(tmp_path)

    result: Result = run_cli(["--no-config", "-u", "-s", str(schema), str(records)])

    assert_SUCCESS(result)
    assert "B: unknown subfield 021A$h" in result.stdout.splitlines()


@mark_cli
def test_invalid_not_in_summary_without_schema(sample_file: Path) -> None:
    result: Result = run_cli(["--no-config", "-c", str(sample_file)])

    assert_SUCCESS(result)
    assert result.stdout.splitlines() == [
        "2 records",
        "2 holdings",
        "3 items",
        "13 fields",
    ]


@mark_cli
def test_to_without_value_uses_declared_input_type(tmp_path: Path) -> None:
    """``--from plain`` wins over the ``.dat`` extension; bare ``--to`` writes Plain."""
    path = tmp_path / "records.dat"
    path.write_text(SAMPLE_PLAIN_TWO, encoding="utf-8")

    result: Result = run_cli(["--no-config", "--from", "plain", str(path), "--to"])

    assert_SUCCESS(result)
    assert result.stdout == SAMPLE_PLAIN_TWO


@mark_cli
def test_type_names_are_case_insensitive(sample_file: Path) -> None:
    result: Result = run_cli(["--no-config", "-f", "PLAIN", "-t", "Plus", str(sample_file)])

    assert_SUCCESS(result)
    lines = result.stdout.split("\n")
    assert lines[0].startswith("003@ \x1f0123456789\x1e021A ")
    assert lines[-1] == ""
    assert len(lines) == 3


@mark_cli
def test_path_projection(sample_file: Path) -> None:
    result: Result = run_cli(["--no-config", "-p", "003@", "-t", "plain", str(sample_file)])

    assert_SUCCESS(result)
    assert result.stdout == "003@ $0123456789\n\n003@ $0987654321\n\n"


@mark_cli
def test_counts_are_taken_after_projection(sample_file: Path) -> None:
    result: Result = run_cli(["--no-config", "-c", "-p", "003@|101@", str(sample_file)])

    assert_SUCCESS(result)
    assert result.stdout.splitlines() == [
        "2 records",
        "2 holdings",
        "0 items",
        "4 fields",
    ]


@mark_cli
def test_convert_to_xml_and_back(sample_file: Path, tmp_path: Path) -> None:
    xml_file = tmp_path / "records.xml"

    first: Result = run_cli(["--no-config", "-t", "xml", "-o", str(xml_file), str(sample_file)])

    assert_SUCCESS(first)
    assert first.stdout == ""
    text = xml_file.read_text(encoding="utf-8")
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<collection')
    assert text.endswith("</collection>\n")

    # The .xml extension selects the PICA-XML parser.
    second: Result = run_cli(["--no-config", "-t", "plain", str(xml_file)])

    assert_SUCCESS(second)
    assert second.stdout == SAMPLE_PLAIN_TWO


@mark_cli
def test_output_file_is_not_created_without_writer(sample_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "out.plain"

    result: Result = run_cli(["--no-config", "-c", "-o", str(out), str(sample_file)])

    assert_SUCCESS(result)
    assert not out.exists()
    assert "2 records" in result.stdout


@mark_cli
def test_empty_input_writes_empty_xml_collection(tmp_path: Path) -> None:
    path = tmp_path / "empty.plain"
    path.write_text("", encoding="utf-8")

    result: Result = run_cli(["--no-config", "-c", "-t", "xml", str(path)])

    assert_SUCCESS(result)
    assert result.stdout.splitlines() == [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<collection xmlns="info:srw/schema/5/picaXML-v1.0">',
        "</collection>",
        "0 records",
        "0 holdings",
        "0 items",
        "0 fields",
    ]


@mark_cli
def test_records_precede_their_error_lines(tmp_path: Path) -> None:
    """With writer and schema on stdout, each record is followed by its errors."""
    records = tmp_path / "abc.plain"
    records.write_text(ABC_PLAIN, encoding="utf-8")
    schema = tmp_path / "schema.json"
    schema.write_text('{"fields": {"003@": {"required": true}}}', encoding="utf-8")

    result: Result = run_cli(
        ["--no-config", "-u", "-s", str(schema), "-p", "003@|028A", "-t", "plain", str(records)]
    )

    assert_SUCCESS(result)
    assert result.stdout.splitlines() == [
        "003@ $0A",
        "",
        "003@ $0B",
        "028A $aX",
        "028A $aY",
        "",
        "B: unknown field 028A",
        "B: unknown field 028A",
        "003@ $0C",
        "",
    ]
