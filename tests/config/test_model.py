# topmark:header:start
#
#   project      : PicaData
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""MutableConfig precedence and freezing into PipelineConfig."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from picadata.config.model import MutableConfig, PipelineConfig
from picadata.core.errors import PathSyntaxError, SchemaError, UnknownTypeError
from picadata.formats.types import PicaType


def test_defaults_freeze_to_a_passive_pipeline() -> None:
    config = MutableConfig.from_defaults().freeze(input_type=PicaType.BINARY)

    assert config == PipelineConfig(input_type=PicaType.BINARY)


def test_cli_overrides_toml() -> None:
    source = Path("/etc/picadata/picadata.toml")
    builder = MutableConfig.from_defaults()
    builder.update_from_toml(
        {"from": "plus", "to": "xml", "count": True, "path": "021A", "schema": "s.json"},
        source=source,
    )
    builder.update_from_cli(to_type="plain", path="003@")

    assert builder.from_type == "plus"
    assert builder.to_type == "plain"
    assert builder.count is True
    assert builder.path == "003@"
    assert builder.schema == source.parent / "s.json"
    assert builder.config_files == [source]


def test_wrongly_typed_toml_values_are_ignored() -> None:
    builder = MutableConfig.from_defaults().update_from_toml(
        {"count": "yes", "to": 3}, source=Path("picadata.toml")
    )

    assert builder.count is False
    assert builder.to_type is None


def test_output_dash_is_not_made_relative() -> None:
    builder = MutableConfig.from_defaults().update_from_toml(
        {"output": "-"}, source=Path("/x/picadata.toml")
    )

    assert builder.output == "-"


def test_empty_to_means_input_type() -> None:
    builder = MutableConfig.from_defaults().update_from_cli(to_type="")

    assert builder.freeze(input_type=PicaType.PLUS).output_type is PicaType.PLUS


def test_freeze_compiles_path_and_schema(tmp_path: Path) -> None:
    schema = tmp_path / "schema.json"
    schema.write_text('{"fields": {"003@": {}}}', encoding="utf-8")
    builder = MutableConfig.from_defaults().update_from_cli(
        to_type="XML", path="003@|021A", schema=str(schema), unknown=True, count=True
    )

    config = builder.freeze(input_type=PicaType.PLAIN)

    assert config.output_type is PicaType.XML
    assert config.path is not None and str(config.path) == "003@|021A"
    assert config.schema is not None and config.schema.ignore_unknown is False
    assert config.report_unknown is True
    assert config.count is True
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.count = False  # type: ignore[misc]


def test_freeze_errors(tmp_path: Path) -> None:
    with pytest.raises(UnknownTypeError):
        MutableConfig(to_type="json").freeze(input_type=PicaType.PLAIN)
    with pytest.raises(PathSyntaxError):
        MutableConfig(path="0").freeze(input_type=PicaType.PLAIN)
    with pytest.raises(SchemaError):
        MutableConfig(schema=tmp_path / "none.json").freeze(input_type=PicaType.PLAIN)
