# topmark:header:start
#
#   project      : PicaData
#   file         : model.py
#   file_relpath : src/picadata/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Configuration model.

This module defines:
    - `PipelineConfig`: the immutable bundle the pipeline runs with. It holds
      resolved types and the compiled path matcher and schema.
    - `MutableConfig`: a builder collecting raw option values from config
      files and the command line. `MutableConfig.freeze` resolves and compiles
      them into a `PipelineConfig`.

Precedence is applied by update order: defaults, then config file, then CLI.

Immutability:
    - `PipelineConfig` is ``frozen=True``. Nothing in the streaming phase reads
      the builder or Click state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from picadata.config.keys import Toml
from picadata.config.logging import get_logger
from picadata.formats.types import PicaType, require_type
from picadata.path import PathMatcher, compile_path
from picadata.schema import Schema, load_schema_file

if TYPE_CHECKING:
    from picadata.config.io import TomlTable
    from picadata.config.logging import PicadataLogger

logger: PicadataLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Immutable configuration of one pipeline run.

    Attributes:
        input_type (PicaType): Serialization type of the input stream.
        output_type (PicaType | None): Serialization type to write, or None (no writer).
        schema (Schema | None): Compiled schema to validate against, or None.
        path (PathMatcher | None): Compiled path projection, or None.
        report_unknown (bool): Report fields/subfields missing from the schema.
        count (bool): Emit the summary counters at the end of the stream.
    """

    input_type: PicaType
    output_type: PicaType | None = None
    schema: Schema | None = None
    path: PathMatcher | None = None
    report_unknown: bool = False
    count: bool = False


def _get_str(table: TomlTable, key: str) -> str | None:
    value: Any = table.get(key)
    if value is None or isinstance(value, str):
        return value
    logger.warning("Config key %r must be a string, ignoring %r", key, value)
    return None


def _get_bool(table: TomlTable, key: str) -> bool | None:
    value: Any = table.get(key)
    if value is None or isinstance(value, bool):
        return value
    logger.warning("Config key %r must be true or false, ignoring %r", key, value)
    return None


@dataclass
class MutableConfig:
    """Mutable builder for `PipelineConfig`.

    Attributes:
        from_type (str | None): Declared input type name; None lets the input
            resolver guess it.
        to_type (str | None): Output type name; ``""`` means "same as input",
            None disables writing.
        schema (Path | None): Schema document to validate against.
        unknown (bool): Report unknown fields/subfields.
        count (bool): Emit summary counters.
        path (str | None): Path expression restricting every record.
        output (str | None): Destination file of serialized records (None: stdout).
        config_files (list[Path]): Config files applied to this builder, in order.
    """

    from_type: str | None = None
    to_type: str | None = None
    schema: Path | None = None
    unknown: bool = False
    count: bool = False
    path: str | None = None
    output: str | None = None
    config_files: list[Path] = field(default_factory=list)

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder holding the built-in defaults."""
        return cls()

    def update_from_toml(self, table: TomlTable, *, source: Path) -> MutableConfig:
        """Apply settings from a config table read from ``source``.

        Relative ``schema`` and ``output`` paths are resolved against the
        directory of ``source``.
        """
        base = source.parent
        if (from_type := _get_str(table, Toml.KEY_FROM)) is not None:
            self.from_type = from_type
        if (to_type := _get_str(table, Toml.KEY_TO)) is not None:
            self.to_type = to_type
        if (schema := _get_str(table, Toml.KEY_SCHEMA)) is not None:
            self.schema = base / schema
        if (unknown := _get_bool(table, Toml.KEY_UNKNOWN)) is not None:
            self.unknown = unknown
        if (count := _get_bool(table, Toml.KEY_COUNT)) is not None:
            self.count = count
        if (path := _get_str(table, Toml.KEY_PATH)) is not None:
            self.path = path
        if (output := _get_str(table, Toml.KEY_OUTPUT)) is not None:
            self.output = output if output == "-" else str(base / output)
        self.config_files.append(source)
        return self

    def update_from_cli(
        self,
        *,
        from_type: str | None = None,
        to_type: str | None = None,
        schema: str | None = None,
        unknown: bool = False,
        count: bool = False,
        path: str | None = None,
        output: str | None = None,
    ) -> MutableConfig:
        """Apply command line options. ``None``/``False`` leave values untouched."""
        if from_type is not None:
            self.from_type = from_type
        if to_type is not None:
            self.to_type = to_type
        if schema is not None:
            self.schema = Path(schema)
        if unknown:
            self.unknown = True
        if count:
            self.count = True
        if path is not None:
            self.path = path
        if output is not None:
            self.output = output
        return self

    def freeze(self, *, input_type: PicaType) -> PipelineConfig:
        """Resolve types, compile the path and load the schema.

        Args:
            input_type (PicaType): The effective input type, as determined by
                the input resolver.

        Returns:
            PipelineConfig: The immutable configuration.

        Raises:
            UnknownTypeError: If the output type name is not recognized.
            PathSyntaxError: If the path expression is malformed.
            SchemaError: If the schema document cannot be read or is malformed.
        """
        output_type: PicaType | None = None
        if self.to_type is not None:
            output_type = require_type(self.to_type) if self.to_type.strip() else input_type

        matcher = compile_path(self.path) if self.path is not None else None
        schema = (
            load_schema_file(self.schema, ignore_unknown=not self.unknown)
            if self.schema is not None
            else None
        )
        config = PipelineConfig(
            input_type=input_type,
            output_type=output_type,
            schema=schema,
            path=matcher,
            report_unknown=self.unknown,
            count=self.count,
        )
        logger.debug("Frozen pipeline config: %s", config)
        return config
