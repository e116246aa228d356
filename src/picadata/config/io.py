# topmark:header:start
#
#   project      : PicaData
#   file         : io.py
#   file_relpath : src/picadata/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Load TOML configuration sources.

This module reads picadata configuration from:
- ``picadata.toml`` (top-level keys), or
- ``pyproject.toml`` (the ``[tool.picadata]`` table).

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from picadata.config.keys import Toml
from picadata.config.logging import get_logger
from picadata.constants import (
    DEFAULT_TOML_CONFIG_NAME,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_SECTION,
)
from picadata.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from picadata.config.logging import PicadataLogger

TomlTable = dict[str, Any]

logger: PicadataLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc.strerror or exc}") from exc
    except TomlkitParseError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    data_any: Any = doc.unwrap()
    return data_any if isinstance(data_any, dict) else {}


def extract_tool_table(path: Path, data: TomlTable) -> TomlTable:
    """Return the picadata settings contained in a parsed TOML document.

    For ``pyproject.toml`` this is the ``[tool.picadata]`` table (empty if
    absent); for any other file it is the document itself.
    """
    if path.name != PYPROJECT_TOML_NAME:
        return data
    tool = data.get(Toml.SECTION_TOOL, {})
    table = tool.get(PYPROJECT_TOOL_SECTION, {}) if isinstance(tool, dict) else {}
    return table if isinstance(table, dict) else {}


def discover_config_file(cwd: Path) -> Path | None:
    """Return the config file to use for ``cwd``, if any.

    ``picadata.toml`` wins over ``pyproject.toml``; a ``pyproject.toml`` is only
    used when it contains a ``[tool.picadata]`` table.
    """
    candidate = cwd / DEFAULT_TOML_CONFIG_NAME
    if candidate.is_file():
        return candidate
    pyproject = cwd / PYPROJECT_TOML_NAME
    if pyproject.is_file():
        try:
            data = load_toml_dict(pyproject)
        except ConfigError as exc:
            logger.warning("Ignoring unreadable %s: %s", pyproject, exc)
            return None
        if extract_tool_table(pyproject, data):
            return pyproject
    return None


def load_config_table(path: Path) -> TomlTable:
    """Load the picadata settings from ``path`` and warn about unknown keys."""
    table = extract_tool_table(path, load_toml_dict(path))
    for key in sorted(set(table) - Toml.ALL_KEYS):
        logger.warning("Ignoring unknown config key %r in %s", key, path)
    logger.debug("Loaded config from %s: %s", path, table)
    return table
