# topmark:header:start
#
#   project      : PicaData
#   file         : keys.py
#   file_relpath : src/picadata/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Canonical TOML key names for picadata configuration.

These keys are the external configuration API as it appears in
``picadata.toml`` and in ``[tool.picadata]`` inside ``pyproject.toml``. They
mirror the long CLI option names.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML keys used by picadata configuration.

    Notes:
        - Values must match user-facing TOML keys exactly.
        - Renaming or removing a key is a breaking change.
    """

    SECTION_TOOL: Final[str] = "tool"

    KEY_FROM: Final[str] = "from"
    KEY_TO: Final[str] = "to"
    KEY_SCHEMA: Final[str] = "schema"
    KEY_UNKNOWN: Final[str] = "unknown"
    KEY_COUNT: Final[str] = "count"
    KEY_PATH: Final[str] = "path"
    KEY_OUTPUT: Final[str] = "output"

    ALL_KEYS: Final[frozenset[str]] = frozenset(
        {KEY_FROM, KEY_TO, KEY_SCHEMA, KEY_UNKNOWN, KEY_COUNT, KEY_PATH, KEY_OUTPUT}
    )
