# topmark:header:start
#
#   project      : PicaData
#   file         : constants.py
#   file_relpath : src/picadata/constants.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Project-wide constants for picadata."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

PICADATA_VERSION: str = get_version("picadata")

# Configuration discovery
DEFAULT_TOML_CONFIG_NAME: Final[str] = "picadata.toml"
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "picadata"

# PICA+ structure
PPN_TAG: Final[str] = "003@"
PPN_CODE: Final[str] = "0"
HOLDING_TAG: Final[str] = "101@"
ILN_CODE: Final[str] = "a"
EPN_TAG: Final[str] = "203@"
EPN_CODE: Final[str] = "0"

# Control characters of the normalized PICA serializations
SUBFIELD_SEPARATOR: Final[str] = "\x1f"
FIELD_TERMINATOR: Final[str] = "\x1e"
RECORD_TERMINATOR: Final[str] = "\x1d"

# XML namespaces
PICA_XML_NAMESPACE: Final[str] = "info:srw/schema/5/picaXML-v1.0"
PPXML_NAMESPACE: Final[str] = "http://www.oclcpica.org/xmlns/ppxml-1.0"
