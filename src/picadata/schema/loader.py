# topmark:header:start
#
#   project      : PicaData
#   file         : loader.py
#   file_relpath : src/picadata/schema/loader.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Load schema documents.

Schemas are JSON documents in the style of the Avram specification::

    {
      "title": "Minimal title schema",
      "fields": {
        "003@": {
          "required": true,
          "subfields": {"0": {"required": true, "pattern": "^[0-9]+[0-9X]$"}}
        },
        "021A": {"repeatable": false},
        "045Q/01-09": {"repeatable": true}
      }
    }

Field definitions without ``subfields`` do not constrain their subfields.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from picadata.config.logging import get_logger
from picadata.core.errors import SchemaError
from picadata.schema.model import FieldSchema, Schema, SubfieldSchema

if TYPE_CHECKING:
    from collections.abc import Mapping

    from picadata.config.logging import PicadataLogger

logger: PicadataLogger = get_logger(__name__)

FIELD_KEY_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<tag>[012][0-9][0-9][A-Z@])(?:/(?P<occ>[0-9]{2,3})(?:-(?P<occ_to>[0-9]{2,3}))?)?$"
)
SUBFIELD_CODE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[_A-Za-z0-9]$")


def _as_object(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{what} must be a JSON object")
    return value


def _as_bool(definition: Mapping[str, Any], key: str, what: str) -> bool:
    value = definition.get(key, False)
    if not isinstance(value, bool):
        raise SchemaError(f"{what}: '{key}' must be true or false")
    return value


def _load_subfield(key: str, code: str, raw: Any) -> SubfieldSchema:
    what = f"subfield {key}${code}"
    if not SUBFIELD_CODE_PATTERN.match(code):
        raise SchemaError(f"invalid subfield code {code!r} in field {key}")
    definition = _as_object(raw, what)

    pattern: re.Pattern[str] | None = None
    if definition.get("pattern") is not None:
        try:
            pattern = re.compile(str(definition["pattern"]))
        except re.error as exc:
            raise SchemaError(f"{what}: invalid pattern: {exc}") from exc

    codes: frozenset[str] | None = None
    raw_codes = definition.get("codes")
    if isinstance(raw_codes, dict):
        codes = frozenset(raw_codes)
    elif isinstance(raw_codes, list):
        codes = frozenset(str(c) for c in raw_codes)
    elif raw_codes is not None:
        raise SchemaError(f"{what}: 'codes' must be an object or a list")

    return SubfieldSchema(
        code=code,
        required=_as_bool(definition, "required", what),
        repeatable=_as_bool(definition, "repeatable", what),
        pattern=pattern,
        codes=codes,
    )


def _load_field(key: str, raw: Any) -> FieldSchema:
    m = FIELD_KEY_PATTERN.match(key)
    if m is None:
        raise SchemaError(f"invalid field identifier {key!r}")
    what = f"field {key}"
    definition = _as_object(raw, what)

    occurrence: tuple[int, int] | None = None
    if m.group("occ") is not None:
        lo = int(m.group("occ"))
        hi = int(m.group("occ_to")) if m.group("occ_to") else lo
        if hi < lo:
            raise SchemaError(f"invalid occurrence range in {key!r}")
        occurrence = (lo, hi)

    subfields: Mapping[str, SubfieldSchema] | None = None
    if definition.get("subfields") is not None:
        raw_subfields = _as_object(definition["subfields"], f"{what}: 'subfields'")
        subfields = MappingProxyType(
            {code: _load_subfield(key, code, sf) for code, sf in raw_subfields.items()}
        )

    return FieldSchema(
        key=key,
        tag=m.group("tag"),
        occurrence=occurrence,
        required=_as_bool(definition, "required", what),
        repeatable=_as_bool(definition, "repeatable", what),
        subfields=subfields,
    )


def load_schema(document: bytes | str, *, ignore_unknown: bool = False) -> Schema:
    """Compile a JSON schema document into a `Schema`.

    Args:
        document (bytes | str): The JSON text.
        ignore_unknown (bool): Default unknown-element policy of the schema.

    Returns:
        Schema: The compiled schema.

    Raises:
        SchemaError: If the document is not valid JSON or not a valid schema.
    """
    try:
        data = json.loads(document)
    except (ValueError, UnicodeDecodeError) as exc:
        raise SchemaError(f"schema is not valid JSON: {exc}") from exc

    root = _as_object(data, "schema")
    raw_fields = _as_object(root.get("fields"), "schema 'fields'")
    fields = {key: _load_field(key, raw) for key, raw in raw_fields.items()}
    title = root.get("title")
    logger.debug("loaded schema %r with %d field definitions", title, len(fields))
    return Schema(
        fields=MappingProxyType(fields),
        ignore_unknown=ignore_unknown,
        title=str(title) if title is not None else None,
    )


def load_schema_file(path: str | Path, *, ignore_unknown: bool = False) -> Schema:
    """Read and compile a schema document from ``path``.

    Raises:
        SchemaError: If the file cannot be read or the document is invalid.
    """
    try:
        document = Path(path).read_bytes()
    except OSError as exc:
        raise SchemaError(f"cannot read schema {path}: {exc.strerror or exc}") from exc
    try:
        return load_schema(document, ignore_unknown=ignore_unknown)
    except SchemaError as exc:
        raise SchemaError(f"{path}: {exc}") from exc
