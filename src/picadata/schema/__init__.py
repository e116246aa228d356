# topmark:header:start
#
#   project      : PicaData
#   file         : __init__.py
#   file_relpath : src/picadata/schema/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Record schemas: loading JSON schema documents and validating records."""

from __future__ import annotations

from picadata.schema.loader import load_schema, load_schema_file
from picadata.schema.model import FieldSchema, Schema, SubfieldSchema

__all__ = [
    "FieldSchema",
    "Schema",
    "SubfieldSchema",
    "load_schema",
    "load_schema_file",
]
