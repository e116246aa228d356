# topmark:header:start
#
#   project      : PicaData
#   file         : __init__.py
#   file_relpath : src/picadata/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""PicaData package.

PicaData is a one-pass streaming tool for PICA+ bibliographic records. It
reads the binary, plain, plus, PICA-XML and PPXML serializations, projects
records to path expressions, converts between serializations, validates
records against Avram-style schemas and counts records, holdings, items and
fields.
"""

from __future__ import annotations
