# topmark:header:start
#
#   project      : PicaData
#   file         : __init__.py
#   file_relpath : src/picadata/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Core building blocks shared by the library and the CLI (exit codes, errors)."""
