# topmark:header:start
#
#   project      : PicaData
#   file         : __init__.py
#   file_relpath : src/picadata/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Configuration: immutable pipeline config, its builder, TOML loading and logging.

This package is imported by nearly every module (for `picadata.config.logging`),
so it does not import its submodules eagerly. Import the model from
`picadata.config.model`.
"""
