# topmark:header:start
#
#   project      : PicaData
#   file         : __init__.py
#   file_relpath : src/picadata/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Click command line interface for picadata.

The CLI turns options into a `PipelineConfig`, runs the pipeline driver and
translates library errors into sysexits-aligned exit codes.
"""
