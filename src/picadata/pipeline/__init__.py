# topmark:header:start
#
#   project      : PicaData
#   file         : __init__.py
#   file_relpath : src/picadata/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Streaming pipeline: input resolution, the driver, counters and error reporting."""

from __future__ import annotations

from picadata.pipeline.counters import COUNTER_ORDER, Counters
from picadata.pipeline.driver import DriverState, PipelineDriver
from picadata.pipeline.input import InputSource, open_input, resolve_input_type
from picadata.pipeline.reporter import ErrorReporter, format_error

__all__ = [
    "COUNTER_ORDER",
    "Counters",
    "DriverState",
    "ErrorReporter",
    "InputSource",
    "PipelineDriver",
    "format_error",
    "open_input",
    "resolve_input_type",
]
