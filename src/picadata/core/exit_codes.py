# topmark:header:start
#
#   project      : PicaData
#   file         : exit_codes.py
#   file_relpath : src/picadata/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Exit codes for the picadata CLI.

picadata aligns with the BSD `sysexits` convention where practical, so that
shell pipelines can tell a bad invocation from unreadable input or a broken
record stream. Validation failures never change the exit code: they are
reported, not fatal.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the picadata CLI.

    Attributes:
        SUCCESS: The stream was processed to its end (even if records were invalid).
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Invalid flags or arguments, e.g. an unknown serialization
            type or a malformed path expression. Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: The input stream could not be parsed. Mirrors BSD
            ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: The input file does not exist or cannot be opened.
            Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error while reading or writing. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Unreadable or malformed schema or configuration file.
            Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
