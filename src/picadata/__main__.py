# topmark:header:start
#
#   project      : PicaData
#   file         : __main__.py
#   file_relpath : src/picadata/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Module entry point for running picadata via ``python -m picadata``.

Equivalent to running the ``picadata`` console script.

Examples:
    Count the records of a file::

        python -m picadata --count records.dat
"""

from __future__ import annotations

from picadata.cli.main import cli

if __name__ == "__main__":
    cli()
