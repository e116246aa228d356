# topmark:header:start
#
#   project      : PicaData
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""Pytest configuration for the picadata test suite.

This file sets up global fixtures, sample records and the logging
configuration for test runs.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    options with `picadata.config.model.MutableConfig`, then `freeze()` into a
    `PipelineConfig` for the pipeline driver.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from picadata.config import logging
from picadata.record import Field, Record

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


@pytest.fixture(autouse=True)
def silence_picadata_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture used to manipulate environment variables.
    """
    monkeypatch.delenv("PICADATA_LOG_LEVEL", raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so every log call is exercised."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


# --- Sample data ---------------------------------------------------------------

#: A title record with two holdings; the first has two copies, the second one.
SAMPLE_PLAIN = """\
003@ $0123456789
021A $aDie Geschichte$hvon Foo
028A $aFoo$dBar
101@ $a1
201B/01 $001-01-20
203@/01 $0111111111
201B/02 $002-02-20
203@/02 $0222222222
101@ $a2
144Z $aSchlagwort
203@/01 $0333333333

"""

SAMPLE_PLAIN_TWO = (
    SAMPLE_PLAIN
    + """\
003@ $0987654321
021A $aZweiter Titel

"""
)


def make_record(*fields: tuple[str, str, tuple[tuple[str, str], ...]]) -> Record:
    """Build a record from ``(tag, occurrence, subfields)`` triples."""
    return Record.from_fields(Field(tag, occ, subfields) for tag, occ, subfields in fields)


@pytest.fixture
def sample_record() -> Record:
    """The record of `SAMPLE_PLAIN` built directly from fields."""
    return make_record(
        ("003@", "", (("0", "123456789"),)),
        ("021A", "", (("a", "Die Geschichte"), ("h", "von Foo"))),
        ("028A", "", (("a", "Foo"), ("d", "Bar"))),
        ("101@", "", (("a", "1"),)),
        ("201B", "01", (("0", "01-01-20"),)),
        ("203@", "01", (("0", "111111111"),)),
        ("201B", "02", (("0", "02-02-20"),)),
        ("203@", "02", (("0", "222222222"),)),
        ("101@", "", (("a", "2"),)),
        ("144Z", "", (("a", "Schlagwort"),)),
        ("203@", "01", (("0", "333333333"),)),
    )


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Write `SAMPLE_PLAIN_TWO` to ``records.plain`` and return its path."""
    path = tmp_path / "records.plain"
    path.write_text(SAMPLE_PLAIN_TWO, encoding="utf-8")
    return path
