# topmark:header:start
#
#   project      : PicaData
#   file         : driver.py
#   file_relpath : src/picadata/pipeline/driver.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""The streaming pipeline driver (engine layer).

`PipelineDriver` pulls one record at a time from a parser and passes it
through the configured steps, in this order:

    1. project  - replace the record by its path projection (``--path``)
    2. write    - serialize the projected record (``--to``)
    3. validate - check against the schema and report errors (``--schema``)
    4. count    - update the summary counters (``--count``)

All later steps see the projected record. Each step runs to completion before
the next record is read; records are never reordered.

Output ordering:
    The writer flushes each record before the validation errors of that
    record are emitted. If both go to the same stream, every record's error
    lines follow its serialization. After the last record the writer is
    finalized once.

Design goals:
  - No CLI dependencies: Do not import Click or anything under ``picadata.cli``
    from here. Presentation is a responsibility of the CLI layer.
  - Errors propagate: parse errors abort the run; validation errors never do.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import IO, TYPE_CHECKING

from picadata.config.logging import get_logger
from picadata.formats import make_writer
from picadata.pipeline.counters import Counters

if TYPE_CHECKING:
    from collections.abc import Iterable

    from picadata.config.logging import PicadataLogger
    from picadata.config.model import PipelineConfig
    from picadata.formats.base import RecordWriter
    from picadata.pipeline.reporter import ErrorReporter
    from picadata.record import Record

logger: PicadataLogger = get_logger(__name__)


class DriverState(str, Enum):
    """Lifecycle of a `PipelineDriver`."""

    IDLE = "idle"
    STREAMING = "streaming"
    DRAINED = "drained"


class PipelineDriver:
    """Runs one configured pipeline over one record stream.

    Args:
        config (PipelineConfig): The immutable run configuration.
        reporter (ErrorReporter): Receives validation errors.
        output (IO[str] | None): Destination of serialized records when
            ``config.output_type`` is set (defaults to ``sys.stdout``).

    Attributes:
        state (DriverState): Current lifecycle state.
        writer (RecordWriter | None): The writer selected for ``config.output_type``.
        counters (Counters | None): Running totals, present only if counting is enabled.
        processed (int): Number of records processed so far.
    """

    def __init__(
        self,
        config: PipelineConfig,
        *,
        reporter: ErrorReporter,
        output: IO[str] | None = None,
    ) -> None:
        self.config = config
        self.reporter = reporter
        self.state = DriverState.IDLE
        self.processed = 0
        self.writer: RecordWriter | None = None
        if config.output_type is not None:
            self.writer = make_writer(config.output_type, output or sys.stdout)
        self.counters: Counters | None = (
            Counters(track_invalid=config.schema is not None) if config.count else None
        )

    def run(self, records: Iterable[Record]) -> Counters | None:
        """Process ``records`` to the end of the stream.

        Args:
            records (Iterable[Record]): The parser (or any record iterable).

        Returns:
            Counters | None: The final counters, or None if counting is disabled.

        Raises:
            RuntimeError: If the driver has already been run.
            PicaParseError: If the parser fails; the run is aborted.
        """
        if self.state is not DriverState.IDLE:
            raise RuntimeError(f"pipeline driver cannot run in state {self.state.value}")
        self.state = DriverState.STREAMING

        for record in records:
            self.process(record)

        self.state = DriverState.DRAINED
        if self.writer is not None:
            self.writer.finalize()
        logger.info("Processed %d records", self.processed)
        return self.counters

    def process(self, record: Record) -> None:
        """Run one record through projection, writing, validation and counting."""
        config = self.config
        if config.path is not None:
            record = config.path.project(record)

        if self.writer is not None:
            self.writer.write(record)

        if config.schema is not None:
            errors = config.schema.check(record, ignore_unknown=not config.report_unknown)
            if errors:
                self.reporter.report(record, errors)
                if self.counters is not None:
                    self.counters.add_invalid()

        if self.counters is not None:
            self.counters.add_record(record)
        self.processed += 1
        logger.trace("record %d done (%s)", self.processed, record.identifier)
