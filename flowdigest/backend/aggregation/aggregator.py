"""
aggregation/aggregator.py

Aggregator — the run orchestrator.

Walks the input directory one file at a time, parses every line, merges
accepted lines into the AggregationTable, records every line and file in
the RunAccumulator, and finally asks the summarizer for RunMetadata.

Scheduling:
  - Single-threaded and synchronous: files are consumed strictly one after
    another, lines strictly in file order.
  - No cancellation support; an interrupted run produces no output.

Stats dict (logged when the run finishes):
    total_lines, accepted_lines, rejected_lines, files_processed, rejections
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from ..ingest import LineRejected, LogFile, iter_log_files, parse_line
from ..metrics import RunAccumulator
from ..models import RunMetadata
from .models import FlowRecord
from .summary import summarize
from .table import AggregationTable

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Wall-clock milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass
class RunResult:
    """Everything one run hands to the writer."""

    metadata: RunMetadata
    flows: dict[str, FlowRecord]


class Aggregator:
    """
    Drives one aggregation run over an input directory.

    Args:
        input_dir:    Directory of delimited log files.
        clock:        Callable returning epoch milliseconds (injectable for tests).
        log_rejected: Log every rejected line at DEBUG. Results are unchanged.
    """

    def __init__(
        self,
        input_dir: str,
        clock: Callable[[], int] = now_ms,
        log_rejected: bool = False,
    ) -> None:
        self._input_dir = input_dir
        self._clock = clock
        self._log_rejected = log_rejected
        self._reset()

    def _reset(self) -> None:
        self.table = AggregationTable()
        self.accumulator = RunAccumulator()

    @property
    def stats(self) -> dict:
        return self.accumulator.as_dict()

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def run(self, start_time: int | None = None) -> RunResult:
        """
        Scan the whole input directory and return the aggregate.

        Args:
            start_time: Run start in epoch ms. Taken from the clock if omitted.
        """
        if start_time is None:
            start_time = self._clock()
        self._reset()
        logger.info("Aggregation started — input_dir=%r", self._input_dir)

        for log_file in iter_log_files(self._input_dir):
            self.process_file(log_file)

        end_time = self._clock()
        metadata = summarize(
            start_time=start_time,
            end_time=end_time,
            stats=self.accumulator.snapshot(),
            flow_count=len(self.table),
        )
        logger.info(
            "Aggregation finished — flows=%d elapsed=%.3fs stats=%s",
            metadata.flows,
            metadata.elapsed_seconds,
            self.stats,
        )
        return RunResult(metadata=metadata, flows=self.table.records())

    # ------------------------------------------------------------------
    # Per-file / per-line logic
    # ------------------------------------------------------------------

    def process_file(self, log_file: LogFile) -> None:
        """Consume every line of one open file."""
        self.accumulator.record_file(log_file.path)
        total_before = self.accumulator.total_lines
        accepted_before = self.accumulator.accepted_lines

        for line in log_file.lines:
            self.process_line(line)

        logger.info(
            "Processed %r — lines=%d accepted=%d",
            log_file.path,
            self.accumulator.total_lines - total_before,
            self.accumulator.accepted_lines - accepted_before,
        )

    def process_line(self, line: str) -> bool:
        """
        Parse one line and merge it if valid.

        Returns True if the line was accepted.
        """
        try:
            parsed = parse_line(line)
        except LineRejected as exc:
            self.accumulator.record_line(accepted=False, reason=exc.reason)
            if self._log_rejected:
                logger.debug("Rejected line (%s): %s — %r", exc.reason, exc, line.rstrip("\n"))
            return False

        self.table.add(parsed)
        self.accumulator.record_line(accepted=True)
        return True
