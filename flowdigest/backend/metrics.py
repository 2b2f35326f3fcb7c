"""
backend/metrics.py

Run-scoped counters for one aggregation run.
No external dependencies and no locking: a run is scanned by a single thread.

Usage:
    acc = RunAccumulator()
    acc.record_file("./syslog/fw1.log")
    acc.record_line(accepted=True)
    acc.record_line(accepted=False, reason="malformed")
    stats = acc.snapshot()
"""

from __future__ import annotations

from collections import Counter

from .models import RunStats


class RunAccumulator:
    """Mutable counterpart of RunStats, updated once per line and per file."""

    def __init__(self) -> None:
        self.total_lines: int = 0
        """Every line read, parsed or not."""

        self.accepted_lines: int = 0
        """Lines that passed validation and were merged."""

        self.files_processed: list[str] = []
        """File paths in walker order."""

        self.rejections: Counter[str] = Counter()
        """Rejected lines per reason tag."""

    def record_line(self, accepted: bool, reason: str | None = None) -> None:
        self.total_lines += 1
        if accepted:
            self.accepted_lines += 1
        elif reason is not None:
            self.rejections[reason] += 1

    def record_file(self, path: str) -> None:
        self.files_processed.append(path)

    @property
    def rejected_lines(self) -> int:
        return self.total_lines - self.accepted_lines

    def snapshot(self) -> RunStats:
        """Freeze the current counters into a RunStats."""
        return RunStats(
            total_lines=self.total_lines,
            accepted_lines=self.accepted_lines,
            files_processed=tuple(self.files_processed),
            rejections=dict(self.rejections),
        )

    def as_dict(self) -> dict:
        """Return all counters as a plain dict (safe for JSON serialisation)."""
        return {
            "total_lines": self.total_lines,
            "accepted_lines": self.accepted_lines,
            "rejected_lines": self.rejected_lines,
            "files_processed": len(self.files_processed),
            "rejections": dict(self.rejections),
        }
