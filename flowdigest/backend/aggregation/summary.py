"""
aggregation/summary.py

Derives RunMetadata from the run counters once scanning completes.

Degenerate arithmetic:
  - elapsed time of zero → throughput 0.0 connections/second
  - zero total lines     → acceptance percentage 0.0
Neither case raises.
"""

from __future__ import annotations

from ..models import RunMetadata, RunStats


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


def summarize(
    start_time: int,
    end_time: int,
    stats: RunStats,
    flow_count: int,
) -> RunMetadata:
    """
    Compute run metadata.

    Args:
        start_time: Run start, milliseconds since the epoch.
        end_time:   Run end, milliseconds since the epoch.
        stats:      Frozen counters from the RunAccumulator.
        flow_count: Number of records in the aggregation table.
    """
    elapsed_seconds = (end_time - start_time) / 1000
    return RunMetadata(
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        total_connections=stats.total_lines,
        accepted_lines=stats.accepted_lines,
        acceptance_percentage=_ratio(stats.accepted_lines, stats.total_lines) * 100,
        flows=flow_count,
        files_processed=stats.files_processed,
        connections_per_second=_ratio(stats.total_lines, elapsed_seconds),
    )
