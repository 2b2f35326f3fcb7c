"""
backend/models.py

Shared dataclasses for every stage of a run.
Defining all of them here locks the inter-stage contracts so the parser,
aggregation table, summarizer and writer agree on one shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Stage 1 — Line parser output
# ---------------------------------------------------------------------------

@dataclass(slots=True, frozen=True)
class ParsedLine:
    """Validated fields of a single log line."""

    firewall_ip: str
    source_ip: str
    destination_ip: str
    destination_port: str
    """Kept as text: it is only ever used as part of the composite key."""

    protocol: str

    packets_in: int
    bytes_in: int
    packets_out: int
    bytes_out: int


# ---------------------------------------------------------------------------
# Stage 2 — Run counters (read-only snapshot of RunAccumulator)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RunStats:
    """Run-wide counters, frozen once scanning finishes."""

    total_lines: int = 0
    """Every line read, parsed or not."""

    accepted_lines: int = 0
    """Lines that passed validation and were merged."""

    files_processed: tuple[str, ...] = ()
    """File paths in the order the walker produced them."""

    rejections: dict[str, int] = field(default_factory=dict)
    """Rejected line count per reason tag (diagnostic)."""

    @property
    def rejected_lines(self) -> int:
        return self.total_lines - self.accepted_lines


# ---------------------------------------------------------------------------
# Stage 3 — Run metadata (Metadata Summarizer output)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RunMetadata:
    """Derived statistics for one run."""

    start_time: int
    """Milliseconds since the epoch."""

    end_time: int
    elapsed_seconds: float
    total_connections: int
    accepted_lines: int
    acceptance_percentage: float
    flows: int
    files_processed: tuple[str, ...]
    connections_per_second: float

    @property
    def session_close(self) -> str:
        return (
            f"{self.accepted_lines} "
            f"({self.acceptance_percentage:.2f}% of total connections)"
        )

    @property
    def connections_per_second_text(self) -> str:
        return f"{self.connections_per_second:.2f} connections/second"


__all__ = [
    "ParsedLine",
    "RunStats",
    "RunMetadata",
]
