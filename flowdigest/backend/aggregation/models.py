"""
aggregation/models.py

Data models for the aggregation layer.

make_flow_key — composite 5-field key used as dict key in AggregationTable
FlowRecord    — per-flow accumulated counters (no raw lines stored)
"""

from __future__ import annotations

from dataclasses import dataclass

KEY_DELIMITER = "_"


# ---------------------------------------------------------------------------
# Composite key
# ---------------------------------------------------------------------------

def make_flow_key(
    firewall_ip: str,
    source_ip: str,
    destination_ip: str,
    destination_port: str,
    protocol: str,
) -> str:
    """
    Build the composite flow key from the five identifying fields.

    Fields are joined verbatim — no case folding or whitespace stripping —
    so the same five values always produce the same key.
    """
    return KEY_DELIMITER.join(
        (firewall_ip, source_ip, destination_ip, destination_port, protocol)
    )


# ---------------------------------------------------------------------------
# FlowRecord — per-flow counters
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class FlowRecord:
    """
    Accumulated traffic totals for one flow (identified by its composite key).

    source_ip / destination_ip come from the first contributing line and are
    never overwritten by later merges.
    """

    key: str
    source_ip: str
    destination_ip: str

    packets_in: int = 0
    bytes_in: int = 0
    packets_out: int = 0
    bytes_out: int = 0

    count: int = 1
    """Number of lines merged into this record."""

    def merge(
        self,
        packets_in: int,
        bytes_in: int,
        packets_out: int,
        bytes_out: int,
    ) -> None:
        self.packets_in += packets_in
        self.bytes_in += bytes_in
        self.packets_out += packets_out
        self.bytes_out += bytes_out
        self.count += 1

    def __repr__(self) -> str:
        return (
            f"FlowRecord({self.key!r} "
            f"in={self.packets_in}p/{self.bytes_in}B "
            f"out={self.packets_out}p/{self.bytes_out}B "
            f"count={self.count})"
        )
