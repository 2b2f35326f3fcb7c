"""
aggregation/table.py

AggregationTable — maps composite flow keys to accumulated FlowRecords.

Design constraints:
  - No raw lines stored — only derived counters.
  - Merge-or-insert is the only mutation. No eviction, no capacity bound and
    no removal: the table grows for the lifetime of one run and is read in
    full at the end.
  - First writer wins for source_ip / destination_ip.
"""

from __future__ import annotations

import logging
from typing import Iterator

from ..models import ParsedLine
from .models import FlowRecord, make_flow_key

logger = logging.getLogger(__name__)


class AggregationTable:
    """
    In-memory flow table for a single run.

    Thread safety: NOT thread-safe. Owned by the aggregator of one run and
    mutated only by the thread performing the scan.
    """

    def __init__(self) -> None:
        self.flows: dict[str, FlowRecord] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def merge_or_insert(
        self,
        key: str,
        source_ip: str,
        destination_ip: str,
        packets_in: int,
        bytes_in: int,
        packets_out: int,
        bytes_out: int,
    ) -> FlowRecord:
        """
        Add the counters to the record for `key`, creating it if needed.

        Returns the updated FlowRecord.
        """
        record = self.flows.get(key)
        if record is None:
            record = FlowRecord(
                key=key,
                source_ip=source_ip,
                destination_ip=destination_ip,
                packets_in=packets_in,
                bytes_in=bytes_in,
                packets_out=packets_out,
                bytes_out=bytes_out,
            )
            self.flows[key] = record
            logger.debug("New flow: %r (total: %d)", key, len(self.flows))
        else:
            record.merge(packets_in, bytes_in, packets_out, bytes_out)
        return record

    def add(self, parsed: ParsedLine) -> FlowRecord:
        """Key a validated line and merge it into the table."""
        key = make_flow_key(
            parsed.firewall_ip,
            parsed.source_ip,
            parsed.destination_ip,
            parsed.destination_port,
            parsed.protocol,
        )
        return self.merge_or_insert(
            key,
            parsed.source_ip,
            parsed.destination_ip,
            parsed.packets_in,
            parsed.bytes_in,
            parsed.packets_out,
            parsed.bytes_out,
        )

    def get(self, key: str) -> FlowRecord | None:
        return self.flows.get(key)

    def records(self) -> dict[str, FlowRecord]:
        """Return a shallow copy of the key → record mapping."""
        return dict(self.flows)

    def __len__(self) -> int:
        return len(self.flows)

    def __contains__(self, key: object) -> bool:
        return key in self.flows

    def __iter__(self) -> Iterator[FlowRecord]:
        return iter(self.flows.values())
