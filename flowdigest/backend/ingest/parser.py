"""
ingest/parser.py

Converts one raw log line into a typed ParsedLine.

Design principles:
  - Pure function of the line's text: no I/O, no logging. The caller decides
    what to do with a rejected line (count it, optionally log it).
  - Rejections are typed exceptions deriving from LineRejected so the run
    accumulator can tally them by reason.
  - All four counters must parse or the whole line is rejected.

Line layout (comma-separated, 0-indexed, at least 13 fields):
   1  firewall IP          9  packets in
   3  source IP           10  bytes in
   4  destination IP      11  packets out
   5  destination port    12  bytes out
   6  protocol id
Other positions (timestamp, NAT addresses, ...) are ignored.
"""

from __future__ import annotations

import re

from ..models import ParsedLine

FIELD_DELIMITER = ","
MIN_FIELDS = 13

_F_FIREWALL_IP = 1
_F_SOURCE_IP = 3
_F_DESTINATION_IP = 4
_F_DESTINATION_PORT = 5
_F_PROTOCOL = 6
_F_COUNTERS = (9, 10, 11, 12)   # packets-in, bytes-in, packets-out, bytes-out

_U64_MAX = 2**64 - 1
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


# ---------------------------------------------------------------------------
# Rejection signals
# ---------------------------------------------------------------------------

class LineRejected(ValueError):
    """Base class for every reason a line is skipped."""

    reason = "rejected"

    def __init__(self, message: str, line: str = "") -> None:
        super().__init__(message)
        self.line = line


class MalformedLine(LineRejected):
    """Fewer fields than MIN_FIELDS."""

    reason = "malformed"


class MissingCounter(LineRejected):
    """One of the four traffic counters is empty."""

    reason = "missing_counter"


class InvalidNumber(LineRejected):
    """A traffic counter is not an unsigned 64-bit integer."""

    reason = "invalid_number"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_counter(text: str) -> int | None:
    """Parse an unsigned 64-bit decimal counter. Returns None if invalid."""
    if not _UNSIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    if value > _U64_MAX:
        return None
    return value


# ---------------------------------------------------------------------------
# parse_line — main function
# ---------------------------------------------------------------------------

def parse_line(line: str) -> ParsedLine:
    """
    Parse and validate one raw log line.

    Args:
        line: Raw text, with or without the trailing newline.

    Returns:
        ParsedLine on success.

    Raises:
        MalformedLine:  too few fields.
        MissingCounter: an empty packets/bytes field.
        InvalidNumber:  a packets/bytes field that is not an unsigned integer.
    """
    parts = line.strip().split(FIELD_DELIMITER)
    if len(parts) < MIN_FIELDS:
        raise MalformedLine(
            f"expected at least {MIN_FIELDS} fields, got {len(parts)}", line
        )

    raw_counters = [parts[i] for i in _F_COUNTERS]
    if any(not c for c in raw_counters):
        raise MissingCounter("empty traffic counter", line)

    counters: list[int] = []
    for raw in raw_counters:
        value = _parse_counter(raw)
        if value is None:
            raise InvalidNumber(f"invalid traffic counter: {raw!r}", line)
        counters.append(value)

    packets_in, bytes_in, packets_out, bytes_out = counters
    return ParsedLine(
        firewall_ip=parts[_F_FIREWALL_IP],
        source_ip=parts[_F_SOURCE_IP],
        destination_ip=parts[_F_DESTINATION_IP],
        destination_port=parts[_F_DESTINATION_PORT],
        protocol=parts[_F_PROTOCOL],
        packets_in=packets_in,
        bytes_in=bytes_in,
        packets_out=packets_out,
        bytes_out=bytes_out,
    )
