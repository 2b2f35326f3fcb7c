"""
ingest/walker.py

Enumerates the input directory and hands out one open log file at a time.

Design:
  - Only regular files directly inside the directory are read (no recursion),
    in the order the OS lists them. Files are never sorted or deduplicated.
  - Each file is opened, drained and closed before the next is opened. The
    handle is released even if the consumer stops early or a read fails.
  - An unreadable directory yields nothing; an unreadable file is skipped.
    Both are logged at WARNING and never raised to the caller.
  - Undecodable bytes are replaced rather than dropped so every physical
    line is still counted.
  - Lines end at LF only. A lone CR stays inside the line; the CR of a
    CRLF ending is stripped by the parser.
"""

from __future__ import annotations

import logging
import os
from typing import IO, Iterator, NamedTuple

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


class LogFile(NamedTuple):
    """One readable input file: its path and a lazy iterator over its lines."""

    path: str
    lines: Iterator[str]


def list_log_files(directory: str) -> list[str]:
    """
    Return paths of the regular files directly inside `directory`.

    Returns an empty list (and logs a warning) if the directory cannot be
    listed.
    """
    try:
        with os.scandir(directory) as it:
            return [entry.path for entry in it if entry.is_file()]
    except OSError as exc:
        logger.warning("Input directory %r unreadable — no files processed: %s", directory, exc)
        return []


def _read_lines(fh: IO[str], path: str) -> Iterator[str]:
    """Yield lines from an open file, stopping quietly on a read error."""
    try:
        yield from fh
    except OSError as exc:
        logger.warning("Read error in %r — remaining lines skipped: %s", path, exc)


def iter_log_files(directory: str) -> Iterator[LogFile]:
    """
    Yield a LogFile for each readable file in `directory`.

    The underlying handle stays open only while the caller holds the current
    LogFile; advancing the iterator closes it.
    """
    for path in list_log_files(directory):
        try:
            fh = open(path, encoding=ENCODING, errors="replace", newline="\n")
        except OSError as exc:
            logger.warning("Skipping unreadable file %r: %s", path, exc)
            continue
        with fh:
            logger.debug("Opened %r", path)
            yield LogFile(path, _read_lines(fh, path))
