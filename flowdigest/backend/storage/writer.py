"""
storage/writer.py

Persists one RunDocument per run at a timestamped path:

    <output_dir>/<prefix>_<YYYYmmdd_HHMMSS>.json

The output directory (and its parents) is created if missing. Any failure
to create the directory or write the file is fatal for the run and is
raised as OutputWriteError.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Callable

from .serializers import RunDocument

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class OutputWriteError(RuntimeError):
    """The output directory or file could not be created or written."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"unable to write output {path!r}: {cause}")
        self.path = path
        self.cause = cause


def output_path(output_dir: str, prefix: str, when: datetime) -> str:
    """Build the timestamped output filename."""
    return os.path.join(output_dir, f"{prefix}_{when.strftime(TIMESTAMP_FORMAT)}.json")


def write_document(
    document: RunDocument,
    output_dir: str,
    prefix: str,
    indent: int = 2,
    now: Callable[[], datetime] = datetime.now,
) -> str:
    """
    Serialise `document` and write it under `output_dir`.

    Returns:
        The path written.

    Raises:
        OutputWriteError: directory or file could not be created/written.
    """
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as exc:
        logger.error("Cannot create output directory %r: %s", output_dir, exc)
        raise OutputWriteError(output_dir, exc) from exc

    path = output_path(output_dir, prefix, now())
    payload = document.to_json(indent=indent)
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(payload)
    except OSError as exc:
        logger.error("Cannot write output file %r: %s", path, exc)
        raise OutputWriteError(path, exc) from exc

    logger.info("Output written — path=%r bytes=%d", path, len(payload))
    return path
