"""
ingest/__init__.py

Public API for the ingest sub-package.
"""

from .parser import (
    InvalidNumber,
    LineRejected,
    MalformedLine,
    MissingCounter,
    parse_line,
)
from .walker import LogFile, iter_log_files, list_log_files

__all__ = [
    "parse_line",
    "LineRejected",
    "MalformedLine",
    "MissingCounter",
    "InvalidNumber",
    "LogFile",
    "iter_log_files",
    "list_log_files",
]
