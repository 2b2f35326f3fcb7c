"""
aggregation/__init__.py

Public API for the aggregation sub-package.
"""

from .aggregator import Aggregator, RunResult, now_ms
from .models import FlowRecord, make_flow_key
from .summary import summarize
from .table import AggregationTable

__all__ = [
    "Aggregator",
    "RunResult",
    "now_ms",
    "AggregationTable",
    "FlowRecord",
    "make_flow_key",
    "summarize",
]
