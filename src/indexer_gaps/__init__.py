"""
Indexing-gap reconciliation for blockchain indexer fleets.

This module provides tools for:
- Splitting a block interval into contiguous coverage ranges
- Finding blocks that are not yet indexed, per range
- Planning worker tasks over a block interval
- Dispatching those tasks through a pluggable sink
"""

from .config import MonitorConfig, DispatchConfig
from .errors import GapsError, InvalidParameters, SourceUnavailable
from .monitor import IndexerMonitor
from .planner import WorkerTaskSpec, plan_tasks
from .reconciler import (
    BlockRange,
    ReconciliationResult,
    GapAccumulator,
    reconcile,
    areconcile,
)
from .dispatcher import TaskSink, DispatchedTask, dispatch_tasks
from .utils import bucketize

__all__ = [
    "MonitorConfig",
    "DispatchConfig",
    "GapsError",
    "InvalidParameters",
    "SourceUnavailable",
    "IndexerMonitor",
    "WorkerTaskSpec",
    "plan_tasks",
    "BlockRange",
    "ReconciliationResult",
    "GapAccumulator",
    "reconcile",
    "areconcile",
    "TaskSink",
    "DispatchedTask",
    "dispatch_tasks",
    "bucketize",
]

__version__ = "0.1.0"
