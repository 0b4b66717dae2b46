"""Execution pipeline: tracing, timing and failure translation around units of work."""

from __future__ import annotations

from .context import ExecutionContext, describe_trigger, iter_trigger_chain
from .optimized_update import OptimizedUpdate
from .runner import ExecutionPipeline, UnitOfWork
from .tracing import TraceContext, TracingSink

__all__ = [
    "ExecutionContext",
    "ExecutionPipeline",
    "OptimizedUpdate",
    "TraceContext",
    "TracingSink",
    "UnitOfWork",
    "describe_trigger",
    "iter_trigger_chain",
]
