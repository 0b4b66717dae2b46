"""Ports to collaborators outside the reconciliation core."""

from __future__ import annotations

from .execution import HostExecutionContext, HostServices
from .store import (
    CreateRequest,
    DeleteRequest,
    RecordNotFoundError,
    RecordStore,
    StoreError,
    StoreFactory,
    StoreReader,
    StoreRequest,
    StoreResponse,
    StoreWriter,
    UpdateRequest,
)
from .tracing import TraceBoundary

__all__ = [
    "CreateRequest",
    "DeleteRequest",
    "HostExecutionContext",
    "HostServices",
    "RecordNotFoundError",
    "RecordStore",
    "StoreError",
    "StoreFactory",
    "StoreReader",
    "StoreRequest",
    "StoreResponse",
    "StoreWriter",
    "TraceBoundary",
    "UpdateRequest",
]
