"""SQLAlchemy adapter package for recordflow."""

from __future__ import annotations

from .engine import (
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    sqlalchemy_store_factory,
    startup,
)
from .mappings import create_all_tables, metadata, record_table
from .store import SqlAlchemyRecordStore

__all__ = [
    "SqlAlchemyRecordStore",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "record_table",
    "shutdown",
    "sqlalchemy_store_factory",
    "startup",
]
