"""HTTP record store adapter."""

from __future__ import annotations

from .client import ACTING_USER_HEADER, HttpRecordStore, http_store_factory

__all__ = ["ACTING_USER_HEADER", "HttpRecordStore", "http_store_factory"]
