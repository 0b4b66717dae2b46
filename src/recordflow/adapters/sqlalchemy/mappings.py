"""SQLAlchemy table metadata for stored records."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Column, DateTime, Dialect, MetaData, String, Table, TypeDecorator, Uuid

from recordflow.adapters.schema import decode_attributes, encode_attributes
from recordflow.domain.model import AttributeMap

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class AttributeMapType(TypeDecorator[AttributeMap]):
    """Stores an attribute map as a JSON object in the record wire format."""

    impl = JSON
    cache_ok = True

    def process_bind_param(
        self, value: Mapping[str, Any] | None, dialect: Dialect
    ) -> dict[str, object] | None:
        _ = dialect
        if value is None:
            return None
        return encode_attributes(value)

    def process_result_value(self, value: Any | None, dialect: Dialect) -> AttributeMap:
        _ = dialect
        if not value:
            return AttributeMap()
        return decode_attributes(value)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "pk": "pk_%(table_name)s",
    }
)

record_table = Table(
    "record",
    metadata,
    Column("entity_type", String, primary_key=True),
    Column("id", UUIDColumnType, primary_key=True),
    Column("attributes", AttributeMapType, nullable=False),
    Column("created_by", UUIDColumnType, nullable=True),
    Column("modified_by", UUIDColumnType, nullable=True),
    Column("created_at", UTCDateTime, nullable=False),
    Column("modified_at", UTCDateTime, nullable=False),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the record metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
