"""Record store backed by a SQLAlchemy session factory."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from recordflow.adapters.sqlalchemy.mappings import record_table
from recordflow.domain.model import Record
from recordflow.domain.ports import (
    CreateRequest,
    DeleteRequest,
    RecordNotFoundError,
    StoreError,
    StoreResponse,
    UpdateRequest,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy import Row
    from sqlalchemy.orm import Session, sessionmaker

    from recordflow.domain.ports import StoreRequest

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyRecordStore:
    """Reads and writes records in the ``record`` table.

    Every public call runs in its own transaction; ``execute_batch`` runs all
    of its requests in a single one. Writes are stamped with
    ``acting_user_id``.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        acting_user_id: uuid.UUID | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.session_factory = session_factory
        self.acting_user_id = acting_user_id
        self._clock = clock

    def read(
        self,
        entity_type: str,
        record_id: uuid.UUID,
        columns: Sequence[str] | None = None,
    ) -> Record:
        with self.session_factory() as session:
            row = self._fetch(session, entity_type, record_id)
        attributes = row.attributes if columns is None else row.attributes.select(columns)
        return Record(entity_type=entity_type, id=record_id, attributes=attributes)

    def create(self, record: Record) -> uuid.UUID:
        with self.session_factory.begin() as session:
            return self._create(session, record)

    def update(self, record: Record) -> None:
        with self.session_factory.begin() as session:
            self._update(session, record)

    def delete(self, entity_type: str, record_id: uuid.UUID) -> None:
        with self.session_factory.begin() as session:
            self._delete(session, entity_type, record_id)

    def execute_batch(self, requests: Sequence[StoreRequest]) -> list[StoreResponse]:
        responses: list[StoreResponse] = []
        with self.session_factory.begin() as session:
            for request in requests:
                match request:
                    case CreateRequest(record=record):
                        responses.append(StoreResponse(request, self._create(session, record)))
                    case UpdateRequest(record=record):
                        self._update(session, record)
                        responses.append(StoreResponse(request, record.id))
                    case DeleteRequest(ref=ref):
                        self._delete(session, ref.entity_type, ref.id)
                        responses.append(StoreResponse(request, ref.id))
        log.debug("Executed batch of %d request(s)", len(responses))
        return responses

    # internals -------------------------------------------------------------

    @staticmethod
    def _fetch(session: Session, entity_type: str, record_id: uuid.UUID) -> Row[tuple]:
        stmt = (
            select(record_table)
            .where(record_table.c.entity_type == entity_type)
            .where(record_table.c.id == record_id)
        )
        row = session.execute(stmt).one_or_none()
        if row is None:
            raise RecordNotFoundError(f"{entity_type}({record_id}) does not exist")
        return row

    def _create(self, session: Session, record: Record) -> uuid.UUID:
        record_id = record.id or uuid.uuid4()
        now = self._clock()
        stmt = insert(record_table).values(
            entity_type=record.entity_type,
            id=record_id,
            attributes=record.attributes.copy(),
            created_by=self.acting_user_id,
            modified_by=self.acting_user_id,
            created_at=now,
            modified_at=now,
        )
        try:
            session.execute(stmt)
        except IntegrityError as exc:
            raise StoreError(f"{record.entity_type}({record_id}) already exists") from exc
        return record_id

    def _update(self, session: Session, record: Record) -> None:
        if record.id is None:
            raise StoreError(f"Cannot update a {record.entity_type} record without an id")
        row = self._fetch(session, record.entity_type, record.id)
        merged = row.attributes.copy()
        record.attributes.merge_onto(merged)
        stmt = (
            update(record_table)
            .where(record_table.c.entity_type == record.entity_type)
            .where(record_table.c.id == record.id)
            .values(
                attributes=merged,
                modified_by=self.acting_user_id,
                modified_at=self._clock(),
            )
        )
        session.execute(stmt)

    @staticmethod
    def _delete(session: Session, entity_type: str, record_id: uuid.UUID) -> None:
        stmt = (
            delete(record_table)
            .where(record_table.c.entity_type == entity_type)
            .where(record_table.c.id == record_id)
        )
        result = session.execute(stmt)
        if result.rowcount == 0:
            raise RecordNotFoundError(f"{entity_type}({record_id}) does not exist")
