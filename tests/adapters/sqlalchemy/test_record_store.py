from __future__ import annotations

import uuid
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select

from recordflow.adapters.sqlalchemy import (
    SqlAlchemyRecordStore,
    StartupError,
    configured_engine,
    record_table,
    shutdown,
    sqlalchemy_store_factory,
    startup,
)
from recordflow.domain.model import EntityRef, Money, Record
from recordflow.domain.ports import (
    CreateRequest,
    DeleteRequest,
    RecordNotFoundError,
    RecordStore,
    StoreError,
    UpdateRequest,
)

from tests.support.records import CONTACT_ID, USER_ID, make_contact

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session, sessionmaker

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def store(session_factory: sessionmaker[Session]) -> SqlAlchemyRecordStore:
    return SqlAlchemyRecordStore(session_factory, acting_user_id=USER_ID, clock=lambda: FIXED_NOW)


def test_store_satisfies_protocol(store: SqlAlchemyRecordStore) -> None:
    assert isinstance(store, RecordStore)


def test_create_then_read_round_trips_typed_values(store: SqlAlchemyRecordStore) -> None:
    record = make_contact(birthdate=date(1815, 12, 10), active=True, nickname=None)

    record_id = store.create(record)

    assert record_id == CONTACT_ID
    assert store.read("contact", CONTACT_ID) == record


def test_create_assigns_id_when_missing(store: SqlAlchemyRecordStore) -> None:
    record_id = store.create(make_contact(record_id=None))

    assert isinstance(record_id, uuid.UUID)
    assert store.read("contact", record_id)["lastname"] == "Lovelace"


def test_create_duplicate_fails(store: SqlAlchemyRecordStore) -> None:
    store.create(make_contact())

    with pytest.raises(StoreError, match="already exists"):
        store.create(make_contact())


def test_read_selected_columns(store: SqlAlchemyRecordStore) -> None:
    store.create(make_contact())

    record = store.read("contact", CONTACT_ID, columns=["lastname", "missing"])

    assert dict(record.attributes) == {"lastname": "Lovelace"}


def test_read_missing_record(store: SqlAlchemyRecordStore) -> None:
    with pytest.raises(RecordNotFoundError):
        store.read("contact", CONTACT_ID)


def test_update_merges_fields_and_stamps_user(
    store: SqlAlchemyRecordStore, session_factory: sessionmaker[Session]
) -> None:
    store.create(make_contact())

    store.update(
        Record(
            entity_type="contact",
            id=CONTACT_ID,
            attributes={"creditlimit": Money(Decimal("250.00")), "lastname": None},
        )
    )

    stored = store.read("contact", CONTACT_ID)
    assert stored["creditlimit"] == Money(Decimal("250.00"))
    assert stored["lastname"] is None
    assert stored["firstname"] == "Ada"
    with session_factory() as session:
        row = session.execute(select(record_table)).one()
    assert row.modified_by == USER_ID
    assert row.modified_at == FIXED_NOW


def test_update_requires_existing_record_with_id(store: SqlAlchemyRecordStore) -> None:
    with pytest.raises(StoreError, match="without an id"):
        store.update(Record(entity_type="contact"))
    with pytest.raises(RecordNotFoundError):
        store.update(make_contact())


def test_delete(store: SqlAlchemyRecordStore) -> None:
    store.create(make_contact())

    store.delete("contact", CONTACT_ID)

    with pytest.raises(RecordNotFoundError):
        store.read("contact", CONTACT_ID)
    with pytest.raises(RecordNotFoundError):
        store.delete("contact", CONTACT_ID)


def test_execute_batch_runs_in_one_transaction(store: SqlAlchemyRecordStore) -> None:
    store.create(make_contact())
    account_id = uuid.UUID(int=42)
    account = Record(entity_type="account", id=account_id, attributes={"name": "Contoso"})
    update = Record(entity_type="contact", id=CONTACT_ID, attributes={"firstname": "Grace"})

    responses = store.execute_batch([CreateRequest(account), UpdateRequest(update)])

    assert [response.record_id for response in responses] == [account_id, CONTACT_ID]
    assert store.read("contact", CONTACT_ID)["firstname"] == "Grace"

    with pytest.raises(RecordNotFoundError):
        store.execute_batch(
            [
                UpdateRequest(Record(entity_type="contact", id=CONTACT_ID, attributes={"a": 1})),
                DeleteRequest(EntityRef("account", uuid.UUID(int=43))),
            ]
        )
    assert "a" not in store.read("contact", CONTACT_ID)


def test_startup_lifecycle(sqlite_engine: Engine) -> None:
    shutdown()
    with pytest.raises(StartupError):
        sqlalchemy_store_factory(USER_ID)

    startup(engine=sqlite_engine, force=True)
    try:
        assert configured_engine() is sqlite_engine
        with pytest.raises(StartupError, match="already initialised"):
            startup(engine=sqlite_engine)

        store = sqlalchemy_store_factory(USER_ID)
        store.create(make_contact())
        assert store.acting_user_id == USER_ID
        assert store.read("contact", CONTACT_ID) == make_contact()
    finally:
        shutdown()
    assert configured_engine() is None
