from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from recordflow.adapters.local import LocalExecutionContext, MemoryTraceBoundary
from recordflow.adapters.sqlalchemy import create_all_tables, shutdown, startup
from recordflow.domain.ports import HostServices

from tests.support.records import USER_ID, InMemoryRecordStore, StoreFactorySpy, make_contact

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=sqlite_engine, expire_on_commit=False)


@pytest.fixture
def started_store(sqlite_engine: Engine) -> Iterator[Engine]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield sqlite_engine
    finally:
        shutdown()


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    return InMemoryRecordStore(make_contact())


@pytest.fixture
def store_factory(memory_store: InMemoryRecordStore) -> StoreFactorySpy:
    return StoreFactorySpy(memory_store)


@pytest.fixture
def trace() -> MemoryTraceBoundary:
    return MemoryTraceBoundary()


@pytest.fixture
def host_context() -> LocalExecutionContext:
    return LocalExecutionContext.for_target(
        "Update",
        make_contact(firstname="Grace"),
        pre_image=make_contact(),
        initiating_user_id=USER_ID,
    )


@pytest.fixture
def services(
    host_context: LocalExecutionContext,
    trace: MemoryTraceBoundary,
    store_factory: StoreFactorySpy,
) -> HostServices:
    return HostServices(host_context, trace, store_factory)
