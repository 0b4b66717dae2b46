"""Ports for the remote entity store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from recordflow.domain.model import EntityRef, Record


class StoreError(RuntimeError):
    """Raised by store adapters when a request cannot be served."""


class RecordNotFoundError(StoreError):
    """Raised when a read, update or delete targets a record that does not exist."""


@runtime_checkable
class StoreReader(Protocol):
    """Read access to the entity store."""

    def read(
        self,
        entity_type: str,
        record_id: UUID,
        columns: Sequence[str] | None = None,
    ) -> Record:
        """Return the record; ``columns=None`` requests every field."""
        ...


@dataclass(slots=True, frozen=True)
class CreateRequest:
    record: Record


@dataclass(slots=True, frozen=True)
class UpdateRequest:
    record: Record


@dataclass(slots=True, frozen=True)
class DeleteRequest:
    ref: EntityRef


type StoreRequest = CreateRequest | UpdateRequest | DeleteRequest


@dataclass(slots=True, frozen=True)
class StoreResponse:
    """Outcome of one batched request; ``record_id`` is set for creates."""

    request: StoreRequest
    record_id: UUID | None = None


@runtime_checkable
class StoreWriter(Protocol):
    """Write access to the entity store. Writes are issued by callers, not the core."""

    def create(self, record: Record) -> UUID: ...

    def update(self, record: Record) -> None: ...

    def delete(self, entity_type: str, record_id: UUID) -> None: ...

    def execute_batch(self, requests: Sequence[StoreRequest]) -> list[StoreResponse]:
        """Execute ``requests`` in one transaction."""
        ...


@runtime_checkable
class RecordStore(StoreReader, StoreWriter, Protocol):
    """Full store client."""


# Builds a store client acting as the given user (None = system user).
type StoreFactory = Callable[[UUID | None], RecordStore]
