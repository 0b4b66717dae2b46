"""Pydantic models for the HTTP store's request and response bodies."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from pydantic import Field

from recordflow.adapters.schema import RecordPayload, WireModel


class CreatedPayload(WireModel):
    id: UUID


class BatchOperation(WireModel):
    op: Literal["create", "update", "delete"]
    entity_type: str
    id: UUID | None = None
    record: RecordPayload | None = None


class BatchRequestPayload(WireModel):
    requests: list[BatchOperation] = Field(default_factory=list)


class BatchResultPayload(WireModel):
    id: UUID | None = None


class BatchResponsePayload(WireModel):
    responses: list[BatchResultPayload] = Field(default_factory=list)


class ErrorPayload(WireModel):
    message: str = ""
