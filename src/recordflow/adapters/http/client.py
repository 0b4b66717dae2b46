"""HTTP client for a remote record store."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from recordflow.adapters.schema import RecordPayload, dump_record
from recordflow.domain.ports import (
    CreateRequest,
    DeleteRequest,
    RecordNotFoundError,
    StoreError,
    StoreResponse,
    UpdateRequest,
)

from .schema import (
    BatchOperation,
    BatchRequestPayload,
    BatchResponsePayload,
    CreatedPayload,
    ErrorPayload,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from recordflow.config import HttpStoreConfig
    from recordflow.domain.model import Record
    from recordflow.domain.ports import StoreRequest

log = getLogger(__name__)

ACTING_USER_HEADER: Final[str] = "X-Acting-User"
BATCH_PATH: Final[str] = "$batch"


def _default_client_factory(config: HttpStoreConfig) -> httpx.Client:
    headers: dict[str, str] = {"Accept": "application/json"}
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    return httpx.Client(
        base_url=config.base_url,
        headers=headers,
        timeout=config.timeout_seconds,
    )


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorPayload.model_validate(response.json()).message or response.reason_phrase
    except (ValueError, ValidationError):
        return response.reason_phrase


class HttpRecordStore:
    """Record store speaking JSON over HTTP.

    Each request is a single attempt on a fresh client. Retrying would hide
    the fact that the remote state may have changed in between.
    """

    def __init__(
        self,
        *,
        config: HttpStoreConfig,
        acting_user_id: UUID | None = None,
        client_factory: Callable[[HttpStoreConfig], httpx.Client] | None = None,
    ) -> None:
        self._config = config
        self.acting_user_id = acting_user_id
        self._client_factory = client_factory or _default_client_factory

    def read(
        self,
        entity_type: str,
        record_id: UUID,
        columns: Sequence[str] | None = None,
    ) -> Record:
        params = {"columns": ",".join(columns)} if columns is not None else None
        response = self._request("GET", f"{entity_type}/{record_id}", params=params)
        try:
            return RecordPayload.model_validate(response.json()).to_domain()
        except (ValueError, ValidationError) as exc:
            raise StoreError(f"Malformed record payload for {entity_type}({record_id})") from exc

    def create(self, record: Record) -> UUID:
        response = self._request("POST", record.entity_type, json=dump_record(record))
        try:
            return CreatedPayload.model_validate(response.json()).id
        except (ValueError, ValidationError) as exc:
            raise StoreError(f"Malformed create response for {record.entity_type}") from exc

    def update(self, record: Record) -> None:
        if record.id is None:
            raise StoreError(f"Cannot update a {record.entity_type} record without an id")
        self._request("PATCH", f"{record.entity_type}/{record.id}", json=dump_record(record))

    def delete(self, entity_type: str, record_id: UUID) -> None:
        self._request("DELETE", f"{entity_type}/{record_id}")

    def execute_batch(self, requests: Sequence[StoreRequest]) -> list[StoreResponse]:
        payload = BatchRequestPayload(requests=[_batch_operation(request) for request in requests])
        response = self._request("POST", BATCH_PATH, json=payload.model_dump(mode="json"))
        try:
            results = BatchResponsePayload.model_validate(response.json()).responses
        except (ValueError, ValidationError) as exc:
            raise StoreError("Malformed batch response") from exc
        if len(results) != len(requests):
            raise StoreError(
                f"Batch returned {len(results)} response(s) for {len(requests)} request(s)"
            )
        return [
            StoreResponse(request, result.id)
            for request, result in zip(requests, results, strict=True)
        ]

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: object | None = None,
    ) -> httpx.Response:
        headers = {ACTING_USER_HEADER: str(self.acting_user_id)} if self.acting_user_id else None
        log.debug("%s %s", method, path)
        try:
            with self._client_factory(self._config) as client:
                response = client.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise StoreError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise RecordNotFoundError(f"{path} does not exist")
        if response.is_error:
            raise StoreError(
                f"{method} {path} returned {response.status_code}: {_error_message(response)}"
            )
        return response


def _batch_operation(request: StoreRequest) -> BatchOperation:
    match request:
        case CreateRequest(record=record):
            return BatchOperation(
                op="create",
                entity_type=record.entity_type,
                id=record.id,
                record=RecordPayload.from_domain(record),
            )
        case UpdateRequest(record=record):
            return BatchOperation(
                op="update",
                entity_type=record.entity_type,
                id=record.id,
                record=RecordPayload.from_domain(record),
            )
        case DeleteRequest(ref=ref):
            return BatchOperation(op="delete", entity_type=ref.entity_type, id=ref.id)


def http_store_factory(
    config: HttpStoreConfig,
    *,
    client_factory: Callable[[HttpStoreConfig], httpx.Client] | None = None,
) -> Callable[[UUID | None], HttpRecordStore]:
    """Return a store factory producing clients bound to ``config``."""

    def factory(user_id: UUID | None) -> HttpRecordStore:
        return HttpRecordStore(
            config=config, acting_user_id=user_id, client_factory=client_factory
        )

    return factory
