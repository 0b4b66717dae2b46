"""Ports describing what the host hands to an execution pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping
    from datetime import datetime
    from uuid import UUID

    from recordflow.domain.model import Record

    from .store import StoreFactory
    from .tracing import TraceBoundary


class HostExecutionContext(Protocol):
    """Read-only view of the host's context for one triggered operation."""

    @property
    def message_name(self) -> str: ...

    @property
    def stage(self) -> int: ...

    @property
    def mode(self) -> int: ...

    @property
    def depth(self) -> int: ...

    @property
    def request_id(self) -> UUID | None: ...

    @property
    def correlation_id(self) -> UUID: ...

    @property
    def initiating_user_id(self) -> UUID: ...

    @property
    def primary_entity_type(self) -> str | None: ...

    @property
    def primary_entity_id(self) -> UUID | None: ...

    @property
    def operation_created_on(self) -> datetime | None: ...

    @property
    def input_parameters(self) -> Mapping[str, object]: ...

    @property
    def output_parameters(self) -> MutableMapping[str, object]: ...

    @property
    def pre_images(self) -> Mapping[str, Record]: ...

    @property
    def post_images(self) -> Mapping[str, Record]: ...

    @property
    def parent(self) -> HostExecutionContext | None: ...


@dataclass(slots=True, frozen=True)
class HostServices:
    """Everything the host provides for one execution."""

    context: HostExecutionContext
    trace: TraceBoundary
    store_factory: StoreFactory
