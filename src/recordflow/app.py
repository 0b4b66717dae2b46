"""Application orchestration entry points."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, cast

from recordflow.adapters.http import http_store_factory
from recordflow.adapters.local import LocalExecutionContext, MemoryTraceBoundary
from recordflow.adapters.sqlalchemy import is_started, sqlalchemy_store_factory, startup
from recordflow.config import PipelineConfiguration, get_http_store_config
from recordflow.domain.delta import compute_delta
from recordflow.domain.pipeline import OptimizedUpdate
from recordflow.domain.pipeline.optimized_update import REMOVED_FIELDS_PARAMETER
from recordflow.domain.ports import HostServices
from recordflow.domain.resolve import RecordResolver

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from recordflow.domain.model import EntityRef, Record
    from recordflow.domain.ports import StoreFactory

log = getLogger(__name__)


def build_store_factory() -> StoreFactory:
    """HTTP store when ``RECORDFLOW_STORE_URL`` is set, the SQL store otherwise."""

    if os.getenv("RECORDFLOW_STORE_URL"):
        config = get_http_store_config()
        log.info("Using HTTP record store at %s", config.base_url)
        return http_store_factory(config)
    if not is_started():
        startup()
    return sqlalchemy_store_factory


def compute_record_delta(
    target: Record,
    current: Record,
    *,
    preserve: Iterable[str] = (),
) -> tuple[Record, list[str]]:
    """Return the minimal update that turns ``current`` into ``target``."""

    delta, removed = compute_delta(target, current, preserve)
    log.info(
        "Delta for %s(%s): kept=%d, removed=%d",
        target.entity_type,
        target.id,
        len(delta.attributes),
        len(removed),
    )
    return delta, removed


def inspect_configuration(unsecure: str | None, secure: str | None = None) -> PipelineConfiguration:
    return PipelineConfiguration.parse(unsecure, secure)


def resolve_record(
    ref: EntityRef,
    target: Record | None = None,
    *,
    store_factory: StoreFactory | None = None,
    user_id: UUID | None = None,
) -> Record:
    """Read ``ref`` from the store and merge ``target`` onto it."""

    factory = store_factory or build_store_factory()
    return RecordResolver(factory(user_id)).resolve(target, identity_hint=ref)


@dataclass(slots=True)
class OptimizedUpdateResult:
    target: Record
    removed: list[str] = field(default_factory=list)
    trace: list[str] = field(default_factory=list)
    written: bool = False


def apply_optimized_update(
    target: Record,
    *,
    unsecure_config: str = "",
    store_factory: StoreFactory | None = None,
    user_id: UUID | None = None,
    write: bool = True,
) -> OptimizedUpdateResult:
    """Reduce ``target`` against the stored record and write what is left.

    The stored record acts as the pre-image of a synchronous pre-operation
    update. Nothing is written when every field was removed.
    """

    if target.id is None:
        raise ValueError(f"Cannot update a {target.entity_type} record without an id")

    factory = store_factory or build_store_factory()
    store = factory(user_id)
    pre_image = store.read(target.entity_type, target.id)

    overrides: dict[str, object] = {}
    if user_id is not None:
        overrides["initiating_user_id"] = user_id
    context = LocalExecutionContext.for_target("Update", target, pre_image=pre_image, **overrides)
    boundary = MemoryTraceBoundary()
    OptimizedUpdate(unsecure=unsecure_config).execute(HostServices(context, boundary, factory))

    removed = cast("list[str]", context.output_parameters.get(REMOVED_FIELDS_PARAMETER, []))
    result = OptimizedUpdateResult(target=target, removed=removed, trace=boundary.lines)
    if write and target.attributes:
        store.update(target)
        result.written = True
    log.info(
        "Optimized update of %s(%s): removed=%d, written=%s",
        target.entity_type,
        target.id,
        len(removed),
        result.written,
    )
    return result
