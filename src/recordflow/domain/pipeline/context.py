"""Execution context handed to a unit of work.

One thin adapter around the host's context: it keeps a single reference to
it and exposes only what units of work read, plus tracing, per-call store
clients and primary-record resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from recordflow.domain.errors import TriggerChainError
from recordflow.domain.model import EntityRef, ExecutionMode, PipelineStage, Record, Snapshot
from recordflow.domain.pipeline.tracing import TracingSink
from recordflow.domain.resolve import RecordResolver

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, MutableMapping
    from uuid import UUID

    from recordflow.domain.ports import (
        HostExecutionContext,
        HostServices,
        RecordStore,
        StoreFactory,
    )

TARGET_PARAMETER: Final[str] = "Target"
DEFAULT_MAX_TRIGGER_DEPTH: Final[int] = 32


def iter_trigger_chain(
    context: HostExecutionContext,
    *,
    max_depth: int = DEFAULT_MAX_TRIGGER_DEPTH,
) -> Iterator[HostExecutionContext]:
    """Yield ``context`` and then each parent context, nearest first.

    Raises :class:`TriggerChainError` as soon as a context repeats or more than
    ``max_depth`` contexts have been visited.
    """

    seen: set[int] = set()
    current: HostExecutionContext | None = context
    while current is not None:
        if id(current) in seen:
            raise TriggerChainError("Trigger chain is cyclic")
        if len(seen) >= max_depth:
            raise TriggerChainError(f"Trigger chain exceeds {max_depth} contexts")
        seen.add(id(current))
        yield current
        current = current.parent


def describe_trigger(context: HostExecutionContext) -> str:
    """One-line summary, e.g. ``Synchronous PreOperation of contact(<id>).Update``."""

    mode = _display(ExecutionMode, context.mode)
    stage = _display(PipelineStage, context.stage)
    entity_type = context.primary_entity_type or "any entity"
    entity_id = f"({context.primary_entity_id})" if context.primary_entity_id else ""
    return f"{mode} {stage} of {entity_type}{entity_id}.{context.message_name}"


def _display(enum_type: type[ExecutionMode] | type[PipelineStage], value: int) -> str:
    try:
        return enum_type(value).display_name
    except ValueError:
        return str(value)


@dataclass(slots=True)
class ExecutionContext:
    host: HostExecutionContext
    tracer: TracingSink
    store_factory: StoreFactory

    @classmethod
    def open(cls, services: HostServices) -> ExecutionContext:
        """Start tracing for a new execution of ``services.context``."""

        tracer = TracingSink(services.trace, started_at=services.context.operation_created_on)
        return cls(host=services.context, tracer=tracer, store_factory=services.store_factory)

    def trace(self, message: str, *args: object) -> None:
        self.tracer.trace(message, *args)

    # host fields -----------------------------------------------------------

    @property
    def message_name(self) -> str:
        return self.host.message_name

    @property
    def stage(self) -> PipelineStage:
        return PipelineStage(self.host.stage)

    @property
    def mode(self) -> ExecutionMode:
        return ExecutionMode(self.host.mode)

    @property
    def depth(self) -> int:
        return self.host.depth

    @property
    def correlation_id(self) -> UUID:
        return self.host.correlation_id

    @property
    def initiating_user_id(self) -> UUID:
        return self.host.initiating_user_id

    @property
    def parent(self) -> HostExecutionContext | None:
        return self.host.parent

    @property
    def input_parameters(self) -> Mapping[str, object]:
        return self.host.input_parameters

    @property
    def output_parameters(self) -> MutableMapping[str, object]:
        return self.host.output_parameters

    # target and images -----------------------------------------------------

    def get_target(self) -> Record | None:
        """Return the live target record (mutations are seen by the host)."""

        target = self.host.input_parameters.get(TARGET_PARAMETER)
        return target if isinstance(target, Record) else None

    def get_target_reference(self) -> EntityRef | None:
        target = self.host.input_parameters.get(TARGET_PARAMETER)
        if isinstance(target, EntityRef):
            return target
        if isinstance(target, Record):
            return target.to_ref()
        return None

    def get_pre_image(self, name: str = "") -> Snapshot | None:
        return _image(self.host.pre_images, name)

    def get_post_image(self, name: str = "") -> Snapshot | None:
        return _image(self.host.post_images, name)

    # store -----------------------------------------------------------------

    def create_store(self, user_id: UUID | None = None) -> RecordStore:
        """Build a new store client acting as ``user_id`` (default: initiating user)."""

        return self.store_factory(user_id or self.host.initiating_user_id)

    def resolve_primary_record(self, pre_image_name: str = "") -> Record:
        resolver = RecordResolver(self.create_store())
        return resolver.resolve(
            self.get_target(),
            snapshot=self.get_pre_image(pre_image_name),
            identity_hint=self.get_target_reference(),
        )


def _image(images: Mapping[str, Record], name: str) -> Snapshot | None:
    if not name:
        if not images:
            return None
        if len(images) > 1:
            raise ValueError(
                f"Image name required: {len(images)} images registered ({', '.join(images)})"
            )
        name = next(iter(images))
    image = images.get(name)
    if image is None:
        return None
    return Snapshot.capture(image)
