"""In-process host: an execution context and trace boundary for local runs."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from recordflow.config.logging import TRACE_LOGGER_NAME
from recordflow.domain.model import ExecutionMode, PipelineStage
from recordflow.domain.pipeline.context import TARGET_PARAMETER

if TYPE_CHECKING:
    from recordflow.domain.model import Record


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class LocalExecutionContext:
    """Plain-data implementation of the host execution context."""

    message_name: str
    primary_entity_type: str | None = None
    primary_entity_id: uuid.UUID | None = None
    stage: int = PipelineStage.PRE_OPERATION
    mode: int = ExecutionMode.SYNCHRONOUS
    depth: int = 1
    request_id: uuid.UUID | None = field(default_factory=uuid.uuid4)
    correlation_id: uuid.UUID = field(default_factory=uuid.uuid4)
    initiating_user_id: uuid.UUID = field(default_factory=uuid.uuid4)
    operation_created_on: datetime | None = field(default_factory=_utcnow)
    input_parameters: dict[str, object] = field(default_factory=dict)
    output_parameters: dict[str, object] = field(default_factory=dict)
    pre_images: dict[str, Record] = field(default_factory=dict)
    post_images: dict[str, Record] = field(default_factory=dict)
    parent: LocalExecutionContext | None = None

    @classmethod
    def for_target(
        cls,
        message_name: str,
        target: Record,
        *,
        pre_image: Record | None = None,
        **kwargs: object,
    ) -> LocalExecutionContext:
        """Context whose ``Target`` input is ``target``, with an optional pre-image."""

        context = cls(
            message_name,
            primary_entity_type=target.entity_type,
            primary_entity_id=target.id,
            **kwargs,  # type: ignore[arg-type]
        )
        context.input_parameters[TARGET_PARAMETER] = target
        if pre_image is not None:
            context.pre_images["PreImage"] = pre_image
        return context


class LoggingTraceBoundary:
    """Trace boundary that forwards every line to a logger."""

    def __init__(self, logger: logging.Logger | None = None, *, level: int = logging.INFO) -> None:
        self.logger = logger or logging.getLogger(TRACE_LOGGER_NAME)
        self.level = level

    def write(self, line: str) -> None:
        self.logger.log(self.level, "%s", line)


class MemoryTraceBoundary:
    """Trace boundary that keeps every line in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write(self, line: str) -> None:
        self.lines.append(line)
