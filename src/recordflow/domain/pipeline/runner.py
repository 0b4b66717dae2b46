"""Execution pipeline: traced, timed and failure-translating unit-of-work runner."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from recordflow.config import ConfigurationNotInitializedError, PipelineConfiguration
from recordflow.domain.errors import PipelineExecutionError
from recordflow.domain.pipeline.context import (
    ExecutionContext,
    describe_trigger,
    iter_trigger_chain,
)
from recordflow.domain.pipeline.metrics import time_call

if TYPE_CHECKING:
    from collections.abc import Callable

    from recordflow.domain.ports import HostServices

type UnitOfWork = Callable[[ExecutionContext], None]

log = getLogger(__name__)


class ExecutionPipeline:
    """Run one unit of work for a host-triggered operation.

    Pass ``work`` or subclass and override :meth:`run`. Subclasses that define
    their own ``__init__`` must call ``super().__init__`` so the configuration
    blobs get parsed.
    """

    _configuration: PipelineConfiguration | None = None
    _work: UnitOfWork | None = None
    _name: str | None = None

    def __init__(
        self,
        work: UnitOfWork | None = None,
        *,
        unsecure: str | None = "",
        secure: str | None = "",
        name: str | None = None,
    ) -> None:
        self._work = work
        self._name = name
        self._configuration = PipelineConfiguration.parse(unsecure, secure)

    @property
    def configuration(self) -> PipelineConfiguration:
        if self._configuration is None:
            raise ConfigurationNotInitializedError(
                f"{type(self).__qualname__} read its configuration before "
                "ExecutionPipeline.__init__ ran; call super().__init__(unsecure=..., secure=...)."
            )
        return self._configuration

    @property
    def identity(self) -> str:
        if self._name:
            return self._name
        source = self._work or type(self)
        module = getattr(source, "__module__", None) or type(self).__module__
        qualname = getattr(source, "__qualname__", None) or type(source).__qualname__
        return f"{module}.{qualname}"

    def run(self, context: ExecutionContext) -> None:
        """The unit of work; the default calls the ``work`` callable."""

        if self._work is None:
            raise NotImplementedError(f"{type(self).__qualname__} has no unit of work")
        self._work(context)

    def execute(self, services: HostServices) -> None:
        """Entry point called by the host for each triggered operation."""

        context: ExecutionContext | None = None
        try:
            context = ExecutionContext.open(services)
            self._execute_with_traces(context)
        except PipelineExecutionError:
            raise
        except Exception as exc:
            if context is not None:
                context.trace("!! Exception caught, pipeline aborting.")
            log.warning("Pipeline %s aborted: %s", self.identity, exc)
            raise PipelineExecutionError.wrap(self.identity, exc) from exc

    def _execute_with_traces(self, context: ExecutionContext) -> None:
        identity = self.identity
        self._trace_entry(context, identity)
        self._trace_trigger(context)
        duration_ms = time_call(lambda: self.run(context))
        context.trace(
            "Exiting {0}.execute(), Correlation Id: {1}, Duration: {2:,.2f}ms.",
            identity,
            context.correlation_id,
            duration_ms,
        )

    @staticmethod
    def _trace_entry(context: ExecutionContext, identity: str) -> None:
        host = context.host
        context.trace(
            "Entering {0}.execute(), Depth: {1}, Request Id: {2}, "
            "Correlation Id: {3}, Running as: {4}.",
            identity,
            host.depth,
            host.request_id,
            host.correlation_id,
            host.initiating_user_id,
        )

    def _trace_trigger(self, context: ExecutionContext) -> None:
        if not self.configuration.trace_message_stack:
            context.trace("Pipeline triggered by {0}", describe_trigger(context.host))
            return

        stack = "\n".join(describe_trigger(item) for item in iter_trigger_chain(context.host))
        context.trace("Pipeline message stack:\n{0}", stack)
