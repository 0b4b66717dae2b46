"""Domain error definitions."""

from __future__ import annotations


class RecordflowError(RuntimeError):
    """Base class for errors raised by the reconciliation core."""


class UnresolvableRecordError(RecordflowError):
    """Raised when neither a snapshot nor an identity is available for a record."""


class MismatchedRecordError(RecordflowError):
    """Raised when a delta is applied to a record with a different identity."""


class TriggerChainError(RecordflowError):
    """Raised when the chain of triggering contexts is cyclic or too deep."""


class PipelineStepError(RecordflowError):
    """Raised by a unit of work whose step registration or inputs are unusable."""


class PipelineExecutionError(RecordflowError):
    """The single failure type surfaced by an execution pipeline to its host."""

    def __init__(self, message: str, *, pipeline: str | None = None) -> None:
        super().__init__(message)
        self.pipeline = pipeline

    @classmethod
    def wrap(cls, pipeline: str, error: BaseException) -> PipelineExecutionError:
        """Build the failure reported when ``error`` escapes ``pipeline``."""

        return cls(
            f"Pipeline '{pipeline}' failed to execute, returning the error: {error}",
            pipeline=pipeline,
        )
