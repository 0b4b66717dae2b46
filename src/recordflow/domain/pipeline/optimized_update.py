"""Pipeline unit that reduces an update's target to the fields that really change.

Setting a field to its current value and saving is sometimes used on purpose
to fire downstream logic; registering this unit suppresses those no-op writes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from recordflow.domain.delta import reduce_to_delta
from recordflow.domain.errors import PipelineStepError
from recordflow.domain.model import PipelineStage
from recordflow.domain.model.traceable import format_record
from recordflow.domain.pipeline.runner import ExecutionPipeline

if TYPE_CHECKING:
    from recordflow.domain.model import Record, Snapshot
    from recordflow.domain.pipeline.context import ExecutionContext

REMOVED_FIELDS_PARAMETER: Final[str] = "RemovedFields"
SUPPORTED_STAGES: Final = frozenset({PipelineStage.PRE_VALIDATION, PipelineStage.PRE_OPERATION})


class OptimizedUpdate(ExecutionPipeline):
    """Drop target fields whose value equals the pre-image's value."""

    def run(self, context: ExecutionContext) -> None:
        self._validate_registration(context)
        target = self._require_target(context)
        pre_image = self._require_pre_image(context)

        context.trace("Reducing 'Target' to delta, based on attribute values in the pre-image.")
        removed = reduce_to_delta(target, pre_image, self.configuration.preserve_fields)
        context.trace("Removed attributes: {0}", ",".join(removed))
        context.trace("Reduced target: {0}", format_record(target))
        context.output_parameters[REMOVED_FIELDS_PARAMETER] = removed

    @staticmethod
    def _validate_registration(context: ExecutionContext) -> None:
        stage = context.host.stage
        if context.message_name.lower() != "update" or stage not in SUPPORTED_STAGES:
            context.trace(
                "This pipeline only supports the Update message in PreValidation "
                "or PreOperation stages."
            )
            raise PipelineStepError("Invalid pipeline step registration.")

    @staticmethod
    def _require_target(context: ExecutionContext) -> Record:
        context.trace("Getting input parameter 'Target'.")
        target = context.get_target()
        if target is None:
            raise PipelineStepError("Target is null.")
        return target

    @staticmethod
    def _require_pre_image(context: ExecutionContext) -> Snapshot:
        context.trace("Getting pre-image.")
        pre_image = context.get_pre_image()
        if pre_image is None:
            raise PipelineStepError(
                "Pre-image is missing. Register a single pre-image on the step, "
                "including all attributes that are to be compared."
            )
        return pre_image
