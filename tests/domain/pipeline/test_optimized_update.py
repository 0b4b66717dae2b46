from __future__ import annotations

import pytest

from recordflow.adapters.local import LocalExecutionContext, MemoryTraceBoundary
from recordflow.domain.errors import PipelineExecutionError, PipelineStepError
from recordflow.domain.model import AttributeMap, PipelineStage, Record
from recordflow.domain.pipeline import OptimizedUpdate
from recordflow.domain.ports import HostServices

from tests.support.records import InMemoryRecordStore, StoreFactorySpy, make_contact

ALL_REMOVED = ["lastname", "creditlimit", "preferredcontactmethodcode", "parentcustomerid"]


def _services(context: LocalExecutionContext) -> tuple[HostServices, MemoryTraceBoundary]:
    boundary = MemoryTraceBoundary()
    factory = StoreFactorySpy(InMemoryRecordStore())
    return HostServices(context, boundary, factory), boundary


def test_unchanged_fields_are_removed_from_target(
    host_context: LocalExecutionContext, services: HostServices, trace: MemoryTraceBoundary
) -> None:
    OptimizedUpdate().execute(services)

    target = host_context.input_parameters["Target"]
    assert isinstance(target, Record)
    assert target.attributes == AttributeMap(firstname="Grace")
    assert host_context.output_parameters["RemovedFields"] == ALL_REMOVED
    expected = "Removed attributes: " + ",".join(ALL_REMOVED)
    assert any(line.endswith(expected) for line in trace.lines)


def test_preserve_fields_survive_reduction(
    host_context: LocalExecutionContext, services: HostServices
) -> None:
    OptimizedUpdate(unsecure="PreserveFields: lastname , creditlimit").execute(services)

    target = host_context.input_parameters["Target"]
    assert isinstance(target, Record)
    assert list(target.attributes) == ["firstname", "lastname", "creditlimit"]
    assert host_context.output_parameters["RemovedFields"] == [
        "preferredcontactmethodcode",
        "parentcustomerid",
    ]


def test_pre_validation_stage_is_supported() -> None:
    context = LocalExecutionContext.for_target(
        "update",
        make_contact(),
        pre_image=make_contact(),
        stage=PipelineStage.PRE_VALIDATION,
    )
    services, _ = _services(context)

    OptimizedUpdate().execute(services)

    target = context.input_parameters["Target"]
    assert isinstance(target, Record)
    assert target.attributes == AttributeMap()


@pytest.mark.parametrize(
    ("message", "stage"),
    [
        ("Create", PipelineStage.PRE_OPERATION),
        ("Update", PipelineStage.POST_OPERATION),
        ("Update", PipelineStage.MAIN_OPERATION),
    ],
)
def test_invalid_registration_is_rejected(message: str, stage: PipelineStage) -> None:
    context = LocalExecutionContext.for_target(
        message, make_contact(), pre_image=make_contact(), stage=stage
    )
    services, boundary = _services(context)

    pipeline = OptimizedUpdate()
    with pytest.raises(
        PipelineExecutionError, match="Invalid pipeline step registration"
    ) as excinfo:
        pipeline.execute(services)

    assert pipeline.identity in str(excinfo.value)
    assert excinfo.value.pipeline == pipeline.identity
    assert isinstance(excinfo.value.__cause__, PipelineStepError)
    assert any("only supports the Update message" in line for line in boundary.lines)
    assert boundary.lines[-1].endswith("!! Exception caught, pipeline aborting.")
    assert "RemovedFields" not in context.output_parameters


def test_missing_pre_image_is_rejected() -> None:
    context = LocalExecutionContext.for_target("Update", make_contact())
    services, boundary = _services(context)

    pipeline = OptimizedUpdate()
    with pytest.raises(PipelineExecutionError, match="Pre-image is missing") as excinfo:
        pipeline.execute(services)

    assert excinfo.value.pipeline == pipeline.identity
    assert boundary.lines[-1].endswith("!! Exception caught, pipeline aborting.")


def test_missing_target_is_rejected() -> None:
    context = LocalExecutionContext("Update")
    context.pre_images["PreImage"] = make_contact()
    services, _ = _services(context)

    with pytest.raises(PipelineExecutionError, match="Target is null"):
        OptimizedUpdate().execute(services)
