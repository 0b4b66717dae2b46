"""Public domain model surface."""

from __future__ import annotations

from recordflow.domain.model.attributes import AttributeMap
from recordflow.domain.model.enums import ExecutionMode, PipelineStage
from recordflow.domain.model.record import HasAttributes, Record, Snapshot
from recordflow.domain.model.values import (
    AttributeValue,
    EntityRef,
    Money,
    OptionCode,
    Scalar,
    ValueKind,
    copy_value,
    kind_of,
    values_equal,
)

__all__ = [  # noqa: RUF022
    # values
    "AttributeValue",
    "EntityRef",
    "Money",
    "OptionCode",
    "Scalar",
    "ValueKind",
    "copy_value",
    "kind_of",
    "values_equal",
    # records
    "AttributeMap",
    "HasAttributes",
    "Record",
    "Snapshot",
    # enums
    "ExecutionMode",
    "PipelineStage",
]
