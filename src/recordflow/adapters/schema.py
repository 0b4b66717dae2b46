"""Pydantic models describing the JSON wire format of records.

Plain JSON scalars (null, booleans, numbers, strings) pass through unchanged.
Every other attribute value is a tagged object whose ``type`` member selects
the payload model, e.g. ``{"type": "money", "value": "12.50"}``.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from recordflow.domain.model import AttributeMap, EntityRef, Money, OptionCode, Record

if TYPE_CHECKING:
    from recordflow.domain.model import AttributeValue


class WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class OptionPayload(WireModel):
    type: Literal["option"] = "option"
    value: int
    label: str | None = None

    def to_domain(self) -> OptionCode:
        return OptionCode(self.value, self.label)


class MoneyPayload(WireModel):
    type: Literal["money"] = "money"
    value: Decimal
    formatted: str | None = None

    def to_domain(self) -> Money:
        return Money(self.value, self.formatted)


class RefPayload(WireModel):
    type: Literal["ref"] = "ref"
    entity_type: str
    id: UUID
    name: str | None = None

    def to_domain(self) -> EntityRef:
        return EntityRef(self.entity_type, self.id, self.name)


class DateTimePayload(WireModel):
    type: Literal["datetime"] = "datetime"
    value: datetime

    def to_domain(self) -> datetime:
        return self.value


class DatePayload(WireModel):
    type: Literal["date"] = "date"
    value: date

    def to_domain(self) -> date:
        return self.value


class UuidPayload(WireModel):
    type: Literal["uuid"] = "uuid"
    value: UUID

    def to_domain(self) -> UUID:
        return self.value


class DecimalPayload(WireModel):
    type: Literal["decimal"] = "decimal"
    value: Decimal

    def to_domain(self) -> Decimal:
        return self.value


TaggedPayload = Annotated[
    OptionPayload
    | MoneyPayload
    | RefPayload
    | DateTimePayload
    | DatePayload
    | UuidPayload
    | DecimalPayload,
    Field(discriminator="type"),
]

WireValue = TaggedPayload | bool | int | float | str | None

_TAGGED_ADAPTER: TypeAdapter[TaggedPayload] = TypeAdapter(TaggedPayload)


def encode_value(value: AttributeValue) -> WireValue:
    """Return the wire representation of one attribute value."""

    # order matters: bool is an int, datetime is a date
    match value:
        case None | bool() | int() | float() | str():
            return value
        case OptionCode():
            return OptionPayload(value=value.value, label=value.label)
        case Money():
            return MoneyPayload(value=value.value, formatted=value.formatted)
        case EntityRef():
            return RefPayload(entity_type=value.entity_type, id=value.id, name=value.name)
        case datetime():
            return DateTimePayload(value=value)
        case date():
            return DatePayload(value=value)
        case UUID():
            return UuidPayload(value=value)
        case Decimal():
            return DecimalPayload(value=value)
        case _:
            raise TypeError(f"Unsupported attribute value type: {type(value).__name__}")


def decode_value(raw: object) -> AttributeValue:
    """Inverse of :func:`encode_value`; accepts payload models or plain JSON data."""

    match raw:
        case None | bool() | int() | float() | str():
            return raw
        case WireModel():
            return raw.to_domain()  # type: ignore[attr-defined]
        case Mapping():
            return _TAGGED_ADAPTER.validate_python(raw).to_domain()
        case _:
            raise TypeError(f"Unsupported wire value: {raw!r}")


def encode_attributes(attributes: Mapping[str, AttributeValue]) -> dict[str, object]:
    """JSON-ready dict for an attribute map."""

    encoded: dict[str, object] = {}
    for name, value in attributes.items():
        wire = encode_value(value)
        encoded[name] = wire.model_dump(mode="json") if isinstance(wire, WireModel) else wire
    return encoded


def decode_attributes(raw: Mapping[str, object]) -> AttributeMap:
    return AttributeMap((name, decode_value(value)) for name, value in raw.items())


class RecordPayload(WireModel):
    entity_type: str
    id: UUID | None = None
    attributes: dict[str, WireValue] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, record: Record) -> RecordPayload:
        return cls(
            entity_type=record.entity_type,
            id=record.id,
            attributes={name: encode_value(value) for name, value in record.attributes.items()},
        )

    def to_domain(self) -> Record:
        return Record(
            entity_type=self.entity_type,
            id=self.id,
            attributes=AttributeMap(
                (name, decode_value(value)) for name, value in self.attributes.items()
            ),
        )


def dump_record(record: Record) -> dict[str, object]:
    return RecordPayload.from_domain(record).model_dump(mode="json")


def load_record(data: object) -> Record:
    return RecordPayload.model_validate(data).to_domain()
