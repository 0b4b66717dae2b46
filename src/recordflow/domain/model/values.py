"""Attribute values: typed wrappers, value kinds, copy and equality.

An attribute value is either a plain scalar or one of the typed wrappers the
entity store uses for option codes, money amounts and foreign-key references.
Wrappers are mutable and may carry display metadata, so equality between two
values is decided by :func:`values_equal` on the underlying value only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from uuid import UUID

type Scalar = str | int | float | bool | Decimal | date | datetime | UUID


@dataclass(slots=True)
class OptionCode:
    """Picklist/choice value identified by its integer code."""

    value: int
    label: str | None = field(default=None, compare=False)

    def copy(self) -> OptionCode:
        return OptionCode(self.value)


@dataclass(slots=True)
class Money:
    """Currency amount; only the decimal amount takes part in comparison."""

    value: Decimal
    formatted: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            self.value = Decimal(str(self.value))

    def copy(self) -> Money:
        return Money(self.value)


@dataclass(slots=True)
class EntityRef:
    """Reference to a record of ``entity_type`` identified by ``id``."""

    entity_type: str
    id: UUID
    name: str | None = field(default=None, compare=False)

    def copy(self) -> EntityRef:
        return EntityRef(self.entity_type, self.id)

    def refers_to(self, entity_type: str, record_id: UUID | None) -> bool:
        return self.entity_type == entity_type and self.id == record_id


type AttributeValue = Scalar | OptionCode | Money | EntityRef | None


class ValueKind(StrEnum):
    """Tag of an attribute value; values of different kinds never compare equal."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    DATE = "date"
    DATETIME = "datetime"
    IDENTIFIER = "identifier"
    OPTION = "option"
    MONEY = "money"
    REFERENCE = "reference"
    OTHER = "other"


def kind_of(value: object) -> ValueKind:
    """Return the tag of ``value``."""

    # order matters: bool is an int, datetime is a date
    match value:
        case None:
            return ValueKind.NULL
        case bool():
            return ValueKind.BOOLEAN
        case int() | float() | Decimal():
            return ValueKind.NUMBER
        case str():
            return ValueKind.TEXT
        case datetime():
            return ValueKind.DATETIME
        case date():
            return ValueKind.DATE
        case UUID():
            return ValueKind.IDENTIFIER
        case OptionCode():
            return ValueKind.OPTION
        case Money():
            return ValueKind.MONEY
        case EntityRef():
            return ValueKind.REFERENCE
        case _:
            return ValueKind.OTHER


def values_equal(left: AttributeValue, right: AttributeValue) -> bool:
    """Type-aware equality of two attribute values.

    Wrappers compare by their underlying value (metadata fields are excluded
    from the dataclass comparison); scalars compare naturally.
    """

    if kind_of(left) is not kind_of(right):
        return False
    return left == right


def copy_value(value: AttributeValue) -> AttributeValue:
    """Return an independent copy of ``value`` that compares equal to it."""

    match value:
        case OptionCode() | Money() | EntityRef():
            return value.copy()
        case _:
            return value
