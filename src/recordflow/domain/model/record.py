"""Records and immutable snapshots of records."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from recordflow.domain.model.attributes import AttributeMap
from recordflow.domain.model.values import EntityRef

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from recordflow.domain.model.values import AttributeValue


class HasAttributes(Protocol):
    """Anything identified by (entity_type, id) that exposes attribute values."""

    @property
    def entity_type(self) -> str: ...

    @property
    def id(self) -> UUID | None: ...

    @property
    def attributes(self) -> Mapping[str, AttributeValue]: ...


@dataclass(slots=True, kw_only=True)
class Record:
    """A sparse record: absent attributes are unknown, not null."""

    entity_type: str
    id: UUID | None = None
    attributes: AttributeMap = field(default_factory=AttributeMap)

    def __post_init__(self) -> None:
        if not isinstance(self.attributes, AttributeMap):
            self.attributes = AttributeMap(self.attributes)

    def __getitem__(self, name: str) -> AttributeValue:
        return self.attributes[name]

    def __setitem__(self, name: str, value: AttributeValue) -> None:
        self.attributes[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    def to_ref(self) -> EntityRef | None:
        """Return a reference to this record, or None while it has no id."""

        if self.id is None:
            return None
        return EntityRef(self.entity_type, self.id)

    def copy(self) -> Record:
        return Record(entity_type=self.entity_type, id=self.id, attributes=self.attributes.copy())


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Immutable image of a record captured before or after an operation."""

    entity_type: str
    id: UUID | None
    _attributes: AttributeMap = field(repr=False, hash=False)

    @classmethod
    def capture(cls, record: Record) -> Snapshot:
        return cls(record.entity_type, record.id, record.attributes.copy())

    @property
    def attributes(self) -> Mapping[str, AttributeValue]:
        """Read-only view of the captured attributes."""

        return MappingProxyType(self._attributes)  # pyright: ignore[reportArgumentType]

    def to_ref(self) -> EntityRef | None:
        if self.id is None:
            return None
        return EntityRef(self.entity_type, self.id)

    def to_record(self) -> Record:
        """Return an independent, mutable copy of the captured record."""

        return Record(
            entity_type=self.entity_type,
            id=self.id,
            attributes=self._attributes.copy(),
        )
