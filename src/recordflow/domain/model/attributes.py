"""Sparse, ordered attribute maps."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import TYPE_CHECKING

from recordflow.domain.model.values import copy_value, values_equal

if TYPE_CHECKING:
    from recordflow.domain.model.values import AttributeValue


class AttributeMap(MutableMapping[str, "AttributeValue"]):
    """Field name -> value mapping for one record.

    An absent field means "unknown"; an explicit ``None`` means "null". Use
    ``name in attrs`` to tell them apart. Insertion order is kept for trace
    output only; equality ignores it and compares values with
    :func:`values_equal`.
    """

    __slots__ = ("_values",)

    def __init__(
        self,
        values: Mapping[str, AttributeValue] | Iterable[tuple[str, AttributeValue]] = (),
        /,
        **fields: AttributeValue,
    ) -> None:
        self._values: dict[str, AttributeValue] = {}
        self.update(values, **fields)

    def __getitem__(self, name: str) -> AttributeValue:
        return self._values[name]

    def __setitem__(self, name: str, value: AttributeValue) -> None:
        self._values[name] = value

    def __delitem__(self, name: str) -> None:
        del self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if self.keys() != other.keys():
            return False
        return all(values_equal(value, other[name]) for name, value in self._values.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"AttributeMap({self._values!r})"

    def copy(self) -> AttributeMap:
        """Deep copy: every value is cloned with :func:`copy_value`."""

        return AttributeMap((name, copy_value(value)) for name, value in self._values.items())

    def select(self, names: Iterable[str]) -> AttributeMap:
        """Return a deep copy restricted to ``names`` (missing names are skipped)."""

        return AttributeMap(
            (name, copy_value(self._values[name])) for name in names if name in self._values
        )

    def merge_onto(self, target: MutableMapping[str, AttributeValue]) -> None:
        """Write a copy of every field of this map into ``target``."""

        for name, value in self._values.items():
            target[name] = copy_value(value)
