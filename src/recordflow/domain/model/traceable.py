"""Human-readable renderings of values and records for trace output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recordflow.domain.model.values import EntityRef, Money, OptionCode

if TYPE_CHECKING:
    from recordflow.domain.model.record import HasAttributes


def indent_new_lines(text: str) -> str:
    return text.replace("\n", "\n  ")


def to_traceable(value: object) -> str:
    """Render a single attribute value with its kind, e.g. ``(Money)10.00``."""

    match value:
        case None:
            return "(null)"
        case OptionCode():
            return f"(OptionCode){value.value}"
        case Money():
            return f"(Money){value.value}"
        case EntityRef():
            return f"(EntityRef){value.entity_type}({value.id})"
        case _:
            return f"({type(value).__name__}){indent_new_lines(str(value))}"


def format_record(record: HasAttributes | None) -> str:
    """Render a record as one header line plus one line per attribute."""

    if record is None:
        return "(Record) null"
    lines = [f"(Record<{record.entity_type}>)"]
    lines.extend(f"{name}: {to_traceable(value)}" for name, value in record.attributes.items())
    return "\n".join(lines)
