"""Compute, reduce and apply attribute deltas between records."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from recordflow.domain.errors import MismatchedRecordError
from recordflow.domain.model import Record, values_equal
from recordflow.domain.model.traceable import to_traceable

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

    from recordflow.domain.model import AttributeMap, AttributeValue, HasAttributes

log = getLogger(__name__)


def is_field_needed(
    name: str,
    current: Mapping[str, AttributeValue],
    reference: Mapping[str, AttributeValue],
) -> bool:
    """Return whether ``name`` in ``current`` is a real change against ``reference``."""

    if name not in reference:
        return True
    # nothing to send for a field the current image does not carry
    if name not in current:
        return False
    current_value = current[name]
    reference_value = reference[name]
    if current_value is None:
        return reference_value is not None
    return not values_equal(current_value, reference_value)


def reduce_to_delta(
    record: Record,
    reference: HasAttributes | None,
    preserve_fields: Collection[str] = (),
) -> list[str]:
    """Drop every unchanged field from ``record`` in place.

    Fields named in ``preserve_fields`` are kept even when unchanged. Returns
    the names of the removed fields in the order they appeared.
    """

    removed: list[str] = []
    if reference is None:
        return removed

    baseline = reference.attributes
    for name in list(record.attributes):
        if name in preserve_fields:
            continue
        if not is_field_needed(name, record.attributes, baseline):
            del record.attributes[name]
            removed.append(name)

    log.debug(
        "Reduced %s(%s) to delta: kept=%d, removed=%d",
        record.entity_type,
        record.id,
        len(record.attributes),
        len(removed),
    )
    return removed


def compute_delta(
    current: Record,
    reference: HasAttributes | None,
    preserve_fields: Collection[str] = (),
) -> tuple[Record, list[str]]:
    """Return a copy of ``current`` holding only changed or new fields.

    Without a ``reference`` there is nothing to compare against, so the full
    copy is returned with an empty removed list.
    """

    delta = current.copy()
    removed = reduce_to_delta(delta, reference, preserve_fields)
    return delta, removed


def apply_delta(record: Record, delta: Record | AttributeMap | None) -> Record:
    """Merge ``delta`` onto ``record`` and return ``record``.

    A delta given as a :class:`Record` must refer to the same record: its
    entity type has to match, and so does its id when it carries one.
    """

    if delta is None:
        return record

    if isinstance(delta, Record):
        if not _same_identity(record, delta):
            raise MismatchedRecordError(
                f"Delta refers to {_describe(delta)}, not {_describe(record)}."
            )
        changes = delta.attributes
    else:
        changes = delta

    changes.merge_onto(record.attributes)
    return record


def _same_identity(record: Record, delta: Record) -> bool:
    if delta.entity_type != record.entity_type:
        return False
    return delta.id is None or delta.id == record.id


def _describe(record: Record) -> str:
    ref = record.to_ref()
    if ref is None:
        return f"(EntityRef){record.entity_type}(no id)"
    return to_traceable(ref)
