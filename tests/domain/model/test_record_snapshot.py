from __future__ import annotations

import uuid

import pytest

from recordflow.domain.model import AttributeMap, EntityRef, OptionCode, Record, Snapshot

RECORD_ID = uuid.UUID("b5f0ad9e-5a0c-4a73-9dc2-1f6f3c3c0001")


def test_record_coerces_plain_dict_attributes() -> None:
    record = Record(entity_type="contact", id=RECORD_ID, attributes={"a": 1})

    assert isinstance(record.attributes, AttributeMap)
    assert record["a"] == 1
    assert "a" in record


def test_record_item_assignment_writes_attributes() -> None:
    record = Record(entity_type="contact")
    record["status"] = OptionCode(2)

    assert record.attributes == AttributeMap(status=OptionCode(2))


def test_to_ref_requires_id() -> None:
    assert Record(entity_type="contact").to_ref() is None
    assert Record(entity_type="contact", id=RECORD_ID).to_ref() == EntityRef("contact", RECORD_ID)


def test_record_copy_is_independent() -> None:
    record = Record(entity_type="contact", id=RECORD_ID, attributes={"status": OptionCode(1)})
    copied = record.copy()

    copied["status"] = OptionCode(5)

    assert record["status"] == OptionCode(1)
    assert copied.id == record.id


def test_snapshot_is_isolated_from_later_changes() -> None:
    record = Record(entity_type="contact", id=RECORD_ID, attributes={"name": "Ada"})
    snapshot = Snapshot.capture(record)

    record["name"] = "Grace"

    assert snapshot.attributes["name"] == "Ada"


def test_snapshot_attributes_are_read_only() -> None:
    snapshot = Snapshot.capture(Record(entity_type="contact", attributes={"name": "Ada"}))

    with pytest.raises(TypeError):
        snapshot.attributes["name"] = "Grace"  # type: ignore[index]


def test_snapshot_to_record_returns_mutable_copy() -> None:
    snapshot = Snapshot.capture(Record(entity_type="contact", id=RECORD_ID, attributes={"a": 1}))

    first = snapshot.to_record()
    first["a"] = 2

    assert snapshot.to_record()["a"] == 1
    assert snapshot.to_ref() == EntityRef("contact", RECORD_ID)


def test_snapshots_are_hashable_and_compare_by_content() -> None:
    record = Record(entity_type="contact", id=RECORD_ID, attributes={"name": "Ada"})
    first = Snapshot.capture(record)
    second = Snapshot.capture(record)
    record["name"] = "Grace"
    changed = Snapshot.capture(record)

    assert first == second
    assert first != changed
    assert {first, second, changed} == {first, changed}
