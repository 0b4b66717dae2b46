from __future__ import annotations

import uuid
from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from recordflow.domain.model import (
    EntityRef,
    Money,
    OptionCode,
    ValueKind,
    copy_value,
    kind_of,
    values_equal,
)

ACCOUNT = uuid.UUID("0b7d7a36-4f3c-4c83-8d8e-4a7dc7d5a001")


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (None, ValueKind.NULL),
        (True, ValueKind.BOOLEAN),
        (3, ValueKind.NUMBER),
        (2.5, ValueKind.NUMBER),
        (Decimal("1.10"), ValueKind.NUMBER),
        ("text", ValueKind.TEXT),
        (date(2024, 1, 2), ValueKind.DATE),
        (datetime(2024, 1, 2, tzinfo=UTC), ValueKind.DATETIME),
        (ACCOUNT, ValueKind.IDENTIFIER),
        (OptionCode(1), ValueKind.OPTION),
        (Money(Decimal(5)), ValueKind.MONEY),
        (EntityRef("account", ACCOUNT), ValueKind.REFERENCE),
        (object(), ValueKind.OTHER),
    ],
)
def test_kind_of_tags_each_value(value: object, kind: ValueKind) -> None:
    assert kind_of(value) is kind


def test_wrappers_compare_by_underlying_value_only() -> None:
    assert values_equal(OptionCode(2, label="Email"), OptionCode(2))
    assert values_equal(Money(Decimal("10.00"), formatted="$10.00"), Money(Decimal("10")))
    named = EntityRef("account", ACCOUNT, name="Contoso")
    assert values_equal(named, EntityRef("account", ACCOUNT))
    assert not values_equal(OptionCode(2), OptionCode(3))
    assert not values_equal(EntityRef("account", ACCOUNT), EntityRef("contact", ACCOUNT))


def test_values_of_different_kinds_never_compare_equal() -> None:
    assert not values_equal(True, 1)
    assert not values_equal(0, False)
    assert not values_equal(OptionCode(1), 1)
    assert not values_equal(Money(Decimal(1)), Decimal(1))
    assert not values_equal(datetime(2024, 1, 2, tzinfo=UTC), date(2024, 1, 2))
    assert not values_equal(None, "")


def test_numbers_compare_across_numeric_types() -> None:
    assert values_equal(1, 1.0)
    assert values_equal(Decimal("2.50"), 2.5)


def test_money_coerces_amount_to_decimal() -> None:
    money = Money(12.5)  # type: ignore[arg-type]

    assert money.value == Decimal("12.5")
    assert isinstance(money.value, Decimal)


@pytest.mark.parametrize(
    "value",
    [
        OptionCode(7, label="Seven"),
        Money(Decimal("1.23"), formatted="1.23 EUR"),
        EntityRef("account", ACCOUNT, name="Contoso"),
    ],
)
def test_copy_value_is_independent_and_equal(value: OptionCode | Money | EntityRef) -> None:
    copied = copy_value(value)

    assert copied is not value
    assert values_equal(copied, value)


def test_copy_value_does_not_share_mutations() -> None:
    original = OptionCode(1)
    copied = copy_value(original)
    assert isinstance(copied, OptionCode)

    copied.value = 2

    assert original.value == 1


def test_copy_value_returns_scalars_as_is() -> None:
    stamp = datetime(2024, 1, 2, tzinfo=UTC)

    assert copy_value(stamp) is stamp
    assert copy_value(None) is None


def test_entity_ref_refers_to() -> None:
    ref = EntityRef("account", ACCOUNT)

    assert ref.refers_to("account", ACCOUNT)
    assert not ref.refers_to("contact", ACCOUNT)
    assert not ref.refers_to("account", None)
