"""Tests for composing custom foods from ingredients."""

from dataclasses import replace

import pytest

from calorie_ledger.domain.errors import ValidationError
from calorie_ledger.domain.ingredients import BaseUnit, IngredientPortion
from calorie_ledger.services.composer import (
    build_portion,
    compose_food,
    proportional_calories,
)
from tests.conftest import make_ingredient


def test_proportional_calories_scales_per_hundred() -> None:
    apple = make_ingredient(calories=52)

    assert proportional_calories(apple, 150) == 78


@pytest.mark.parametrize("base_unit", list(BaseUnit))
def test_proportional_calories_at_base_amount_equals_stored_value(
    base_unit: BaseUnit,
) -> None:
    ingredient = make_ingredient(calories=89.5, base_unit=base_unit)

    assert proportional_calories(ingredient, 100) == 89.5


def test_build_portion_uses_base_unit_measure() -> None:
    milk = make_ingredient(name="Milk", calories=64, base_unit=BaseUnit.PER_100ML)

    portion = build_portion(milk, 250)

    assert portion == IngredientPortion(name="Milk", amount=250, unit="ml", calories=160)


@pytest.mark.parametrize("amount", [0, -5, float("nan"), float("inf")])
def test_build_portion_rejects_non_positive_amounts(amount: float) -> None:
    with pytest.raises(ValidationError):
        build_portion(make_ingredient(), amount)


def test_compose_food_rounds_total_half_up_and_keeps_portions() -> None:
    portions = [
        IngredientPortion(name="Oats", amount=50, unit="g", calories=60),
        IngredientPortion(name="Honey", amount=6, unit="g", calories=18.5),
    ]

    entry = compose_food("Porridge", "Breakfast", portions, day="2024-05-01")

    assert entry.total_calories == 79
    assert entry.calories_per_unit == 79
    assert entry.quantity == 1
    assert entry.is_composed
    assert [portion.calories for portion in entry.ingredients] == [60, 18.5]
    assert entry.date == "2024-05-01"


def test_compose_food_rejects_empty_composition() -> None:
    with pytest.raises(ValidationError, match="empty composition"):
        compose_food("Nothing", "Lunch", [], day="2024-05-01")


def test_composed_entry_is_unaffected_by_later_ingredient_edits() -> None:
    apple = make_ingredient(calories=52)
    entry = compose_food(
        "Apple slices", "Snack", [build_portion(apple, 200)], day="2024-05-01"
    )

    edited = replace(apple, name="Green apple", calories=80)

    assert edited.calories == 80
    assert entry.ingredients[0].name == "Apple"
    assert entry.ingredients[0].calories == 104
    assert entry.total_calories == 104
