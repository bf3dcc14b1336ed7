"""Custom food composition from ingredient portions."""

import math
from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import uuid4

from calorie_ledger.domain.entries import FoodEntry
from calorie_ledger.domain.errors import ValidationError
from calorie_ledger.domain.ingredients import Ingredient, IngredientPortion
from calorie_ledger.domain.rounding import round_half_up

COMPOSED_UNIT = "serving"


def proportional_calories(ingredient: Ingredient, amount: float) -> float:
    """Return calories for ``amount`` grams or millilitres of an ingredient.

    Defined for ``amount > 0``; callers reject other amounts before calling.
    """
    return ingredient.calories * amount / 100


def build_portion(ingredient: Ingredient, amount: float) -> IngredientPortion:
    """Snapshot a positive amount of an ingredient as a portion."""
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError("Amount must be greater than 0")
    return IngredientPortion(
        name=ingredient.name,
        amount=amount,
        unit=ingredient.base_unit.portion_unit,
        calories=proportional_calories(ingredient, amount),
    )


def compose_food(
    name: str,
    meal: str,
    portions: Sequence[IngredientPortion],
    *,
    day: str,
    entry_id: str | None = None,
    timestamp: str | None = None,
) -> FoodEntry:
    """Build a composed food entry from ingredient portions.

    Portion calories keep their fractional value; only the entry total is
    rounded.
    """
    if not portions:
        raise ValidationError("empty composition")
    total = round_half_up(sum(portion.calories for portion in portions))
    return FoodEntry(
        id=entry_id or f"food_{uuid4().hex}",
        name=name,
        meal=meal,
        quantity=1,
        unit=COMPOSED_UNIT,
        calories_per_unit=total,
        total_calories=total,
        date=day,
        timestamp=timestamp or datetime.now(tz=UTC).isoformat(),
        is_custom_food=True,
        ingredients=tuple(portions),
    )
