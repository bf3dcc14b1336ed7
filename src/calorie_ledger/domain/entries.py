"""Domain models for food and exercise ledger entries."""

from dataclasses import dataclass
from enum import Enum

from calorie_ledger.domain.ingredients import IngredientPortion


class Meal(str, Enum):
    """Meal tags that partition a day's food entries."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


@dataclass(frozen=True)
class FoodEntry:
    """A logged food, either a simple serving or a composed custom food.

    ``meal`` is kept as the raw tag so entries with unknown tags survive a
    round trip through the document store.
    """

    id: str
    name: str
    meal: str
    quantity: float
    unit: str
    calories_per_unit: float
    total_calories: int
    date: str
    timestamp: str
    is_custom_food: bool = False
    ingredients: tuple[IngredientPortion, ...] = ()

    @property
    def is_composed(self) -> bool:
        """Return True when the entry was built from ingredient portions."""
        return self.is_custom_food


@dataclass(frozen=True)
class ExerciseEntry:
    """A logged exercise session."""

    id: str
    name: str
    duration: int
    calories_burned: int
    met: float
    date: str
    timestamp: str
