"""Domain models for ingredients and composed-food portions."""

from dataclasses import dataclass
from enum import Enum


class BaseUnit(str, Enum):
    """Quantity that an ingredient's nutrition values refer to."""

    PER_100G = "100g"
    PER_100ML = "100ml"

    @property
    def portion_unit(self) -> str:
        """Unit in which portions of this ingredient are measured."""
        return "ml" if self is BaseUnit.PER_100ML else "g"


@dataclass(frozen=True)
class Ingredient:
    """Reusable ingredient with nutrition per base unit."""

    id: str
    name: str
    category: str
    calories: float
    base_unit: BaseUnit
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class IngredientPortion:
    """Snapshot of an ingredient amount used in a composed food."""

    name: str
    amount: float
    unit: str
    calories: float
