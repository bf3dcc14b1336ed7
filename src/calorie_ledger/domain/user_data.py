"""Whole-document state for one user."""

from dataclasses import dataclass, field

from calorie_ledger.domain.catalog import CustomFood
from calorie_ledger.domain.entries import ExerciseEntry, FoodEntry
from calorie_ledger.domain.ingredients import Ingredient
from calorie_ledger.domain.profiles import Profile

FoodLedger = dict[str, dict[str, list[FoodEntry]]]
ExerciseLedger = dict[str, dict[str, list[ExerciseEntry]]]


@dataclass
class UserData:
    """Everything stored for a user, synchronized as one document."""

    profiles: list[Profile] = field(default_factory=list)
    current_profile_id: str | None = None
    food_entries: FoodLedger = field(default_factory=dict)
    exercise_entries: ExerciseLedger = field(default_factory=dict)
    ingredients: list[Ingredient] = field(default_factory=list)
    custom_foods: list[CustomFood] = field(default_factory=list)

    def find_profile(self, profile_id: str) -> Profile | None:
        """Return the profile with this id, if present."""
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        return None

    def find_ingredient(self, ingredient_id: str) -> Ingredient | None:
        """Return the ingredient with this id, if present."""
        for ingredient in self.ingredients:
            if ingredient.id == ingredient_id:
                return ingredient
        return None
