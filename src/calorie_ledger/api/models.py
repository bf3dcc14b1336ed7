"""Pydantic request models for the ledger API."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from calorie_ledger.domain.entries import Meal
from calorie_ledger.domain.ingredients import BaseUnit
from calorie_ledger.domain.profiles import ActivityLevel, Gender


class Credentials(BaseModel):
    """Email and password for sign-up and sign-in."""

    email: str
    password: str


class ProfilePayload(BaseModel):
    """Profile details submitted by the client."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    gender: Gender
    age: int
    weight: float
    height: int
    activity_level: ActivityLevel | None = None


class IngredientPayload(BaseModel):
    """Ingredient definition with nutrition per base unit."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    category: str = ""
    calories: float
    base_unit: BaseUnit = BaseUnit.PER_100G
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None


class FoodEntryPayload(BaseModel):
    """A simple food serving to log."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    meal: Meal
    quantity: float
    unit: str
    calories_per_unit: float
    day: date
    save_to_catalog: bool = False


class PortionPayload(BaseModel):
    """Amount of a saved ingredient, in grams or millilitres."""

    model_config = ConfigDict(allow_inf_nan=False)

    ingredient_id: str
    amount: float


class ComposedFoodPayload(BaseModel):
    """A custom food built from ingredient portions."""

    name: str
    meal: Meal
    day: date
    portions: list[PortionPayload] = Field(default_factory=list)


class ExercisePayload(BaseModel):
    """An exercise session to log."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str
    duration: int
    day: date
    met: float | None = None
    calories_burned: int | None = None
