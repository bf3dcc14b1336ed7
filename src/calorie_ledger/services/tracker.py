"""Controller that owns one user's ledger state and keeps it persisted."""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import uuid4

from calorie_ledger.domain.catalog import (
    COMMON_FOODS,
    CatalogEntry,
    CustomFood,
    find_exercise_preset,
)
from calorie_ledger.domain.entries import ExerciseEntry, FoodEntry, Meal
from calorie_ledger.domain.errors import ValidationError
from calorie_ledger.domain.ingredients import BaseUnit, Ingredient
from calorie_ledger.domain.profiles import Gender, Profile
from calorie_ledger.domain.rounding import round_half_up
from calorie_ledger.domain.summaries import DailySummary, TrendSummary
from calorie_ledger.domain.user_data import UserData
from calorie_ledger.services.cache import Cache
from calorie_ledger.services.catalog import (
    build_catalog,
    is_duplicate_food,
    search_catalog,
)
from calorie_ledger.services.composer import build_portion, compose_food
from calorie_ledger.services.energy import (
    daily_summary,
    energy_trend,
    estimate_exercise_calories,
)
from calorie_ledger.services.ledger import (
    add_exercise_entry,
    add_food_entry,
    delete_profile_entries,
    entries_for_day,
    remove_exercise_entry,
    remove_food_entry,
)

_logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 900


class UserDataRepository(Protocol):
    """Persistence interface for the per-user document."""

    def load_user_data(self, user_id: str) -> UserData | None:
        """Return the stored document, or None for a first-time user."""

    def save_user_data(self, user_id: str, data: UserData) -> None:
        """Upsert the whole document."""


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex}"


@dataclass
class TrackerSession:
    """Live state for one signed-in user.

    Mutations validate before touching the model and save the whole document
    afterwards. A failed save raises ``PersistenceError`` but keeps the
    in-memory change so ``save`` can be retried.
    """

    user_id: str
    data: UserData
    repository: UserDataRepository

    def save(self) -> None:
        """Persist the current state of the document."""
        self.repository.save_user_data(self.user_id, self.data)

    # Profiles

    @property
    def current_profile(self) -> Profile | None:
        """Return the selected profile, if any."""
        if self.data.current_profile_id is None:
            return None
        return self.data.find_profile(self.data.current_profile_id)

    def require_profile(self) -> Profile:
        """Return the selected profile or fail validation."""
        profile = self.current_profile
        if profile is None:
            raise ValidationError("No profile selected")
        return profile

    def create_profile(  # noqa: PLR0913
        self,
        name: str,
        gender: Gender | str,
        age: int,
        weight: float,
        height: int,
        activity_level: str | None = None,
    ) -> Profile:
        """Create a profile and make it current."""
        profile = Profile(
            id=_new_id("profile"),
            created_at=_now(),
            **_validated_profile_fields(
                name, gender, age, weight, height, activity_level
            ),
        )
        self.data.profiles.append(profile)
        self.data.current_profile_id = profile.id
        self.save()
        _logger.info("Profile created: %s", profile.id)
        return profile

    def update_profile(  # noqa: PLR0913
        self,
        profile_id: str,
        name: str,
        gender: Gender | str,
        age: int,
        weight: float,
        height: int,
        activity_level: str | None = None,
    ) -> Profile:
        """Replace a profile's details, keeping its id and creation time."""
        fields = _validated_profile_fields(
            name, gender, age, weight, height, activity_level
        )
        index = self._profile_index(profile_id)
        updated = replace(self.data.profiles[index], **fields)
        self.data.profiles[index] = updated
        self.save()
        _logger.info("Profile updated: %s", profile_id)
        return updated

    def switch_profile(self, profile_id: str) -> Profile:
        """Select a different profile."""
        profile = self.data.profiles[self._profile_index(profile_id)]
        self.data.current_profile_id = profile.id
        self.save()
        return profile

    def delete_profile(self, profile_id: str) -> None:
        """Delete a profile together with all of its entries."""
        self._profile_index(profile_id)
        self.data.profiles = [p for p in self.data.profiles if p.id != profile_id]
        delete_profile_entries(self.data, profile_id)
        if self.data.current_profile_id == profile_id:
            self.data.current_profile_id = None
        self.save()
        _logger.info("Profile deleted: %s", profile_id)

    def _profile_index(self, profile_id: str) -> int:
        for index, profile in enumerate(self.data.profiles):
            if profile.id == profile_id:
                return index
        raise ValidationError(f"Unknown profile: {profile_id}")

    # Ingredients

    def save_ingredient(  # noqa: PLR0913
        self,
        name: str,
        category: str,
        calories: float,
        base_unit: BaseUnit | str,
        protein: float | None = None,
        carbs: float | None = None,
        fat: float | None = None,
        ingredient_id: str | None = None,
    ) -> Ingredient:
        """Create an ingredient, or update it when ``ingredient_id`` is given."""
        if not name.strip():
            raise ValidationError("Ingredient name is required")
        if not math.isfinite(calories) or calories < 0:
            raise ValidationError("Calories cannot be negative")
        try:
            unit = BaseUnit(base_unit)
        except ValueError as exc:
            raise ValidationError(f"Unknown base unit: {base_unit}") from exc

        existing_index = None
        if ingredient_id is not None:
            existing_index = next(
                (
                    index
                    for index, item in enumerate(self.data.ingredients)
                    if item.id == ingredient_id
                ),
                None,
            )
            if existing_index is None:
                raise ValidationError(f"Unknown ingredient: {ingredient_id}")

        ingredient = Ingredient(
            id=ingredient_id or _new_id("ingredient"),
            name=name.strip(),
            category=category,
            calories=calories,
            base_unit=unit,
            protein=protein or None,
            carbs=carbs or None,
            fat=fat or None,
            created_at=(
                self.data.ingredients[existing_index].created_at
                if existing_index is not None
                else _now()
            ),
        )
        if existing_index is None:
            self.data.ingredients.append(ingredient)
        else:
            self.data.ingredients[existing_index] = ingredient
        self.save()
        _logger.info("Ingredient saved: %s", ingredient.name)
        return ingredient

    def delete_ingredient(self, ingredient_id: str) -> None:
        """Delete an ingredient; composed entries keep their snapshots."""
        self.data.ingredients = [
            item for item in self.data.ingredients if item.id != ingredient_id
        ]
        self.save()

    # Catalog

    def catalog(self) -> list[CatalogEntry]:
        """Return built-in and custom foods as one catalog."""
        return build_catalog(COMMON_FOODS, self.data.custom_foods)

    def search_foods(self, query: str, limit: int = 8) -> list[CatalogEntry]:
        """Return autocomplete suggestions for a food name."""
        return search_catalog(self.catalog(), query, limit)

    # Food entries

    def log_food(  # noqa: PLR0913
        self,
        name: str,
        meal: Meal | str,
        quantity: float,
        unit: str,
        calories_per_unit: float,
        day: str,
        save_to_catalog: bool = False,
    ) -> FoodEntry:
        """Log a simple food serving for the current profile.

        With ``save_to_catalog`` a food missing from the catalog is also saved
        as a custom food for later autocomplete.
        """
        profile = self.require_profile()
        name = name.strip()
        if not name:
            raise ValidationError("Food name is required")
        if not _is_positive(quantity):
            raise ValidationError("Quantity must be greater than 0")
        if not _is_positive(calories_per_unit):
            raise ValidationError("Calories per unit must be greater than 0")

        if save_to_catalog and not is_duplicate_food(self.catalog(), name):
            self.data.custom_foods.append(
                CustomFood(
                    id=_new_id("custom"),
                    name=name,
                    calories=calories_per_unit,
                    unit=unit,
                    serving_size=quantity,
                    created_at=_now(),
                )
            )
            _logger.info("New food saved to catalog: %s", name)

        entry = FoodEntry(
            id=_new_id("food"),
            name=name,
            meal=_meal_tag(meal),
            quantity=quantity,
            unit=unit,
            calories_per_unit=calories_per_unit,
            total_calories=round_half_up(quantity * calories_per_unit),
            date=day,
            timestamp=_now(),
        )
        add_food_entry(self.data.food_entries, profile.id, day, entry)
        self.save()
        _logger.info("Food entry added: %s", name)
        return entry

    def log_composed_food(
        self,
        name: str,
        meal: Meal | str,
        portions: Sequence[tuple[str, float]],
        day: str,
    ) -> FoodEntry:
        """Log a custom food built from ``(ingredient_id, amount)`` pairs."""
        profile = self.require_profile()
        name = name.strip()
        if not name:
            raise ValidationError("Food name is required")
        snapshots = []
        for ingredient_id, amount in portions:
            ingredient = self.data.find_ingredient(ingredient_id)
            if ingredient is None:
                raise ValidationError(f"Unknown ingredient: {ingredient_id}")
            snapshots.append(build_portion(ingredient, amount))
        entry = compose_food(
            name,
            _meal_tag(meal),
            snapshots,
            day=day,
            entry_id=_new_id("food"),
            timestamp=_now(),
        )
        add_food_entry(self.data.food_entries, profile.id, day, entry)
        self.save()
        _logger.info("Custom food added: %s", name)
        return entry

    def delete_food_entry(self, day: str, entry_id: str) -> int:
        """Remove a food entry from the current profile's day."""
        profile = self.require_profile()
        removed = remove_food_entry(self.data.food_entries, profile.id, day, entry_id)
        if removed:
            self.save()
            _logger.info("Food entry deleted: %s", entry_id)
        return removed

    def food_entries(self, day: str) -> list[FoodEntry]:
        """Return the current profile's food entries for a day."""
        return entries_for_day(self.data.food_entries, self.require_profile().id, day)

    # Exercise entries

    def log_exercise(  # noqa: PLR0913
        self,
        name: str,
        duration: int,
        day: str,
        met: float | None = None,
        calories_burned: int | None = None,
    ) -> ExerciseEntry:
        """Log an exercise for the current profile.

        A built-in exercise name supplies its MET value when ``met`` is not
        given; calories are estimated unless provided.
        """
        profile = self.require_profile()
        name = name.strip()
        if not name:
            raise ValidationError("Exercise name is required")
        if duration <= 0:
            raise ValidationError("Duration must be greater than 0")
        if calories_burned is not None and calories_burned < 0:
            raise ValidationError("Calories burned cannot be negative")
        if met is not None and (not math.isfinite(met) or met < 0):
            raise ValidationError("MET value must be a non-negative number")
        if met is None:
            preset = find_exercise_preset(name)
            met = preset.met if preset else 0
        entry = ExerciseEntry(
            id=_new_id("exercise"),
            name=name,
            duration=duration,
            calories_burned=estimate_exercise_calories(
                profile.weight, duration, met=met, manual=calories_burned
            ),
            met=met,
            date=day,
            timestamp=_now(),
        )
        add_exercise_entry(self.data.exercise_entries, profile.id, day, entry)
        self.save()
        _logger.info("Exercise entry added: %s", name)
        return entry

    def delete_exercise_entry(self, day: str, entry_id: str) -> int:
        """Remove an exercise entry from the current profile's day."""
        profile = self.require_profile()
        removed = remove_exercise_entry(
            self.data.exercise_entries, profile.id, day, entry_id
        )
        if removed:
            self.save()
            _logger.info("Exercise entry deleted: %s", entry_id)
        return removed

    def exercise_entries(self, day: str) -> list[ExerciseEntry]:
        """Return the current profile's exercise entries for a day."""
        return entries_for_day(
            self.data.exercise_entries, self.require_profile().id, day
        )

    # Summaries

    def daily_summary(self, day: str) -> DailySummary:
        """Return BMR, consumption, expenditure and net for a day."""
        return daily_summary(self.data, self.require_profile(), day)

    def trend(self, end_day: date, days: int) -> TrendSummary:
        """Return the net energy trend for a trailing window."""
        if days < 1:
            raise ValidationError("Window must cover at least one day")
        return energy_trend(self.data, self.require_profile(), end_day, days)


@dataclass
class TrackerService:
    """Opens tracker sessions, loading or initializing user documents."""

    repository: UserDataRepository
    cache: Cache[TrackerSession]
    ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS

    def open(self, user_id: str) -> TrackerSession:
        """Return the live session for a user, loading it when needed."""
        cached = self.cache.get(user_id)
        if cached is not None:
            return cached
        data = self.repository.load_user_data(user_id)
        session = TrackerSession(
            user_id=user_id,
            data=data if data is not None else UserData(),
            repository=self.repository,
        )
        if data is None:
            _logger.info("Initializing document for new user: %s", user_id)
            session.save()
        self.cache.set(user_id, session, self.ttl_seconds)
        return session

    def close(self, user_id: str) -> None:
        """Forget a user's live session."""
        self.cache.pop(user_id)


def _meal_tag(meal: Meal | str) -> str:
    return meal.value if isinstance(meal, Meal) else meal


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _validated_profile_fields(  # noqa: PLR0913
    name: str,
    gender: Gender | str,
    age: int,
    weight: float,
    height: int,
    activity_level: str | None,
) -> dict[str, object]:
    if not name.strip():
        raise ValidationError("Profile name is required")
    try:
        resolved_gender = Gender(gender)
    except ValueError as exc:
        raise ValidationError(f"Unknown gender: {gender}") from exc
    if not _is_positive(age):
        raise ValidationError("Age must be a positive number of years")
    if not _is_positive(weight):
        raise ValidationError("Weight must be positive")
    if not _is_positive(height):
        raise ValidationError("Height must be positive")
    return {
        "name": name.strip(),
        "gender": resolved_gender,
        "age": age,
        "weight": weight,
        "height": height,
        "activity_level": activity_level or None,
    }
