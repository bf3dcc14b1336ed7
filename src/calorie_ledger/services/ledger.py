"""Date-partitioned food and exercise ledgers."""

from typing import Protocol, TypeVar

from calorie_ledger.domain.entries import ExerciseEntry, FoodEntry, Meal
from calorie_ledger.domain.summaries import MealTotals
from calorie_ledger.domain.user_data import ExerciseLedger, FoodLedger, UserData


class _HasId(Protocol):
    id: str


_EntryT = TypeVar("_EntryT", bound=_HasId)


def _append(
    ledger: dict[str, dict[str, list[_EntryT]]],
    profile_id: str,
    day: str,
    entry: _EntryT,
) -> None:
    ledger.setdefault(profile_id, {}).setdefault(day, []).append(entry)


def _remove(
    ledger: dict[str, dict[str, list[_EntryT]]],
    profile_id: str,
    day: str,
    entry_id: str,
) -> int:
    entries = ledger.get(profile_id, {}).get(day)
    if entries is None:
        return 0
    kept = [entry for entry in entries if entry.id != entry_id]
    ledger[profile_id][day] = kept
    return len(entries) - len(kept)


def entries_for_day(
    ledger: dict[str, dict[str, list[_EntryT]]], profile_id: str, day: str
) -> list[_EntryT]:
    """Return a copy of the entries stored for a profile and day."""
    return list(ledger.get(profile_id, {}).get(day, []))


def add_food_entry(
    ledger: FoodLedger, profile_id: str, day: str, entry: FoodEntry
) -> None:
    """Append a food entry to the profile's day."""
    _append(ledger, profile_id, day, entry)


def remove_food_entry(
    ledger: FoodLedger, profile_id: str, day: str, entry_id: str
) -> int:
    """Remove every food entry with this id from the day.

    Returns the number of entries removed.
    """
    return _remove(ledger, profile_id, day, entry_id)


def add_exercise_entry(
    ledger: ExerciseLedger, profile_id: str, day: str, entry: ExerciseEntry
) -> None:
    """Append an exercise entry to the profile's day."""
    _append(ledger, profile_id, day, entry)


def remove_exercise_entry(
    ledger: ExerciseLedger, profile_id: str, day: str, entry_id: str
) -> int:
    """Remove every exercise entry with this id from the day."""
    return _remove(ledger, profile_id, day, entry_id)


def total_consumed(ledger: FoodLedger, profile_id: str, day: str) -> float:
    """Return calories eaten by a profile on a day, 0 when nothing is logged."""
    return sum(
        entry.total_calories for entry in ledger.get(profile_id, {}).get(day, [])
    )


def total_burned(ledger: ExerciseLedger, profile_id: str, day: str) -> float:
    """Return calories burned by a profile on a day, 0 when nothing is logged."""
    return sum(
        entry.calories_burned for entry in ledger.get(profile_id, {}).get(day, [])
    )


def meal_totals(ledger: FoodLedger, profile_id: str, day: str) -> MealTotals:
    """Return per-meal calories; entries with unknown meal tags are skipped."""
    sums = {meal.value: 0.0 for meal in Meal}
    for entry in ledger.get(profile_id, {}).get(day, []):
        if entry.meal in sums:
            sums[entry.meal] += entry.total_calories
    return MealTotals(
        breakfast=sums[Meal.BREAKFAST.value],
        lunch=sums[Meal.LUNCH.value],
        dinner=sums[Meal.DINNER.value],
        snack=sums[Meal.SNACK.value],
    )


def delete_profile_entries(data: UserData, profile_id: str) -> None:
    """Drop every food and exercise entry owned by a profile."""
    data.food_entries.pop(profile_id, None)
    data.exercise_entries.pop(profile_id, None)
