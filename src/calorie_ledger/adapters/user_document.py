"""Codec between ``UserData`` and the stored JSON document.

Field names follow the document layout shared with the web client
(camelCase keys, ledgers keyed by profile id then ISO date).
"""

from calorie_ledger.domain.catalog import CustomFood
from calorie_ledger.domain.entries import ExerciseEntry, FoodEntry
from calorie_ledger.domain.ingredients import BaseUnit, Ingredient, IngredientPortion
from calorie_ledger.domain.profiles import Gender, Profile
from calorie_ledger.domain.user_data import ExerciseLedger, FoodLedger, UserData
from calorie_ledger.services.composer import COMPOSED_UNIT

DOCUMENT_FIELDS = (
    "profiles",
    "currentProfileId",
    "foodEntries",
    "exerciseEntries",
    "ingredients",
    "customFoods",
)


def encode_user_data(data: UserData) -> dict[str, object]:
    """Return the JSON-ready document for a user."""
    return {
        "profiles": [_encode_profile(profile) for profile in data.profiles],
        "currentProfileId": data.current_profile_id,
        "foodEntries": {
            profile_id: {
                day: [_encode_food_entry(entry) for entry in entries]
                for day, entries in days.items()
            }
            for profile_id, days in data.food_entries.items()
        },
        "exerciseEntries": {
            profile_id: {
                day: [_encode_exercise_entry(entry) for entry in entries]
                for day, entries in days.items()
            }
            for profile_id, days in data.exercise_entries.items()
        },
        "ingredients": [_encode_ingredient(item) for item in data.ingredients],
        "customFoods": [_encode_custom_food(food) for food in data.custom_foods],
    }


def decode_user_data(document: dict[str, object]) -> UserData:
    """Build ``UserData`` from a stored document; missing fields become empty."""
    food_entries: FoodLedger = {
        str(profile_id): {
            str(day): [_decode_food_entry(row, str(day)) for row in rows or []]
            for day, rows in (days or {}).items()
        }
        for profile_id, days in (document.get("foodEntries") or {}).items()
    }
    exercise_entries: ExerciseLedger = {
        str(profile_id): {
            str(day): [_decode_exercise_entry(row, str(day)) for row in rows or []]
            for day, rows in (days or {}).items()
        }
        for profile_id, days in (document.get("exerciseEntries") or {}).items()
    }
    current_profile_id = document.get("currentProfileId")
    return UserData(
        profiles=[_decode_profile(row) for row in document.get("profiles") or []],
        current_profile_id=str(current_profile_id) if current_profile_id else None,
        food_entries=food_entries,
        exercise_entries=exercise_entries,
        ingredients=[
            _decode_ingredient(row) for row in document.get("ingredients") or []
        ],
        custom_foods=[
            _decode_custom_food(row) for row in document.get("customFoods") or []
        ],
    )


def _encode_profile(profile: Profile) -> dict[str, object]:
    row: dict[str, object] = {
        "id": profile.id,
        "name": profile.name,
        "gender": profile.gender.value,
        "age": profile.age,
        "weight": profile.weight,
        "height": profile.height,
        "createdAt": profile.created_at,
    }
    if profile.activity_level is not None:
        row["activityLevel"] = profile.activity_level
    return row


def _decode_profile(row: dict[str, object]) -> Profile:
    # The BMR equation treats every non-male value as female.
    gender = Gender.MALE if row.get("gender") == Gender.MALE.value else Gender.FEMALE
    activity_level = row.get("activityLevel")
    return Profile(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        gender=gender,
        age=int(row.get("age", 0)),
        weight=float(row.get("weight", 0)),
        height=int(row.get("height", 0)),
        activity_level=str(activity_level) if activity_level else None,
        created_at=row.get("createdAt"),
    )


def _encode_food_entry(entry: FoodEntry) -> dict[str, object]:
    row: dict[str, object] = {
        "id": entry.id,
        "name": entry.name,
        "meal": entry.meal,
        "quantity": entry.quantity,
        "unit": entry.unit,
        "caloriesPerUnit": entry.calories_per_unit,
        "totalCalories": entry.total_calories,
        "date": entry.date,
        "timestamp": entry.timestamp,
        "isCustomFood": entry.is_custom_food,
    }
    if entry.is_custom_food:
        row["ingredients"] = [
            {
                "name": portion.name,
                "amount": portion.amount,
                "unit": portion.unit,
                "calories": portion.calories,
            }
            for portion in entry.ingredients
        ]
    return row


def _decode_food_entry(row: dict[str, object], day: str) -> FoodEntry:
    is_custom_food = bool(row.get("isCustomFood", False))
    return FoodEntry(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        meal=str(row.get("meal", "")),
        quantity=float(row.get("quantity", 1)),
        unit=str(row.get("unit") or (COMPOSED_UNIT if is_custom_food else "")),
        calories_per_unit=float(row.get("caloriesPerUnit", 0)),
        total_calories=int(row.get("totalCalories", 0)),
        date=str(row.get("date") or day),
        timestamp=str(row.get("timestamp", "")),
        is_custom_food=is_custom_food,
        ingredients=tuple(
            IngredientPortion(
                name=str(portion.get("name", "")),
                amount=float(portion.get("amount", 0)),
                unit=str(portion.get("unit", "")),
                calories=float(portion.get("calories", 0)),
            )
            for portion in row.get("ingredients") or []
        ),
    )


def _encode_exercise_entry(entry: ExerciseEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "name": entry.name,
        "duration": entry.duration,
        "caloriesBurned": entry.calories_burned,
        "met": entry.met,
        "date": entry.date,
        "timestamp": entry.timestamp,
    }


def _decode_exercise_entry(row: dict[str, object], day: str) -> ExerciseEntry:
    return ExerciseEntry(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        duration=int(row.get("duration", 0)),
        calories_burned=int(row.get("caloriesBurned", 0)),
        met=float(row.get("met") or 0),
        date=str(row.get("date") or day),
        timestamp=str(row.get("timestamp", "")),
    )


def _encode_ingredient(ingredient: Ingredient) -> dict[str, object]:
    return {
        "id": ingredient.id,
        "name": ingredient.name,
        "category": ingredient.category,
        "calories": ingredient.calories,
        "baseUnit": ingredient.base_unit.value,
        "protein": ingredient.protein,
        "carbs": ingredient.carbs,
        "fat": ingredient.fat,
        "createdAt": ingredient.created_at,
    }


def _decode_ingredient(row: dict[str, object]) -> Ingredient:
    try:
        base_unit = BaseUnit(row.get("baseUnit") or BaseUnit.PER_100G.value)
    except ValueError:
        base_unit = BaseUnit.PER_100G
    return Ingredient(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        category=str(row.get("category") or ""),
        calories=float(row.get("calories", 0)),
        base_unit=base_unit,
        protein=_optional_float(row.get("protein")),
        carbs=_optional_float(row.get("carbs")),
        fat=_optional_float(row.get("fat")),
        created_at=row.get("createdAt"),
    )


def _encode_custom_food(food: CustomFood) -> dict[str, object]:
    return {
        "id": food.id,
        "name": food.name,
        "calories": food.calories,
        "unit": food.unit,
        "servingSize": food.serving_size,
        "createdAt": food.created_at,
    }


def _decode_custom_food(row: dict[str, object]) -> CustomFood:
    return CustomFood(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        calories=float(row.get("calories", 0)),
        unit=str(row.get("unit", "")),
        serving_size=float(row.get("servingSize") or 1),
        created_at=row.get("createdAt"),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
