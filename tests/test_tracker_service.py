"""Tests for the tracker controller."""

from datetime import date

import pytest

from calorie_ledger.domain.entries import Meal
from calorie_ledger.domain.errors import PersistenceError, ValidationError
from calorie_ledger.domain.ingredients import BaseUnit
from calorie_ledger.domain.profiles import ActivityLevel, Gender
from calorie_ledger.services.tracker import TrackerService, TrackerSession
from tests.conftest import InMemoryUserDataRepository

DAY = "2024-05-01"


def _with_profile(session: TrackerSession, weight: float = 70) -> str:
    profile = session.create_profile(
        name="Alex", gender=Gender.MALE, age=30, weight=weight, height=175
    )
    return profile.id


def test_open_initializes_and_saves_new_user(
    tracker_service: TrackerService, repository: InMemoryUserDataRepository
) -> None:
    session = tracker_service.open("new-user")

    assert session.data.profiles == []
    assert "new-user" in repository.documents
    assert repository.save_count == 1


def test_open_reuses_cached_session(
    tracker_service: TrackerService, repository: InMemoryUserDataRepository
) -> None:
    first = tracker_service.open("user-1")
    second = tracker_service.open("user-1")

    assert first is second
    assert repository.save_count == 1


def test_open_loads_existing_document(
    repository: InMemoryUserDataRepository,
) -> None:
    writer = TrackerService(repository=repository, cache=_NoCache())
    _with_profile(writer.open("user-1"))

    reader = TrackerService(repository=repository, cache=_NoCache())
    session = reader.open("user-1")

    assert [profile.name for profile in session.data.profiles] == ["Alex"]
    assert session.current_profile is not None


def test_create_profile_selects_it(session: TrackerSession) -> None:
    profile_id = _with_profile(session)

    assert session.data.current_profile_id == profile_id
    assert session.current_profile is not None
    assert session.current_profile.created_at


def test_create_profile_rejects_invalid_input(
    session: TrackerSession, repository: InMemoryUserDataRepository
) -> None:
    with pytest.raises(ValidationError):
        session.create_profile(name="", gender="male", age=30, weight=70, height=175)
    with pytest.raises(ValidationError):
        session.create_profile(name="Sam", gender="other", age=30, weight=70, height=175)
    with pytest.raises(ValidationError):
        session.create_profile(name="Sam", gender="female", age=0, weight=70, height=175)

    assert session.data.profiles == []
    assert repository.save_count == 0


@pytest.mark.parametrize("field", ["age", "weight", "height"])
@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_create_profile_rejects_non_finite_numbers(
    session: TrackerSession,
    repository: InMemoryUserDataRepository,
    field: str,
    value: float,
) -> None:
    fields: dict[str, object] = {"age": 30, "weight": 70, "height": 175}
    fields[field] = value

    with pytest.raises(ValidationError):
        session.create_profile(name="Sam", gender="female", **fields)

    assert session.data.profiles == []
    assert repository.save_count == 0


def test_update_profile_keeps_identity(session: TrackerSession) -> None:
    profile_id = _with_profile(session)
    created_at = session.current_profile.created_at

    updated = session.update_profile(
        profile_id,
        name="Alex",
        gender="male",
        age=31,
        weight=68,
        height=175,
        activity_level=ActivityLevel.VERY_ACTIVE.value,
    )

    assert updated.id == profile_id
    assert updated.created_at == created_at
    assert updated.age == 31
    assert session.current_profile == updated


def test_switch_profile_requires_known_id(session: TrackerSession) -> None:
    first = _with_profile(session)
    _with_profile(session)

    session.switch_profile(first)

    assert session.data.current_profile_id == first
    with pytest.raises(ValidationError):
        session.switch_profile("profile_missing")


def test_delete_profile_cascades_entries(session: TrackerSession) -> None:
    profile_id = _with_profile(session)
    session.log_food("Apple", Meal.SNACK, 2, "piece", 95, DAY)
    session.log_exercise("Yoga", 60, DAY)

    session.delete_profile(profile_id)

    assert session.current_profile is None
    assert profile_id not in session.data.food_entries
    assert profile_id not in session.data.exercise_entries
    with pytest.raises(ValidationError, match="No profile selected"):
        session.daily_summary(DAY)


def test_log_food_requires_profile(session: TrackerSession) -> None:
    with pytest.raises(ValidationError, match="No profile selected"):
        session.log_food("Apple", Meal.SNACK, 1, "piece", 95, DAY)


def test_log_food_rounds_total(session: TrackerSession) -> None:
    _with_profile(session)

    entry = session.log_food("Rice", Meal.LUNCH, 1.5, "cup", 205, DAY)

    assert entry.total_calories == 308
    assert entry.meal == "Lunch"
    assert not entry.is_composed
    assert session.food_entries(DAY) == [entry]


@pytest.mark.parametrize(
    ("name", "quantity", "calories"),
    [
        ("", 1, 100),
        ("Rice", 0, 100),
        ("Rice", 1, 0),
        ("Rice", float("inf"), 100),
        ("Rice", float("nan"), 100),
        ("Rice", 1, float("nan")),
    ],
)
def test_log_food_validates_fields(
    session: TrackerSession, name: str, quantity: float, calories: float
) -> None:
    _with_profile(session)

    with pytest.raises(ValidationError):
        session.log_food(name, Meal.LUNCH, quantity, "cup", calories, DAY)

    assert session.food_entries(DAY) == []


def test_log_food_can_save_new_food_to_catalog(session: TrackerSession) -> None:
    _with_profile(session)

    session.log_food("Lentil soup", Meal.DINNER, 1, "bowl", 230, DAY, True)
    session.log_food("lentil SOUP", Meal.DINNER, 1, "bowl", 230, DAY, True)
    session.log_food("Greek yogurt", Meal.SNACK, 1, "100g", 100, DAY, True)

    assert [food.name for food in session.data.custom_foods] == ["Lentil soup"]
    assert session.search_foods("lentil")[0].is_custom


def test_log_composed_food_from_saved_ingredients(session: TrackerSession) -> None:
    _with_profile(session)
    oats = session.save_ingredient("Oats", "Grains", 120, BaseUnit.PER_100G)
    milk = session.save_ingredient("Milk", "Dairy", 37, "100ml")

    entry = session.log_composed_food(
        "Porridge", Meal.BREAKFAST, [(oats.id, 50), (milk.id, 50)], DAY
    )

    assert [portion.calories for portion in entry.ingredients] == [60, 18.5]
    assert [portion.unit for portion in entry.ingredients] == ["g", "ml"]
    assert entry.total_calories == 79
    assert session.daily_summary(DAY).meals.breakfast == 79


def test_log_composed_food_rejects_bad_portions(session: TrackerSession) -> None:
    _with_profile(session)
    oats = session.save_ingredient("Oats", "Grains", 120, BaseUnit.PER_100G)

    with pytest.raises(ValidationError, match="empty composition"):
        session.log_composed_food("Nothing", Meal.LUNCH, [], DAY)
    with pytest.raises(ValidationError):
        session.log_composed_food("Oats", Meal.LUNCH, [(oats.id, 0)], DAY)
    with pytest.raises(ValidationError):
        session.log_composed_food("Oats", Meal.LUNCH, [("missing", 10)], DAY)

    assert session.food_entries(DAY) == []


def test_save_ingredient_updates_in_place(session: TrackerSession) -> None:
    created = session.save_ingredient("Oats", "Grains", 120, "100g", protein=13)

    updated = session.save_ingredient(
        "Rolled oats", "Grains", 380, "100g", ingredient_id=created.id
    )

    assert len(session.data.ingredients) == 1
    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.calories == 380
    with pytest.raises(ValidationError):
        session.save_ingredient("Oats", "Grains", 120, "per cup")


@pytest.mark.parametrize("calories", [float("nan"), float("inf"), -1])
def test_save_ingredient_rejects_invalid_calories(
    session: TrackerSession, calories: float
) -> None:
    with pytest.raises(ValidationError):
        session.save_ingredient("Oats", "Grains", calories, "100g")

    assert session.data.ingredients == []


def test_delete_ingredient_keeps_composed_snapshots(session: TrackerSession) -> None:
    _with_profile(session)
    oats = session.save_ingredient("Oats", "Grains", 120, "100g")
    session.log_composed_food("Oats", Meal.BREAKFAST, [(oats.id, 100)], DAY)

    session.delete_ingredient(oats.id)

    assert session.data.ingredients == []
    assert session.food_entries(DAY)[0].ingredients[0].name == "Oats"


def test_log_exercise_uses_preset_met(session: TrackerSession) -> None:
    _with_profile(session, weight=70)

    entry = session.log_exercise("Running (6 mph)", 30, DAY)

    assert entry.met == 9.8
    assert entry.calories_burned == 343


def test_log_exercise_manual_and_fallback(session: TrackerSession) -> None:
    _with_profile(session)

    manual = session.log_exercise("Hiking", 90, DAY, calories_burned=500)
    fallback = session.log_exercise("Gardening", 40, DAY)

    assert manual.calories_burned == 500
    assert fallback.met == 0
    assert fallback.calories_burned == 200
    assert session.daily_summary(DAY).burned == 700


def test_log_exercise_requires_positive_duration(session: TrackerSession) -> None:
    _with_profile(session)

    with pytest.raises(ValidationError):
        session.log_exercise("Yoga", 0, DAY)
    with pytest.raises(ValidationError):
        session.log_exercise("Yoga", 30, DAY, met=float("nan"))

    assert session.exercise_entries(DAY) == []


def test_delete_entries(session: TrackerSession) -> None:
    _with_profile(session)
    food = session.log_food("Apple", Meal.SNACK, 1, "piece", 95, DAY)
    exercise = session.log_exercise("Yoga", 30, DAY)

    assert session.delete_food_entry(DAY, food.id) == 1
    assert session.delete_exercise_entry(DAY, exercise.id) == 1
    assert session.delete_food_entry(DAY, food.id) == 0
    assert session.daily_summary(DAY).consumed == 0


def test_failed_save_keeps_in_memory_change(
    session: TrackerSession, repository: InMemoryUserDataRepository
) -> None:
    _with_profile(session)
    repository.fail_saves = True

    with pytest.raises(PersistenceError):
        session.log_food("Apple", Meal.SNACK, 1, "piece", 95, DAY)

    assert len(session.food_entries(DAY)) == 1

    repository.fail_saves = False
    session.save()

    stored = repository.load_user_data(session.user_id)
    assert stored is not None
    assert len(stored.food_entries[session.current_profile.id][DAY]) == 1


def test_trend_uses_current_profile(session: TrackerSession) -> None:
    _with_profile(session)
    session.log_food("Pizza", Meal.DINNER, 1, "pizza", 2400, "2024-05-03")

    trend = session.trend(date(2024, 5, 7), 7)

    assert len(trend.points) == 1
    assert trend.label == "Surplus"
    with pytest.raises(ValidationError):
        session.trend(date(2024, 5, 7), 0)


class _NoCache:
    def get(self, key: str) -> None:
        return None

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        return None

    def pop(self, key: str) -> None:
        return None
