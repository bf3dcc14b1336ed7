"""Ledger endpoints: profiles, ingredients, foods, entries and summaries."""

from __future__ import annotations

from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends, Query

from calorie_ledger.api.auth import current_session
from calorie_ledger.api.models import (
    ComposedFoodPayload,
    ExercisePayload,
    FoodEntryPayload,
    IngredientPayload,
    ProfilePayload,
)
from calorie_ledger.domain.catalog import COMMON_EXERCISES
from calorie_ledger.domain.errors import ValidationError
from calorie_ledger.services.catalog import DEFAULT_SEARCH_LIMIT
from calorie_ledger.services.tracker import TrackerSession

TREND_WINDOWS = (7, 30)

router = APIRouter(tags=["ledger"])


def _today() -> date:
    return datetime.now(tz=UTC).date()


def _day(value: date | None) -> str:
    return (value or _today()).isoformat()


@router.get("/profiles")
async def list_profiles(
    session: TrackerSession = Depends(current_session),
) -> dict[str, object]:
    """Return all profiles and the selected one."""
    return {
        "profiles": session.data.profiles,
        "current_profile_id": session.data.current_profile_id,
    }


@router.post("/profiles")
async def create_profile(
    payload: ProfilePayload, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Create a profile and select it."""
    profile = session.create_profile(
        name=payload.name,
        gender=payload.gender,
        age=payload.age,
        weight=payload.weight,
        height=payload.height,
        activity_level=payload.activity_level.value if payload.activity_level else None,
    )
    return {"profile": profile}


@router.put("/profiles/{profile_id}")
async def update_profile(
    profile_id: str,
    payload: ProfilePayload,
    session: TrackerSession = Depends(current_session),
) -> dict[str, object]:
    """Update a profile's details."""
    profile = session.update_profile(
        profile_id,
        name=payload.name,
        gender=payload.gender,
        age=payload.age,
        weight=payload.weight,
        height=payload.height,
        activity_level=payload.activity_level.value if payload.activity_level else None,
    )
    return {"profile": profile}


@router.post("/profiles/{profile_id}/select")
async def select_profile(
    profile_id: str, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Make a profile current."""
    return {"profile": session.switch_profile(profile_id)}


@router.delete("/profiles/{profile_id}")
async def delete_profile(
    profile_id: str, session: TrackerSession = Depends(current_session)
) -> dict[str, str]:
    """Delete a profile and every entry it owns."""
    session.delete_profile(profile_id)
    return {"status": "ok"}


@router.get("/ingredients")
async def list_ingredients(
    session: TrackerSession = Depends(current_session),
) -> dict[str, object]:
    """Return saved ingredients."""
    return {"ingredients": session.data.ingredients}


@router.post("/ingredients")
async def create_ingredient(
    payload: IngredientPayload, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Save a new ingredient."""
    return {"ingredient": session.save_ingredient(**payload.model_dump())}


@router.put("/ingredients/{ingredient_id}")
async def update_ingredient(
    ingredient_id: str,
    payload: IngredientPayload,
    session: TrackerSession = Depends(current_session),
) -> dict[str, object]:
    """Replace an ingredient definition."""
    ingredient = session.save_ingredient(
        **payload.model_dump(), ingredient_id=ingredient_id
    )
    return {"ingredient": ingredient}


@router.delete("/ingredients/{ingredient_id}")
async def delete_ingredient(
    ingredient_id: str, session: TrackerSession = Depends(current_session)
) -> dict[str, str]:
    """Delete an ingredient."""
    session.delete_ingredient(ingredient_id)
    return {"status": "ok"}


@router.get("/foods/search")
async def search_foods(
    q: str = "",
    limit: int = Query(DEFAULT_SEARCH_LIMIT, ge=1),
    session: TrackerSession = Depends(current_session),
) -> dict[str, object]:
    """Return autocomplete suggestions from the food catalog."""
    return {"results": session.search_foods(q, limit)}


@router.get("/entries/food")
async def list_food_entries(
    day: date | None = None, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Return the selected profile's food entries for a day."""
    resolved = _day(day)
    return {"day": resolved, "entries": session.food_entries(resolved)}


@router.post("/entries/food")
async def log_food(
    payload: FoodEntryPayload, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Log a simple food serving."""
    entry = session.log_food(
        name=payload.name,
        meal=payload.meal,
        quantity=payload.quantity,
        unit=payload.unit,
        calories_per_unit=payload.calories_per_unit,
        day=payload.day.isoformat(),
        save_to_catalog=payload.save_to_catalog,
    )
    return {"entry": entry}


@router.post("/entries/food/composed")
async def log_composed_food(
    payload: ComposedFoodPayload, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Log a custom food built from ingredients."""
    entry = session.log_composed_food(
        name=payload.name,
        meal=payload.meal,
        portions=[(item.ingredient_id, item.amount) for item in payload.portions],
        day=payload.day.isoformat(),
    )
    return {"entry": entry}


@router.delete("/entries/food/{day}/{entry_id}")
async def delete_food_entry(
    day: date, entry_id: str, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Delete a food entry."""
    return {"removed": session.delete_food_entry(day.isoformat(), entry_id)}


@router.get("/exercises/presets")
async def exercise_presets() -> dict[str, object]:
    """Return built-in exercises and their MET values."""
    return {"presets": list(COMMON_EXERCISES)}


@router.get("/entries/exercise")
async def list_exercise_entries(
    day: date | None = None, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Return the selected profile's exercise entries for a day."""
    resolved = _day(day)
    return {"day": resolved, "entries": session.exercise_entries(resolved)}


@router.post("/entries/exercise")
async def log_exercise(
    payload: ExercisePayload, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Log an exercise session."""
    entry = session.log_exercise(
        name=payload.name,
        duration=payload.duration,
        day=payload.day.isoformat(),
        met=payload.met,
        calories_burned=payload.calories_burned,
    )
    return {"entry": entry}


@router.delete("/entries/exercise/{day}/{entry_id}")
async def delete_exercise_entry(
    day: date, entry_id: str, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Delete an exercise entry."""
    return {"removed": session.delete_exercise_entry(day.isoformat(), entry_id)}


@router.get("/summary/daily")
async def daily_summary(
    day: date | None = None, session: TrackerSession = Depends(current_session)
) -> dict[str, object]:
    """Return the dashboard summary for a day."""
    return {"summary": session.daily_summary(_day(day))}


@router.get("/summary/trend")
async def trend_summary(
    end: date | None = None,
    days: int = 7,
    session: TrackerSession = Depends(current_session),
) -> dict[str, object]:
    """Return the weekly or monthly net energy trend."""
    if days not in TREND_WINDOWS:
        raise ValidationError("Trend window must be 7 or 30 days")
    return {"trend": session.trend(end or _today(), days)}
