"""Energy model: BMR, TDEE, exercise estimates and net balance."""

from datetime import date, timedelta

from calorie_ledger.domain.profiles import (
    ACTIVITY_MULTIPLIERS,
    DEFAULT_ACTIVITY_MULTIPLIER,
    Gender,
    Profile,
)
from calorie_ledger.domain.rounding import round_half_up
from calorie_ledger.domain.summaries import DailySummary, TrendPoint, TrendSummary
from calorie_ledger.domain.user_data import UserData
from calorie_ledger.services.ledger import meal_totals, total_burned, total_consumed

DEFAULT_CALORIES_PER_MINUTE = 5
SURPLUS = "Surplus"
DEFICIT = "Deficit"


def bmr(profile: Profile) -> float:
    """Return basal metabolic rate using the Mifflin-St Jeor equation.

    Men:   10 * weight + 6.25 * height - 5 * age + 5
    Other: 10 * weight + 6.25 * height - 5 * age - 161
    """
    base = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    if profile.gender == Gender.MALE:
        return base + 5
    return base - 161


def activity_multiplier(activity_level: str | None) -> float:
    """Return the TDEE multiplier for an activity level, 1.2 when unknown."""
    if activity_level is None:
        return DEFAULT_ACTIVITY_MULTIPLIER
    return ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)


def tdee(profile: Profile) -> float:
    """Return total daily energy expenditure."""
    return bmr(profile) * activity_multiplier(profile.activity_level)


def net_energy(profile: Profile, consumed: float, burned: float) -> float:
    """Return the day's surplus (positive) or deficit (negative).

    Exercise counts as expenditure on top of the rounded BMR.
    """
    return consumed - burned - round_half_up(bmr(profile))


def estimate_exercise_calories(
    weight: float,
    duration: float,
    met: float = 0,
    manual: int | None = None,
) -> int:
    """Return calories burned, preferring a manual value over estimates."""
    if manual is not None:
        return manual
    if met > 0:
        return round_half_up(met * weight * duration / 60)
    return round_half_up(duration * DEFAULT_CALORIES_PER_MINUTE)


def daily_summary(data: UserData, profile: Profile, day: str) -> DailySummary:
    """Return the dashboard figures for a profile on a day."""
    consumed = total_consumed(data.food_entries, profile.id, day)
    burned = total_burned(data.exercise_entries, profile.id, day)
    return DailySummary(
        day=day,
        bmr=round_half_up(bmr(profile)),
        tdee=round_half_up(tdee(profile)),
        consumed=consumed,
        burned=burned,
        net=net_energy(profile, consumed, burned),
        meals=meal_totals(data.food_entries, profile.id, day),
    )


def energy_trend(
    data: UserData, profile: Profile, end_day: date, days: int
) -> TrendSummary:
    """Return net energy for the trailing ``days`` ending at ``end_day``.

    Days with nothing consumed and nothing burned carry no data and are left
    out of both the points and the total.
    """
    if days < 1:
        raise ValueError("days must be positive")
    start_day = end_day - timedelta(days=days - 1)
    points: list[TrendPoint] = []
    for offset in range(days):
        day = (start_day + timedelta(days=offset)).isoformat()
        consumed = total_consumed(data.food_entries, profile.id, day)
        burned = total_burned(data.exercise_entries, profile.id, day)
        if consumed == 0 and burned == 0:
            continue
        points.append(
            TrendPoint(
                day=day,
                consumed=consumed,
                burned=burned,
                net=net_energy(profile, consumed, burned),
            )
        )
    total_net = sum(point.net for point in points)
    return TrendSummary(
        start=start_day.isoformat(),
        end=end_day.isoformat(),
        days=days,
        points=points,
        total_net=total_net,
        label=SURPLUS if total_net >= 0 else DEFICIT,
    )
