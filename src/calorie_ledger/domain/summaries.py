"""Derived values shown on dashboards and charts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MealTotals:
    """Calories consumed per meal for a day."""

    breakfast: float = 0
    lunch: float = 0
    dinner: float = 0
    snack: float = 0


@dataclass(frozen=True)
class DailySummary:
    """Energy balance for a profile on a single day."""

    day: str
    bmr: int
    tdee: int
    consumed: float
    burned: float
    net: float
    meals: MealTotals


@dataclass(frozen=True)
class TrendPoint:
    """A day that contributed to a trend window."""

    day: str
    consumed: float
    burned: float
    net: float


@dataclass(frozen=True)
class TrendSummary:
    """Net energy over a trailing window of days."""

    start: str
    end: str
    days: int
    points: list[TrendPoint]
    total_net: float
    label: str
