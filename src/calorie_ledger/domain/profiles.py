"""Domain models for user profiles."""

from dataclasses import dataclass
from enum import Enum


class Gender(str, Enum):
    """Gender used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Named activity levels used to scale BMR into TDEE."""

    SEDENTARY = "Sedentary"
    LIGHTLY_ACTIVE = "Lightly active"
    MODERATELY_ACTIVE = "Moderately active"
    VERY_ACTIVE = "Very active"
    SUPER_ACTIVE = "Super active"


ACTIVITY_MULTIPLIERS: dict[str, float] = {
    ActivityLevel.SEDENTARY.value: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE.value: 1.375,
    ActivityLevel.MODERATELY_ACTIVE.value: 1.55,
    ActivityLevel.VERY_ACTIVE.value: 1.725,
    ActivityLevel.SUPER_ACTIVE.value: 1.9,
}

DEFAULT_ACTIVITY_MULTIPLIER = 1.2


@dataclass(frozen=True)
class Profile:
    """A person whose food and exercise are tracked."""

    id: str
    name: str
    gender: Gender
    age: int
    weight: float
    height: int
    activity_level: str | None = None
    created_at: str | None = None
