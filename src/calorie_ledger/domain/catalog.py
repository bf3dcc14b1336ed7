"""Domain models for the food catalog and exercise presets."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommonFood:
    """Built-in food with calories per serving."""

    name: str
    calories: float
    unit: str
    serving_size: float = 1


@dataclass(frozen=True)
class CustomFood:
    """User-saved food with calories per serving."""

    id: str
    name: str
    calories: float
    unit: str
    serving_size: float = 1
    created_at: str | None = None


@dataclass(frozen=True)
class CatalogEntry:
    """Searchable catalog record merged from built-in and custom foods."""

    id: str
    name: str
    calories: float
    unit: str
    serving_size: float
    is_custom: bool


@dataclass(frozen=True)
class ExercisePreset:
    """Built-in exercise with its MET value."""

    name: str
    met: float


COMMON_FOODS: tuple[CommonFood, ...] = (
    CommonFood("Apple (medium)", 95, "piece", 1),
    CommonFood("Banana (medium)", 105, "piece", 1),
    CommonFood("White Rice (cooked)", 206, "cup", 1),
    CommonFood("Chicken Breast (cooked)", 231, "100g", 100),
    CommonFood("Bread (white slice)", 79, "slice", 1),
    CommonFood("Egg (large)", 78, "piece", 1),
    CommonFood("Milk (1 cup)", 149, "cup", 1),
    CommonFood("Greek Yogurt", 100, "100g", 100),
    CommonFood("Almonds", 576, "100g", 100),
    CommonFood("Avocado", 234, "piece", 1),
)

COMMON_EXERCISES: tuple[ExercisePreset, ...] = (
    ExercisePreset("Walking (moderate)", 3.5),
    ExercisePreset("Running (6 mph)", 9.8),
    ExercisePreset("Cycling (moderate)", 8.0),
    ExercisePreset("Swimming", 8.3),
    ExercisePreset("Weight Training", 6.0),
    ExercisePreset("Yoga", 2.5),
    ExercisePreset("Basketball", 8.0),
    ExercisePreset("Tennis", 7.3),
)


def find_exercise_preset(name: str) -> ExercisePreset | None:
    """Return the built-in exercise with this exact name, if any."""
    for preset in COMMON_EXERCISES:
        if preset.name == name:
            return preset
    return None
