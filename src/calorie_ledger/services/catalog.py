"""Food catalog merging and autocomplete search."""

import re
from collections.abc import Iterable

from calorie_ledger.domain.catalog import CatalogEntry, CommonFood, CustomFood

DEFAULT_SEARCH_LIMIT = 8

_WHITESPACE = re.compile(r"\s+")


def common_food_id(food: CommonFood) -> str:
    """Return the synthetic catalog id for a built-in food."""
    return "common_" + _WHITESPACE.sub("_", food.name).lower()


def build_catalog(
    builtins: Iterable[CommonFood], custom_foods: Iterable[CustomFood]
) -> list[CatalogEntry]:
    """Merge built-in foods and custom foods into one catalog.

    Built-in foods come first, followed by custom foods in stored order.
    Name collisions are kept.
    """
    catalog = [
        CatalogEntry(
            id=common_food_id(food),
            name=food.name,
            calories=food.calories,
            unit=food.unit,
            serving_size=food.serving_size or 1,
            is_custom=False,
        )
        for food in builtins
    ]
    catalog.extend(
        CatalogEntry(
            id=food.id,
            name=food.name,
            calories=food.calories,
            unit=food.unit,
            serving_size=food.serving_size,
            is_custom=True,
        )
        for food in custom_foods
    )
    return catalog


def is_duplicate_food(catalog: Iterable[CatalogEntry], name: str) -> bool:
    """Return True when any catalog entry has this name, ignoring case."""
    wanted = name.lower()
    return any(entry.name.lower() == wanted for entry in catalog)


def search_catalog(
    catalog: Iterable[CatalogEntry], query: str, limit: int = DEFAULT_SEARCH_LIMIT
) -> list[CatalogEntry]:
    """Return entries whose name contains the query, in catalog order."""
    if not query.strip() or limit < 1:
        return []
    needle = query.lower()
    matches = [entry for entry in catalog if needle in entry.name.lower()]
    return matches[:limit]
