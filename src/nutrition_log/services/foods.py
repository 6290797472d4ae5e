"""Services for the food catalog."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from nutrition_log.domain.errors import NotFoundError, ValidationError
from nutrition_log.domain.foods import FoodItem, NewFoodItem

logger = logging.getLogger(__name__)

_NUTRIENT_FIELDS = ("calories", "protein_g", "carbs_g", "fat_g")


class FoodRepository(Protocol):
    """Persistence interface for the food catalog."""

    def list_foods(self) -> list[FoodItem]:
        """Return every catalog entry."""

    def get_food(self, food_id: int) -> FoodItem | None:
        """Return a catalog entry by id, if present."""

    def create_food(self, food: NewFoodItem) -> FoodItem:
        """Store a catalog entry and return it with its id."""

    def search_foods(self, query: str) -> list[FoodItem]:
        """Return entries whose name contains the query, ignoring case."""


@dataclass
class FoodCatalogService:
    """Application service for catalog operations."""

    repository: FoodRepository

    def list_all(self) -> list[FoodItem]:
        """Return all catalog entries."""
        return self.repository.list_foods()

    def get(self, food_id: int) -> FoodItem:
        """Return a catalog entry or raise NotFoundError."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError("FoodItem", food_id)
        return food

    def create(self, payload: dict[str, object]) -> FoodItem:
        """Validate and store a new catalog entry."""
        food = self.repository.create_food(parse_new_food(payload))
        logger.info("Created food item", extra={"food_id": food.id})
        return food

    def search(self, query: str | None) -> list[FoodItem]:
        """Search by name; an empty query matches nothing."""
        cleaned = (query or "").strip()
        if not cleaned:
            return []
        return self.repository.search_foods(cleaned)


def parse_new_food(payload: dict[str, object]) -> NewFoodItem:
    """Validate raw catalog fields."""
    name = payload.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("name must be a non-empty string")
    values: dict[str, float] = {}
    for key in (*_NUTRIENT_FIELDS, "serving_size"):
        values[key] = _require_number(payload, key)
        if values[key] < 0:
            raise ValidationError(f"{key} must not be negative")
    if values["serving_size"] <= 0:
        raise ValidationError("serving_size must be positive")
    unit = payload.get("serving_unit")
    if not isinstance(unit, str) or not unit.strip():
        raise ValidationError("serving_unit must be a non-empty string")
    return NewFoodItem(
        name=name.strip(),
        calories=values["calories"],
        protein_g=values["protein_g"],
        carbs_g=values["carbs_g"],
        fat_g=values["fat_g"],
        serving_size=values["serving_size"],
        serving_unit=unit.strip(),
    )


def _require_number(payload: dict[str, object], key: str) -> float:
    value = payload.get(key)
    if value is None:
        raise ValidationError(f"{key} is required")
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError(f"{key} must be a number")
    if not math.isfinite(value):
        raise ValidationError(f"{key} must be finite")
    return float(value)
