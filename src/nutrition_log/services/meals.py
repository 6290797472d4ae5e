"""Meal and meal item services.

Every meal item mutation is followed by a full recompute of the owning
user's daily log for the meal's day.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from nutrition_log.domain.errors import IntegrityFault, NotFoundError, ValidationError
from nutrition_log.domain.foods import FoodItem
from nutrition_log.domain.meals import (
    MealDetail,
    MealItemDetail,
    MealItemRecord,
    MealRecord,
)
from nutrition_log.domain.nutrition import (
    ZERO_MACROS,
    MacroProfile,
    add_macros,
    scale_macros,
)
from nutrition_log.domain.stats import DailyLog
from nutrition_log.meal_times import default_meal_name, sort_meals_chronologically
from nutrition_log.services.foods import FoodRepository
from nutrition_log.services.users import UserService

logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals and their items."""

    def list_meals(self, user_id: int, day: date) -> list[MealRecord]:
        """Return meals for a user on a day."""

    def get_meal(self, meal_id: int) -> MealRecord | None:
        """Return a meal by id."""

    def create_meal(self, user_id: int, name: str, day: date, time: str) -> MealRecord:
        """Create a meal and return it."""

    def update_meal(self, meal_id: int, fields: dict[str, object]) -> MealRecord | None:
        """Apply name/date/time changes and return the updated meal."""

    def delete_meal(self, meal_id: int) -> bool:
        """Delete a meal and all of its items."""

    def list_meal_items(self, meal_id: int) -> list[MealItemRecord]:
        """Return items for a meal."""

    def get_meal_item(self, meal_item_id: int) -> MealItemRecord | None:
        """Return a meal item by id."""

    def create_meal_item(
        self, meal_id: int, food_item_id: int, quantity: float
    ) -> MealItemRecord:
        """Create a meal item and return it."""

    def update_meal_item(
        self, meal_item_id: int, quantity: float
    ) -> MealItemRecord | None:
        """Update a meal item's quantity."""

    def delete_meal_item(self, meal_item_id: int) -> bool:
        """Delete a meal item."""


class DailyLogWriter(Protocol):
    """Recomputes the stored daily totals for a user and day."""

    def recompute(self, user_id: int, day: date) -> DailyLog:
        """Rebuild the daily log from the day's meals."""


@dataclass
class MealService:
    """Service for meals and meal items that keeps daily logs in sync."""

    repository: MealRepository
    food_repository: FoodRepository
    user_service: UserService
    daily_logs: DailyLogWriter

    def list_meals(self, user_id: int, day: date) -> list[MealDetail]:
        """Return a user's meals for a day in chronological order."""
        return load_meal_details(self.repository, self.food_repository, user_id, day)

    def get_meal(self, meal_id: int) -> MealDetail:
        """Return a meal with items and totals."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal", meal_id)
        return build_meal_detail(self.repository, self.food_repository, meal)

    def create_meal(self, user_id: int, name: str, day: date, time: str) -> MealRecord:
        """Create an empty meal for an existing user."""
        self.user_service.get_user(user_id)
        meal = self.repository.create_meal(
            user_id, _require_text(name, "name"), day, _require_text(time, "time")
        )
        logger.info("Created meal", extra={"meal_id": meal.id, "user_id": user_id})
        return meal

    def update_meal(
        self,
        meal_id: int,
        *,
        name: str | None = None,
        day: date | None = None,
        time: str | None = None,
    ) -> MealRecord:
        """Update a meal's name, date or time."""
        existing = self.repository.get_meal(meal_id)
        if existing is None:
            raise NotFoundError("Meal", meal_id)
        fields: dict[str, object] = {}
        if name is not None:
            fields["name"] = _require_text(name, "name")
        if day is not None:
            fields["date"] = day
        if time is not None:
            fields["time"] = _require_text(time, "time")
        if not fields:
            return existing
        updated = self.repository.update_meal(meal_id, fields)
        if updated is None:
            raise NotFoundError("Meal", meal_id)
        if updated.date != existing.date:
            self.daily_logs.recompute(existing.user_id, existing.date)
            self.daily_logs.recompute(updated.user_id, updated.date)
        logger.info("Updated meal", extra={"meal_id": meal_id})
        return updated

    def delete_meal(self, meal_id: int) -> bool:
        """Delete a meal with its items; return False when it did not exist."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            return False
        deleted = self.repository.delete_meal(meal_id)
        self.daily_logs.recompute(meal.user_id, meal.date)
        logger.info("Deleted meal", extra={"meal_id": meal_id})
        return deleted

    def add_item(
        self, meal_id: int, food_item_id: int, quantity: float
    ) -> MealItemRecord:
        """Add a food to a meal and refresh the daily log."""
        resolved_quantity = _require_quantity(quantity)
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal", meal_id)
        if self.food_repository.get_food(food_item_id) is None:
            raise NotFoundError("FoodItem", food_item_id)
        item = self.repository.create_meal_item(
            meal_id, food_item_id, resolved_quantity
        )
        self.daily_logs.recompute(meal.user_id, meal.date)
        logger.info(
            "Added meal item", extra={"meal_item_id": item.id, "meal_id": meal_id}
        )
        return item

    def update_item_quantity(
        self, meal_item_id: int, quantity: float
    ) -> MealItemRecord:
        """Change a meal item's quantity and refresh the daily log."""
        resolved_quantity = _require_quantity(quantity)
        updated = self.repository.update_meal_item(meal_item_id, resolved_quantity)
        if updated is None:
            raise NotFoundError("MealItem", meal_item_id)
        self._recompute_for_meal(updated.meal_id)
        logger.info("Updated meal item", extra={"meal_item_id": meal_item_id})
        return updated

    def delete_item(self, meal_item_id: int) -> bool:
        """Delete a meal item; return False when it did not exist."""
        item = self.repository.get_meal_item(meal_item_id)
        if item is None:
            return False
        deleted = self.repository.delete_meal_item(meal_item_id)
        self._recompute_for_meal(item.meal_id)
        logger.info("Deleted meal item", extra={"meal_item_id": meal_item_id})
        return deleted

    def log_food(  # noqa: PLR0913
        self,
        user_id: int,
        day: date,
        food_item_id: int,
        quantity: float,
        meal_id: int | None = None,
        now: datetime | None = None,
    ) -> MealItemRecord:
        """Log a food on a day, creating a default meal when the day has none.

        When the day already has meals the caller must pick one of them.
        """
        if meal_id is not None:
            meal = self.repository.get_meal(meal_id)
            if meal is None:
                raise NotFoundError("Meal", meal_id)
            if meal.user_id != user_id or meal.date != day:
                raise ValidationError("meal does not belong to this user and day")
            return self.add_item(meal_id, food_item_id, quantity)
        _require_quantity(quantity)
        self.user_service.get_user(user_id)
        if self.food_repository.get_food(food_item_id) is None:
            raise NotFoundError("FoodItem", food_item_id)
        if self.repository.list_meals(user_id, day):
            raise ValidationError("meal_id is required when the day already has meals")
        moment = now or datetime.now()
        meal = self.create_meal(
            user_id, default_meal_name(moment.hour), day, moment.strftime("%H:%M")
        )
        return self.add_item(meal.id, food_item_id, quantity)

    def _recompute_for_meal(self, meal_id: int) -> None:
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            logger.warning(
                "Skipping daily log recompute for missing meal",
                extra={"meal_id": meal_id},
            )
            return
        self.daily_logs.recompute(meal.user_id, meal.date)


def compute_meal_totals(items: list[MealItemDetail]) -> MacroProfile:
    """Sum quantity-scaled nutrients over a meal's items."""
    total = ZERO_MACROS
    for item in items:
        total = add_macros(total, scale_macros(item.food_item.macros, item.quantity))
    return total


def build_meal_detail(
    repository: MealRepository, food_repository: FoodRepository, meal: MealRecord
) -> MealDetail:
    """Join a meal's items with their foods and compute totals."""
    foods: dict[int, FoodItem] = {}
    items: list[MealItemDetail] = []
    for record in repository.list_meal_items(meal.id):
        food = foods.get(record.food_item_id)
        if food is None:
            food = food_repository.get_food(record.food_item_id)
            if food is None:
                raise IntegrityFault(
                    f"meal item {record.id} references missing food item "
                    f"{record.food_item_id}"
                )
            foods[food.id] = food
        items.append(
            MealItemDetail(
                id=record.id,
                meal_id=record.meal_id,
                food_item_id=record.food_item_id,
                quantity=record.quantity,
                food_item=food,
            )
        )
    totals = compute_meal_totals(items)
    return MealDetail(
        id=meal.id,
        user_id=meal.user_id,
        name=meal.name,
        date=meal.date,
        time=meal.time,
        items=items,
        total_calories=totals.calories,
        total_protein_g=totals.protein_g,
        total_carbs_g=totals.carbs_g,
        total_fat_g=totals.fat_g,
    )


def load_meal_details(
    repository: MealRepository,
    food_repository: FoodRepository,
    user_id: int,
    day: date,
) -> list[MealDetail]:
    """Return all meals of a user's day with totals, in chronological order."""
    meals = sort_meals_chronologically(repository.list_meals(user_id, day))
    return [build_meal_detail(repository, food_repository, meal) for meal in meals]


def _require_quantity(quantity: float) -> float:
    if isinstance(quantity, bool) or not isinstance(quantity, int | float):
        raise ValidationError("quantity must be a number")
    if not math.isfinite(quantity) or quantity <= 0:
        raise ValidationError("quantity must be positive")
    return float(quantity)


def _require_text(value: str, field_name: str) -> str:
    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise ValidationError(f"{field_name} must not be empty")
    return cleaned
