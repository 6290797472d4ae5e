"""Domain models for meals and meal items."""

from dataclasses import dataclass
from datetime import date

from nutrition_log.domain.foods import FoodItem
from nutrition_log.domain.nutrition import MacroProfile


@dataclass(frozen=True)
class MealRecord:
    """A named eating occasion on a calendar day."""

    id: int
    user_id: int
    name: str
    date: date
    time: str


@dataclass(frozen=True)
class MealItemRecord:
    """Links a meal to a food item with a serving quantity."""

    id: int
    meal_id: int
    food_item_id: int
    quantity: float


@dataclass(frozen=True)
class MealItemDetail:
    """Meal item joined with its food item."""

    id: int
    meal_id: int
    food_item_id: int
    quantity: float
    food_item: FoodItem


@dataclass(frozen=True)
class MealDetail:
    """Meal with its items and computed totals."""

    id: int
    user_id: int
    name: str
    date: date
    time: str
    items: list[MealItemDetail]
    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float

    @property
    def totals(self) -> MacroProfile:
        """Return the meal totals as a profile."""
        return MacroProfile(
            calories=self.total_calories,
            protein_g=self.total_protein_g,
            carbs_g=self.total_carbs_g,
            fat_g=self.total_fat_g,
        )
