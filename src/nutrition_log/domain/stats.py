"""Domain models for daily logs and trend series."""

from dataclasses import dataclass
from datetime import date

from nutrition_log.domain.meals import MealDetail
from nutrition_log.domain.models import DailyTargets
from nutrition_log.domain.nutrition import MacroProfile


@dataclass(frozen=True)
class DailyLog:
    """Stored nutrient totals for one user and day."""

    id: int
    user_id: int
    date: date
    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float

    @property
    def totals(self) -> MacroProfile:
        """Return the stored totals as a profile."""
        return MacroProfile(
            calories=self.total_calories,
            protein_g=self.total_protein_g,
            carbs_g=self.total_carbs_g,
            fat_g=self.total_fat_g,
        )


@dataclass(frozen=True)
class DailyData:
    """Meals, totals and targets for one user and day."""

    date: date
    meals: list[MealDetail]
    totals: MacroProfile
    targets: DailyTargets


@dataclass(frozen=True)
class WeeklyData:
    """Seven days of calorie totals ending on a given day."""

    dates: list[date]
    calories: list[float]
    target: float
