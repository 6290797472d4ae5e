"""Daily log aggregation.

The daily log is a denormalized cache of a user's totals for one day. It is
only ever written by ``DailyLogService.recompute``, which rebuilds it from
scratch out of the day's meals instead of patching it incrementally.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from nutrition_log.domain.nutrition import ZERO_MACROS, MacroProfile, add_macros
from nutrition_log.domain.stats import DailyData, DailyLog
from nutrition_log.services.foods import FoodRepository
from nutrition_log.services.locks import KeyedLocks
from nutrition_log.services.meals import MealRepository, load_meal_details
from nutrition_log.services.users import UserService

logger = logging.getLogger(__name__)


class DailyLogRepository(Protocol):
    """Persistence interface for daily logs keyed by user and day."""

    def get_log(self, user_id: int, day: date) -> DailyLog | None:
        """Return the stored log for a user and day."""

    def upsert_log(self, user_id: int, day: date, totals: MacroProfile) -> DailyLog:
        """Create or overwrite the log for a user and day."""


@dataclass
class DailyLogService:
    """Maintains and reads per-day nutrient totals."""

    repository: DailyLogRepository
    meal_repository: MealRepository
    food_repository: FoodRepository
    user_service: UserService
    locks: KeyedLocks = field(default_factory=KeyedLocks)

    def recompute(self, user_id: int, day: date) -> DailyLog:
        """Rebuild the stored totals from every meal of the day."""
        with self.locks.lock_for((user_id, day)):
            meals = load_meal_details(
                self.meal_repository, self.food_repository, user_id, day
            )
            totals = ZERO_MACROS
            for meal in meals:
                totals = add_macros(totals, meal.totals)
            log = self.repository.upsert_log(user_id, day, totals)
        logger.debug(
            "Recomputed daily log",
            extra={"user_id": user_id, "day": day.isoformat(), "meals": len(meals)},
        )
        return log

    def get(self, user_id: int, day: date) -> MacroProfile:
        """Return stored totals, or zeros when nothing was logged."""
        log = self.repository.get_log(user_id, day)
        if log is None:
            return ZERO_MACROS
        return log.totals

    def get_daily_data(self, user_id: int, day: date) -> DailyData:
        """Return meals, totals and targets for a user's day."""
        user = self.user_service.get_user(user_id)
        meals = load_meal_details(
            self.meal_repository, self.food_repository, user_id, day
        )
        return DailyData(
            date=day,
            meals=meals,
            totals=self.get(user_id, day),
            targets=user.daily_targets,
        )
