"""Trend statistics built from daily logs."""

from dataclasses import dataclass
from datetime import date, timedelta

from nutrition_log.domain.stats import WeeklyData
from nutrition_log.services.daily_logs import DailyLogService
from nutrition_log.services.users import UserService

WEEK_DAYS = 7


@dataclass
class StatsService:
    """Service for calorie trend series."""

    daily_logs: DailyLogService
    user_service: UserService

    def get_weekly_data(self, user_id: int, end_day: date) -> WeeklyData:
        """Return seven days of calories ending on ``end_day`` inclusive."""
        user = self.user_service.get_user(user_id)
        dates = week_ending(end_day)
        calories = [self.daily_logs.get(user_id, day).calories for day in dates]
        return WeeklyData(
            dates=dates,
            calories=calories,
            target=user.daily_targets.calories,
        )


def week_ending(end_day: date, days: int = WEEK_DAYS) -> list[date]:
    """Return ``days`` consecutive dates ending on ``end_day``, ascending."""
    return [end_day - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
