"""Supabase repository for daily logs."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from nutrition_log.domain.nutrition import MacroProfile
from nutrition_log.domain.stats import DailyLog
from nutrition_log.services.daily_logs import DailyLogRepository

_COLUMNS = (
    "id, user_id, date, total_calories, total_protein, total_carbs, total_fat"
)


@dataclass
class SupabaseDailyLogRepository(DailyLogRepository):
    """Supabase implementation for daily logs keyed by user and date."""

    client: Client

    def get_log(self, user_id: int, day: date) -> DailyLog | None:
        """Return the log row for a user and day."""
        response = (
            self.client.table("daily_logs")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_log(response.data[0])

    def upsert_log(self, user_id: int, day: date, totals: MacroProfile) -> DailyLog:
        """Create or overwrite the log row for a user and day."""
        response = (
            self.client.table("daily_logs")
            .upsert(
                {
                    "user_id": user_id,
                    "date": day.isoformat(),
                    "total_calories": totals.calories,
                    "total_protein": totals.protein_g,
                    "total_carbs": totals.carbs_g,
                    "total_fat": totals.fat_g,
                },
                on_conflict="user_id,date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to upsert daily log")
        return _parse_log(response.data[0])


def _parse_log(row: dict[str, object]) -> DailyLog:
    return DailyLog(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        date=date.fromisoformat(str(row["date"])),
        total_calories=float(row.get("total_calories", 0.0)),
        total_protein_g=float(row.get("total_protein", 0.0)),
        total_carbs_g=float(row.get("total_carbs", 0.0)),
        total_fat_g=float(row.get("total_fat", 0.0)),
    )
