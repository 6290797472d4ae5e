"""Supabase repository for meals and meal items."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from nutrition_log.domain.meals import MealItemRecord, MealRecord
from nutrition_log.services.meals import MealRepository

_MEAL_COLUMNS = "id, user_id, name, date, time"
_ITEM_COLUMNS = "id, meal_id, food_item_id, quantity"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals and meal items."""

    client: Client

    def list_meals(self, user_id: int, day: date) -> list[MealRecord]:
        """Return a user's meals for a day."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .order("id", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def get_meal(self, meal_id: int) -> MealRecord | None:
        """Return a meal by id."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", meal_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def create_meal(self, user_id: int, name: str, day: date, time: str) -> MealRecord:
        """Insert a meal row."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": user_id,
                    "name": name,
                    "date": day.isoformat(),
                    "time": time,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_meal(response.data[0])

    def update_meal(self, meal_id: int, fields: dict[str, object]) -> MealRecord | None:
        """Update meal columns."""
        payload = {
            key: value.isoformat() if isinstance(value, date) else value
            for key, value in fields.items()
        }
        response = (
            self.client.table("meals").update(payload).eq("id", meal_id).execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def delete_meal(self, meal_id: int) -> bool:
        """Delete a meal after its items."""
        self.client.table("meal_items").delete().eq("meal_id", meal_id).execute()
        response = self.client.table("meals").delete().eq("id", meal_id).execute()
        return bool(response.data)

    def list_meal_items(self, meal_id: int) -> list[MealItemRecord]:
        """Return items for a meal."""
        response = (
            self.client.table("meal_items")
            .select(_ITEM_COLUMNS)
            .eq("meal_id", meal_id)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def get_meal_item(self, meal_item_id: int) -> MealItemRecord | None:
        """Return a meal item by id."""
        response = (
            self.client.table("meal_items")
            .select(_ITEM_COLUMNS)
            .eq("id", meal_item_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def create_meal_item(
        self, meal_id: int, food_item_id: int, quantity: float
    ) -> MealItemRecord:
        """Insert a meal item row."""
        response = (
            self.client.table("meal_items")
            .insert(
                {
                    "meal_id": meal_id,
                    "food_item_id": food_item_id,
                    "quantity": quantity,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal item")
        return _parse_item(response.data[0])

    def update_meal_item(
        self, meal_item_id: int, quantity: float
    ) -> MealItemRecord | None:
        """Update a meal item's quantity."""
        response = (
            self.client.table("meal_items")
            .update({"quantity": quantity})
            .eq("id", meal_item_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def delete_meal_item(self, meal_item_id: int) -> bool:
        """Delete a meal item row."""
        response = (
            self.client.table("meal_items").delete().eq("id", meal_item_id).execute()
        )
        return bool(response.data)


def _parse_meal(row: dict[str, object]) -> MealRecord:
    return MealRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        name=str(row.get("name", "")),
        date=date.fromisoformat(str(row["date"])),
        time=str(row.get("time", "")),
    )


def _parse_item(row: dict[str, object]) -> MealItemRecord:
    return MealItemRecord(
        id=int(row["id"]),
        meal_id=int(row["meal_id"]),
        food_item_id=int(row["food_item_id"]),
        quantity=float(row.get("quantity", 0.0)),
    )
