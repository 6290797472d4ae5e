"""Supabase repository for the food catalog."""

from dataclasses import dataclass

from supabase import Client

from nutrition_log.domain.foods import FoodItem, NewFoodItem
from nutrition_log.services.foods import FoodRepository

_COLUMNS = "id, name, calories, protein, carbs, fat, serving_size, serving_unit"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for catalog entries."""

    client: Client

    def list_foods(self) -> list[FoodItem]:
        """Return all catalog entries."""
        response = self.client.table("food_items").select(_COLUMNS).execute()
        return [_parse_food(row) for row in response.data or []]

    def get_food(self, food_id: int) -> FoodItem | None:
        """Return a catalog entry by id."""
        response = (
            self.client.table("food_items")
            .select(_COLUMNS)
            .eq("id", food_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def create_food(self, food: NewFoodItem) -> FoodItem:
        """Insert a catalog entry."""
        response = (
            self.client.table("food_items")
            .insert(
                {
                    "name": food.name,
                    "calories": food.calories,
                    "protein": food.protein_g,
                    "carbs": food.carbs_g,
                    "fat": food.fat_g,
                    "serving_size": food.serving_size,
                    "serving_unit": food.serving_unit,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return _parse_food(response.data[0])

    def search_foods(self, query: str) -> list[FoodItem]:
        """Case-insensitive substring search on names."""
        escaped = query.replace("%", r"\%").replace("_", r"\_")
        response = (
            self.client.table("food_items")
            .select(_COLUMNS)
            .ilike("name", f"%{escaped}%")
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]


def _parse_food(row: dict[str, object]) -> FoodItem:
    return FoodItem(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        calories=float(row.get("calories", 0.0)),
        protein_g=float(row.get("protein", 0.0)),
        carbs_g=float(row.get("carbs", 0.0)),
        fat_g=float(row.get("fat", 0.0)),
        serving_size=float(row.get("serving_size", 0.0)),
        serving_unit=str(row.get("serving_unit", "")),
    )
