"""In-memory repositories for local runs and tests.

Identifiers come from per-collection counters starting at 1. Scans copy the
collection first so concurrent inserts cannot invalidate the iteration.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from itertools import count

from nutrition_log.domain.foods import FoodItem, NewFoodItem
from nutrition_log.domain.meals import MealItemRecord, MealRecord
from nutrition_log.domain.models import DailyTargets, UserRecord
from nutrition_log.domain.nutrition import MacroProfile
from nutrition_log.domain.stats import DailyLog
from nutrition_log.services.daily_logs import DailyLogRepository
from nutrition_log.services.foods import FoodRepository
from nutrition_log.services.meals import MealRepository
from nutrition_log.services.users import UserRepository


def _counter() -> count:
    return count(1)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository."""

    users: dict[int, UserRecord] = field(default_factory=dict)
    _ids: count = field(default_factory=_counter, repr=False)

    def get_user(self, user_id: int) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> UserRecord | None:
        return next(
            (user for user in self.users.values() if user.username == username), None
        )

    def create_user(
        self, username: str, password: str, targets: DailyTargets
    ) -> UserRecord:
        user = UserRecord(
            id=next(self._ids),
            username=username,
            password=password,
            daily_targets=targets,
        )
        self.users[user.id] = user
        return user

    def update_targets(self, user_id: int, targets: DailyTargets) -> UserRecord | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = replace(user, daily_targets=targets)
        self.users[user_id] = updated
        return updated


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food catalog."""

    foods: dict[int, FoodItem] = field(default_factory=dict)
    _ids: count = field(default_factory=_counter, repr=False)

    def list_foods(self) -> list[FoodItem]:
        return list(self.foods.values())

    def get_food(self, food_id: int) -> FoodItem | None:
        return self.foods.get(food_id)

    def create_food(self, food: NewFoodItem) -> FoodItem:
        created = FoodItem(
            id=next(self._ids),
            name=food.name,
            calories=food.calories,
            protein_g=food.protein_g,
            carbs_g=food.carbs_g,
            fat_g=food.fat_g,
            serving_size=food.serving_size,
            serving_unit=food.serving_unit,
        )
        self.foods[created.id] = created
        return created

    def search_foods(self, query: str) -> list[FoodItem]:
        needle = query.lower()
        return [food for food in self.foods.values() if needle in food.name.lower()]


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meals and meal items."""

    meals: dict[int, MealRecord] = field(default_factory=dict)
    items: dict[int, MealItemRecord] = field(default_factory=dict)
    _meal_ids: count = field(default_factory=_counter, repr=False)
    _item_ids: count = field(default_factory=_counter, repr=False)

    def list_meals(self, user_id: int, day: date) -> list[MealRecord]:
        return [
            meal
            for meal in list(self.meals.values())
            if meal.user_id == user_id and meal.date == day
        ]

    def get_meal(self, meal_id: int) -> MealRecord | None:
        return self.meals.get(meal_id)

    def create_meal(self, user_id: int, name: str, day: date, time: str) -> MealRecord:
        meal = MealRecord(
            id=next(self._meal_ids), user_id=user_id, name=name, date=day, time=time
        )
        self.meals[meal.id] = meal
        return meal

    def update_meal(self, meal_id: int, fields: dict[str, object]) -> MealRecord | None:
        meal = self.meals.get(meal_id)
        if meal is None:
            return None
        updated = replace(meal, **fields)
        self.meals[meal_id] = updated
        return updated

    def delete_meal(self, meal_id: int) -> bool:
        for item in self.list_meal_items(meal_id):
            self.items.pop(item.id, None)
        return self.meals.pop(meal_id, None) is not None

    def list_meal_items(self, meal_id: int) -> list[MealItemRecord]:
        items = list(self.items.values())
        return [item for item in items if item.meal_id == meal_id]

    def get_meal_item(self, meal_item_id: int) -> MealItemRecord | None:
        return self.items.get(meal_item_id)

    def create_meal_item(
        self, meal_id: int, food_item_id: int, quantity: float
    ) -> MealItemRecord:
        item = MealItemRecord(
            id=next(self._item_ids),
            meal_id=meal_id,
            food_item_id=food_item_id,
            quantity=quantity,
        )
        self.items[item.id] = item
        return item

    def update_meal_item(
        self, meal_item_id: int, quantity: float
    ) -> MealItemRecord | None:
        item = self.items.get(meal_item_id)
        if item is None:
            return None
        updated = replace(item, quantity=quantity)
        self.items[meal_item_id] = updated
        return updated

    def delete_meal_item(self, meal_item_id: int) -> bool:
        return self.items.pop(meal_item_id, None) is not None


@dataclass
class InMemoryDailyLogRepository(DailyLogRepository):
    """In-memory daily logs keyed by (user_id, date)."""

    logs: dict[tuple[int, date], DailyLog] = field(default_factory=dict)
    _ids: count = field(default_factory=_counter, repr=False)

    def get_log(self, user_id: int, day: date) -> DailyLog | None:
        return self.logs.get((user_id, day))

    def upsert_log(self, user_id: int, day: date, totals: MacroProfile) -> DailyLog:
        existing = self.logs.get((user_id, day))
        log = DailyLog(
            id=existing.id if existing else next(self._ids),
            user_id=user_id,
            date=day,
            total_calories=totals.calories,
            total_protein_g=totals.protein_g,
            total_carbs_g=totals.carbs_g,
            total_fat_g=totals.fat_g,
        )
        self.logs[(user_id, day)] = log
        return log
