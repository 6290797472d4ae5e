"""Tests for daily log aggregation."""

from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from nutrition_log.containers import AppContainer
from nutrition_log.domain.errors import NotFoundError, ValidationError
from nutrition_log.domain.foods import FoodItem
from nutrition_log.domain.models import UserRecord
from nutrition_log.domain.nutrition import ZERO_MACROS, MacroProfile
from tests.conftest import TODAY


def _assert_log_matches_meals(container: AppContainer, user_id: int, day: date) -> None:
    meals = container.meal_service.list_meals(user_id, day)
    stored = container.daily_log_service.get(user_id, day)
    assert stored.calories == pytest.approx(sum(m.total_calories for m in meals))
    assert stored.protein_g == pytest.approx(sum(m.total_protein_g for m in meals))
    assert stored.carbs_g == pytest.approx(sum(m.total_carbs_g for m in meals))
    assert stored.fat_g == pytest.approx(sum(m.total_fat_g for m in meals))


def test_breakfast_scenario(
    container: AppContainer, user: UserRecord, oatmeal: FoodItem
) -> None:
    meals = container.meal_service
    daily_logs = container.daily_log_service
    breakfast = meals.create_meal(user.id, "Breakfast", TODAY, "8:00 AM")
    item = meals.add_item(breakfast.id, oatmeal.id, 1)
    expected = MacroProfile(calories=320, protein_g=12, carbs_g=38, fat_g=8)

    assert meals.get_meal(breakfast.id).totals == expected
    assert daily_logs.get(user.id, TODAY) == expected
    daily = daily_logs.get_daily_data(user.id, TODAY)
    assert daily.totals == expected
    assert daily.targets.calories == 2000

    meals.delete_item(item.id)

    assert daily_logs.get(user.id, TODAY) == ZERO_MACROS


def test_log_stays_consistent_after_every_mutation(
    container: AppContainer, user: UserRecord, oatmeal: FoodItem, almonds: FoodItem
) -> None:
    meals = container.meal_service
    breakfast = meals.create_meal(user.id, "Breakfast", TODAY, "8:00 AM")
    snack = meals.create_meal(user.id, "Snack", TODAY, "15:00")

    first = meals.add_item(breakfast.id, oatmeal.id, 1)
    _assert_log_matches_meals(container, user.id, TODAY)
    second = meals.add_item(snack.id, almonds.id, 0.5)
    _assert_log_matches_meals(container, user.id, TODAY)
    meals.add_item(breakfast.id, almonds.id, 2)
    _assert_log_matches_meals(container, user.id, TODAY)
    meals.update_item_quantity(first.id, 2.5)
    _assert_log_matches_meals(container, user.id, TODAY)
    meals.delete_item(second.id)
    _assert_log_matches_meals(container, user.id, TODAY)

    stored = container.daily_log_service.get(user.id, TODAY)
    assert stored.calories == pytest.approx(2.5 * 320 + 2 * 160)


def test_recompute_overwrites_single_row_per_day(
    container: AppContainer, user: UserRecord, oatmeal: FoodItem, repositories
) -> None:
    meals = container.meal_service
    breakfast = meals.create_meal(user.id, "Breakfast", TODAY, "8:00 AM")
    meals.add_item(breakfast.id, oatmeal.id, 1)
    first_log = repositories.daily_logs.get_log(user.id, TODAY)
    meals.add_item(breakfast.id, oatmeal.id, 1)

    log = repositories.daily_logs.get_log(user.id, TODAY)
    assert len(repositories.daily_logs.logs) == 1
    assert log.id == first_log.id
    assert log.total_calories == 640


def test_deleting_meal_cascades_to_items_and_log(
    container: AppContainer, user: UserRecord, oatmeal: FoodItem, repositories
) -> None:
    meals = container.meal_service
    breakfast = meals.create_meal(user.id, "Breakfast", TODAY, "8:00 AM")
    lunch = meals.create_meal(user.id, "Lunch", TODAY, "12:30 PM")
    meals.add_item(breakfast.id, oatmeal.id, 1)
    meals.add_item(lunch.id, oatmeal.id, 2)

    assert meals.delete_meal(breakfast.id) is True

    assert repositories.meals.list_meal_items(breakfast.id) == []
    assert [m.id for m in meals.list_meals(user.id, TODAY)] == [lunch.id]
    assert container.daily_log_service.get(user.id, TODAY).calories == 640


def test_moving_meal_to_another_day_recomputes_both_days(
    container: AppContainer, user: UserRecord, oatmeal: FoodItem
) -> None:
    meals = container.meal_service
    tomorrow = date(2024, 3, 11)
    breakfast = meals.create_meal(user.id, "Breakfast", TODAY, "8:00 AM")
    meals.add_item(breakfast.id, oatmeal.id, 1)

    moved = meals.update_meal(breakfast.id, day=tomorrow, name="Late breakfast")

    assert moved.date == tomorrow
    assert container.daily_log_service.get(user.id, TODAY) == ZERO_MACROS
    assert container.daily_log_service.get(user.id, tomorrow).calories == 320


@pytest.mark.parametrize("quantity", [0, -1])
def test_non_positive_quantity_leaves_log_untouched(
    container: AppContainer, user: UserRecord, oatmeal: FoodItem, quantity: float
) -> None:
    meals = container.meal_service
    breakfast = meals.create_meal(user.id, "Breakfast", TODAY, "8:00 AM")
    item = meals.add_item(breakfast.id, oatmeal.id, 1)
    before = container.daily_log_service.get(user.id, TODAY)

    with pytest.raises(ValidationError):
        meals.add_item(breakfast.id, oatmeal.id, quantity)
    with pytest.raises(ValidationError):
        meals.update_item_quantity(item.id, quantity)

    assert container.daily_log_service.get(user.id, TODAY) == before
    assert len(meals.get_meal(breakfast.id).items) == 1


def test_daily_data_for_empty_day_is_zero(
    container: AppContainer, user: UserRecord
) -> None:
    daily = container.daily_log_service.get_daily_data(user.id, TODAY)

    assert daily.date == TODAY
    assert daily.meals == []
    assert daily.totals == ZERO_MACROS
    assert daily.targets == user.daily_targets


def test_daily_data_for_missing_user(container: AppContainer) -> None:
    with pytest.raises(NotFoundError):
        container.daily_log_service.get_daily_data(404, TODAY)


def test_daily_logs_are_isolated_per_user(
    container: AppContainer, user: UserRecord, oatmeal: FoodItem
) -> None:
    other = container.user_service.create_user("bob", "secret")
    meals = container.meal_service
    mine = meals.create_meal(user.id, "Breakfast", TODAY, "8:00 AM")
    meals.add_item(mine.id, oatmeal.id, 1)

    assert container.daily_log_service.get(other.id, TODAY) == ZERO_MACROS


def test_concurrent_item_writes_keep_log_consistent(
    container: AppContainer, user: UserRecord, almonds: FoodItem
) -> None:
    meals = container.meal_service
    breakfast = meals.create_meal(user.id, "Breakfast", TODAY, "8:00 AM")

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(
            pool.map(
                lambda _: meals.add_item(breakfast.id, almonds.id, 1), range(40)
            )
        )

    assert container.daily_log_service.get(user.id, TODAY).calories == 40 * 160
    _assert_log_matches_meals(container, user.id, TODAY)
