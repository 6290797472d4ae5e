"""Shared test fixtures."""

from datetime import date

import pytest

from nutrition_log.adapters.in_memory import (
    InMemoryDailyLogRepository,
    InMemoryFoodRepository,
    InMemoryMealRepository,
    InMemoryUserRepository,
)
from nutrition_log.config import Settings
from nutrition_log.containers import AppContainer, Repositories, wire_container
from nutrition_log.domain.foods import FoodItem
from nutrition_log.domain.models import UserRecord

TODAY = date(2024, 3, 10)

OATMEAL: dict[str, object] = {
    "name": "Oatmeal with banana",
    "calories": 320,
    "protein_g": 12,
    "carbs_g": 38,
    "fat_g": 8,
    "serving_size": 250,
    "serving_unit": "g",
}

ALMONDS: dict[str, object] = {
    "name": "Almonds",
    "calories": 160,
    "protein_g": 6,
    "carbs_g": 6,
    "fat_g": 14,
    "serving_size": 28,
    "serving_unit": "g",
}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        storage_backend="memory",
        seed_catalog=False,
        demo_username=None,
        environment="test",
    )


@pytest.fixture
def repositories() -> Repositories:
    return Repositories(
        users=InMemoryUserRepository(),
        foods=InMemoryFoodRepository(),
        meals=InMemoryMealRepository(),
        daily_logs=InMemoryDailyLogRepository(),
    )


@pytest.fixture
def container(settings: Settings, repositories: Repositories) -> AppContainer:
    return wire_container(settings, repositories)


@pytest.fixture
def user(container: AppContainer) -> UserRecord:
    return container.user_service.create_user("alice", "secret")


@pytest.fixture
def oatmeal(container: AppContainer) -> FoodItem:
    return container.food_service.create(dict(OATMEAL))


@pytest.fixture
def almonds(container: AppContainer) -> FoodItem:
    return container.food_service.create(dict(ALMONDS))
