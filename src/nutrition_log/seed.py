"""Default catalog entries and demo account."""

import logging

from nutrition_log.domain.foods import FoodItem
from nutrition_log.domain.models import UserRecord
from nutrition_log.services.foods import FoodCatalogService
from nutrition_log.services.users import UserService

logger = logging.getLogger(__name__)

DEFAULT_FOODS: list[dict[str, object]] = [
    {
        "name": "Oatmeal with banana",
        "calories": 320,
        "protein_g": 12,
        "carbs_g": 38,
        "fat_g": 8,
        "serving_size": 250,
        "serving_unit": "g",
    },
    {
        "name": "Greek Yogurt",
        "calories": 100,
        "protein_g": 12,
        "carbs_g": 4,
        "fat_g": 10,
        "serving_size": 100,
        "serving_unit": "g",
    },
    {
        "name": "Grilled Chicken Salad",
        "calories": 420,
        "protein_g": 38,
        "carbs_g": 20,
        "fat_g": 15,
        "serving_size": 350,
        "serving_unit": "g",
    },
    {
        "name": "Whole Grain Bread",
        "calories": 90,
        "protein_g": 2,
        "carbs_g": 14,
        "fat_g": 1,
        "serving_size": 40,
        "serving_unit": "g",
    },
    {
        "name": "Orange Juice",
        "calories": 80,
        "protein_g": 0,
        "carbs_g": 10,
        "fat_g": 5,
        "serving_size": 200,
        "serving_unit": "ml",
    },
    {
        "name": "Salmon Fillet",
        "calories": 250,
        "protein_g": 19,
        "carbs_g": 0,
        "fat_g": 5,
        "serving_size": 150,
        "serving_unit": "g",
    },
    {
        "name": "Steamed Vegetables",
        "calories": 100,
        "protein_g": 0,
        "carbs_g": 20,
        "fat_g": 0,
        "serving_size": 200,
        "serving_unit": "g",
    },
    {
        "name": "Apple",
        "calories": 95,
        "protein_g": 0.5,
        "carbs_g": 25,
        "fat_g": 0.3,
        "serving_size": 182,
        "serving_unit": "g",
    },
    {
        "name": "Almonds",
        "calories": 160,
        "protein_g": 6,
        "carbs_g": 6,
        "fat_g": 14,
        "serving_size": 28,
        "serving_unit": "g",
    },
    {
        "name": "Brown Rice",
        "calories": 215,
        "protein_g": 5,
        "carbs_g": 45,
        "fat_g": 1.8,
        "serving_size": 195,
        "serving_unit": "g",
    },
]


def seed_catalog(catalog: FoodCatalogService) -> list[FoodItem]:
    """Insert the default foods into an empty catalog."""
    if catalog.list_all():
        return []
    created = [catalog.create(payload) for payload in DEFAULT_FOODS]
    logger.info("Seeded food catalog", extra={"count": len(created)})
    return created


def ensure_demo_user(users: UserService, username: str, password: str) -> UserRecord:
    """Make sure the demo account exists."""
    return users.ensure_user(username, password)
