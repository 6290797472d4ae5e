"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_log.adapters.in_memory import (
    InMemoryDailyLogRepository,
    InMemoryFoodRepository,
    InMemoryMealRepository,
    InMemoryUserRepository,
)
from nutrition_log.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from nutrition_log.adapters.supabase_food_repository import SupabaseFoodRepository
from nutrition_log.adapters.supabase_meal_repository import SupabaseMealRepository
from nutrition_log.adapters.supabase_user_repository import SupabaseUserRepository
from nutrition_log.config import Settings
from nutrition_log.services.daily_logs import DailyLogRepository, DailyLogService
from nutrition_log.services.foods import FoodCatalogService, FoodRepository
from nutrition_log.services.meals import MealRepository, MealService
from nutrition_log.services.stats import StatsService
from nutrition_log.services.users import UserRepository, UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    food_service: FoodCatalogService
    meal_service: MealService
    daily_log_service: DailyLogService
    stats_service: StatsService


@dataclass
class Repositories:
    """Storage adapters behind the service layer."""

    users: UserRepository
    foods: FoodRepository
    meals: MealRepository
    daily_logs: DailyLogRepository


def build_repositories(settings: Settings) -> Repositories:
    """Create the storage adapters selected by settings."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "supabase_url and supabase_service_key are required "
                "for the supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return Repositories(
            users=SupabaseUserRepository(client),
            foods=SupabaseFoodRepository(client),
            meals=SupabaseMealRepository(client),
            daily_logs=SupabaseDailyLogRepository(client),
        )
    return Repositories(
        users=InMemoryUserRepository(),
        foods=InMemoryFoodRepository(),
        meals=InMemoryMealRepository(),
        daily_logs=InMemoryDailyLogRepository(),
    )


def wire_container(settings: Settings, repositories: Repositories) -> AppContainer:
    """Build services on top of the given repositories."""
    user_service = UserService(repositories.users)
    food_service = FoodCatalogService(repositories.foods)
    daily_log_service = DailyLogService(
        repository=repositories.daily_logs,
        meal_repository=repositories.meals,
        food_repository=repositories.foods,
        user_service=user_service,
    )
    meal_service = MealService(
        repository=repositories.meals,
        food_repository=repositories.foods,
        user_service=user_service,
        daily_logs=daily_log_service,
    )
    stats_service = StatsService(
        daily_logs=daily_log_service,
        user_service=user_service,
    )
    return AppContainer(
        settings=settings,
        user_service=user_service,
        food_service=food_service,
        meal_service=meal_service,
        daily_log_service=daily_log_service,
        stats_service=stats_service,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    return wire_container(resolved_settings, build_repositories(resolved_settings))
