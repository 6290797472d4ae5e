"""Tests for container wiring."""

import pytest

from nutrition_log.adapters.in_memory import InMemoryMealRepository
from nutrition_log.config import Settings
from nutrition_log.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.meal_service is not None
    assert container.stats_service.daily_logs is container.daily_log_service
    assert isinstance(container.meal_service.repository, InMemoryMealRepository)
    assert (
        container.daily_log_service.meal_repository
        is container.meal_service.repository
    )


def test_supabase_backend_requires_credentials() -> None:
    settings = Settings(storage_backend="supabase", supabase_url=None)

    with pytest.raises(ValueError, match="supabase_url"):
        build_container(settings)
