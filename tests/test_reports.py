"""Tests for formatting helpers and the HTML daily report."""

from datetime import date, datetime

import pytest

from nutrition_log.containers import AppContainer
from nutrition_log.domain.foods import FoodItem
from nutrition_log.domain.models import DailyTargets, UserRecord
from nutrition_log.domain.nutrition import ZERO_MACROS
from nutrition_log.domain.stats import DailyData
from nutrition_log.formatting import (
    format_calories,
    format_macro,
    format_number,
    format_percentage,
    format_time,
)
from nutrition_log.services.reports import format_report_date, render_daily_report
from tests.conftest import TODAY


def test_format_number_and_units() -> None:
    assert format_number(1234567.891, decimals=2, prefix="~") == "~1,234,567.89"
    assert format_calories(1250) == "1,250 cal"
    assert format_macro(12.46) == "12.5g"
    assert format_macro(3, unit="mg") == "3.0mg"


def test_format_number_rounds_halves_up() -> None:
    assert format_number(2.5) == "3"
    assert format_number(1_234.5) == "1,235"
    assert format_macro(0.25) == "0.3g"
    assert format_number(1.005, decimals=2) == "1.00"


@pytest.mark.parametrize(
    ("value", "total", "expected"),
    [
        (500, 2000, "25%"),
        (2500, 2000, "100%"),
        (10, 0, "0%"),
        (12.5, 100, "13%"),
        (1, 8, "13%"),
    ],
)
def test_format_percentage(value: float, total: float, expected: str) -> None:
    assert format_percentage(value, total) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("20:30", "8:30 PM"),
        ("00:15", "12:15 AM"),
        ("12:00", "12:00 PM"),
        ("8:30 AM", "8:30 AM"),
        ("brunch", "brunch"),
        ("25:00", "25:00"),
    ],
)
def test_format_time(raw: str, expected: str) -> None:
    assert format_time(raw) == expected


def test_report_date_label() -> None:
    data = DailyData(
        date=date(2024, 3, 10), meals=[], totals=ZERO_MACROS, targets=DailyTargets()
    )

    assert format_report_date(data) == "Sunday, Mar 10"


def test_render_empty_day() -> None:
    data = DailyData(date=TODAY, meals=[], totals=ZERO_MACROS, targets=DailyTargets())

    html = render_daily_report(data, generated_at=datetime(2024, 3, 10, 21, 0))

    assert html.startswith("<!doctype html>")
    assert "No meals recorded for this day." in html
    assert "Target: 2,000 cal" in html
    assert "2024-03-10 21:00" in html


def test_render_day_with_meals(
    container: AppContainer, user: UserRecord, oatmeal: FoodItem
) -> None:
    meals = container.meal_service
    breakfast = meals.create_meal(user.id, "Breakfast <early>", TODAY, "08:00")
    meals.add_item(breakfast.id, oatmeal.id, 1)
    meals.create_meal(user.id, "Dinner", TODAY, "7:00 PM")
    data = container.daily_log_service.get_daily_data(user.id, TODAY)

    html = render_daily_report(data)

    assert "Breakfast &lt;early&gt;" in html
    assert "8:00 AM" in html
    assert "Oatmeal with banana" in html
    assert "320 cal" in html
    assert "16%" in html
    assert "No food items added to this meal." in html
