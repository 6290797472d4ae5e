"""Meal time parsing and chronological ordering.

Meal times are free text and arrive either as 12-hour strings ("8:30 AM")
or 24-hour strings ("20:30"). Everything that orders meals goes through
``normalize_meal_time`` so both forms compare correctly.
"""

import re
from collections.abc import Iterable
from typing import Protocol, TypeVar

_TIME_PATTERN = re.compile(
    r"^\s*(?P<hour>\d{1,2}):(?P<minute>\d{2})\s*(?P<meridiem>[AaPp][Mm])?\s*$"
)
NOON = 12
HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
BREAKFAST_BEFORE_HOUR = 10
LUNCH_BEFORE_HOUR = 14
DINNER_BEFORE_HOUR = 20


class _Timed(Protocol):
    id: int
    time: str


TimedT = TypeVar("TimedT", bound=_Timed)


def parse_meal_time(value: str) -> str | None:
    """Return a zero-padded 24-hour ``HH:MM`` string, or None if malformed.

    12-hour values need an hour of 1-12, 24-hour values an hour of 0-23.
    """
    match = _TIME_PATTERN.match(value)
    if match is None:
        return None
    hour = int(match.group("hour"))
    minute = match.group("minute")
    meridiem = (match.group("meridiem") or "").upper()
    if int(minute) >= MINUTES_PER_HOUR:
        return None
    if meridiem:
        if not 1 <= hour <= NOON:
            return None
        if meridiem == "AM" and hour == NOON:
            hour = 0
        elif meridiem == "PM" and hour != NOON:
            hour += NOON
    elif hour >= HOURS_PER_DAY:
        return None
    return f"{hour:02d}:{minute}"


def normalize_meal_time(value: str) -> str:
    """Return the ``HH:MM`` form of a time; malformed values come back stripped."""
    parsed = parse_meal_time(value)
    return value.strip() if parsed is None else parsed


def sort_meals_chronologically(meals: Iterable[TimedT]) -> list[TimedT]:
    """Sort meals by time, then by id; malformed times go last."""
    return sorted(meals, key=_chronological_key)


def _chronological_key(meal: _Timed) -> tuple[bool, str, int]:
    malformed = parse_meal_time(meal.time) is None
    return (malformed, normalize_meal_time(meal.time), meal.id)


def default_meal_name(hour: int) -> str:
    """Return the meal name used when food is logged without a meal."""
    if hour < BREAKFAST_BEFORE_HOUR:
        return "Breakfast"
    if hour < LUNCH_BEFORE_HOUR:
        return "Lunch"
    if hour < DINNER_BEFORE_HOUR:
        return "Dinner"
    return "Snack"
