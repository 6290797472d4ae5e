"""Display formatting helpers for reports."""

from decimal import ROUND_HALF_UP, Decimal

from nutrition_log.meal_times import NOON, parse_meal_time


def format_number(
    value: float, decimals: int = 0, prefix: str = "", suffix: str = ""
) -> str:
    """Format a number with thousands separators, rounding halves up."""
    rounded = round_half_up(value, decimals)
    return f"{prefix}{rounded:,.{decimals}f}{suffix}"


def round_half_up(value: float, decimals: int = 0) -> Decimal:
    """Round the exact binary value of a float, sending halves away from zero."""
    return Decimal(value).quantize(Decimal(1).scaleb(-decimals), ROUND_HALF_UP)


def format_calories(calories: float) -> str:
    """Format a calorie value, e.g. ``1,250 cal``."""
    return format_number(calories) + " cal"


def format_macro(value: float, unit: str = "g") -> str:
    """Format a macronutrient value, e.g. ``12.5g``."""
    return format_number(value, decimals=1, suffix=unit)


def format_percentage(value: float, total: float) -> str:
    """Format progress toward a target, capped at 100%."""
    if total == 0:
        return "0%"
    percentage = min(100.0, value / total * 100)
    return f"{round_half_up(percentage)}%"


def format_time(value: str) -> str:
    """Format a meal time as a 12-hour string."""
    if "AM" in value.upper() or "PM" in value.upper():
        return value
    normalized = parse_meal_time(value)
    if normalized is None:
        return value
    hours, _, minutes = normalized.partition(":")
    hour = int(hours)
    meridiem = "PM" if hour >= NOON else "AM"
    return f"{hour % NOON or NOON}:{minutes} {meridiem}"
