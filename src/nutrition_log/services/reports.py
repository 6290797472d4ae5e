"""HTML export of a day's nutrition data."""

from collections.abc import Callable
from datetime import datetime
from html import escape

from nutrition_log.domain.meals import MealDetail
from nutrition_log.domain.stats import DailyData
from nutrition_log.formatting import (
    format_calories,
    format_macro,
    format_number,
    format_percentage,
    format_time,
)


def render_daily_report(data: DailyData, generated_at: datetime | None = None) -> str:
    """Render a standalone HTML report for one day."""
    stamp = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
    day_label = escape(format_report_date(data))
    cards = "\n".join(
        _nutrient_card(css, label, value, target, formatter)
        for css, label, value, target, formatter in (
            (
                "calories",
                "Calories",
                data.totals.calories,
                data.targets.calories,
                format_calories,
            ),
            (
                "protein",
                "Protein",
                data.totals.protein_g,
                data.targets.protein_g,
                format_macro,
            ),
            (
                "carbs",
                "Carbs",
                data.totals.carbs_g,
                data.targets.carbs_g,
                format_macro,
            ),
            ("fat", "Fat", data.totals.fat_g, data.targets.fat_g, format_macro),
        )
    )
    if data.meals:
        meals_html = "\n".join(_meal_card(meal) for meal in data.meals)
    else:
        meals_html = (
            '<div class="empty-meals"><p>No meals recorded for this day.</p></div>'
        )
    return _REPORT_TEMPLATE.format(
        day=day_label,
        cards=cards,
        meals=meals_html,
        generated=escape(stamp),
    )


def format_report_date(data: DailyData) -> str:
    """Return a label like ``Sunday, Mar 10``."""
    return f"{data.date:%A}, {data.date:%b} {data.date.day}"


def _nutrient_card(
    css: str,
    label: str,
    value: float,
    target: float,
    formatter: Callable[[float], str],
) -> str:
    return (
        f'<div class="nutrition-card {css}">'
        f'<div class="label">{label}</div>'
        f'<div class="value">{formatter(value)}</div>'
        f'<div class="target">Target: {formatter(target)}</div>'
        f'<div class="percentage">{format_percentage(value, target)}</div>'
        "</div>"
    )


def _meal_card(meal: MealDetail) -> str:
    if meal.items:
        rows = "\n".join(
            "<tr>"
            f"<td>{escape(item.food_item.name)}</td>"
            f"<td>{format_number(item.quantity, decimals=1)} "
            f"{escape(item.food_item.serving_unit)}</td>"
            f"<td>{format_number(item.food_item.calories * item.quantity)} cal</td>"
            f"<td>{format_number(item.food_item.protein_g * item.quantity)} g</td>"
            f"<td>{format_number(item.food_item.carbs_g * item.quantity)} g</td>"
            f"<td>{format_number(item.food_item.fat_g * item.quantity)} g</td>"
            "</tr>"
            for item in meal.items
        )
        content = (
            '<table class="food-items-table"><thead><tr>'
            "<th>Food Item</th><th>Quantity</th><th>Calories</th>"
            "<th>Protein</th><th>Carbs</th><th>Fat</th>"
            f"</tr></thead><tbody>{rows}</tbody><tfoot><tr>"
            '<td colspan="2"><strong>Total</strong></td>'
            f"<td><strong>{format_number(meal.total_calories)} cal</strong></td>"
            f"<td><strong>{format_number(meal.total_protein_g)} g</strong></td>"
            f"<td><strong>{format_number(meal.total_carbs_g)} g</strong></td>"
            f"<td><strong>{format_number(meal.total_fat_g)} g</strong></td>"
            "</tr></tfoot></table>"
        )
    else:
        content = '<p class="empty-items">No food items added to this meal.</p>'
    return (
        '<div class="meal-card"><div class="meal-header">'
        f"<h3>{escape(meal.name)} "
        f'<span class="meal-time">{escape(format_time(meal.time))}</span></h3>'
        '<div class="meal-macros">'
        f'<span class="calories">{format_calories(meal.total_calories)}</span>'
        f'<span class="macro protein">P: {format_macro(meal.total_protein_g)}</span>'
        f'<span class="macro carbs">C: {format_macro(meal.total_carbs_g)}</span>'
        f'<span class="macro fat">F: {format_macro(meal.total_fat_g)}</span>'
        f'</div></div><div class="meal-content">{content}</div></div>'
    )


_REPORT_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Nutrition Report - {day}</title>
    <style>
      body {{ font-family: ui-sans-serif, system-ui, sans-serif; margin: 0;
             padding: 16px; background: #f9fafb; color: #1f2937; }}
      .container {{ max-width: 800px; margin: 0 auto; background: white;
                   border-radius: 8px; overflow: hidden; }}
      .header {{ background: #8b5cf6; color: white; padding: 24px;
                text-align: center; }}
      .summary-grid {{ display: grid; grid-template-columns: repeat(4, 1fr);
                      gap: 16px; padding: 24px; }}
      .nutrition-card {{ text-align: center; padding: 16px; }}
      .meal-card {{ margin: 0 24px 16px; border: 1px solid #f3f4f6;
                   border-radius: 8px; }}
      .meal-header {{ display: flex; justify-content: space-between;
                     padding: 16px; }}
      .meal-content {{ padding: 16px; }}
      .food-items-table {{ width: 100%; border-collapse: collapse; }}
      .empty-meals, .empty-items {{ color: #6b7280; text-align: center; }}
      .footer {{ padding: 16px; text-align: center; font-size: 12px;
                color: #6b7280; }}
    </style>
  </head>
  <body>
    <div class="container">
      <div class="header">
        <h1>Nutrition Report</h1>
        <div class="date">{day}</div>
      </div>
      <div class="summary-grid">
{cards}
      </div>
      <div class="meals-container">
        <h2>Meals</h2>
{meals}
      </div>
      <div class="footer">Generated by Nutrition Log - {generated}</div>
    </div>
  </body>
</html>
"""
