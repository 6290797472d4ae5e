"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroProfile:
    """Calories and macronutrients for a serving, item, meal or day."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


ZERO_MACROS = MacroProfile(calories=0.0, protein_g=0.0, carbs_g=0.0, fat_g=0.0)


def add_macros(left: MacroProfile, right: MacroProfile) -> MacroProfile:
    """Return the element-wise sum of two profiles."""
    return MacroProfile(
        calories=left.calories + right.calories,
        protein_g=left.protein_g + right.protein_g,
        carbs_g=left.carbs_g + right.carbs_g,
        fat_g=left.fat_g + right.fat_g,
    )


def scale_macros(base: MacroProfile, factor: float) -> MacroProfile:
    """Return the profile multiplied by a serving factor."""
    return MacroProfile(
        calories=base.calories * factor,
        protein_g=base.protein_g * factor,
        carbs_g=base.carbs_g * factor,
        fat_g=base.fat_g * factor,
    )
