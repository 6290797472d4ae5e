"""Domain models for the food catalog."""

from dataclasses import dataclass

from nutrition_log.domain.nutrition import MacroProfile


@dataclass(frozen=True)
class NewFoodItem:
    """Validated fields for a catalog entry that has not been stored yet."""

    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    serving_size: float
    serving_unit: str


@dataclass(frozen=True)
class FoodItem:
    """Catalog entry with nutrient values for one serving."""

    id: int
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    serving_size: float
    serving_unit: str

    @property
    def macros(self) -> MacroProfile:
        """Return the per-serving nutrient profile."""
        return MacroProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )
