"""Pydantic models for API payloads."""

import datetime as dt

from pydantic import BaseModel, Field, PositiveFloat, PositiveInt

from nutrition_log.domain.models import (
    DEFAULT_CALORIE_TARGET,
    DEFAULT_CARBS_TARGET,
    DEFAULT_FAT_TARGET,
    DEFAULT_PROTEIN_TARGET,
    DailyTargets,
    UserRecord,
)


class TargetsPayload(BaseModel):
    """Daily targets payload."""

    calories: PositiveFloat = DEFAULT_CALORIE_TARGET
    protein_g: PositiveFloat = DEFAULT_PROTEIN_TARGET
    carbs_g: PositiveFloat = DEFAULT_CARBS_TARGET
    fat_g: PositiveFloat = DEFAULT_FAT_TARGET

    def to_domain(self) -> DailyTargets:
        return DailyTargets(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )


class UserCreate(BaseModel):
    """New user payload."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    daily_targets: TargetsPayload = Field(default_factory=TargetsPayload)


class UserOut(BaseModel):
    """User representation without the password."""

    id: int
    username: str
    daily_targets: TargetsPayload

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserOut":
        targets = user.daily_targets
        return cls(
            id=user.id,
            username=user.username,
            daily_targets=TargetsPayload(
                calories=targets.calories,
                protein_g=targets.protein_g,
                carbs_g=targets.carbs_g,
                fat_g=targets.fat_g,
            ),
        )


class FoodItemCreate(BaseModel):
    """New catalog entry payload."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein_g: float = Field(ge=0)
    carbs_g: float = Field(ge=0)
    fat_g: float = Field(ge=0)
    serving_size: PositiveFloat
    serving_unit: str = Field(min_length=1)


class MealCreate(BaseModel):
    """New meal payload."""

    user_id: PositiveInt
    name: str = Field(min_length=1)
    date: dt.date
    time: str = Field(min_length=1)


class MealUpdate(BaseModel):
    """Partial meal update payload."""

    name: str | None = Field(default=None, min_length=1)
    date: dt.date | None = None
    time: str | None = Field(default=None, min_length=1)


class MealItemCreate(BaseModel):
    """New meal item payload."""

    meal_id: PositiveInt
    food_item_id: PositiveInt
    quantity: PositiveFloat


class MealItemUpdate(BaseModel):
    """Meal item quantity payload."""

    quantity: PositiveFloat


class QuickLogPayload(BaseModel):
    """Log a food on a day, optionally into a chosen meal."""

    date: dt.date
    food_item_id: PositiveInt
    quantity: PositiveFloat
    meal_id: PositiveInt | None = None
