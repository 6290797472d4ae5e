"""Domain models for users and their daily targets."""

from dataclasses import dataclass, field

DEFAULT_CALORIE_TARGET = 2000.0
DEFAULT_PROTEIN_TARGET = 120.0
DEFAULT_CARBS_TARGET = 250.0
DEFAULT_FAT_TARGET = 65.0


@dataclass(frozen=True)
class DailyTargets:
    """Per-nutrient daily goals for a user."""

    calories: float = DEFAULT_CALORIE_TARGET
    protein_g: float = DEFAULT_PROTEIN_TARGET
    carbs_g: float = DEFAULT_CARBS_TARGET
    fat_g: float = DEFAULT_FAT_TARGET


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: int
    username: str
    password: str
    daily_targets: DailyTargets = field(default_factory=DailyTargets)
