"""User-related business logic."""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from nutrition_log.domain.errors import NotFoundError, ValidationError
from nutrition_log.domain.models import DailyTargets, UserRecord

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return the user for an id, if present."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user for a username, if present."""

    def create_user(
        self, username: str, password: str, targets: DailyTargets
    ) -> UserRecord:
        """Create and return a new user record."""

    def update_targets(self, user_id: int, targets: DailyTargets) -> UserRecord | None:
        """Replace the user's daily targets and return the updated user."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def get_user(self, user_id: int) -> UserRecord:
        """Return a user or raise NotFoundError."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def create_user(
        self, username: str, password: str, targets: DailyTargets | None = None
    ) -> UserRecord:
        """Create a user with a unique username."""
        cleaned = username.strip()
        if not cleaned:
            raise ValidationError("username must not be empty")
        if not password:
            raise ValidationError("password must not be empty")
        resolved_targets = _validate_targets(targets or DailyTargets())
        if self.repository.get_by_username(cleaned) is not None:
            raise ValidationError(f"username {cleaned!r} is already taken")
        user = self.repository.create_user(cleaned, password, resolved_targets)
        logger.info("Created user", extra={"user_id": user.id})
        return user

    def ensure_user(self, username: str, password: str) -> UserRecord:
        """Return the user with the username, creating it when absent."""
        existing = self.repository.get_by_username(username)
        if existing:
            return existing
        return self.create_user(username, password)

    def update_targets(self, user_id: int, targets: DailyTargets) -> UserRecord:
        """Replace the user's daily targets."""
        resolved = _validate_targets(targets)
        updated = self.repository.update_targets(user_id, resolved)
        if updated is None:
            raise NotFoundError("User", user_id)
        logger.info("Updated daily targets", extra={"user_id": user_id})
        return updated


def _validate_targets(targets: DailyTargets) -> DailyTargets:
    for name in ("calories", "protein_g", "carbs_g", "fat_g"):
        value = getattr(targets, name)
        if not isinstance(value, int | float) or isinstance(value, bool):
            raise ValidationError(f"target {name} must be a number")
        if not math.isfinite(value):
            raise ValidationError(f"target {name} must be finite")
        if value <= 0:
            raise ValidationError(f"target {name} must be positive")
    return DailyTargets(
        calories=float(targets.calories),
        protein_g=float(targets.protein_g),
        carbs_g=float(targets.carbs_g),
        fat_g=float(targets.fat_g),
    )
