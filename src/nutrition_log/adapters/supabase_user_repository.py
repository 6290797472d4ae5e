"""Supabase repository for users."""

from dataclasses import asdict, dataclass

from supabase import Client

from nutrition_log.domain.models import DailyTargets, UserRecord
from nutrition_log.services.users import UserRepository

_COLUMNS = "id, username, password, daily_targets"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user data."""

    client: Client

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return a user by id."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return a user by username."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("username", username)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def create_user(
        self, username: str, password: str, targets: DailyTargets
    ) -> UserRecord:
        """Insert a user row."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "username": username,
                    "password": password,
                    "daily_targets": asdict(targets),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user")
        return _parse_user(response.data[0])

    def update_targets(self, user_id: int, targets: DailyTargets) -> UserRecord | None:
        """Replace a user's daily targets."""
        response = (
            self.client.table("users")
            .update({"daily_targets": asdict(targets)})
            .eq("id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    raw_targets = row.get("daily_targets") or {}
    targets = DailyTargets(
        **{
            key: float(value)
            for key, value in dict(raw_targets).items()
            if key in {"calories", "protein_g", "carbs_g", "fat_g"}
        }
    )
    return UserRecord(
        id=int(row["id"]),
        username=str(row["username"]),
        password=str(row.get("password", "")),
        daily_targets=targets,
    )
