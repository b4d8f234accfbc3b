"""Supabase-backed health profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from labeliq.domain.profiles import HealthProfile
from labeliq.domain.scoring import HealthGoal
from labeliq.services.profiles import HealthProfileRepository

_COLUMNS = (
    "user_id, age, height_cm, weight_kg, gender, allergies, "
    "dietary_preference, health_goal"
)


@dataclass
class SupabaseHealthProfileRepository(HealthProfileRepository):
    """Supabase implementation for health profiles."""

    client: Client

    def get_by_user_id(self, user_id: UUID) -> HealthProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("health_profiles")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save(self, profile: HealthProfile) -> HealthProfile:
        """Upsert a profile keyed by user id."""
        response = (
            self.client.table("health_profiles")
            .upsert(
                {
                    "user_id": str(profile.user_id),
                    "age": profile.age,
                    "height_cm": profile.height_cm,
                    "weight_kg": profile.weight_kg,
                    "gender": profile.gender,
                    "allergies": profile.allergies,
                    "dietary_preference": profile.dietary_preference,
                    "health_goal": profile.health_goal.value,
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save health profile")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> HealthProfile:
    goal_raw = row.get("health_goal")
    return HealthProfile(
        user_id=UUID(str(row["user_id"])),
        age=int(row["age"]) if row.get("age") is not None else None,
        height_cm=_optional_float(row.get("height_cm")),
        weight_kg=_optional_float(row.get("weight_kg")),
        gender=row.get("gender"),
        allergies=list(row.get("allergies") or []),
        dietary_preference=row.get("dietary_preference"),
        health_goal=HealthGoal(goal_raw) if goal_raw else HealthGoal.MAINTAIN_HEALTH,
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
