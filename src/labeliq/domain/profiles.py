"""Domain models for user health profiles."""

from dataclasses import dataclass, field
from uuid import UUID

from labeliq.domain.scoring import BiometricProfile, HealthGoal, Sex


@dataclass(frozen=True)
class HealthProfile:
    """A user's stored health profile."""

    user_id: UUID
    age: int | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    gender: str | None = None
    allergies: list[str] = field(default_factory=list)
    dietary_preference: str | None = None
    health_goal: HealthGoal = HealthGoal.MAINTAIN_HEALTH

    def to_biometrics(self) -> BiometricProfile | None:
        """Return scoring inputs, or None while measurements are missing."""
        if self.age is None or self.height_cm is None or self.weight_kg is None:
            return None
        return BiometricProfile(
            age=self.age,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            sex=parse_sex(self.gender),
        )


def parse_sex(raw: str | None) -> Sex | str:
    """Map a stored gender string onto a formula category.

    Unrecognised values are returned unchanged; the BMR calculation falls
    back to zero for them.
    """
    if raw is None:
        return ""
    cleaned = raw.strip().lower()
    if cleaned in {"male", "m"}:
        return Sex.MALE
    if cleaned in {"female", "f"}:
        return Sex.FEMALE
    return cleaned
