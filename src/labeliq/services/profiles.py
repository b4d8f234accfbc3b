"""Health profile business logic."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from labeliq.domain.profiles import HealthProfile
from labeliq.domain.scoring import BiometricProfile

_logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "age",
    "height_cm",
    "weight_kg",
    "gender",
    "allergies",
    "dietary_preference",
    "health_goal",
)


class IncompleteProfileError(ValueError):
    """Raised when scoring needs measurements the profile lacks."""


class HealthProfileRepository(Protocol):
    """Persistence interface for health profiles."""

    def get_by_user_id(self, user_id: UUID) -> HealthProfile | None:
        """Return the profile for a user, if present."""

    def save(self, profile: HealthProfile) -> HealthProfile:
        """Insert or replace a profile and return the stored row."""


@dataclass
class HealthProfileService:
    """Reads and updates the caller's health profile."""

    repository: HealthProfileRepository

    def get_profile(self, user_id: UUID) -> HealthProfile | None:
        """Return the user's profile, if one exists."""
        return self.repository.get_by_user_id(user_id)

    def require_biometrics(
        self, user_id: UUID
    ) -> tuple[HealthProfile, BiometricProfile]:
        """Return the profile and its scoring inputs, or raise if incomplete."""
        profile = self.repository.get_by_user_id(user_id)
        biometrics = profile.to_biometrics() if profile else None
        if profile is None or biometrics is None:
            raise IncompleteProfileError(
                "Age, height and weight are required for scoring"
            )
        return profile, biometrics

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> HealthProfile:
        """Replace the editable fields of a profile, creating it if needed.

        Editable fields missing from ``changes`` are cleared, except the
        health goal which keeps its current value.
        """
        current = self.repository.get_by_user_id(user_id)
        if current is None:
            _logger.info("Creating health profile for user %s", user_id)
            current = HealthProfile(user_id=user_id)
        values: dict[str, object] = {
            name: changes.get(name) for name in EDITABLE_FIELDS
        }
        values["allergies"] = list(values["allergies"] or [])
        if values["health_goal"] is None:
            values["health_goal"] = current.health_goal
        return self.repository.save(replace(current, **values))
