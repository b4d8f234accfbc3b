"""Food log service with daily scoring."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from labeliq.domain.food_log import DailyReport, FoodLogEntry
from labeliq.domain.scoring import DailyLogEntry, HealthGoal, NutrientProfile
from labeliq.services.profiles import HealthProfileService
from labeliq.services.scoring import aggregate_daily, calorie_goal, compute_tdee

_logger = logging.getLogger(__name__)


class FoodLogRepository(Protocol):
    """Persistence interface for food log entries."""

    def create_entry(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Insert an entry and return the stored row."""

    def get_entry(self, entry_id: UUID) -> FoodLogEntry | None:
        """Return an entry by id."""

    def update_entry(
        self, entry_id: UUID, servings: float, notes: str | None
    ) -> FoodLogEntry | None:
        """Update servings and notes and return the stored row."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""

    def list_entries(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[FoodLogEntry]:
        """Return entries created in ``[start, end)``, newest first."""


@dataclass
class FoodLogService:
    """Logs foods and builds daily reports."""

    repository: FoodLogRepository
    profile_service: HealthProfileService

    def log_food(  # noqa: PLR0913
        self,
        user_id: UUID,
        description: str,
        nutrients: NutrientProfile,
        servings: float = 1.0,
        *,
        fdc_id: str | None = None,
        brand_name: str | None = None,
        category: str | None = None,
        serving_size: float | None = None,
        serving_unit: str | None = None,
        notes: str | None = None,
        created_at: datetime | None = None,
    ) -> FoodLogEntry:
        """Record a food with per-serving nutrients."""
        if servings <= 0:
            raise ValueError("servings must be positive")
        entry = FoodLogEntry(
            id=uuid4(),
            user_id=user_id,
            description=description,
            servings=servings,
            nutrients=nutrients,
            created_at=(created_at or datetime.now(tz=UTC)).astimezone(UTC),
            fdc_id=fdc_id,
            brand_name=brand_name,
            category=category,
            serving_size=serving_size,
            serving_unit=serving_unit,
            notes=notes,
        )
        return self.repository.create_entry(entry)

    def get_entry(self, user_id: UUID, entry_id: UUID) -> FoodLogEntry | None:
        """Return an entry owned by the user."""
        entry = self.repository.get_entry(entry_id)
        if entry is None or entry.user_id != user_id:
            return None
        return entry

    def update_entry(
        self, user_id: UUID, entry_id: UUID, servings: float, notes: str | None
    ) -> FoodLogEntry | None:
        """Change how much was eaten; per-serving nutrients stay untouched."""
        if servings <= 0:
            raise ValueError("servings must be positive")
        if self.get_entry(user_id, entry_id) is None:
            return None
        return self.repository.update_entry(entry_id, servings, notes)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry; returns False when it does not exist."""
        if self.get_entry(user_id, entry_id) is None:
            return False
        self.repository.delete_entry(entry_id)
        return True

    def list_for_date(self, user_id: UUID, day: date) -> list[FoodLogEntry]:
        """Return entries logged on a UTC calendar day, newest first."""
        start = datetime.combine(day, datetime.min.time(), tzinfo=UTC)
        end = start + timedelta(days=1)
        return self.repository.list_entries(user_id, start, end)

    def daily_report(
        self,
        user_id: UUID,
        day: date,
        goal: HealthGoal | None = None,
        *,
        weighted: bool = False,
    ) -> DailyReport:
        """Score a day's entries against the user's profile."""
        profile, biometrics = self.profile_service.require_biometrics(user_id)
        resolved_goal = goal or profile.health_goal
        entries = self.list_for_date(user_id, day)
        aggregate = aggregate_daily(
            (DailyLogEntry(entry.nutrients, entry.servings) for entry in entries),
            biometrics,
            resolved_goal,
            weighted=weighted,
        )
        _logger.info(
            "Daily report: user=%s day=%s goal=%s entries=%s",
            user_id,
            day.isoformat(),
            resolved_goal.value,
            len(entries),
        )
        return DailyReport(
            day=day,
            goal=resolved_goal,
            tdee=compute_tdee(biometrics),
            calorie_goal=calorie_goal(biometrics, resolved_goal),
            daily_score=aggregate.daily_score,
            totals=aggregate.totals,
            entries=entries,
            item_scores=aggregate.item_scores,
        )
