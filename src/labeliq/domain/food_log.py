"""Domain models for the food log."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from labeliq.domain.scoring import HealthGoal, NutrientProfile, NutrientTotals


@dataclass(frozen=True)
class FoodLogEntry:
    """A food the user logged, with per-serving nutrients."""

    id: UUID
    user_id: UUID
    description: str
    servings: float
    nutrients: NutrientProfile
    created_at: datetime
    fdc_id: str | None = None
    brand_name: str | None = None
    category: str | None = None
    serving_size: float | None = None
    serving_unit: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class DailyReport:
    """Score and nutrient totals for one day of logging."""

    day: date
    goal: HealthGoal
    tdee: float
    calorie_goal: float
    daily_score: float
    totals: NutrientTotals
    entries: list[FoodLogEntry]
    item_scores: list[float]
