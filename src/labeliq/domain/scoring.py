"""Domain models for nutrition scoring."""

from dataclasses import dataclass
from enum import Enum


class Sex(str, Enum):
    """Biological sex category used to pick a BMR formula."""

    MALE = "male"
    FEMALE = "female"


class HealthGoal(str, Enum):
    """Health goals a user can declare."""

    LOSE_WEIGHT = "LOSE_WEIGHT"
    GAIN_MUSCLE = "GAIN_MUSCLE"
    IMPROVE_ENDURANCE = "IMPROVE_ENDURANCE"
    INCREASE_FLEXIBILITY = "INCREASE_FLEXIBILITY"
    MAINTAIN_HEALTH = "MAINTAIN_HEALTH"


@dataclass(frozen=True)
class BiometricProfile:
    """Body measurements used for energy expenditure estimates."""

    age: int
    height_cm: float
    weight_kg: float
    sex: Sex | str


@dataclass(frozen=True)
class NutrientProfile:
    """Nutrients for one reference serving; any field may be unknown."""

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    fiber: float | None = None
    sodium: float | None = None


NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sodium")


def value_or_zero(value: float | None) -> float:
    """Unwrap an optional nutrient value, treating unknown as zero."""
    if value is None:
        return 0.0
    return float(value)


@dataclass(frozen=True)
class NutrientTotals:
    """Summed nutrients for a set of log entries."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sodium: float = 0.0


@dataclass(frozen=True)
class DailyLogEntry:
    """Nutrients for a logged food and how many servings were eaten."""

    nutrients: NutrientProfile
    servings: float = 1.0


@dataclass(frozen=True)
class DailyAggregate:
    """Result of folding a day's entries into a score and totals."""

    daily_score: float
    totals: NutrientTotals
    item_scores: list[float]
