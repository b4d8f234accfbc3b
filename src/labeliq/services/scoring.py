"""Food scoring and daily aggregation.

Everything here is a pure function of its inputs. Numeric edge cases are
returned as values rather than raised: an unknown sex category gives a zero
BMR, and an empty day scores NaN.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from labeliq.domain.scoring import (
    NUTRIENT_FIELDS,
    BiometricProfile,
    DailyAggregate,
    DailyLogEntry,
    HealthGoal,
    NutrientProfile,
    NutrientTotals,
    Sex,
    value_or_zero,
)

ACTIVITY_MULTIPLIER = 1.375
LOSE_WEIGHT_DEFICIT = 500.0
GAIN_MUSCLE_SURPLUS = 300.0

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreTerm:
    """One weighted, normalized nutrient in a goal formula.

    When ``relative_to_calorie_goal`` is set the upper bound is
    ``calorie_goal + upper`` instead of the fixed ``upper``.
    """

    nutrient: str
    weight: float
    upper: float
    relative_to_calorie_goal: bool = False

    def __post_init__(self) -> None:
        if self.nutrient not in NUTRIENT_FIELDS:
            raise ValueError(f"Unknown nutrient in score term: {self.nutrient}")
        if not self.relative_to_calorie_goal and self.upper <= 0:
            raise ValueError(
                f"Score term for {self.nutrient} needs an upper bound above 0"
            )

    def bound(self, calorie_goal: float) -> float:
        """Return the normalization upper bound for a calorie target."""
        if self.relative_to_calorie_goal:
            return calorie_goal + self.upper
        return self.upper

    def contribution(self, nutrients: NutrientProfile, calorie_goal: float) -> float:
        """Return the signed, weighted contribution of this term."""
        value = getattr(nutrients, self.nutrient)
        return self.weight * normalize(value, 0.0, self.bound(calorie_goal))


def _calories_vs_goal(weight: float, offset: float = 0.0) -> ScoreTerm:
    return ScoreTerm("calories", weight, offset, relative_to_calorie_goal=True)


GOAL_FORMULAS: Mapping[HealthGoal, tuple[ScoreTerm, ...]] = MappingProxyType(
    {
        HealthGoal.LOSE_WEIGHT: (
            _calories_vs_goal(0.3),
            ScoreTerm("carbs", -0.3, 100),
            ScoreTerm("protein", 0.2, 30),
            ScoreTerm("fat", -0.2, 20),
        ),
        HealthGoal.GAIN_MUSCLE: (
            _calories_vs_goal(0.2, offset=300),
            ScoreTerm("carbs", 0.2, 150),
            ScoreTerm("protein", 0.4, 60),
            ScoreTerm("fat", 0.2, 40),
        ),
        HealthGoal.IMPROVE_ENDURANCE: (
            _calories_vs_goal(0.25),
            ScoreTerm("carbs", 0.4, 150),
            ScoreTerm("protein", 0.25, 50),
            ScoreTerm("fat", 0.1, 30),
        ),
        HealthGoal.INCREASE_FLEXIBILITY: (
            ScoreTerm("calories", 0.3, 500),
            ScoreTerm("carbs", 0.2, 100),
            ScoreTerm("protein", 0.2, 30),
            ScoreTerm("fat", 0.2, 40),
            ScoreTerm("fiber", 0.1, 30),
        ),
        HealthGoal.MAINTAIN_HEALTH: (
            _calories_vs_goal(0.2),
            ScoreTerm("carbs", 0.2, 150),
            ScoreTerm("protein", 0.2, 50),
            ScoreTerm("fat", 0.2, 30),
            ScoreTerm("fiber", 0.1, 30),
            ScoreTerm("sodium", -0.1, 2000),
        ),
    }
)

_missing_goals = set(HealthGoal) - set(GOAL_FORMULAS)
if _missing_goals:
    raise RuntimeError(f"No score formula for goals: {sorted(_missing_goals)}")


def compute_bmr(profile: BiometricProfile) -> float:
    """Return the Mifflin-St Jeor basal metabolic rate in kcal/day."""
    base = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age
    if profile.sex == Sex.MALE:
        return base + 5
    if profile.sex == Sex.FEMALE:
        return base - 161
    _logger.debug("Unknown sex category %r, using zero BMR", profile.sex)
    return 0.0


def compute_tdee(profile: BiometricProfile) -> float:
    """Return total daily energy expenditure at moderate activity."""
    return compute_bmr(profile) * ACTIVITY_MULTIPLIER


def calorie_goal(profile: BiometricProfile, goal: HealthGoal) -> float:
    """Return the daily calorie target for a goal."""
    tdee = compute_tdee(profile)
    if goal == HealthGoal.LOSE_WEIGHT:
        return tdee - LOSE_WEIGHT_DEFICIT
    if goal == HealthGoal.GAIN_MUSCLE:
        return tdee + GAIN_MUSCLE_SURPLUS
    return tdee


def normalize(value: float | None, lower: float, upper: float) -> float:
    """Rescale a value clamped to ``[lower, upper]`` onto 0-100.

    A missing value counts as zero. An empty or inverted range yields 0.
    """
    if upper <= lower:
        return 0.0
    clamped = min(max(value_or_zero(value), lower), upper)
    return (clamped - lower) / (upper - lower) * 100


def score_food(
    nutrients: NutrientProfile, profile: BiometricProfile, goal: HealthGoal
) -> float:
    """Score one food for a person and goal; the result is not clamped."""
    target = calorie_goal(profile, goal)
    return sum(
        term.contribution(nutrients, target) for term in GOAL_FORMULAS[goal]
    )


def daily_score(scores: list[float], weights: list[float] | None = None) -> float:
    """Return the (optionally weighted) mean of item scores.

    An empty list gives NaN, matching an IEEE 0/0.
    """
    if weights is None:
        if not scores:
            return math.nan
        return math.fsum(scores) / len(scores)
    if len(weights) != len(scores):
        raise ValueError("weights must match scores in length")
    total_weight = math.fsum(weights)
    if total_weight == 0:
        return math.nan
    return math.fsum(s * w for s, w in zip(scores, weights, strict=True)) / total_weight


def sum_totals(entries: Iterable[DailyLogEntry]) -> NutrientTotals:
    """Sum per-serving nutrients scaled by servings eaten."""
    sums = dict.fromkeys(NUTRIENT_FIELDS, 0.0)
    for entry in entries:
        _add_entry(sums, entry)
    return NutrientTotals(**sums)


def aggregate_daily(
    entries: Iterable[DailyLogEntry],
    profile: BiometricProfile,
    goal: HealthGoal,
    *,
    weighted: bool = False,
) -> DailyAggregate:
    """Score every entry and sum nutrient totals in a single pass."""
    sums = dict.fromkeys(NUTRIENT_FIELDS, 0.0)
    scores: list[float] = []
    servings: list[float] = []
    for entry in entries:
        _add_entry(sums, entry)
        scores.append(score_food(entry.nutrients, profile, goal))
        servings.append(entry.servings)
    return DailyAggregate(
        daily_score=daily_score(scores, servings if weighted else None),
        totals=NutrientTotals(**sums),
        item_scores=scores,
    )


def _add_entry(sums: dict[str, float], entry: DailyLogEntry) -> None:
    for name in NUTRIENT_FIELDS:
        sums[name] += value_or_zero(getattr(entry.nutrients, name)) * entry.servings
