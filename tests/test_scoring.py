"""Tests for food scoring and daily aggregation."""

import math

import pytest

from labeliq.domain.scoring import (
    BiometricProfile,
    DailyLogEntry,
    HealthGoal,
    NutrientProfile,
    NutrientTotals,
    Sex,
)
from labeliq.services.scoring import (
    GOAL_FORMULAS,
    ScoreTerm,
    aggregate_daily,
    calorie_goal,
    compute_bmr,
    compute_tdee,
    daily_score,
    normalize,
    score_food,
    sum_totals,
)


def test_tdee_for_reference_male(male_profile: BiometricProfile) -> None:
    assert compute_bmr(male_profile) == pytest.approx(1673.75)
    assert compute_tdee(male_profile) == pytest.approx(2301.40625)


def test_tdee_for_female_uses_female_formula() -> None:
    profile = BiometricProfile(age=25, height_cm=165.0, weight_kg=60.0, sex=Sex.FEMALE)

    assert compute_bmr(profile) == pytest.approx(1345.25)
    assert compute_tdee(profile) == pytest.approx(1345.25 * 1.375)


def test_sex_accepts_plain_strings() -> None:
    as_enum = BiometricProfile(age=40, height_cm=180.0, weight_kg=80.0, sex=Sex.MALE)
    as_text = BiometricProfile(age=40, height_cm=180.0, weight_kg=80.0, sex="male")

    assert compute_bmr(as_text) == compute_bmr(as_enum)


def test_unknown_sex_falls_back_to_zero_bmr() -> None:
    profile = BiometricProfile(age=30, height_cm=170.0, weight_kg=65.0, sex="other")

    assert compute_bmr(profile) == 0.0
    assert compute_tdee(profile) == 0.0


def test_tdee_increases_with_weight_and_height_and_drops_with_age() -> None:
    weights = [
        compute_tdee(BiometricProfile(30, 170.0, weight, Sex.FEMALE))
        for weight in (50.0, 60.0, 70.0, 80.0)
    ]
    heights = [
        compute_tdee(BiometricProfile(30, height, 70.0, Sex.MALE))
        for height in (150.0, 165.0, 180.0)
    ]
    ages = [
        compute_tdee(BiometricProfile(age, 170.0, 70.0, Sex.MALE))
        for age in (20, 35, 50)
    ]

    assert weights == sorted(weights) and len(set(weights)) == len(weights)
    assert heights == sorted(heights) and len(set(heights)) == len(heights)
    assert ages == sorted(ages, reverse=True) and len(set(ages)) == len(ages)


def test_calorie_goal_offsets(male_profile: BiometricProfile) -> None:
    tdee = compute_tdee(male_profile)

    assert calorie_goal(male_profile, HealthGoal.LOSE_WEIGHT) == tdee - 500
    assert calorie_goal(male_profile, HealthGoal.GAIN_MUSCLE) == tdee + 300
    assert calorie_goal(male_profile, HealthGoal.MAINTAIN_HEALTH) == tdee
    assert calorie_goal(male_profile, HealthGoal.IMPROVE_ENDURANCE) == tdee
    assert calorie_goal(male_profile, HealthGoal.INCREASE_FLEXIBILITY) == tdee


def test_normalize_boundaries_and_clamping() -> None:
    assert normalize(0, 0, 50) == 0
    assert normalize(50, 0, 50) == 100
    assert normalize(25, 0, 50) == 50
    assert normalize(-10, 0, 50) == 0
    assert normalize(75, 0, 50) == 100
    assert normalize(15, 10, 20) == 50


def test_normalize_treats_missing_as_zero() -> None:
    assert normalize(None, 0, 30) == 0
    assert normalize(None, -10, 10) == 50


def test_normalize_degenerate_range_contributes_nothing() -> None:
    assert normalize(100, 0, 0) == 0
    assert normalize(100, 0, -500) == 0


def test_every_goal_has_a_formula() -> None:
    assert set(GOAL_FORMULAS) == set(HealthGoal)


def test_score_term_rejects_bad_bounds() -> None:
    with pytest.raises(ValueError):
        ScoreTerm("protein", 0.2, 0)
    with pytest.raises(ValueError):
        ScoreTerm("sugar", 0.2, 10)


def test_score_term_relative_bound_follows_calorie_goal() -> None:
    term = ScoreTerm("calories", 0.2, 300, relative_to_calorie_goal=True)

    assert term.bound(2000) == 2300


@pytest.mark.parametrize("goal", list(HealthGoal))
def test_score_food_with_no_nutrients_is_finite(
    goal: HealthGoal, male_profile: BiometricProfile
) -> None:
    score = score_food(NutrientProfile(), male_profile, goal)

    assert math.isfinite(score)
    assert score == 0


@pytest.mark.parametrize("goal", list(HealthGoal))
def test_score_food_with_unknown_sex_is_finite(
    goal: HealthGoal, sample_nutrients: NutrientProfile
) -> None:
    profile = BiometricProfile(age=30, height_cm=170.0, weight_kg=65.0, sex="x")

    assert math.isfinite(score_food(sample_nutrients, profile, goal))


def test_score_food_maintain_health(
    male_profile: BiometricProfile, sample_nutrients: NutrientProfile
) -> None:
    target = compute_tdee(male_profile)
    expected = (
        0.2 * 300 / target * 100
        + 0.2 * 40 / 150 * 100
        + 0.2 * 20 / 50 * 100
        + 0.2 * 10 / 30 * 100
        + 0.1 * 5 / 30 * 100
        - 0.1 * 500 / 2000 * 100
    )

    score = score_food(sample_nutrients, male_profile, HealthGoal.MAINTAIN_HEALTH)

    assert score == pytest.approx(expected)


def test_score_food_lose_weight_can_go_negative(
    male_profile: BiometricProfile,
) -> None:
    nutrients = NutrientProfile(carbs=100.0, protein=30.0)

    score = score_food(nutrients, male_profile, HealthGoal.LOSE_WEIGHT)

    assert score == pytest.approx(-10.0)


def test_score_food_gain_muscle_uses_raised_calorie_bound(
    male_profile: BiometricProfile,
) -> None:
    at_bound = compute_tdee(male_profile) + 600
    nutrients = NutrientProfile(calories=at_bound, protein=60.0)

    score = score_food(nutrients, male_profile, HealthGoal.GAIN_MUSCLE)

    assert score == pytest.approx(20.0 + 40.0)


def test_score_food_flexibility_maxes_at_one_hundred(
    male_profile: BiometricProfile,
) -> None:
    nutrients = NutrientProfile(
        calories=900.0, carbs=100.0, protein=30.0, fat=40.0, fiber=30.0
    )

    score = score_food(nutrients, male_profile, HealthGoal.INCREASE_FLEXIBILITY)

    assert score == pytest.approx(100.0)


def test_daily_score_is_mean() -> None:
    assert daily_score([50.0, 70.0]) == pytest.approx(60.0)


def test_daily_score_empty_is_nan() -> None:
    assert math.isnan(daily_score([]))
    assert math.isnan(daily_score([], weights=[]))


def test_daily_score_weighted_by_servings() -> None:
    assert daily_score([50.0, 80.0], weights=[1.0, 2.0]) == pytest.approx(70.0)


def test_daily_score_rejects_mismatched_weights() -> None:
    with pytest.raises(ValueError):
        daily_score([50.0, 80.0], weights=[1.0])


def test_aggregate_uniform_items_returns_item_score(
    male_profile: BiometricProfile, sample_nutrients: NutrientProfile
) -> None:
    single = score_food(sample_nutrients, male_profile, HealthGoal.IMPROVE_ENDURANCE)
    entries = [DailyLogEntry(sample_nutrients, servings=1.0) for _ in range(4)]

    result = aggregate_daily(entries, male_profile, HealthGoal.IMPROVE_ENDURANCE)

    assert result.daily_score == pytest.approx(single)
    assert result.item_scores == [single] * 4


def test_aggregate_empty_day(male_profile: BiometricProfile) -> None:
    result = aggregate_daily([], male_profile, HealthGoal.MAINTAIN_HEALTH)

    assert math.isnan(result.daily_score)
    assert result.totals == NutrientTotals()
    assert result.item_scores == []


def test_aggregate_accepts_single_pass_iterables(
    male_profile: BiometricProfile,
) -> None:
    entries = (
        DailyLogEntry(NutrientProfile(calories=cal), servings=1.0)
        for cal in (100.0, 200.0)
    )

    result = aggregate_daily(entries, male_profile, HealthGoal.MAINTAIN_HEALTH)

    assert len(result.item_scores) == 2
    assert result.totals.calories == pytest.approx(300.0)


def test_sum_totals_scales_by_servings_and_skips_missing() -> None:
    entries = [
        DailyLogEntry(NutrientProfile(calories=120.0, protein=4.0), servings=2.0),
        DailyLogEntry(NutrientProfile(calories=80.0, sodium=150.0), servings=0.5),
        DailyLogEntry(NutrientProfile(), servings=3.0),
    ]

    totals = sum_totals(entries)

    assert totals.calories == pytest.approx(280.0)
    assert totals.protein == pytest.approx(8.0)
    assert totals.sodium == pytest.approx(75.0)
    assert totals.carbs == 0.0
    assert len(entries) == 3
