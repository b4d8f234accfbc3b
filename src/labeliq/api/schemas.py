"""Request models and response serializers for the HTTP API."""

import math
from dataclasses import asdict

from pydantic import AwareDatetime, BaseModel, Field

from labeliq.domain.food_log import DailyReport, FoodLogEntry
from labeliq.domain.nutrition import FoodDetails
from labeliq.domain.profiles import HealthProfile
from labeliq.domain.scoring import HealthGoal, NutrientProfile, NutrientTotals
from labeliq.services.analysis import FoodAnalysis


class NutrientsIn(BaseModel):
    """Per-serving nutrients; omitted values stay unknown."""

    calories: float | None = Field(default=None, ge=0, le=100_000)
    protein: float | None = Field(default=None, ge=0, le=100_000)
    carbs: float | None = Field(default=None, ge=0, le=100_000)
    fat: float | None = Field(default=None, ge=0, le=100_000)
    fiber: float | None = Field(default=None, ge=0, le=100_000)
    sodium: float | None = Field(default=None, ge=0, le=100_000)

    def to_domain(self) -> NutrientProfile:
        return NutrientProfile(**self.model_dump())


class FoodLogCreate(BaseModel):
    """Body for logging a food."""

    description: str = Field(min_length=1)
    servings: float = Field(default=1.0, gt=0, le=1000)
    nutrients: NutrientsIn = Field(default_factory=NutrientsIn)
    fdc_id: str | None = None
    brand_name: str | None = None
    category: str | None = None
    serving_size: float | None = Field(default=None, gt=0)
    serving_unit: str | None = None
    notes: str | None = None
    created_at: AwareDatetime | None = None


class FoodLogUpdate(BaseModel):
    """Body for editing the amount eaten and notes."""

    servings: float = Field(gt=0, le=1000)
    notes: str | None = None


class ProfileUpdate(BaseModel):
    """Body for replacing the caller's health profile."""

    age: int | None = Field(default=None, gt=0, le=130)
    height_cm: float | None = Field(default=None, gt=0, le=300)
    weight_kg: float | None = Field(default=None, gt=0, le=700)
    gender: str | None = None
    allergies: list[str] = Field(default_factory=list)
    dietary_preference: str | None = None
    health_goal: HealthGoal | None = None


class ScoreRequest(BaseModel):
    """Body for scoring a single food."""

    nutrients: NutrientsIn
    goal: HealthGoal | None = None


def finite_or_none(value: float) -> float | None:
    """JSON has no NaN; report non-finite numbers as null."""
    if math.isfinite(value):
        return value
    return None


def serialize_nutrients(
    nutrients: NutrientProfile | NutrientTotals,
) -> dict[str, object]:
    return asdict(nutrients)


def serialize_food(food: FoodDetails) -> dict[str, object]:
    return {
        "fdc_id": food.summary.fdc_id,
        "description": food.summary.description,
        "brand_owner": food.summary.brand_owner,
        "brand_name": food.summary.brand_name,
        "data_type": food.summary.data_type,
        "ingredients": food.ingredients,
        "serving_size": food.serving_size,
        "serving_size_unit": food.serving_size_unit,
        "nutrients": serialize_nutrients(food.nutrients),
    }


def serialize_analysis(analysis: FoodAnalysis) -> dict[str, object]:
    return {
        "image_url": analysis.image_url,
        "predicted_food": analysis.predicted_food,
        "classification": analysis.classification.model_dump(),
        "foods": [serialize_food(food) for food in analysis.foods],
    }


def serialize_profile(profile: HealthProfile) -> dict[str, object]:
    return {
        "user_id": str(profile.user_id),
        "age": profile.age,
        "height_cm": profile.height_cm,
        "weight_kg": profile.weight_kg,
        "gender": profile.gender,
        "allergies": profile.allergies,
        "dietary_preference": profile.dietary_preference,
        "health_goal": profile.health_goal.value,
    }


def serialize_entry(entry: FoodLogEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "fdc_id": entry.fdc_id,
        "description": entry.description,
        "brand_name": entry.brand_name,
        "category": entry.category,
        "serving_size": entry.serving_size,
        "serving_unit": entry.serving_unit,
        "servings": entry.servings,
        "notes": entry.notes,
        "nutrients": serialize_nutrients(entry.nutrients),
        "created_at": entry.created_at.isoformat(),
    }


def serialize_report(report: DailyReport) -> dict[str, object]:
    return {
        "date": report.day.isoformat(),
        "goal": report.goal.value,
        "tdee": report.tdee,
        "calorie_goal": report.calorie_goal,
        "daily_score": finite_or_none(report.daily_score),
        "totals": serialize_nutrients(report.totals),
        "entries": [
            {**serialize_entry(entry), "score": score}
            for entry, score in zip(report.entries, report.item_scores, strict=True)
        ],
    }
