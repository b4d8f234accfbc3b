"""Nutrition lookup domain models."""

from dataclasses import dataclass

from labeliq.domain.scoring import NutrientProfile


@dataclass(frozen=True)
class FoodSummary:
    """Summary information about a food from FDC."""

    fdc_id: int
    description: str
    brand_owner: str | None
    brand_name: str | None
    data_type: str | None


@dataclass(frozen=True)
class FoodDetails:
    """Food with per-serving nutrients and serving information."""

    summary: FoodSummary
    nutrients: NutrientProfile
    serving_size: float | None
    serving_size_unit: str | None
    ingredients: str | None = None
