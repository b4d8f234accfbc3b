"""Models for image classification and vision analysis."""

from pydantic import BaseModel, Field

from labeliq.domain.scoring import NutrientProfile


class FoodEstimate(BaseModel):
    """Macro estimate for the portion shown in a food photo."""

    food_name: str
    serving_description: str
    calories: int = Field(ge=0)
    protein_grams: float = Field(ge=0.0)
    carb_grams: float = Field(ge=0.0)
    fat_grams: float = Field(ge=0.0)
    fiber_grams: float = Field(ge=0.0)
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str

    def to_nutrients(self) -> NutrientProfile:
        """Return the estimate as a scoring nutrient profile."""
        return NutrientProfile(
            calories=float(self.calories),
            protein=self.protein_grams,
            carbs=self.carb_grams,
            fat=self.fat_grams,
            fiber=self.fiber_grams,
        )


class ImageClassification(BaseModel):
    """Category predicted by the image classifier."""

    category: str
    probability: float = Field(default=0.0, ge=0.0, le=1.0)
