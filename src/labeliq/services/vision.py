"""Macro estimation from food photos using an LLM."""

from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from labeliq.domain.vision import FoodEstimate

ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "food_name": {"type": "string"},
        "serving_description": {"type": "string"},
        "calories": {"type": "integer", "minimum": 0},
        "protein_grams": {"type": "number", "minimum": 0},
        "carb_grams": {"type": "number", "minimum": 0},
        "fat_grams": {"type": "number", "minimum": 0},
        "fiber_grams": {"type": "number", "minimum": 0},
        "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
        "reasoning": {"type": "string"},
    },
    "required": [
        "food_name",
        "serving_description",
        "calories",
        "protein_grams",
        "carb_grams",
        "fat_grams",
        "fiber_grams",
        "confidence",
        "reasoning",
    ],
    "additionalProperties": False,
}

ESTIMATE_PROMPT = (
    "You are an expert nutritionist and food recognition model. "
    "The image shows a single plate, cup or bowl of food. "
    "Infer the specific dish, the approximate serving size that is visible, "
    "and realistic macronutrients for that portion only, using typical "
    "USDA-style values. If unsure, still estimate but lower the confidence."
)


class VisionAnalysisError(RuntimeError):
    """Raised when the model reply cannot be used as a food estimate."""


class VisionClient(Protocol):
    """Interface for structured LLM image analysis."""

    async def analyze(
        self,
        *,
        model: str,
        image_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return the model's structured answer for an image URL."""


@dataclass
class VisionService:
    """Builds the estimate request and validates the model output."""

    client: VisionClient
    model: str

    async def analyze_image(self, image_url: str) -> FoodEstimate:
        """Estimate dish, portion and macros for a public image URL."""
        raw = await self.client.analyze(
            model=self.model,
            image_url=image_url,
            schema=ESTIMATE_SCHEMA,
            prompt=ESTIMATE_PROMPT,
        )
        try:
            return FoodEstimate.model_validate(raw)
        except ValidationError as exc:
            raise VisionAnalysisError(
                f"Model estimate failed validation: {exc}"
            ) from exc
