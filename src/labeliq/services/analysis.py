"""Photo-to-nutrition analysis."""

import logging
from dataclasses import dataclass
from typing import Protocol

from labeliq.domain.nutrition import FoodDetails
from labeliq.domain.vision import ImageClassification
from labeliq.services.nutrition import NutritionService

UNKNOWN_FOOD = "unknown food"

_logger = logging.getLogger(__name__)


class ImageClassifier(Protocol):
    """Interface for food image classification."""

    async def classify_image(self, image_url: str) -> ImageClassification:
        """Return the predicted food category for an image URL."""


@dataclass(frozen=True)
class FoodAnalysis:
    """Classification of a photo plus matching FDC foods."""

    image_url: str
    predicted_food: str
    classification: ImageClassification
    foods: list[FoodDetails]


@dataclass
class FoodAnalysisService:
    """Classifies a food photo and looks the label up in FDC."""

    classifier: ImageClassifier
    nutrition_service: NutritionService
    search_limit: int = 5

    async def classify(self, image_url: str) -> ImageClassification:
        """Return the raw classification for an image."""
        return await self.classifier.classify_image(image_url)

    async def analyze_food(self, image_url: str) -> FoodAnalysis:
        """Classify an image and return nutrition candidates for it."""
        classification = await self.classifier.classify_image(image_url)
        predicted = classification.category.strip() or UNKNOWN_FOOD
        _logger.info(
            "Classified image as %s (p=%.2f)", predicted, classification.probability
        )
        foods = await self.nutrition_service.search(predicted, limit=self.search_limit)
        return FoodAnalysis(
            image_url=image_url,
            predicted_food=predicted,
            classification=classification,
            foods=foods,
        )
