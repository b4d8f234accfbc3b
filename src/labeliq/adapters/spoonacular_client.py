"""Spoonacular image classification client."""

from dataclasses import dataclass

import httpx

from labeliq.domain.vision import ImageClassification
from labeliq.services.analysis import ImageClassifier


@dataclass
class HttpxSpoonacularClient(ImageClassifier):
    """Classifies food images by URL via Spoonacular."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxSpoonacularClient":
        """Create a client that owns its HTTP session."""
        return cls(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
        )

    async def classify_image(self, image_url: str) -> ImageClassification:
        """Return the predicted food category for an image URL."""
        response = await self.http_client.get(
            f"{self.base_url}/food/images/classify",
            params={"imageUrl": image_url},
            headers={"x-api-key": self.api_key},
            timeout=20,
        )
        response.raise_for_status()
        payload = response.json()
        return ImageClassification(
            category=str(payload.get("category") or ""),
            probability=float(payload.get("probability") or 0.0),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
