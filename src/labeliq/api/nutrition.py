"""Food lookup and image analysis endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from labeliq.api.auth import current_user_id, require_api_token
from labeliq.api.schemas import (
    serialize_analysis,
    serialize_food,
    serialize_nutrients,
)
from labeliq.services.scoring import score_food

if TYPE_CHECKING:
    from labeliq.containers import AppContainer

router = APIRouter(
    prefix="/api", tags=["nutrition"], dependencies=[Depends(require_api_token)]
)


def _food_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Food item not found"
    )


@router.get("/nutrition/food")
async def search_food(
    request: Request,
    name: str = Query(min_length=1),
    limit: int = Query(default=5, ge=1, le=50),
) -> dict[str, object]:
    """Search FoodData Central by food name."""
    container: AppContainer = request.app.state.container
    foods = await container.nutrition_service.search(name, limit=limit)
    return {"foods": [serialize_food(food) for food in foods]}


@router.get("/nutrition/food/{fdc_id}")
async def get_food(fdc_id: int, request: Request) -> dict[str, object]:
    """Return one FoodData Central food."""
    container: AppContainer = request.app.state.container
    food = await container.nutrition_service.get_food(fdc_id)
    if food is None:
        raise _food_not_found()
    return serialize_food(food)


@router.get("/nutrition/barcode")
async def get_food_by_barcode(
    request: Request,
    barcode: str = Query(min_length=1),
) -> dict[str, object]:
    """Look up a packaged food by its UPC/GTIN barcode."""
    container: AppContainer = request.app.state.container
    food = await container.nutrition_service.get_by_barcode(barcode)
    if food is None:
        raise _food_not_found()
    return serialize_food(food)


@router.get("/classify")
async def classify_image(
    request: Request,
    image_url: str = Query(alias="imageUrl", min_length=1),
) -> dict[str, object]:
    """Classify a food photo by URL."""
    container: AppContainer = request.app.state.container
    classification = await container.analysis_service.classify(image_url)
    return classification.model_dump()


@router.post("/classify/analyze")
async def estimate_image(
    request: Request,
    image_url: str = Query(alias="imageUrl", min_length=1),
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Estimate dish, portion and macros for a food photo.

    The estimate is scored against the caller's goal when their profile has
    the measurements scoring needs; otherwise ``score`` is null.
    """
    container: AppContainer = request.app.state.container
    estimate = await container.vision_service.analyze_image(image_url)
    nutrients = estimate.to_nutrients()
    profile = container.profile_service.get_profile(user_id)
    biometrics = profile.to_biometrics() if profile else None
    score = None
    if profile is not None and biometrics is not None:
        score = score_food(nutrients, biometrics, profile.health_goal)
    return {
        **estimate.model_dump(),
        "nutrients": serialize_nutrients(nutrients),
        "goal": profile.health_goal.value if profile else None,
        "score": score,
    }


@router.post("/classify/food")
async def analyze_image(
    request: Request,
    image_url: str = Query(alias="imageUrl", min_length=1),
) -> dict[str, object]:
    """Classify a food photo and return matching FDC foods."""
    container: AppContainer = request.app.state.container
    analysis = await container.analysis_service.analyze_food(image_url)
    return serialize_analysis(analysis)
