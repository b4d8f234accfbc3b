"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from labeliq.adapters.fdc_client import HttpxFdcClient
from labeliq.adapters.openai_vision_client import OpenAIVisionClient
from labeliq.adapters.spoonacular_client import HttpxSpoonacularClient
from labeliq.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from labeliq.adapters.supabase_profile_repository import (
    SupabaseHealthProfileRepository,
)
from labeliq.config import Settings
from labeliq.services.analysis import FoodAnalysisService
from labeliq.services.cache import InMemoryCache
from labeliq.services.food_log import FoodLogService
from labeliq.services.nutrition import NutritionService
from labeliq.services.profiles import HealthProfileService
from labeliq.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_service: NutritionService
    analysis_service: FoodAnalysisService
    vision_service: VisionService
    profile_service: HealthProfileService
    food_log_service: FoodLogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    classifier = HttpxSpoonacularClient.create(
        api_key=resolved_settings.spoonacular_api_key,
        base_url=resolved_settings.spoonacular_base_url,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(max_entries=resolved_settings.cache_max_entries),
        search_ttl_seconds=resolved_settings.fdc_search_ttl_seconds,
        food_ttl_seconds=resolved_settings.fdc_food_ttl_seconds,
    )
    profile_service = HealthProfileService(
        SupabaseHealthProfileRepository(supabase_client)
    )
    food_log_service = FoodLogService(
        repository=SupabaseFoodLogRepository(supabase_client),
        profile_service=profile_service,
    )
    vision_service = VisionService(
        client=OpenAIVisionClient.create(resolved_settings.openai_api_key),
        model=resolved_settings.openai_model,
    )
    analysis_service = FoodAnalysisService(
        classifier=classifier,
        nutrition_service=nutrition_service,
    )

    async def close_resources() -> None:
        await fdc_client.close()
        await classifier.close()

    return AppContainer(
        settings=resolved_settings,
        nutrition_service=nutrition_service,
        analysis_service=analysis_service,
        vision_service=vision_service,
        profile_service=profile_service,
        food_log_service=food_log_service,
        close_resources=close_resources,
    )
