"""Nutrition lookups against USDA FoodData Central."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from labeliq.adapters.fdc_client import FdcClient
from labeliq.domain.nutrition import FoodDetails, FoodSummary
from labeliq.domain.scoring import NutrientProfile
from labeliq.services.cache import Cache

NUTRIENT_IDS = {
    1008: "calories",
    1003: "protein",
    1005: "carbs",
    1004: "fat",
    1079: "fiber",
    1093: "sodium",
}

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class NutritionService:
    """FDC search, detail and barcode lookups with caching."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 5) -> list[FoodDetails]:
        """Search FDC foods by free text."""
        cache_key = f"fdc:search:{query.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=limit),
            action="search",
        )
        foods = [_parse_food(food) for food in payload.get("foods") or []]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        _logger.debug("FDC search: query=%s results=%s", query, len(foods))
        return foods

    async def get_food(self, fdc_id: int) -> FoodDetails | None:
        """Return details for one FDC food, or None when FDC has no such id."""
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodDetails):
            return cached

        try:
            payload = await self._call_with_retry(
                lambda: self.fdc_client.get_food(fdc_id),
                action=f"get_food:{fdc_id}",
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == httpx.codes.NOT_FOUND:
                _logger.info("No FDC food with id %s", fdc_id)
                return None
            raise
        details = _parse_food(payload)
        self.cache.set(cache_key, details, ttl_seconds=self.food_ttl_seconds)
        return details

    async def get_by_barcode(self, barcode: str) -> FoodDetails | None:
        """Return the first food matching a GTIN/UPC barcode, if any."""
        cleaned = barcode.strip()
        if not cleaned:
            return None
        results = await self.search(f"gtinUpc:{cleaned}", limit=1)
        if not results:
            _logger.info("No FDC food for barcode %s", cleaned)
            return None
        return results[0]

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call the FDC client, retrying transient failures."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "FDC %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts or _is_client_error(exc):
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _is_client_error(exc: Exception) -> bool:
    if not isinstance(exc, httpx.HTTPStatusError):
        return False
    return exc.response.is_client_error


def _status_code_from_exception(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _parse_food(payload: dict[str, object]) -> FoodDetails:
    summary = FoodSummary(
        fdc_id=int(payload["fdcId"]),
        description=str(payload.get("description") or ""),
        brand_owner=payload.get("brandOwner"),
        brand_name=payload.get("brandName"),
        data_type=payload.get("dataType"),
    )
    serving_size = payload.get("servingSize")
    return FoodDetails(
        summary=summary,
        nutrients=extract_nutrients(payload.get("foodNutrients") or []),
        serving_size=float(serving_size)
        if isinstance(serving_size, int | float)
        else None,
        serving_size_unit=payload.get("servingSizeUnit"),
        ingredients=payload.get("ingredients"),
    )


def extract_nutrients(food_nutrients: list[dict[str, object]]) -> NutrientProfile:
    """Pick the scored nutrients out of an FDC ``foodNutrients`` list.

    Search results carry ``nutrientId``/``value``; detail payloads nest the
    id under ``nutrient`` and use ``amount``. Nutrients that are absent stay
    unknown rather than zero.
    """
    values: dict[str, float] = {}
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        name = NUTRIENT_IDS.get(nutrient_id)
        if name is None:
            continue
        amount = nutrient.get("amount")
        if amount is None:
            amount = nutrient.get("value")
        if amount is not None:
            values[name] = float(amount)
    return NutrientProfile(**values)
