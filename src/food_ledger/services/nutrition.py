"""Food search service integrating USDA FDC."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_ledger.adapters.fdc_client import FdcClient
from food_ledger.domain.nutrition import FoodSearchResult
from food_ledger.services.totals import round_tenth

_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Searches FDC and reduces results to name, brand and macros."""

    fdc_client: FdcClient
    page_size: int = 8
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str) -> list[FoodSearchResult]:
        """Return foods matching a query; a blank query matches nothing."""
        cleaned = query.strip()
        if not cleaned:
            return []
        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(cleaned, page_size=self.page_size),
            action="search",
        )
        foods = payload.get("foods") if isinstance(payload, dict) else None
        if not isinstance(foods, list):
            return []
        results = [
            _to_search_result(food)
            for food in foods
            if isinstance(food, dict) and food.get("fdcId") is not None
        ]
        _logger.info("Nutrition search: query=%s results=%s", cleaned, len(results))
        return results

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[dict[str, object]]], *, action: str
    ) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Nutrition %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _to_search_result(food: dict[str, object]) -> FoodSearchResult:
    nutrients = _extract_nutrients(food.get("foodNutrients") or [])
    serving_size = food.get("servingSize")
    return FoodSearchResult(
        fdc_id=food["fdcId"],
        name=food.get("description") or "Unknown",
        brand=food.get("brandOwner") or None,
        calories=nutrients["calories"],
        protein=nutrients["protein"],
        carbs=nutrients["carbs"],
        fat=nutrients["fat"],
        serving_size=(
            float(serving_size) if isinstance(serving_size, int | float) else None
        ),
        serving_unit=food.get("servingSizeUnit") or None,
    )


def _extract_nutrients(food_nutrients: list[dict[str, object]]) -> dict[str, float]:
    """Pick energy and macros out of FDC nutrients, first match wins."""
    amounts: dict[object, object] = {}
    for nutrient in food_nutrients:
        if not isinstance(nutrient, dict):
            continue
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        amount = nutrient.get("value", nutrient.get("amount"))
        amounts.setdefault(nutrient_id, amount)

    values: dict[str, float] = {}
    for key, nutrient_id in _NUTRIENT_IDS.items():
        amount = amounts.get(nutrient_id)
        values[key] = (
            round_tenth(float(amount)) if isinstance(amount, int | float) else 0.0
        )
    return values
