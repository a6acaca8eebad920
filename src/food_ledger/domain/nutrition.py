"""Nutrition lookup domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoodSearchResult:
    """A food returned by a nutrition search, with per-serving macros."""

    fdc_id: int
    name: str
    brand: str | None
    calories: float
    protein: float
    carbs: float
    fat: float
    serving_size: float | None
    serving_unit: str | None
