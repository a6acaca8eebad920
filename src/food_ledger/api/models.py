"""Request models for the food ledger API."""

from pydantic import BaseModel, Field


class LogFoodRequest(BaseModel):
    """Body of a food log request."""

    name: str = ""
    calories: float = Field(default=0, ge=0, allow_inf_nan=False)
    protein: float = Field(default=0, ge=0, allow_inf_nan=False)
    carbs: float = Field(default=0, ge=0, allow_inf_nan=False)
    fat: float = Field(default=0, ge=0, allow_inf_nan=False)
