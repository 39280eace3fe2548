"""Pydantic models for parse request payloads."""

from pydantic import BaseModel

from nutrition_insight.domain.meals import MealContext


class NutritionParseRequest(BaseModel):
    """Raw food-analysis response plus the meal it describes."""

    text: str
    meal: MealContext | None = None


class HealthProfileParseRequest(BaseModel):
    """Raw health-profile response."""

    text: str
