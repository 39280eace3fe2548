"""Meal context supplied by the caller alongside a food photo."""

from enum import StrEnum

from pydantic import Field

from nutrition_insight.domain.models import FrozenRecord


class MealType(StrEnum):
    """Which meal of the day the photo belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"
    OTHER = "other"


class PortionSize(StrEnum):
    """Rough portion estimate picked by the user."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class MealContext(FrozenRecord):
    """Meal metadata passed through to the analysis unchanged."""

    meal_type: MealType = MealType.OTHER
    number_of_people: int = Field(default=1, ge=1)
    portion_size: PortionSize = PortionSize.MEDIUM
    is_vegetarian: bool = False
    has_allergies: bool = False
    allergy_notes: str = ""
    additional_notes: str = ""
