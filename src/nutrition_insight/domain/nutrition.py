"""Nutrition analysis records decoded from model responses."""

import math

from pydantic import Field, field_validator

from nutrition_insight.domain.meals import MealContext
from nutrition_insight.domain.models import (
    FrozenRecord,
    finite_or_none,
    parse_number,
)

HEALTH_SCORE_MIN = 0
HEALTH_SCORE_MAX = 100


class MacroNutrients(FrozenRecord):
    """Macronutrient totals for a meal, in kcal and grams."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0

    @field_validator("calories", "protein", "carbs", "fat", "fiber", mode="before")
    @classmethod
    def _non_negative(cls, value: object) -> object:
        if value is None:
            return 0.0
        number = parse_number(value)
        if number is None:
            return value
        if not math.isfinite(number):
            return 0.0
        return max(number, 0.0)

    def per_person(self, people: int) -> "MacroNutrients":
        """Split totals evenly between the people sharing the meal."""
        share = max(people, 1)
        return MacroNutrients(
            calories=self.calories / share,
            protein=self.protein / share,
            carbs=self.carbs / share,
            fat=self.fat / share,
            fiber=self.fiber / share,
        )

    def energy_split(self) -> dict[str, float]:
        """Return protein/carbs/fat as percentages of their gram total."""
        total = self.protein + self.carbs + self.fat
        if total <= 0:
            return {"protein": 0.0, "carbs": 0.0, "fat": 0.0}
        return {
            "protein": self.protein / total * 100,
            "carbs": self.carbs / total * 100,
            "fat": self.fat / total * 100,
        }


class NutrientGroup(FrozenRecord):
    """Optional measurements; NaN or infinite values are treated as absent."""

    @field_validator("*", mode="before")
    @classmethod
    def _finite(cls, value: object) -> object:
        return finite_or_none(value)


class FattyAcidProfile(NutrientGroup):
    saturated: float | None = None
    monounsaturated: float | None = None
    polyunsaturated: float | None = None
    trans: float | None = None
    omega3: float | None = None
    omega6: float | None = None
    cholesterol: float | None = None


class AminoAcidProfile(NutrientGroup):
    essential_amino_acids: float | None = None
    bcaa: float | None = None
    leucine: float | None = None
    isoleucine: float | None = None
    valine: float | None = None
    lysine: float | None = None


class AntioxidantProfile(NutrientGroup):
    orac: float | None = None
    flavonoids: float | None = None
    beta_carotene: float | None = None
    anthocyanins: float | None = None
    polyphenols: float | None = None


class GlycemicProfile(NutrientGroup):
    glycemic_index: float | None = None
    glycemic_load: float | None = None
    total_sugar: float | None = None
    added_sugar: float | None = None


class MicronutrientProfile(NutrientGroup):
    vitamin_a: float | None = None
    vitamin_c: float | None = None
    vitamin_d: float | None = None
    vitamin_e: float | None = None
    vitamin_k: float | None = None
    calcium: float | None = None
    iron: float | None = None
    zinc: float | None = None
    magnesium: float | None = None
    potassium: float | None = None
    sodium: float | None = None


class FiberProfile(NutrientGroup):
    soluble: float | None = None
    insoluble: float | None = None


class EnergyBreakdown(NutrientGroup):
    protein_percent: float | None = None
    carbs_percent: float | None = None
    fat_percent: float | None = None


class DetailedNutrition(FrozenRecord):
    """Optional deep-dive groups; any of them may be missing."""

    fatty_acids: FattyAcidProfile | None = None
    amino_acids: AminoAcidProfile | None = None
    antioxidants: AntioxidantProfile | None = None
    glycemic: GlycemicProfile | None = None
    micronutrients: MicronutrientProfile | None = None
    fiber_types: FiberProfile | None = None
    energy_breakdown: EnergyBreakdown | None = None


class NutritionPayload(FrozenRecord):
    """The JSON object a model returns for a food photo."""

    ingredients: tuple[str, ...]
    dishes: tuple[str, ...]
    nutrition: MacroNutrients
    detailed_nutrition: DetailedNutrition | None = Field(
        default=None, alias="nutritionDetails"
    )
    health_score: int
    analysis: str
    recommendations: tuple[str, ...]
    alternatives: tuple[str, ...]

    @field_validator("health_score", mode="before")
    @classmethod
    def _clamp_health_score(cls, value: object) -> object:
        number = parse_number(value)
        if number is None:
            return value
        if math.isnan(number):
            return HEALTH_SCORE_MIN
        if math.isinf(number):
            return HEALTH_SCORE_MAX if number > 0 else HEALTH_SCORE_MIN
        return int(min(max(round(number), HEALTH_SCORE_MIN), HEALTH_SCORE_MAX))


class NutritionAnalysis(NutritionPayload):
    """Decoded analysis together with the caller's meal context."""

    meal: MealContext | None = None

    def per_person_nutrition(self) -> MacroNutrients:
        """Macros for one person, using the meal's head count."""
        people = self.meal.number_of_people if self.meal else 1
        return self.nutrition.per_person(people)
