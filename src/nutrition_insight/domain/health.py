"""Health profile records decoded from model responses."""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import Field, field_validator, model_validator

from nutrition_insight.domain.models import (
    FrozenRecord,
    coerce_number,
    finite_or_none,
    round_if_float,
)
from nutrition_insight.domain.nutrition import NutritionAnalysis


def compute_bmi(weight_kg: float | None, height_cm: float | None) -> float | None:
    """Body mass index from kilograms and centimetres, if both are usable."""
    if weight_kg is None or height_cm is None:
        return None
    if weight_kg <= 0 or height_cm <= 0:
        return None
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


class PersonalInfo(FrozenRecord):
    """Demographics; ``bmi`` is always derived from weight and height."""

    age: int | None = None
    gender: str | None = None
    weight: float | None = None
    height: float | None = None
    bmi: float | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_bmi(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        derived = dict(data)
        derived["bmi"] = compute_bmi(
            coerce_number(derived.get("weight")),
            coerce_number(derived.get("height")),
        )
        return derived

    @field_validator("age", mode="before")
    @classmethod
    def _round_age(cls, value: object) -> object:
        return round_if_float(value)

    @field_validator("weight", "height", mode="before")
    @classmethod
    def _finite_measure(cls, value: object) -> object:
        return finite_or_none(value)


class ChronicCondition(FrozenRecord):
    name: str
    severity: str | None = None
    diagnosed_date: str | None = None
    notes: str | None = None


class Medication(FrozenRecord):
    name: str
    dosage: str | None = None
    frequency: str | None = None
    purpose: str | None = None
    side_effects: tuple[str, ...] | None = None


class VitalSigns(FrozenRecord):
    blood_pressure_systolic: int | None = None
    blood_pressure_diastolic: int | None = None
    heart_rate: int | None = None
    blood_sugar: float | None = None
    cholesterol: float | None = None

    @field_validator(
        "blood_pressure_systolic",
        "blood_pressure_diastolic",
        "heart_rate",
        mode="before",
    )
    @classmethod
    def _round_counts(cls, value: object) -> object:
        return round_if_float(value)

    @field_validator("blood_sugar", "cholesterol", mode="before")
    @classmethod
    def _finite_reading(cls, value: object) -> object:
        return finite_or_none(value)


class HealthProfileSummary(FrozenRecord):
    """Structured health profile plus a narrative summary."""

    personal_info: PersonalInfo
    chronic_conditions: tuple[ChronicCondition, ...]
    medications: tuple[Medication, ...]
    allergies: tuple[str, ...]
    dietary_restrictions: tuple[str, ...]
    exercise_limitations: tuple[str, ...]
    health_goals: tuple[str, ...]
    vital_signs: VitalSigns | None = None
    full_summary: str


class HealthProfile(FrozenRecord):
    """A stored profile: what the user typed and what was decoded from it."""

    id: str
    raw_input: str
    ai_summary: HealthProfileSummary
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        raw_input: str,
        summary: HealthProfileSummary,
        profile_id: str | None = None,
    ) -> "HealthProfile":
        """Build a profile, keeping ``profile_id`` when re-analysing."""
        now = datetime.now(tz=UTC)
        return cls(
            id=profile_id or str(uuid4()),
            raw_input=raw_input,
            ai_summary=summary,
            created_at=now,
            updated_at=now,
        )


class DietLog(FrozenRecord):
    """History entry recorded after a food analysis."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    date: datetime
    meal_type: str
    analysis: str
    calories: int
    health_score: int

    @classmethod
    def from_analysis(
        cls, result: NutritionAnalysis, logged_at: datetime | None = None
    ) -> "DietLog":
        """Summarise an analysis for the diet history."""
        meal_type = result.meal.meal_type.value if result.meal else "other"
        return cls(
            date=logged_at or datetime.now(tz=UTC),
            meal_type=meal_type,
            analysis=result.analysis,
            calories=round(result.nutrition.calories),
            health_score=result.health_score,
        )


class ExerciseLog(FrozenRecord):
    """History entry for a workout; ``duration`` is in minutes."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    date: datetime
    activity_type: str
    duration: int = Field(ge=0)
    intensity: str
    notes: str = ""


class MedicationLog(FrozenRecord):
    """Whether a medication from the profile was taken on a given day."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    date: datetime
    medication_name: str
    taken: bool
    notes: str = ""

    @classmethod
    def for_medication(
        cls,
        medication: Medication,
        taken: bool,
        logged_at: datetime | None = None,
        notes: str = "",
    ) -> "MedicationLog":
        return cls(
            date=logged_at or datetime.now(tz=UTC),
            medication_name=medication.name,
            taken=taken,
            notes=notes,
        )
