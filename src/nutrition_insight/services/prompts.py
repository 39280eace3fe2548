"""Prompt templates sent alongside photos and health descriptions."""

from nutrition_insight.domain.meals import MealContext

DEFAULT_SYSTEM_PROMPT = (
    "You are a professional nutritionist. Identify the dishes and ingredients "
    "in the photo, estimate the portion, and assess how healthy the meal is. "
    "Keep an encouraging, professional tone and suggest consulting a "
    "nutritionist or doctor when necessary."
)

NUTRITION_RESPONSE_FORMAT = """Provide your analysis in the following JSON format:
{
  "ingredients": ["ingredient 1", "ingredient 2"],
  "dishes": ["dish 1", "dish 2"],
  "nutrition": {"calories": 0, "protein": 0, "carbs": 0, "fat": 0, "fiber": 0},
  "healthScore": 85,
  "analysis": "Your detailed analysis...",
  "recommendations": ["recommendation 1", "recommendation 2"],
  "alternatives": ["alternative 1", "alternative 2"]
}"""

HEALTH_PROFILE_RESPONSE_FORMAT = """Respond with JSON in the following format:
{
  "personalInfo": {"age": 0, "gender": "", "weight": 0, "height": 0},
  "chronicConditions": [{"name": "", "severity": "", "diagnosedDate": "", "notes": ""}],
  "medications": [{"name": "", "dosage": "", "frequency": "", "purpose": "", "sideEffects": []}],
  "allergies": [],
  "dietaryRestrictions": [],
  "exerciseLimitations": [],
  "healthGoals": [],
  "vitalSigns": {"bloodPressureSystolic": 0, "bloodPressureDiastolic": 0, "heartRate": 0, "bloodSugar": 0, "cholesterol": 0},
  "fullSummary": "A short narrative summary of the person's health."
}"""


def build_nutrition_prompt(system_prompt: str, meal: MealContext) -> str:
    """Append the meal context and expected response format to the system prompt."""
    lines = [
        "",
        "Meal information:",
        f"- Meal type: {meal.meal_type.value}",
        f"- Number of people: {meal.number_of_people}",
        f"- Portion size: {meal.portion_size.value}",
        f"- Vegetarian/vegan: {_yes_no(meal.is_vegetarian)}",
        f"- Food allergies: {_yes_no(meal.has_allergies)}",
    ]
    if meal.has_allergies and meal.allergy_notes.strip():
        lines.append(f"- Allergy details: {meal.allergy_notes.strip()}")
    if meal.additional_notes.strip():
        lines.append(f"- Notes: {meal.additional_notes.strip()}")
    lines.extend(["", NUTRITION_RESPONSE_FORMAT])
    return system_prompt + "\n".join(lines)


def build_health_profile_prompt(user_text: str) -> str:
    """Ask for a structured profile of the user's own description."""
    return (
        "Summarize the following health information. Only include facts the "
        "person stated; leave unknown fields empty.\n\n"
        f"Health information:\n{user_text.strip()}\n\n"
        f"{HEALTH_PROFILE_RESPONSE_FORMAT}"
    )


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"
