"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from nutrition_insight.config import Settings
from nutrition_insight.containers import AppContainer, build_container
from nutrition_insight.services.analysis import GenerativeClient

NUTRITION_PAYLOAD: dict[str, object] = {
    "ingredients": ["rice", "chicken", "broccoli"],
    "dishes": ["chicken rice bowl"],
    "nutrition": {
        "calories": 650,
        "protein": 35,
        "carbs": 55.5,
        "fat": 18,
        "fiber": 4,
    },
    "healthScore": 75,
    "analysis": "A balanced bowl with lean protein and vegetables.",
    "recommendations": ["Add more vegetables"],
    "alternatives": ["Brown rice instead of white rice"],
}

HEALTH_PAYLOAD: dict[str, object] = {
    "personalInfo": {"age": 52, "gender": "male", "weight": 80, "height": 175},
    "chronicConditions": [
        {"name": "Hypertension", "severity": "Mild", "diagnosedDate": "2019"}
    ],
    "medications": [
        {
            "name": "Lisinopril",
            "dosage": "10 mg",
            "frequency": "once daily",
            "sideEffects": ["dry cough"],
        }
    ],
    "allergies": ["penicillin"],
    "dietaryRestrictions": ["low sodium"],
    "exerciseLimitations": [],
    "healthGoals": ["lower blood pressure"],
    "vitalSigns": {"bloodPressureSystolic": 135, "bloodPressureDiastolic": 85},
    "fullSummary": (
        "A 52-year-old man with mildly elevated blood pressure managed with "
        "medication."
    ),
}


def fenced(payload: dict[str, object]) -> str:
    """Wrap a payload the way models usually return it."""
    return f"Here is the analysis:\n```json\n{json.dumps(payload)}\n```\nEnjoy!"


@dataclass
class FakeGenerativeClient(GenerativeClient):
    """Fake model client that replays a canned response."""

    response: str = field(default_factory=lambda: fenced(NUTRITION_PAYLOAD))
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_data_url: str | None,
    ) -> str:
        self.calls.append(
            {"model": model, "prompt": prompt, "image_data_url": image_data_url}
        )
        return self.response


@pytest.fixture
def settings() -> Settings:
    return Settings(
        generative_model="test-model",
        system_prompt="You are a test nutritionist.",
        extra_conditions="migraine, Celiac Disease",
    )


@pytest.fixture
def fake_client() -> FakeGenerativeClient:
    return FakeGenerativeClient()


@pytest.fixture
def container(settings: Settings, fake_client: FakeGenerativeClient) -> AppContainer:
    return build_container(settings, client=fake_client)
