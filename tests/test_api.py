"""Tests for the parse endpoints."""

import json

import pytest
from fastapi.testclient import TestClient

from nutrition_insight.api.app import create_app
from tests.conftest import HEALTH_PAYLOAD, NUTRITION_PAYLOAD, fenced


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_nutrition_returns_camel_case_record(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/parse/nutrition",
        json={
            "text": fenced(NUTRITION_PAYLOAD),
            "meal": {"mealType": "lunch", "numberOfPeople": 2},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["healthScore"] == 75
    assert data["nutrition"]["calories"] == 650
    assert data["nutritionDetails"] is None
    assert data["meal"]["mealType"] == "lunch"
    assert data["meal"]["numberOfPeople"] == 2


def test_parse_nutrition_placeholder_for_prose(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/parse/nutrition", json={"text": "No JSON at all."})

    assert response.status_code == 200
    data = response.json()
    assert data["analysis"] == "No JSON at all."
    assert data["ingredients"] == ["Unable to parse ingredients"]
    assert data["meal"] is None


def test_parse_nutrition_replaces_nan_macros(container) -> None:
    client = TestClient(create_app(container))
    text = fenced({**NUTRITION_PAYLOAD, "nutrition": {"calories": "__VALUE__"}})

    response = client.post(
        "/parse/nutrition", json={"text": text.replace('"__VALUE__"', "NaN")}
    )

    assert response.status_code == 200
    nutrition = response.json()["nutrition"]
    assert nutrition["calories"] == 0
    assert nutrition["protein"] == 0


def test_parse_health_profile(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/parse/health-profile", json={"text": json.dumps(HEALTH_PAYLOAD)}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["personalInfo"]["bmi"] == pytest.approx(80 / 1.75**2)
    assert data["chronicConditions"][0]["name"] == "Hypertension"
    assert data["fullSummary"] == HEALTH_PAYLOAD["fullSummary"]


def test_parse_health_profile_uses_configured_conditions(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/parse/health-profile",
        json={"text": "Diagnosed with celiac disease last year."},
    )

    assert response.status_code == 200
    names = [c["name"] for c in response.json()["chronicConditions"]]
    assert names == ["Celiac Disease"]


def test_parse_generic_shape(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/parse/nutrition", json={"text": ""})
    generic = client.post("/parse/health_profile", json={"text": "taking Insulin"})

    assert response.json()["dishes"] == ["Unknown"]
    assert generic.status_code == 200
    assert generic.json()["medications"][0]["name"] == "Insulin"


def test_parse_unknown_shape_is_rejected(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/parse/recipe", json={"text": "{}"})

    assert response.status_code == 422
    assert response.json()["detail"]["kind"] == "contract_violation"


def test_parse_health_profile_with_meal_is_rejected(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/parse/health_profile", json={"text": "hello", "meal": {"mealType": "snack"}}
    )

    assert response.status_code == 422
