"""Tests for summary synthesis and narrative checks."""

import pytest

from nutrition_insight.domain.health import ChronicCondition, Medication, PersonalInfo
from nutrition_insight.services.summaries import (
    INSUFFICIENT_INFORMATION,
    is_valid_narrative,
    pad_narrative,
    strip_code_fences,
    synthesize_summary,
)


def test_empty_input_returns_insufficient_information() -> None:
    assert synthesize_summary() == INSUFFICIENT_INFORMATION
    empty = synthesize_summary(PersonalInfo(), [], [], [], [])
    assert empty == INSUFFICIENT_INFORMATION


def test_full_summary_clauses_in_order() -> None:
    summary = synthesize_summary(
        PersonalInfo(age=45, gender="Female"),
        [
            ChronicCondition(name="Diabetes", severity="Moderate"),
            ChronicCondition(name="Asthma"),
        ],
        [Medication(name="Metformin", dosage="500 mg"), Medication(name="Insulin")],
        ["peanuts", "shellfish", "latex"],
        ["lose weight"],
    )

    assert summary == (
        "This patient is 45 years old, female, currently managing moderate "
        "diabetes and asthma, taking Metformin (500 mg) and Insulin, with "
        "allergies to peanuts, shellfish and latex. "
        "Their health goals include lose weight."
    )


def test_single_clause_is_capitalised_sentence() -> None:
    summary = synthesize_summary(medications=[Medication(name="Insulin")])

    assert summary == "Taking Insulin."


def test_goals_alone_form_their_own_sentence() -> None:
    summary = synthesize_summary(goals=["sleep better", "walk more"])

    assert summary == "Their health goals include sleep better and walk more."


def test_blank_values_are_ignored() -> None:
    summary = synthesize_summary(
        PersonalInfo(gender="  "), allergies=["", "  "], goals=[" "]
    )

    assert summary == INSUFFICIENT_INFORMATION


def test_synthesis_is_deterministic() -> None:
    args = (
        PersonalInfo(age=30, gender="male"),
        [ChronicCondition(name="Gout")],
        [Medication(name="Allopurinol", dosage="100 mg")],
        ["pollen"],
        ["run a marathon"],
    )

    assert synthesize_summary(*args) == synthesize_summary(*args)


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "   ",
        "Too short.",
        '{"fullSummary": "A long enough narrative about the patient."}',
        "[1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12]",
        "```json\nA long enough narrative wrapped in a fence.\n```",
        'Summary follows "age": 45, "gender": "female" and more text here',
    ],
)
def test_invalid_narratives(text: str | None) -> None:
    assert is_valid_narrative(text) is False


def test_valid_narrative() -> None:
    assert is_valid_narrative("A 52-year-old man managing blood pressure well.")


def test_min_length_is_configurable() -> None:
    assert is_valid_narrative("Short but fine.", min_length=5)
    assert not is_valid_narrative("Short but fine.", min_length=50)


def test_strip_code_fences_removes_blocks_and_markers() -> None:
    text = 'Intro text.\n```json\n{"a": 1}\n```\nOutro ``` text.'

    assert strip_code_fences(text) == "Intro text. Outro text."


def test_pad_narrative_appends_guidance_until_long_enough() -> None:
    assert pad_narrative("Taking Insulin.", 20) == (
        "Taking Insulin. Please provide more detail about your health."
    )
    long_enough = "A 52-year-old man managing hypertension."
    assert pad_narrative(long_enough, 20) == long_enough


def test_pad_narrative_reaches_large_minimum() -> None:
    padded = pad_narrative("Taking Insulin.", 200)

    assert len(padded) >= 200
    assert padded.startswith("Taking Insulin. Please provide more detail")
    assert is_valid_narrative(padded, 200)
