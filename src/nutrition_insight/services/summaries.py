"""Narrative summaries built from structured health data."""

import re
from collections.abc import Sequence
from itertools import cycle

from nutrition_insight.domain.health import ChronicCondition, Medication, PersonalInfo

INSUFFICIENT_INFORMATION = (
    "Insufficient information to generate a health summary. "
    "Please provide more detail about your health."
)
DEFAULT_MIN_SUMMARY_LENGTH = 20

_GUIDANCE = (
    "Please provide more detail about your health.",
    "Sharing conditions, medications and allergies gives a fuller picture.",
)

_FENCED_BLOCK = re.compile(r"```[^\n`]*\n?.*?```", re.DOTALL)
_JSON_KEY_VALUE = re.compile(r'"[A-Za-z_][\w ]*"\s*:')
_WHITESPACE = re.compile(r"\s+")


def is_valid_narrative(
    text: str | None, min_length: int = DEFAULT_MIN_SUMMARY_LENGTH
) -> bool:
    """Whether model-written narrative text can be shown as-is."""
    if text is None:
        return False
    stripped = text.strip()
    if len(stripped) < max(min_length, 1):
        return False
    if "```" in stripped or stripped[0] in "{[":
        return False
    return _JSON_KEY_VALUE.search(stripped) is None


def strip_code_fences(text: str) -> str:
    """Remove fenced code blocks and stray fence markers, collapsing whitespace."""
    without_blocks = _FENCED_BLOCK.sub(" ", text).replace("```", " ")
    return _WHITESPACE.sub(" ", without_blocks).strip()


def pad_narrative(
    text: str, min_length: int = DEFAULT_MIN_SUMMARY_LENGTH
) -> str:
    """Append fixed guidance sentences until ``text`` is at least ``min_length``."""
    padded = text.strip()
    guidance = cycle(_GUIDANCE)
    while len(padded) < min_length:
        padded = f"{padded} {next(guidance)}".lstrip()
    return padded


def synthesize_summary(
    personal_info: PersonalInfo | None = None,
    conditions: Sequence[ChronicCondition] = (),
    medications: Sequence[Medication] = (),
    allergies: Sequence[str] = (),
    goals: Sequence[str] = (),
) -> str:
    """Build a deterministic paragraph from whatever fields are populated."""
    clauses = [
        clause
        for clause in (
            _demographic_clause(personal_info),
            _conditions_clause(conditions),
            _medications_clause(medications),
            _allergies_clause(allergies),
        )
        if clause
    ]
    sentences = []
    if clauses:
        sentences.append(_sentence(", ".join(clauses)))
    goal_items = _clean(goals)
    if goal_items:
        sentences.append(_sentence(f"Their health goals include {_join(goal_items)}"))
    if not sentences:
        return INSUFFICIENT_INFORMATION
    return " ".join(sentences)


def _demographic_clause(info: PersonalInfo | None) -> str:
    if info is None:
        return ""
    parts = []
    if info.age is not None:
        parts.append(f"{info.age} years old")
    if info.gender and info.gender.strip():
        parts.append(info.gender.strip().lower())
    if not parts:
        return ""
    return "this patient is " + ", ".join(parts)


def _conditions_clause(conditions: Sequence[ChronicCondition]) -> str:
    names = []
    for condition in conditions:
        label = " ".join(
            part.strip()
            for part in (condition.severity or "", condition.name)
            if part and part.strip()
        )
        if label:
            names.append(label.lower())
    if not names:
        return ""
    return f"currently managing {_join(names)}"


def _medications_clause(medications: Sequence[Medication]) -> str:
    names = []
    for medication in medications:
        name = medication.name.strip()
        if not name:
            continue
        if medication.dosage and medication.dosage.strip():
            name = f"{name} ({medication.dosage.strip()})"
        names.append(name)
    if not names:
        return ""
    return f"taking {_join(names)}"


def _allergies_clause(allergies: Sequence[str]) -> str:
    items = _clean(allergies)
    if not items:
        return ""
    return f"with allergies to {_join(items)}"


def _clean(values: Sequence[str]) -> list[str]:
    return [value.strip() for value in values if value and value.strip()]


def _join(items: Sequence[str]) -> str:
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} and {items[-1]}"


def _sentence(text: str) -> str:
    text = text.strip().rstrip(".")
    return text[:1].upper() + text[1:] + "."
