"""Best-effort extraction of health facts from free text.

Each extractor is a plain function ``text -> dict`` returning only the keys it
found. Extractors own disjoint keys, so they can run in any order and the
results are simply merged. A miss is an empty dict, never an error.
"""

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from nutrition_insight.domain.health import ChronicCondition, Medication, PersonalInfo

Extractor = Callable[[str], dict[str, object]]

_AGE_PATTERN = re.compile(
    r"(?<![\d.])(\d{1,3})\s*-?\s*(?:years?[\s-]*old|yrs?\b|y/o\b|周?岁)",
    re.IGNORECASE,
)
_FEMALE_PATTERN = re.compile(
    r"\b(?:female|woman|women|lady|girl)\b|女", re.IGNORECASE
)
_MALE_PATTERN = re.compile(
    r"\b(?:male|man|men|gentleman|boy)\b|男", re.IGNORECASE
)
_WEIGHT_PATTERN = re.compile(
    r"(?<![\d.])(\d+(?:\.\d+)?)\s*"
    r"(kilograms?|kgs?|公斤|千克|pounds?|lbs?|斤)(?![a-z])",
    re.IGNORECASE,
)
_HEIGHT_PATTERN = re.compile(
    r"(?<![\d.])(\d+(?:\.\d+)?)\s*"
    r"(centimet(?:er|re)s?|cm|厘米|met(?:er|re)s?|m|inch(?:es)?)(?![a-z])",
    re.IGNORECASE,
)
_MEDICATION_PATTERN = re.compile(
    r"\b(?i:taking|on|prescribed)\s+([A-Z][A-Za-z-]+)"
    r"(?:\s+(\d+(?:\.\d+)?)\s*((?i:mcg|mg|ml|g|units?|iu))\b)?"
    r"(?:,?\s+((?i:(?:once|twice|thrice|every|each|as)\s+(?:\d+\s+)?[a-z]+)))?"
)
_ALLERGY_PATTERN = re.compile(
    r"allerg(?:y|ies|ic)\s+to\s+([^.;:!?\n]+)", re.IGNORECASE
)
_ALLERGY_CLAUSE_END = re.compile(
    r"\b(?:but|while|although|though|which|who|taking|takes|on|prescribed"
    r"|uses|using|is|are|was|were|am|has|have|had|also)\b",
    re.IGNORECASE,
)
_ALLERGY_SPLIT = re.compile(r",|\band\b", re.IGNORECASE)

_MASS_FACTORS = {"lb": 0.45359237, "pound": 0.45359237, "斤": 0.5}
_LENGTH_FACTORS = {"m": 100.0, "meter": 100.0, "metre": 100.0, "inch": 2.54}

_NOT_MEDICATIONS = frozenset(
    {
        "A",
        "An",
        "The",
        "My",
        "His",
        "Her",
        "Their",
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    }
)

DEFAULT_CONDITION_VOCABULARY: Mapping[str, str] = {
    "diabetes": "Diabetes",
    "hypertension": "Hypertension",
    "high blood pressure": "Hypertension",
    "arthritis": "Arthritis",
    "asthma": "Asthma",
    "heart disease": "Heart Disease",
    "high cholesterol": "High Cholesterol",
    "copd": "COPD",
    "kidney disease": "Kidney Disease",
    "hypothyroidism": "Hypothyroidism",
    "osteoporosis": "Osteoporosis",
    "obesity": "Obesity",
    "gout": "Gout",
    "depression": "Depression",
    "糖尿病": "Diabetes",
    "高血压": "Hypertension",
    "关节炎": "Arthritis",
    "哮喘": "Asthma",
    "心脏病": "Heart Disease",
    "高血脂": "High Cholesterol",
}


@dataclass(frozen=True)
class HealthFindings:
    """Whatever the extractors could recover from a piece of text."""

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    conditions: tuple[ChronicCondition, ...] = ()
    medications: tuple[Medication, ...] = ()
    allergies: tuple[str, ...] = ()


def extract_age(text: str) -> dict[str, object]:
    match = _AGE_PATTERN.search(text)
    if match is None:
        return {}
    return {"age": int(match.group(1))}


def extract_gender(text: str) -> dict[str, object]:
    if _FEMALE_PATTERN.search(text):
        return {"gender": "female"}
    if _MALE_PATTERN.search(text):
        return {"gender": "male"}
    return {}


def extract_weight(text: str) -> dict[str, object]:
    """First mass mention, in kilograms."""
    match = _WEIGHT_PATTERN.search(text)
    if match is None:
        return {}
    value = float(match.group(1))
    factor = _unit_factor(match.group(2), _MASS_FACTORS)
    return {"weight": round(value * factor, 1)}


def extract_height(text: str) -> dict[str, object]:
    """First length mention, in centimetres."""
    match = _HEIGHT_PATTERN.search(text)
    if match is None:
        return {}
    value = float(match.group(1))
    factor = _unit_factor(match.group(2), _LENGTH_FACTORS)
    return {"height": round(value * factor, 1)}


def make_condition_extractor(vocabulary: Mapping[str, str]) -> Extractor:
    """Build an extractor matching ``vocabulary`` terms case-insensitively.

    Keys are search terms, values the display name; several terms may share a
    display name and produce a single condition.
    """
    terms = {term.lower(): name for term, name in vocabulary.items() if term}

    def extract_conditions(text: str) -> dict[str, object]:
        lowered = text.lower()
        found: dict[str, int] = {}
        for term, name in terms.items():
            position = lowered.find(term)
            if position == -1:
                continue
            if name not in found or position < found[name]:
                found[name] = position
        if not found:
            return {}
        ordered = sorted(found, key=lambda name: (found[name], name))
        return {"conditions": tuple(ChronicCondition(name=name) for name in ordered)}

    return extract_conditions


def extract_medications(text: str) -> dict[str, object]:
    medications: list[Medication] = []
    seen: set[str] = set()
    for match in _MEDICATION_PATTERN.finditer(text):
        name = match.group(1)
        if name in _NOT_MEDICATIONS or name.lower() in seen:
            continue
        seen.add(name.lower())
        dosage = None
        if match.group(2):
            dosage = f"{match.group(2)} {match.group(3).lower()}"
        frequency = match.group(4).lower() if match.group(4) else None
        medications.append(
            Medication(name=name, dosage=dosage, frequency=frequency)
        )
    if not medications:
        return {}
    return {"medications": tuple(medications)}


def extract_allergies(text: str) -> dict[str, object]:
    allergies: list[str] = []
    seen: set[str] = set()
    for match in _ALLERGY_PATTERN.finditer(text):
        phrase = match.group(1)
        clause_end = _ALLERGY_CLAUSE_END.search(phrase)
        if clause_end is not None:
            phrase = phrase[: clause_end.start()]
        for chunk in _ALLERGY_SPLIT.split(phrase):
            allergy = chunk.strip()
            if not allergy or allergy.lower() in seen:
                continue
            seen.add(allergy.lower())
            allergies.append(allergy)
    if not allergies:
        return {}
    return {"allergies": tuple(allergies)}


def build_extractors(
    extra_condition_terms: Iterable[str] = (),
) -> tuple[Extractor, ...]:
    """Default extractor set, with optional extra condition terms."""
    vocabulary = dict(DEFAULT_CONDITION_VOCABULARY)
    for term in extra_condition_terms:
        vocabulary.setdefault(term.lower(), term.title())
    return (
        extract_age,
        extract_gender,
        extract_weight,
        extract_height,
        make_condition_extractor(vocabulary),
        extract_medications,
        extract_allergies,
    )


DEFAULT_EXTRACTORS = build_extractors()


def extract_health_entities(
    text: str, extractors: Iterable[Extractor] = DEFAULT_EXTRACTORS
) -> HealthFindings:
    """Run every extractor over ``text`` and merge what they found."""
    merged: dict[str, object] = {}
    for extractor in extractors:
        merged.update(extractor(text))
    personal_info = PersonalInfo(
        age=merged.get("age"),
        gender=merged.get("gender"),
        weight=merged.get("weight"),
        height=merged.get("height"),
    )
    return HealthFindings(
        personal_info=personal_info,
        conditions=merged.get("conditions", ()),
        medications=merged.get("medications", ()),
        allergies=merged.get("allergies", ()),
    )


def _unit_factor(unit: str, factors: Mapping[str, float]) -> float:
    normalized = unit.lower()
    for prefix, factor in factors.items():
        if normalized == prefix or (
            len(prefix) > 1 and normalized.startswith(prefix)
        ):
            return factor
    return 1.0
