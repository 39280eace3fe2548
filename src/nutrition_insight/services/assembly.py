"""Turn raw model text into complete nutrition and health records."""

import logging
from dataclasses import dataclass

from nutrition_insight.domain.health import HealthProfileSummary
from nutrition_insight.domain.meals import MealContext
from nutrition_insight.domain.models import (
    ContractViolationError,
    DecodeFailure,
    ResponseShape,
    resolve_shape,
)
from nutrition_insight.domain.nutrition import MacroNutrients, NutritionAnalysis
from nutrition_insight.services.decoding import locate_and_decode
from nutrition_insight.services.extraction import (
    DEFAULT_EXTRACTORS,
    Extractor,
    extract_health_entities,
)
from nutrition_insight.services.payload import ScanMode
from nutrition_insight.services.summaries import (
    DEFAULT_MIN_SUMMARY_LENGTH,
    INSUFFICIENT_INFORMATION,
    is_valid_narrative,
    pad_narrative,
    strip_code_fences,
    synthesize_summary,
)

_logger = logging.getLogger(__name__)


def placeholder_nutrition_analysis(
    raw_text: str, meal: MealContext | None = None
) -> NutritionAnalysis:
    """Record shown when the response could not be decoded; keeps the raw text."""
    return NutritionAnalysis(
        ingredients=("Unable to parse ingredients",),
        dishes=("Unable to parse dishes",),
        nutrition=MacroNutrients(),
        health_score=0,
        analysis=raw_text,
        recommendations=("Please check the AI response format",),
        alternatives=(),
        meal=meal,
    )


def default_nutrition_analysis(meal: MealContext | None = None) -> NutritionAnalysis:
    """Record shown when the model returned no text at all."""
    return NutritionAnalysis(
        ingredients=("Unable to analyze",),
        dishes=("Unknown",),
        nutrition=MacroNutrients(),
        health_score=0,
        analysis="Analysis failed. Please try again.",
        recommendations=(),
        alternatives=(),
        meal=meal,
    )


@dataclass
class ResultAssembler:
    """Runs the locate, decode, extract and synthesize tiers for a response."""

    summary_min_length: int = DEFAULT_MIN_SUMMARY_LENGTH
    scan: ScanMode = "greedy"
    extractors: tuple[Extractor, ...] = DEFAULT_EXTRACTORS
    debug: bool = False

    def assemble(
        self,
        text: str,
        shape: ResponseShape | str,
        context: MealContext | None = None,
    ) -> NutritionAnalysis | HealthProfileSummary:
        """Assemble the record for ``shape``; only caller mistakes raise."""
        resolved = resolve_shape(shape)
        if resolved is ResponseShape.NUTRITION:
            if context is not None and not isinstance(context, MealContext):
                raise ContractViolationError(
                    "Nutrition context must be a MealContext, "
                    f"got {type(context).__name__}"
                )
            return self.build_nutrition_analysis(text, context)
        if context is not None:
            raise ContractViolationError("Health profile parsing takes no context")
        return self.build_health_profile(text)

    def build_nutrition_analysis(
        self, text: str, meal: MealContext | None = None
    ) -> NutritionAnalysis:
        """Decoded analysis with ``meal`` attached, or a placeholder record."""
        if not text.strip():
            _logger.warning("Nutrition response was empty; using default result")
            return default_nutrition_analysis(meal)

        decoded = locate_and_decode(text, ResponseShape.NUTRITION, scan=self.scan)
        if isinstance(decoded, DecodeFailure):
            _logger.warning(
                "Nutrition response unusable (%s): %s", decoded.kind, decoded.reason
            )
            return placeholder_nutrition_analysis(text, meal)

        if self.debug:
            _logger.info(
                "Nutrition decoded: dishes=%s health_score=%s",
                len(decoded.dishes),
                decoded.health_score,
            )
        return NutritionAnalysis(**dict(decoded), meal=meal)

    def build_health_profile(self, text: str) -> HealthProfileSummary:
        """Decoded profile with a valid narrative, or one rebuilt from the prose."""
        decoded = locate_and_decode(text, ResponseShape.HEALTH_PROFILE, scan=self.scan)
        if isinstance(decoded, HealthProfileSummary):
            if is_valid_narrative(decoded.full_summary, self.summary_min_length):
                return decoded
            if self.debug:
                _logger.info("Health profile narrative invalid; synthesizing")
            narrative = synthesize_summary(
                decoded.personal_info,
                decoded.chronic_conditions,
                decoded.medications,
                decoded.allergies,
                decoded.health_goals,
            )
            return decoded.model_copy(
                update={
                    "full_summary": pad_narrative(narrative, self.summary_min_length)
                }
            )

        _logger.warning(
            "Health profile response unusable (%s): %s; extracting from prose",
            decoded.kind,
            decoded.reason,
        )
        findings = extract_health_entities(text, self.extractors)
        narrative = self._fallback_narrative(
            synthesize_summary(
                findings.personal_info,
                findings.conditions,
                findings.medications,
                findings.allergies,
            ),
            text,
        )
        return HealthProfileSummary(
            personal_info=findings.personal_info,
            chronic_conditions=findings.conditions,
            medications=findings.medications,
            allergies=findings.allergies,
            dietary_restrictions=(),
            exercise_limitations=(),
            health_goals=(),
            vital_signs=None,
            full_summary=narrative,
        )

    def _fallback_narrative(self, synthesized: str, raw_text: str) -> str:
        prose = strip_code_fences(raw_text)
        if not is_valid_narrative(prose, self.summary_min_length):
            return pad_narrative(synthesized, self.summary_min_length)
        if synthesized == INSUFFICIENT_INFORMATION:
            return prose
        return f"{synthesized} {prose}"
