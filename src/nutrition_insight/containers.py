"""Dependency container wiring for the application."""

from dataclasses import dataclass

from nutrition_insight.config import Settings, parse_condition_terms
from nutrition_insight.services.analysis import AnalysisService, GenerativeClient
from nutrition_insight.services.assembly import ResultAssembler
from nutrition_insight.services.extraction import build_extractors


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    assembler: ResultAssembler
    analysis_service: AnalysisService | None = None


def build_container(
    settings: Settings | None = None, client: GenerativeClient | None = None
) -> AppContainer:
    """Create the default dependency container.

    The analysis service needs a model client; without one only parsing of
    already-fetched responses is available.
    """
    resolved_settings = settings or Settings()
    assembler = ResultAssembler(
        summary_min_length=resolved_settings.summary_min_length,
        scan=resolved_settings.payload_scan,
        extractors=build_extractors(
            parse_condition_terms(resolved_settings.extra_conditions)
        ),
        debug=resolved_settings.debug,
    )
    analysis_service = None
    if client is not None:
        analysis_service = AnalysisService(
            client=client,
            assembler=assembler,
            model=resolved_settings.generative_model,
            system_prompt=resolved_settings.system_prompt,
        )
    return AppContainer(
        settings=resolved_settings,
        assembler=assembler,
        analysis_service=analysis_service,
    )
