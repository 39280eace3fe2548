"""Analysis service that asks a generative model and parses its answer."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from nutrition_insight.domain.health import HealthProfileSummary
from nutrition_insight.domain.meals import MealContext
from nutrition_insight.domain.nutrition import NutritionAnalysis
from nutrition_insight.services.assembly import ResultAssembler
from nutrition_insight.services.prompts import (
    build_health_profile_prompt,
    build_nutrition_prompt,
)

_logger = logging.getLogger(__name__)


class GenerativeClient(Protocol):
    """Interface for a multimodal text-generation backend."""

    async def generate(
        self,
        *,
        model: str,
        prompt: str,
        image_data_url: str | None,
    ) -> str:
        """Return the model's raw text response."""


@dataclass
class AnalysisService:
    """Builds prompts, calls the model and assembles typed records."""

    client: GenerativeClient
    assembler: ResultAssembler
    model: str
    system_prompt: str

    async def analyze_food(
        self, image_bytes: bytes, meal: MealContext
    ) -> NutritionAnalysis:
        """Analyse a meal photo; transport errors from the client propagate."""
        raw = await self.client.generate(
            model=self.model,
            prompt=build_nutrition_prompt(self.system_prompt, meal),
            image_data_url=_to_data_url(image_bytes),
        )
        _logger.info("Food analysis response received: chars=%s", len(raw))
        return self.assembler.build_nutrition_analysis(raw, meal)

    async def analyze_health_profile(
        self, text: str, image_bytes: bytes | None = None
    ) -> HealthProfileSummary:
        """Summarise a free-text (and optional photo) health description."""
        raw = await self.client.generate(
            model=self.model,
            prompt=build_health_profile_prompt(text),
            image_data_url=_to_data_url(image_bytes) if image_bytes else None,
        )
        _logger.info("Health profile response received: chars=%s", len(raw))
        return self.assembler.build_health_profile(raw)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[4:12] in {b"ftypheic", b"ftypheix", b"ftypmif1"}:
        return "image/heic"
    return "image/jpeg"
