"""Decode located JSON candidates into typed records."""

import logging

from pydantic import BaseModel, ValidationError

from nutrition_insight.domain.health import HealthProfileSummary
from nutrition_insight.domain.models import (
    DecodeFailure,
    FailureKind,
    ResponseShape,
    resolve_shape,
)
from nutrition_insight.domain.nutrition import NutritionPayload
from nutrition_insight.services.payload import ScanMode, locate_json_payload

_SHAPE_MODELS: dict[ResponseShape, type[BaseModel]] = {
    ResponseShape.NUTRITION: NutritionPayload,
    ResponseShape.HEALTH_PROFILE: HealthProfileSummary,
}

_logger = logging.getLogger(__name__)

DecodedRecord = NutritionPayload | HealthProfileSummary


def decode_payload(
    candidate: str, shape: ResponseShape | str
) -> DecodedRecord | DecodeFailure:
    """Validate a JSON candidate against the requested shape.

    Malformed JSON, a wrong top-level type or a missing required field all
    yield a ``DecodeFailure``; an unknown shape raises
    ``ContractViolationError``.
    """
    model = _SHAPE_MODELS[resolve_shape(shape)]
    try:
        return model.model_validate_json(candidate)
    except ValidationError as exc:
        errors = tuple(_format_error(error) for error in exc.errors())
        _logger.debug("Decode of %s failed: %s", model.__name__, "; ".join(errors))
        return DecodeFailure(
            kind=FailureKind.DECODE_FAILURE,
            reason=f"Response does not match the {model.__name__} shape",
            errors=errors,
        )


def locate_and_decode(
    text: str, shape: ResponseShape | str, scan: ScanMode = "greedy"
) -> DecodedRecord | DecodeFailure:
    """Find the JSON candidate in raw text and decode it."""
    resolved = resolve_shape(shape)
    candidate = locate_json_payload(text, scan=scan)
    if candidate is None:
        return DecodeFailure(
            kind=FailureKind.NO_CANDIDATE,
            reason="No JSON object found in response",
        )
    return decode_payload(candidate, resolved)


def _format_error(error: dict[str, object]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "invalid value")
    return f"{location}: {message}" if location else str(message)
