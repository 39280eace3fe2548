"""Endpoints that turn raw model responses into typed records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request

from nutrition_insight.api.models import (
    HealthProfileParseRequest,
    NutritionParseRequest,
)
from nutrition_insight.domain.models import ContractViolationError

if TYPE_CHECKING:
    from nutrition_insight.containers import AppContainer

router = APIRouter(prefix="/parse", tags=["parse"])


@router.post("/nutrition")
async def parse_nutrition(
    payload: NutritionParseRequest, request: Request
) -> dict[str, object]:
    """Return the nutrition analysis for a raw food-photo response."""
    container: AppContainer = request.app.state.container
    result = container.assembler.build_nutrition_analysis(payload.text, payload.meal)
    return result.model_dump(mode="json", by_alias=True)


@router.post("/health-profile")
async def parse_health_profile(
    payload: HealthProfileParseRequest, request: Request
) -> dict[str, object]:
    """Return the health profile summary for a raw response."""
    container: AppContainer = request.app.state.container
    result = container.assembler.build_health_profile(payload.text)
    return result.model_dump(mode="json", by_alias=True)


@router.post("/{shape}")
async def parse_shape(
    shape: str, payload: NutritionParseRequest, request: Request
) -> dict[str, object]:
    """Parse against a shape named in the path."""
    container: AppContainer = request.app.state.container
    try:
        result = container.assembler.assemble(payload.text, shape, payload.meal)
    except ContractViolationError as exc:
        raise HTTPException(
            status_code=422,
            detail={"kind": exc.failure.kind.value, "reason": exc.failure.reason},
        ) from exc
    return result.model_dump(mode="json", by_alias=True)
