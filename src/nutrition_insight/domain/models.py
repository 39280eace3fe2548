"""Shared domain types for decoded model responses."""

import math
from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FrozenRecord(BaseModel):
    """Base for immutable records exchanged as camelCase JSON."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ResponseShape(StrEnum):
    """Shapes a model response can be decoded into."""

    NUTRITION = "nutrition"
    HEALTH_PROFILE = "health_profile"


class FailureKind(StrEnum):
    """Why a response could not be turned into a typed record."""

    NO_CANDIDATE = "no_candidate"
    DECODE_FAILURE = "decode_failure"
    CONTRACT_VIOLATION = "contract_violation"


@dataclass(frozen=True)
class DecodeFailure:
    """Failure arm of a locate/decode attempt."""

    kind: FailureKind
    reason: str
    errors: tuple[str, ...] = field(default_factory=tuple)


class ContractViolationError(ValueError):
    """Raised when a caller asks for something the decoder cannot do."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.failure = DecodeFailure(
            kind=FailureKind.CONTRACT_VIOLATION, reason=reason
        )


def resolve_shape(shape: object) -> ResponseShape:
    """Return the shape selector or raise for an unknown one."""
    if isinstance(shape, ResponseShape):
        return shape
    if isinstance(shape, str):
        try:
            return ResponseShape(shape)
        except ValueError:
            pass
    raise ContractViolationError(f"Unknown response shape: {shape!r}")


def parse_number(value: object) -> float | None:
    """Convert a JSON number (or numeric string) to float, rejecting booleans."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def coerce_number(value: object) -> float | None:
    """Like :func:`parse_number`, but NaN and infinities count as missing."""
    number = parse_number(value)
    if number is None or not math.isfinite(number):
        return None
    return number


def finite_or_none(value: object) -> object:
    """Replace NaN and infinities with None, leaving other values untouched."""
    number = parse_number(value)
    if number is not None and not math.isfinite(number):
        return None
    return value


def round_if_float(value: object) -> object:
    """Round float inputs for integer fields, leaving other values untouched."""
    value = finite_or_none(value)
    if isinstance(value, float):
        return round(value)
    return value
