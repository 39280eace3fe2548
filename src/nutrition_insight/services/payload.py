"""Locate a JSON object inside free-form model output."""

from typing import Literal

FENCE_OPEN = "```json"
FENCE_CLOSE = "```"

ScanMode = Literal["greedy", "balanced"]


def locate_json_payload(text: str, scan: ScanMode = "greedy") -> str | None:
    """Return the substring most likely to be a JSON object, or None.

    A ```json fenced block wins. Otherwise the span from the first ``{`` to
    the last ``}`` is returned. That span over-captures when the text holds
    more than one object; ``scan="balanced"`` returns the first complete
    object instead and only falls back to the greedy span when none closes.
    """
    fenced = _fenced_block(text)
    if fenced:
        return fenced
    if scan == "balanced":
        balanced = _first_balanced_object(text)
        if balanced is not None:
            return balanced
    return _greedy_span(text)


def _fenced_block(text: str) -> str | None:
    start = text.find(FENCE_OPEN)
    if start == -1:
        return None
    body_start = start + len(FENCE_OPEN)
    end = text.find(FENCE_CLOSE, body_start)
    if end == -1:
        return None
    return text[body_start:end].strip() or None


def _greedy_span(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start : end + 1]


def _first_balanced_object(text: str) -> str | None:
    """First complete ``{...}`` object, skipping braces inside string literals.

    When an opening brace never closes, the earliest complete object nested
    after it is returned instead.
    """
    open_positions: list[int] = []
    best: tuple[int, int] | None = None
    in_string = False
    escaped = False
    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            open_positions.append(index)
        elif char == "}" and open_positions:
            start = open_positions.pop()
            if not open_positions:
                return text[start : index + 1]
            if best is None or start < best[0]:
                best = (start, index)
    if best is None:
        return None
    return text[best[0] : best[1] + 1]
