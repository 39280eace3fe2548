"""Tests for locating JSON payloads in model output."""

import json

from nutrition_insight.services.payload import locate_json_payload
from tests.conftest import NUTRITION_PAYLOAD


def test_fenced_block_returns_trimmed_interior() -> None:
    body = json.dumps(NUTRITION_PAYLOAD)
    text = f"Sure! Here you go:\n```json\n   {body}  \n```\nLet me know."

    assert locate_json_payload(text) == body


def test_fenced_block_wins_over_braces_in_prose() -> None:
    text = 'Use {braces} carefully.\n```json\n{"a": 1}\n```\nThe end }'

    assert locate_json_payload(text) == '{"a": 1}'


def test_unclosed_fence_falls_back_to_brace_span() -> None:
    text = 'Result:\n```json\n{"a": 1}'

    assert locate_json_payload(text) == '{"a": 1}'


def test_empty_fence_falls_back_to_brace_span() -> None:
    text = '```json\n\n``` and then {"a": 1}'

    assert locate_json_payload(text) == '{"a": 1}'


def test_brace_span_embedded_in_prose() -> None:
    text = 'The meal looks great. {"healthScore": 80} Hope this helps.'

    assert locate_json_payload(text) == '{"healthScore": 80}'


def test_no_braces_means_no_candidate() -> None:
    assert locate_json_payload("No structured data here, sorry.") is None
    assert locate_json_payload("") is None


def test_closing_brace_before_opening_is_no_candidate() -> None:
    assert locate_json_payload("} backwards {") is None


def test_greedy_span_over_captures_multiple_objects() -> None:
    text = 'First {"a": 1} and second {"b": 2}.'

    assert locate_json_payload(text) == '{"a": 1} and second {"b": 2}'


def test_balanced_scan_returns_first_complete_object() -> None:
    text = 'First {"a": {"nested": "}"}} and second {"b": 2}.'

    assert locate_json_payload(text, scan="balanced") == '{"a": {"nested": "}"}}'


def test_balanced_scan_skips_unclosed_brace() -> None:
    text = 'Stray { in prose then {"a": 1} done'

    assert locate_json_payload(text, scan="balanced") == '{"a": 1}'


def test_balanced_scan_falls_back_to_greedy_span() -> None:
    text = 'Broken {"a": "unterminated} tail'

    assert locate_json_payload(text, scan="balanced") == '{"a": "unterminated}'
