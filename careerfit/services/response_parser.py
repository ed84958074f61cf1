"""Recovery of JSON objects from free-form model output.

Generative models are asked to answer with a JSON object but regularly wrap
it in markdown fences, leave trailing commas, skip quotes around keys or use
single-quoted strings. ``extract_and_clean_json`` repairs those cases before
the text is handed to ``json.loads``.

Score normalization skips absent fields: a missing key, ``None`` or a missing
parent object is left alone and never defaulted to 0. Non-finite numbers
(the ``NaN`` and ``Infinity`` literals ``json.loads`` accepts) become ``None``
and count as absent too. Present numeric values (numeric strings included)
are clamped into [0, 100]; anything else present is left untouched.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Iterable

from careerfit.core.errors import JSONParseFailed, NoJSONFound

logger = logging.getLogger(__name__)

SCORE_MIN = 0
SCORE_MAX = 100

_CODE_FENCE_RE = re.compile(r"```[\w-]*\s*")
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")
_BARE_KEY_RE = re.compile(r"([{,]\s*)(\w+):")
_SINGLE_QUOTED_VALUE_RE = re.compile(r":\s*'([^']*)'")
_WHITESPACE_RE = re.compile(r"\s+")


def _non_finite_as_absent(_literal: str) -> None:
    return None


def extract_and_clean_json(text: str) -> str:
    cleaned = _CODE_FENCE_RE.sub("", text or "").strip()

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1 or start >= end:
        raise NoJSONFound("No valid JSON object found in response")

    cleaned = cleaned[start : end + 1]
    cleaned = _TRAILING_COMMA_RE.sub(r"\1", cleaned)
    cleaned = _BARE_KEY_RE.sub(r'\1"\2":', cleaned)
    cleaned = _SINGLE_QUOTED_VALUE_RE.sub(r': "\1"', cleaned)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def parse_model_json(text: str) -> dict[str, Any]:
    cleaned = extract_and_clean_json(text)
    try:
        parsed = json.loads(cleaned, parse_constant=_non_finite_as_absent)
    except json.JSONDecodeError as exc:
        logger.warning("model_json_parse_failed error=%s cleaned=%s", exc, cleaned[:500])
        raise JSONParseFailed(f"Failed to parse JSON: {exc.msg}", cleaned_text=cleaned) from exc
    if not isinstance(parsed, dict):
        raise JSONParseFailed("Failed to parse JSON: expected an object", cleaned_text=cleaned)
    return parsed


def _as_number(value: Any) -> float | int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def normalize_score(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    number = _as_number(value)
    if number is None:
        return value
    return max(SCORE_MIN, min(SCORE_MAX, number))


def normalize_scores(payload: dict[str, Any], paths: Iterable[str]) -> dict[str, Any]:
    """Clamp every dot-path field of ``payload`` in place, skipping absent ones."""
    for path in paths:
        *parents, leaf = path.split(".")
        current: Any = payload
        for key in parents:
            if not isinstance(current, dict):
                break
            current = current.get(key)
        if not isinstance(current, dict):
            continue
        if current.get(leaf) is None:
            continue
        current[leaf] = normalize_score(current[leaf])
    return payload


def missing_keys(payload: dict[str, Any], required: Iterable[str]) -> list[str]:
    return [key for key in required if key not in payload]
