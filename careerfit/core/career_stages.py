from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

_CAREER_STAGES_PATH = Path(__file__).resolve().parents[1] / "config" / "career_stages.yaml"
_CAREER_STAGES_CACHE: dict[str, Any] | None = None


@dataclass(frozen=True)
class CareerStageContext:
    stage: str
    description: str
    focus: str
    expectations: str
    priorities: tuple[str, ...]


def _load_career_stages() -> dict[str, Any]:
    """Load career stage narratives from the packaged YAML file and cache them."""
    global _CAREER_STAGES_CACHE

    if _CAREER_STAGES_CACHE is not None:
        return _CAREER_STAGES_CACHE

    try:
        raw = _CAREER_STAGES_PATH.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(
            f"Failed to read career stage config '{_CAREER_STAGES_PATH}': {exc}"
        ) from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(
            f"Invalid YAML in career stage config '{_CAREER_STAGES_PATH}': {exc}"
        ) from exc

    if not isinstance(parsed, dict) or not isinstance(parsed.get("stages"), dict):
        raise RuntimeError(
            f"Invalid career stage config '{_CAREER_STAGES_PATH}': expected a 'stages' mapping."
        )
    if parsed.get("fallback") not in parsed["stages"]:
        raise RuntimeError(
            f"Invalid career stage config '{_CAREER_STAGES_PATH}': fallback stage is not defined."
        )

    _CAREER_STAGES_CACHE = parsed
    return _CAREER_STAGES_CACHE


def known_career_stages() -> tuple[str, ...]:
    return tuple(_load_career_stages()["stages"].keys())


def get_career_stage_context(stage: str | None) -> CareerStageContext:
    config = _load_career_stages()
    stages = config["stages"]
    key = stage if isinstance(stage, str) and stage in stages else config["fallback"]
    entry = stages[key]
    return CareerStageContext(
        stage=key,
        description=str(entry.get("description", "")),
        focus=str(entry.get("focus", "")),
        expectations=str(entry.get("expectations", "")),
        priorities=tuple(str(item) for item in entry.get("priorities") or ()),
    )
