from __future__ import annotations

import math
from typing import Any

from careerfit.core.career_stages import CareerStageContext
from careerfit.schemas.analysis import CareerStageReadiness, CombinedInsight, ConsistencyCheck

READY_THRESHOLD = 70
DEFAULT_STAGE_SCORE = 50
CONSISTENCY_SCORE = 75
READY_RECOMMENDATION = "Application ready - good fit for career stage"
IMPROVE_RECOMMENDATION = "Consider improvements before submission"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _score(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value):
        return default
    return value or default


def _nested(payload: dict[str, Any], section: str, key: str) -> Any:
    block = payload.get(section)
    if not isinstance(block, dict):
        return None
    return block.get(key)


def combine_insights(
    cv: dict[str, Any],
    cover_letter: dict[str, Any],
    career_stage: str | None,
    stage_context: CareerStageContext,
) -> CombinedInsight:
    cv_score = _score(cv.get("overallMatchScore"), 0)
    cl_score = _score(cover_letter.get("overallEffectiveness"), 0)
    cv_stage_score = _score(_nested(cv, "careerStageAlignment", "score"), DEFAULT_STAGE_SCORE)
    cl_stage_score = _score(_nested(cover_letter, "careerStageAppropriate", "score"), DEFAULT_STAGE_SCORE)

    ready = cv_score >= READY_THRESHOLD and cl_score >= READY_THRESHOLD
    return CombinedInsight(
        overall_application_score=_round_half_up((cv_score + cl_score) / 2),
        career_stage_readiness=CareerStageReadiness(
            score=_round_half_up((cv_stage_score + cl_stage_score) / 2),
            alignment=f"Strong alignment for {career_stage or stage_context.stage} career stage",
            recommendation=READY_RECOMMENDATION if ready else IMPROVE_RECOMMENDATION,
        ),
        consistency_check=ConsistencyCheck(
            score=CONSISTENCY_SCORE,
            strengths_alignment="Documents consistently highlight relevant experience",
            improvement_areas="Ensure skill emphasis matches between documents",
        ),
        strategic_advice=[
            f"Focus on {stage_context.focus.lower()} in your application approach",
            "Align both documents to emphasize your career stage strengths",
            "Highlight growth potential and learning mindset",
        ],
    )
