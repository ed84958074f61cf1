from __future__ import annotations

import logging
import time
from typing import Any, Callable

from careerfit.ai.types import ModelClient
from careerfit.core.career_stages import CareerStageContext
from careerfit.core.config import AnalysisConfig
from careerfit.core.errors import AnalysisError, JSONParseFailed, ParseError
from careerfit.schemas.analysis import Candidate, DocumentKind, Employer, Job
from careerfit.services.prompts import build_cover_letter_prompt, build_cv_prompt
from careerfit.services.response_parser import missing_keys, normalize_scores, parse_model_json

logger = logging.getLogger(__name__)

CV_SCORE_FIELDS = (
    "overallMatchScore",
    "careerStageAlignment.score",
    "skillsAnalysis.matchPercentage",
    "educationMatch.degreeAlignment",
    "applicationReadiness",
)
COVER_LETTER_SCORE_FIELDS = (
    "overallEffectiveness",
    "careerStageAppropriate.score",
    "contentQuality.jobAlignment",
    "contentQuality.companyResearch",
    "communicationEffectiveness.clarity",
    "communicationEffectiveness.persuasiveness",
    "communicationEffectiveness.professionalTone",
)

CV_REQUIRED_KEYS = (
    "overallMatchScore",
    "careerStageAlignment",
    "skillsAnalysis",
    "topStrengths",
    "improvementAreas",
)
COVER_LETTER_REQUIRED_KEYS = (
    "overallEffectiveness",
    "careerStageAppropriate",
    "contentQuality",
    "keyStrengths",
    "improvements",
)

PromptBuilder = Callable[[str, Candidate, Job, Employer | None, CareerStageContext], str]

_ANALYSIS_PROFILES: dict[DocumentKind, tuple[str, PromptBuilder, tuple[str, ...], tuple[str, ...]]] = {
    "cv": ("CV", build_cv_prompt, CV_SCORE_FIELDS, CV_REQUIRED_KEYS),
    "cover_letter": (
        "cover letter",
        build_cover_letter_prompt,
        COVER_LETTER_SCORE_FIELDS,
        COVER_LETTER_REQUIRED_KEYS,
    ),
}


class Analyzer:
    """Scores one extracted document against a job with a single model call."""

    def __init__(self, model: ModelClient, config: AnalysisConfig):
        self._model = model
        self._config = config

    async def analyze_cv(
        self,
        cv_text: str,
        candidate: Candidate,
        job: Job,
        employer: Employer | None,
        stage: CareerStageContext,
    ) -> dict[str, Any]:
        return await self._analyze("cv", cv_text, candidate, job, employer, stage)

    async def analyze_cover_letter(
        self,
        cover_letter_text: str,
        candidate: Candidate,
        job: Job,
        employer: Employer | None,
        stage: CareerStageContext,
    ) -> dict[str, Any]:
        return await self._analyze("cover_letter", cover_letter_text, candidate, job, employer, stage)

    async def _analyze(
        self,
        kind: DocumentKind,
        text: str,
        candidate: Candidate,
        job: Job,
        employer: Employer | None,
        stage: CareerStageContext,
    ) -> dict[str, Any]:
        label, build_prompt, score_fields, required_keys = _ANALYSIS_PROFILES[kind]
        prompt = build_prompt(text, candidate, job, employer, stage)
        started = time.perf_counter()

        try:
            response_text = await self._model.generate(prompt)
        except Exception as exc:
            logger.error("analysis_model_failed kind=%s: %s", kind, exc)
            raise AnalysisError(f"Failed to analyze {label}: {exc}") from exc

        try:
            analysis = parse_model_json(response_text)
        except JSONParseFailed as exc:
            raise JSONParseFailed(f"Failed to analyze {label}: {exc}", cleaned_text=exc.cleaned_text) from exc
        except ParseError as exc:
            raise type(exc)(f"Failed to analyze {label}: {exc}") from exc
        normalize_scores(analysis, score_fields)

        missing = missing_keys(analysis, required_keys)
        if missing:
            if self._config.strict_shape:
                raise ParseError(
                    f"Failed to analyze {label}: response is missing expected keys: {', '.join(missing)}"
                )
            logger.warning("analysis_shape_incomplete kind=%s missing=%s", kind, missing)

        logger.info(
            "analysis_completed kind=%s latency_ms=%s",
            kind,
            int((time.perf_counter() - started) * 1000),
        )
        return analysis
