from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from careerfit.ai.types import ModelClient
from careerfit.core.career_stages import CareerStageContext, get_career_stage_context
from careerfit.core.config import AnalysisConfig
from careerfit.core.errors import (
    AnalysisError,
    AnalysisPipelineError,
    ConfigurationError,
    InputError,
    MissingDocuments,
    UnexpectedError,
)
from careerfit.schemas.analysis import (
    AnalysisBundle,
    AnalysisFailureResponse,
    AnalysisRequest,
    AnalysisSuccessResponse,
    AnalysisSummary,
    CareerStageSummary,
    DocumentKind,
    DocumentsAnalyzed,
    JobContext,
)
from careerfit.services.aggregator import combine_insights
from careerfit.services.analyzer import Analyzer
from careerfit.services.context import ContextFetcher, RequestContext
from careerfit.services.extractor import DOCUMENT_LABELS, TextExtractor
from careerfit.services.temp_artifacts import TempArtifactManager
from careerfit.services.validator import FileCheck, decode_payload, validate_file
from careerfit.stores.base import ObjectStore, RecordStore

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not specified"
COMPANY_UNAVAILABLE = "Company information not available"


@dataclass(frozen=True)
class DocumentInput:
    kind: DocumentKind
    file_name: str
    content: bytes
    check: FileCheck


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class DocumentAnalysisPipeline:
    """Runs one candidate/job document analysis from raw request body to response payload.

    Stages run strictly in order: validation, context fetch, CV processing,
    cover letter processing, aggregation and response assembly. The first
    failing stage aborts the request. Temporary uploads recorded along the
    way are always deleted before the call returns.
    """

    def __init__(
        self,
        config: AnalysisConfig,
        *,
        records: RecordStore,
        objects: ObjectStore,
        model: ModelClient | None,
    ):
        self._config = config
        self._objects = objects
        self._model = model
        self._context = ContextFetcher(records, config)

    async def handle(self, body: Any) -> tuple[int, dict[str, Any]]:
        started = time.perf_counter()
        try:
            response = await self.run(body)
        except AnalysisPipelineError as exc:
            return exc.status_code, self._failure(exc, started)
        except Exception as exc:
            logger.exception("document_analysis_unexpected_error")
            return 500, self._failure(UnexpectedError(str(exc)), started)
        return 200, response.model_dump(by_alias=True, mode="json")

    async def run(self, body: Any) -> AnalysisSuccessResponse:
        started = time.perf_counter()
        logger.info("document_analysis_started")

        if self._model is None or not self._config.model_configured:
            logger.error("model_credentials_missing")
            raise ConfigurationError("Server configuration error")

        request = self._parse_body(body)
        documents = self._validate(request)
        talent_id = request.talent_id or ""
        job_id = request.job_id or ""
        extractor = TextExtractor(self._model, self._config)
        analyzer = Analyzer(self._model, self._config)

        logger.info(
            "document_analysis_request talent_id=%s job_id=%s documents=%s",
            talent_id,
            job_id,
            [f"{doc.kind}:{doc.file_name}" for doc in documents],
        )

        artifacts = TempArtifactManager(self._objects, self._config, talent_id)
        try:
            context = await self._context.fetch(talent_id, job_id)
            stage = get_career_stage_context(context.candidate.career_stage)
            logger.info(
                "document_analysis_context talent=%s stage=%s job=%s employer=%s",
                context.candidate.full_name,
                context.candidate.career_stage,
                context.job.name,
                context.employer.name if context.employer else None,
            )

            results: dict[str, dict[str, Any]] = {}
            for document in documents:
                results[document.kind] = await self._process_document(
                    document, context, stage, artifacts, extractor, analyzer
                )

            cv = results.get("cv")
            cover_letter = results.get("cover_letter")
            combined = None
            if cv is not None and cover_letter is not None:
                combined = combine_insights(cv, cover_letter, context.candidate.career_stage, stage)

            response = self._build_response(context, stage, cv, cover_letter, combined, started)
            logger.info(
                "document_analysis_completed stage=%s cv=%s cover_letter=%s execution_ms=%s",
                context.candidate.career_stage,
                cv is not None,
                cover_letter is not None,
                response.summary.execution_time,
            )
            return response
        finally:
            await artifacts.cleanup()

    def _parse_body(self, body: Any) -> AnalysisRequest:
        try:
            if body is None or body == b"" or body == "":
                raise ValueError("Request body is empty")
            data = json.loads(body) if isinstance(body, (bytes, str)) else body
            if not isinstance(data, dict):
                raise ValueError("Request body must be a JSON object")
            return AnalysisRequest.model_validate(data)
        except (ValueError, ValidationError) as exc:
            logger.error("request_body_invalid: %s", exc)
            raise InputError("Invalid JSON input") from exc

    def _validate(self, request: AnalysisRequest) -> list[DocumentInput]:
        if not request.talent_id or not request.job_id:
            raise InputError("Missing required parameters: talentId and jobId are required")

        if not request.cv_data and not request.cover_letter_data:
            raise MissingDocuments("At least one document (CV or cover letter) must be provided")

        pending: list[tuple[DocumentKind, str, str, str]] = []
        if request.cv_data:
            if not request.cv_file_name:
                raise InputError("cvFileName is required when cvData is provided")
            pending.append(("cv", request.cv_file_name, request.cv_data, "cvData"))
        if request.cover_letter_data:
            if not request.cover_letter_file_name:
                raise InputError("coverLetterFileName is required when coverLetterData is provided")
            pending.append(
                ("cover_letter", request.cover_letter_file_name, request.cover_letter_data, "coverLetterData")
            )

        checks = [validate_file(file_name, encoded, self._config) for _, file_name, encoded, _ in pending]
        return [
            DocumentInput(
                kind=kind,
                file_name=file_name,
                content=decode_payload(encoded, field=field),
                check=check,
            )
            for (kind, file_name, encoded, field), check in zip(pending, checks)
        ]

    async def _process_document(
        self,
        document: DocumentInput,
        context: RequestContext,
        stage: CareerStageContext,
        artifacts: TempArtifactManager,
        extractor: TextExtractor,
        analyzer: Analyzer,
    ) -> dict[str, Any]:
        label = DOCUMENT_LABELS[document.kind]
        logger.info("document_processing_started kind=%s file=%s", document.kind, document.file_name)
        try:
            await artifacts.upload(document.content, document.file_name)

            text = await extractor.extract_text(document.content, document.file_name, document.kind)
            logger.info("document_text_extracted kind=%s chars=%s", document.kind, len(text))

            if document.kind == "cv":
                analysis = await analyzer.analyze_cv(
                    text, context.candidate, context.job, context.employer, stage
                )
            else:
                analysis = await analyzer.analyze_cover_letter(
                    text, context.candidate, context.job, context.employer, stage
                )
        except AnalysisPipelineError as exc:
            exc.stage = label
            logger.error("document_processing_failed kind=%s: %s", document.kind, exc)
            raise
        except Exception as exc:
            logger.error("document_processing_failed kind=%s: %s", document.kind, exc)
            raise AnalysisError(str(exc), stage=label) from exc

        logger.info("document_processing_completed kind=%s", document.kind)
        return analysis

    def _build_response(
        self,
        context: RequestContext,
        stage: CareerStageContext,
        cv: dict[str, Any] | None,
        cover_letter: dict[str, Any] | None,
        combined: Any,
        started: float,
    ) -> AnalysisSuccessResponse:
        job = context.job
        return AnalysisSuccessResponse(
            analysis=AnalysisBundle(cv=cv, cover_letter=cover_letter, combined_insights=combined),
            career_stage_context=CareerStageSummary(
                stage=context.candidate.career_stage or NOT_SPECIFIED,
                description=stage.description,
                focus=stage.focus,
                priorities=list(stage.priorities),
            ),
            job_context=JobContext(
                position=job.name or NOT_SPECIFIED,
                company=(context.employer.name if context.employer else None) or COMPANY_UNAVAILABLE,
                level=job.seniority_level or NOT_SPECIFIED,
                industry=job.industry or NOT_SPECIFIED,
            ),
            summary=AnalysisSummary(
                documents_analyzed=DocumentsAnalyzed(cv=cv is not None, cover_letter=cover_letter is not None),
                execution_time=_elapsed_ms(started),
                analyzed_at=_utc_now().isoformat(),
            ),
        )

    def _failure(self, exc: AnalysisPipelineError, started: float) -> dict[str, Any]:
        logger.error("document_analysis_failed code=%s status=%s: %s", exc.code, exc.status_code, exc.public_message)
        payload = AnalysisFailureResponse(
            status_code=exc.status_code,
            error=exc.public_message,
            execution_time=_elapsed_ms(started),
        )
        return payload.model_dump(by_alias=True, exclude_none=True)
