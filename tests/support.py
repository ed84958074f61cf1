from __future__ import annotations

import base64
import json
from typing import Any, Sequence

from careerfit.ai.types import Attachment
from careerfit.core.config import AnalysisConfig
from careerfit.stores.base import ObjectNotFound, RecordNotFound

CANDIDATES = "talents"
JOBS = "jobs"
EMPLOYERS = "employers"

EXTRACTED_CV = (
    "Jordan Alvarez\nBackend engineer with five years of Python, FastAPI and PostgreSQL.\n"
    "Led the migration of billing services to Docker on AWS."
)
EXTRACTED_COVER_LETTER = (
    "Dear hiring team,\nI am excited to apply for the Backend Engineer role at Northwind.\n"
    "My experience building APIs maps directly to your responsibilities."
)


def make_config(**overrides: Any) -> AnalysisConfig:
    values: dict[str, Any] = {
        "candidates_collection_id": CANDIDATES,
        "jobs_collection_id": JOBS,
        "employers_collection_id": EMPLOYERS,
        "storage_bucket_id": "temp-docs",
        "model_configured": True,
    }
    values.update(overrides)
    return AnalysisConfig(**values)


def encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def cv_analysis(score: int = 80, stage_score: int = 85) -> dict[str, Any]:
    return {
        "overallMatchScore": score,
        "careerStageAlignment": {"score": stage_score, "isAppropriateLevel": True},
        "skillsAnalysis": {"matchingSkills": ["Python"], "criticalGaps": ["Go"], "matchPercentage": 72},
        "educationMatch": {"degreeAlignment": 90},
        "topStrengths": ["APIs"],
        "improvementAreas": ["Go"],
        "applicationReadiness": 77,
    }


def cover_letter_analysis(score: int = 60, stage_score: int = 70) -> dict[str, Any]:
    return {
        "overallEffectiveness": score,
        "careerStageAppropriate": {"score": stage_score},
        "contentQuality": {"jobAlignment": 65, "companyResearch": 40},
        "communicationEffectiveness": {"clarity": 80, "persuasiveness": 60, "professionalTone": 85},
        "keyStrengths": ["Clear"],
        "improvements": ["Add metrics"],
    }


class FakeRecordStore:
    def __init__(self, collections: dict[str, list[dict[str, Any]]] | None = None):
        self.collections: dict[str, list[dict[str, Any]]] = collections or {}
        self.calls: list[tuple[str, str, Any]] = []
        self.fail_collections: set[str] = set()

    async def find_records(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]:
        self.calls.append(("find", collection, value))
        if collection in self.fail_collections:
            raise RuntimeError(f"{collection} unavailable")
        return [dict(r) for r in self.collections.get(collection, []) if r.get(field) == value]

    async def get_record(self, collection: str, record_id: str) -> dict[str, Any]:
        self.calls.append(("get", collection, record_id))
        if collection in self.fail_collections:
            raise RuntimeError(f"{collection} unavailable")
        for record in self.collections.get(collection, []):
            if record.get("id") == record_id:
                return dict(record)
        raise RecordNotFound(f"Record '{record_id}' not found in '{collection}'")

    def calls_for(self, collection: str) -> list[tuple[str, str, Any]]:
        return [call for call in self.calls if call[1] == collection]


class FakeObjectStore:
    def __init__(self, *, fail_uploads: bool = False, fail_deletes: Sequence[str] = ()):
        self.objects: dict[str, dict[str, Any]] = {}
        self.created: list[str] = []
        self.delete_attempts: list[str] = []
        self.fail_uploads = fail_uploads
        self.fail_deletes = set(fail_deletes)

    async def create_object(
        self,
        bucket: str,
        object_id: str,
        content: bytes,
        *,
        file_name: str,
        permissions: Sequence[str],
    ) -> str:
        if self.fail_uploads:
            raise RuntimeError("storage unavailable")
        self.objects[object_id] = {
            "bucket": bucket,
            "content": content,
            "file_name": file_name,
            "permissions": list(permissions),
        }
        self.created.append(object_id)
        return object_id

    async def delete_object(self, bucket: str, object_id: str) -> None:
        self.delete_attempts.append(object_id)
        if object_id in self.fail_deletes:
            raise RuntimeError(f"delete failed for {object_id}")
        if object_id not in self.objects:
            raise ObjectNotFound(object_id)
        del self.objects[object_id]


class FakeModelClient:
    """Answers extraction prompts with document text and analysis prompts with JSON."""

    def __init__(
        self,
        *,
        cv_text: str = EXTRACTED_CV,
        cover_letter_text: str = EXTRACTED_COVER_LETTER,
        cv_response: Any = None,
        cover_letter_response: Any = None,
        fail_on: Sequence[str] = (),
    ):
        self.cv_text = cv_text
        self.cover_letter_text = cover_letter_text
        self.cv_response = cv_response if cv_response is not None else cv_analysis()
        self.cover_letter_response = (
            cover_letter_response if cover_letter_response is not None else cover_letter_analysis()
        )
        self.fail_on = set(fail_on)
        self.calls: list[tuple[str, Attachment | None]] = []

    @staticmethod
    def _render(response: Any) -> str:
        return response if isinstance(response, str) else json.dumps(response)

    def _step(self, prompt: str) -> str:
        if prompt.startswith("Extract all text content from this CV"):
            return "extract_cv"
        if prompt.startswith("Extract all text content from this cover letter"):
            return "extract_cover_letter"
        if prompt.startswith("Analyze this CV"):
            return "analyze_cv"
        return "analyze_cover_letter"

    async def generate(self, prompt: str, attachment: Attachment | None = None) -> str:
        self.calls.append((prompt, attachment))
        step = self._step(prompt)
        if step in self.fail_on:
            raise RuntimeError(f"model unavailable during {step}")
        if step == "extract_cv":
            return self.cv_text
        if step == "extract_cover_letter":
            return self.cover_letter_text
        if step == "analyze_cv":
            return self._render(self.cv_response)
        return self._render(self.cover_letter_response)


def default_records(*, employer_ref: str | None = "emp-001") -> FakeRecordStore:
    job: dict[str, Any] = {
        "id": "job-001",
        "name": "Backend Engineer",
        "seniorityLevel": "Mid-Senior",
        "skills": ["Python", "AWS"],
        "Degrees": ["BSc Computer Science"],
        "responsibilities": "Design and operate APIs.",
        "industry": "Technology",
    }
    if employer_ref:
        job["employer"] = employer_ref
    return FakeRecordStore(
        {
            CANDIDATES: [
                {
                    "id": "rec-1",
                    "talentId": "talent-001",
                    "fullname": "Jordan Alvarez",
                    "careerStage": "Trailblazer",
                    "skills": ["Python", "FastAPI"],
                    "degrees": ["BSc Computer Science"],
                }
            ],
            JOBS: [job],
            EMPLOYERS: [{"id": "emp-001", "name": "Northwind Talent"}],
        }
    )
