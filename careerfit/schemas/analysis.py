from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DocumentKind = Literal["cv", "cover_letter"]


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _as_text(value: Any) -> str | None:
    """Flatten a loosely typed record field into display text, or ``None`` when unusable."""
    if value is None or isinstance(value, (bool, dict)):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        parts = [str(item) for item in value if isinstance(item, (str, int, float)) and not isinstance(item, bool)]
        return ", ".join(part for part in parts if part) or None
    return None


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisRequest(CamelModel):
    talent_id: str | None = Field(default=None, max_length=200)
    job_id: str | None = Field(default=None, max_length=200)
    cv_data: str | None = None
    cv_file_name: str | None = Field(default=None, max_length=255)
    cover_letter_data: str | None = None
    cover_letter_file_name: str | None = Field(default=None, max_length=255)


class Candidate(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = ""
    talent_id: str | None = Field(default=None, alias="talentId")
    full_name: str | None = Field(default=None, alias="fullname")
    career_stage: str | None = Field(default=None, alias="careerStage")
    skills: list[Any] = Field(default_factory=list)
    degrees: list[Any] = Field(default_factory=list)

    @field_validator("skills", "degrees", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[Any]:
        return _as_list(value)

    @field_validator("talent_id", "full_name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _as_text(value)

    @field_validator("career_stage", mode="before")
    @classmethod
    def _coerce_stage(cls, value: Any) -> str | None:
        # Anything but a plain tag resolves to the fallback stage.
        return value if isinstance(value, str) else None


class Job(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = ""
    name: str | None = None
    seniority_level: str | None = Field(default=None, alias="seniorityLevel")
    skills: list[Any] = Field(default_factory=list)
    degrees: list[Any] = Field(default_factory=list, alias="Degrees")
    responsibilities: str | None = None
    employer: str | None = None
    industry: str | None = None

    @field_validator("skills", "degrees", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[Any]:
        return _as_list(value)

    @field_validator("name", "seniority_level", "responsibilities", "industry", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _as_text(value)

    @field_validator("employer", mode="before")
    @classmethod
    def _coerce_employer_ref(cls, value: Any) -> str | None:
        if isinstance(value, dict):
            value = value.get("$id") or value.get("id")
        return _as_text(value)


class Employer(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = ""
    name: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _as_text(value)


class CareerStageReadiness(CamelModel):
    score: int = Field(ge=0, le=100)
    alignment: str
    recommendation: str


class ConsistencyCheck(CamelModel):
    score: int = Field(ge=0, le=100)
    strengths_alignment: str
    improvement_areas: str


class CombinedInsight(CamelModel):
    overall_application_score: int = Field(ge=0, le=100)
    career_stage_readiness: CareerStageReadiness
    consistency_check: ConsistencyCheck
    strategic_advice: list[str] = Field(default_factory=list)


class AnalysisBundle(CamelModel):
    cv: dict[str, Any] | None = None
    cover_letter: dict[str, Any] | None = None
    combined_insights: CombinedInsight | None = None


class CareerStageSummary(CamelModel):
    stage: str
    description: str
    focus: str
    priorities: list[str] = Field(default_factory=list)


class JobContext(CamelModel):
    position: str
    company: str
    level: str
    industry: str


class DocumentsAnalyzed(CamelModel):
    cv: bool = False
    cover_letter: bool = False


class AnalysisSummary(CamelModel):
    documents_analyzed: DocumentsAnalyzed
    execution_time: int = Field(ge=0)
    analyzed_at: str


class AnalysisSuccessResponse(CamelModel):
    success: Literal[True] = True
    status_code: Literal[200] = 200
    analysis: AnalysisBundle
    career_stage_context: CareerStageSummary
    job_context: JobContext
    summary: AnalysisSummary


class AnalysisFailureResponse(CamelModel):
    success: Literal[False] = False
    status_code: int
    error: str
    execution_time: int | None = None
