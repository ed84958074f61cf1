from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from careerfit.core.config import AnalysisConfig
from careerfit.core.errors import NotFoundError
from careerfit.schemas.analysis import Candidate, Employer, Job
from careerfit.stores.base import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    candidate: Candidate
    job: Job
    employer: Employer | None


class ContextFetcher:
    def __init__(self, records: RecordStore, config: AnalysisConfig):
        self._records = records
        self._config = config

    async def get_candidate(self, talent_id: str) -> Candidate:
        try:
            matches = await self._records.find_records(
                self._config.candidates_collection_id, "talentId", talent_id
            )
            if not matches:
                raise LookupError("Talent profile not found")
        except Exception as exc:
            raise NotFoundError(f"Failed to fetch talent information: {exc}") from exc

        if len(matches) > 1:
            logger.warning("candidate_lookup_ambiguous talent_id=%s matches=%s", talent_id, len(matches))
        return Candidate.model_validate(matches[0])

    async def get_job(self, job_id: str) -> Job:
        try:
            record = await self._records.get_record(self._config.jobs_collection_id, job_id)
        except Exception as exc:
            raise NotFoundError(f"Failed to fetch job information: {exc}") from exc
        return Job.model_validate(record)

    async def get_employer(self, employer_id: str | None) -> Employer | None:
        if not employer_id:
            return None
        try:
            record = await self._records.get_record(self._config.employers_collection_id, employer_id)
            return Employer.model_validate(record)
        except Exception as exc:
            logger.warning("employer_lookup_failed employer_id=%s: %s", employer_id, exc)
            return None

    async def fetch(self, talent_id: str, job_id: str) -> RequestContext:
        candidate, job = await asyncio.gather(
            self.get_candidate(talent_id),
            self.get_job(job_id),
        )
        employer = await self.get_employer(job.employer)
        return RequestContext(candidate=candidate, job=job, employer=employer)
