import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pydantic import ValidationError  # noqa: E402

from careerfit.core.errors import NotFoundError  # noqa: E402
from careerfit.services.context import ContextFetcher  # noqa: E402
from support import CANDIDATES, EMPLOYERS, JOBS, default_records, make_config  # noqa: E402


class ContextFetcherTests(unittest.IsolatedAsyncioTestCase):
    async def test_fetches_candidate_job_and_employer(self):
        records = default_records()
        context = await ContextFetcher(records, make_config()).fetch("talent-001", "job-001")

        self.assertEqual(context.candidate.full_name, "Jordan Alvarez")
        self.assertEqual(context.candidate.career_stage, "Trailblazer")
        self.assertEqual(context.job.seniority_level, "Mid-Senior")
        self.assertEqual(context.job.degrees, ["BSc Computer Science"])
        self.assertEqual(context.employer.name, "Northwind Talent")
        self.assertEqual(records.calls_for(EMPLOYERS), [("get", EMPLOYERS, "emp-001")])

    async def test_first_matching_candidate_wins(self):
        records = default_records()
        records.collections[CANDIDATES].append(
            {"id": "rec-2", "talentId": "talent-001", "fullname": "Duplicate", "careerStage": "Pathfinder"}
        )
        with self.assertLogs("careerfit.services.context", level="WARNING"):
            candidate = await ContextFetcher(records, make_config()).get_candidate("talent-001")
        self.assertEqual(candidate.id, "rec-1")

    async def test_missing_candidate_is_not_found(self):
        with self.assertRaises(NotFoundError) as ctx:
            await ContextFetcher(default_records(), make_config()).get_candidate("nobody")
        self.assertEqual(
            str(ctx.exception),
            "Failed to fetch talent information: Talent profile not found",
        )
        self.assertEqual(ctx.exception.status_code, 404)

    async def test_missing_job_is_not_found(self):
        with self.assertRaises(NotFoundError) as ctx:
            await ContextFetcher(default_records(), make_config()).fetch("talent-001", "job-404")
        self.assertTrue(str(ctx.exception).startswith("Failed to fetch job information:"))

    async def test_record_store_outage_maps_to_not_found(self):
        records = default_records()
        records.fail_collections.add(CANDIDATES)
        with self.assertRaises(NotFoundError) as ctx:
            await ContextFetcher(records, make_config()).get_candidate("talent-001")
        self.assertIn("talents unavailable", str(ctx.exception))

    async def test_no_employer_reference_skips_lookup(self):
        records = default_records(employer_ref=None)
        context = await ContextFetcher(records, make_config()).fetch("talent-001", "job-001")
        self.assertIsNone(context.employer)
        self.assertEqual(records.calls_for(EMPLOYERS), [])
        self.assertEqual(len(records.calls_for(JOBS)), 1)

    async def test_employer_failure_is_swallowed(self):
        records = default_records(employer_ref="emp-missing")
        with self.assertLogs("careerfit.services.context", level="WARNING"):
            context = await ContextFetcher(records, make_config()).fetch("talent-001", "job-001")
        self.assertIsNone(context.employer)
        self.assertEqual(context.job.name, "Backend Engineer")

    async def test_loosely_typed_job_fields_are_flattened(self):
        records = default_records()
        job = records.collections[JOBS][0]
        job["responsibilities"] = ["Design APIs", "Operate services"]
        job["seniorityLevel"] = 3
        job["employer"] = {"$id": "emp-001", "name": "Northwind Talent"}

        context = await ContextFetcher(records, make_config()).fetch("talent-001", "job-001")

        self.assertEqual(context.job.responsibilities, "Design APIs, Operate services")
        self.assertEqual(context.job.seniority_level, "3")
        self.assertEqual(context.employer.name, "Northwind Talent")

    async def test_non_string_career_stage_is_dropped(self):
        records = default_records()
        records.collections[CANDIDATES][0]["careerStage"] = ["Trailblazer"]

        candidate = await ContextFetcher(records, make_config()).get_candidate("talent-001")

        self.assertIsNone(candidate.career_stage)
        self.assertEqual(candidate.full_name, "Jordan Alvarez")

    async def test_malformed_found_record_is_not_reported_as_missing(self):
        records = default_records()
        records.collections[CANDIDATES][0]["id"] = {"nested": True}

        with self.assertRaises(ValidationError):
            await ContextFetcher(records, make_config()).get_candidate("talent-001")

    async def test_uses_configured_collections(self):
        records = default_records()
        records.collections["people"] = records.collections.pop(CANDIDATES)
        config = make_config(candidates_collection_id="people")
        candidate = await ContextFetcher(records, config).get_candidate("talent-001")
        self.assertEqual(candidate.talent_id, "talent-001")
        self.assertEqual(records.calls_for("people"), [("find", "people", "talent-001")])


if __name__ == "__main__":
    unittest.main()
