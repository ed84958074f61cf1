import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from careerfit.core.career_stages import get_career_stage_context  # noqa: E402
from careerfit.services.aggregator import (  # noqa: E402
    IMPROVE_RECOMMENDATION,
    READY_RECOMMENDATION,
    combine_insights,
)
from support import cover_letter_analysis, cv_analysis  # noqa: E402


class CombineInsightsTests(unittest.TestCase):
    def setUp(self):
        self.stage = get_career_stage_context("Trailblazer")

    def test_mixed_scores_need_improvement(self):
        combined = combine_insights(cv_analysis(80, 85), cover_letter_analysis(60, 70), "Trailblazer", self.stage)

        self.assertEqual(combined.overall_application_score, 70)
        self.assertEqual(combined.career_stage_readiness.score, 78)
        self.assertEqual(combined.career_stage_readiness.recommendation, IMPROVE_RECOMMENDATION)
        self.assertEqual(
            combined.career_stage_readiness.alignment,
            "Strong alignment for Trailblazer career stage",
        )
        self.assertEqual(combined.consistency_check.score, 75)
        self.assertEqual(
            combined.strategic_advice[0],
            "Focus on career advancement and expertise development in your application approach",
        )
        self.assertEqual(len(combined.strategic_advice), 3)

    def test_both_scores_at_threshold_are_ready(self):
        combined = combine_insights(cv_analysis(70, 70), cover_letter_analysis(70, 70), "Trailblazer", self.stage)
        self.assertEqual(combined.career_stage_readiness.recommendation, READY_RECOMMENDATION)

    def test_missing_stage_scores_default_to_fifty(self):
        cv = cv_analysis(90, 90)
        del cv["careerStageAlignment"]
        letter = cover_letter_analysis(90, 0)

        combined = combine_insights(cv, letter, "Trailblazer", self.stage)

        self.assertEqual(combined.career_stage_readiness.score, 50)
        self.assertEqual(combined.career_stage_readiness.recommendation, READY_RECOMMENDATION)

    def test_missing_overall_scores_count_as_zero(self):
        cv = cv_analysis()
        del cv["overallMatchScore"]
        combined = combine_insights(cv, cover_letter_analysis(85, 70), "Trailblazer", self.stage)
        self.assertEqual(combined.overall_application_score, 43)
        self.assertEqual(combined.career_stage_readiness.recommendation, IMPROVE_RECOMMENDATION)

    def test_non_finite_scores_fall_back_to_defaults(self):
        cv = cv_analysis(80, 85)
        cv["overallMatchScore"] = float("nan")
        letter = cover_letter_analysis(60, 70)
        letter["careerStageAppropriate"]["score"] = float("inf")

        combined = combine_insights(cv, letter, "Trailblazer", self.stage)

        self.assertEqual(combined.overall_application_score, 30)
        self.assertEqual(combined.career_stage_readiness.score, 68)

    def test_means_round_half_up(self):
        combined = combine_insights(cv_analysis(71, 50), cover_letter_analysis(70, 51), "Trailblazer", self.stage)
        self.assertEqual(combined.overall_application_score, 71)
        self.assertEqual(combined.career_stage_readiness.score, 51)

    def test_unknown_stage_label_uses_fallback_name(self):
        fallback = get_career_stage_context(None)
        combined = combine_insights(cv_analysis(), cover_letter_analysis(), None, fallback)
        self.assertEqual(
            combined.career_stage_readiness.alignment,
            "Strong alignment for Pathfinder career stage",
        )

    def test_serializes_with_camel_case_keys(self):
        combined = combine_insights(cv_analysis(), cover_letter_analysis(), "Trailblazer", self.stage)
        payload = combined.model_dump(by_alias=True)
        self.assertEqual(
            set(payload),
            {"overallApplicationScore", "careerStageReadiness", "consistencyCheck", "strategicAdvice"},
        )
        self.assertIn("strengthsAlignment", payload["consistencyCheck"])


if __name__ == "__main__":
    unittest.main()
