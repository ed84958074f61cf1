import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from careerfit.core.career_stages import get_career_stage_context, known_career_stages  # noqa: E402


class CareerStageContextTests(unittest.TestCase):
    def test_known_stages(self):
        self.assertEqual(known_career_stages(), ("Pathfinder", "Trailblazer", "Horizon Changer"))

    def test_trailblazer_context(self):
        context = get_career_stage_context("Trailblazer")
        self.assertEqual(context.stage, "Trailblazer")
        self.assertEqual(context.focus, "Career advancement and expertise development")
        self.assertEqual(
            context.priorities,
            ("Career progression", "Leadership development", "Expertise building"),
        )

    def test_stage_names_with_spaces(self):
        context = get_career_stage_context("Horizon Changer")
        self.assertEqual(context.description, "Experienced professional pivoting to new career direction")

    def test_unknown_or_missing_stage_falls_back_to_pathfinder(self):
        for tag in [None, "", "Astronaut", "trailblazer"]:
            context = get_career_stage_context(tag)
            self.assertEqual(context.stage, "Pathfinder")
            self.assertEqual(context.focus, "Learning, exploration, and skill building")


if __name__ == "__main__":
    unittest.main()
