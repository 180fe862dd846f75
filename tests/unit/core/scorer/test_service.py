#!/usr/bin/env python3
"""
Test DeterministicScorer - mode selection, formulas, floors and reason text.
"""

import unittest

from core.config_loader import ScorerConfig
from core.exceptions import ConfigurationError
from core.matcher.models import ScoreSource
from core.scorer import DeterministicScorer
from core.scorer.models import MODE_EMPTY, MODE_LEGACY, MODE_STRUCTURED
from core.scorer.scoring_modes import round_score
from tests.mocks.matcher_mocks import B, I, E, make_candidate, make_job


class TestStructuredScoring(unittest.TestCase):
    """Jobs with a per-skill requirement breakdown."""

    def setUp(self):
        self.scorer = DeterministicScorer()

    def test_01_required_match_without_preferred(self):
        """PHP expert required, Vue preferred; candidate only has PHP expert."""
        print("\n📊 UNIT Test 1: Structured - required only")

        job = make_job(1, required=[("PHP", E, "required"), ("Vue", I, "preferred")])
        candidate = make_candidate(7, skills=[("PHP", E)])

        result = self.scorer.score(job, candidate)

        self.assertEqual(result.score, 70)
        self.assertIs(result.source, ScoreSource.DETERMINISTIC)
        self.assertIn("Matches 1 of 1 required skills", result.reason)
        self.assertNotIn("preferred", result.reason)

        print(f"  ✓ Score: {result.score} - {result.reason}")

    def test_02_superset_at_sufficient_level_scores_full(self):
        job = make_job(1, required=[("PHP", I), ("MySQL", B)])
        candidate = make_candidate(7, skills=[("php", E), ("MySQL", I), ("Docker", B)])

        self.assertEqual(self.scorer.score(job, candidate).score, 100)

    def test_03_no_overlap(self):
        """Only the preferred share can remain when no required skill matches."""
        candidate = make_candidate(7, skills=[("Python", E)])

        no_preferred = make_job(1, required=[("PHP", E), ("Laravel", E)])
        breakdown = self.scorer.breakdown(no_preferred, candidate)
        self.assertEqual(breakdown.required_subscore, 0.0)
        self.assertEqual(breakdown.score, 30)

        with_preferred = make_job(2, required=[("PHP", E), ("Vue", I, "preferred")])
        result = self.scorer.score(with_preferred, candidate)
        self.assertEqual(result.score, 0)
        self.assertEqual(result.reason, "Matches 0 of 1 required skills. Consider learning PHP.")

    def test_04_under_level_match(self):
        job = make_job(1, required=[("PHP", E)])
        candidate = make_candidate(7, skills=[("PHP", I)])

        breakdown, reason = self.scorer.explain(job, candidate)

        # 0.6 * 70 + 30
        self.assertEqual(breakdown.score, 72)
        self.assertEqual(breakdown.mode, MODE_STRUCTURED)
        self.assertEqual(
            reason,
            "Matches 1 of 1 required skills. Below the requested experience level in PHP."
        )

    def test_05_preferred_clause_when_matched(self):
        job = make_job(1, required=[("PHP", E), ("Vue", I, "preferred"), ("Sass", B, "preferred")])
        candidate = make_candidate(7, skills=[("PHP", E), ("Vue", B)])

        result = self.scorer.score(job, candidate)

        self.assertEqual(result.score, 85)
        self.assertTrue(result.reason.startswith(
            "Matches 1 of 1 required skills, plus 1 of 2 preferred skills."
        ))

    def test_06_at_most_three_missing_skills_suggested(self):
        job = make_job(1, required=[("A1", I), ("B2", I), ("C3", I), ("D4", I)])
        result = self.scorer.score(job, make_candidate(7, skills=[("Excel", I)]))

        self.assertIn("Consider learning A1, B2, C3.", result.reason)
        self.assertNotIn("D4", result.reason)


class TestLegacyScoring(unittest.TestCase):
    """Jobs that only carry a flat skill list."""

    def setUp(self):
        self.scorer = DeterministicScorer()

    def test_01_formula(self):
        """round(100 * (0.6 * skills + 0.4 * experience))."""
        job = make_job(2, skill_names=["Copywriting", "Canva", "Social Media Marketing"], level=I)
        candidate = make_candidate(8, skills=[("Copywriting", E), ("Canva", B)], level=I)

        breakdown, reason = self.scorer.explain(job, candidate)

        # skills = (1.0 + 1/1.5) / 3, experience: mean tier 2 vs 2 -> 1.0
        self.assertEqual(breakdown.mode, MODE_LEGACY)
        self.assertAlmostEqual(breakdown.skills_component, (1.0 + 1.0 / 1.5) / 3)
        self.assertEqual(breakdown.experience_component, 1.0)
        self.assertEqual(breakdown.score, 73)
        self.assertEqual(
            reason,
            "Matches 2 of 3 required skills. Below the requested experience level in Canva. "
            "Consider learning Social Media Marketing."
        )

    def test_02_partial_matches_mentioned(self):
        job = make_job(2, skill_names=["Social Media Marketing"], level=I)
        candidate = make_candidate(8, skills=[("Marketing", I)], level=I)

        result = self.scorer.score(job, candidate)

        self.assertEqual(result.score, 70)
        self.assertEqual(
            result.reason,
            "Matches 0 of 1 required skills. 1 closely related skill(s) found."
        )

    def test_03_zero_skill_candidate_floored(self):
        job = make_job(2, skill_names=["Copywriting", "Canva"], level=E)
        candidate = make_candidate(9, skills=[], level=B)

        breakdown, reason = self.scorer.explain(job, candidate)

        # 0.4 * 0.3 * 100 = 12 before the floor
        self.assertEqual(breakdown.score, 15)
        self.assertTrue(breakdown.floor_applied)
        self.assertIn("Profile lists no skills yet.", reason)


class TestEmptyInputScoring(unittest.TestCase):
    """Jobs that list no skills at all."""

    def test_experience_share_only(self):
        scorer = DeterministicScorer()
        job = make_job(3, level=I)

        aligned = scorer.breakdown(job, make_candidate(7, skills=[("Excel", I)]))
        self.assertEqual(aligned.mode, MODE_EMPTY)
        self.assertEqual(aligned.score, 40)

        distant = scorer.breakdown(make_job(3, level=E), make_candidate(7, level=B))
        self.assertEqual(distant.score, 12)
        self.assertFalse(distant.floor_applied)

    def test_floor(self):
        config = ScorerConfig(legacy_skills_weight=0.8, legacy_experience_weight=0.2)
        scorer = DeterministicScorer(config)

        result = scorer.score(make_job(3, level=E), make_candidate(7, level=B))

        self.assertEqual(result.score, 10)
        self.assertIn("experience alignment only", result.reason)


class TestScoreBounds(unittest.TestCase):

    def test_score_always_within_range(self):
        scorer = DeterministicScorer()
        jobs = [
            make_job(1, required=[("PHP", E), ("Vue", I, "preferred")]),
            make_job(2, skill_names=["PHP", "Laravel"], level=B),
            make_job(3, level=E),
        ]
        candidates = [
            make_candidate(1),
            make_candidate(2, skills=[("PHP", B)], level=E),
            make_candidate(3, skills=[(f"Skill{n}", E) for n in range(40)] + [("PHP", E)]),
        ]
        for job in jobs:
            for candidate in candidates:
                with self.subTest(job=job.id, candidate=candidate.id):
                    self.assertTrue(0 <= scorer.score(job, candidate).score <= 100)

    def test_round_half_up_and_clamp(self):
        self.assertEqual(round_score(72.5), 73)
        self.assertEqual(round_score(72.49), 72)
        self.assertEqual(round_score(130.0), 100)
        self.assertEqual(round_score(-4.0), 0)


class TestScorerConfigValidation(unittest.TestCase):

    def test_rejects_inconsistent_weights(self):
        bad_configs = [
            ScorerConfig(required_points=60),
            ScorerConfig(required_points=130, preferred_points=-30),
            ScorerConfig(legacy_skills_weight=0.5),
            ScorerConfig(min_incomplete_profile_score=120),
        ]
        for config in bad_configs:
            with self.subTest(config=config):
                with self.assertRaises(ConfigurationError):
                    DeterministicScorer(config)


if __name__ == '__main__':
    unittest.main()
