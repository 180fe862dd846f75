#!/usr/bin/env python3
"""
Test Matcher Models.

Tests the dataclasses and enums in core/matcher/models.py.
"""
import unittest
from datetime import datetime, timezone

from core.matcher.models import (
    ExperienceLevel,
    JobProfile,
    MatchResult,
    ScoreSource,
    SkillImportance,
    SkillRequirement,
)


class TestExperienceLevel(unittest.TestCase):
    """Test ExperienceLevel parsing."""

    def test_ordering_by_value(self):
        self.assertLess(ExperienceLevel.BEGINNER.value, ExperienceLevel.INTERMEDIATE.value)
        self.assertLess(ExperienceLevel.INTERMEDIATE.value, ExperienceLevel.EXPERT.value)

    def test_parse_names_and_ranks(self):
        self.assertIs(ExperienceLevel.parse("Expert"), ExperienceLevel.EXPERT)
        self.assertIs(ExperienceLevel.parse(" beginner "), ExperienceLevel.BEGINNER)
        self.assertIs(ExperienceLevel.parse(3), ExperienceLevel.EXPERT)
        self.assertIs(ExperienceLevel.parse("1"), ExperienceLevel.BEGINNER)

    def test_parse_unknown_is_intermediate(self):
        for value in (None, "", "guru", 7, True, 2.5):
            with self.subTest(value=value):
                self.assertIs(ExperienceLevel.parse(value), ExperienceLevel.INTERMEDIATE)

    def test_label(self):
        self.assertEqual(ExperienceLevel.EXPERT.label, "Expert")


class TestSkillImportance(unittest.TestCase):

    def test_default_is_required(self):
        self.assertIs(SkillImportance.parse(None), SkillImportance.REQUIRED)
        self.assertIs(SkillImportance.parse("nice to have"), SkillImportance.REQUIRED)
        self.assertIs(SkillImportance.parse("PREFERRED"), SkillImportance.PREFERRED)


class TestJobProfile(unittest.TestCase):

    def test_all_skill_names_prefers_structured_list(self):
        job = JobProfile(
            id=1,
            required_skills=[SkillRequirement("PHP")],
            skill_names=["Ignored"],
        )
        self.assertTrue(job.has_structured_requirements)
        self.assertEqual(job.all_skill_names(), ["PHP"])

    def test_legacy_job(self):
        job = JobProfile(id=2, skill_names=["Excel"])
        self.assertFalse(job.has_structured_requirements)
        self.assertEqual(job.all_skill_names(), ["Excel"])
        self.assertTrue(job.is_open)


class TestMatchResult(unittest.TestCase):
    """MatchResult validates its score on construction."""

    def test_valid_result(self):
        result = MatchResult(1, 2, 70, "ok", ScoreSource.DETERMINISTIC)
        self.assertEqual(result.score, 70)
        self.assertIsNotNone(result.computed_at.tzinfo)

    def test_out_of_range_score_rejected(self):
        with self.assertRaises(ValueError):
            MatchResult(1, 2, 101, "bad", ScoreSource.EXTERNAL)
        with self.assertRaises(ValueError):
            MatchResult(1, 2, -1, "bad", ScoreSource.EXTERNAL)

    def test_non_int_score_rejected(self):
        with self.assertRaises(TypeError):
            MatchResult(1, 2, 70.5, "bad", ScoreSource.EXTERNAL)
        with self.assertRaises(TypeError):
            MatchResult(1, 2, True, "bad", ScoreSource.EXTERNAL)

    def test_dict_conversion_preserves_fields(self):
        computed_at = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)
        result = MatchResult("j-1", 7, 88, "Strong PHP match", ScoreSource.EXTERNAL, computed_at)

        data = result.to_dict()
        self.assertEqual(data["source"], "external")
        self.assertEqual(data["computed_at"], "2026-02-01T12:00:00+00:00")
        self.assertEqual(MatchResult.from_dict(data), result)


if __name__ == '__main__':
    unittest.main()
