#!/usr/bin/env python3
"""
Test suite for flat skill-list matching (jobs without a per-skill breakdown).
"""

import pytest

from core.matcher.experience import ExperienceComparator
from core.matcher.models import CandidateSkill
from core.scorer import skill_list
from core.scorer.coverage import index_skills
from tests.mocks.matcher_mocks import B, I, E


@pytest.fixture
def comparator():
    return ExperienceComparator()


class TestMatchSkillList:

    def test_direct_match_weighted_against_job_tier(self, comparator):
        candidate = index_skills([CandidateSkill("Copywriting", E), CandidateSkill("Canva", B)])

        match = skill_list.match_skill_list(["Copywriting", "Canva"], candidate, I, comparator)

        assert match.exact_matches == 2
        # expert caps at 1.0; beginner vs intermediate is 1.0 / 1.5
        assert match.direct == pytest.approx(1.0 + 1.0 / 1.5)
        assert match.under_level == ["Canva"]
        assert match.missing == []

    def test_partial_match_is_not_missing(self, comparator):
        candidate = index_skills([CandidateSkill("Marketing", I)])

        match = skill_list.match_skill_list(
            ["Social Media Marketing", "SEO"], candidate, I, comparator
        )

        assert match.exact_matches == 0
        assert match.partial_matches == 1
        assert match.missing == ["SEO"]

    def test_short_names_never_partially_match(self, comparator):
        candidate = index_skills([CandidateSkill("Go", E)])

        match = skill_list.match_skill_list(["Google Ads"], candidate, I, comparator)

        assert match.partial_matches == 0
        assert match.missing == ["Google Ads"]


class TestSkillsComponent:

    @pytest.mark.parametrize("candidate_count, job_count, expected", [
        (2, 3, 0.0),
        (3, 3, 0.0),
        (5, 3, 0.04),
        (40, 3, 0.2),
    ])
    def test_extra_skills_bonus(self, candidate_count, job_count, expected):
        assert skill_list.extra_skills_bonus(candidate_count, job_count) == pytest.approx(expected)

    def test_component_combines_and_caps(self):
        match = skill_list.SkillListMatch(direct=2.0, exact_matches=2)
        assert skill_list.calculate_skills_component(match, 2, 20) == 1.0

        match = skill_list.SkillListMatch(direct=1.0, exact_matches=1, partial_matches=1)
        assert skill_list.calculate_skills_component(match, 4, 4) == pytest.approx(0.25 + 0.125)

    def test_component_for_empty_job_list(self):
        assert skill_list.calculate_skills_component(skill_list.SkillListMatch(), 0, 3) == 0.0
