#!/usr/bin/env python3
"""
Scoring Modes - Structured and legacy skill-list scoring formulas.

The two strategies are selected by job shape and weight things differently
(70/30 required/preferred vs 60/40 skills/experience), so they stay separate
rather than being folded into one formula.
"""

from abc import ABC, abstractmethod
import math
import logging

from core.config_loader import ScorerConfig
from core.matcher.experience import ExperienceComparator
from core.matcher.models import CandidateProfile, JobProfile
from core.scorer import coverage, skill_list
from core.scorer.models import ScoreBreakdown, MODE_STRUCTURED, MODE_LEGACY, MODE_EMPTY

logger = logging.getLogger(__name__)


def round_score(value: float) -> int:
    """Round half up and clamp to 0-100."""
    return max(0, min(100, int(math.floor(value + 0.5))))


def _candidate_alignment(
    comparator: ExperienceComparator,
    job: JobProfile,
    candidate: CandidateProfile
) -> float:
    return comparator.alignment(
        [s.experience_level for s in candidate.skills],
        job.experience_level,
        fallback_level=candidate.experience_level,
    )


class ScoringStrategy(ABC):
    """One deterministic formula producing a ScoreBreakdown."""

    name = ""

    def __init__(self, config: ScorerConfig, comparator: ExperienceComparator):
        self.config = config
        self.comparator = comparator

    @abstractmethod
    def score(self, job: JobProfile, candidate: CandidateProfile) -> ScoreBreakdown:
        ...


class StructuredScoringStrategy(ScoringStrategy):
    """
    Per-skill requirement breakdown.

    Formula:
    - required_subscore = sum(experience factors of matches) / required_total * 70
    - preferred_subscore = preferred_matched / preferred_total * 30
    - score = min(100, round(required_subscore + preferred_subscore))
    """

    name = MODE_STRUCTURED

    def score(self, job: JobProfile, candidate: CandidateProfile) -> ScoreBreakdown:
        candidate_skills = coverage.index_skills(candidate.skills)
        required = [r for r in job.required_skills if r.is_required]
        preferred = [r for r in job.required_skills if not r.is_required]

        points, matched, under_level, missing = coverage.calculate_required_coverage(
            required, candidate_skills, self.comparator
        )
        preferred_matched = coverage.calculate_preferred_coverage(preferred, candidate_skills)

        required_subscore, preferred_subscore = coverage.calculate_base_score(
            required_points=points,
            required_total=len(required),
            preferred_matched=preferred_matched,
            preferred_total=len(preferred),
            config=self.config,
        )

        return ScoreBreakdown(
            mode=self.name,
            score=round_score(required_subscore + preferred_subscore),
            required_total=len(required),
            required_matched=matched,
            required_points=points,
            required_subscore=required_subscore,
            preferred_total=len(preferred),
            preferred_matched=preferred_matched,
            preferred_subscore=preferred_subscore,
            under_level=under_level,
            missing_required=missing,
        )


class LegacySkillListStrategy(ScoringStrategy):
    """
    Flat skill list with a single job-wide experience tier.

    Formula:
    - skills = min(1, direct + 0.5 * partial / total + extra)
    - experience = alignment of the mean candidate tier with the job tier
    - score = round(100 * (0.6 * skills + 0.4 * experience))

    A candidate without skills is floored so incomplete profiles stay visible.
    """

    name = MODE_LEGACY

    def score(self, job: JobProfile, candidate: CandidateProfile) -> ScoreBreakdown:
        candidate_skills = coverage.index_skills(candidate.skills)
        job_skills = list(job.skill_names)

        match = skill_list.match_skill_list(
            job_skills, candidate_skills, job.experience_level, self.comparator
        )
        skills_component = skill_list.calculate_skills_component(
            match, len(job_skills), len(candidate_skills)
        )
        experience_component = _candidate_alignment(self.comparator, job, candidate)

        raw = 100.0 * (
            self.config.legacy_skills_weight * skills_component +
            self.config.legacy_experience_weight * experience_component
        )
        score = round_score(raw)

        floor_applied = False
        if not candidate_skills and score < self.config.min_incomplete_profile_score:
            score = self.config.min_incomplete_profile_score
            floor_applied = True

        return ScoreBreakdown(
            mode=self.name,
            score=score,
            required_total=len(job_skills),
            required_matched=match.exact_matches,
            required_points=match.direct,
            partial_matches=match.partial_matches,
            extra_bonus=skill_list.extra_skills_bonus(len(candidate_skills), len(job_skills)),
            skills_component=skills_component,
            experience_component=experience_component,
            floor_applied=floor_applied,
            under_level=match.under_level,
            missing_required=match.missing,
        )


def calculate_empty_input_score(
    job: JobProfile,
    candidate: CandidateProfile,
    config: ScorerConfig,
    comparator: ExperienceComparator
) -> ScoreBreakdown:
    """Job lists no skills: only the experience share counts, floored."""
    experience_component = _candidate_alignment(comparator, job, candidate)
    score = round_score(100.0 * config.legacy_experience_weight * experience_component)

    floor_applied = score < config.min_empty_input_score
    return ScoreBreakdown(
        mode=MODE_EMPTY,
        score=max(score, config.min_empty_input_score),
        experience_component=experience_component,
        floor_applied=floor_applied,
    )
