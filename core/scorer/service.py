#!/usr/bin/env python3
"""
Scoring Service - Deterministic skill/experience scoring.

The primary scoring path. It never makes network calls and never fails at
call time: every (job, candidate) pair yields a MatchResult.

Strategy selection by job shape:
- per-skill requirement breakdown -> StructuredScoringStrategy
- flat skill list only           -> LegacySkillListStrategy
- no skills at all               -> experience share only, floored
"""

from typing import Optional, Tuple
import logging

from core.config_loader import ScorerConfig
from core.exceptions import ConfigurationError
from core.matcher.experience import ExperienceComparator
from core.matcher.models import CandidateProfile, JobProfile, MatchResult, ScoreSource
from core.scorer.models import ScoreBreakdown
from core.scorer.reason import build_reason
from core.scorer.scoring_modes import (
    LegacySkillListStrategy,
    StructuredScoringStrategy,
    calculate_empty_input_score,
)

logger = logging.getLogger(__name__)

_WEIGHT_TOLERANCE = 1e-6


def _validate_config(config: ScorerConfig) -> None:
    if config.required_points < 0 or config.preferred_points < 0:
        raise ConfigurationError("Scorer points must be non-negative")
    if abs(config.required_points + config.preferred_points - 100.0) > _WEIGHT_TOLERANCE:
        raise ConfigurationError(
            f"required_points + preferred_points must equal 100, got "
            f"{config.required_points} + {config.preferred_points}"
        )
    if config.legacy_skills_weight < 0 or config.legacy_experience_weight < 0:
        raise ConfigurationError("Legacy weights must be non-negative")
    if abs(config.legacy_skills_weight + config.legacy_experience_weight - 1.0) > _WEIGHT_TOLERANCE:
        raise ConfigurationError(
            f"legacy_skills_weight + legacy_experience_weight must equal 1.0, got "
            f"{config.legacy_skills_weight} + {config.legacy_experience_weight}"
        )
    for name in ("min_incomplete_profile_score", "min_empty_input_score"):
        if not 0 <= getattr(config, name) <= 100:
            raise ConfigurationError(f"{name} must be within [0, 100]")


class DeterministicScorer:
    """
    Computes a 0-100 score and reason for one pair from skills and experience.

    Raises ConfigurationError at construction if the weights are inconsistent.
    """

    def __init__(
        self,
        config: Optional[ScorerConfig] = None,
        comparator: Optional[ExperienceComparator] = None
    ):
        self.config = config or ScorerConfig()
        _validate_config(self.config)
        self.comparator = comparator or ExperienceComparator()
        self.structured = StructuredScoringStrategy(self.config, self.comparator)
        self.legacy = LegacySkillListStrategy(self.config, self.comparator)

    def breakdown(self, job: JobProfile, candidate: CandidateProfile) -> ScoreBreakdown:
        if job.has_structured_requirements:
            return self.structured.score(job, candidate)
        if job.skill_names:
            return self.legacy.score(job, candidate)
        return calculate_empty_input_score(job, candidate, self.config, self.comparator)

    def explain(self, job: JobProfile, candidate: CandidateProfile) -> Tuple[ScoreBreakdown, str]:
        breakdown = self.breakdown(job, candidate)
        return breakdown, build_reason(breakdown)

    def score(self, job: JobProfile, candidate: CandidateProfile) -> MatchResult:
        """Score a pair. Always returns a MatchResult with source=DETERMINISTIC."""
        breakdown, reason = self.explain(job, candidate)

        logger.debug(
            f"Job {job.id} / candidate {candidate.id}: mode={breakdown.mode}, "
            f"score={breakdown.score}"
        )

        return MatchResult(
            job_id=job.id,
            candidate_id=candidate.id,
            score=breakdown.score,
            reason=reason,
            source=ScoreSource.DETERMINISTIC,
        )
