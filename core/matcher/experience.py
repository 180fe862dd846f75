#!/usr/bin/env python3
"""
Experience Comparator - Graduated experience-tier matching.
"""

from typing import Iterable, Optional
import logging

from core.matcher.models import ExperienceLevel
from core import weights

logger = logging.getLogger(__name__)


class ExperienceComparator:
    """
    Compares experience tiers on the Beginner < Intermediate < Expert scale.

    Two modes:
    - compare(): per-skill factor for a required tier vs the candidate's tier
    - alignment(): mean of a candidate's skill tiers vs a single job tier,
      used only for jobs without a per-skill requirement breakdown
    """

    def compare(self, required, actual) -> float:
        """Return 1.0 if actual meets required, 0.6 one tier below, else 0.2."""
        required_rank = ExperienceLevel.parse(required).value
        actual_rank = ExperienceLevel.parse(actual).value

        if actual_rank >= required_rank:
            return weights.EXPERIENCE_MEETS
        if actual_rank == required_rank - 1:
            return weights.EXPERIENCE_ONE_BELOW
        return weights.EXPERIENCE_FAR_BELOW

    def alignment(
        self,
        candidate_levels: Iterable,
        job_level,
        fallback_level: Optional[ExperienceLevel] = None
    ) -> float:
        """
        Level-alignment score from the mean candidate tier.

        Distance bands: < 0.5 -> 1.0, < 1.5 -> 0.7, otherwise 0.3.
        With no skill levels, ``fallback_level`` (the profile-wide tier)
        stands in; without that the default tier is used.
        """
        ranks = [ExperienceLevel.parse(level).value for level in candidate_levels]
        if not ranks:
            ranks = [ExperienceLevel.parse(fallback_level).value]

        mean_rank = sum(ranks) / len(ranks)
        distance = abs(mean_rank - ExperienceLevel.parse(job_level).value)

        for upper_bound, factor in weights.ALIGNMENT_BANDS:
            if distance < upper_bound:
                return factor
        return weights.ALIGNMENT_FALLBACK

    @staticmethod
    def skill_weight(level) -> float:
        """Per-skill weight used by the legacy weighting mode."""
        return weights.EXPERIENCE_SKILL_WEIGHTS[ExperienceLevel.parse(level).value]
