#!/usr/bin/env python3
"""
Coverage Calculations - Required and preferred coverage for structured jobs.

Calculates how much of a job's per-skill requirement breakdown the candidate
covers. Matching is exact on the case-insensitive skill key.
"""

from typing import Dict, List, Tuple
import logging

from core import weights
from core.config_loader import ScorerConfig
from core.matcher.experience import ExperienceComparator
from core.matcher.models import CandidateSkill, SkillRequirement
from core.matcher.skill_normalizer import skill_key

logger = logging.getLogger(__name__)


def index_skills(skills: List[CandidateSkill]) -> Dict[str, CandidateSkill]:
    """Map skill key -> candidate skill, first occurrence wins."""
    index: Dict[str, CandidateSkill] = {}
    for skill in skills:
        index.setdefault(skill_key(skill.name), skill)
    return index


def calculate_required_coverage(
    requirements: List[SkillRequirement],
    candidate_skills: Dict[str, CandidateSkill],
    comparator: ExperienceComparator
) -> Tuple[float, int, List[str], List[str]]:
    """
    Experience-weighted coverage of the required skills.

    Each matched skill earns 10 points times its comparator factor
    (1.0 / 0.6 / 0.2), an unmatched one earns nothing.

    Returns: (points, matched_count, under_level_names, missing_names)
    """
    points = 0.0
    matched = 0
    under_level = []
    missing = []

    for requirement in requirements:
        candidate_skill = candidate_skills.get(skill_key(requirement.name))
        if candidate_skill is None:
            missing.append(requirement.name)
            continue

        factor = comparator.compare(requirement.experience_level, candidate_skill.experience_level)
        points += weights.POINTS_PER_MATCHED_SKILL * factor
        matched += 1
        if factor < 1.0:
            under_level.append(requirement.name)

    return points, matched, under_level, missing


def calculate_preferred_coverage(
    requirements: List[SkillRequirement],
    candidate_skills: Dict[str, CandidateSkill]
) -> int:
    """Number of preferred skills the candidate has at any level."""
    return sum(1 for r in requirements if skill_key(r.name) in candidate_skills)


def calculate_base_score(
    required_points: float,
    required_total: int,
    preferred_matched: int,
    preferred_total: int,
    config: ScorerConfig
) -> Tuple[float, float]:
    """
    Split the 100 available points between required and preferred skills.

    Formula:
    - required = points / (10 * required_total) * required_points
    - preferred = matched / preferred_total * preferred_points

    A tier the job does not declare is awarded in full.

    Returns: (required_subscore, preferred_subscore)
    """
    if required_total > 0:
        available = weights.POINTS_PER_MATCHED_SKILL * required_total
        required_subscore = required_points / available * config.required_points
    else:
        required_subscore = config.required_points

    if preferred_total > 0:
        preferred_subscore = preferred_matched / preferred_total * config.preferred_points
    else:
        preferred_subscore = config.preferred_points

    return required_subscore, preferred_subscore
