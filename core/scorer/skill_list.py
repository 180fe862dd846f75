#!/usr/bin/env python3
"""
Skill List Components - Skills component for jobs that only carry a flat skill list.

skills = min(1, direct + partial + extra)
- direct: exact matches weighted by candidate experience relative to the job tier
- partial: substring matches at half credit
- extra: small bonus for candidates listing more skills than the job asks for
"""

from dataclasses import dataclass, field
from typing import Dict, List
import logging

from core import weights
from core.matcher.experience import ExperienceComparator
from core.matcher.fuzzy import partial_match
from core.matcher.models import CandidateSkill, ExperienceLevel
from core.matcher.skill_normalizer import skill_key

logger = logging.getLogger(__name__)


@dataclass
class SkillListMatch:
    direct: float = 0.0
    exact_matches: int = 0
    partial_matches: int = 0
    under_level: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


def match_skill_list(
    job_skills: List[str],
    candidate_skills: Dict[str, CandidateSkill],
    job_level: ExperienceLevel,
    comparator: ExperienceComparator
) -> SkillListMatch:
    """Classify each job skill as a direct, partial or missing match."""
    result = SkillListMatch()
    job_weight = comparator.skill_weight(job_level)

    for name in job_skills:
        candidate_skill = candidate_skills.get(skill_key(name))
        if candidate_skill is not None:
            candidate_weight = comparator.skill_weight(candidate_skill.experience_level)
            result.direct += min(1.0, candidate_weight / job_weight)
            result.exact_matches += 1
            if candidate_weight < job_weight:
                result.under_level.append(name)
        elif any(partial_match(name, s.name) for s in candidate_skills.values()):
            result.partial_matches += 1
        else:
            result.missing.append(name)

    return result


def extra_skills_bonus(candidate_skill_count: int, job_skill_count: int) -> float:
    surplus = max(0, candidate_skill_count - job_skill_count)
    return min(weights.EXTRA_SKILL_BONUS_CAP, surplus * weights.EXTRA_SKILL_BONUS_PER_SKILL)


def calculate_skills_component(
    match: SkillListMatch,
    job_skill_count: int,
    candidate_skill_count: int
) -> float:
    """Combine direct, partial and extra credit into a 0.0-1.0 component."""
    if job_skill_count <= 0:
        return 0.0
    direct_ratio = match.direct / job_skill_count
    partial_ratio = weights.PARTIAL_MATCH_CREDIT * match.partial_matches / job_skill_count
    extra = extra_skills_bonus(candidate_skill_count, job_skill_count)
    return min(1.0, direct_ratio + partial_ratio + extra)
