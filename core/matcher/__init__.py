"""Matcher Module - Profile models, skill normalization and fuzzy matching."""
from core.matcher.models import (
    ExperienceLevel, SkillImportance, ScoreSource, MatchPerspective,
    SkillRequirement, CandidateSkill, JobProfile, CandidateProfile, MatchResult
)
from core.matcher.skill_normalizer import (
    normalize_candidate_skills, normalize_job_requirements, normalize_skill_names, skill_key
)
from core.matcher.experience import ExperienceComparator
from core.matcher.insights import competition_level

__all__ = [
    'ExperienceLevel', 'SkillImportance', 'ScoreSource', 'MatchPerspective',
    'SkillRequirement', 'CandidateSkill', 'JobProfile', 'CandidateProfile', 'MatchResult',
    'normalize_candidate_skills', 'normalize_job_requirements', 'normalize_skill_names',
    'skill_key', 'ExperienceComparator', 'competition_level'
]
