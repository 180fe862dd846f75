#!/usr/bin/env python3
"""
Matching Insights - Small stateless companions of the matching surface.

None of these feed into the score; they decorate match listings and profile
pages.
"""

from collections import Counter
from typing import Iterable, List

from core.matcher.models import CandidateProfile, JobProfile
from core.matcher.skill_normalizer import skill_key

MIN_SKILLS_FOR_COMPLETE_PROFILE = 3
MIN_BIO_LENGTH = 100


def competition_level(bid_count: int) -> str:
    """Bucket a job's total bid count into a competition label."""
    if bid_count <= 0:
        return "No competition"
    if bid_count <= 3:
        return "Low competition"
    if bid_count <= 8:
        return "Medium competition"
    if bid_count <= 15:
        return "High competition"
    return "Very high competition"


def match_quality_label(score: int) -> str:
    """Human label for a 0-100 score."""
    if score >= 80:
        return "Very High"
    if score >= 60:
        return "High"
    if score >= 40:
        return "Moderate"
    if score >= 20:
        return "Low"
    return "Very Low"


def top_skills_in_demand(jobs: Iterable[JobProfile], limit: int = 10) -> List[str]:
    """Most frequently requested skill names across jobs (lower-cased)."""
    counts = Counter()
    for job in jobs:
        keys = dict.fromkeys(skill_key(name) for name in job.all_skill_names() if name.strip())
        counts.update(list(keys))
    # Counter.most_common keeps first-seen order among ties.
    return [name for name, _ in counts.most_common(limit)]


def suggested_improvements(candidate: CandidateProfile) -> List[str]:
    """Profile gaps that keep a candidate out of matches."""
    suggestions = []
    if len(candidate.skills) < MIN_SKILLS_FOR_COMPLETE_PROFILE:
        suggestions.append("Add more skills to your profile to increase job matches")
    if len((candidate.bio or "").strip()) < MIN_BIO_LENGTH:
        suggestions.append("Write a detailed bio to attract more clients")
    if not candidate.hourly_rate:
        suggestions.append("Set your hourly rate to appear in budget-filtered searches")
    return suggestions
