#!/usr/bin/env python3
"""
Scoring Module - Deterministic skill/experience scoring.

Public API:
- DeterministicScorer: selects a strategy by job shape and returns MatchResult
- ScoreBreakdown: intermediate numbers behind a score and its reason

Modules:
- models.py: ScoreBreakdown
- coverage.py: required/preferred coverage for structured jobs
- skill_list.py: direct/partial/extra components for flat skill lists
- scoring_modes.py: StructuredScoringStrategy and LegacySkillListStrategy
- reason.py: reason text
- service.py: DeterministicScorer
"""

from core.scorer.models import ScoreBreakdown
from core.scorer.scoring_modes import StructuredScoringStrategy, LegacySkillListStrategy
from core.scorer.service import DeterministicScorer

__all__ = [
    'DeterministicScorer', 'ScoreBreakdown',
    'StructuredScoringStrategy', 'LegacySkillListStrategy'
]
