#!/usr/bin/env python3
"""
Scoring Models - Intermediate breakdown shared by the strategies and the reason text.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any

MODE_STRUCTURED = "structured"
MODE_LEGACY = "legacy"
MODE_EMPTY = "empty"


@dataclass
class ScoreBreakdown:
    """Every number a deterministic score was assembled from.

    The final score and the reason text are both derived from this object,
    so the explanation can never disagree with the number.
    """
    mode: str
    score: int = 0

    required_total: int = 0
    required_matched: int = 0
    required_points: float = 0.0
    required_subscore: float = 0.0

    preferred_total: int = 0
    preferred_matched: int = 0
    preferred_subscore: float = 0.0

    # Legacy skill-list mode only
    partial_matches: int = 0
    extra_bonus: float = 0.0
    skills_component: float = 0.0

    experience_component: float = 0.0
    floor_applied: bool = False

    under_level: List[str] = field(default_factory=list)
    missing_required: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
