#!/usr/bin/env python3
"""
Reason Text - Human-readable explanation built from a ScoreBreakdown.
"""

from typing import List

from core import weights
from core.scorer.models import ScoreBreakdown, MODE_EMPTY, MODE_LEGACY


def _join(names: List[str]) -> str:
    return ", ".join(names)


def build_reason(breakdown: ScoreBreakdown) -> str:
    """
    Assemble the reason sentence by sentence.

    - "Matches X of Y required skills" (always, except for jobs without skills)
    - preferred clause only if at least one preferred skill matched
    - partial-match note (skill-list jobs)
    - under-level note
    - up to three missing required skills as a learning suggestion
    """
    if breakdown.mode == MODE_EMPTY:
        return "Job lists no skills to compare; score reflects experience alignment only."

    first = f"Matches {breakdown.required_matched} of {breakdown.required_total} required skills"
    if breakdown.preferred_matched > 0:
        first += (
            f", plus {breakdown.preferred_matched} of {breakdown.preferred_total} "
            f"preferred skills"
        )
    sentences = [first + "."]

    if breakdown.mode == MODE_LEGACY and breakdown.partial_matches:
        sentences.append(f"{breakdown.partial_matches} closely related skill(s) found.")

    if breakdown.under_level:
        sentences.append(f"Below the requested experience level in {_join(breakdown.under_level)}.")

    if breakdown.floor_applied:
        sentences.append("Profile lists no skills yet.")

    missing = breakdown.missing_required[:weights.MAX_MISSING_SKILLS_IN_REASON]
    if missing:
        sentences.append(f"Consider learning {_join(missing)}.")

    return " ".join(sentences)
