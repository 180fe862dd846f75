#!/usr/bin/env python3
"""
Scoring Weights - Named tuning constants for deterministic scoring.

Kept in a leaf module so both the config layer and the scorer can import it
without a cycle. Every value here is a default; ScorerConfig can override the
ones that are exposed as configuration.
"""

# ----------------------------
# Structured (per-skill) scoring
# ----------------------------
# Points available for required skills. Required skills dominate because an
# unmet required skill means the candidate cannot do the job as posted.
REQUIRED_SKILLS_POINTS = 70.0

# Points available for preferred skills. Awarded in full when the job declares
# no preferred skills, so a job without a wish-list does not cap everyone at 70.
PREFERRED_SKILLS_POINTS = 30.0

# Base points for a single matched skill before the experience factor.
POINTS_PER_MATCHED_SKILL = 10.0

# ----------------------------
# Experience comparison
# ----------------------------
EXPERIENCE_MEETS = 1.0          # candidate at or above the requested tier
EXPERIENCE_ONE_BELOW = 0.6      # one tier below, still workable
EXPERIENCE_FAR_BELOW = 0.2      # two or more tiers below

# Averaging mode bands: (upper distance bound, factor)
ALIGNMENT_BANDS = ((0.5, 1.0), (1.5, 0.7))
ALIGNMENT_FALLBACK = 0.3

# ----------------------------
# Legacy (flat skill list) scoring
# ----------------------------
LEGACY_SKILLS_WEIGHT = 0.6
LEGACY_EXPERIENCE_WEIGHT = 0.4

# A substring match is worth half a direct match.
PARTIAL_MATCH_CREDIT = 0.5

# Surplus skills beyond the job's list add a small bonus, capped.
EXTRA_SKILL_BONUS_PER_SKILL = 0.02
EXTRA_SKILL_BONUS_CAP = 0.2

# Per-skill experience weights used to weight direct matches.
EXPERIENCE_SKILL_WEIGHTS = {
    1: 1.0,   # beginner
    2: 1.5,   # intermediate
    3: 2.0,   # expert
}

# Floor for a candidate with no listed skills against a job that has skills.
# Incomplete profiles stay visible instead of being ranked out entirely.
MIN_INCOMPLETE_PROFILE_SCORE = 15

# Floor when the job itself lists no skills to compare against.
MIN_EMPTY_INPUT_SCORE = 10

# ----------------------------
# Reason text
# ----------------------------
MAX_MISSING_SKILLS_IN_REASON = 3
