#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Any, Literal, Union

from core.matcher.models import MatchPerspective


class ScoreRequest(BaseModel):
    """Request to score a single job/candidate pair."""
    job_id: Union[int, str] = Field(..., description="Job identifier")
    candidate_id: Union[int, str] = Field(..., description="Candidate identifier")
    perspective: MatchPerspective = Field(
        default=MatchPerspective.EMPLOYER,
        description="employer ranks candidates for a job, worker ranks jobs for a candidate"
    )
    refresh: bool = Field(default=False, description="Bypass the cached score")


class SkillNormalizeRequest(BaseModel):
    """Request to normalize a raw skill collection."""
    skills: Any = Field(
        None,
        description="Bare string, JSON string, list of names, list of {skill, experience_level} or [name, level] pairs"
    )
    kind: Literal["candidate", "job"] = Field(
        default="candidate",
        description="candidate skills or job requirements"
    )
    default_level: str = Field(
        default="intermediate",
        description="Level assigned to job requirements without one"
    )
