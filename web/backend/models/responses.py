#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union

ProfileIdField = Union[int, str]


class MatchResultModel(BaseModel):
    """A scored job/candidate pair."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "job_id": 12,
                "candidate_id": 7,
                "score": 70,
                "reason": "Matches 1 of 1 required skills.",
                "source": "deterministic",
                "quality": "High",
                "computed_at": "2026-02-01T12:00:00+00:00"
            }
        }
    )

    job_id: ProfileIdField
    candidate_id: ProfileIdField
    score: int = Field(ge=0, le=100)
    reason: str
    source: str
    quality: str
    computed_at: str


class JobMatchItem(MatchResultModel):
    """A job recommended to a candidate, with how contested it is."""
    job_title: str = ""
    bid_count: int = Field(default=0, ge=0)
    competition_level: str


class CandidateMatchItem(MatchResultModel):
    """A candidate recommended for a job."""
    candidate_title: str = ""


class ScoreResponse(BaseModel):
    """Response for a single pair score."""
    success: bool
    match: MatchResultModel


class CandidateMatchesResponse(BaseModel):
    """Ranked candidates for a job."""
    success: bool
    job_id: ProfileIdField
    count: int
    matches: List[CandidateMatchItem]


class JobMatchesResponse(BaseModel):
    """Ranked jobs for a candidate."""
    success: bool
    candidate_id: ProfileIdField
    count: int
    matches: List[JobMatchItem]
    suggestions: List[str] = Field(default_factory=list)


class NormalizedSkill(BaseModel):
    name: str
    experience_level: str
    importance: Optional[str] = None


class SkillNormalizeResponse(BaseModel):
    """Canonical skills produced from a raw collection."""
    success: bool
    count: int
    skills: List[NormalizedSkill]


class SkillLookupResponse(BaseModel):
    """Closest known skill for a typed value."""
    success: bool
    query: str
    match: Optional[str]
    confidence: int = Field(ge=0, le=100)
    category: Optional[str] = None


class SkillsInDemandResponse(BaseModel):
    success: bool
    skills: List[str]
