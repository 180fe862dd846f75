#!/usr/bin/env python3
"""
Skill endpoints - normalization, fuzzy lookup and demand.
"""

import logging
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_match_service
from ..services.match_service import MatchService
from ..models.requests import SkillNormalizeRequest
from ..models.responses import (
    SkillNormalizeResponse,
    SkillLookupResponse,
    SkillsInDemandResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/skills", tags=["skills"])


@router.post("/normalize", response_model=SkillNormalizeResponse)
def normalize_skills(request: SkillNormalizeRequest):
    """
    Normalize a raw skill collection into canonical entries.

    Unrecognized skill input yields an empty list rather than an error; an
    unknown default_level for job requirements answers 400.
    """
    skills = MatchService.normalize_skills(request.skills, request.kind, request.default_level)
    return SkillNormalizeResponse(success=True, count=len(skills), skills=skills)


@router.get("/lookup", response_model=SkillLookupResponse)
def lookup_skill(
    q: str = Query(..., min_length=1, description="Typed skill name"),
    service: MatchService = Depends(get_match_service)
):
    """
    Find the closest known skill name (80% similarity threshold).
    """
    match, confidence, category = service.lookup_skill(q)
    return SkillLookupResponse(
        success=True,
        query=q,
        match=match,
        confidence=confidence,
        category=category
    )


@router.get("/in-demand", response_model=SkillsInDemandResponse)
def get_skills_in_demand(
    limit: int = Query(default=10, ge=1, le=100),
    service: MatchService = Depends(get_match_service)
):
    """Most requested skills across posted jobs."""
    return SkillsInDemandResponse(success=True, skills=service.skills_in_demand(limit))
