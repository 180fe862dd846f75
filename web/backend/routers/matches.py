#!/usr/bin/env python3
"""
Match endpoints - score pairs and rank candidates or jobs.
"""

import logging
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_match_service
from ..services.match_service import MatchService
from ..models.requests import ScoreRequest
from ..models.responses import (
    ScoreResponse,
    CandidateMatchesResponse,
    JobMatchesResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.post("/score", response_model=ScoreResponse)
def score_pair(
    request: ScoreRequest,
    service: MatchService = Depends(get_match_service)
):
    """
    Score a single job/candidate pair.

    Returns the cached score when one exists unless refresh is set.
    """
    match = service.score_pair(
        job_id=request.job_id,
        candidate_id=request.candidate_id,
        perspective=request.perspective,
        refresh=request.refresh
    )
    return ScoreResponse(success=True, match=match)


@router.get("/jobs/{job_id}/candidates", response_model=CandidateMatchesResponse)
def get_candidates_for_job(
    job_id: str,
    limit: int = Query(default=5, ge=1, le=50, description="Maximum results to return"),
    refresh: bool = Query(default=False, description="Bypass cached scores"),
    service: MatchService = Depends(get_match_service)
):
    """
    Rank candidates for a job (employer view), highest score first.
    """
    matches = service.candidates_for_job(job_id, limit=limit, refresh=refresh)
    return CandidateMatchesResponse(
        success=True,
        job_id=job_id,
        count=len(matches),
        matches=matches
    )


@router.get("/candidates/{candidate_id}/jobs", response_model=JobMatchesResponse)
def get_jobs_for_candidate(
    candidate_id: str,
    limit: int = Query(default=5, ge=1, le=50, description="Maximum results to return"),
    refresh: bool = Query(default=False, description="Bypass cached scores"),
    service: MatchService = Depends(get_match_service)
):
    """
    Rank open jobs for a candidate (worker view), highest score first.

    Each job carries its competition level derived from the bid count.
    """
    matches, suggestions = service.jobs_for_candidate(candidate_id, limit=limit, refresh=refresh)
    return JobMatchesResponse(
        success=True,
        candidate_id=candidate_id,
        count=len(matches),
        matches=matches,
        suggestions=suggestions
    )
