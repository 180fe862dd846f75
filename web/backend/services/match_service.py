#!/usr/bin/env python3
"""
Match service - business logic behind the matching endpoints.

Turns core MatchResult values into response models and raises
ServiceException subclasses for ids that do not exist, where the core itself
would quietly return an empty ranking.
"""

import logging
from typing import Any, List, Tuple

from core.app_context import AppContext
from core.matcher.fuzzy import fuzzy_lookup, reconcile_category
from core.matcher.insights import (
    competition_level,
    match_quality_label,
    suggested_improvements,
    top_skills_in_demand,
)
from core.matcher.models import (
    CandidateProfile,
    ExperienceLevel,
    JobProfile,
    MatchPerspective,
    MatchResult,
    ProfileId,
)
from core.matcher.skill_normalizer import (
    normalize_candidate_skills,
    normalize_job_requirements,
)
from ..exceptions import (
    CandidateNotFoundException,
    InvalidRequestException,
    JobNotFoundException,
)
from ..models.responses import (
    CandidateMatchItem,
    JobMatchItem,
    MatchResultModel,
    NormalizedSkill,
)

logger = logging.getLogger(__name__)


def _result_fields(result: MatchResult) -> dict:
    data = result.to_dict()
    data["quality"] = match_quality_label(result.score)
    return data


class MatchService:
    """Service for scoring and ranking pairs."""

    def __init__(self, context: AppContext):
        self.context = context
        self.repository = context.repository
        self.orchestrator = context.orchestrator

    def _require_job(self, job_id: ProfileId) -> JobProfile:
        job = self.repository.get_job(job_id)
        if job is None:
            raise JobNotFoundException(f"Job {job_id} not found")
        return job

    def _require_candidate(self, candidate_id: ProfileId) -> CandidateProfile:
        candidate = self.repository.get_candidate(candidate_id)
        if candidate is None:
            raise CandidateNotFoundException(f"Candidate {candidate_id} not found")
        return candidate

    def score_pair(
        self,
        job_id: ProfileId,
        candidate_id: ProfileId,
        perspective: MatchPerspective = MatchPerspective.EMPLOYER,
        refresh: bool = False
    ) -> MatchResultModel:
        job = self._require_job(job_id)
        candidate = self._require_candidate(candidate_id)
        result = self.orchestrator.score_pair(job, candidate, perspective, refresh)
        return MatchResultModel(**_result_fields(result))

    def candidates_for_job(
        self,
        job_id: ProfileId,
        limit: int,
        refresh: bool = False
    ) -> List[CandidateMatchItem]:
        self._require_job(job_id)
        results = self.orchestrator.find_matches_for_job(job_id, limit=limit, refresh=refresh)

        items = []
        for result in results:
            candidate = self.repository.get_candidate(result.candidate_id)
            items.append(CandidateMatchItem(
                **_result_fields(result),
                candidate_title=candidate.title if candidate else "",
            ))
        return items

    def jobs_for_candidate(
        self,
        candidate_id: ProfileId,
        limit: int,
        refresh: bool = False
    ) -> Tuple[List[JobMatchItem], List[str]]:
        """Ranked jobs plus profile suggestions for the candidate."""
        candidate = self._require_candidate(candidate_id)
        results = self.orchestrator.find_matches_for_candidate(candidate_id, limit=limit, refresh=refresh)

        items = []
        for result in results:
            job = self.repository.get_job(result.job_id)
            bids = self.repository.count_bids(result.job_id)
            items.append(JobMatchItem(
                **_result_fields(result),
                job_title=job.title if job else "",
                bid_count=bids,
                competition_level=competition_level(bids),
            ))
        return items, suggested_improvements(candidate)

    @staticmethod
    def normalize_skills(raw: Any, kind: str, default_level: str) -> List[NormalizedSkill]:
        if kind == "job":
            # Stored data falls back to INTERMEDIATE; a caller-supplied default must be valid.
            if default_level.strip().upper() not in ExperienceLevel.__members__:
                raise InvalidRequestException(f"Unknown experience level: {default_level}")
            requirements = normalize_job_requirements(raw, ExperienceLevel.parse(default_level))
            return [
                NormalizedSkill(
                    name=r.name,
                    experience_level=r.experience_level.name.lower(),
                    importance=r.importance.value,
                )
                for r in requirements
            ]
        return [
            NormalizedSkill(name=s.name, experience_level=s.experience_level.name.lower())
            for s in normalize_candidate_skills(raw)
        ]

    def known_skill_names(self) -> List[str]:
        names = {}
        for job in self.repository.list_jobs():
            for name in job.all_skill_names():
                names.setdefault(name.lower(), name)
        for candidate in self.repository.list_candidates():
            for skill in candidate.skills:
                names.setdefault(skill.name.lower(), skill.name)
        return list(names.values())

    def lookup_skill(self, query: str) -> Tuple[Any, int, Any]:
        """Return (closest known skill, confidence, reconciled taxonomy category)."""
        match, confidence = fuzzy_lookup(query, self.known_skill_names())
        category = reconcile_category(query, self.repository.list_categories())
        return match, confidence, category

    def skills_in_demand(self, limit: int) -> List[str]:
        return top_skills_in_demand(self.repository.list_jobs(), limit=limit)
