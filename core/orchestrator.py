#!/usr/bin/env python3
"""
Match Orchestrator - Batch matching with caching, failover and time budget.

Per pair:
    cache check -> [hit] collect
                -> [miss] external scoring -> deterministic fallback -> cache store -> collect

Per batch:
    bounded pool -> pairs in pool order (budget checked before each pair,
    early exit once enough strong results are in) -> sort -> truncate

Nothing here raises at call time. Unknown ids give an empty list and an
exhausted budget gives the partial ranking collected so far.
"""

import logging
import time
from typing import Callable, List, Optional, Tuple

from core.cache.score_cache import ScoreCache
from core.config_loader import OrchestratorConfig
from core.exceptions import ConfigurationError
from core.llm.scoring_client import ExternalScoringClient
from core.matcher.models import (
    CandidateProfile,
    JobProfile,
    MatchPerspective,
    MatchResult,
    ProfileId,
)
from core.repository import ProfileRepository
from core.scorer.service import DeterministicScorer

logger = logging.getLogger(__name__)


def id_sort_key(profile_id: ProfileId) -> Tuple[int, int, str]:
    """Ascending id order; numeric ids sort numerically and before other ids."""
    if isinstance(profile_id, int) and not isinstance(profile_id, bool):
        return 0, profile_id, ""
    text = str(profile_id).strip()
    if text.isdigit():
        return 0, int(text), ""
    return 1, 0, text


def _validate_config(config: OrchestratorConfig) -> None:
    if config.max_process_seconds <= 0:
        raise ConfigurationError("max_process_seconds must be positive")
    for name in ("employer_pool_limit", "worker_pool_limit", "default_limit", "early_exit_multiplier"):
        if getattr(config, name) <= 0:
            raise ConfigurationError(f"{name} must be positive")
    if not 0 <= config.early_exit_score <= 100:
        raise ConfigurationError("early_exit_score must be within [0, 100]")


class MatchOrchestrator:
    """
    Ranks candidates for a job (employer view) or jobs for a candidate (worker view).

    Args:
        repository: read-only source of profiles and pools
        scorer: deterministic scorer, always available
        cache: score cache consulted before any scoring
        external_client: optional language-model scoring; None means deterministic only
        config: batch limits
        clock: monotonic seconds, injectable for budget tests
    """

    def __init__(
        self,
        repository: ProfileRepository,
        scorer: DeterministicScorer,
        cache: ScoreCache,
        external_client: Optional[ExternalScoringClient] = None,
        config: Optional[OrchestratorConfig] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.config = config or OrchestratorConfig()
        _validate_config(self.config)
        self.repository = repository
        self.scorer = scorer
        self.cache = cache
        self.external_client = external_client
        self._clock = clock

    def score_pair(
        self,
        job: JobProfile,
        candidate: CandidateProfile,
        perspective: MatchPerspective = MatchPerspective.EMPLOYER,
        refresh: bool = False
    ) -> MatchResult:
        """Score one pair. ``refresh`` skips the cache lookup but still stores the new result."""
        if not refresh:
            cached = self.cache.get(job.id, candidate.id, perspective)
            if cached is not None:
                logger.debug(f"Cache hit for job {job.id} / candidate {candidate.id}")
                return cached

        result = None
        if self.external_client is not None:
            result = self.external_client.score(job, candidate, perspective)
        if result is None:
            result = self.scorer.score(job, candidate)

        self.cache.put(job.id, candidate.id, result, perspective=perspective)
        return result

    def find_matches_for_job(
        self,
        job_id: ProfileId,
        limit: Optional[int] = None,
        refresh: bool = False
    ) -> List[MatchResult]:
        """Best candidates for a job, highest score first."""
        limit = self.config.default_limit if limit is None else limit
        job = self.repository.get_job(job_id)
        if job is None or limit <= 0:
            logger.info(f"No matches for job {job_id}: unknown job or empty limit")
            return []

        pool = self.repository.candidate_pool(job, self.config.employer_pool_limit)
        pairs = [(job, candidate) for candidate in pool]
        results = self._run_batch(pairs, MatchPerspective.EMPLOYER, limit, refresh)
        results.sort(key=lambda r: (-r.score, id_sort_key(r.candidate_id)))
        return results[:limit]

    def find_matches_for_candidate(
        self,
        candidate_id: ProfileId,
        limit: Optional[int] = None,
        refresh: bool = False
    ) -> List[MatchResult]:
        """Best jobs for a candidate, highest score first."""
        limit = self.config.default_limit if limit is None else limit
        candidate = self.repository.get_candidate(candidate_id)
        if candidate is None or limit <= 0:
            logger.info(f"No matches for candidate {candidate_id}: unknown candidate or empty limit")
            return []

        pool = self.repository.job_pool(candidate, self.config.worker_pool_limit)
        pairs = [(job, candidate) for job in pool]
        results = self._run_batch(pairs, MatchPerspective.WORKER, limit, refresh)
        results.sort(key=lambda r: (-r.score, id_sort_key(r.job_id)))
        return results[:limit]

    def _run_batch(
        self,
        pairs: List[Tuple[JobProfile, CandidateProfile]],
        perspective: MatchPerspective,
        limit: int,
        refresh: bool
    ) -> List[MatchResult]:
        started = self._clock()
        early_exit_count = limit * self.config.early_exit_multiplier
        collected: List[MatchResult] = []

        for index, (job, candidate) in enumerate(pairs):
            elapsed = self._clock() - started
            if elapsed >= self.config.max_process_seconds:
                logger.warning(
                    f"Match batch exceeded {self.config.max_process_seconds}s budget after "
                    f"{index} of {len(pairs)} pairs, returning partial results"
                )
                break

            result = self.score_pair(job, candidate, perspective, refresh)
            if result.score > 0:
                collected.append(result)

            if len(collected) >= early_exit_count and result.score >= self.config.early_exit_score:
                logger.info(
                    f"Early exit after {index + 1} pairs: {len(collected)} results collected, "
                    f"latest score {result.score}"
                )
                break

        return collected
