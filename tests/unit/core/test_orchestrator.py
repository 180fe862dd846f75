#!/usr/bin/env python3
"""
Test MatchOrchestrator - cache/external/deterministic chain and batch limits.
"""
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from core.config_loader import OrchestratorConfig, ProviderConfig
from core.exceptions import ConfigurationError
from core.llm.openai_service import OpenAICompatibleProvider
from core.llm.scoring_client import ExternalScoringClient
from core.matcher.models import MatchPerspective, ScoreSource
from core.orchestrator import MatchOrchestrator, id_sort_key
from core.repository import InMemoryProfileRepository
from tests.mocks.matcher_mocks import (
    E,
    SequenceScorer,
    make_candidate,
    make_job,
    make_result,
)


def _repository(candidate_ids, job_ids=(1,)):
    jobs = [make_job(job_id, required=[("PHP", E)], employer_id=100) for job_id in job_ids]
    candidates = [make_candidate(cid, skills=[("PHP", E)]) for cid in candidate_ids]
    return InMemoryProfileRepository(jobs=jobs, candidates=candidates)


def _orchestrator(repository, scorer, cache, **kwargs):
    return MatchOrchestrator(repository=repository, scorer=scorer, cache=cache, **kwargs)


class TestScorePair:

    def test_deterministic_result_is_cached(self, sample_repository, scorer, memory_cache):
        orchestrator = _orchestrator(sample_repository, scorer, memory_cache)
        job = sample_repository.get_job(1)
        candidate = sample_repository.get_candidate(7)

        result = orchestrator.score_pair(job, candidate)

        assert result.score == 70
        assert result.source is ScoreSource.DETERMINISTIC
        assert memory_cache.get(1, 7) == result

    def test_cache_hit_skips_scoring(self, sample_repository, memory_cache):
        cached = make_result(1, 7, 91)
        memory_cache.put(1, 7, cached)
        scorer = SequenceScorer([10])
        orchestrator = _orchestrator(sample_repository, scorer, memory_cache)

        result = orchestrator.score_pair(sample_repository.get_job(1), sample_repository.get_candidate(7))

        assert result is cached
        assert scorer.calls == []

    def test_refresh_bypasses_lookup_but_stores(self, sample_repository, memory_cache):
        memory_cache.put(1, 7, make_result(1, 7, 91))
        orchestrator = _orchestrator(sample_repository, SequenceScorer([33]), memory_cache)

        result = orchestrator.score_pair(
            sample_repository.get_job(1), sample_repository.get_candidate(7), refresh=True
        )

        assert result.score == 33
        assert memory_cache.get(1, 7).score == 33

    def test_external_result_preferred(self, sample_repository, memory_cache):
        external = Mock()
        external.score.return_value = make_result(1, 7, 88, ScoreSource.EXTERNAL)
        scorer = SequenceScorer([10])
        orchestrator = _orchestrator(sample_repository, scorer, memory_cache, external_client=external)

        result = orchestrator.score_pair(
            sample_repository.get_job(1), sample_repository.get_candidate(7), MatchPerspective.WORKER
        )

        assert result.source is ScoreSource.EXTERNAL
        assert scorer.calls == []
        assert external.score.call_args.args[2] is MatchPerspective.WORKER
        assert memory_cache.get(1, 7, MatchPerspective.WORKER).score == 88

    def test_external_failure_falls_back(self, sample_repository, scorer, memory_cache):
        external = Mock()
        external.score.return_value = None
        orchestrator = _orchestrator(sample_repository, scorer, memory_cache, external_client=external)

        result = orchestrator.score_pair(sample_repository.get_job(1), sample_repository.get_candidate(7))

        assert result.source is ScoreSource.DETERMINISTIC
        assert result.score == 70


class TestFindMatchesForJob:

    def test_malformed_sdk_response_falls_back_to_deterministic(self, scorer, memory_cache):
        sdk = Mock()
        sdk.chat.completions.create.return_value = SimpleNamespace(choices=None)
        provider = OpenAICompatibleProvider(api_key=None, client=sdk)
        external = ExternalScoringClient(provider, [ProviderConfig(model="alpha")])
        orchestrator = _orchestrator(_repository([7]), scorer, memory_cache, external_client=external)

        results = orchestrator.find_matches_for_job(1)

        assert [(r.candidate_id, r.score) for r in results] == [(7, 100)]
        assert results[0].source is ScoreSource.DETERMINISTIC

    def test_ranked_highest_first_and_truncated(self, memory_cache):
        repository = _repository([1, 2, 3, 4])
        orchestrator = _orchestrator(repository, SequenceScorer([20, 60, 40, 50]), memory_cache)

        results = orchestrator.find_matches_for_job(1, limit=3)

        assert [r.candidate_id for r in results] == [2, 4, 3]
        assert [r.score for r in results] == [60, 50, 40]

    def test_ties_broken_by_candidate_id(self, memory_cache):
        repository = _repository([12, 3, 10])
        orchestrator = _orchestrator(repository, SequenceScorer([50, 50, 50]), memory_cache)

        results = orchestrator.find_matches_for_job(1)

        assert [r.candidate_id for r in results] == [3, 10, 12]

    def test_zero_scores_are_not_collected(self, memory_cache):
        repository = _repository([1, 2, 3])
        orchestrator = _orchestrator(repository, SequenceScorer([0, 40, 0]), memory_cache)

        results = orchestrator.find_matches_for_job(1)

        assert [r.candidate_id for r in results] == [2]

    def test_early_exit_after_enough_strong_results(self, memory_cache):
        """limit 5 -> stop at the 10th collected result once it scores >= 70."""
        repository = _repository(range(1, 16))
        scorer = SequenceScorer([50] * 9 + [80] + [95] * 5)
        orchestrator = _orchestrator(repository, scorer, memory_cache)

        results = orchestrator.find_matches_for_job(1, limit=5)

        assert len(scorer.calls) == 10
        assert len(results) == 5
        assert results[0].score == 80

    def test_no_early_exit_while_latest_score_is_low(self, memory_cache):
        repository = _repository(range(1, 13))
        scorer = SequenceScorer([50] * 12)
        orchestrator = _orchestrator(repository, scorer, memory_cache)

        orchestrator.find_matches_for_job(1, limit=5)

        assert len(scorer.calls) == 12

    def test_time_budget_returns_partial_results(self, memory_cache, fake_clock):
        repository = _repository(range(1, 11))
        scorer = SequenceScorer([50] * 10, clock=fake_clock, step=8.0)
        orchestrator = _orchestrator(repository, scorer, memory_cache, clock=fake_clock)

        results = orchestrator.find_matches_for_job(1, limit=5)

        # budget is checked before each pair: 0s, 8s, 16s pass, 24s stops
        assert len(scorer.calls) == 3
        assert len(results) == 3

    def test_pool_is_bounded(self, memory_cache):
        repository = _repository(range(1, 31))
        scorer = SequenceScorer([10] * 30)
        config = OrchestratorConfig(employer_pool_limit=4)
        orchestrator = _orchestrator(repository, scorer, memory_cache, config=config)

        orchestrator.find_matches_for_job(1, limit=10)

        assert len(scorer.calls) == 4

    def test_unknown_job_or_empty_limit(self, sample_repository, scorer, memory_cache):
        orchestrator = _orchestrator(sample_repository, scorer, memory_cache)

        assert orchestrator.find_matches_for_job(404) == []
        assert orchestrator.find_matches_for_job(1, limit=0) == []

    def test_incomplete_profiles_excluded(self, sample_repository, scorer, memory_cache):
        orchestrator = _orchestrator(sample_repository, scorer, memory_cache)

        results = orchestrator.find_matches_for_job(1)

        assert 9 not in [r.candidate_id for r in results]
        assert results[0].candidate_id == 7


class TestFindMatchesForCandidate:

    def test_ranks_jobs_from_worker_perspective(self, memory_cache):
        repository = _repository([7], job_ids=(5, 2, 9))
        orchestrator = _orchestrator(repository, SequenceScorer([30, 30, 60]), memory_cache)

        results = orchestrator.find_matches_for_candidate(7)

        assert [r.job_id for r in results] == [9, 2, 5]
        assert memory_cache.get(5, 7, MatchPerspective.WORKER) is not None
        assert memory_cache.get(5, 7, MatchPerspective.EMPLOYER) is None

    def test_own_jobs_excluded(self, scorer, memory_cache):
        repository = InMemoryProfileRepository(
            jobs=[make_job(1, skill_names=["PHP"], employer_id=7), make_job(2, skill_names=["PHP"])],
            candidates=[make_candidate(7, skills=[("PHP", E)])],
        )
        orchestrator = _orchestrator(repository, scorer, memory_cache)

        assert [r.job_id for r in orchestrator.find_matches_for_candidate(7)] == [2]

    def test_unknown_candidate(self, sample_repository, scorer, memory_cache):
        orchestrator = _orchestrator(sample_repository, scorer, memory_cache)
        assert orchestrator.find_matches_for_candidate("nobody") == []


class TestOrchestratorConfig:

    @pytest.mark.parametrize("overrides", [
        {"max_process_seconds": 0},
        {"employer_pool_limit": 0},
        {"early_exit_multiplier": 0},
        {"early_exit_score": 101},
    ])
    def test_invalid_config(self, sample_repository, scorer, memory_cache, overrides):
        with pytest.raises(ConfigurationError):
            _orchestrator(sample_repository, scorer, memory_cache, config=OrchestratorConfig(**overrides))

    def test_id_sort_key(self):
        ids = ["b", 10, "2", "a", 1]
        assert sorted(ids, key=id_sort_key) == [1, "2", 10, "a", "b"]
