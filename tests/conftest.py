"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For builders and fake services, see tests/mocks/matcher_mocks.py
"""

import pytest

from core.cache.score_cache import InMemoryScoreCache
from core.config_loader import AppConfig
from core.repository import InMemoryProfileRepository
from core.scorer.service import DeterministicScorer
from tests.mocks.matcher_mocks import B, I, E, FakeClock, make_candidate, make_job


@pytest.fixture(autouse=True)
def scrub_scoring_env(monkeypatch):
    """Keep real API keys and Redis URLs in the developer's shell out of tests."""
    for name in ("SCORING_LLM_API_KEY", "GROQ_API_KEY", "SCORING_LLM_BASE_URL", "REDIS_URL", "GIGMATCH_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def scorer():
    return DeterministicScorer()


@pytest.fixture
def memory_cache(fake_clock):
    return InMemoryScoreCache(clock=fake_clock)


@pytest.fixture
def sample_repository():
    """Two jobs, three candidates covering both job shapes, and a small taxonomy."""
    jobs = [
        make_job(
            1,
            required=[("PHP", E, "required"), ("Vue", I, "preferred")],
            level=E,
            employer_id=100,
            bid_count=4,
        ),
        make_job(
            2,
            skill_names=["Copywriting", "Canva", "Social Media Marketing"],
            level=I,
            employer_id=101,
            bid_count=17,
        ),
    ]
    candidates = [
        make_candidate(7, skills=[("PHP", E), ("MySQL", I)], level=E, hourly_rate=650.0),
        make_candidate(8, skills=[("Copywriting", E), ("Canva", B)], level=I),
        make_candidate(9, skills=[], level=B, profile_completed=False),
    ]
    categories = ["Web Development", "Social Media Marketing", "Writing & Translation"]
    return InMemoryProfileRepository(jobs=jobs, candidates=candidates, categories=categories)


@pytest.fixture
def app_config():
    """Defaults with external scoring switched off."""
    config = AppConfig()
    config.llm.enabled = False
    return config
