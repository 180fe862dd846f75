from dataclasses import dataclass
from typing import Optional
import logging

from core.cache.score_cache import InMemoryScoreCache, RedisScoreCache, ScoreCache
from core.config_loader import AppConfig, CacheConfig, LlmConfig
from core.llm.openai_service import OpenAICompatibleProvider
from core.llm.scoring_client import ExternalScoringClient
from core.orchestrator import MatchOrchestrator
from core.repository import InMemoryProfileRepository, ProfileRepository
from core.scorer.service import DeterministicScorer

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    This eliminates duplicate wiring code between the CLI and the web app and
    provides a single source of truth for service instantiation. Every
    configuration problem surfaces here as ConfigurationError.
    """
    config: AppConfig
    repository: ProfileRepository
    scorer: DeterministicScorer
    cache: ScoreCache
    orchestrator: MatchOrchestrator
    external_client: Optional[ExternalScoringClient] = None

    @classmethod
    def build(
        cls,
        config: AppConfig,
        repository: Optional[ProfileRepository] = None
    ) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            repository: Profile source; defaults to the configured profiles file
                (or an empty in-memory repository)

        Returns:
            Fully wired AppContext instance
        """
        if repository is None:
            repository = cls._build_repository(config)

        scorer = DeterministicScorer(config.scorer)
        cache = cls._build_cache(config.cache)
        external_client = cls._build_external_client(config.llm)

        orchestrator = MatchOrchestrator(
            repository=repository,
            scorer=scorer,
            cache=cache,
            external_client=external_client,
            config=config.orchestrator,
        )

        return cls(
            config=config,
            repository=repository,
            scorer=scorer,
            cache=cache,
            orchestrator=orchestrator,
            external_client=external_client
        )

    @staticmethod
    def _build_repository(config: AppConfig) -> ProfileRepository:
        if config.data.profiles_file:
            return InMemoryProfileRepository.from_file(config.data.profiles_file)
        logger.info("No profiles file configured, starting with an empty repository")
        return InMemoryProfileRepository()

    @staticmethod
    def _build_cache(cache_config: CacheConfig) -> ScoreCache:
        if cache_config.backend == "redis":
            return RedisScoreCache(
                redis_url=cache_config.redis_url,
                password=cache_config.redis_password,
                ttl_seconds=cache_config.ttl_seconds
            )
        return InMemoryScoreCache(ttl_seconds=cache_config.ttl_seconds)

    @staticmethod
    def _build_external_client(llm_config: LlmConfig) -> Optional[ExternalScoringClient]:
        """Build the external scoring client, or None for deterministic-only scoring."""
        if not llm_config.enabled:
            logger.info("External scoring disabled in config")
            return None
        if not llm_config.api_key:
            logger.info("No scoring API key configured, using deterministic scoring only")
            return None

        provider = OpenAICompatibleProvider(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            max_connection_retries=llm_config.max_connection_retries
        )
        return ExternalScoringClient(provider, llm_config.models)
