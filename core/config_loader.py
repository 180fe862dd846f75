import yaml
import os
import logging
from typing import List, Optional, Literal
from pydantic import BaseModel, Field, ValidationError

from core import weights
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ProviderConfig(BaseModel):
    """One entry of the ordered external-scoring model list."""
    model: str
    temperature: float = 1.0
    max_completion_tokens: int = 1024
    top_p: float = 1.0
    timeout_seconds: float = 30.0  # larger-capacity models get longer timeouts


def _default_models() -> List[ProviderConfig]:
    return [
        ProviderConfig(model="llama-3.3-70b-versatile"),
        ProviderConfig(model="meta-llama/llama-4-scout-17b-16e-instruct"),
        ProviderConfig(model="meta-llama/llama-4-maverick-17b-128e-instruct"),
        ProviderConfig(
            model="qwen/qwen3-32b",
            temperature=0.6,
            max_completion_tokens=4096,
            top_p=0.95,
            timeout_seconds=45.0,
        ),
        ProviderConfig(model="llama-3.1-8b-instant"),
    ]


class LlmConfig(BaseModel):
    """External scoring (OpenAI-compatible chat completions)."""
    enabled: bool = True
    base_url: Optional[str] = "https://api.groq.com/openai/v1"
    api_key: Optional[str] = None
    models: List[ProviderConfig] = Field(default_factory=_default_models)
    # Retries per model for connection errors only; 429/5xx/timeouts fail over immediately.
    max_connection_retries: int = 1


class CacheConfig(BaseModel):
    backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"
    redis_password: Optional[str] = None
    ttl_seconds: int = 24 * 60 * 60


class ScorerConfig(BaseModel):
    """
    Configuration for the DeterministicScorer.

    Structured mode splits 100 points between required and preferred skills;
    legacy mode blends a skills component with an experience component.
    """
    required_points: float = weights.REQUIRED_SKILLS_POINTS
    preferred_points: float = weights.PREFERRED_SKILLS_POINTS

    legacy_skills_weight: float = weights.LEGACY_SKILLS_WEIGHT
    legacy_experience_weight: float = weights.LEGACY_EXPERIENCE_WEIGHT

    min_incomplete_profile_score: int = weights.MIN_INCOMPLETE_PROFILE_SCORE
    min_empty_input_score: int = weights.MIN_EMPTY_INPUT_SCORE


class OrchestratorConfig(BaseModel):
    """Batch search limits for MatchOrchestrator."""
    max_process_seconds: float = 20.0  # wall-clock budget for one batch
    employer_pool_limit: int = 15      # candidates fetched per job
    worker_pool_limit: int = 10        # jobs fetched per candidate
    default_limit: int = 5
    early_exit_score: int = 70
    early_exit_multiplier: int = 2     # stop once limit * multiplier results are collected


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class DataConfig(BaseModel):
    """In-memory data collaborator seed file (JSON with "jobs" and "candidates")."""
    profiles_file: Optional[str] = None


class AppConfig(BaseModel):
    llm: LlmConfig = Field(default_factory=LlmConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    scorer: ScorerConfig = Field(default_factory=ScorerConfig)
    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    data: DataConfig = Field(default_factory=DataConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    """Load configuration from YAML with environment overrides.

    A missing file yields the defaults. Invalid content raises ConfigurationError.
    """
    data = {}
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        fallback_path = os.path.join(base_dir, "..", "config.yaml")
        if os.path.exists(fallback_path):
            config_path = fallback_path
        else:
            logger.info(f"No config file at {config_path}, using defaults")
            config_path = None

    if config_path:
        with open(config_path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Cannot parse {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root must be a mapping, got {type(data).__name__}")

    # Allow env var override for the scoring API key (never stored in YAML in production)
    env_api_key = os.environ.get("SCORING_LLM_API_KEY") or os.environ.get("GROQ_API_KEY")
    if env_api_key:
        data['llm'] = data.get('llm') or {}
        data['llm']['api_key'] = env_api_key

    env_base_url = os.environ.get("SCORING_LLM_BASE_URL")
    if env_base_url:
        data['llm'] = data.get('llm') or {}
        data['llm']['base_url'] = env_base_url

    env_redis_url = os.environ.get("REDIS_URL")
    if env_redis_url:
        data['cache'] = data.get('cache') or {}
        data['cache']['redis_url'] = env_redis_url

    try:
        config = AppConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    # Relative data paths are relative to the config file, not the working directory
    profiles_file = config.data.profiles_file
    if config_path and profiles_file and not os.path.isabs(profiles_file):
        config.data.profiles_file = os.path.join(os.path.dirname(os.path.abspath(config_path)), profiles_file)

    return config
