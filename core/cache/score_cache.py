"""Score Cache - Caching for computed match results."""
import json
import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional
from urllib.parse import urlparse

from redis import Redis
from redis.exceptions import RedisError

from core.exceptions import ConfigurationError
from core.matcher.models import MatchPerspective, MatchResult, ProfileId
from core.utils import PairFingerprinter

logger = logging.getLogger(__name__)

# 24 hours in seconds
CACHE_TTL_SECONDS = 24 * 60 * 60


def _sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    try:
        parsed = urlparse(url)
        if parsed.password:
            sanitized = parsed._replace(
                netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
            )
            return sanitized.geturl()
        return url
    except ValueError:
        return url


def _validate_ttl(ttl_seconds: int) -> int:
    if ttl_seconds <= 0:
        raise ConfigurationError(f"Cache TTL must be positive, got {ttl_seconds}")
    return ttl_seconds


class ScoreCache(ABC):
    """
    Cache of MatchResult values keyed by (job, candidate, perspective).

    Only successfully computed results are ever stored.
    """

    def __init__(self, ttl_seconds: int = CACHE_TTL_SECONDS):
        self.ttl_seconds = _validate_ttl(ttl_seconds)

    @staticmethod
    def make_key(
        job_id: ProfileId,
        candidate_id: ProfileId,
        perspective: MatchPerspective = MatchPerspective.EMPLOYER
    ) -> str:
        return f"match:{PairFingerprinter.calculate(job_id, candidate_id, perspective)}"

    @abstractmethod
    def get(
        self,
        job_id: ProfileId,
        candidate_id: ProfileId,
        perspective: MatchPerspective = MatchPerspective.EMPLOYER
    ) -> Optional[MatchResult]:
        pass

    @abstractmethod
    def put(
        self,
        job_id: ProfileId,
        candidate_id: ProfileId,
        result: MatchResult,
        ttl_seconds: Optional[int] = None,
        perspective: MatchPerspective = MatchPerspective.EMPLOYER
    ) -> bool:
        pass

    @abstractmethod
    def invalidate(
        self,
        job_id: ProfileId,
        candidate_id: ProfileId,
        perspective: MatchPerspective = MatchPerspective.EMPLOYER
    ) -> bool:
        pass


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: MatchResult
    expires_at: float


class InMemoryScoreCache(ScoreCache):
    """
    Process-local cache.

    Safe for concurrent readers and racing writers (last write wins).
    ``clock`` returns seconds and is injectable so expiry can be tested
    without sleeping.
    """

    def __init__(
        self,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        super().__init__(ttl_seconds)
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, job_id, candidate_id, perspective=MatchPerspective.EMPLOYER):
        key = self.make_key(job_id, candidate_id, perspective)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                logger.debug(f"Cache entry expired for job {job_id} / candidate {candidate_id}")
                return None
            return entry.value

    def put(self, job_id, candidate_id, result, ttl_seconds=None, perspective=MatchPerspective.EMPLOYER):
        ttl = ttl_seconds or self.ttl_seconds
        key = self.make_key(job_id, candidate_id, perspective)
        entry = CacheEntry(key=key, value=result, expires_at=self._clock() + ttl)
        with self._lock:
            self._entries[key] = entry
        return True

    def invalidate(self, job_id, candidate_id, perspective=MatchPerspective.EMPLOYER):
        key = self.make_key(job_id, candidate_id, perspective)
        with self._lock:
            return self._entries.pop(key, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class RedisScoreCache(ScoreCache):
    """
    Redis-backed cache shared between processes.

    Results are stored as JSON with SETEX. When Redis is unreachable every
    lookup is a miss and every store is a no-op; scoring carries on.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        client: Optional[Redis] = None
    ):
        super().__init__(ttl_seconds)
        self.redis_url = redis_url
        self._redis: Optional[Redis] = client
        self._available = False

        try:
            if self._redis is None:
                self._redis = Redis.from_url(
                    redis_url,
                    password=password,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5
                )
            self._redis.ping()
            self._available = True
            logger.info(f"Score cache connected to Redis at {_sanitize_url(redis_url)}")
        except ValueError as e:
            raise ConfigurationError(f"Invalid Redis URL {_sanitize_url(redis_url)}: {e}") from e
        except RedisError as e:
            logger.warning(f"Score cache Redis unavailable, caching disabled: {e}")
            self._available = False

    @property
    def is_available(self) -> bool:
        return self._available and self._redis is not None

    def get(self, job_id, candidate_id, perspective=MatchPerspective.EMPLOYER):
        if not self.is_available:
            return None

        key = self.make_key(job_id, candidate_id, perspective)
        try:
            data = self._redis.get(key)
        except RedisError as e:
            logger.warning(f"Error reading from score cache: {e}")
            return None

        if not data:
            logger.debug(f"Cache miss for {key[:22]}...")
            return None

        try:
            cache_entry = json.loads(data)
            return MatchResult.from_dict(cache_entry["data"])
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding malformed score cache entry {key[:22]}...: {e}")
            return None

    def put(self, job_id, candidate_id, result, ttl_seconds=None, perspective=MatchPerspective.EMPLOYER):
        if not self.is_available:
            return False

        key = self.make_key(job_id, candidate_id, perspective)
        ttl = ttl_seconds or self.ttl_seconds
        cache_entry = {
            "data": result.to_dict(),
            "cached_at": datetime.now(timezone.utc).isoformat(),
            "ttl_seconds": ttl
        }
        try:
            self._redis.setex(key, ttl, json.dumps(cache_entry))
            logger.debug(f"Cached {key[:22]}... (TTL: {ttl}s)")
            return True
        except RedisError as e:
            logger.warning(f"Error writing to score cache: {e}")
            return False

    def invalidate(self, job_id, candidate_id, perspective=MatchPerspective.EMPLOYER):
        if not self.is_available:
            return False

        try:
            return bool(self._redis.delete(self.make_key(job_id, candidate_id, perspective)))
        except RedisError as e:
            logger.warning(f"Error deleting from score cache: {e}")
            return False
