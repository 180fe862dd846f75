"""Cache Module - Caching services."""
from core.cache.score_cache import (
    ScoreCache,
    CacheEntry,
    InMemoryScoreCache,
    RedisScoreCache,
    CACHE_TTL_SECONDS
)

__all__ = [
    'ScoreCache',
    'CacheEntry',
    'InMemoryScoreCache',
    'RedisScoreCache',
    'CACHE_TTL_SECONDS'
]
