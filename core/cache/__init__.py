"""Cache Module - Caching services."""
from core.cache.job_cache import (
    JobCache,
    InMemoryJobCache,
    RedisJobCache,
    build_job_cache,
    CACHE_TTL_SECONDS
)
from core.cache.fingerprint import FilterFingerprinter

__all__ = [
    'JobCache',
    'InMemoryJobCache',
    'RedisJobCache',
    'build_job_cache',
    'FilterFingerprinter',
    'CACHE_TTL_SECONDS'
]
