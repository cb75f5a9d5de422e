"""Job Cache Service - short-lived caching of job search results."""
import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from redis import Redis

from core.config_loader import CacheConfig
from core.locks import KeyedLock
from core.models import JobPosting

logger = logging.getLogger(__name__)

# 15 minutes in seconds
CACHE_TTL_SECONDS = 15 * 60


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
    except Exception:
        return url


class JobCache(ABC):
    """
    Maps a filter fingerprint to the postings fetched for it.

    Entries older than the TTL are never returned. The cache does not fetch
    anything itself: on a miss the caller queries a job source and puts the
    result.
    """

    ttl_seconds: int

    @abstractmethod
    def get(self, fingerprint: str) -> Optional[List[JobPosting]]:
        pass

    @abstractmethod
    def put(self, fingerprint: str, postings: List[JobPosting]) -> None:
        pass

    @abstractmethod
    def clear(self) -> int:
        """Drop every entry. Returns the number of entries removed."""
        pass

    @abstractmethod
    def stats(self) -> Dict[str, Any]:
        pass


@dataclass(frozen=True)
class CacheEntry:
    fingerprint: str
    postings: Tuple[JobPosting, ...]
    created_at: float


class InMemoryJobCache(JobCache):
    """
    Process-local cache with lazy expiry.

    An expired entry is dropped when it is read, and every put sweeps out
    the other expired entries, so the map only holds the last TTL's worth
    of searches.

    Reads and writes on one fingerprint are serialized; different
    fingerprints do not contend.
    """

    def __init__(
        self,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._locks = KeyedLock()

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.created_at < self.ttl_seconds

    def get(self, fingerprint: str) -> Optional[List[JobPosting]]:
        with self._locks.hold(fingerprint):
            entry = self._entries.get(fingerprint)
            if entry is None:
                logger.debug(f"Cache miss for search {fingerprint[:16]}...")
                return None
            if not self._is_fresh(entry):
                logger.debug(f"Cache entry expired for search {fingerprint[:16]}...")
                del self._entries[fingerprint]
                return None
            logger.debug(f"Cache hit for search {fingerprint[:16]}...")
            return list(entry.postings)

    def put(self, fingerprint: str, postings: List[JobPosting]) -> None:
        with self._locks.hold(fingerprint):
            self._entries[fingerprint] = CacheEntry(
                fingerprint=fingerprint,
                postings=tuple(postings),
                created_at=self._clock()
            )
        logger.debug(f"Cached {len(postings)} jobs for search {fingerprint[:16]}... (TTL: {self.ttl_seconds}s)")
        self._evict_expired()

    def _evict_expired(self) -> int:
        # One key lock at a time; never nested.
        evicted = 0
        for fingerprint in list(self._entries.keys()):
            with self._locks.hold(fingerprint):
                entry = self._entries.get(fingerprint)
                if entry is not None and not self._is_fresh(entry):
                    del self._entries[fingerprint]
                    evicted += 1
        if evicted:
            logger.debug(f"Evicted {evicted} expired searches from cache")
        return evicted

    def clear(self) -> int:
        removed = 0
        for fingerprint in list(self._entries.keys()):
            with self._locks.hold(fingerprint):
                if self._entries.pop(fingerprint, None) is not None:
                    removed += 1
        logger.info(f"Cleared {removed} searches from cache")
        return removed

    def stats(self) -> Dict[str, Any]:
        entries = list(self._entries.values())
        return {
            "available": True,
            "backend": "memory",
            "entries": len(entries),
            "fresh_entries": sum(1 for e in entries if self._is_fresh(e)),
            "ttl_seconds": self.ttl_seconds,
        }


class RedisJobCache(JobCache):
    """
    Redis-backed cache. Keys expire server-side via SETEX.

    Redis being unreachable degrades to a cache that always misses.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        ttl_seconds: int = CACHE_TTL_SECONDS
    ):
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self._redis: Optional[Redis] = None
        self._available = False

        try:
            self._redis = Redis.from_url(
                redis_url,
                password=password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            self._redis.ping()
            self._available = True
            logger.info(f"Job cache connected to Redis at {_sanitize_url(redis_url)}")
        except Exception as e:
            logger.warning(f"Job cache Redis unavailable: {e}")
            self._redis = None
            self._available = False

    @property
    def is_available(self) -> bool:
        if not self._available or not self._redis:
            return False
        try:
            return self._redis.ping()
        except Exception:
            return False

    def _make_key(self, fingerprint: str) -> str:
        return f"search:{fingerprint}"

    def get(self, fingerprint: str) -> Optional[List[JobPosting]]:
        if not self.is_available:
            return None

        try:
            data = self._redis.get(self._make_key(fingerprint))
            if not data:
                logger.debug(f"Cache miss for search {fingerprint[:16]}...")
                return None
            cache_entry = json.loads(data)
            logger.debug(f"Cache hit for search {fingerprint[:16]}...")
            return [JobPosting.from_dict(item) for item in cache_entry.get("data", [])]
        except Exception as e:
            logger.warning(f"Error reading from job cache: {e}")
            return None

    def put(self, fingerprint: str, postings: List[JobPosting]) -> None:
        if not self.is_available:
            return

        try:
            cache_entry = {
                "data": [p.to_dict() for p in postings],
                "cached_at": datetime.now(timezone.utc).isoformat(),
                "ttl_seconds": self.ttl_seconds
            }
            self._redis.setex(self._make_key(fingerprint), self.ttl_seconds, json.dumps(cache_entry))
            logger.debug(f"Cached {len(postings)} jobs for search {fingerprint[:16]}... (TTL: {self.ttl_seconds}s)")
        except Exception as e:
            logger.warning(f"Error writing to job cache: {e}")

    def clear(self) -> int:
        if not self.is_available:
            return 0

        try:
            cursor = 0
            deleted = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match="search:*", count=100)
                if keys:
                    self._redis.delete(*keys)
                    deleted += len(keys)
                if cursor == 0:
                    break
            logger.info(f"Cleared {deleted} searches from cache")
            return deleted
        except Exception as e:
            logger.warning(f"Error clearing job cache: {e}")
            return 0

    def stats(self) -> Dict[str, Any]:
        if not self.is_available:
            return {"available": False, "backend": "redis"}

        try:
            info = self._redis.info()
            key_count = 0
            cursor = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match="search:*", count=1000)
                key_count += len(keys)
                if cursor == 0:
                    break
            return {
                "available": True,
                "backend": "redis",
                "used_memory_human": info.get("used_memory_human", "unknown"),
                "entries": key_count,
                "ttl_seconds": self.ttl_seconds,
            }
        except Exception as e:
            logger.warning(f"Error getting cache stats: {e}")
            return {"available": False, "backend": "redis", "error": str(e)}


def build_job_cache(config: CacheConfig) -> JobCache:
    """Create the cache backend selected in configuration."""
    if config.backend == "redis":
        return RedisJobCache(
            redis_url=config.redis_url,
            password=config.redis_password,
            ttl_seconds=config.ttl_seconds
        )
    return InMemoryJobCache(ttl_seconds=config.ttl_seconds)
