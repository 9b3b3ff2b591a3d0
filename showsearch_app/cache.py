"""
================================================================================
ShowSearch - Shared Cache Store
================================================================================
Key-value store used by the search proxy for cache-aside lookups.

  - RedisBackend:  shared across workers, expiry handled by Redis (SET ... EX)
  - MemoryBackend: single-process stand-in, selected with a ``memory://`` URL

Both expose the same contract: ``get(key) -> str | None`` and
``set(key, value, ttl)``. Store failures are raised as CacheStoreError so the
caller can turn them into a generic internal failure.
================================================================================
"""

import time
import logging
import threading
from typing import Optional, Dict
from collections import OrderedDict

import redis

from .errors import CacheStoreError

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = 'redis://localhost:6379'
MEMORY_URL_SCHEME = 'memory://'


class RedisBackend:
    """Redis-based storage for shared state."""
    name = 'redis'

    def __init__(self, url: str):
        # redis-py connects lazily on the first command
        self.client = redis.from_url(url, decode_responses=True)
        self.url = url

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis GET failed: {e}")
            raise CacheStoreError(f"GET failed: {e}") from e

    def set(self, key: str, value: str, ttl: Optional[int] = None):
        try:
            self.client.set(key, value, ex=ttl)
        except redis.RedisError as e:
            logger.error(f"Redis SET failed: {e}")
            raise CacheStoreError(f"SET failed: {e}") from e

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False


class MemoryBackend:
    """In-process storage with per-key expiry."""
    name = 'memory'

    def __init__(self, max_size: int = 1000, clock=time.time):
        self._data: OrderedDict = OrderedDict()
        self._expires: Dict[str, float] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self.max_size = max_size

    def _is_expired(self, key: str) -> bool:
        expiry = self._expires.get(key)
        return expiry is not None and self._clock() >= expiry

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            if key not in self._data:
                return None
            if self._is_expired(key):
                del self._data[key]
                del self._expires[key]
                return None
            self._data.move_to_end(key)
            return self._data[key]

    def set(self, key: str, value: str, ttl: Optional[int] = None):
        with self._lock:
            if len(self._data) >= self.max_size and key not in self._data:
                oldest, _ = self._data.popitem(last=False)
                self._expires.pop(oldest, None)
            self._data[key] = value
            if ttl is not None:
                self._expires[key] = self._clock() + ttl
            elif key in self._expires:
                del self._expires[key]

    def ping(self) -> bool:
        return True


def create_cache_store(url: Optional[str] = None):
    """Build the backend named by ``url`` (``memory://`` or a Redis URL)."""
    url = url or DEFAULT_REDIS_URL
    if url.startswith(MEMORY_URL_SCHEME):
        logger.info("ℹ️ Cache store initialized with MemoryBackend")
        return MemoryBackend()
    logger.info(f"🚀 Cache store initialized with Redis: {url}")
    return RedisBackend(url)
