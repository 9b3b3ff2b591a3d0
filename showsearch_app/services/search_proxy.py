"""
Search Proxy Service - cache-aside layer in front of the TVMaze search API.

Flow per request:
  1. Reject blank queries (InvalidQuery)
  2. Normalize (trim + lower-case) into a namespaced cache key
  3. HIT: return the stored raw body
  4. MISS: fetch upstream, store the raw body with a TTL, return it

The body is never parsed on this side; what is cached is byte-for-byte what
TVMaze answered.

Concurrent misses for the same key both reach upstream unless single-flight is
enabled, in which case they queue on a per-key lock and the followers are
served from the cache once the leader has stored the body.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from ..errors import InvalidQuery
from ..tvmaze_api import TVMazeAPI

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 10
CACHE_KEY_PREFIX = 'cup-movie://api.tvmaze.com/search/shows?q='

CACHE_HIT = 'HIT'
CACHE_MISS = 'MISS'


@dataclass(frozen=True)
class ProxyResult:
    """Raw upstream body plus where it came from."""
    body: str
    cache_status: str


def normalize_query(query: Optional[str]) -> str:
    """Trim and lower-case a query for cache identity."""
    return (query or '').strip().lower()


def make_cache_key(query: str) -> str:
    return f"{CACHE_KEY_PREFIX}{normalize_query(query)}"


class SearchProxy:
    """Cache-aside proxy for show search."""

    def __init__(self, store, upstream: TVMazeAPI, ttl: int = DEFAULT_CACHE_TTL,
                 single_flight: bool = False):
        self.store = store
        self.upstream = upstream
        if int(ttl) < 1:
            raise ValueError(f"ttl must be at least 1 second, got {ttl}")
        self.ttl = int(ttl)
        self.single_flight = single_flight
        self._key_locks: Dict[str, List] = {}
        self._locks_guard = threading.Lock()

    def handle(self, query: Optional[str]) -> ProxyResult:
        """
        Resolve a search query against the cache, then upstream.

        Raises:
            InvalidQuery: query missing or whitespace only
            UpstreamError: TVMaze answered non-2xx (nothing is cached)
            NetworkError / CacheStoreError: transport or store failure
        """
        trimmed = (query or '').strip()
        if not trimmed:
            raise InvalidQuery()

        key = make_cache_key(trimmed)

        if not self.single_flight:
            return self._lookup_or_fetch(key, trimmed)

        with self._flight(key):
            return self._lookup_or_fetch(key, trimmed)

    def _lookup_or_fetch(self, key: str, query: str) -> ProxyResult:
        cached = self.store.get(key)
        # An empty string is not a valid cached body
        if cached:
            logger.debug(f"Cache HIT for {key}")
            return ProxyResult(cached, CACHE_HIT)

        body = self.upstream.search_shows_raw(query)
        self.store.set(key, body, self.ttl)
        logger.debug(f"Cache MISS for {key}, stored for {self.ttl}s")
        return ProxyResult(body, CACHE_MISS)

    @contextmanager
    def _flight(self, key: str) -> Iterator[None]:
        # Entry is [lock, waiters]; dropped once the last waiter leaves
        with self._locks_guard:
            entry = self._key_locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        entry[0].acquire()
        try:
            yield
        finally:
            entry[0].release()
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    self._key_locks.pop(key, None)
