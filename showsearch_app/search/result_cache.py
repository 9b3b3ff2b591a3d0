"""
Result cache for the search client.

Maps every distinct query ever fetched to its result list. Entries are only
replaced wholesale by a later fetch of the same exact query and are never
evicted; the number of keys is bounded by what one user types in a session.
"""

import threading
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .models import SearchMatch


class ResultCache:
    """Thread-safe query -> results mapping (fetches complete on worker threads)."""

    def __init__(self):
        self._entries: Dict[str, Tuple[SearchMatch, ...]] = {}
        self._lock = threading.Lock()

    def store(self, query: str, results: Sequence[SearchMatch]) -> None:
        """Replace the entry for ``query``; never merged with the old value."""
        with self._lock:
            self._entries[query] = tuple(results)

    def get(self, query: str) -> Optional[Tuple[SearchMatch, ...]]:
        with self._lock:
            return self._entries.get(query)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def snapshot(self) -> Mapping[str, Tuple[SearchMatch, ...]]:
        """Read-only copy to hand to the matcher."""
        with self._lock:
            return MappingProxyType(dict(self._entries))

    def __contains__(self, query: object) -> bool:
        with self._lock:
            return query in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
