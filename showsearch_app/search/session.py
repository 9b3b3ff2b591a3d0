"""
================================================================================
ShowSearch - Search Session
================================================================================
Owns the client-side search state and derives what the UI should show.

Flow:
  set_query() -> QueryDebouncer -> worker thread -> ProxyClient
             -> ResultCache[exact query]

  view() -> resolve(current query, cache snapshot)
         -> build_index(resolution results)
         -> reconcile(selection, resolution results)

Fetches are never cancelled: a fetch for an abandoned query still lands in
the cache, where the matcher may reuse it for a related query later. Failed
fetches are logged and leave their key absent; the user re-arms the
debouncer by typing again.
================================================================================
"""

import os
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Optional, Set, Tuple

from ..errors import InvalidQuery, ShowSearchError
from .client import ProxyClient
from .debounce import QueryDebouncer
from .genres import GenreIndex, build_index, shows_for_genre
from .matcher import CurrentResolution, is_loading, resolve
from .models import GenreKey, SearchMatch, Show
from .result_cache import ResultCache
from .selection import Selection, reconcile

logger = logging.getLogger(__name__)

MAX_FETCH_WORKERS = 4


def search_delay_from_env() -> float:
    """SEARCH_DELAY is in milliseconds; anything unparsable means no delay."""
    try:
        delay_ms = int(os.environ.get('SEARCH_DELAY', '0'))
    except ValueError:
        return 0.0
    return max(delay_ms, 0) / 1000.0


@dataclass(frozen=True)
class SearchView:
    """Everything a renderer needs for one frame."""
    query: str
    resolution: CurrentResolution
    loading: bool
    genres: GenreIndex
    genres_interactive: bool
    selected_genre: Optional[GenreKey]
    shows: Tuple[SearchMatch, ...]
    displayed_show: Optional[Show]


class SearchSession:
    """Single logical owner of the search client state."""

    def __init__(self, client: Optional[ProxyClient] = None, delay: Optional[float] = None,
                 executor: Optional[ThreadPoolExecutor] = None, debouncer: Optional[QueryDebouncer] = None):
        self.client = client or ProxyClient()
        self.cache = ResultCache()
        self.selection = Selection()
        self._query = ''
        self._executor = executor or ThreadPoolExecutor(max_workers=MAX_FETCH_WORKERS,
                                                        thread_name_prefix='showsearch-fetch')
        self._owns_executor = executor is None
        self._inflight: Set[Future] = set()
        self._inflight_lock = threading.Lock()
        if debouncer is None:
            debouncer = QueryDebouncer(self._dispatch, search_delay_from_env() if delay is None else delay)
        self.debouncer = debouncer

    @property
    def query(self) -> str:
        return self._query

    # =========================================================================
    # INPUT
    # =========================================================================

    def set_query(self, raw_query: str) -> None:
        self._query = (raw_query or '').strip()
        self.debouncer.submit(self._query)

    def select_genre(self, genre: Optional[GenreKey]) -> None:
        self.selection = self.selection.with_genre(genre)

    def select_show(self, show_id: Optional[int]) -> None:
        self.selection = self.selection.with_show(show_id)

    # =========================================================================
    # FETCHING
    # =========================================================================

    def _dispatch(self, query: str) -> None:
        future = self._executor.submit(self._fetch, query)
        with self._inflight_lock:
            self._inflight.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future: Future) -> None:
        with self._inflight_lock:
            self._inflight.discard(future)

    def _fetch(self, query: str) -> None:
        try:
            results = self.client.search_shows(query)
        except InvalidQuery:
            logger.debug("Skipping fetch for blank query")
            return
        except ShowSearchError as e:
            logger.warning(f"Search fetch failed for {query!r}: {e}")
            return
        except Exception:
            logger.exception(f"Unexpected error fetching {query!r}")
            return
        self.cache.store(query, results)
        logger.debug(f"Cached {len(results)} results for {query!r}")

    def wait_idle(self, timeout: Optional[float] = None) -> None:
        """Flush the debouncer and wait for every in-flight fetch."""
        self.debouncer.flush()
        with self._inflight_lock:
            pending = list(self._inflight)
        if pending:
            wait(pending, timeout=timeout)

    def close(self) -> None:
        self.debouncer.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    # =========================================================================
    # DERIVED STATE
    # =========================================================================

    def resolution(self) -> CurrentResolution:
        return resolve(self._query, self.cache.snapshot())

    def view(self) -> SearchView:
        resolution = self.resolution()
        genres = build_index(resolution.results)
        selection = self.selection
        return SearchView(
            query=self._query,
            resolution=resolution,
            loading=is_loading(self._query, resolution),
            genres=genres,
            genres_interactive=resolution.is_interactive,
            selected_genre=selection.genre,
            shows=shows_for_genre(genres, selection.genre),
            displayed_show=reconcile(selection.show_id, selection.genre, resolution.results),
        )
