"""
================================================================================
ShowSearch - Incremental Search Package
================================================================================
Client-side half of the show search.

Components:
  - models.py       - Show / SearchMatch / genre keys
  - matcher.py      - Tiered resolver (exact, longer, shorter, none)
  - result_cache.py - Per-query result store
  - debounce.py     - Trailing-edge query debouncer
  - genres.py       - Genre index over the displayed results
  - selection.py    - Lazy selection revalidation
  - client.py       - HTTP client for the proxy
  - session.py      - Wires all of the above together
================================================================================
"""

from .models import Genre, SearchMatch, Show, ShowImage, UNCATEGORIZED, parse_search_results
from .matcher import CurrentResolution, ResolutionType, resolve, is_loading
from .result_cache import ResultCache
from .debounce import QueryDebouncer
from .genres import build_index, shows_for_genre, genre_label
from .selection import Selection, reconcile
from .client import ProxyClient
from .session import SearchSession, SearchView

__all__ = [
    'Genre', 'SearchMatch', 'Show', 'ShowImage', 'UNCATEGORIZED', 'parse_search_results',
    'CurrentResolution', 'ResolutionType', 'resolve', 'is_loading',
    'ResultCache', 'QueryDebouncer',
    'build_index', 'shows_for_genre', 'genre_label',
    'Selection', 'reconcile',
    'ProxyClient', 'SearchSession', 'SearchView',
]
