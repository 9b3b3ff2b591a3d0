"""
Tiered matcher: picks which cached result set to show for the current query.

Tiers, in priority order:
  1. EXACT_MATCH       results fetched for exactly this query
  2. PREFIX_EXTENSION  union of results for longer queries starting with it
  3. PREFIX_REDUCTION  results for the longest cached shorter prefix
  4. NO_MATCH          nothing related is cached

TVMaze search is prefix-friendly: a show matching "batman" also matches
"bat", so longer-query results are a safe subset to render right away.
Shorter-query results are a superset, only good as a non-interactive preview.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from .models import SearchMatch


class ResolutionType(str, Enum):
    EXACT_MATCH = "exact_match"
    PREFIX_EXTENSION = "prefix_extension"
    PREFIX_REDUCTION = "prefix_reduction"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class CurrentResolution:
    type: ResolutionType
    results: Optional[Tuple[SearchMatch, ...]] = None

    @property
    def is_exact(self) -> bool:
        return self.type is ResolutionType.EXACT_MATCH

    @property
    def is_interactive(self) -> bool:
        """Reduction results may contain non-matching shows; render them read-only."""
        return self.type is not ResolutionType.PREFIX_REDUCTION


NO_MATCH = CurrentResolution(ResolutionType.NO_MATCH)

ResultMapping = Mapping[str, Sequence[SearchMatch]]


def dedupe_by_show_id(matches: Iterable[SearchMatch]) -> List[SearchMatch]:
    """Drop repeated shows, keeping the first occurrence."""
    seen = set()
    unique = []
    for match in matches:
        if match.show_id in seen:
            continue
        seen.add(match.show_id)
        unique.append(match)
    return unique


def find_longer_matches(cache: ResultMapping, query: str) -> List[str]:
    """Cached keys that extend ``query``, in cache iteration order."""
    return [key for key in cache if key != query and key.startswith(query)]


def find_shorter_match(cache: ResultMapping, query: str) -> Optional[Sequence[SearchMatch]]:
    """Results for the longest strictly shorter cached prefix (length >= 1)."""
    for length in range(len(query) - 1, 0, -1):
        prefix = query[:length]
        if prefix in cache:
            return cache[prefix]
    return None


def resolve(current_query: str, cache: ResultMapping) -> CurrentResolution:
    """Resolve ``current_query`` against ``cache``. Pure: the cache is only read."""
    if current_query in cache:
        return CurrentResolution(ResolutionType.EXACT_MATCH, tuple(cache[current_query]))

    if not cache:
        return NO_MATCH

    longer = find_longer_matches(cache, current_query)
    if longer:
        merged = dedupe_by_show_id(match for key in longer for match in cache[key])
        return CurrentResolution(ResolutionType.PREFIX_EXTENSION, tuple(merged))

    shorter = find_shorter_match(cache, current_query)
    if shorter is not None:
        return CurrentResolution(ResolutionType.PREFIX_REDUCTION, tuple(shorter))

    return NO_MATCH


def is_loading(current_query: str, resolution: CurrentResolution) -> bool:
    return bool(current_query) and not resolution.is_exact
