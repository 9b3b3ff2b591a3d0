"""
================================================================================
ShowSearch - Search Models
================================================================================
Client-side view of the TVMaze search payload.

Only the fields the search UI consumes are kept; everything else in the
upstream schema is ignored. Parsing is lenient: missing or null keys become
None / empty, so a partially filled show never breaks a result set.
================================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union


# =============================================================================
# GENRE KEYS
# =============================================================================

@dataclass(frozen=True)
class Genre:
    """A genre label as sent by TVMaze ("Drama", "Action", ...)."""
    label: str

    def __str__(self) -> str:
        return self.label


class Uncategorized(Enum):
    """Marker for shows that carry no genre at all."""
    UNCATEGORIZED = 'uncategorized'

    def __str__(self) -> str:
        return 'Uncategorized'


UNCATEGORIZED = Uncategorized.UNCATEGORIZED

GenreKey = Union[Genre, Uncategorized]


# =============================================================================
# DATA MODELS
# =============================================================================

@dataclass(frozen=True)
class ShowImage:
    """Poster references."""
    medium: Optional[str] = None
    original: Optional[str] = None


@dataclass(frozen=True)
class Show:
    """A TV show as returned inside a search match."""
    id: int
    name: str
    genres: Tuple[str, ...] = ()
    premiered: Optional[str] = None
    summary: Optional[str] = None  # HTML fragment, sanitized by the renderer
    image: Optional[ShowImage] = None
    url: Optional[str] = None
    language: Optional[str] = None
    status: Optional[str] = None
    rating: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Show':
        image = data.get('image') or None
        rating = (data.get('rating') or {}).get('average')
        return cls(
            id=int(data['id']),
            name=data.get('name') or '',
            genres=tuple(data.get('genres') or ()),
            premiered=data.get('premiered'),
            summary=data.get('summary'),
            image=ShowImage(image.get('medium'), image.get('original')) if image else None,
            url=data.get('url'),
            language=data.get('language'),
            status=data.get('status'),
            rating=float(rating) if rating is not None else None,
        )

    @property
    def genre_keys(self) -> Tuple[GenreKey, ...]:
        if not self.genres:
            return (UNCATEGORIZED,)
        return tuple(Genre(label) for label in self.genres)


@dataclass(frozen=True)
class SearchMatch:
    """One search hit: relevance score plus the embedded show."""
    score: float
    show: Show

    @property
    def show_id(self) -> int:
        return self.show.id

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchMatch':
        return cls(score=float(data.get('score') or 0.0), show=Show.from_dict(data['show']))


def parse_search_results(payload: Iterable[Dict[str, Any]]) -> List[SearchMatch]:
    """Turn the decoded JSON array of ``{score, show}`` into SearchMatch objects."""
    matches = []
    for item in payload:
        if not isinstance(item, dict) or not isinstance(item.get('show'), dict):
            raise ValueError(f"malformed search match: {item!r}")
        matches.append(SearchMatch.from_dict(item))
    return matches
