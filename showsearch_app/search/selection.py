"""
Selection reconciler.

The user's (genre, show) selection is never cleared when results change.
Instead it is revalidated on every render: a show that dropped out of the
displayed set, or out of the active genre, is simply not displayed. When an
approximate result set is replaced by one that contains the show again, it
reappears without the user re-selecting it.
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from .models import GenreKey, SearchMatch, Show, UNCATEGORIZED


@dataclass(frozen=True)
class Selection:
    genre: Optional[GenreKey] = None
    show_id: Optional[int] = None

    def with_genre(self, genre: Optional[GenreKey]) -> 'Selection':
        return replace(self, genre=genre)

    def with_show(self, show_id: Optional[int]) -> 'Selection':
        return replace(self, show_id=show_id)


def matches_genre(show: Show, genre: GenreKey) -> bool:
    if not show.genres:
        return genre is UNCATEGORIZED
    return genre is not UNCATEGORIZED and genre.label in show.genres


def reconcile(selected_show_id: Optional[int], selected_genre: Optional[GenreKey],
              current_results: Optional[Sequence[SearchMatch]]) -> Optional[Show]:
    """Return the show to display for the current selection, or None."""
    if selected_show_id is None or not current_results:
        return None

    match = next((m for m in current_results if m.show_id == selected_show_id), None)
    if match is None:
        return None

    if selected_genre is not None and not matches_genre(match.show, selected_genre):
        return None

    return match.show
