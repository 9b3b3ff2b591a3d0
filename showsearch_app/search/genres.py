"""Genre index built from the displayed result set."""

from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from .models import GenreKey, SearchMatch

GenreIndex = Mapping[GenreKey, Tuple[SearchMatch, ...]]


def build_index(results: Optional[Sequence[SearchMatch]]) -> GenreIndex:
    """
    Group results by genre.

    A show with genres is listed under each of them; a show without any is
    listed under UNCATEGORIZED. Key order follows first appearance, and order
    within a key follows ``results``. Always rebuilt from scratch so genres
    from a previous query never leak into the current one.
    """
    grouped: Dict[GenreKey, List[SearchMatch]] = {}
    seen: Dict[GenreKey, Set[int]] = {}
    for match in results or ():
        for key in match.show.genre_keys:
            if match.show_id in seen.setdefault(key, set()):
                continue
            seen[key].add(match.show_id)
            grouped.setdefault(key, []).append(match)
    return {key: tuple(bucket) for key, bucket in grouped.items()}


def shows_for_genre(index: GenreIndex, genre: Optional[GenreKey]) -> Tuple[SearchMatch, ...]:
    if genre is None:
        return ()
    return index.get(genre, ())


def genre_label(genre: GenreKey) -> str:
    return str(genre)
