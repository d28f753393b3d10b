"""Approximate song title search.

Songs match a query when the case-insensitive Levenshtein distance between the
query and the title is within the caller's threshold (inclusive).
"""

from collections.abc import Iterable

from attrs import define
from rapidfuzz.distance import Levenshtein

from .entities import Song, TitleQuery
from .errors import InvalidArgumentError


@define(frozen=True, slots=True)
class SongMatch:
    """A song that matched a title query, with its edit distance."""

    song: Song
    distance: int


def title_distance(query: str, title: str, score_cutoff: int | None = None) -> int:
    """Case-insensitive single-character edit distance.

    With ``score_cutoff``, any distance above the cutoff is reported as
    ``score_cutoff + 1``, which lets rapidfuzz stop early.
    """
    return Levenshtein.distance(
        query, title, processor=str.lower, score_cutoff=score_cutoff
    )


def validate_threshold(threshold: int) -> int:
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
        raise InvalidArgumentError(
            f"Search threshold must be a non-negative integer, got {threshold!r}"
        )
    return threshold


def match_songs(
    songs: Iterable[Song],
    query: TitleQuery,
    threshold: int,
    *,
    sort_by_distance: bool = True,
) -> list[SongMatch]:
    """Score ``songs`` against ``query`` and keep those within ``threshold``.

    When sorting, ties keep the order the songs were supplied in.
    """
    threshold = validate_threshold(threshold)
    matches = []
    for song in songs:
        distance = title_distance(query.value, song.title, score_cutoff=threshold)
        if distance <= threshold:
            matches.append(SongMatch(song=song, distance=distance))

    if sort_by_distance:
        matches.sort(key=lambda match: match.distance)
    return matches


def search_songs(
    songs: Iterable[Song],
    query: TitleQuery,
    threshold: int,
    *,
    sort_by_distance: bool = True,
) -> list[Song]:
    """Songs whose titles are within ``threshold`` edits of ``query``."""
    return [
        match.song
        for match in match_songs(
            songs, query, threshold, sort_by_distance=sort_by_distance
        )
    ]
