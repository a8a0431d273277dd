"""Full-catalog text search over titles, lyrics, vocabulary and grammar."""

from dataclasses import dataclass
from typing import Iterator

from .models import Album, Catalog, Song

MAX_RESULTS = 200

# Where a hit was found, in the order hits are reported for one song.
TITLE = "title"
LYRIC = "lyric"
VOCAB = "vocab"
GRAMMAR = "grammar"


@dataclass
class SearchHit:
    album: Album
    song: Song
    where: str
    snippet: str


def search_catalog(catalog: Catalog, query: str, limit: int = MAX_RESULTS) -> list[SearchHit]:
    """Return up to *limit* hits for *query*, matched case-insensitively.

    Songs are visited in catalog order; within a song the title comes first,
    then every matching lyric line, vocabulary item and grammar point.  A
    blank query finds nothing.
    """
    needle = query.strip().casefold()
    if not needle:
        return []
    hits = []
    for album, song in catalog.iter_songs():
        for hit in _song_hits(album, song, needle):
            hits.append(hit)
            if len(hits) >= limit:
                return hits
    return hits


def _contains(needle: str, *texts: str) -> bool:
    return any(needle in (text or "").casefold() for text in texts)


def _song_hits(album: Album, song: Song, needle: str) -> Iterator[SearchHit]:
    if _contains(needle, song.title):
        yield SearchHit(album, song, TITLE, song.title)
    for line in song.lyrics:
        if _contains(needle, line.source_text, line.translation_text):
            snippet = f"{line.source_text} / {line.translation_text}"[:80]
            yield SearchHit(album, song, LYRIC, snippet)
    for item in song.vocab:
        if _contains(needle, item.word, item.translation):
            yield SearchHit(album, song, VOCAB, f"{item.word} - {item.translation}")
    for point in song.grammar:
        if _contains(needle, point.pattern, point.explanation):
            yield SearchHit(album, song, GRAMMAR, f"{point.pattern} - {point.explanation[:60]}")
