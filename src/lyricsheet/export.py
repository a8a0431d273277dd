"""Flatten a catalog into one table.

Every song fans out into one row per lyric line, then one per vocabulary
item, then one per grammar point, with the album/song metadata repeated on
each row.  A song with none of the three still gets a single metadata row so
it is never missing from the export.

Usage::

    from lyricsheet.export import TableExporter
    grid = TableExporter(["albumTitle", "songTitle", "sourceLyric"]).render(catalog)
"""

from typing import Sequence

from .fields import (
    ALBUM_RELEASE_DATE,
    ALBUM_TITLE,
    COMPOSER,
    COVER_REF,
    FIELD_LABELS,
    GRAMMAR_EXAMPLE,
    GRAMMAR_EXPLANATION,
    GRAMMAR_PATTERN,
    LYRICIST,
    RELEASE_DATE,
    REQUIRED_FIELDS,
    SONG_TITLE,
    SOURCE_LYRIC,
    TRANSLATION_LYRIC,
    VOCAB_TRANSLATION,
    VOCAB_WORD,
    select_fields,
)
from .models import Album, Catalog, Song, title_key

OPTIONAL_SUFFIX = " (optional)"


class TableExporter:
    """Render a :class:`~lyricsheet.models.Catalog` as a rectangular grid.

    *fields* is the ordered list of field ids to emit.  The album and song
    title fields are always present; they are prepended when not requested.
    Raises UnknownFieldError for ids that do not exist.
    """

    def __init__(self, fields: Sequence[str] | None = None):
        self.fields = select_fields(fields)

    def header(self) -> list[str]:
        return [FIELD_LABELS[f] for f in self.fields]

    def template_header(self) -> list[str]:
        """Header row for a blank template, optional columns marked as such."""
        return [
            FIELD_LABELS[f] if f in REQUIRED_FIELDS else FIELD_LABELS[f] + OPTIONAL_SUFFIX
            for f in self.fields
        ]

    def render(
        self, catalog: Catalog, album: str | None = None, song: str | None = None
    ) -> list[list[str]]:
        """Return the header row followed by one row per fanned-out item.

        *album* and *song* optionally restrict the export to matching titles
        (case-insensitive).
        """
        rows = [self.header()]
        for current_album, current_song in catalog.iter_songs():
            if album is not None and title_key(current_album.title) != title_key(album):
                continue
            if song is not None and title_key(current_song.title) != title_key(song):
                continue
            rows.extend(self._song_rows(current_album, current_song))
        return rows

    def _song_rows(self, album: Album, song: Song) -> list[list[str]]:
        meta = {
            ALBUM_TITLE: album.title,
            SONG_TITLE: song.title,
            ALBUM_RELEASE_DATE: album.release_date,
            RELEASE_DATE: song.release_date,
            LYRICIST: song.lyricist,
            COMPOSER: song.composer,
            COVER_REF: album.cover_ref,
        }
        records = [
            {**meta, SOURCE_LYRIC: line.source_text, TRANSLATION_LYRIC: line.translation_text}
            for line in song.lyrics
        ]
        records += [
            {**meta, VOCAB_WORD: item.word, VOCAB_TRANSLATION: item.translation}
            for item in song.vocab
        ]
        records += [
            {
                **meta,
                GRAMMAR_PATTERN: point.pattern,
                GRAMMAR_EXPLANATION: point.explanation,
                GRAMMAR_EXAMPLE: point.example,
            }
            for point in song.grammar
        ]
        if not records:
            records = [meta]
        return [[record.get(f, "") for f in self.fields] for record in records]
