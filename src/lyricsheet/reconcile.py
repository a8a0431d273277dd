"""Merge imported table rows into a catalog.

Each row names an album and a song by title.  The album and song are looked
up case-insensitively and created when missing, metadata cells overwrite
existing values only when non-empty, and the row's payload is collected into
per-song buffers:

+----------------------------------+----------------------------------------+
| Non-empty cells                  | Buffered as                            |
+==================================+========================================+
| ``sourceLyric`` /                | lyric line(s); multi-line cells are    |
| ``translationLyric``             | aligned line by line                   |
+----------------------------------+----------------------------------------+
| ``grammarPattern``               | grammar point (wins over vocabulary)   |
+----------------------------------+----------------------------------------+
| ``vocabWord`` /                  | vocabulary item                        |
| ``vocabTranslation``             |                                        |
+----------------------------------+----------------------------------------+

A row may carry a lyric line *and* one grammar or vocabulary entry.  Once
every row is read, each buffer replaces the matching collection of its song;
collections no row touched are left alone.

Usage::

    report = Reconciler(catalog).import_grid(grid)
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Mapping, Sequence

from .align import align_lyrics, trim_trailing_blank
from .dates import format_ymd, normalize_date
from .exceptions import MissingColumnsError
from .fields import (
    ALBUM_RELEASE_DATE,
    ALBUM_TITLE,
    COMPOSER,
    COVER_REF,
    GRAMMAR_EXAMPLE,
    GRAMMAR_EXPLANATION,
    GRAMMAR_PATTERN,
    LYRIC_FIELDS,
    LYRICIST,
    RELEASE_DATE,
    REQUIRED_FIELDS,
    SONG_TITLE,
    SOURCE_LYRIC,
    TRANSLATION_LYRIC,
    VOCAB_TRANSLATION,
    VOCAB_WORD,
    cell_text,
    missing_required,
    resolve_columns,
)
from .models import Album, Catalog, GrammarPoint, LyricLine, Song, VocabItem

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    """What an import did, for a single end-of-import summary."""

    lines_imported: int = 0
    vocab_imported: int = 0
    grammar_imported: int = 0
    rows_skipped: int = 0
    albums_created: int = 0
    songs_created: int = 0
    metadata_rows: int = 0  # rows that only updated album/song metadata

    def summary(self) -> str:
        return (
            f"Imported {self.lines_imported} lyric line(s), "
            f"{self.vocab_imported} vocabulary item(s), "
            f"{self.grammar_imported} grammar point(s); "
            f"{self.albums_created} new album(s), {self.songs_created} new song(s); "
            f"{self.rows_skipped} row(s) skipped"
        )


@dataclass
class _Pending:
    """Rows collected for one song during a single import."""

    song: Song
    lyrics: list[LyricLine] = field(default_factory=list)
    vocab: list[VocabItem] = field(default_factory=list)
    grammar: list[GrammarPoint] = field(default_factory=list)


class _Row:
    """Field-addressed view of one ragged grid row."""

    def __init__(self, cells: Sequence[Any], columns: Mapping[str, int]):
        self._cells = cells
        self._columns = columns

    def has(self, field_id: str) -> bool:
        return field_id in self._columns

    def raw(self, field_id: str) -> Any:
        index = self._columns.get(field_id)
        if index is None or index >= len(self._cells):
            return ""
        return self._cells[index]

    def text(self, field_id: str) -> str:
        return cell_text(self.raw(field_id))


class Reconciler:
    """Apply table rows to a :class:`~lyricsheet.models.Catalog` in place.

    *today* supplies the release date given to albums first seen in an
    import; it defaults to :meth:`datetime.date.today`.
    """

    def __init__(self, catalog: Catalog, today: Callable[[], date] | None = None):
        self.catalog = catalog
        self._today = today or date.today

    def import_grid(self, grid: Sequence[Sequence[Any]]) -> ImportReport:
        """Resolve the header row of *grid* and apply the rows below it.

        Raises MissingColumnsError, before touching the catalog, when the
        album and song title columns cannot both be found.
        """
        if not grid:
            raise MissingColumnsError(list(REQUIRED_FIELDS), [])
        header = [cell_text(cell) for cell in grid[0]]
        columns = resolve_columns(header)
        logger.debug("Resolved columns: %s", columns)
        missing = missing_required(columns)
        if missing:
            raise MissingColumnsError(missing, header)
        return self.apply_rows(grid[1:], columns)

    def apply_rows(
        self, rows: Sequence[Sequence[Any]], columns: Mapping[str, int]
    ) -> ImportReport:
        """Apply data *rows* using an already resolved column map."""
        missing = missing_required(columns)
        if missing:
            raise MissingColumnsError(missing, [])

        report = ImportReport()
        # keyed by song id; lives only for this pass
        pending: dict[str, _Pending] = {}

        for number, cells in enumerate(rows, start=2):
            self._apply_row(number, _Row(cells, columns), pending, report)

        self._commit(pending)
        logger.info(report.summary())
        return report

    # -----------------------------------------------------------------------
    # Per-row processing
    # -----------------------------------------------------------------------

    def _apply_row(
        self, number: int, row: _Row, pending: dict[str, _Pending], report: ImportReport
    ) -> None:
        album_title = row.text(ALBUM_TITLE)
        song_title = row.text(SONG_TITLE)
        if not album_title or not song_title:
            logger.debug("Row %d: no album or song title, skipped", number)
            report.rows_skipped += 1
            return

        album = self._find_or_create_album(album_title, report)
        touched = _apply_album_metadata(album, row)
        song = self._find_or_create_song(album, song_title, report)
        touched = _apply_song_metadata(song, row) or touched

        buffer = pending.setdefault(song.id, _Pending(song))
        has_payload = False

        if any(row.has(f) for f in LYRIC_FIELDS):
            lines = align_lyrics(row.text(SOURCE_LYRIC), row.text(TRANSLATION_LYRIC))
            if lines:
                buffer.lyrics.extend(lines)
                report.lines_imported += len(lines)
                has_payload = True

        pattern = row.text(GRAMMAR_PATTERN)
        word = row.text(VOCAB_WORD)
        word_translation = row.text(VOCAB_TRANSLATION)
        if pattern:
            buffer.grammar.append(
                GrammarPoint(
                    pattern=pattern,
                    explanation=row.text(GRAMMAR_EXPLANATION),
                    example=row.text(GRAMMAR_EXAMPLE),
                )
            )
            report.grammar_imported += 1
            has_payload = True
        elif word or word_translation:
            buffer.vocab.append(VocabItem(word=word, translation=word_translation))
            report.vocab_imported += 1
            has_payload = True

        if has_payload:
            return

        # A blank lyric row between lyric rows is a stanza break; trailing
        # ones are trimmed at commit.
        if buffer.lyrics and any(row.has(f) for f in LYRIC_FIELDS):
            buffer.lyrics.append(LyricLine())

        if touched:
            report.metadata_rows += 1
        else:
            logger.debug("Row %d: nothing to import for %r / %r", number, album_title, song_title)
            report.rows_skipped += 1

    def _find_or_create_album(self, title: str, report: ImportReport) -> Album:
        album = self.catalog.find_album(title)
        if album is None:
            album = self.catalog.add_album(
                Album(title=title, release_date=format_ymd(self._today()))
            )
            report.albums_created += 1
            logger.debug("Created album %r", title)
        return album

    def _find_or_create_song(self, album: Album, title: str, report: ImportReport) -> Song:
        song = album.find_song(title)
        if song is None:
            song = album.add_song(Song(title=title, release_date=album.release_date))
            report.songs_created += 1
            logger.debug("Created song %r in album %r", title, album.title)
        return song

    # -----------------------------------------------------------------------
    # Commit
    # -----------------------------------------------------------------------

    def _commit(self, pending: dict[str, _Pending]) -> None:
        for buffer in pending.values():
            song = buffer.song
            if buffer.lyrics:
                song.lyrics = trim_trailing_blank(buffer.lyrics)
            if buffer.vocab:
                song.vocab = buffer.vocab
            if buffer.grammar:
                song.grammar = buffer.grammar


def _apply_album_metadata(album: Album, row: _Row) -> bool:
    touched = False
    release_date = normalize_date(row.raw(ALBUM_RELEASE_DATE))
    if release_date:
        album.release_date = release_date
        touched = True
    cover = row.text(COVER_REF)
    if cover:
        album.cover_ref = cover
        touched = True
    return touched


def _apply_song_metadata(song: Song, row: _Row) -> bool:
    touched = False
    release_date = normalize_date(row.raw(RELEASE_DATE))
    if release_date:
        song.release_date = release_date
        touched = True
    lyricist = row.text(LYRICIST)
    if lyricist:
        song.lyricist = lyricist
        touched = True
    composer = row.text(COMPOSER)
    if composer:
        song.composer = composer
        touched = True
    return touched


def reconcile_table(
    catalog: Catalog, grid: Sequence[Sequence[Any]], today: Callable[[], date] | None = None
) -> ImportReport:
    """Convenience wrapper: ``Reconciler(catalog, today).import_grid(grid)``."""
    return Reconciler(catalog, today=today).import_grid(grid)
