import codecs
from datetime import date

import pytest

from lyricsheet.exceptions import MissingColumnsError, UnsupportedFormatError, WorkbookError
from lyricsheet.exchange import export_table, import_table, template
from lyricsheet.models import Album, Catalog, GrammarPoint, LyricLine, Song, VocabItem
from lyricsheet.registry import get_reader


def _today() -> date:
    return date(2024, 1, 2)


def _catalog() -> Catalog:
    freely = Song(
        title="Free하게 (Freely)",
        release_date="2015/9/7",
        lyricist="Jae, Sungjin",
        composer="Jae",
        lyrics=[
            LyricLine("오늘은 \"자유\"롭게", "今天自由地"),
            LyricLine("", ""),
            LyricLine("", "只有翻譯"),
            LyricLine("가사만", ""),
        ],
        vocab=[VocabItem("자유", "自由"), VocabItem("오늘", "今天")],
        grammar=[GrammarPoint("-게", "副詞形", "자유롭게")],
    )
    colors = Song(title="Colors", release_date="2015/9/7")
    habits = Song(
        title="버릇이 됐어 (Habits)",
        release_date="2015/9/8",
        lyrics=[LyricLine("버릇", "習慣")],
    )
    return Catalog(
        albums=[
            Album(
                title="The Day",
                release_date="2015/9/7",
                cover_ref="https://example.com/the-day.jpg",
                songs=[freely, colors],
            ),
            Album(title="Daydream", release_date="2016/3/30", songs=[habits]),
        ]
    )


def _shape(catalog: Catalog):
    """Everything but ids."""
    return [
        (
            album.title,
            album.release_date,
            album.cover_ref,
            [
                (
                    song.title,
                    song.release_date,
                    song.lyricist,
                    song.composer,
                    [(line.source_text, line.translation_text) for line in song.lyrics],
                    [(item.word, item.translation) for item in song.vocab],
                    [(point.pattern, point.explanation, point.example) for point in song.grammar],
                )
                for song in album.songs
            ],
        )
        for album in catalog.albums
    ]


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("fmt", ["csv", "tsv", "xlsx"])
def test_export_then_import_round_trips(fmt):
    original = _catalog()
    data = export_table(original, None, fmt)

    restored = Catalog()
    import_table(restored, data, f"export.{fmt}", today=_today)

    assert _shape(restored) == _shape(original)


def test_reimporting_an_export_changes_nothing():
    catalog = _catalog()
    before = _shape(catalog)
    report = import_table(catalog, export_table(catalog), "export.csv", today=_today)
    assert _shape(catalog) == before
    assert report.albums_created == 0
    assert report.songs_created == 0


def test_import_twice_gives_same_state():
    data = export_table(_catalog())
    catalog = Catalog()
    import_table(catalog, data, "export.csv", today=_today)
    once = _shape(catalog)
    import_table(catalog, data, "export.csv", today=_today)
    assert _shape(catalog) == once


def test_import_keeps_ids_of_existing_entries():
    catalog = _catalog()
    album_id = catalog.albums[0].id
    song_id = catalog.albums[0].songs[0].id
    import_table(catalog, export_table(catalog), "export.csv", today=_today)
    assert catalog.albums[0].id == album_id
    assert catalog.albums[0].songs[0].id == song_id


# ---------------------------------------------------------------------------
# Import from raw bytes
# ---------------------------------------------------------------------------


def test_scenario_csv_bytes():
    data = (
        "album,song,kor,zh\n"
        "The Day,Freely,안녕,hi\n"
        "The Day,Freely,,\n"
        "The Day,Congratulations,좋아,good\n"
    ).encode("utf-8")
    catalog = Catalog()
    report = import_table(catalog, data, "songs.csv", today=_today)
    album = catalog.albums[0]
    assert album.title == "The Day"
    assert [s.title for s in album.songs] == ["Freely", "Congratulations"]
    assert [(l.source_text, l.translation_text) for l in album.songs[0].lyrics] == [("안녕", "hi")]
    assert [(l.source_text, l.translation_text) for l in album.songs[1].lyrics] == [("좋아", "good")]
    assert report.lines_imported == 2


def test_utf16_tab_separated_bytes():
    text = "專輯\t歌曲\t單字\t詞義\r\nThe Day\tColors\t색\t顏色\r\n"
    data = codecs.BOM_UTF16_LE + text.encode("utf-16-le")
    catalog = Catalog()
    report = import_table(catalog, data, "vocab.txt", today=_today)
    song = catalog.albums[0].songs[0]
    assert [(v.word, v.translation) for v in song.vocab] == [("색", "顏色")]
    assert report.vocab_imported == 1


def test_unknown_extension_is_read_as_text():
    data = "Album,Song,Lyric\nThe Day,Colors,색\n".encode("utf-8")
    catalog = Catalog()
    import_table(catalog, data, "paste.dat", today=_today)
    assert catalog.albums[0].songs[0].lyrics[0].source_text == "색"


def test_missing_columns_leaves_catalog_alone():
    catalog = _catalog()
    before = _shape(catalog)
    with pytest.raises(MissingColumnsError):
        import_table(catalog, b"Lyric,Translation\na,b\n", "songs.csv")
    assert _shape(catalog) == before


def test_corrupt_workbook():
    with pytest.raises(WorkbookError):
        import_table(Catalog(), b"not a zip", "songs.xlsx")


# ---------------------------------------------------------------------------
# Export encoding
# ---------------------------------------------------------------------------


def test_csv_export_has_bom_and_quotes_every_cell():
    data = export_table(_catalog(), ["albumTitle", "songTitle"], "csv", album="Daydream")
    assert data.startswith(codecs.BOM_UTF8)
    text = data.decode("utf-8-sig")
    assert text == '"Album","Song"\r\n"Daydream","버릇이 됐어 (Habits)"\r\n'


def test_csv_export_without_bom():
    data = export_table(_catalog(), ["albumTitle", "songTitle"], "csv", bom=False)
    assert not data.startswith(codecs.BOM_UTF8)


def test_csv_export_escapes_quotes():
    data = export_table(_catalog(), ["sourceLyric"], "csv", song="Free하게 (Freely)")
    assert '"오늘은 ""자유""롭게"' in data.decode("utf-8-sig")


def test_tsv_export_is_tab_separated():
    data = export_table(_catalog(), ["albumTitle", "songTitle"], "tsv", album="Daydream")
    assert data.decode("utf-8-sig").splitlines()[0] == "Album\tSong"


def test_unsupported_format():
    with pytest.raises(UnsupportedFormatError):
        export_table(_catalog(), None, "ods")


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def test_csv_template_is_header_only():
    data = template(["sourceLyric", "translationLyric"])
    assert data.decode("utf-8-sig") == (
        '"Album","Song","Lyric (optional)","Translation (optional)"\r\n'
    )


@pytest.mark.parametrize("fmt", ["csv", "tsv", "xlsx"])
def test_template_can_be_imported(fmt):
    data = template(None, fmt)
    grid = get_reader(f"template.{fmt}").read(data, f"template.{fmt}")
    assert len(grid) == 1
    report = import_table(Catalog(), data, f"template.{fmt}")
    assert report.rows_skipped == 0
    assert report.lines_imported == 0


# ---------------------------------------------------------------------------
# Workbook text
# ---------------------------------------------------------------------------


def _single_song(lyrics, vocab=()) -> Catalog:
    song = Song(title="Shoot Me", release_date="2018/6/26", lyrics=lyrics, vocab=list(vocab))
    return Catalog(albums=[Album(title="Shoot Me: Youth Part 1", release_date="2018/6/26", songs=[song])])


def test_xlsx_keeps_text_starting_with_equals():
    original = _single_song(
        [LyricLine("=) smile", "x"), LyricLine("== chorus ==", "")],
        [VocabItem("=", "equals")],
    )
    restored = Catalog()
    import_table(restored, export_table(original, None, "xlsx"), "export.xlsx", today=_today)
    assert _shape(restored) == _shape(original)


def test_xlsx_drops_control_characters():
    original = _single_song([LyricLine("line\x0bbreak", "x")])
    data = export_table(original, None, "xlsx")

    restored = Catalog()
    import_table(restored, data, "export.xlsx", today=_today)
    lines = restored.albums[0].songs[0].lyrics
    assert lines[0].source_text == "linebreak"


def test_csv_keeps_control_characters():
    original = _single_song([LyricLine("line\x0bbreak", "")])
    text = export_table(original, ["sourceLyric"], "csv").decode("utf-8-sig")
    assert "line\x0bbreak" in text
