from lyricsheet.align import align_lyrics, split_lines, trim_trailing_blank
from lyricsheet.models import LyricLine


def _pairs(lines):
    return [(line.source_text, line.translation_text) for line in lines]


def test_pads_shorter_translation():
    assert _pairs(align_lyrics("a\nb", "1")) == [("a", "1"), ("b", "")]


def test_pads_shorter_source():
    assert _pairs(align_lyrics("a", "1\n2")) == [("a", "1"), ("", "2")]


def test_empty_blocks_give_no_lines():
    assert align_lyrics("", "") == []


def test_trailing_blank_pairs_are_trimmed():
    assert _pairs(align_lyrics("a\n\n", "x\n\n")) == [("a", "x")]


def test_inner_blank_pair_is_kept():
    assert _pairs(align_lyrics("a\n\nb", "x\n\ny")) == [("a", "x"), ("", ""), ("b", "y")]


def test_half_blank_trailing_pair_is_kept():
    assert _pairs(align_lyrics("a\n", "x\ny")) == [("a", "x"), ("", "y")]


def test_lines_are_stripped():
    assert _pairs(align_lyrics("  안녕  \r\n", " hi ")) == [("안녕", "hi")]


def test_mixed_line_breaks():
    assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]


def test_each_line_gets_its_own_id():
    lines = align_lyrics("a\nb", "")
    assert lines[0].id != lines[1].id


def test_trim_trailing_blank_on_all_blank():
    assert trim_trailing_blank([LyricLine(), LyricLine()]) == []
