from lyricsheet.models import LyricLine, Song, VocabItem
from lyricsheet.vocab import dedupe_vocab, extract_vocab, extract_words, hangul_words, strip_particle

# ---------------------------------------------------------------------------
# Word extraction
# ---------------------------------------------------------------------------


def test_hangul_words_skip_other_scripts_and_asides():
    assert hangul_words("노래를 좋아해 (yeah 예) oh 너") == ["노래를", "좋아해", "너"]


def test_hangul_words_empty():
    assert hangul_words("") == []
    assert hangul_words("la la la") == []


def test_strip_particle():
    assert strip_particle("노래를") == "노래"
    assert strip_particle("사랑이") == "사랑"
    assert strip_particle("학교에서") == "학교"


def test_strip_particle_keeps_short_words():
    assert strip_particle("너를") == "너를"
    assert strip_particle("집에") == "집에"


def test_strip_particle_no_particle():
    assert strip_particle("좋아해") == "좋아해"


def test_extract_words_unique_in_order():
    assert extract_words("사랑이 불러 사랑을\n사랑") == ["사랑", "불러"]


# ---------------------------------------------------------------------------
# dedupe_vocab / extract_vocab
# ---------------------------------------------------------------------------


def test_dedupe_keeps_first_item_per_word():
    items = [VocabItem("별", "星"), VocabItem(" 별 ", "star"), VocabItem("달", "月")]
    result = dedupe_vocab(items)
    assert [(v.word, v.translation) for v in result] == [("별", "星"), ("달", "月")]


def test_extract_vocab_keeps_existing_items_first():
    song = Song(
        title="Congratulations",
        lyrics=[LyricLine("노래를 불러", "唱歌"), LyricLine("노래가 좋아", "")],
        vocab=[VocabItem("노래", "歌")],
    )
    added = extract_vocab(song)
    assert added == 2
    assert [(v.word, v.translation) for v in song.vocab] == [
        ("노래", "歌"),
        ("불러", ""),
        ("좋아", ""),
    ]


def test_extract_vocab_twice_adds_nothing():
    song = Song(title="Freely", lyrics=[LyricLine("자유롭게", "")])
    assert extract_vocab(song) == 1
    assert extract_vocab(song) == 0
    assert len(song.vocab) == 1


def test_extract_vocab_ignores_translations():
    song = Song(title="Habits", lyrics=[LyricLine("", "습관 in translation only")])
    assert extract_vocab(song) == 0
    assert song.vocab == []
