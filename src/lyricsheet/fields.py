"""Canonical field ids and header resolution.

Every column a table can carry maps to one canonical field id.  User files
name their columns freely, in English, Chinese or Korean, with or without
"(optional)" markers and format hints, so headers are matched through an
alias table rather than by position.

Resolution policy
-----------------

Headers and aliases are compared after :func:`normalize_header`.  Matching
runs in three tiers:

+---------+-------------------------------------+---------------------------+
| Tier    | Rule                                | Example header → field    |
+=========+=====================================+===========================+
| exact   | header == alias                     | ``Album`` → albumTitle    |
+---------+-------------------------------------+---------------------------+
| prefix  | header starts with alias            | ``Release Date            |
|         |                                     | (YYYY-MM-DD)`` →          |
|         |                                     | releaseDate               |
+---------+-------------------------------------+---------------------------+
| substr  | alias occurs inside header          | ``My Korean Lyrics`` →    |
|         |                                     | sourceLyric               |
+---------+-------------------------------------+---------------------------+

A tier is tried for every field before the next tier starts.  Within a tier
fields are visited in :data:`FIELD_IDS` order, each field's aliases in list
order and headers left to right.  The first hit claims its column, so one
column never feeds two fields and an exact match always beats a looser one.
"""

import re
from datetime import date, datetime
from typing import Any, Mapping, Sequence

from .exceptions import UnknownFieldError

ALBUM_TITLE = "albumTitle"
SONG_TITLE = "songTitle"
ALBUM_RELEASE_DATE = "albumReleaseDate"
RELEASE_DATE = "releaseDate"
LYRICIST = "lyricist"
COMPOSER = "composer"
COVER_REF = "coverRef"
SOURCE_LYRIC = "sourceLyric"
TRANSLATION_LYRIC = "translationLyric"
VOCAB_WORD = "vocabWord"
VOCAB_TRANSLATION = "vocabTranslation"
GRAMMAR_PATTERN = "grammarPattern"
GRAMMAR_EXPLANATION = "grammarExplanation"
GRAMMAR_EXAMPLE = "grammarExample"

# Canonical order: export default column order and header resolution order.
# lyricist precedes sourceLyric so "Lyricist ..." is never read as a lyric.
FIELD_IDS: tuple[str, ...] = (
    ALBUM_TITLE,
    SONG_TITLE,
    ALBUM_RELEASE_DATE,
    RELEASE_DATE,
    LYRICIST,
    COMPOSER,
    COVER_REF,
    SOURCE_LYRIC,
    TRANSLATION_LYRIC,
    VOCAB_WORD,
    VOCAB_TRANSLATION,
    GRAMMAR_PATTERN,
    GRAMMAR_EXPLANATION,
    GRAMMAR_EXAMPLE,
)

REQUIRED_FIELDS: tuple[str, ...] = (ALBUM_TITLE, SONG_TITLE)
LYRIC_FIELDS: tuple[str, ...] = (SOURCE_LYRIC, TRANSLATION_LYRIC)

FIELD_LABELS: dict[str, str] = {
    ALBUM_TITLE: "Album",
    SONG_TITLE: "Song",
    ALBUM_RELEASE_DATE: "Album Release Date",
    RELEASE_DATE: "Release Date",
    LYRICIST: "Lyricist",
    COMPOSER: "Composer",
    COVER_REF: "Cover",
    SOURCE_LYRIC: "Lyric",
    TRANSLATION_LYRIC: "Translation",
    VOCAB_WORD: "Word",
    VOCAB_TRANSLATION: "Word Translation",
    GRAMMAR_PATTERN: "Grammar Pattern",
    GRAMMAR_EXPLANATION: "Grammar Explanation",
    GRAMMAR_EXAMPLE: "Grammar Example",
}

# Written in human form; normalized once at import time.  Every label above
# must normalize to an exact alias of its own field.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    ALBUM_TITLE: ("album title", "album", "album name", "專輯", "專輯名稱", "专辑", "专辑名称", "앨범", "앨범명"),
    SONG_TITLE: ("song title", "song", "song name", "title", "track", "歌曲", "歌名", "曲名", "곡", "곡명", "노래", "노래제목"),
    ALBUM_RELEASE_DATE: ("album release date", "album date", "專輯發行日", "專輯發行日期", "专辑发行日", "专辑发行日期", "앨범발매일"),
    RELEASE_DATE: ("release date", "song release date", "date", "released", "發行日", "發行日期", "发行日", "发行日期", "발매일"),
    LYRICIST: ("lyricist", "lyrics by", "作詞", "作词", "작사"),
    COMPOSER: ("composer", "composed by", "music by", "作曲", "작곡"),
    COVER_REF: ("cover", "cover url", "album cover", "cover image", "封面", "커버", "앨범커버"),
    SOURCE_LYRIC: ("lyric", "source lyric", "lyrics", "kor", "korean", "original", "韓文", "韓文歌詞", "韩文", "韩文歌词", "歌詞", "歌词", "原文", "가사", "원문"),
    TRANSLATION_LYRIC: ("translation", "translation lyric", "zh", "chinese", "translated", "中文", "中文翻譯", "中文翻译", "翻譯", "翻译", "歌詞翻譯", "歌词翻译", "譯文", "번역"),
    VOCAB_WORD: ("word", "vocab word", "vocab", "vocabulary", "單字", "单词", "詞彙", "词汇", "生詞", "단어"),
    VOCAB_TRANSLATION: ("word translation", "vocab translation", "meaning", "definition", "詞義", "词义", "單字翻譯", "单词翻译", "意思", "뜻"),
    GRAMMAR_PATTERN: ("grammar pattern", "grammar", "pattern", "文法", "語法", "语法", "句型", "문법"),
    GRAMMAR_EXPLANATION: ("grammar explanation", "explanation", "grammar note", "說明", "说明", "解釋", "解释", "설명"),
    GRAMMAR_EXAMPLE: ("grammar example", "example", "例句", "예문"),
}

# Removed before matching so "(optional)" or "必填" never block a match.
_MARKERS = ("optional", "required", "選填", "选填", "可選", "可选", "必填", "선택", "필수")

_STRIP_RE = re.compile(r"[\s_\-()（）\[\]【】*:：]+")


def normalize_header(raw: Any) -> str:
    """Reduce a raw header cell to its matching form.

    Strips a leading BOM, case-folds, removes optional/required markers and
    drops whitespace, underscores, hyphens, brackets, asterisks and colons.

    >>> normalize_header("Album Title (optional)")
    'albumtitle'
    """
    text = "" if raw is None else str(raw)
    text = text.lstrip("\ufeff").casefold()
    for marker in _MARKERS:
        text = text.replace(marker, "")
    return _STRIP_RE.sub("", text)


_NORMALIZED_ALIASES: dict[str, tuple[str, ...]] = {
    field_id: tuple(dict.fromkeys(normalize_header(a) for a in aliases))
    for field_id, aliases in FIELD_ALIASES.items()
}


def _exact(alias: str, header: str) -> bool:
    return header == alias


def _prefix(alias: str, header: str) -> bool:
    return header.startswith(alias)


def _substring(alias: str, header: str) -> bool:
    return alias in header


_TIERS = (_exact, _prefix, _substring)


def resolve_columns(header_row: Sequence[Any]) -> dict[str, int]:
    """Map canonical field ids to column indexes for one header row.

    Fields with no matching header are absent from the result.
    """
    headers = [normalize_header(cell) for cell in header_row]
    resolved: dict[str, int] = {}
    claimed: set[int] = set()

    for matches in _TIERS:
        for field_id in FIELD_IDS:
            if field_id in resolved:
                continue
            index = _first_match(_NORMALIZED_ALIASES[field_id], headers, claimed, matches)
            if index is not None:
                resolved[field_id] = index
                claimed.add(index)
    return resolved


def _first_match(aliases, headers, claimed, matches) -> int | None:
    for alias in aliases:
        for index, header in enumerate(headers):
            if index in claimed or not header:
                continue
            if matches(alias, header):
                return index
    return None


def missing_required(columns: Mapping[str, int]) -> list[str]:
    return [f for f in REQUIRED_FIELDS if f not in columns]


# ---------------------------------------------------------------------------
# Field lists for export and templates
# ---------------------------------------------------------------------------


def lookup_field(name: str) -> str:
    """Return the canonical id for *name*, accepting any letter case.

    Raises UnknownFieldError when *name* is not a field id.
    """
    if name in FIELD_LABELS:
        return name
    folded = name.strip().casefold()
    for field_id in FIELD_IDS:
        if field_id.casefold() == folded:
            return field_id
    raise UnknownFieldError(name)


def select_fields(requested: Sequence[str] | None) -> list[str]:
    """Normalize a requested field list for export.

    ``None`` or an empty list selects every field.  Duplicates are dropped
    and the required title fields are prepended when missing.
    """
    if not requested:
        return list(FIELD_IDS)
    chosen = list(dict.fromkeys(lookup_field(name) for name in requested))
    return [f for f in REQUIRED_FIELDS if f not in chosen] + chosen


def cell_text(value: Any) -> str:
    """Render any grid cell as trimmed text.

    Whole floats lose their ``.0`` so a numeric song title "1" stays "1".
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()
