"""Line-by-line alignment of a lyric with its translation.

Lyrics and translations are typed into separate boxes (or separate cells) and
rarely have the same number of lines, so the two blocks are split
independently and zipped, padding the shorter side with empty text.
"""

import re
from itertools import zip_longest

from .models import LyricLine

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(block: str) -> list[str]:
    """Split *block* on any line break and strip every line."""
    if not block:
        return []
    return [line.strip() for line in _LINE_BREAK_RE.split(block)]


def align_lyrics(source: str, translation: str) -> list[LyricLine]:
    """Pair the lines of *source* and *translation* in order.

    The result has as many lines as the longer block.  Only trailing pairs in
    which both sides are empty are dropped; a translation without a lyric (or
    the reverse) is kept.

    Example::

        align_lyrics("a\\nb", "1")  ->  [("a", "1"), ("b", "")]
    """
    pairs = zip_longest(split_lines(source), split_lines(translation), fillvalue="")
    lines = [LyricLine(source_text=s, translation_text=t) for s, t in pairs]
    return trim_trailing_blank(lines)


def trim_trailing_blank(lines: list[LyricLine]) -> list[LyricLine]:
    """Return *lines* without its trailing fully-blank pairs."""
    end = len(lines)
    while end and lines[end - 1].is_blank():
        end -= 1
    return lines[:end]
