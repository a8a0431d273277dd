"""Vocabulary helpers: pull Korean words out of lyrics and merge word lists.

Extraction is deliberately shallow.  Parenthesised asides are dropped, the
text is split on anything that is not Hangul, and one common particle is
stripped from the end of each word:

    "노래를 좋아해 (yeah)"  ->  ["노래", "좋아해"]

There is no dictionary lookup; new items get an empty translation.
"""

import logging
import re
from typing import Iterable

from .models import Song, VocabItem

logger = logging.getLogger(__name__)

_HANGUL_RUN_RE = re.compile(r"[\u1100-\u11FF\u3130-\u318F\uAC00-\uD7AF]+")
_ASIDE_RE = re.compile(r"\([^)]*\)")

# Checked in order; the first match that leaves at least two syllables wins.
PARTICLES = (
    "은", "는", "이", "가", "을", "를", "에", "에서", "에게", "한테", "께서", "에게서",
    "으로", "로", "와", "과", "도", "만", "까지", "부터", "처럼", "보다", "밖에", "마다", "씩",
)


def hangul_words(text: str) -> list[str]:
    """Every Hangul word of *text*, in order, duplicates included."""
    return _HANGUL_RUN_RE.findall(_ASIDE_RE.sub(" ", text or ""))


def strip_particle(word: str) -> str:
    for particle in PARTICLES:
        if word.endswith(particle) and len(word) > len(particle) + 1:
            return word[: -len(particle)]
    return word


def extract_words(text: str) -> list[str]:
    """Unique particle-stripped Hangul words of *text*, first occurrence first."""
    return list(dict.fromkeys(strip_particle(word) for word in hangul_words(text)))


def dedupe_vocab(items: Iterable[VocabItem]) -> list[VocabItem]:
    """Keep the first item for each word (compared after stripping)."""
    seen: dict[str, VocabItem] = {}
    for item in items:
        seen.setdefault(item.word.strip(), item)
    return list(seen.values())


def extract_vocab(song: Song) -> int:
    """Add the words of *song*'s lyrics to its vocabulary.

    Existing items come first and win over extracted words; duplicates among
    them are merged too.  Returns the number of items added.
    """
    words = extract_words("\n".join(line.source_text for line in song.lyrics))
    new_items = [VocabItem(word=w) for w in words]
    song.vocab = dedupe_vocab([*song.vocab, *new_items])
    new_ids = {item.id for item in new_items}
    added = sum(1 for item in song.vocab if item.id in new_ids)
    logger.debug("Extracted %d new word(s) for %r", added, song.title)
    return added
