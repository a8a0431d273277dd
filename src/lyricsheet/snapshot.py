"""JSON backup and restore of a whole catalog.

The command-line tool keeps its catalog between runs in one of these files.
Keys are the dataclass attribute names; ids are preserved.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .exceptions import SnapshotError
from .models import Album, Catalog, GrammarPoint, LyricLine, Song, VocabItem

SNAPSHOT_VERSION = 1


def catalog_to_dict(catalog: Catalog) -> dict[str, Any]:
    return {"version": SNAPSHOT_VERSION, **asdict(catalog)}


def catalog_from_dict(data: dict[str, Any]) -> Catalog:
    """Rebuild a catalog from :func:`catalog_to_dict` output.

    Raises KeyError or TypeError on malformed input.
    """
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return Catalog(albums=[_album(a) for a in data.get("albums", [])])


def _album(data: dict[str, Any]) -> Album:
    songs = [_song(s) for s in data.get("songs", [])]
    return Album(**{**data, "songs": songs})


def _song(data: dict[str, Any]) -> Song:
    return Song(
        **{
            **data,
            "lyrics": [LyricLine(**line) for line in data.get("lyrics", [])],
            "vocab": [VocabItem(**item) for item in data.get("vocab", [])],
            "grammar": [GrammarPoint(**point) for point in data.get("grammar", [])],
        }
    )


def load_catalog(path: str | Path) -> Catalog:
    """Load a catalog from *path*; a missing file gives an empty catalog."""
    path = Path(path)
    if not path.exists():
        return Catalog()
    try:
        return catalog_from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        raise SnapshotError(str(path), str(exc)) from exc


def save_catalog(catalog: Catalog, path: str | Path) -> None:
    text = json.dumps(catalog_to_dict(catalog), ensure_ascii=False, indent=2)
    Path(path).write_text(text + "\n", encoding="utf-8")
