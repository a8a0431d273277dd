import uuid
from dataclasses import dataclass, field


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


def title_key(title: str) -> str:
    """Matching key for album and song titles: trimmed and case-folded."""
    return title.strip().casefold()


@dataclass
class LyricLine:
    """One line of a song: the original lyric and its translation.

    Either side may be empty, e.g. a translation entered before the lyric.
    """

    source_text: str = ""
    translation_text: str = ""
    id: str = field(default_factory=new_id)

    def is_blank(self) -> bool:
        return not self.source_text and not self.translation_text


@dataclass
class VocabItem:
    word: str
    translation: str = ""
    id: str = field(default_factory=new_id)


@dataclass
class GrammarPoint:
    pattern: str
    explanation: str = ""
    example: str = ""
    id: str = field(default_factory=new_id)


@dataclass
class Song:
    """A song with its aligned lyrics and study notes."""

    title: str
    release_date: str = ""
    lyricist: str = ""
    composer: str = ""
    lyrics: list[LyricLine] = field(default_factory=list)
    vocab: list[VocabItem] = field(default_factory=list)
    grammar: list[GrammarPoint] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def is_empty(self) -> bool:
        """True when the song has no lyric lines, vocabulary or grammar."""
        return not (self.lyrics or self.vocab or self.grammar)


@dataclass
class Album:
    title: str
    release_date: str = ""
    cover_ref: str = ""  # URL or embedded image, never interpreted
    songs: list[Song] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def find_song(self, title: str) -> Song | None:
        key = title_key(title)
        for song in self.songs:
            if title_key(song.title) == key:
                return song
        return None

    def add_song(self, song: Song) -> Song:
        self.songs.append(song)
        return song

    def remove_song(self, song_id: str) -> bool:
        before = len(self.songs)
        self.songs = [s for s in self.songs if s.id != song_id]
        return len(self.songs) != before


@dataclass
class Catalog:
    """In-memory, ordered collection of albums.

    Album order is the user's display order; imports only ever append.
    """

    albums: list[Album] = field(default_factory=list)

    def find_album(self, title: str) -> Album | None:
        key = title_key(title)
        for album in self.albums:
            if title_key(album.title) == key:
                return album
        return None

    def album_by_id(self, album_id: str) -> Album | None:
        return next((a for a in self.albums if a.id == album_id), None)

    def add_album(self, album: Album) -> Album:
        self.albums.append(album)
        return album

    def remove_album(self, album_id: str) -> bool:
        """Drop an album together with everything it contains."""
        before = len(self.albums)
        self.albums = [a for a in self.albums if a.id != album_id]
        return len(self.albums) != before

    def iter_songs(self):
        """Yield ``(album, song)`` pairs in catalog order."""
        for album in self.albums:
            for song in album.songs:
                yield album, song
