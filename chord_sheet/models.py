"""Data models for parsed song sheets.

This module defines the document model produced by the parser: a song with
metadata, labelled sections, lyric lines and the chords positioned over them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Token:
    """A whitespace-delimited run with column span information.

    Parameters
    ----------
    text : str
        The token text content.
    start : int
        Inclusive start column (0-indexed).
    end : int
        Exclusive end column.

    Examples
    --------
    >>> token = Token(text="Gm7", start=0, end=3)
    >>> token.start, token.end
    (0, 3)
    """

    text: str
    start: int
    end: int


@dataclass
class ChordAtOffset:
    """A chord symbol positioned over a column of a line's lyrics.

    Parameters
    ----------
    chord : str
        The chord symbol as written (e.g., "Am7", "G/B").
    offset : int
        Zero-based character column into the lyrics. 0 places the chord
        before the first character.
    """

    chord: str
    offset: int


@dataclass
class Line:
    """A lyrics line and the chords sounding over it.

    Parameters
    ----------
    lyrics : str
        The lyric text, empty for chord-only (instrumental) lines.
    chords : list[ChordAtOffset]
        Chords in the order they were recorded. Offsets are non-decreasing.
    """

    lyrics: str = ""
    chords: list[ChordAtOffset] = field(default_factory=list)

    @property
    def is_chord_only(self) -> bool:
        """True if the line carries chords but no lyrics."""
        return not self.lyrics and bool(self.chords)


@dataclass
class Section:
    """A labelled section of a song.

    Parameters
    ----------
    label : str
        Free text label (e.g., "Verse 1", "Chorus"), empty for unlabelled
        material.
    lines : list[Line]
        The lines within this section.
    """

    label: str = ""
    lines: list[Line] = field(default_factory=list)


@dataclass
class Song:
    """Complete parsed song sheet.

    Parameters
    ----------
    title, artist, key, tempo, ccli, copyright : str
        Metadata fields, empty when the sheet does not provide them.
    sections : list[Section]
        All non-empty sections, in document order.
    raw : str
        The original input text.
    """

    title: str = ""
    artist: str = ""
    key: str = ""
    tempo: str = ""
    ccli: str = ""
    copyright: str = ""
    sections: list[Section] = field(default_factory=list)
    raw: str = ""

    def iter_lines(self) -> Iterator[Line]:
        """Yield every line of every section in document order."""
        for section in self.sections:
            yield from section.lines

    def iter_chords(self) -> Iterator[ChordAtOffset]:
        """Yield every positioned chord in document order."""
        for line in self.iter_lines():
            yield from line.chords


@dataclass(frozen=True)
class SongMetadata:
    """Title and artist read from the head of a sheet.

    Parameters
    ----------
    title : str
        The song title, empty if none was found.
    artist : str
        The artist, empty if none was found.
    """

    title: str
    artist: str
