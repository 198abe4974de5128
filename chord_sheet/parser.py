"""Song sheet parser.

This module turns raw sheet text into a :class:`~chord_sheet.models.Song`.
Both sheet conventions are understood, and may be mixed in one document:

- chords on their own line above the lyrics they belong to, with the title
  and artist on the first two lines;
- ChordPro-style ``{tag: value}`` metadata and ``[chord]`` markers inline in
  the lyrics.

The parser makes a single forward pass over the lines. A chord-only line is
held as pending until the next line shows whether it sits above lyrics or
stands alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from chord_sheet.chord_grammar import (
    chords_from_chord_line,
    find_tags,
    has_inline_chords,
    is_chord_only_line,
    is_tag_line,
    match_section_label,
    split_inline_chords,
)
from chord_sheet.models import Line, Section, Song, SongMetadata

logger = logging.getLogger(__name__)

# The metadata-only parse never reads further than this
MAX_METADATA_LINES = 30

# ChordPro directive name to Song attribute
METADATA_TAGS: dict[str, str] = {
    "title": "title",
    "t": "title",
    "subtitle": "artist",
    "st": "artist",
    "su": "artist",
    "artist": "artist",
    "key": "key",
    "tempo": "tempo",
    "ccli": "ccli",
    "copyright": "copyright",
    "footer": "copyright",
    "f": "copyright",
}

# Abbreviated ChordPro section directives
SECTION_START_TAGS: dict[str, str] = {"sov": "Verse", "soc": "Chorus", "sob": "Bridge"}
SECTION_END_TAGS: frozenset[str] = frozenset({"eov", "eoc", "eob"})
COMMENT_TAGS: frozenset[str] = frozenset({"comment", "c", "ci", "comment_italic"})

_START_PREFIX = "start_of_"
_END_PREFIX = "end_of_"

HeaderState = Literal["title", "artist", "body"]


@dataclass(frozen=True)
class PendingChords:
    """A chord-only line waiting for the line below it.

    Parameters
    ----------
    raw : str
        The chord line with its original spacing.
    """

    raw: str


def preprocess(text: str) -> list[str]:
    """Normalize line endings and split text into lines.

    Parameters
    ----------
    text : str
        The raw input text.

    Returns
    -------
    list[str]
        List of lines without line terminators.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.split("\n")


class _SongBuilder:
    """Line-by-line state machine shared by the full and metadata parses."""

    def __init__(self, raw: str) -> None:
        self.song = Song(raw=raw)
        self.section = Section()
        self.pending: PendingChords | None = None
        self.header: HeaderState = "title"

    def feed(self, line: str) -> None:
        stripped = line.strip()

        if not stripped:
            self._flush_pending()
            return

        # --- ChordPro directives ---
        if is_tag_line(stripped):
            self._flush_pending()
            for name, value in find_tags(stripped):
                self._apply_tag(name, value)
            self.header = "body"
            return
        for name, value in find_tags(stripped):
            # Directives mixed into text only set metadata
            if name in METADATA_TAGS:
                self._apply_tag(name, value)

        # --- Section labels ---
        label = match_section_label(stripped)
        if label is not None:
            self._flush_pending()
            self._open_section(label)
            self.header = "body"
            return

        # --- Title / artist heuristics ---
        if self.header == "title":
            self.header = "body"
            if not stripped.startswith(("{", "[")):
                if not self.song.title:
                    self.song.title = stripped
                self.header = "artist"
                return
        elif self.header == "artist":
            self.header = "body"
            if (
                not stripped.startswith(("{", "["))
                and not has_inline_chords(stripped)
                and not is_chord_only_line(stripped)
            ):
                if not self.song.artist:
                    self.song.artist = stripped
                return

        # --- Body ---
        if is_chord_only_line(stripped):
            self._flush_pending()
            self.pending = PendingChords(raw=line.rstrip())
            return

        lyrics = line.rstrip()
        if self.pending is not None:
            chords = chords_from_chord_line(self.pending.raw)
            self.section.lines.append(Line(lyrics=lyrics, chords=chords))
            self.pending = None
        else:
            parsed = split_inline_chords(lyrics)
            parsed.lyrics = parsed.lyrics.rstrip()
            self.section.lines.append(parsed)

    def finish(self) -> Song:
        self._flush_pending()
        if self.section.lines:
            self.song.sections.append(self.section)
        return self.song

    def _flush_pending(self) -> None:
        if self.pending is None:
            return
        chords = chords_from_chord_line(self.pending.raw)
        self.section.lines.append(Line(lyrics="", chords=chords))
        self.pending = None

    def _open_section(self, label: str) -> None:
        if self.section.lines:
            self.song.sections.append(self.section)
        self.section = Section(label=label)

    def _apply_tag(self, name: str, value: str) -> None:
        attribute = METADATA_TAGS.get(name)
        if attribute is not None:
            setattr(self.song, attribute, value)
            return

        if name in SECTION_START_TAGS or name.startswith(_START_PREFIX):
            default = SECTION_START_TAGS.get(name)
            if default is None:
                default = name[len(_START_PREFIX) :].replace("_", " ").title()
            self._open_section(value or default)
        elif name in SECTION_END_TAGS or name.startswith(_END_PREFIX):
            self._open_section("")
        elif name in COMMENT_TAGS:
            label = match_section_label(value)
            if label is not None:
                self._open_section(label)
        else:
            logger.debug("Ignoring directive {%s}", name)


def parse(text: str | None) -> Song:
    """Parse a song sheet into structured data.

    This is the main entry point for sheet parsing. It never raises:
    unrecognized content degrades to lyric text, and a sheet without a title
    leaves the title empty.

    Parameters
    ----------
    text : str | None
        The raw sheet text.

    Returns
    -------
    Song
        Structured representation of the sheet. Empty input gives a Song
        with empty fields and no sections.

    Examples
    --------
    >>> song = parse("Amazing Grace\\nJohn Newton\\n[G]Amazing [D]grace")
    >>> song.title, song.artist
    ('Amazing Grace', 'John Newton')
    >>> line = song.sections[0].lines[0]
    >>> line.lyrics, [(c.chord, c.offset) for c in line.chords]
    ('Amazing grace', [('G', 0), ('D', 8)])
    """
    if not text:
        return Song(raw=text or "")

    builder = _SongBuilder(text)
    for line in preprocess(text):
        builder.feed(line)
    song = builder.finish()

    logger.debug("Parsed %r: %d sections", song.title, len(song.sections))
    return song


def parse_metadata(text: str | None) -> SongMetadata:
    """Read only the title and artist of a sheet.

    Applies the same line handling as :func:`parse` to at most
    ``MAX_METADATA_LINES`` lines, stopping as soon as both fields resolve.
    Intended for list views that must not parse whole sheets.

    Parameters
    ----------
    text : str | None
        The raw sheet text (or just its head).

    Returns
    -------
    SongMetadata
        Title and artist, each empty if not found.

    Examples
    --------
    >>> parse_metadata("{title: Be Thou My Vision}\\n{artist: Traditional}")
    SongMetadata(title='Be Thou My Vision', artist='Traditional')
    """
    if not text:
        return SongMetadata(title="", artist="")

    builder = _SongBuilder(text)
    for count, line in enumerate(preprocess(text)):
        if count >= MAX_METADATA_LINES:
            break
        builder.feed(line)
        if builder.song.title and builder.song.artist:
            break

    return SongMetadata(title=builder.song.title, artist=builder.song.artist)
