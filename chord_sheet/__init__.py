"""Chord sheet engine for plain-text song sheets.

This library parses chord sheets written with chords above the lyrics or with
inline ``[chord]`` markers, and rewrites them: toggling the chord layout,
transposing, converting to and from the Nashville Number System and
respelling sharps as flats.

Examples
--------
>>> from chord_sheet import parse, transpose_chord, to_nashville

>>> song = parse("Amazing Grace\\nJohn Newton\\n[G]Amazing [D]grace")
>>> song.title
'Amazing Grace'

>>> transpose_chord("F#m7", 3)
'Am7'
>>> to_nashville("Am", "C")
'6m'

>>> from chord_sheet import inline_to_above
>>> print(inline_to_above("[G]Amazing [D]grace"))
G       D
Amazing grace
"""

import logging

from chord_sheet.accidentals import convert_to_flats, convert_to_sharps, is_sharps_format
from chord_sheet.chord_grammar import is_chord_only_line, is_valid_chord
from chord_sheet.layout import above_to_inline, has_inline_chords, inline_to_above, is_inline_format
from chord_sheet.models import ChordAtOffset, Line, Section, Song, SongMetadata, Token
from chord_sheet.nashville import (
    ALL_KEYS,
    COMMON_KEYS,
    detect_key,
    from_nashville,
    guess_key,
    is_nashville,
    song_from_nashville,
    song_to_nashville,
    to_nashville,
)
from chord_sheet.parser import parse, parse_metadata
from chord_sheet.pitch_class import note_index
from chord_sheet.render import render_above, render_chordpro
from chord_sheet.transposer import transpose_chord, transpose_song, transposition_name

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ALL_KEYS",
    "COMMON_KEYS",
    "ChordAtOffset",
    "Line",
    "Section",
    "Song",
    "SongMetadata",
    "Token",
    "above_to_inline",
    "convert_to_flats",
    "convert_to_sharps",
    "detect_key",
    "from_nashville",
    "guess_key",
    "has_inline_chords",
    "inline_to_above",
    "is_chord_only_line",
    "is_inline_format",
    "is_nashville",
    "is_sharps_format",
    "is_valid_chord",
    "note_index",
    "parse",
    "parse_metadata",
    "render_above",
    "render_chordpro",
    "song_from_nashville",
    "song_to_nashville",
    "to_nashville",
    "transpose_chord",
    "transpose_song",
    "transposition_name",
]
