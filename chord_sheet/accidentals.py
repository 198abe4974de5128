"""Sharp/flat respelling of chords in sheet text.

Rewrites chord roots and slash basses between the sharp and flat spellings of
the five common enharmonic pairs (C#/Db, D#/Eb, F#/Gb, G#/Ab, A#/Bb). Both
inline ``[chord]`` markers and chord-only lines are handled; every other
character of the text is left alone. Each pair has spellings of equal length,
so chord columns never move.
"""

from __future__ import annotations

import re

from chord_sheet.chord_grammar import (
    INLINE_CHORD_RE,
    is_chord_only_line,
    normalize_accidentals,
    split_root,
)
from chord_sheet.pitch_class import uses_unicode_accidental

# Sharp spelling to flat spelling
ENHARMONIC_PAIRS: tuple[tuple[str, str], ...] = (
    ("C#", "Db"),
    ("D#", "Eb"),
    ("F#", "Gb"),
    ("G#", "Ab"),
    ("A#", "Bb"),
)

_SHARP_TO_FLAT: dict[str, str] = dict(ENHARMONIC_PAIRS)
_FLAT_TO_SHARP: dict[str, str] = {flat: sharp for sharp, flat in ENHARMONIC_PAIRS}

# A note letter followed by an accidental
_ACCIDENTAL_RE = re.compile(r"[A-G]([#b♯♭])")
_TOKEN_RE = re.compile(r"\S+")


def _unicode_spelling(note: str) -> str:
    return note[0] + ("♯" if note[1] == "#" else "♭")


def convert_chord(chord: str, to_flats: bool) -> str:
    """Respell a single chord's root and bass.

    Roots outside the five common pairs (E#, Fb, B#, Cb and naturals) are
    returned unchanged. Unicode accidentals stay Unicode.

    Examples
    --------
    >>> convert_chord("C#m7/G#", to_flats=True)
    'Dbm7/Ab'
    >>> convert_chord("Bb", to_flats=False)
    'A#'
    >>> convert_chord("Cb", to_flats=False)
    'Cb'
    """
    if not chord:
        return chord

    slash = chord.find("/")
    if slash > 0:
        main, bass = chord[:slash], chord[slash + 1 :]
        return f"{convert_chord(main, to_flats)}/{convert_chord(bass, to_flats)}"

    parts = split_root(chord)
    if parts is None:
        return chord
    root, suffix = parts

    unicode = uses_unicode_accidental(root)
    ascii_root = normalize_accidentals(root)
    table = _SHARP_TO_FLAT if to_flats else _FLAT_TO_SHARP
    new_root = table.get(ascii_root)
    if new_root is None:
        return chord
    if unicode:
        new_root = _unicode_spelling(new_root)
    return new_root + suffix


def _convert_inline_chords(text: str, to_flats: bool) -> str:
    return INLINE_CHORD_RE.sub(lambda m: f"[{convert_chord(m.group(1), to_flats)}]", text)


def _convert_chord_lines(text: str, to_flats: bool) -> str:
    lines = text.split("\n")
    for i, line in enumerate(lines):
        if is_chord_only_line(line):
            lines[i] = _TOKEN_RE.sub(lambda m: convert_chord(m.group(), to_flats), line)
    return "\n".join(lines)


def convert_to_flats(text: str) -> str:
    """Respell sharp chords as flats in inline markers and chord lines.

    Examples
    --------
    >>> convert_to_flats("[C#m]Hold on [F#]tight")
    '[Dbm]Hold on [Gb]tight'
    """
    if not text:
        return text
    return _convert_chord_lines(_convert_inline_chords(text, True), True)


def convert_to_sharps(text: str) -> str:
    """Respell flat chords as sharps in inline markers and chord lines.

    Examples
    --------
    >>> convert_to_sharps("Bb    Eb/G\\nHold on tight")
    'A#    D#/G\\nHold on tight'
    """
    if not text:
        return text
    return _convert_chord_lines(_convert_inline_chords(text, False), False)


def is_sharps_format(text: str) -> bool:
    """Detect if a text predominantly uses sharps.

    Counts accidentals directly after a note letter anywhere in the text.
    Ties, including no accidentals at all, count as sharps.

    Examples
    --------
    >>> is_sharps_format("[Bb]One [Eb]two [F#]three")
    False
    >>> is_sharps_format("no accidentals")
    True
    """
    if not text:
        return True

    sharps = 0
    flats = 0
    for match in _ACCIDENTAL_RE.finditer(text):
        if match.group(1) in "#♯":
            sharps += 1
        else:
            flats += 1

    return sharps >= flats
