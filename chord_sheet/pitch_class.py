"""Pitch class arithmetic for note names.

This module maps note names onto the 12-note chromatic scale (C=0) and back,
with parallel sharp and flat spelling tables.
"""

from __future__ import annotations

from chord_sheet.chord_grammar import normalize_accidentals

# Pitch class to note name
SHARP_NOTES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
FLAT_NOTES: tuple[str, ...] = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")

# Lower-cased note name to pitch class. Only the spellings of the two tables
# resolve; theoretical spellings such as E# or Cb are unknown.
_NOTE_TO_PC: dict[str, int] = {
    name.lower(): pc for table in (SHARP_NOTES, FLAT_NOTES) for pc, name in enumerate(table)
}

# Semitone offsets of the major scale degrees 1-7
MAJOR_SCALE: tuple[int, ...] = (0, 2, 4, 5, 7, 9, 11)

# Conventional spelling of each tonic when naming a key
KEY_NAMES: tuple[str, ...] = ("C", "Db", "D", "Eb", "E", "F", "F#", "G", "Ab", "A", "Bb", "B")

ALL_KEYS: tuple[str, ...] = (
    "C", "C#", "Db", "D", "D#", "Eb", "E", "F",
    "F#", "Gb", "G", "G#", "Ab", "A", "A#", "Bb", "B",
)
COMMON_KEYS: tuple[str, ...] = ("C", "G", "D", "A", "E", "F", "Bb", "Eb")


def note_index(note: str | None) -> int | None:
    """Convert a note name to pitch class (0-11).

    Matching is case-insensitive and Unicode accidentals are accepted.

    Parameters
    ----------
    note : str | None
        Note name (e.g., "C", "F#", "Bb", "D♭").

    Returns
    -------
    int | None
        Pitch class (0-11, where C=0), or None if the name is unknown.

    Examples
    --------
    >>> note_index("C")
    0
    >>> note_index("f#")
    6
    >>> note_index("B♭")
    10
    >>> note_index("H") is None
    True
    """
    if not note:
        return None
    return _NOTE_TO_PC.get(normalize_accidentals(note).lower())


def note_name(pc: int, flats: bool = False, unicode: bool = False) -> str:
    """Spell a pitch class as a note name.

    Parameters
    ----------
    pc : int
        Pitch class; any integer, reduced modulo 12.
    flats : bool
        Use the flat spelling table instead of the sharp one.
    unicode : bool
        Write accidentals as ``♯``/``♭`` instead of ``#``/``b``.

    Examples
    --------
    >>> note_name(1)
    'C#'
    >>> note_name(-2, flats=True)
    'Bb'
    >>> note_name(3, flats=True, unicode=True)
    'E♭'
    """
    name = (FLAT_NOTES if flats else SHARP_NOTES)[pc % 12]
    if unicode and len(name) > 1:
        name = name[0] + ("♭" if name[1] == "b" else "♯")
    return name


def prefers_flats(root: str) -> bool:
    """Check if a written root spells its accidental as a flat."""
    normalized = normalize_accidentals(root)
    return len(normalized) > 1 and normalized[1] == "b"


def uses_unicode_accidental(root: str) -> bool:
    """Check if a written root uses a Unicode accidental."""
    return "♯" in root or "♭" in root


def interval(from_pc: int, to_pc: int) -> int:
    """Return the upward distance in semitones between two pitch classes.

    Examples
    --------
    >>> interval(0, 9)
    9
    >>> interval(9, 0)
    3
    """
    return (to_pc - from_pc) % 12


def key_name(pc: int) -> str:
    """Return the conventional name of the major key on a tonic."""
    return KEY_NAMES[pc % 12]
