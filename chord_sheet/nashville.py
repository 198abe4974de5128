"""Conversion between chord names and the Nashville Number System.

The Nashville Number System writes each chord as the scale degree of its root
relative to the key, keeping the chord quality:

- In the key of C: C=1, D=2, E=3, F=4, G=5, A=6, B=7
- In the key of G: G=1, A=2, B=3, C=4, D=5, E=6, F#=7

So ``Am`` in C is ``6m`` and ``G7/B`` in C is ``57/7``.
"""

from __future__ import annotations

import logging
import re

from chord_sheet.chord_grammar import normalize_accidentals, split_root
from chord_sheet.models import Song
from chord_sheet.pitch_class import (
    ALL_KEYS,
    COMMON_KEYS,
    MAJOR_SCALE,
    interval,
    key_name,
    note_index,
    note_name,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ALL_KEYS",
    "COMMON_KEYS",
    "detect_key",
    "from_nashville",
    "guess_key",
    "is_nashville",
    "song_from_nashville",
    "song_to_nashville",
    "to_nashville",
]

# Nashville notation: optional accidental, degree 1-7, quality suffix
NASHVILLE_RE = re.compile(r"^([#b♯♭]?)([1-7])(.*)$", re.DOTALL)

# Semitones above the tonic to Nashville number. Off-scale roots are always
# written as a raised degree.
SEMITONE_TO_DEGREE: dict[int, str] = {
    0: "1",
    1: "#1",
    2: "2",
    3: "#2",
    4: "3",
    5: "4",
    6: "#4",
    7: "5",
    8: "#5",
    9: "6",
    10: "#6",
    11: "7",
}

DEGREE_TO_SEMITONE: dict[int, int] = {degree: st for degree, st in enumerate(MAJOR_SCALE, start=1)}

# Keys spelled with flats even though their name has no flat in it
FLAT_KEYS: frozenset[str] = frozenset({"F", "Bb", "Eb", "Ab", "Db", "Gb"})


def _key_root(key: str) -> int | None:
    """Return the pitch class of a key's root ("Am" and "A" both give 9)."""
    parts = split_root(key.strip())
    if parts is None:
        return None
    return note_index(parts[0])


def key_uses_flats(key: str) -> bool:
    """Check if chords in a key are spelled with flats.

    Examples
    --------
    >>> key_uses_flats("Eb")
    True
    >>> key_uses_flats("F")
    True
    >>> key_uses_flats("D")
    False
    """
    return "b" in key or "♭" in key or key.strip() in FLAT_KEYS


def to_nashville(chord: str, key: str) -> str:
    """Convert a chord to Nashville notation relative to a key.

    Parameters
    ----------
    chord : str
        The chord to convert (e.g., "Am", "G7", "F#m").
    key : str
        The key of the song (e.g., "C", "G", "F#"). Only its root is used.

    Returns
    -------
    str
        The Nashville notation (e.g., "6m", "57", "#4m"), or the chord
        unchanged if the chord or key root is unknown.

    Examples
    --------
    >>> to_nashville("Am", "C")
    '6m'
    >>> to_nashville("D/F#", "D")
    '1/3'
    >>> to_nashville("Eb", "C")
    '#2'
    """
    if not chord or not key:
        return chord

    slash = chord.find("/")
    if slash > 0:
        main, bass = chord[:slash], chord[slash + 1 :]
        return f"{to_nashville(main, key)}/{to_nashville(bass, key)}"

    parts = split_root(chord)
    if parts is None:
        return chord
    root, suffix = parts

    key_pc = _key_root(key)
    chord_pc = note_index(root)
    if key_pc is None or chord_pc is None:
        logger.debug("Cannot convert %r in key %r to Nashville", chord, key)
        return chord

    return SEMITONE_TO_DEGREE[interval(key_pc, chord_pc)] + suffix


def from_nashville(notation: str, key: str) -> str:
    """Convert Nashville notation back to a chord name in a key.

    Parameters
    ----------
    notation : str
        The Nashville notation (e.g., "6m", "b7", "4/5").
    key : str
        The key of the song.

    Returns
    -------
    str
        The chord (e.g., "Am"), or the input unchanged if it is not Nashville
        notation or the key is unknown.

    Examples
    --------
    >>> from_nashville("6m", "C")
    'Am'
    >>> from_nashville("4", "F")
    'Bb'
    >>> from_nashville("b7", "G")
    'F'
    """
    if not notation or not key:
        return notation

    slash = notation.find("/")
    if slash > 0:
        main, bass = notation[:slash], notation[slash + 1 :]
        return f"{from_nashville(main, key)}/{from_nashville(bass, key)}"

    match = NASHVILLE_RE.match(notation)
    if match is None:
        return notation
    accidental, degree, suffix = match.groups()

    key_pc = _key_root(key)
    if key_pc is None:
        logger.debug("Cannot convert %r from Nashville: unknown key %r", notation, key)
        return notation

    semitones = DEGREE_TO_SEMITONE[int(degree)]
    accidental = normalize_accidentals(accidental)
    if accidental == "#":
        semitones += 1
    elif accidental == "b":
        semitones -= 1

    return note_name(key_pc + semitones, flats=key_uses_flats(key)) + suffix


def is_nashville(token: str) -> bool:
    """Check if a token is in Nashville notation.

    Examples
    --------
    >>> is_nashville("6m")
    True
    >>> is_nashville("#4/5")
    True
    >>> is_nashville("Am")
    False
    """
    if not token:
        return False
    slash = token.find("/")
    main = token[:slash] if slash > 0 else token
    return NASHVILLE_RE.match(main) is not None


def detect_key(song: Song) -> str | None:
    """Return the root of the key declared in a song's metadata.

    Examples
    --------
    >>> detect_key(Song(key="F#m"))
    'F#'
    >>> detect_key(Song()) is None
    True
    """
    key = song.key.strip() if song.key else ""
    if not key:
        return None
    parts = split_root(key)
    if parts is None:
        return None
    return parts[0]


def _chord_tones(chord: str) -> tuple[int, frozenset[int]] | None:
    """Return a chord's root pitch class and the pitch classes it contains.

    Falls back to the root alone when pychord cannot read the symbol.
    """
    from pychord import Chord as PyChord

    parts = split_root(chord)
    if parts is None:
        return None
    root_pc = note_index(parts[0])
    if root_pc is None:
        return None

    try:
        components = PyChord(normalize_accidentals(chord)).components(visible=False)
    except Exception:  # pychord may raise various exceptions
        logger.debug("pychord cannot read %r, using its root only", chord)
        return root_pc, frozenset({root_pc})

    return root_pc, frozenset(value % 12 for value in components)


def guess_key(song: Song) -> str | None:
    """Guess the major key of a song from its chords.

    Every chord tone inside a candidate key's major scale scores a point and
    every tone outside it loses one. Ties go to the key on the first chord's
    root, then to the key on the last chord's root.

    Parameters
    ----------
    song : Song
        A parsed song with absolute chord names.

    Returns
    -------
    str | None
        The key name (e.g., "G", "Bb"), or None if the song has no readable
        chords.
    """
    profiles: list[tuple[int, frozenset[int]]] = []
    for chord in song.iter_chords():
        tones = _chord_tones(chord.chord)
        if tones is not None:
            profiles.append(tones)
    if not profiles:
        return None

    first_root = profiles[0][0]
    last_root = profiles[-1][0]

    def fit(tonic: int) -> tuple[int, bool, bool]:
        scale = {(tonic + step) % 12 for step in MAJOR_SCALE}
        score = sum(1 if pc in scale else -1 for _, tones in profiles for pc in tones)
        return score, tonic == first_root, tonic == last_root

    best = max(range(12), key=fit)
    logger.debug("Guessed key %s for %r", key_name(best), song.title)
    return key_name(best)


def song_to_nashville(song: Song, key: str | None = None) -> str | None:
    """Convert every chord of a song to Nashville notation in place.

    Parameters
    ----------
    song : Song
        The parsed song to modify.
    key : str | None
        The reference key. Defaults to the song's declared key, then to a
        key guessed from its chords.

    Returns
    -------
    str | None
        The key used, or None if no key could be found (the song is left
        unchanged).
    """
    key = key or detect_key(song) or guess_key(song)
    if not key:
        logger.debug("No key for %r, leaving chords unchanged", song.title)
        return None

    for chord in song.iter_chords():
        chord.chord = to_nashville(chord.chord, key)
    return key


def song_from_nashville(song: Song, key: str | None = None) -> str | None:
    """Convert every Nashville chord of a song back to chord names in place.

    Parameters
    ----------
    song : Song
        The parsed song to modify.
    key : str | None
        The reference key. Defaults to the song's declared key.

    Returns
    -------
    str | None
        The key used, or None if no key was given or declared.
    """
    key = key or detect_key(song)
    if not key:
        logger.debug("No key for %r, leaving chords unchanged", song.title)
        return None

    for chord in song.iter_chords():
        chord.chord = from_nashville(chord.chord, key)
    return key
