"""Chord transposition.

Transposes chord symbols, and whole parsed songs, by a number of semitones.
Only the root (and slash bass) is rewritten; the chord quality suffix is
copied through untouched.
"""

from __future__ import annotations

import logging

from chord_sheet.chord_grammar import split_root
from chord_sheet.models import Song
from chord_sheet.pitch_class import note_index, note_name, prefers_flats, uses_unicode_accidental

logger = logging.getLogger(__name__)


def transpose_chord(chord: str, semitones: int) -> str:
    """Transpose a chord by a number of semitones.

    The new root is spelled with flats if the original root was written with
    a flat, and with sharps otherwise. Slash chords transpose the root and
    the bass independently.

    Parameters
    ----------
    chord : str
        The chord to transpose (e.g., "Am7", "G/B", "F#m").
    semitones : int
        Number of semitones to transpose (positive = up, negative = down).

    Returns
    -------
    str
        The transposed chord, or the input unchanged if its root is unknown.

    Examples
    --------
    >>> transpose_chord("F#m7", 3)
    'Am7'
    >>> transpose_chord("Bb", -2)
    'Ab'
    >>> transpose_chord("G/B", 2)
    'A/C#'
    """
    if not chord:
        return chord

    slash = chord.find("/")
    if slash > 0:
        main, bass = chord[:slash], chord[slash + 1 :]
        return f"{transpose_chord(main, semitones)}/{transpose_chord(bass, semitones)}"

    parts = split_root(chord)
    if parts is None:
        logger.debug("Not transposing %r: no root note", chord)
        return chord
    root, suffix = parts

    pc = note_index(root)
    if pc is None:
        logger.debug("Not transposing %r: unknown root %r", chord, root)
        return chord

    new_root = note_name(
        pc + semitones,
        flats=prefers_flats(root),
        unicode=uses_unicode_accidental(root),
    )
    return new_root + suffix


def transpose_song(song: Song, semitones: int) -> None:
    """Transpose all chords of a song, and its key, in place.

    Lyrics and chord offsets are left untouched.

    Parameters
    ----------
    song : Song
        The parsed song to modify.
    semitones : int
        Number of semitones to transpose.
    """
    for chord in song.iter_chords():
        chord.chord = transpose_chord(chord.chord, semitones)

    if song.key:
        song.key = transpose_chord(song.key, semitones)


def transposition_name(semitones: int) -> str:
    """Return a display label for a transposition.

    Examples
    --------
    >>> transposition_name(0)
    'Original'
    >>> transposition_name(3)
    '+3'
    >>> transposition_name(-2)
    '-2'
    """
    if semitones == 0:
        return "Original"
    if semitones > 0:
        return f"+{semitones}"
    return str(semitones)
