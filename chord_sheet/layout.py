"""Conversion between inline and chords-above sheet layouts.

Two layouts carry the same information:

- inline: ``[G]Amazing [D]grace``
- chords above::

    G       D
    Amazing grace

The converters rewrite raw text line by line instead of going through the
parsed model, so every line they do not need to change (blanks, directives,
section labels, plain lyrics) comes back byte for byte.
"""

from __future__ import annotations

from collections.abc import Sequence

from chord_sheet.chord_grammar import (
    chords_from_chord_line,
    has_inline_chords,
    is_chord_only_line,
    is_tag_line,
    match_section_label,
    split_inline_chords,
)
from chord_sheet.models import ChordAtOffset

__all__ = [
    "above_to_inline",
    "build_chord_line",
    "has_inline_chords",
    "inline_to_above",
    "insert_chords",
    "is_chord_only_line",
    "is_inline_format",
    "is_lyric_line",
    "merge_chord_line",
]


def _split_cr(line: str) -> tuple[str, str]:
    """Detach a trailing carriage return so CRLF text keeps its endings."""
    if line.endswith("\r"):
        return line[:-1], "\r"
    return line, ""


# ---------------------------------------------------------------------------
# Line-level helpers
# ---------------------------------------------------------------------------


def build_chord_line(chords: Sequence[ChordAtOffset]) -> str:
    """Lay chords out on a single line at their offsets.

    A chord whose offset falls inside, or right against, the span of the
    previous chord is pushed right by exactly one space so the two tokens
    stay separate.

    Examples
    --------
    >>> build_chord_line([ChordAtOffset("G", 0), ChordAtOffset("D", 8)])
    'G       D'
    >>> build_chord_line([ChordAtOffset("Am7", 0), ChordAtOffset("D", 1)])
    'Am7 D'
    """
    line = ""
    for chord in chords:
        if line and len(line) >= chord.offset:
            line += " "
        else:
            line = line.ljust(chord.offset)
        line += chord.chord
    return line


def insert_chords(lyrics: str, chords: Sequence[ChordAtOffset]) -> str:
    """Insert ``[chord]`` markers into lyrics at each chord's offset.

    Chords are inserted right to left so earlier insertions do not shift the
    columns of those not yet placed. Lyrics shorter than a chord's offset are
    padded with spaces so the chord keeps its column.

    Examples
    --------
    >>> insert_chords("Amazing grace", [ChordAtOffset("G", 0), ChordAtOffset("D", 8)])
    '[G]Amazing [D]grace'
    >>> insert_chords("Amen", [ChordAtOffset("C", 0), ChordAtOffset("G", 6)])
    '[C]Amen  [G]'
    """
    if not chords:
        return lyrics
    result = lyrics.ljust(max(chord.offset for chord in chords))
    for chord in reversed(chords):
        result = f"{result[: chord.offset]}[{chord.chord}]{result[chord.offset :]}"
    return result


def merge_chord_line(chord_line: str, lyrics: str) -> str:
    """Merge a chord-only line into the lyrics line below it.

    Examples
    --------
    >>> merge_chord_line("G       D", "Amazing grace")
    '[G]Amazing [D]grace'
    """
    return insert_chords(lyrics, chords_from_chord_line(chord_line))


def is_lyric_line(line: str) -> bool:
    """Check if a line reads back as lyrics.

    A chord line directly above such a line belongs to it. Blank lines, chord
    lines, inline-marked lines, directives and section labels do not qualify.

    Examples
    --------
    >>> is_lyric_line("Amazing grace")
    True
    >>> is_lyric_line("Am")
    False
    >>> is_lyric_line("Chorus")
    False
    """
    stripped = line.strip()
    return (
        bool(stripped)
        and not is_chord_only_line(stripped)
        and not has_inline_chords(stripped)
        and not is_tag_line(stripped)
        and match_section_label(stripped) is None
    )


# ---------------------------------------------------------------------------
# Text-level conversions
# ---------------------------------------------------------------------------


def inline_to_above(text: str) -> str:
    """Convert inline ``[chord]`` markers to chord lines above the lyrics.

    Each chord starts at the column equal to the length of the stripped
    lyrics before its marker. Lines without markers are left as they are.

    Parameters
    ----------
    text : str
        Sheet text in inline (or mixed) layout.

    Returns
    -------
    str
        Sheet text with no inline markers left.

    Examples
    --------
    >>> print(inline_to_above("[G]Amazing [D]grace"))
    G       D
    Amazing grace
    """
    if not text:
        return text

    result: list[str] = []
    for raw_line in text.split("\n"):
        line, cr = _split_cr(raw_line)
        if not has_inline_chords(line):
            result.append(raw_line)
            continue

        parsed = split_inline_chords(line)
        chord_line = build_chord_line(parsed.chords)
        if chord_line:
            result.append(chord_line + cr)
        result.append(parsed.lyrics + cr)

    return "\n".join(result)


def above_to_inline(text: str) -> str:
    """Convert chord lines above lyrics to inline ``[chord]`` markers.

    A chord-only line directly followed by a lyrics line is merged into it.
    Chord-only lines that stand alone (instrumental passages, or followed by a
    blank line, a directive or a section label) are left as they are.

    Parameters
    ----------
    text : str
        Sheet text in chords-above (or mixed) layout.

    Returns
    -------
    str
        Sheet text with chords inline.

    Examples
    --------
    >>> above_to_inline("G       D\\nAmazing grace")
    '[G]Amazing [D]grace'
    """
    if not text:
        return text

    lines = text.split("\n")
    result: list[str] = []
    i = 0
    n = len(lines)

    while i < n:
        line = lines[i]
        if is_chord_only_line(line) and i + 1 < n and is_lyric_line(lines[i + 1]):
            lyrics, cr = _split_cr(lines[i + 1])
            result.append(merge_chord_line(line, lyrics) + cr)
            i += 2
            continue

        result.append(line)
        i += 1

    return "\n".join(result)


def is_inline_format(text: str) -> bool:
    """Detect if a sheet primarily uses inline chords.

    Counts lines with inline markers against chord-only lines; inline wins
    only with a strict majority.

    Examples
    --------
    >>> is_inline_format("[G]Amazing [D]grace")
    True
    >>> is_inline_format("G       D\\nAmazing grace")
    False
    """
    if not text:
        return False

    inline_count = 0
    above_count = 0
    for line in text.split("\n"):
        if has_inline_chords(line):
            inline_count += 1
        elif is_chord_only_line(line):
            above_count += 1

    return inline_count > above_count
