"""Chord grammar and line classification for song sheets.

This module holds the pattern constants every other component matches chord
text against: the chord symbol grammar, inline ``[chord]`` markers, section
labels and ChordPro ``{tag: value}`` directives, plus a column-aware
tokenizer.
"""

from __future__ import annotations

import re

from chord_sheet.models import ChordAtOffset, Line, Token

# Unicode accidentals are rewritten to ASCII before any grammar match
UNICODE_ACCIDENTALS: dict[str, str] = {"♯": "#", "♭": "b"}
_ACCIDENTAL_TABLE = str.maketrans(UNICODE_ACCIDENTALS)

# Regex pattern for chord symbols, matched against accidental-normalized text.
# Matches: root (A-G), optional accidental, any run of quality markers, an
# optional interval, an optional trailing sus/add, and an optional slash bass.
CHORD_RE = re.compile(
    r"^[A-G][#b]?"  # Root note with optional accidental
    r"(?:maj|min|dim|aug|sus|add|m|M|△|ø|°)*"  # Quality markers
    r"\d*"  # Main interval (7, 9, 13, ...)
    r"(?:(?:sus|add)\d*)?"  # Trailing suspension or added tone (7sus4)
    r"(?:/[A-G][#b]?)?$"  # Optional slash bass
)

# Root prefix used by the transposer and converters; the rest is a suffix
# that is copied verbatim.
ROOT_RE = re.compile(r"^([A-G][#b♯♭]?)(.*)$", re.DOTALL)

SECTION_KEYWORDS: tuple[str, ...] = (
    "Verse",
    "Chorus",
    "Bridge",
    "Pre-Chorus",
    "Intro",
    "Outro",
    "Tag",
    "Interlude",
    "Instrumental",
    "Ending",
    "Coda",
    "Refrain",
    "Strophe",
    "Vamp",
)

# "Pre-Chorus" is also written "PreChorus"
_SECTION_ALTERNATION = "|".join(
    kw.replace("-", "-?") for kw in sorted(SECTION_KEYWORDS, key=len, reverse=True)
)

# Section label: "Verse 1", "Chorus:", "bridge"
SECTION_LABEL_RE = re.compile(
    rf"^({_SECTION_ALTERNATION})\s*(\d*):?$",
    re.IGNORECASE,
)

# Inline chord marker: [G], [F#m7], [C/E]. Brackets holding whitespace or a
# section keyword ([Verse 1], [Chorus]) are labels, not markers.
INLINE_CHORD_RE = re.compile(
    rf"\[(?!(?i:{_SECTION_ALTERNATION})\d*:?\])([^\[\]\s]+)\]"
)

# ChordPro directive: {title: Amazing Grace}, {soc}
TAG_RE = re.compile(r"\{([^:}]+)(?::([^}]*))?\}")


def normalize_accidentals(text: str) -> str:
    """Rewrite Unicode sharps and flats to their ASCII forms.

    Examples
    --------
    >>> normalize_accidentals("F♯m/C♯")
    'F#m/C#'
    """
    return text.translate(_ACCIDENTAL_TABLE)


def is_valid_chord(token: str) -> bool:
    """Check if a token is a syntactically valid chord symbol.

    Parameters
    ----------
    token : str
        A single whitespace-free token.

    Returns
    -------
    bool
        True if the token matches the chord grammar.

    Examples
    --------
    >>> is_valid_chord("F#m7")
    True
    >>> is_valid_chord("C/E")
    True
    >>> is_valid_chord("Amazing")
    False
    """
    if not token:
        return False
    return CHORD_RE.match(normalize_accidentals(token)) is not None


def is_chord_only_line(line: str) -> bool:
    """Check if every whitespace-delimited token on a line is a chord.

    Empty and all-whitespace lines are never chord-only.

    Examples
    --------
    >>> is_chord_only_line("G   Am  C/E")
    True
    >>> is_chord_only_line("G Am lyrics")
    False
    >>> is_chord_only_line("   ")
    False
    """
    parts = line.split()
    return bool(parts) and all(is_valid_chord(part) for part in parts)


def split_root(chord: str) -> tuple[str, str] | None:
    """Split a chord into its root prefix and the remaining suffix.

    Returns
    -------
    tuple[str, str] | None
        ``(root, suffix)``, or None if the text does not start with a note
        letter.

    Examples
    --------
    >>> split_root("F#m7")
    ('F#', 'm7')
    >>> split_root("N.C.") is None
    True
    """
    match = ROOT_RE.match(chord)
    if match is None:
        return None
    return match.group(1), match.group(2)


def tokenize_line(line: str) -> list[Token]:
    """Tokenize a line preserving column spans.

    Splits on whitespace while tracking the start and end column of each
    token. Tabs and spaces each count as one column.

    Parameters
    ----------
    line : str
        The line to tokenize. Should not include newline characters.

    Returns
    -------
    list[Token]
        Tokens with text, start (inclusive) and end (exclusive).

    Examples
    --------
    >>> tokens = tokenize_line("Gm     C")
    >>> [(t.text, t.start, t.end) for t in tokens]
    [('Gm', 0, 2), ('C', 7, 8)]
    """
    tokens: list[Token] = []
    i = 0
    n = len(line)

    while i < n:
        if line[i].isspace():
            i += 1
            continue

        start = i
        while i < n and not line[i].isspace():
            i += 1

        tokens.append(Token(text=line[start:i], start=start, end=i))

    return tokens


def find_inline_chords(line: str) -> list[re.Match[str]]:
    """Return the inline ``[chord]`` marker matches on a line, left to right."""
    return list(INLINE_CHORD_RE.finditer(line))


def has_inline_chords(line: str) -> bool:
    """Check if a line contains at least one inline ``[chord]`` marker.

    Examples
    --------
    >>> has_inline_chords("[G]Amazing [D]grace")
    True
    >>> has_inline_chords("[Chorus]")
    False
    """
    return INLINE_CHORD_RE.search(line) is not None


def match_section_label(line: str) -> str | None:
    """Extract a section label from a label line.

    Accepts ``Verse 1``, ``Chorus:`` and bracketed ``[Bridge]`` forms.

    Returns
    -------
    str | None
        The label (keyword as written, plus ``" N"`` when numbered), or None
        if the line is not a section label.

    Examples
    --------
    >>> match_section_label("Verse 2:")
    'Verse 2'
    >>> match_section_label("[chorus]")
    'chorus'
    >>> match_section_label("Verses of love") is None
    True
    """
    stripped = line.strip()
    if stripped.startswith("[") and stripped.endswith("]"):
        stripped = stripped[1:-1].strip()
    match = SECTION_LABEL_RE.match(stripped)
    if match is None:
        return None
    keyword, number = match.group(1), match.group(2)
    return f"{keyword} {number}" if number else keyword


def find_tags(line: str) -> list[tuple[str, str]]:
    """Return ``(name, value)`` pairs for every ChordPro directive on a line.

    Names are lower-cased; values are stripped and empty for bare ``{tag}``.

    Examples
    --------
    >>> find_tags("{title: Amazing Grace}")
    [('title', 'Amazing Grace')]
    >>> find_tags("{soc}")
    [('soc', '')]
    """
    return [
        (m.group(1).strip().lower(), (m.group(2) or "").strip())
        for m in TAG_RE.finditer(line)
    ]


def is_tag_line(line: str) -> bool:
    """Check if a line holds nothing but ChordPro directives."""
    stripped = line.strip()
    if not stripped or TAG_RE.search(stripped) is None:
        return False
    return not TAG_RE.sub("", stripped).strip()


def chords_from_chord_line(chord_line: str) -> list[ChordAtOffset]:
    """Position each token of a chord line at its first character's column.

    Examples
    --------
    >>> [(c.chord, c.offset) for c in chords_from_chord_line("G       D")]
    [('G', 0), ('D', 8)]
    """
    return [ChordAtOffset(chord=t.text, offset=t.start) for t in tokenize_line(chord_line)]


def _strip_markers(line: str) -> tuple[str, list[ChordAtOffset], list[tuple[int, int]]]:
    """Remove one layer of markers, returning lyrics, chords and removed spans."""
    lyrics: list[str] = []
    length = 0
    chords: list[ChordAtOffset] = []
    spans: list[tuple[int, int]] = []
    last_end = 0

    for match in find_inline_chords(line):
        text_before = line[last_end : match.start()]
        lyrics.append(text_before)
        length += len(text_before)
        chords.append(ChordAtOffset(chord=match.group(1), offset=length))
        spans.append((match.start(), match.end()))
        last_end = match.end()

    lyrics.append(line[last_end:])
    return "".join(lyrics), chords, spans


def split_inline_chords(line: str) -> Line:
    """Separate inline ``[chord]`` markers from the lyrics around them.

    Markers are stripped from the lyrics. Each chord's offset is the length of
    the lyrics emitted before it, not its column in the raw line. Stripping
    repeats until no marker is left, so nested brackets such as ``[a[G]b]``
    leave no marker behind.

    Examples
    --------
    >>> line = split_inline_chords("[G]Amazing [D]grace")
    >>> line.lyrics
    'Amazing grace'
    >>> [(c.chord, c.offset) for c in line.chords]
    [('G', 0), ('D', 8)]
    """
    lyrics, chords, _ = _strip_markers(line)

    # Removing a marker can join the brackets around it into a new one
    while has_inline_chords(lyrics):
        lyrics, found, spans = _strip_markers(lyrics)
        for chord in chords:
            chord.offset -= sum(
                min(end, chord.offset) - start for start, end in spans if start < chord.offset
            )
        chords = sorted(chords + found, key=lambda chord: chord.offset)

    return Line(lyrics=lyrics, chords=chords)
