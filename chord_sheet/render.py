"""Render a parsed :class:`~chord_sheet.models.Song` back to sheet text.

Section label → ChordPro directive mapping
-----------------------------------------

+--------------------------------+------------------------------------------+
| Label                          | Directives                               |
+================================+==========================================+
| ``Verse``, ``Verse N``         | ``{start_of_verse: Verse N}`` /          |
|                                | ``{end_of_verse}``                       |
+--------------------------------+------------------------------------------+
| ``Chorus``                     | ``{start_of_chorus: Chorus}`` /          |
|                                | ``{end_of_chorus}``                      |
+--------------------------------+------------------------------------------+
| ``Pre-Chorus``                 | ``{start_of_pre_chorus: Pre-Chorus}`` /  |
|                                | ``{end_of_pre_chorus}``                  |
+--------------------------------+------------------------------------------+
| any other label                | ``{start_of_<first word>: <label>}`` /   |
|                                | ``{end_of_<first word>}``                |
+--------------------------------+------------------------------------------+
| empty / unlabeled              | no wrapper; ``{end_of_section}`` first   |
|                                | when it follows another unlabeled        |
|                                | section                                  |
+--------------------------------+------------------------------------------+

``render_above`` writes keyword labels as bare ``[Label]`` lines and falls back
to the ``{start_of_*}`` directive for any other label.
"""

from __future__ import annotations

import re

from chord_sheet.chord_grammar import match_section_label
from chord_sheet.layout import build_chord_line, insert_chords, is_lyric_line
from chord_sheet.models import Line, Section, Song

_NON_WORD_RE = re.compile(r"[^a-z0-9]+")

# Directive suffix for sections without a usable first word
_DEFAULT_KIND = "section"


def _metadata_lines(song: Song) -> list[str]:
    # An explicit title directive, even when empty, keeps the first lyric
    # line from being read back as the title.
    lines = [f"{{title: {song.title}}}"]
    for tag, value in (
        ("artist", song.artist),
        ("key", song.key),
        ("tempo", song.tempo),
        ("ccli", song.ccli),
        ("copyright", song.copyright),
    ):
        if value:
            lines.append(f"{{{tag}: {value}}}")
    return lines


def _section_kind(label: str) -> str:
    """Return the directive suffix for a label ("Pre-Chorus 2" -> "pre_chorus")."""
    words = label.split()
    if not words:
        return _DEFAULT_KIND
    return _NON_WORD_RE.sub("_", words[0].lower()).strip("_") or _DEFAULT_KIND


def _is_bare_label(label: str) -> bool:
    return match_section_label(label) == label


def _above_line(line: Line) -> list[str]:
    chord_line = build_chord_line(line.chords)
    if not chord_line:
        return [line.lyrics]
    if line.lyrics and not is_lyric_line(line.lyrics):
        # Lyrics that read as chords, a label or a directive keep their chords inline
        return [insert_chords(line.lyrics, line.chords)]
    return [chord_line, line.lyrics]


def render_above(song: Song) -> str:
    """Return chords-above-lyrics text for *song*.

    Each line's chords are laid out on their own line above the lyrics, using
    the same collision padding as :func:`~chord_sheet.layout.inline_to_above`.
    A line whose lyrics would read back as a chord line, a label or a
    directive keeps its chords as inline markers instead.

    Metadata is written as directives, and a blank line precedes every
    section. The returned string ends with a single newline.
    """
    parts = _metadata_lines(song)

    previous: Section | None = None
    for section in song.sections:
        parts.append("")
        if not section.label:
            if previous is not None:
                parts.append(f"{{end_of_{_section_kind(previous.label)}}}")
        elif _is_bare_label(section.label):
            parts.append(f"[{section.label}]")
        else:
            parts.append(f"{{start_of_{_section_kind(section.label)}: {section.label}}}")
        for line in section.lines:
            parts.extend(_above_line(line))
        previous = section

    return "\n".join(parts) + "\n"


def render_chordpro(song: Song) -> str:
    """Return ChordPro text for *song*.

    The returned string ends with a single newline and uses ``\\n`` line
    endings throughout.

    Examples
    --------
    >>> from chord_sheet.parser import parse
    >>> print(render_chordpro(parse("Amazing Grace\\nJohn Newton\\nG       D\\nAmazing grace")), end="")
    {title: Amazing Grace}
    {artist: John Newton}
    <BLANKLINE>
    [G]Amazing [D]grace
    """
    parts = _metadata_lines(song)

    previous: Section | None = None
    for section in song.sections:
        parts.append("")
        if not section.label and previous is not None and not previous.label:
            parts.append(f"{{end_of_{_DEFAULT_KIND}}}")
        parts.extend(_render_section(section))
        previous = section

    return "\n".join(parts) + "\n"


def _render_section(section: Section) -> list[str]:
    """Return the ChordPro lines for one section (no trailing blank line)."""
    lines = [insert_chords(line.lyrics, line.chords) for line in section.lines]
    if not section.label:
        return lines

    kind = _section_kind(section.label)
    return [f"{{start_of_{kind}: {section.label}}}", *lines, f"{{end_of_{kind}}}"]
