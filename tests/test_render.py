"""Tests for rendering parsed songs back to text."""

import pytest

from chord_sheet.models import ChordAtOffset, Line, Section, Song
from chord_sheet.parser import parse
from chord_sheet.render import render_above, render_chordpro


@pytest.fixture
def song() -> Song:
    return Song(
        title="Amazing Grace",
        artist="John Newton",
        key="G",
        sections=[
            Section(
                label="Verse 1",
                lines=[
                    Line("Amazing grace", [ChordAtOffset("G", 0), ChordAtOffset("D", 8)]),
                    Line("", [ChordAtOffset("G", 0), ChordAtOffset("C", 4)]),
                ],
            ),
            Section(label="Solo", lines=[Line("la la", [ChordAtOffset("Em", 3)])]),
        ],
    )


class TestRenderAbove:
    def test_minimal(self) -> None:
        text = render_above(parse("Amazing Grace\nJohn Newton\nG       D\nAmazing grace"))
        assert text == "{title: Amazing Grace}\n{artist: John Newton}\n\nG       D\nAmazing grace\n"

    def test_sections_and_metadata(self, song: Song) -> None:
        assert render_above(song) == (
            "{title: Amazing Grace}\n"
            "{artist: John Newton}\n"
            "{key: G}\n"
            "\n"
            "[Verse 1]\n"
            "G       D\n"
            "Amazing grace\n"
            "G   C\n"
            "\n"
            "\n"
            "{start_of_solo: Solo}\n"
            "   Em\n"
            "la la\n"
        )

    def test_collision_padding(self) -> None:
        song = Song(sections=[Section(lines=[Line("abc", [ChordAtOffset("Am7", 0), ChordAtOffset("D", 1)])])])
        assert render_above(song) == "{title: }\n\nAm7 D\nabc\n"

    def test_empty_song(self) -> None:
        assert render_above(Song()) == "{title: }\n"

    def test_unlabeled_section_after_labelled_one_is_closed(self) -> None:
        song = Song(sections=[Section("Verse 1", [Line("Hello")]), Section(lines=[Line("World")])])
        assert render_above(song) == "{title: }\n\n[Verse 1]\nHello\n\n{end_of_verse}\nWorld\n"

    @pytest.mark.parametrize("lyrics", ["A", "Chorus", "{x}"])
    def test_ambiguous_lyrics_keep_inline_chords(self, lyrics: str) -> None:
        """Lyrics that would read back as chords, a label or a directive stay inline."""
        song = Song(title="X", sections=[Section(lines=[Line(lyrics, [ChordAtOffset("G", 0)])])])
        assert render_above(song) == f"{{title: X}}\n\n[G]{lyrics}\n"


class TestRenderChordPro:
    def test_minimal(self) -> None:
        text = render_chordpro(parse("Amazing Grace\nJohn Newton\nG       D\nAmazing grace"))
        assert text == "{title: Amazing Grace}\n{artist: John Newton}\n\n[G]Amazing [D]grace\n"

    def test_sections_and_metadata(self, song: Song) -> None:
        assert render_chordpro(song) == (
            "{title: Amazing Grace}\n"
            "{artist: John Newton}\n"
            "{key: G}\n"
            "\n"
            "{start_of_verse: Verse 1}\n"
            "[G]Amazing [D]grace\n"
            "[G]    [C]\n"
            "{end_of_verse}\n"
            "\n"
            "{start_of_solo: Solo}\n"
            "la [Em]la\n"
            "{end_of_solo}\n"
        )

    @pytest.mark.parametrize(
        "label, kind",
        [
            ("Chorus", "chorus"),
            ("Bridge 2", "bridge"),
            ("Intro", "intro"),
            ("Pre-Chorus", "pre_chorus"),
            ("Guitar Solo", "guitar"),
        ],
    )
    def test_labelled_sections_wrapped(self, label: str, kind: str) -> None:
        song = Song(title="X", sections=[Section(label=label, lines=[Line("Hi")])])
        text = render_chordpro(song)
        assert f"{{start_of_{kind}: {label}}}\nHi\n{{end_of_{kind}}}" in text

    def test_consecutive_unlabeled_sections_are_separated(self) -> None:
        song = Song(title="X", sections=[Section(lines=[Line("a")]), Section(lines=[Line("b")])])
        assert render_chordpro(song) == "{title: X}\n\na\n\n{end_of_section}\nb\n"


class TestRenderRoundTrip:
    """Rendered text parses back to the same song."""

    TEXTS = [
        "Amazing Grace\nJohn Newton\n{key: G}\n\nVerse 1\nG       D\nAmazing grace\n\nChorus\nC\nHow sweet",
        "{title: X}\n{tempo: 72}\n{ccli: 1}\n{copyright: PD}\n[G]One [D]two\n\n[C]  [G]\n\nOutro\n[Am]end",
        "Title\nArtist\nplain words\nG   D\n",
        "{title: X}\n{start_of_tab}\nriff\n{end_of_tab}",
        "{title: X}\n{start_of_solo: Guitar Solo}\n[Em]la la\n{comment: Pre-Chorus}\n[D]up",
        "Verse 1\nHello\n{end_of_verse}\nWorld",
        "{title: X}\na\n{end_of_verse}\nb\n{end_of_chorus}\nc",
        "{title: X}\n[G]A\n[C]Chorus\n[D]{x}\n[Em]Verse 2",
    ]

    @pytest.mark.parametrize("text", TEXTS)
    def test_chordpro(self, text: str) -> None:
        song = parse(text)
        again = parse(render_chordpro(song))
        again.raw = song.raw
        assert again == song

    @pytest.mark.parametrize("text", TEXTS)
    def test_above(self, text: str) -> None:
        song = parse(text)
        again = parse(render_above(song))
        again.raw = song.raw
        assert again == song
