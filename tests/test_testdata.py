"""Tests that run the engine over the sample sheets in testdata."""

from pathlib import Path

import pytest

from chord_sheet import (
    above_to_inline,
    convert_to_flats,
    convert_to_sharps,
    guess_key,
    inline_to_above,
    is_inline_format,
    parse,
    parse_metadata,
    render_chordpro,
    song_from_nashville,
    song_to_nashville,
    transpose_song,
)

TESTDATA_DIR = Path(__file__).parent.parent / "testdata"


@pytest.fixture
def amazing_grace() -> str:
    """Load the chords-above sheet."""
    return (TESTDATA_DIR / "amazing_grace.txt").read_text(encoding="utf-8")


@pytest.fixture
def be_thou_my_vision() -> str:
    """Load the ChordPro sheet."""
    return (TESTDATA_DIR / "be_thou_my_vision.cho").read_text(encoding="utf-8")


class TestChordsAboveSheet:
    def test_metadata(self, amazing_grace):
        song = parse(amazing_grace)
        assert song.title == "Amazing Grace"
        assert song.artist == "John Newton"
        assert song.key == "G"

    def test_sections(self, amazing_grace):
        song = parse(amazing_grace)
        assert [s.label for s in song.sections] == ["Verse 1", "Chorus", "Outro"]
        assert [len(s.lines) for s in song.sections] == [2, 2, 1]

    def test_chord_columns(self, amazing_grace):
        song = parse(amazing_grace)
        first = song.sections[0].lines[0]
        assert first.lyrics == "Amazing grace, how sweet the sound"
        assert [(c.chord, c.offset) for c in first.chords] == [("G", 0), ("G7", 16), ("C", 26), ("G", 32)]

    def test_instrumental_outro(self, amazing_grace):
        outro = parse(amazing_grace).sections[-1].lines[0]
        assert outro.is_chord_only
        assert [(c.chord, c.offset) for c in outro.chords] == [("G", 0), ("D", 4), ("G", 8)]

    def test_layout_detection(self, amazing_grace):
        assert not is_inline_format(amazing_grace)
        assert is_inline_format(above_to_inline(amazing_grace))

    def test_inline_conversion_keeps_content(self, amazing_grace):
        """Converting the layout does not change what the sheet parses to."""
        inline = above_to_inline(amazing_grace)
        assert parse(inline).sections == parse(amazing_grace).sections
        assert inline_to_above(inline) == amazing_grace

    def test_guessed_key_matches_declared(self, amazing_grace):
        song = parse(amazing_grace)
        song.key = ""
        assert guess_key(song) == "G"

    def test_metadata_only(self, amazing_grace):
        meta = parse_metadata(amazing_grace)
        assert (meta.title, meta.artist) == ("Amazing Grace", "John Newton")


class TestChordProSheet:
    def test_metadata(self, be_thou_my_vision):
        song = parse(be_thou_my_vision)
        assert song.title == "Be Thou My Vision"
        assert song.artist == "Traditional Irish"
        assert song.key == "D"
        assert song.tempo == "90"
        assert song.ccli == "30639"
        assert song.copyright == "Public Domain"

    def test_sections(self, be_thou_my_vision):
        song = parse(be_thou_my_vision)
        assert [s.label for s in song.sections] == ["Verse 1", "Chorus", "Instrumental"]
        assert [len(s.lines) for s in song.sections] == [2, 1, 1]

    def test_first_line(self, be_thou_my_vision):
        line = parse(be_thou_my_vision).sections[0].lines[0]
        assert line.lyrics == "Be thou my vision, O Lord of my heart"
        assert [(c.chord, c.offset) for c in line.chords] == [("D", 0), ("G", 11), ("D", 21)]

    def test_chord_sequence(self, be_thou_my_vision):
        chords = [c.chord for c in parse(be_thou_my_vision).iter_chords()]
        assert chords == ["D", "G", "D", "Bm", "Em", "A", "G", "D", "Bm", "A", "D", "G", "A", "D"]

    def test_transpose(self, be_thou_my_vision):
        song = parse(be_thou_my_vision)
        transpose_song(song, 2)
        assert song.key == "E"
        assert [c.chord for c in song.sections[1].lines[0].chords] == ["A", "E", "C#m", "B"]

    def test_nashville_round_trip(self, be_thou_my_vision):
        song = parse(be_thou_my_vision)
        assert song_to_nashville(song) == "D"
        assert [c.chord for c in song.sections[1].lines[0].chords] == ["4", "1", "6m", "5"]
        song_from_nashville(song)
        assert song == parse(be_thou_my_vision)

    def test_guessed_key_matches_declared(self, be_thou_my_vision):
        song = parse(be_thou_my_vision)
        song.key = ""
        assert guess_key(song) == "D"

    def test_render_round_trip(self, be_thou_my_vision):
        song = parse(be_thou_my_vision)
        again = parse(render_chordpro(song))
        assert again.sections == song.sections
        assert (again.title, again.artist, again.key) == (song.title, song.artist, song.key)

    def test_accidentals_round_trip(self, be_thou_my_vision):
        flats = convert_to_flats(be_thou_my_vision)
        assert flats == be_thou_my_vision
        transposed = render_chordpro(parse(be_thou_my_vision))
        assert convert_to_sharps(convert_to_flats(transposed)) == transposed

    def test_metadata_only(self, be_thou_my_vision):
        meta = parse_metadata(be_thou_my_vision)
        assert (meta.title, meta.artist) == ("Be Thou My Vision", "Traditional Irish")
