#!/usr/bin/env python3
"""CLI tool to parse a chord sheet and export it.

Usage:
    python examples/parse_sheet.py <input_file> [-o output_file]

Examples:
    python examples/parse_sheet.py testdata/amazing_grace.txt --pretty
    python examples/parse_sheet.py testdata/be_thou_my_vision.cho --transpose 2 --format above
    python examples/parse_sheet.py testdata/amazing_grace.txt --nashville --format chordpro
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

from chord_sheet import (
    Song,
    parse,
    render_above,
    render_chordpro,
    song_to_nashville,
    transpose_song,
    transposition_name,
)


def song_to_dict(song: Song) -> dict[str, Any]:
    """Convert a Song to a JSON-serializable dict."""
    data = dataclasses.asdict(song)
    data.pop("raw")
    return data


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Parse a chord sheet and export to JSON, ChordPro or chords-above text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s testdata/amazing_grace.txt
  %(prog)s testdata/amazing_grace.txt -o output.json --pretty
  %(prog)s testdata/be_thou_my_vision.cho --transpose -3 --format above
        """,
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Input sheet file to parse",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--format",
        choices=("json", "above", "chordpro"),
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--transpose",
        type=int,
        default=0,
        metavar="SEMITONES",
        help="Transpose all chords by this many semitones",
    )
    parser.add_argument(
        "--nashville",
        action="store_true",
        help="Write chords as Nashville numbers",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        song = parse(args.input.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    if args.transpose:
        transpose_song(song, args.transpose)
        print(f"Transposed {transposition_name(args.transpose)}", file=sys.stderr)

    if args.nashville:
        key = song_to_nashville(song)
        if key is None:
            print("Warning: no key found, chords left as written", file=sys.stderr)
        else:
            print(f"Nashville numbers relative to {key}", file=sys.stderr)

    if args.format == "above":
        output = render_above(song)
    elif args.format == "chordpro":
        output = render_chordpro(song)
    else:
        indent = 2 if args.pretty else None
        output = json.dumps(song_to_dict(song), indent=indent, ensure_ascii=False)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote output to {args.output}")
    else:
        print(output, end="" if output.endswith("\n") else "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
