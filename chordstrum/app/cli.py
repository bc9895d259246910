"""
Command Line Interface for chordstrum
=====================================

Render chord progressions to MIDI files from the terminal.

Usage Examples:
    # Four chords, pop strum, 100 BPM
    python -m chordstrum.app.cli C Am F G --pattern pop-strum --tempo 100 -o song.mid

    # Same progression moved from C to D before rendering
    python -m chordstrum.app.cli C Am F G --transpose C D

    # Real guitar voicings (one --frets per chord)
    python -m chordstrum.app.cli C G --frets x,3,2,0,1,0 --frets 3,2,0,0,0,3 \\
        --tuning 40,45,50,55,59,64

    # See every rhythm pattern
    python -m chordstrum.app.cli --list-patterns

    # Print the notes that were written
    python -m chordstrum.app.cli Em C G D --pattern travis-picking --show
"""

import argparse
import sys
from typing import List, Optional

from chordstrum.app.generate import InvalidRequestError, generate_midi, parse_midi_request, transpose
from chordstrum.midi.reader import read_midi
from chordstrum.rules.harmony import midi_to_note_name
from chordstrum.rules.strumming import PATTERN_NAMES, describe_pattern


# =============================================================================
# PART 1: ARGUMENT PARSER SETUP
# =============================================================================

def _int_list(text: str) -> List[int]:
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got '{text}'")


def _fret_list(text: str) -> List[str]:
    return [part.strip() for part in text.split(",")]


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="chordstrum",
        description="Render a chord progression to a Standard MIDI File.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chordstrum C Am F G --pattern pop-strum
  chordstrum Em C G D --pattern travis-picking --tempo 90 --show
  chordstrum --list-patterns
        """
    )

    parser.add_argument(
        "chords",
        nargs="*",
        help="Chord names in playing order (e.g. C Am F G)"
    )

    # ─────────────────────────────────────────────────────────────────────────
    # Playback settings
    # ─────────────────────────────────────────────────────────────────────────
    parser.add_argument("-p", "--pattern", default="quarter",
                        help="Rhythm pattern (default: quarter, see --list-patterns)")
    parser.add_argument("-t", "--tempo", type=int, default=120,
                        help="Tempo in BPM (default: 120)")
    parser.add_argument("--octave", type=int, default=4,
                        help="Base octave 2-6 for chords voiced by name (default: 4)")
    parser.add_argument("--beats", type=int, default=4,
                        help="Beats per chord (default: 4)")

    # ─────────────────────────────────────────────────────────────────────────
    # Fret voicing
    # ─────────────────────────────────────────────────────────────────────────
    parser.add_argument("--frets", type=_fret_list, action="append",
                        help="Fret positions for one chord, low string first, e.g. x,3,2,0,1,0 "
                             "(repeat once per chord)")
    parser.add_argument("--tuning", type=_int_list,
                        help="Open-string MIDI notes, e.g. 40,45,50,55,59,64")

    # ─────────────────────────────────────────────────────────────────────────
    # Actions and output
    # ─────────────────────────────────────────────────────────────────────────
    parser.add_argument("--transpose", nargs=2, metavar=("FROM", "TO"),
                        help="Transpose the chords from one key to another first")
    parser.add_argument("-o", "--output", default="progression.mid",
                        help="Output file (default: progression.mid)")
    parser.add_argument("--show", action="store_true",
                        help="Print the decoded note timeline")
    parser.add_argument("--list-patterns", action="store_true",
                        help="List every rhythm pattern and exit")

    return parser


# =============================================================================
# PART 2: OUTPUT FORMATTING
# =============================================================================

def format_pattern_table() -> str:
    """All patterns with their subdivision and one-cycle grid."""
    lines = [f"{'PATTERN':<20} {'SUBDIVISION':<11} {'GRID':<18} DESCRIPTION"]
    lines.append("─" * 78)
    for name in PATTERN_NAMES:
        info = describe_pattern(name)
        lines.append(
            f"{info['name']:<20} {info['subdivision']:<11} {info['grid']:<18} {info['description']}"
        )
    return "\n".join(lines)


def format_timeline(data: bytes) -> str:
    """One line per note: start time, length, velocity and note name."""
    summary = read_midi(data)
    lines = [f"Tempo: {summary.bpm:.0f} BPM   Division: {summary.division} ticks/quarter"]
    for span in summary.notes:
        start = summary.ticks_to_seconds(span.start)
        length = summary.ticks_to_seconds(span.duration)
        lines.append(
            f"  {start:7.3f}s  {length:6.3f}s  vel {span.velocity:3d}  {midi_to_note_name(span.note)}"
        )
    lines.append(f"Length: {summary.ticks_to_seconds(summary.length_ticks):.3f}s, "
                 f"{len(summary.notes)} notes")
    return "\n".join(lines)


# =============================================================================
# PART 3: RUNNING
# =============================================================================

def run(args: argparse.Namespace) -> int:
    """Carry out the parsed command. Returns the process exit code."""
    if args.list_patterns:
        print(format_pattern_table())
        return 0

    chords = args.chords
    if args.transpose:
        result = transpose({"from_key": args.transpose[0], "to_key": args.transpose[1],
                            "chords": chords})
        chords = [r.transposed for r in result.results]
        print(f"Transposed {result.semitones:+d} semitones: {' '.join(chords)}")

    request = parse_midi_request({
        "chords": chords,
        "tempo": args.tempo,
        "pattern": args.pattern,
        "octave": args.octave,
        "beats": args.beats,
        "frets": args.frets,
        "openMidi": args.tuning,
    })
    data = generate_midi(request)

    with open(args.output, "wb") as f:
        f.write(data)
    print(f"Wrote {len(data)} bytes to {args.output} "
          f"({len(request.chords)} chords, pattern={request.pattern}, {request.tempo} BPM)")

    if args.show:
        print(format_timeline(data))
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.list_patterns and not args.chords:
        parser.print_help()
        print("\n⚠️  Please give at least one chord or use --list-patterns", file=sys.stderr)
        sys.exit(1)

    try:
        code = run(args)
    except InvalidRequestError as e:
        print(f"❌ Invalid request: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"❌ Could not write {args.output}: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
