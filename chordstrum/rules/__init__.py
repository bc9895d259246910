"""
Rules Subpackage

The music rules behind MIDI generation:
    - harmony.py: chord symbol parsing, transposition, key distance
    - voicing.py: chord name or fret positions -> MIDI notes
    - strumming.py: the rhythm pattern catalog and its interpreter

Usage:
    from chordstrum.rules import resolve_chord_notes, get_pattern, render_pattern

    notes = resolve_chord_notes("Am", octave=4)          # [69, 72, 76]
    groups = render_pattern(get_pattern("rock-8th"), notes, 1920)
"""

from chordstrum.rules.harmony import (
    root_index,
    chord_suffix,
    transpose_chord,
    semitone_distance,
    transpose_progression,
)
from chordstrum.rules.voicing import resolve_from_quality, resolve_from_frets, resolve_chord_notes
from chordstrum.rules.strumming import PATTERNS, PATTERN_NAMES, get_pattern, render_pattern
