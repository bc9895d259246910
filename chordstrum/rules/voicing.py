"""
Voicing Module - Turning Chords Into MIDI Notes

A chord can be voiced two ways:
    - From its NAME: root + quality intervals stacked from a base octave
    - From FRET POSITIONS: each fretted string's open note plus the fret

Fret positions win whenever they produce at least one note. Both paths
return a sorted list of unique MIDI notes in the 0-127 range; anything that
lands outside that range is dropped, never wrapped.
"""

from typing import List, Optional, Sequence

from chordstrum.config import MIDI_MAX, MIDI_MIN
from chordstrum.rules.harmony import quality_intervals, root_index


MUTED = "x"


def _in_midi_range(note: int) -> bool:
    return MIDI_MIN <= note <= MIDI_MAX


def resolve_from_quality(chord: str, base_octave: int) -> List[int]:
    """
    Voice a chord from its name, root position, starting at `base_octave`.

    Unknown roots are treated as C and unknown qualities as major, so this
    never returns an empty list for a sensible octave.

    Examples:
        >>> resolve_from_quality("C", 4)
        [60, 64, 67]
        >>> resolve_from_quality("Am", 4)
        [69, 72, 76]
    """
    root = root_index(chord)
    if root is None:
        root = 0

    base = 12 * (base_octave + 1) + root
    notes = [base + interval for interval in quality_intervals(chord)]
    return [note for note in notes if _in_midi_range(note)]


def resolve_from_frets(frets: Sequence[str], open_midi: Sequence[int]) -> List[int]:
    """
    Voice a chord from fret positions on a stringed instrument.

    Args:
        frets: One entry per string, low to high ("x" = muted)
        open_midi: MIDI note of each open string

    Strings past the end of the tuning and non-numeric frets are skipped.
    """
    pitches = []
    for string, fret in enumerate(frets):
        if fret == MUTED or string >= len(open_midi):
            continue
        try:
            fret_number = int(fret)
        except (TypeError, ValueError):
            continue
        pitches.append(open_midi[string] + fret_number)

    return sorted(set(p for p in pitches if _in_midi_range(p)))


def resolve_chord_notes(
    chord: str,
    octave: int,
    frets: Optional[Sequence[str]] = None,
    open_midi: Optional[Sequence[int]] = None
) -> List[int]:
    """Fret voicing when one is available and non-empty, else the chord name."""
    if frets and open_midi:
        notes = resolve_from_frets(frets, open_midi)
        if notes:
            return notes
    return resolve_from_quality(chord, octave)


# =============================================================================
# NOTE PICKING HELPERS
# =============================================================================

def lower_octave(note: int) -> int:
    """One octave down, or the note itself if that would leave the MIDI range."""
    if note < 12:
        return note
    return note - 12


def note_at(notes: Sequence[int], index: int) -> int:
    """
    Pick a note by position with clamping.

    Negative indexes count down from the top note. Anything outside the
    list sticks to the nearest end. `notes` must not be empty.
    """
    if index < 0:
        index += len(notes)
    index = max(0, min(index, len(notes) - 1))
    return notes[index]
