"""
Event sequencer - chord progression in, MIDI track bytes out.

For each chord the sequencer resolves the notes, asks the pattern engine for
one NoteGroup per slot, and writes the groups as note on/off events:

    - all note-ons of a group share one start time; the first one carries
      whatever delta has built up since the previous event
    - all note-offs share one release time `sounding_ticks` later; the first
      one carries that delta
    - rests, and the unsounded tail of a slot, are carried forward as
      pending delta into the next event (or into end-of-track)

A group's note-offs therefore always come before the next group's note-ons,
and every note-on has exactly one note-off.
"""

from typing import List, Optional, Sequence

from chordstrum.config import MIDI_CHANNEL, TICKS_PER_QUARTER
from chordstrum.midi.smf import (
    build_file,
    end_of_track,
    note_off_event,
    note_on_event,
    tempo_event,
)
from chordstrum.rules.strumming import NoteGroup, get_pattern, render_pattern
from chordstrum.rules.voicing import resolve_chord_notes


def _frets_for(frets: Optional[Sequence[Sequence[str]]], chord_index: int) -> Optional[Sequence[str]]:
    if frets and chord_index < len(frets):
        return frets[chord_index]
    return None


def write_group(track: bytearray, group: NoteGroup, pending: int, channel: int = MIDI_CHANNEL) -> int:
    """
    Append one NoteGroup to `track`.

    Returns:
        The delta still pending after the group (time not yet written).
    """
    if not group.pitches:
        return pending + group.slot_ticks

    for i, pitch in enumerate(group.pitches):
        delta = pending if i == 0 else 0
        track += note_on_event(delta, channel, pitch, group.velocity)

    for i, pitch in enumerate(group.pitches):
        delta = group.sounding_ticks if i == 0 else 0
        track += note_off_event(delta, channel, pitch)

    return group.slot_ticks - group.sounding_ticks


def build_track(
    chords: List[str],
    pattern: str,
    tempo: int,
    beats: int,
    octave: int,
    frets: Optional[Sequence[Sequence[str]]] = None,
    open_midi: Optional[Sequence[int]] = None
) -> bytes:
    """
    Build the MTrk payload (no chunk header) for a chord progression.

    Args:
        chords: Chord names in playing order
        pattern: Rhythm name; unknown names play 'whole'
        tempo: Beats per minute, > 0
        beats: Beats per chord
        octave: Base octave for chords voiced by name
        frets: Optional per-chord fret positions ("x" = muted)
        open_midi: Optional open-string MIDI notes for fret voicing
    """
    rhythm = get_pattern(pattern)
    chord_ticks = TICKS_PER_QUARTER * beats

    track = bytearray(tempo_event(tempo))
    pending = 0

    for chord_index, chord in enumerate(chords):
        notes = resolve_chord_notes(chord, octave, _frets_for(frets, chord_index), open_midi)
        for group in render_pattern(rhythm, notes, chord_ticks):
            pending = write_group(track, group, pending)

    track += end_of_track(pending)
    return bytes(track)


def build_midi(
    chords: List[str],
    pattern: str,
    tempo: int,
    beats: int,
    octave: int,
    frets: Optional[Sequence[Sequence[str]]] = None,
    open_midi: Optional[Sequence[int]] = None
) -> bytes:
    """Complete SMF bytes for a chord progression."""
    return build_file(build_track(chords, pattern, tempo, beats, octave, frets, open_midi))
