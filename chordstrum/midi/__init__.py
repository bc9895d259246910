"""
MIDI Subpackage

    - smf.py: byte builders for a format-0 Standard MIDI File
    - sequencer.py: chord progression + pattern -> track events
    - reader.py: decode a generated file back into timed notes

Usage:
    from chordstrum.midi import build_midi

    data = build_midi(["C", "Am", "F", "G"], "pop-strum", tempo=100, beats=4, octave=4)
    open("song.mid", "wb").write(data)
"""

from chordstrum.midi.reader import MidiSummary, NoteSpan, read_midi
from chordstrum.midi.sequencer import build_midi, build_track
from chordstrum.midi.smf import build_file, var_len
