"""
Data Subpackage

    - schema.py: Pydantic models for requests and responses

The core request is MidiRequest:
    - chords: list of chord names
    - tempo / pattern / octave / beats: playback settings (all defaulted)
    - frets / openMidi: optional fret-based voicing
"""

from chordstrum.data.schema import MidiRequest, TransposeRequest, TransposeResponse, TransposedChord
