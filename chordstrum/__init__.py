"""
chordstrum - Source Package

Turns chord progressions into playable Standard MIDI Files, with 31 strum,
pick and arpeggio rhythms.

Subpackages:
    - chordstrum.rules: chord parsing, voicing and the rhythm pattern engine
    - chordstrum.midi: SMF writer, event sequencer and reader
    - chordstrum.data: request / response schemas
    - chordstrum.app: façade, CLI and REST API

Example usage:
    from chordstrum.app.generate import generate_midi

    data = generate_midi({"chords": ["G", "D", "Em", "C"], "pattern": "travis-picking"})
    data[:4]    # b'MThd'
"""

__version__ = "0.1.0"
