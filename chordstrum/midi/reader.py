"""
Standard MIDI File reader.

Decodes a MIDI file back into timed notes. This is the same view a player
needs: which note starts when, for how long, and how hard. It is used by the
CLI timeline and by the tests.
"""

import io
from dataclasses import dataclass
from typing import Dict, List, Tuple

import mido


DEFAULT_USPQ = 500_000   # 120 BPM, used until a tempo event says otherwise


@dataclass(frozen=True)
class NoteSpan:
    """One sounding note, in ticks."""
    note: int
    start: int
    duration: int
    velocity: int

    @property
    def end(self) -> int:
        return self.start + self.duration


@dataclass(frozen=True)
class MidiSummary:
    division: int
    uspq: int
    notes: Tuple[NoteSpan, ...]
    length_ticks: int

    @property
    def bpm(self) -> float:
        return 60_000_000 / self.uspq if self.uspq else 0.0

    def ticks_to_seconds(self, ticks: int) -> float:
        return ticks * (self.uspq / 1_000_000) / self.division


def _load(data: bytes) -> mido.MidiFile:
    try:
        return mido.MidiFile(file=io.BytesIO(data))
    except (OSError, EOFError, KeyError, IndexError, ValueError) as e:
        raise ValueError(f"Not a readable MIDI file: {e}") from e


def read_midi(data: bytes) -> MidiSummary:
    """
    Decode an SMF into note spans.

    Note-offs (or note-ons at velocity 0) close the oldest open note of the
    same pitch. Only the first tempo event is used for timing.

    Raises:
        ValueError: If the data is not a complete MIDI file
    """
    midi = _load(data)

    uspq = None
    tick = 0
    held: Dict[int, List[Tuple[int, int]]] = {}
    spans = []

    for msg in mido.merge_tracks(midi.tracks):
        tick += msg.time

        if msg.type == "set_tempo" and uspq is None:
            uspq = msg.tempo
        elif msg.type == "note_on" and msg.velocity > 0:
            held.setdefault(msg.note, []).append((tick, msg.velocity))
        elif msg.type in ("note_on", "note_off"):
            starts = held.get(msg.note)
            if starts:
                start, velocity = starts.pop(0)
                spans.append(NoteSpan(msg.note, start, tick - start, velocity))

    spans.sort(key=lambda span: (span.start, span.note))
    return MidiSummary(midi.ticks_per_beat, uspq or DEFAULT_USPQ, tuple(spans), tick)
