"""
Standard MIDI File writer.

Low-level byte builders for a format-0 SMF: variable-length delta times,
note on/off channel messages, the tempo and end-of-track meta events, and
the MThd/MTrk chunk wrapper.
"""

import struct

from chordstrum.config import TICKS_PER_QUARTER


MAX_VAR_LEN = 0x0FFFFFFF   # largest value four varint bytes can hold
MAX_TEMPO_USPQ = 0xFFFFFF

NOTE_ON = 0x90
NOTE_OFF = 0x80
META = 0xFF
META_TEMPO = 0x51
META_END_OF_TRACK = 0x2F

HEADER_LENGTH = 6
SMF_FORMAT = 0
TRACK_COUNT = 1


def var_len(value: int) -> bytes:
    """
    Encode a MIDI variable-length quantity.

    Seven bits per byte, most significant group first, with the high bit set
    on every byte except the last.

    Examples:
        >>> var_len(0x7F)
        b'\\x7f'
        >>> var_len(0x80)
        b'\\x81\\x00'
    """
    if not 0 <= value <= MAX_VAR_LEN:
        raise ValueError(f"Variable-length value out of range: {value}")

    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(groups))


def note_on_event(delta: int, channel: int, note: int, velocity: int) -> bytes:
    return var_len(delta) + bytes((NOTE_ON | channel, note, velocity))


def note_off_event(delta: int, channel: int, note: int) -> bytes:
    return var_len(delta) + bytes((NOTE_OFF | channel, note, 0))


def tempo_event(bpm: int) -> bytes:
    """Set-tempo meta event at delta 0 (microseconds per quarter, 3 bytes)."""
    if bpm <= 0:
        raise ValueError(f"Tempo must be positive. Got: {bpm}")
    # tempos under 4 BPM would not fit in three bytes; hold them at the slowest
    uspq = min(60_000_000 // bpm, MAX_TEMPO_USPQ)
    return bytes((0x00, META, META_TEMPO, 0x03)) + uspq.to_bytes(3, "big")


def end_of_track(delta: int = 0) -> bytes:
    return var_len(delta) + bytes((META, META_END_OF_TRACK, 0x00))


def build_file(track: bytes) -> bytes:
    """Wrap track data in a complete format-0, single-track SMF."""
    header = b"MThd" + struct.pack(
        ">IHHH", HEADER_LENGTH, SMF_FORMAT, TRACK_COUNT, TICKS_PER_QUARTER
    )
    return header + b"MTrk" + struct.pack(">I", len(track)) + track
