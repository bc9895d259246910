"""
Request Façade - MIDI Generation Entry Point
============================================

This is the MAIN entry point for turning a chord progression into MIDI.

The flow:
    1. Validate and default the request (MidiRequest)
    2. Voice each chord (fret positions or chord name)
    3. Expand the rhythm pattern over each chord
    4. Write note events and wrap them in a Standard MIDI File
    5. Return the raw bytes

Only step 1 can fail. Everything after it absorbs bad musical input
(unknown chords, missing tunings, short fret lists) with fallbacks.

Usage:
    from chordstrum.app.generate import generate_midi

    data = generate_midi({"chords": ["C", "Am", "F", "G"], "pattern": "pop-strum"})
    with open("progression.mid", "wb") as f:
        f.write(data)
"""

from typing import Any, Dict, List, Mapping, Union

from pydantic import ValidationError

from chordstrum.data.schema import MidiRequest, TransposeRequest, TransposeResponse, TransposedChord
from chordstrum.logger_config import logger
from chordstrum.midi.sequencer import build_midi
from chordstrum.rules.harmony import transpose_progression


class InvalidRequestError(ValueError):
    """
    A request that does not have the right shape (missing chords, a tempo
    that is not a number, ...). This is the only error the façade raises.

    Attributes:
        errors: Pydantic error details, one dict per problem
    """

    def __init__(self, message: str, errors: List[Dict[str, Any]]):
        super().__init__(message)
        self.errors = errors


def _validate(model, payload):
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        logger.warning("Rejected %s: %d validation error(s)", model.__name__, len(errors))
        raise InvalidRequestError(summarize_errors(errors), errors) from e


def summarize_errors(errors: List[Dict[str, Any]]) -> str:
    parts = []
    for err in errors:
        location = ".".join(str(part) for part in err.get("loc", ())) or "request"
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse_midi_request(payload: Union[MidiRequest, Mapping[str, Any]]) -> MidiRequest:
    """Validate a mapping (e.g. decoded JSON) into a defaulted MidiRequest."""
    return _validate(MidiRequest, payload)


def generate_midi(payload: Union[MidiRequest, Mapping[str, Any]]) -> bytes:
    """
    Render a chord progression to Standard MIDI File bytes.

    Args:
        payload: A MidiRequest, or a mapping with the same fields
                 (JSON key "openMidi" is accepted for open_midi)

    Returns:
        Format-0, single-track SMF bytes at 480 ticks per quarter note

    Raises:
        InvalidRequestError: If the request has the wrong shape
    """
    request = parse_midi_request(payload)

    logger.debug(
        "Generating MIDI: %d chord(s), pattern=%s, tempo=%d, beats=%d, octave=%d, fret_mode=%s",
        len(request.chords),
        request.pattern,
        request.tempo,
        request.beats,
        request.octave,
        bool(request.frets and request.open_midi),
    )

    return build_midi(
        chords=request.chords,
        pattern=request.pattern,
        tempo=request.tempo,
        beats=request.beats,
        octave=request.octave,
        frets=request.frets,
        open_midi=request.open_midi,
    )


def transpose(payload: Union[TransposeRequest, Mapping[str, Any]]) -> TransposeResponse:
    """
    Transpose a list of chords from one key to another.

    Unknown keys give a shift of 0 and unreadable chords pass through
    unchanged, so this only fails on a malformed request.
    """
    request = _validate(TransposeRequest, payload)
    semitones, pairs = transpose_progression(request.from_key, request.to_key, request.chords)
    return TransposeResponse(
        semitones=semitones,
        results=[TransposedChord(original=o, transposed=t) for o, t in pairs],
    )
