"""
Schema definitions for chordstrum requests and responses.

These Pydantic models are the public contract of the package. A request
that gets through validation can always be turned into a MIDI file; the
only errors a caller ever sees come from here.

Defaulting rules (kept deliberately lenient):
    tempo   <= 0 or missing   -> 120
    octave  outside 2-6       -> 4
    beats   <= 0 or missing   -> 4 (also when too long to encode)
    pattern "" or missing     -> "quarter"
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chordstrum.config import (
    DEFAULT_BEATS,
    DEFAULT_OCTAVE,
    DEFAULT_PATTERN,
    DEFAULT_TEMPO,
    MAX_BEATS,
    MAX_OCTAVE,
    MIN_OCTAVE,
)


# =============================================================================
# MIDI GENERATION
# =============================================================================

class MidiRequest(BaseModel):
    """
    Everything needed to render a chord progression to MIDI.

    Attributes:
        chords: Chord names in playing order (at least one)
        tempo: Beats per minute
        pattern: Rhythm pattern name (see chordstrum.rules.strumming)
        octave: Base octave for chords voiced by name
        beats: Beats each chord lasts
        frets: Optional per-chord fret positions, low string first ("x" = muted)
        open_midi: Optional open-string MIDI notes (JSON key "openMidi")

    Example:
        >>> request = MidiRequest(chords=["C", "Am", "F", "G"], pattern="pop-strum")
        >>> request.tempo
        120
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chords: List[str] = Field(
        ...,
        min_length=1,
        description="Chord names in playing order",
        examples=[["C", "Am", "F", "G"]]
    )

    tempo: int = Field(
        default=DEFAULT_TEMPO,
        description="Tempo in beats per minute",
        examples=[90, 120]
    )

    pattern: str = Field(
        default=DEFAULT_PATTERN,
        description="Rhythm pattern name",
        examples=["quarter", "pop-strum", "travis-picking"]
    )

    octave: int = Field(
        default=DEFAULT_OCTAVE,
        description="Base octave (2-6) for chords voiced by name",
        examples=[3, 4]
    )

    beats: int = Field(
        default=DEFAULT_BEATS,
        description="Beats per chord",
        examples=[2, 4]
    )

    frets: Optional[List[List[str]]] = Field(
        default=None,
        description="Per-chord fret positions, 'x' for a muted string",
        examples=[[["x", "3", "2", "0", "1", "0"]]]
    )

    open_midi: Optional[List[int]] = Field(
        default=None,
        alias="openMidi",
        description="MIDI note of each open string, low string first",
        examples=[[40, 45, 50, 55, 59, 64]]
    )

    # ---------------------------
    # Custom Validators
    # ---------------------------

    @field_validator("tempo", mode="before")
    @classmethod
    def default_tempo(cls, v: Any) -> Any:
        if v is None:
            return DEFAULT_TEMPO
        return v

    @field_validator("tempo")
    @classmethod
    def positive_tempo(cls, v: int) -> int:
        return v if v > 0 else DEFAULT_TEMPO

    @field_validator("octave", mode="before")
    @classmethod
    def default_octave(cls, v: Any) -> Any:
        return DEFAULT_OCTAVE if v is None else v

    @field_validator("octave")
    @classmethod
    def octave_in_range(cls, v: int) -> int:
        if not MIN_OCTAVE <= v <= MAX_OCTAVE:
            return DEFAULT_OCTAVE
        return v

    @field_validator("beats", mode="before")
    @classmethod
    def default_beats(cls, v: Any) -> Any:
        return DEFAULT_BEATS if v is None else v

    @field_validator("beats")
    @classmethod
    def beats_in_range(cls, v: int) -> int:
        # chords too long for a single delta time play at the default length
        if v <= 0 or v > MAX_BEATS:
            return DEFAULT_BEATS
        return v

    @field_validator("pattern", mode="before")
    @classmethod
    def default_pattern(cls, v: Any) -> Any:
        # unknown names are kept; the pattern engine plays them as 'whole'
        if v is None or v == "":
            return DEFAULT_PATTERN
        return v

    @field_validator("frets", mode="before")
    @classmethod
    def frets_as_strings(cls, v: Any) -> Any:
        """Accept numeric frets (3) as well as strings ("3")."""
        if not isinstance(v, list):
            return v
        return [
            [str(f) if isinstance(f, int) and not isinstance(f, bool) else f for f in row]
            if isinstance(row, list) else row
            for row in v
        ]


# =============================================================================
# TRANSPOSITION
# =============================================================================

class TransposeRequest(BaseModel):
    """Move a list of chords from one key to another."""
    from_key: str = Field(..., description="Current key, e.g. 'C'")
    to_key: str = Field(..., description="Target key, e.g. 'G'")
    chords: List[str] = Field(..., description="Chord names to transpose")


class TransposedChord(BaseModel):
    original: str
    transposed: str


class TransposeResponse(BaseModel):
    semitones: int
    results: List[TransposedChord]
