"""
Harmony Module - Chord Symbol Rules

This module knows how to take a chord name apart and put it back together:
    1. Find the root pitch class of a chord symbol ("F#m7" -> 6)
    2. Split off the quality suffix ("F#m7" -> "m7")
    3. Transpose a chord symbol by a number of semitones
    4. Measure the distance between two keys
    5. Transpose a whole progression from one key to another

Nothing in here raises for unknown musical input. A chord whose root cannot
be read is passed through untouched, and an unknown key gives a distance of 0.
"""

from types import MappingProxyType
from typing import List, Optional, Tuple


# =============================================================================
# CONSTANTS
# =============================================================================

# The 12 notes in Western music, spelled with sharps
CHROMATIC_SCALE = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# Enharmonic equivalents (flats -> sharps)
FLAT_TO_SHARP = MappingProxyType({
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
})

ACCIDENTALS = ("#", "b")

# Semitone intervals above the root for every chord quality we voice.
# Anything not listed here is played as a major triad.
QUALITY_INTERVALS = MappingProxyType({
    "":      (0, 4, 7),
    "m":     (0, 3, 7),
    "7":     (0, 4, 7, 10),
    "maj7":  (0, 4, 7, 11),
    "m7":    (0, 3, 7, 10),
    "dim":   (0, 3, 6),
    "aug":   (0, 4, 8),
    "sus2":  (0, 2, 7),
    "sus4":  (0, 5, 7),
    "6":     (0, 4, 7, 9),
    "m6":    (0, 3, 7, 9),
    "add9":  (0, 4, 7, 14),
    "madd9": (0, 3, 7, 14),
})

MAJOR_TRIAD = QUALITY_INTERVALS[""]


# =============================================================================
# CHORD SYMBOL PARSING
# =============================================================================

def _root_length(chord: str) -> int:
    """Number of leading characters that spell the root (0, 1 or 2)."""
    if not chord:
        return 0
    if len(chord) > 1 and chord[1] in ACCIDENTALS:
        return 2
    return 1


def root_index(chord: str) -> Optional[int]:
    """
    Get the pitch class (0-11) of a chord's root, or None if unreadable.

    Examples:
        >>> root_index("C")
        0
        >>> root_index("Bbm")
        10
        >>> root_index("") is None
        True
    """
    length = _root_length(chord)
    if length == 0:
        return None

    root = chord[:length]
    root = FLAT_TO_SHARP.get(root, root)

    if root not in CHROMATIC_SCALE:
        return None
    return CHROMATIC_SCALE.index(root)


def chord_suffix(chord: str) -> str:
    """Everything after the root letter and its accidental ("" means major)."""
    return chord[_root_length(chord):]


def quality_intervals(chord: str) -> Tuple[int, ...]:
    """Intervals for a chord's quality, falling back to the major triad."""
    return QUALITY_INTERVALS.get(chord_suffix(chord), MAJOR_TRIAD)


# =============================================================================
# TRANSPOSITION
# =============================================================================

def transpose_chord(chord: str, semitones: int) -> str:
    """
    Shift a chord symbol by a number of semitones (negative is fine).

    The new root is always spelled with a sharp. A chord whose root cannot
    be read comes back unchanged.

    Examples:
        >>> transpose_chord("F#m7", 6)
        'Cm7'
        >>> transpose_chord("Bb", 2)
        'C'
        >>> transpose_chord("N.C.", 3)
        'N.C.'
    """
    index = root_index(chord)
    if index is None:
        return chord

    new_index = ((index + semitones) % 12 + 12) % 12
    return CHROMATIC_SCALE[new_index] + chord_suffix(chord)


def _key_index(key: str) -> Optional[int]:
    # A key name is a bare root: "C", "F#", "Bb". "Am" is not a key name here.
    if chord_suffix(key):
        return None
    return root_index(key)


def semitone_distance(from_key: str, to_key: str) -> int:
    """
    Semitones (0-11) needed to move from one key to another.

    Unknown key names give 0 so that a bad key never fails a request.
    """
    start = _key_index(from_key)
    end = _key_index(to_key)
    if start is None or end is None:
        return 0
    return ((end - start) + 12) % 12


def transpose_progression(
    from_key: str,
    to_key: str,
    chords: List[str]
) -> Tuple[int, List[Tuple[str, str]]]:
    """
    Transpose every chord of a progression from one key to another.

    Returns:
        (semitones, [(original, transposed), ...])
    """
    semitones = semitone_distance(from_key, to_key)
    pairs = [(chord, transpose_chord(chord, semitones)) for chord in chords]
    return semitones, pairs


# =============================================================================
# DISPLAY HELPERS
# =============================================================================

def midi_to_note_name(note: int) -> str:
    """Scientific pitch name of a MIDI note (60 -> 'C4')."""
    octave = note // 12 - 1
    return f"{CHROMATIC_SCALE[note % 12]}{octave}"
