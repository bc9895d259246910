"""
Strumming Module - Rhythm Patterns for Chord Playback

Every rhythm is plain data: a subdivision plus a cycle of slots.

    Subdivision   how a chord's time is cut up
                  (quarter, eighth, sixteenth, triplet, swing, ...)
    Slot          what happens in one cut: which notes sound, how hard,
                  and for what portion of the slot

A single interpreter (render_pattern) walks the cycle across however many
subdivisions fit the chord, looping the slots by position. Adding a rhythm
means adding an entry to PATTERNS, nothing else.

Grid notation used by pattern_to_grid():
    D = downstroke (low to high)    U = upstroke (high to low)
    B = bass / root note            x = single picked note
    _ = rest
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple

from chordstrum.config import FALLBACK_PATTERN, TICKS_PER_QUARTER
from chordstrum.rules.voicing import lower_octave, note_at


# =============================================================================
# SUBDIVISIONS
# =============================================================================

WHOLE = "whole"          # one slot for the whole chord
HALF = "half"            # two equal slots
QUARTER = "quarter"
EIGHTH = "eighth"
SIXTEENTH = "sixteenth"
TRIPLET = "triplet"      # eighth-note triplets
SWING = "swing"          # long-short pairs, 2/3 + 1/3 of a beat
PER_NOTE = "per-note"    # one equal slot per chord tone

FIXED_SUBDIVISION_TICKS = MappingProxyType({
    QUARTER: TICKS_PER_QUARTER,
    EIGHTH: TICKS_PER_QUARTER // 2,
    SIXTEENTH: TICKS_PER_QUARTER // 4,
    TRIPLET: TICKS_PER_QUARTER // 3,
})

SUBDIVISIONS = frozenset({WHOLE, HALF, SWING, PER_NOTE}) | frozenset(FIXED_SUBDIVISION_TICKS)


# =============================================================================
# NOTE SELECTION RULES
# =============================================================================

ALL = "all"                    # full chord, low to high
REVERSED = "reversed"          # full chord, high to low
ROOT = "root"                  # lowest note
BASS = "bass"                  # lowest note, one octave down
BASS_AND_ALL = "bass+all"      # bass note plus the full chord
UPPER = "upper"                # everything but the lowest note
OUTER = "outer"                # lowest and highest note together
INDEX = "index"                # one note by position (clamped)
ASCENDING = "ascending"        # walks up the chord, one note per slot
DESCENDING = "descending"      # walks down the chord, one note per slot
REST = "rest"

RULES = frozenset({
    ALL, REVERSED, ROOT, BASS, BASS_AND_ALL, UPPER, OUTER,
    INDEX, ASCENDING, DESCENDING, REST,
})

GRID_SYMBOLS = MappingProxyType({
    ALL: "D",
    BASS_AND_ALL: "D",
    UPPER: "D",
    REVERSED: "U",
    ROOT: "B",
    BASS: "B",
    OUTER: "x",
    INDEX: "x",
    ASCENDING: "x",
    DESCENDING: "x",
    REST: "_",
})


# =============================================================================
# DATA TYPES
# =============================================================================

@dataclass(frozen=True)
class Slot:
    """
    One step of a rhythm cycle.

    Attributes:
        rule: Which chord tones sound (one of RULES)
        velocity: MIDI velocity 1-127 (0 for rests)
        index: Note position for INDEX slots; negative counts from the top
        fraction: Portion of the slot that sounds before the note is released
    """
    rule: str
    velocity: int = 100
    index: int = 0
    fraction: float = 1.0

    def __post_init__(self):
        if self.rule not in RULES:
            raise ValueError(f"Unknown note rule: '{self.rule}'")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127. Got: {self.velocity}")
        if self.active and self.velocity == 0:
            raise ValueError("A sounding slot needs a velocity above 0")
        if not 0 < self.fraction <= 1:
            raise ValueError(f"Fraction must be in (0, 1]. Got: {self.fraction}")

    @property
    def active(self) -> bool:
        return self.rule != REST


@dataclass(frozen=True)
class Pattern:
    """
    A named rhythm: a subdivision and the slot cycle played across it.

    `lead` slots play once at the start of each chord, before the cycle
    begins; the cycle then repeats for the rest of the chord.
    """
    name: str
    subdivision: str
    slots: Tuple[Slot, ...]
    description: str = ""
    lead: Tuple[Slot, ...] = ()

    def __post_init__(self):
        if self.subdivision not in SUBDIVISIONS:
            raise ValueError(f"Unknown subdivision: '{self.subdivision}'")
        if not self.slots:
            raise ValueError(f"Pattern '{self.name}' has no slots")


@dataclass(frozen=True)
class NoteGroup:
    """
    What the sequencer plays for one slot.

    `pitches` is empty for rests. The group occupies `slot_ticks` of time,
    of which the first `sounding_ticks` are held.
    """
    pitches: Tuple[int, ...]
    slot_ticks: int
    sounding_ticks: int
    velocity: int


# =============================================================================
# PATTERN CATALOG
# =============================================================================

_ = Slot(REST, velocity=0)


def _hit(rule: str, velocity: int = 100, fraction: float = 1.0) -> Slot:
    return Slot(rule, velocity=velocity, fraction=fraction)


def _pick(index: int, velocity: int = 85) -> Slot:
    return Slot(INDEX, velocity=velocity, index=index)


def _strum_mask(mask: str, down: int, up: int) -> Tuple[Slot, ...]:
    # "1" on an even step is a downstroke, on an odd step an upstroke
    slots = []
    for step, flag in enumerate(mask):
        if flag != "1":
            slots.append(_)
        elif step % 2 == 0:
            slots.append(_hit(ALL, down))
        else:
            slots.append(_hit(REVERSED, up))
    return tuple(slots)


_CATALOG = (
    Pattern("whole", WHOLE, (_hit(ALL),),
            "One block chord held for the whole chord"),
    Pattern("half", HALF, (_hit(ALL),),
            "Two block chords, one per half"),
    Pattern("quarter", QUARTER, (_hit(ALL),),
            "Block chord on every beat"),
    Pattern("arpeggio-up", PER_NOTE, (_hit(ASCENDING),),
            "Chord tones one at a time, low to high"),
    Pattern("arpeggio-down", PER_NOTE, (_hit(DESCENDING),),
            "Chord tones one at a time, high to low"),
    Pattern("boom-chick", QUARTER, (_hit(UPPER, 90),),
            "Bass note an octave down, then upper-chord stabs",
            lead=(_hit(BASS),)),
    Pattern("pop-strum", EIGHTH,
            (_hit(ALL), _hit(ALL, 90), _hit(REVERSED, 80), _,
             _hit(REVERSED, 80), _hit(ALL, 95), _hit(REVERSED, 80), _),
            "D D U - U D U - on eighths"),
    Pattern("travis-picking", EIGHTH,
            (_pick(0, 95), _pick(-1, 75), _pick(1, 90), _pick(-1, 75)),
            "Alternating thumb bass against the top string"),
    Pattern("alberti-bass", EIGHTH,
            (_pick(0, 95), _pick(2, 75), _pick(1, 80), _pick(2, 75)),
            "Low-high-middle-high broken chord"),
    Pattern("triplet-arpeggio", TRIPLET, (_hit(ASCENDING, 85),),
            "Rising arpeggio in eighth-note triplets"),
    Pattern("pop-stabs", EIGHTH,
            (_hit(ALL, 105, 0.5), _, _hit(ALL, 95, 0.5), _hit(ALL, 100, 0.5),
             _, _hit(ALL, 95, 0.5), _, _),
            "Short syncopated chord stabs"),
    Pattern("bossa-nova", EIGHTH,
            (_hit(ALL, 95), _, _hit(UPPER, 80), _,
             _hit(ROOT, 90), _hit(UPPER, 80), _, _hit(UPPER, 80)),
            "Bass on 1 and 3 under a syncopated chord figure"),
    Pattern("reggae-skank", SIXTEENTH,
            (_, _, _, _, _hit(ALL), _, _, _),
            "Short chop on beats 2 and 4"),
    Pattern("funk-16th", SIXTEENTH,
            (_hit(ALL, 110, 0.5), _, _, _hit(REVERSED, 85, 0.5),
             _, _, _hit(ALL, 95, 0.5), _),
            "Staccato sixteenth-note funk scratch"),
    Pattern("jazz-swing", EIGHTH,
            (_hit(ALL, 95), _, _, _hit(ALL, 85), _, _, _, _),
            "Charleston comping: beat 1 and the and of 2"),
    Pattern("rock-8th", EIGHTH,
            (_hit(ALL, 105), _hit(REVERSED, 85)),
            "Straight down-up eighth-note strum"),
    Pattern("let-it-be", QUARTER,
            (_hit(BASS_AND_ALL), _hit(ALL, 80)),
            "Piano-style quarters with the bass on 1 and 3"),
    Pattern("stand-by-me", EIGHTH,
            (_hit(ROOT), _, _hit(ROOT, 85), _, _hit(ALL, 95), _, _hit(ALL, 80), _),
            "Root-root-chord-chord"),
    Pattern("creep-arpeggio", EIGHTH, (_hit(ASCENDING, 90),),
            "Rolling eighth-note arpeggio"),
    Pattern("twist-and-shout", EIGHTH,
            (_hit(ALL, 105), _, _hit(ALL, 95), _hit(REVERSED, 85),
             _, _hit(ALL, 95), _hit(REVERSED, 85), _hit(ALL)),
            "D - D U - D U D"),
    Pattern("blues-shuffle", SWING,
            (_hit(ALL), _hit(ALL, 75)),
            "Swung long-short chord pairs"),
    Pattern("sweet-home-alabama", EIGHTH,
            (_hit(ROOT), _hit(ROOT, 85), _hit(UPPER, 90), _hit(ROOT, 85),
             _hit(UPPER, 90), _hit(UPPER, 90), _hit(UPPER, 90), _hit(UPPER, 90)),
            "Root notes answered by upper-string chords"),
    Pattern("stairway-arpeggio", EIGHTH,
            (_pick(0), _pick(1), _pick(2), _pick(-1),
             _pick(-2), _pick(1), _pick(2), _pick(0)),
            "Up-and-back fingerpicked arpeggio"),
    Pattern("hotel-california", EIGHTH,
            (_pick(0, 95), _pick(2, 80), _pick(1, 80), _pick(3, 80)),
            "Four-note picked figure"),
    Pattern("wonderwall-strum", SIXTEENTH,
            _strum_mask("1010111010111111", down=100, up=80),
            "Busy sixteenth-note acoustic strum"),
    Pattern("blackbird-pick", EIGHTH,
            (_hit(OUTER, 95), _pick(1, 75)),
            "Bass and melody pinched together, inner note between"),
    Pattern("palm-mute-8th", EIGHTH,
            (_hit(ALL, 75, 0.5),),
            "Choked eighth-note chugs"),
    Pattern("off-beat-8th", EIGHTH,
            (_, _hit(ALL, 95)),
            "Chords on the off-beats only"),
    Pattern("country-alt-bass", QUARTER,
            (_hit(ROOT), _hit(ALL, 85), _pick(2, 95), _hit(ALL, 85)),
            "Alternating bass with strums in between"),
    Pattern("pima-arpeggio", EIGHTH,
            (_pick(0), _pick(1), _pick(2), _pick(-1),
             _pick(2), _pick(1), _pick(0), _pick(1)),
            "Classical p-i-m-a fingerpicking"),
    Pattern("four-on-the-floor", QUARTER,
            (_hit(ALL, 110, 0.75), _hit(ALL, 90, 0.75),
             _hit(ALL, 100, 0.75), _hit(ALL, 90, 0.75)),
            "Accented detached chord on every beat"),
)

PATTERNS: Mapping[str, Pattern] = MappingProxyType({p.name: p for p in _CATALOG})

PATTERN_NAMES = tuple(p.name for p in _CATALOG)


def get_pattern(name: str) -> Pattern:
    """Look up a pattern by name; unknown names (including "") play 'whole'."""
    return PATTERNS.get(name, PATTERNS[FALLBACK_PATTERN])


# =============================================================================
# INTERPRETER
# =============================================================================

def slot_lengths(subdivision: str, total_ticks: int, note_count: int) -> List[int]:
    """
    Cut `total_ticks` into slot lengths for a subdivision.

    The lengths always add up to `total_ticks`, so every chord lasts exactly
    its share of the track.
    """
    if total_ticks <= 0:
        return []

    if subdivision == WHOLE:
        return [total_ticks]

    if subdivision in (HALF, PER_NOTE):
        count = 2 if subdivision == HALF else max(note_count, 1)
        step = total_ticks // count
        if step == 0:
            return [total_ticks]
        lengths = [step] * count
        lengths[-1] += total_ticks - step * count
        return lengths

    if subdivision == SWING:
        long_ticks = TICKS_PER_QUARTER * 2 // 3
        short_ticks = TICKS_PER_QUARTER - long_ticks
        lengths = [long_ticks, short_ticks] * (total_ticks // TICKS_PER_QUARTER)
    else:
        step = FIXED_SUBDIVISION_TICKS[subdivision]
        lengths = [step] * (total_ticks // step)

    leftover = total_ticks - sum(lengths)
    if leftover:
        lengths.append(leftover)
    return lengths


def _unique(pitches: Sequence[int]) -> Tuple[int, ...]:
    seen = []
    for pitch in pitches:
        if pitch not in seen:
            seen.append(pitch)
    return tuple(seen)


def select_notes(slot: Slot, notes: Sequence[int], position: int = 0) -> Tuple[int, ...]:
    """
    Apply a slot's rule to a chord's notes.

    Args:
        slot: The slot being played
        notes: Sorted chord tones (may be empty)
        position: Running slot number within the chord, for walking rules
    """
    if not notes or not slot.active:
        return ()

    notes = tuple(notes)
    rule = slot.rule

    if rule == ALL:
        return notes
    if rule == REVERSED:
        return notes[::-1]
    if rule == ROOT:
        return notes[:1]
    if rule == BASS:
        return (lower_octave(notes[0]),)
    if rule == BASS_AND_ALL:
        return _unique((lower_octave(notes[0]),) + notes)
    if rule == UPPER:
        return notes[1:] or notes
    if rule == OUTER:
        return _unique((notes[0], notes[-1]))
    if rule == INDEX:
        return (note_at(notes, slot.index),)
    if rule == ASCENDING:
        return (notes[position % len(notes)],)
    if rule == DESCENDING:
        return (notes[len(notes) - 1 - position % len(notes)],)

    raise ValueError(f"Unknown note rule: '{rule}'")


def render_pattern(pattern: Pattern, notes: Sequence[int], total_ticks: int) -> List[NoteGroup]:
    """
    Expand a pattern over one chord.

    Returns one NoteGroup per slot, in time order. Rests (and every slot of
    an empty chord) come back with no pitches so the caller still advances
    time by `slot_ticks`.
    """
    groups = []
    lengths = slot_lengths(pattern.subdivision, total_ticks, len(notes))
    cycle = len(pattern.slots)

    for position, length in enumerate(lengths):
        if position < len(pattern.lead):
            slot = pattern.lead[position]
        else:
            slot = pattern.slots[(position - len(pattern.lead)) % cycle]
        pitches = select_notes(slot, notes, position)
        sounding = length
        if slot.fraction < 1:
            sounding = max(1, int(length * slot.fraction))
        groups.append(NoteGroup(pitches, length, sounding, slot.velocity))

    return groups


# =============================================================================
# PATTERN ANALYSIS
# =============================================================================

def pattern_to_grid(name: str) -> str:
    """Lead slots plus one cycle of a pattern as a grid string, e.g. 'DDU_UDU_'."""
    pattern = get_pattern(name)
    return "".join(GRID_SYMBOLS[slot.rule] for slot in pattern.lead + pattern.slots)


def describe_pattern(name: str) -> Dict:
    """Summarize a pattern's shape for display."""
    pattern = get_pattern(name)
    shown = pattern.lead + pattern.slots
    active = sum(1 for slot in shown if slot.active)
    return {
        "name": pattern.name,
        "subdivision": pattern.subdivision,
        "cycle_length": len(pattern.slots),
        "lead_length": len(pattern.lead),
        "active_slots": active,
        "rests": len(shown) - active,
        "density": active / len(shown),
        "grid": pattern_to_grid(pattern.name),
        "description": pattern.description,
    }
