"""
Configuration constants for chordstrum.

Everything here is a plain module-level constant. The only values read from
the environment are the ones that matter when running the HTTP server.
"""

import os


# =============================================================================
# MIDI FILE LAYOUT
# =============================================================================

TICKS_PER_QUARTER = 480   # SMF division (ticks per quarter note)
MIDI_CHANNEL = 0          # everything plays on the first channel
MIDI_MIN = 0
MIDI_MAX = 127
MIDI_MEDIA_TYPE = "audio/midi"


# =============================================================================
# REQUEST DEFAULTS
# =============================================================================

DEFAULT_TEMPO = 120
DEFAULT_OCTAVE = 4
MIN_OCTAVE = 2
MAX_OCTAVE = 6
DEFAULT_BEATS = 4
MAX_BEATS = 0x0FFFFFFF // TICKS_PER_QUARTER   # longest chord whose length fits one delta time

# An empty pattern string becomes DEFAULT_PATTERN at the request layer, while
# a name the engine does not know falls back to FALLBACK_PATTERN.
DEFAULT_PATTERN = "quarter"
FALLBACK_PATTERN = "whole"


# =============================================================================
# ENVIRONMENT
# =============================================================================

LOG_LEVEL = os.environ.get("CHORDSTRUM_LOG_LEVEL", "INFO").upper()
API_HOST = os.environ.get("CHORDSTRUM_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("CHORDSTRUM_PORT", "8080"))
