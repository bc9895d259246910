"""
App Subpackage

The user-facing layer:
    - generate.py: request façade (validate, default, render to MIDI bytes)
    - cli.py: command-line tool
    - api.py: REST API using FastAPI

Usage options:
    - Python: from chordstrum.app.generate import generate_midi
    - CLI: python -m chordstrum.app.cli C Am F G --pattern pop-strum
    - API: uvicorn chordstrum.app.api:app --reload
"""

from chordstrum.app.generate import InvalidRequestError, generate_midi, transpose
