"""
Test Package

Contains unit tests for all modules.
Run with: pytest tests/ -v

Test files follow the pattern:
    test_<module_name>.py

Example:
    tests/test_harmony.py     - Tests for chordstrum/rules/harmony.py
    tests/test_strumming.py   - Tests for chordstrum/rules/strumming.py
    tests/test_midi.py        - Tests for chordstrum/midi/
"""
