"""
Test Suite - Basic Sanity Tests

These tests verify that the package structure is correct
and that basic imports work.

Run with: pytest tests/test_sanity.py -v
"""

import pytest


class TestPackageStructure:
    """Test that all packages can be imported."""

    def test_import_chordstrum(self):
        """Test that the main package can be imported."""
        import chordstrum
        assert hasattr(chordstrum, "__version__")
        assert chordstrum.__version__ == "0.1.0"

    def test_import_data_package(self):
        import chordstrum.data
        assert hasattr(chordstrum.data, "MidiRequest")

    def test_import_rules_package(self):
        import chordstrum.rules
        assert len(chordstrum.rules.PATTERNS) == 31

    def test_import_midi_package(self):
        import chordstrum.midi
        assert callable(chordstrum.midi.build_midi)

    def test_import_app_package(self):
        import chordstrum.app
        assert callable(chordstrum.app.generate_midi)


class TestConfiguration:
    """Test the constants every module relies on."""

    def test_midi_resolution(self):
        from chordstrum.config import TICKS_PER_QUARTER
        assert TICKS_PER_QUARTER == 480

    def test_pattern_defaults_differ(self):
        """Empty pattern and unknown pattern fall back to different rhythms."""
        from chordstrum.config import DEFAULT_PATTERN, FALLBACK_PATTERN
        assert DEFAULT_PATTERN == "quarter"
        assert FALLBACK_PATTERN == "whole"

    def test_logger_name(self):
        from chordstrum.logger_config import logger
        assert logger.name == "chordstrum"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
