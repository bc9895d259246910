"""
Tests for chordstrum/app/ (request façade, REST API and CLI)

Run with: pytest tests/test_generate.py -v
"""

import inspect

import pytest
from fastapi.testclient import TestClient

from chordstrum.app.api import app, midi, transpose_chords
from chordstrum.app.cli import create_argument_parser, format_pattern_table, main
from chordstrum.app.generate import (
    InvalidRequestError,
    generate_midi,
    parse_midi_request,
    transpose,
)
from chordstrum.config import MAX_BEATS
from chordstrum.data.schema import MidiRequest
from chordstrum.midi import build_midi, read_midi
from chordstrum.rules.strumming import PATTERN_NAMES


GUITAR = [40, 45, 50, 55, 59, 64]


# =============================================================================
# REQUEST DEFAULTS
# =============================================================================

class TestRequestDefaults:

    def test_minimal_request(self):
        request = parse_midi_request({"chords": ["C"]})
        assert request.tempo == 120
        assert request.pattern == "quarter"
        assert request.octave == 4
        assert request.beats == 4
        assert request.frets is None
        assert request.open_midi is None

    @pytest.mark.parametrize("tempo", [0, -5, None])
    def test_bad_tempo_becomes_120(self, tempo):
        assert parse_midi_request({"chords": ["C"], "tempo": tempo}).tempo == 120

    @pytest.mark.parametrize("octave,expected", [(1, 4), (7, 4), (2, 2), (6, 6), (None, 4)])
    def test_octave_range(self, octave, expected):
        assert parse_midi_request({"chords": ["C"], "octave": octave}).octave == expected

    @pytest.mark.parametrize("beats,expected", [
        (0, 4), (-2, 4), (None, 4), (3, 3), (64, 64), (100, 100),
        (MAX_BEATS, MAX_BEATS), (MAX_BEATS + 1, 4),
    ])
    def test_beats(self, beats, expected):
        assert parse_midi_request({"chords": ["C"], "beats": beats}).beats == expected

    @pytest.mark.parametrize("pattern", ["", None])
    def test_empty_pattern_becomes_quarter(self, pattern):
        assert parse_midi_request({"chords": ["C"], "pattern": pattern}).pattern == "quarter"

    def test_unknown_pattern_is_kept(self):
        assert parse_midi_request({"chords": ["C"], "pattern": "polka"}).pattern == "polka"

    def test_open_midi_by_either_name(self):
        by_alias = parse_midi_request({"chords": ["C"], "openMidi": GUITAR})
        by_name = parse_midi_request({"chords": ["C"], "open_midi": GUITAR})
        assert by_alias.open_midi == by_name.open_midi == GUITAR

    def test_numeric_frets(self):
        request = parse_midi_request({"chords": ["G"], "frets": [[3, 2, 0, 0, 0, "3"]]})
        assert request.frets == [["3", "2", "0", "0", "0", "3"]]

    def test_request_is_immutable(self):
        request = MidiRequest(chords=["C"])
        with pytest.raises(Exception):
            request.tempo = 90


class TestInvalidRequests:

    @pytest.mark.parametrize("payload", [
        {},
        {"chords": []},
        {"chords": "C Am F G"},
        {"chords": ["C"], "tempo": "fast"},
        {"chords": ["C"], "openMidi": ["E2"]},
        ["C", "G"],
    ])
    def test_rejected(self, payload):
        with pytest.raises(InvalidRequestError) as exc_info:
            generate_midi(payload)
        assert exc_info.value.errors

    def test_error_names_the_field(self):
        with pytest.raises(InvalidRequestError) as exc_info:
            parse_midi_request({"chords": ["C"], "tempo": "fast"})
        assert "tempo" in str(exc_info.value)

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            generate_midi({"chords": []})


# =============================================================================
# FAÇADE
# =============================================================================

class TestGenerateMidi:

    def test_defaults_match_explicit_values(self):
        assert generate_midi({"chords": ["C", "G"]}) == \
            build_midi(["C", "G"], "quarter", 120, 4, 4)

    def test_accepts_a_model(self):
        request = MidiRequest(chords=["Am", "F"], pattern="pop-strum", tempo=96)
        assert generate_midi(request) == build_midi(["Am", "F"], "pop-strum", 96, 4, 4)

    def test_fret_voicing(self):
        data = generate_midi({
            "chords": ["C"],
            "pattern": "whole",
            "frets": [["x", "3", "2", "0", "1", "0"]],
            "openMidi": GUITAR,
        })
        assert [n.note for n in read_midi(data).notes] == [48, 52, 55, 60, 64]

    def test_unknown_chords_still_render(self):
        data = generate_midi({"chords": ["H7", "", "Cm"], "pattern": "whole"})
        starts = [n.start for n in read_midi(data).notes]
        assert sorted(set(starts)) == [0, 1920, 3840]

    def test_tempo_is_written(self):
        assert read_midi(generate_midi({"chords": ["C"], "tempo": 75})).bpm == pytest.approx(75)


def test_transpose_facade():
    result = transpose({"from_key": "C", "to_key": "D", "chords": ["C", "Am", "F", "G7"]})
    assert result.semitones == 2
    assert [(r.original, r.transposed) for r in result.results] == [
        ("C", "D"), ("Am", "Bm"), ("F", "G"), ("G7", "A7"),
    ]


def test_transpose_facade_rejects_missing_keys():
    with pytest.raises(InvalidRequestError):
        transpose({"chords": ["C"]})


# =============================================================================
# REST API
# =============================================================================

@pytest.fixture
def client():
    return TestClient(app)


class TestApi:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_midi(self, client):
        response = client.post("/api/midi", json={"chords": ["C", "Am", "F", "G"],
                                                  "pattern": "pop-strum"})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("audio/midi")
        assert response.content[:4] == b"MThd"
        assert response.content == build_midi(["C", "Am", "F", "G"], "pop-strum", 120, 4, 4)

    def test_empty_chords(self, client):
        response = client.post("/api/midi", json={"chords": []})
        assert response.status_code == 400
        body = response.json()
        assert "chords" in body["error"]
        assert body["details"]

    def test_bad_json(self, client):
        response = client.post("/api/midi", content=b"{not json",
                               headers={"content-type": "application/json"})
        assert response.status_code == 400
        assert "JSON" in response.json()["error"]

    @pytest.mark.parametrize("name", PATTERN_NAMES)
    def test_every_pattern(self, client, name):
        response = client.post("/api/midi", json={"chords": ["Em", "C"], "pattern": name})
        assert response.status_code == 200
        assert read_midi(response.content).length_ticks == 3840

    def test_transpose(self, client):
        response = client.post("/api/transpose",
                               json={"from_key": "G", "to_key": "C", "chords": ["G", "Em"]})
        assert response.status_code == 200
        assert response.json() == {
            "semitones": 5,
            "results": [
                {"original": "G", "transposed": "C"},
                {"original": "Em", "transposed": "Am"},
            ],
        }

    def test_transpose_bad_request(self, client):
        response = client.post("/api/transpose", json={"from_key": "G"})
        assert response.status_code == 400

    def test_bad_field(self, client):
        response = client.post("/api/midi", json={"chords": ["C"], "tempo": "fast"})
        assert response.status_code == 400
        body = response.json()
        assert "tempo" in body["error"]
        assert body["details"][0]["loc"] == ["body", "tempo"]

    def test_open_midi_alias(self, client):
        response = client.post("/api/midi", json={
            "chords": ["C"],
            "pattern": "whole",
            "frets": [["x", 3, 2, 0, 1, 0]],
            "openMidi": GUITAR,
        })
        assert response.status_code == 200
        assert [n.note for n in read_midi(response.content).notes] == [48, 52, 55, 60, 64]

    def test_long_chords_are_accepted(self, client):
        response = client.post("/api/midi", json={"chords": ["C"], "pattern": "whole",
                                                  "beats": 100})
        assert response.status_code == 200
        assert read_midi(response.content).length_ticks == 100 * 480

    def test_handlers_run_off_the_event_loop(self):
        # plain functions are run in FastAPI's threadpool
        assert not inspect.iscoroutinefunction(midi)
        assert not inspect.iscoroutinefunction(transpose_chords)


# =============================================================================
# CLI
# =============================================================================

class TestCli:

    def test_parser_defaults(self):
        args = create_argument_parser().parse_args(["C", "G"])
        assert args.chords == ["C", "G"]
        assert args.pattern == "quarter"
        assert args.tempo == 120
        assert args.output == "progression.mid"

    def test_parser_frets_and_tuning(self):
        args = create_argument_parser().parse_args(
            ["C", "--frets", "x,3,2,0,1,0", "--tuning", "40,45,50,55,59,64"]
        )
        assert args.frets == [["x", "3", "2", "0", "1", "0"]]
        assert args.tuning == GUITAR

    def test_writes_file(self, tmp_path, capsys):
        out = tmp_path / "song.mid"
        with pytest.raises(SystemExit) as exc_info:
            main(["C", "Am", "-p", "rock-8th", "-t", "100", "-o", str(out)])
        assert exc_info.value.code == 0
        assert out.read_bytes() == build_midi(["C", "Am"], "rock-8th", 100, 4, 4)
        assert "Wrote" in capsys.readouterr().out

    def test_fret_file(self, tmp_path):
        out = tmp_path / "frets.mid"
        with pytest.raises(SystemExit):
            main(["C", "-p", "whole", "--frets", "x,3,2,0,1,0",
                  "--tuning", "40,45,50,55,59,64", "-o", str(out)])
        assert [n.note for n in read_midi(out.read_bytes()).notes] == [48, 52, 55, 60, 64]

    def test_list_patterns(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--list-patterns"])
        assert exc_info.value.code == 0
        output = capsys.readouterr().out
        for name in PATTERN_NAMES:
            assert name in output

    def test_pattern_table_has_a_row_per_pattern(self):
        assert len(format_pattern_table().splitlines()) == 2 + len(PATTERN_NAMES)

    def test_no_chords(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1

    def test_show(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["C", "-p", "whole", "--show", "-o", str(tmp_path / "c.mid")])
        output = capsys.readouterr().out
        assert "C4" in output and "E4" in output and "G4" in output
        assert "Length: 2.000s, 3 notes" in output

    def test_transpose(self, tmp_path, capsys):
        out = tmp_path / "up.mid"
        with pytest.raises(SystemExit):
            main(["C", "Am", "--transpose", "C", "D", "-o", str(out)])
        assert "Transposed +2 semitones: D Bm" in capsys.readouterr().out
        assert out.read_bytes() == build_midi(["D", "Bm"], "quarter", 120, 4, 4)

    def test_long_chords(self, tmp_path):
        out = tmp_path / "long.mid"
        with pytest.raises(SystemExit) as exc_info:
            main(["C", "G", "--beats", "100", "-p", "whole", "-o", str(out)])
        assert exc_info.value.code == 0
        assert read_midi(out.read_bytes()).length_ticks == 2 * 100 * 480

    def test_unwritable_output(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["C", "-o", str(tmp_path / "missing" / "dir" / "x.mid")])
        assert exc_info.value.code == 1
