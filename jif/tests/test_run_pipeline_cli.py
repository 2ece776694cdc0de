"""CLI-focused tests for run_pipeline argument parsing and output."""

import json
import logging
from pathlib import Path

import pytest

from jif.run_pipeline import _parse_args, analyze_pattern, main


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep JIF_ settings and root logger changes from leaking between tests."""
    for name in ("JIF_LOG_LEVEL", "JIF_SITESWAP_JUGGLERS", "JIF_TRACE"):
        monkeypatch.delenv(name, raising=False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_parse_args_prechac_and_manipulators():
    args = _parse_args(
        [
            "--prechac",
            "3B 3 3",
            "--prechac",
            "3A 3 3",
            "--manipulator",
            "sA - -",
            "--output",
            "out/pattern.json",
        ]
    )

    assert args.prechac == ["3B 3 3", "3A 3 3"]
    assert args.manipulator == ["sA - -"]
    assert args.output == Path("out/pattern.json")
    assert args.no_orbits is False
    assert args.quiet is False
    assert args.jugglers is None


def test_parse_args_requires_exactly_one_source():
    with pytest.raises(SystemExit):
        _parse_args([])
    with pytest.raises(SystemExit):
        _parse_args(["--siteswap", "975", "--preset", "3-count"])


def test_analyze_pattern_without_orbits(three_count):
    result = analyze_pattern(three_count, include_orbits=False)

    assert result["orbits"] is None
    assert result["jugglerCycle"] == ["A", "B", "A"]
    assert result["limbCycle"] is None
    assert result["pattern"] == three_count.to_dict()


def test_main_writes_output_file(temp_dir, capsys):
    output = temp_dir / "nested" / "pattern.json"

    code = main(
        [
            "--prechac",
            "3B 3 3",
            "--prechac",
            "3A 3 3",
            "--manipulator",
            "sA - -",
            "--output",
            str(output),
        ]
    )

    assert code == 0
    result = json.loads(output.read_text(encoding="utf-8"))
    assert [j["label"] for j in result["pattern"]["jugglers"]] == ["A", "B", "M"]
    assert len(result["pattern"]["throws"]) == 9
    assert [len(orbit) for orbit in result["orbits"]] == [4, 2, 2, 1]
    assert result["jugglerCycle"] is None
    assert f"Pattern written to {output}" in capsys.readouterr().err


def test_main_prints_json_to_stdout(capsys):
    code = main(["--siteswap", "975", "--no-orbits"])

    assert code == 0
    result = json.loads(capsys.readouterr().out)
    assert result["orbits"] is None
    assert result["jugglerCycle"] == ["A", "B", "A"]
    assert [t["duration"] for t in result["pattern"]["throws"]] == [9, 7, 5]


def test_main_siteswap_juggler_count_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("JIF_SITESWAP_JUGGLERS", "3")

    assert main(["--siteswap", "975"]) == 0
    assert len(json.loads(capsys.readouterr().out)["pattern"]["jugglers"]) == 3

    assert main(["--siteswap", "975", "--jugglers", "1"]) == 0
    assert len(json.loads(capsys.readouterr().out)["pattern"]["jugglers"]) == 1


def test_main_preset(temp_dir, capsys):
    output = temp_dir / "ivy.json"

    code = main(["--preset", "ivy", "--no-orbits", "--output", str(output), "--quiet"])

    assert code == 0
    assert json.loads(output.read_text())["jugglerCycle"] == ["A", "M", "B", "C", "A"]
    assert "Pattern written" not in capsys.readouterr().err


def test_main_reports_parse_errors(capsys):
    code = main(["--prechac", "3BB 3 3"])

    assert code == 2
    captured = capsys.readouterr()
    assert "error: Invalid prechac throw '3BB'" in captured.err
    assert captured.out == ""


def test_main_reports_unknown_preset(capsys):
    assert main(["--preset", "nope"]) == 2
    assert "Preset not found: nope" in capsys.readouterr().err


def test_main_reports_out_of_range_limb(temp_dir, capsys):
    path = temp_dir / "bad_limb.json"
    path.write_text(json.dumps({"jugglers": [{}], "limbs": [{"juggler": 3}, {}]}), encoding="utf-8")

    assert main(["--input", str(path)]) == 2
    assert "error: limbs[0].juggler is 3" in capsys.readouterr().err


def test_main_reads_json_pattern(temp_dir, capsys):
    path = temp_dir / "cascade.json"
    path.write_text(json.dumps({"throws": [{}, {}, {}]}), encoding="utf-8")

    assert main(["--input", str(path)]) == 0
    result = json.loads(capsys.readouterr().out)
    assert len(result["orbits"]) == 3
    assert result["limbCycle"] == ["0", "1", "0"]


def test_main_reads_notation_file(temp_dir, capsys):
    path = temp_dir / "three-count.txt"
    path.write_text("3B 3 3\n3A 3 3\n", encoding="utf-8")

    assert main(["--input", str(path)]) == 0
    assert [len(o) for o in json.loads(capsys.readouterr().out)["orbits"]] == [1, 2, 2, 1]


def test_main_rejects_invalid_json_input(temp_dir, capsys):
    broken = temp_dir / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    invalid = temp_dir / "invalid.json"
    invalid.write_text(json.dumps({"limbs": [{"kind": "foot"}]}), encoding="utf-8")

    assert main(["--input", str(broken)]) == 2
    assert "Invalid JSON" in capsys.readouterr().err
    assert main(["--input", str(invalid)]) == 2
    assert "Schema validation failed" in capsys.readouterr().err


def test_main_missing_input_file(temp_dir, capsys):
    assert main(["--input", str(temp_dir / "missing.txt")]) == 2
    assert capsys.readouterr().err.startswith("error:")


def test_main_prints_trace_summary(monkeypatch, capsys):
    monkeypatch.setenv("JIF_TRACE", "1")

    assert main(["--siteswap", "3", "--jugglers", "1"]) == 0
    err = capsys.readouterr().err
    assert "TRACE SUMMARY" in err
    assert "orbit.closed" in err
