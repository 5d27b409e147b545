import json

import pytest

from nephrosim.cli import build_parser, load_config, main


def test_list_scenarios(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "aki-sepsis" in out
    assert "hyperkalemia-esrd" in out


def test_headless_run(capsys):
    assert main(["--mode", "headless", "--duration", "20"]) == 0
    out = capsys.readouterr().out
    assert "Starting Headless Session: Acute Kidney Injury secondary to Sepsis" in out
    assert "Time left: 04:50" in out
    assert "Time left: 04:40" in out
    assert "Elapsed: 20s" in out


def test_headless_unknown_scenario(capsys):
    assert main(["--mode", "headless", "--scenario", "nope"]) == 1
    assert "Unknown scenario: nope" in capsys.readouterr().out


def test_headless_scripted_interventions(tmp_path, capsys):
    config_path = tmp_path / "run.json"
    config_path.write_text(json.dumps({
        "engine": {"log_capacity": 10, "unknown_key": 1},
        "script": [
            {"at": 0, "intervention": "insulin-drip"},
            {"at": 3, "intervention": "ivf-bolus"},
        ],
    }), encoding="utf-8")

    assert main(["--mode", "headless", "--duration", "5", "--config", str(config_path)]) == 0
    out = capsys.readouterr().out
    assert "Potassium (K+) decreased to 4.7." in out
    assert "Applied: IV Fluid Bolus (500ml). Cost: $150" in out
    assert "Spent: $450" in out


def test_headless_bad_config(tmp_path, capsys):
    assert main(["--mode", "headless", "--config", str(tmp_path / "missing.json")]) == 1
    assert "Error loading config" in capsys.readouterr().out


def test_headless_recording(tmp_path):
    record_dir = tmp_path / "rec"
    assert main(["--mode", "headless", "--duration", "3", "--record", "--record-dir", str(record_dir)]) == 0
    files = list(record_dir.glob("nephrosim_aki-sepsis_*.csv"))
    assert len(files) == 1


def test_headless_runs_to_outcome(capsys):
    assert main(["--mode", "headless", "--scenario", "hyperkalemia-esrd"]) == 0
    out = capsys.readouterr().out
    assert "Out of Time" in out or "Patient Lost" in out


def test_headless_with_scenario_file(tmp_path, capsys):
    store_file = tmp_path / "scenarios.json"
    assert main(["--list", "--scenarios-file", str(store_file)]) == 0
    assert store_file.exists()
    assert "aki-sepsis" in capsys.readouterr().out


def test_load_config_schedule(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({
        "engine": {"enable_arrest_detection": False},
        "script": [{"at": 2, "intervention": "a"}, {"at": 2, "intervention": "b"}],
    }), encoding="utf-8")
    config, schedule = load_config(str(path))
    assert config.enable_arrest_detection is False
    assert schedule == {2: ["a", "b"]}


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.mode == "ui"
    assert args.scenario == "aki-sepsis"
    assert args.duration is None
    assert args.log_level == "WARNING"


def test_parser_rejects_bad_mode():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--mode", "web"])
