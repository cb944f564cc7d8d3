"""Tests for the command line interface."""
import json

import pytest

from bigidle.cli import build_parser, main
from bigidle.persistence import SAVE_KEY


def _saved(tmp_path) -> dict:
    return json.loads((tmp_path / f"{SAVE_KEY}.json").read_text())


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_status_without_save(tmp_path, capsys):
    main(["--save-dir", str(tmp_path), "status"])
    out = capsys.readouterr().out
    assert "Counter: 0" in out
    assert "Production per second: 1" in out
    assert "Last saved: Never" in out
    assert not (tmp_path / f"{SAVE_KEY}.json").exists()


def test_upgrade_saves(tmp_path, capsys):
    main(["--save-dir", str(tmp_path), "upgrade", "--times", "4"])
    assert _saved(tmp_path)["production"] == "16"
    assert "Production per second: 16" in capsys.readouterr().out


def test_upgrade_accumulates_across_invocations(tmp_path):
    main(["--save-dir", str(tmp_path), "upgrade"])
    main(["--save-dir", str(tmp_path), "upgrade"])
    assert _saved(tmp_path)["production"] == "4"


def test_upgrade_rejects_zero(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["--save-dir", str(tmp_path), "upgrade", "--times", "0"])
    assert exc.value.code == 2


def test_reset(tmp_path, capsys):
    main(["--save-dir", str(tmp_path), "upgrade", "--times", "3"])
    main(["--save-dir", str(tmp_path), "reset"])
    saved = _saved(tmp_path)
    assert saved["production"] == "1"
    assert saved["counter"] == "0"


def test_status_reads_existing_save(tmp_path, capsys):
    (tmp_path / f"{SAVE_KEY}.json").write_text(
        json.dumps({"counter": "1500", "production": "2", "last_save": 9e15, "last_saved_at": None})
    )
    main(["--save-dir", str(tmp_path), "status"])
    out = capsys.readouterr().out
    # last_save lies in the future, so no offline progress is credited
    assert "Counter: 1.50K" in out


def test_status_with_corrupt_save(tmp_path, capsys):
    (tmp_path / f"{SAVE_KEY}.json").write_text("not json")
    main(["--save-dir", str(tmp_path), "status"])
    assert "Counter: 0" in capsys.readouterr().out


def test_save_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("BIGIDLE_HOME", str(tmp_path))
    main(["upgrade"])
    assert _saved(tmp_path)["production"] == "2"


def test_run_zero_duration_saves_on_exit(tmp_path, capsys):
    main(["--save-dir", str(tmp_path), "run", "--duration", "0"])
    out = capsys.readouterr().out
    assert "Stopped." in out
    assert _saved(tmp_path)["last_saved_at"] is not None


def test_simulate(tmp_path, capsys):
    json_path = tmp_path / "sim.json"
    csv_path = tmp_path / "sim.csv"
    main([
        "simulate",
        "--seconds", "30",
        "--upgrade-every", "10",
        "--export-json", str(json_path),
        "--export-csv", str(csv_path),
    ])
    out = capsys.readouterr().out
    assert "Ticks: 30" in out
    assert "Upgrades: 3" in out
    assert "Autosaves: 6" in out
    assert json.loads(json_path.read_text())["ticks"] == 30
    assert csv_path.exists()


def test_parser_defaults():
    args = build_parser().parse_args(["run"])
    assert args.tick_interval == 1000
    assert args.autosave_interval == 5000
    assert args.duration is None


def test_reset_delete_removes_save(tmp_path, capsys):
    main(["--save-dir", str(tmp_path), "upgrade"])
    main(["--save-dir", str(tmp_path), "reset", "--delete"])
    assert not (tmp_path / f"{SAVE_KEY}.json").exists()
    assert "Last saved: Never" in capsys.readouterr().out


def test_simulate_rejects_upgrade_faster_than_tick(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["simulate", "--seconds", "60", "--upgrade-every", "0.00001"])
    assert exc.value.code == 2
    assert "tick interval" in capsys.readouterr().err
