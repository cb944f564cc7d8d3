"""Tests for config module."""
from pathlib import Path

from bigidle.config import GameConfig
from bigidle.persistence import SAVE_KEY


def test_defaults():
    config = GameConfig()
    assert config.tick_interval_ms == 1000
    assert config.autosave_interval_ms == 5000
    assert config.save_key == SAVE_KEY == "idle_game_save"
    assert config.validate() == []


def test_validate_reports_every_problem():
    config = GameConfig(tick_interval_ms=0, autosave_interval_ms=-5, save_key="")
    errors = config.validate()
    assert len(errors) == 3
    assert any("tick_interval_ms" in e for e in errors)
    assert any("autosave_interval_ms" in e for e in errors)
    assert any("save_key" in e for e in errors)


def test_explicit_save_dir_wins(tmp_path, monkeypatch):
    monkeypatch.setenv("BIGIDLE_HOME", "/elsewhere")
    assert GameConfig(save_dir=tmp_path).resolve_save_dir() == tmp_path


def test_save_dir_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("BIGIDLE_HOME", str(tmp_path))
    assert GameConfig().resolve_save_dir() == tmp_path


def test_default_save_dir(monkeypatch):
    monkeypatch.delenv("BIGIDLE_HOME", raising=False)
    assert GameConfig().resolve_save_dir() == Path.home() / ".bigidle"
