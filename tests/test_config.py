from pathlib import Path

import pytest

from foxmarks.config import Settings, load_settings


def test_defaults():
    s = Settings.from_env()
    assert s.input_sqlite_file == "places.sqlite"
    assert s.stdout_format == "table"
    assert s.header is True
    assert s.enabled_filters() == []


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("FOXMARKS_DENORMALIZE", "1")
    monkeypatch.setenv("FOXMARKS_IGNORE_DEFAULTS", "yes")
    monkeypatch.setenv("FOXMARKS_STDOUT_FORMAT", "json")
    monkeypatch.setenv("FOXMARKS_HEADER", "0")
    s = Settings.from_env()
    assert s.stdout_format == "json"
    assert s.header is False
    assert s.enabled_filters() == ["denormalize", "ignore-defaults"]


def test_raw_disables_filters(monkeypatch):
    monkeypatch.setenv("FOXMARKS_RAW", "true")
    monkeypatch.setenv("FOXMARKS_DENORMALIZE", "true")
    assert Settings.from_env().enabled_filters() == []


def test_file_overrides_env_and_accepts_dashed_keys(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("FOXMARKS_STDOUT_FORMAT", "csv")
    cfg = tmp_path / "foxmarks.yaml"
    cfg.write_text("stdout-format: yaml\ndenormalize: true\nunknown_key: 1\n", encoding="utf-8")

    s = load_settings(str(cfg))

    assert s.stdout_format == "yaml"
    assert s.denormalize is True
    assert not hasattr(s, "unknown_key")


def test_empty_file_falls_back_to_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("FOXMARKS_SILENT", "on")
    cfg = tmp_path / "empty.yaml"
    cfg.write_text("", encoding="utf-8")
    assert load_settings(str(cfg)).silent is True


def test_file_must_hold_a_mapping(tmp_path: Path):
    cfg = tmp_path / "list.yaml"
    cfg.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_settings(str(cfg))
