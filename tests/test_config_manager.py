from __future__ import annotations

import json

from services.config_manager import DEFAULT_BACKEND_URL, DEFAULT_MAX_SUGGESTIONS, ConfigManager


def test_defaults_without_file(tmp_path) -> None:
    manager = ConfigManager(config_dir=str(tmp_path))
    config = manager.get_config()

    assert config["backend"]["baseUrl"] == DEFAULT_BACKEND_URL
    assert manager.completions_enabled() is True
    assert manager.max_suggestions() == DEFAULT_MAX_SUGGESTIONS


def test_stored_sections_merge_over_defaults(tmp_path) -> None:
    (tmp_path / "config.json").write_text(json.dumps({"completions": {"maxSuggestions": 8}}))
    manager = ConfigManager(config_dir=str(tmp_path))

    assert manager.max_suggestions() == 8
    assert manager.completions_enabled() is True
    assert manager.get_config()["backend"]["completionTimeout"] == 5000


def test_corrupt_file_falls_back_to_defaults(tmp_path) -> None:
    (tmp_path / "config.json").write_text("{not json")
    manager = ConfigManager(config_dir=str(tmp_path))

    assert manager.get_config()["backend"]["baseUrl"] == DEFAULT_BACKEND_URL


def test_save_round_trips_through_disk(tmp_path) -> None:
    manager = ConfigManager(config_dir=str(tmp_path))
    config = manager.get_config()
    config["completions"] = {**config["completions"], "enabled": False}
    manager.save_config(config)

    assert ConfigManager(config_dir=str(tmp_path)).completions_enabled() is False


def test_bad_max_suggestions_uses_default(tmp_path) -> None:
    (tmp_path / "config.json").write_text(json.dumps({"completions": {"maxSuggestions": "lots"}}))

    assert ConfigManager(config_dir=str(tmp_path)).max_suggestions() == DEFAULT_MAX_SUGGESTIONS


def test_env_var_selects_config_dir(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("DEVALLEY_CONFIG_DIR", str(tmp_path / "env"))
    ConfigManager().set("server", {"host": "0.0.0.0", "port": 9000})

    stored = json.loads((tmp_path / "env" / "config.json").read_text())
    assert stored["server"]["port"] == 9000
