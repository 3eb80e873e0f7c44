from __future__ import annotations

from pathlib import Path

from topicpath.config import LocalConfig


def test_database_path_defaults_under_base_dir(tmp_path) -> None:
    config = LocalConfig(base_dir=tmp_path / "home")
    assert config.resolved_database_path() == (tmp_path / "home" / "topicpath.db").resolve()
    assert (tmp_path / "home").is_dir()


def test_home_env_var_sets_base_dir(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("TOPICPATH_HOME", str(tmp_path))
    assert LocalConfig().base_dir == Path(tmp_path)


def test_settings_round_trip(tmp_path) -> None:
    config = LocalConfig(base_dir=tmp_path)
    config.save_settings({"default_max_depth": 4, "default_max_distance": 2.5, "unknown": 1})

    loaded = LocalConfig.from_settings(base_dir=tmp_path)
    assert loaded.default_max_depth == 4
    assert loaded.default_max_distance == 2.5
    assert loaded.load_settings() == {"default_max_depth": 4, "default_max_distance": 2.5}


def test_unreadable_settings_are_ignored(tmp_path) -> None:
    (tmp_path / "settings.json").write_text("{not json", encoding="utf-8")

    config = LocalConfig.from_settings(base_dir=tmp_path)
    assert config.default_max_depth == 10
    assert config.load_settings() == {}
