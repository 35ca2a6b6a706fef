from __future__ import annotations

import json
from pathlib import Path

import pytest

import config as config_module
import paths
from config import AppConfig, ConfigError, load_config


_ENV_NAMES = (
    "ARROWDRILL_CONFIG_PATH",
    "ARROWDRILL_DIFFICULTY",
    "ARROWDRILL_SIGHTREAD",
    "ARROWDRILL_MUTED",
    "ARROWDRILL_VOLUME",
    "ARROWDRILL_SOUNDS_DIR",
    "ARROWDRILL_SCORES_PATH",
    "ARROWDRILL_FULLSCREEN",
    "ARROWDRILL_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    for env_name in _ENV_NAMES:
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(paths, "user_config_path", lambda: tmp_path / "user" / "arrowdrill_config.json")
    config_module.get_config.cache_clear()
    yield
    config_module.get_config.cache_clear()


def _write_config(directory: Path, payload: dict) -> Path:
    config_path = directory / "arrowdrill_config.json"
    config_path.write_text(json.dumps(payload), encoding="utf-8")
    return config_path


def test_defaults_without_config_file():
    app_config, config_path = load_config()

    assert config_path is None
    assert app_config.gameplay.difficulty == "Easy"
    assert app_config.gameplay.sightread is False
    assert app_config.audio.muted is False
    assert app_config.audio.volume == 1.0
    assert app_config.logging.level == "INFO"
    assert app_config.resolved_scores_path() == paths.default_scores_path()
    assert app_config.resolved_sounds_dir() == paths.default_sounds_dir()


def test_config_file_in_working_directory_is_used(tmp_path):
    _write_config(tmp_path, {"gameplay": {"difficulty": "hard", "sightread": True}, "logging": {"level": "debug"}})

    app_config, config_path = load_config()

    assert config_path == tmp_path / "arrowdrill_config.json"
    assert app_config.gameplay.difficulty == "Hard"
    assert app_config.gameplay.sightread is True
    assert app_config.logging.level == "DEBUG"


def test_explicit_path_from_environment(monkeypatch, tmp_path):
    other_dir = tmp_path / "elsewhere"
    other_dir.mkdir()
    config_path = _write_config(other_dir, {"audio": {"volume": 0.25}})
    monkeypatch.setenv("ARROWDRILL_CONFIG_PATH", str(config_path))

    app_config, resolved_path = load_config()

    assert resolved_path == config_path
    assert app_config.audio.volume == 0.25


def test_environment_overrides_file(monkeypatch, tmp_path):
    _write_config(tmp_path, {"gameplay": {"difficulty": "Easy"}, "audio": {"muted": False}})
    monkeypatch.setenv("ARROWDRILL_DIFFICULTY", "Medium")
    monkeypatch.setenv("ARROWDRILL_MUTED", "yes")
    monkeypatch.setenv("ARROWDRILL_VOLUME", "0.5")
    monkeypatch.setenv("ARROWDRILL_SCORES_PATH", str(tmp_path / "scores.json"))
    monkeypatch.setenv("ARROWDRILL_FULLSCREEN", "off")

    app_config, _config_path = load_config()

    assert app_config.gameplay.difficulty == "Medium"
    assert app_config.audio.muted is True
    assert app_config.audio.volume == 0.5
    assert app_config.window.fullscreen is False
    assert app_config.resolved_scores_path() == tmp_path / "scores.json"


def test_unparseable_numeric_override_is_ignored(monkeypatch):
    monkeypatch.setenv("ARROWDRILL_VOLUME", "loud")
    app_config, _config_path = load_config()
    assert app_config.audio.volume == 1.0


@pytest.mark.parametrize(
    "payload",
    [
        {"gameplay": {"difficulty": "Nightmare"}},
        {"audio": {"volume": 2.0}},
        {"logging": {"level": "CHATTY"}},
        {"window": {"width": 10}},
    ],
)
def test_invalid_values_raise_config_error(tmp_path, payload):
    _write_config(tmp_path, payload)
    with pytest.raises(ConfigError):
        load_config()


def test_non_object_root_raises(tmp_path):
    config_path = tmp_path / "arrowdrill_config.json"
    config_path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config()


def test_invalid_utf8_config_raises(tmp_path):
    config_path = tmp_path / "arrowdrill_config.json"
    config_path.write_bytes(b'{"gameplay": {"difficulty": "Easy\xff"}}')
    with pytest.raises(ConfigError):
        load_config()


def test_missing_explicit_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.json")


def test_sounds_dir_override():
    app_config = AppConfig.model_validate({"audio": {"sounds_dir": "/opt/sounds"}})
    assert app_config.resolved_sounds_dir() == Path("/opt/sounds")


def test_to_json_round_trips():
    app_config = AppConfig()
    assert AppConfig.model_validate(json.loads(config_module.to_json(app_config))) == app_config


def test_main_prints_payload(capsys):
    assert config_module.main() == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["ok"] is True
    assert payload["config"]["gameplay"]["difficulty"] == "Easy"
