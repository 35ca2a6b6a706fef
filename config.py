"""
config.py

Typed configuration loading and validation for Arrow Drill.

Design goals
- Load at most one UTF-8 JSON config file
- Validate with pydantic (defaults included)
- Support environment variable overrides
- Start with defaults when no config file exists
- No other I/O beyond reading the config file (no directory creation)

Config file location
- If ARROWDRILL_CONFIG_PATH is set, that file is used (and must exist).
- Otherwise Arrow Drill searches these paths in order and uses the first one that exists:
  1) ./arrowdrill_config.json (current working directory)
  2) <user config dir>/ArrowDrill/arrowdrill_config.json

Example config file (arrowdrill_config.json)
{
  "gameplay": {
    "difficulty": "Medium",
    "sightread": false
  },
  "audio": {
    "muted": false,
    "volume": 0.8,
    "sounds_dir": ""
  },
  "storage": {
    "scores_path": ""
  },
  "window": {
    "fullscreen": false,
    "width": 1280,
    "height": 720
  },
  "logging": {
    "level": "INFO"
  }
}
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

import paths
from gameplay_models import UnknownDifficultyError, policy_for_label


class ConfigError(ValueError):
    pass


class GameplayConfig(BaseModel):
    difficulty: str = Field(default="Easy", description="Easy, Medium or Hard.")
    sightread: bool = Field(default=False, description="Hide every arrow but the first until the round starts.")

    @field_validator("difficulty")
    @classmethod
    def validate_difficulty(cls, value: str) -> str:
        try:
            return policy_for_label(value).label
        except UnknownDifficultyError as exception:
            raise ValueError(str(exception.args[0])) from exception


class AudioConfig(BaseModel):
    muted: bool = Field(default=False, description="Start with feedback sounds muted.")
    volume: float = Field(default=1.0, ge=0.0, le=1.0, description="Feedback sound volume, 0.0 to 1.0.")
    sounds_dir: str = Field(default="", description="Directory holding click, failure and success WAV files. Empty uses the user data dir, filled with default tones.")


class StorageConfig(BaseModel):
    scores_path: str = Field(default="", description="High score JSON file. Empty uses the user data dir.")


class WindowConfig(BaseModel):
    fullscreen: bool = Field(default=False)
    width: int = Field(default=1280, ge=320, le=7680)
    height: int = Field(default=720, ge=240, le=4320)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR or CRITICAL.")

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        normalized = (value or "").strip().upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError("level must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return normalized


class AppConfig(BaseModel):
    gameplay: GameplayConfig = Field(default_factory=GameplayConfig)
    audio: AudioConfig = Field(default_factory=AudioConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def resolved_sounds_dir(self) -> Path:
        text = self.audio.sounds_dir.strip()
        return Path(text).expanduser() if text else paths.default_sounds_dir()

    def resolved_scores_path(self) -> Path:
        text = self.storage.scores_path.strip()
        return Path(text).expanduser() if text else paths.default_scores_path()


def _default_config_candidates() -> List[Path]:
    return [
        Path.cwd() / "arrowdrill_config.json",
        paths.user_config_path(),
    ]


def _resolve_config_path() -> Optional[Path]:
    explicit_path_text = os.environ.get("ARROWDRILL_CONFIG_PATH", "").strip()
    if explicit_path_text:
        return Path(explicit_path_text)

    for candidate_path in _default_config_candidates():
        if candidate_path.exists():
            return candidate_path

    return None


def _read_json_file_utf8(config_path: Path) -> Dict[str, Any]:
    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exception:
        raise ConfigError(f"Failed to read config file: {config_path}. Error: {exception}") from exception

    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as exception:
        raise ConfigError(f"Config file is not valid JSON: {config_path}. Error: {exception}") from exception

    if not isinstance(parsed, dict):
        raise ConfigError(f"Config file root must be a JSON object: {config_path}")

    return parsed


def _apply_environment_overrides(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Environment overrides are optional. The config file is the primary source of truth.

    Override variables:
    - ARROWDRILL_DIFFICULTY
    - ARROWDRILL_SIGHTREAD
    - ARROWDRILL_MUTED
    - ARROWDRILL_VOLUME
    - ARROWDRILL_SOUNDS_DIR
    - ARROWDRILL_SCORES_PATH
    - ARROWDRILL_FULLSCREEN
    - ARROWDRILL_LOG_LEVEL
    """
    def ensure_nested(config_root: Dict[str, Any], section_name: str) -> Dict[str, Any]:
        section = config_root.get(section_name)
        if isinstance(section, dict):
            section = dict(section)
        else:
            section = {}
        config_root[section_name] = section
        return section

    updated_config = dict(config_dict)

    gameplay_section = ensure_nested(updated_config, "gameplay")
    audio_section = ensure_nested(updated_config, "audio")
    storage_section = ensure_nested(updated_config, "storage")
    window_section = ensure_nested(updated_config, "window")
    logging_section = ensure_nested(updated_config, "logging")

    def override_string(env_name: str, target_dict: Dict[str, Any], key_name: str) -> None:
        value_text = os.environ.get(env_name, "")
        if value_text.strip():
            target_dict[key_name] = value_text.strip()

    def override_float(env_name: str, target_dict: Dict[str, Any], key_name: str) -> None:
        value_text = os.environ.get(env_name, "").strip()
        if not value_text:
            return
        try:
            target_dict[key_name] = float(value_text)
        except ValueError:
            return

    def override_bool(env_name: str, target_dict: Dict[str, Any], key_name: str) -> None:
        value_text = os.environ.get(env_name, "").strip().lower()
        if not value_text:
            return
        truthy = {"1", "true", "yes", "on"}
        falsy = {"0", "false", "no", "off"}
        if value_text in truthy:
            target_dict[key_name] = True
        elif value_text in falsy:
            target_dict[key_name] = False

    override_string("ARROWDRILL_DIFFICULTY", gameplay_section, "difficulty")
    override_bool("ARROWDRILL_SIGHTREAD", gameplay_section, "sightread")

    override_bool("ARROWDRILL_MUTED", audio_section, "muted")
    override_float("ARROWDRILL_VOLUME", audio_section, "volume")
    override_string("ARROWDRILL_SOUNDS_DIR", audio_section, "sounds_dir")

    override_string("ARROWDRILL_SCORES_PATH", storage_section, "scores_path")

    override_bool("ARROWDRILL_FULLSCREEN", window_section, "fullscreen")

    override_string("ARROWDRILL_LOG_LEVEL", logging_section, "level")

    return updated_config


def load_config(config_path: Optional[Path] = None) -> Tuple[AppConfig, Optional[Path]]:
    resolved_path = config_path if config_path is not None else _resolve_config_path()
    json_dict: Dict[str, Any] = _read_json_file_utf8(resolved_path) if resolved_path is not None else {}
    json_dict = _apply_environment_overrides(json_dict)

    try:
        config = AppConfig.model_validate(json_dict)
    except ValidationError as exception:
        source_text = str(resolved_path) if resolved_path is not None else "defaults and environment"
        raise ConfigError(f"Config validation failed for {source_text}:\n{exception}") from exception

    return config, resolved_path


@lru_cache(maxsize=1)
def get_config() -> Tuple[AppConfig, Optional[Path]]:
    return load_config()


def to_json(config: AppConfig) -> str:
    return json.dumps(config.model_dump(), ensure_ascii=False, indent=2)


def main() -> int:
    try:
        config, resolved_path = load_config()
    except ConfigError as exception:
        error_payload = {"ok": False, "error": str(exception)}
        print(json.dumps(error_payload, ensure_ascii=False, indent=2))
        return 2

    output_payload = {
        "ok": True,
        "config_path": str(resolved_path) if resolved_path is not None else None,
        "scores_path": str(config.resolved_scores_path()),
        "sounds_dir": str(config.resolved_sounds_dir()),
        "config": json.loads(to_json(config)),
    }
    print(json.dumps(output_payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
