# -*- coding: utf-8 -*-
########################
# paths.py
########################
# Purpose:
# - Central filesystem path helpers for the app.
# - Defines where the config, sound and high score files live.
#
# Design notes:
# - Keep path derivation consistent across modules.
# - No Qt usage. Return pathlib.Path only.
# - Nothing here creates directories.
#
########################
# Interfaces:
# Public constants:
# - APP_NAME, APP_AUTHOR
#
# Public functions:
# - default_sounds_dir() -> pathlib.Path
# - user_config_path() -> pathlib.Path
# - default_scores_path() -> pathlib.Path
#
# Inputs:
# - platformdirs user directories.
#
# Outputs:
# - Paths used by config.py, sound_feedback.py and app_controller.py.
#
########################

from __future__ import annotations

from pathlib import Path

from platformdirs import user_config_dir, user_data_dir


APP_NAME = "ArrowDrill"
APP_AUTHOR = "ArrowDrill"


def default_sounds_dir() -> Path:
    """Return the per-user sounds directory (click, failure, success). sound_assets fills it on first run."""
    return Path(user_data_dir(APP_NAME, APP_AUTHOR)) / "sounds"


def user_config_path() -> Path:
    return Path(user_config_dir(APP_NAME, APP_AUTHOR)) / "arrowdrill_config.json"


def default_scores_path() -> Path:
    """Return the per-user high score file (not created automatically)."""
    return Path(user_data_dir(APP_NAME, APP_AUTHOR)) / "high_scores.json"
