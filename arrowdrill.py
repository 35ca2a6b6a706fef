"""
arrowdrill.py

Real entrypoint that launches the drill.

Integration
- Loads config, applies command line overrides
- Configures logging
- Creates QApplication, MainWindow and AppController
- Starts the Qt event loop

--run-tests runs the pure logic self tests of the engine modules without Qt.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import AppConfig, ConfigError, load_config

logger = logging.getLogger(__name__)


LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"

_SELF_TEST_MODULES = (
    "gameplay_models",
    "combo_generator",
    "deferred_tasks",
    "kv_store",
    "key_decoder",
    "sound_assets",
    "score_tracker",
    "game_engine",
)


def build_argument_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(description="Arrow Drill: reproduce the arrow combo as fast as you can.")
    argument_parser.add_argument("--difficulty", help="Easy, Medium or Hard. Overrides the config file.")
    argument_parser.add_argument("--sightread", action="store_true", help="Hide all arrows but the first until you start.")
    argument_parser.add_argument("--mute", action="store_true", help="Start with feedback sounds muted.")
    argument_parser.add_argument("--fullscreen", action="store_true", help="Start in fullscreen.")
    argument_parser.add_argument("--config", type=Path, help="Path to an arrowdrill_config.json file.")
    argument_parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL.")
    argument_parser.add_argument("--run-tests", action="store_true", help="Run pure logic tests (no Qt).")
    return argument_parser


def _apply_argument_overrides(app_config: AppConfig, parsed_args: argparse.Namespace) -> AppConfig:
    overrides = app_config.model_dump()
    if parsed_args.difficulty:
        overrides["gameplay"]["difficulty"] = parsed_args.difficulty
    if parsed_args.sightread:
        overrides["gameplay"]["sightread"] = True
    if parsed_args.mute:
        overrides["audio"]["muted"] = True
    if parsed_args.fullscreen:
        overrides["window"]["fullscreen"] = True
    if parsed_args.log_level:
        overrides["logging"]["level"] = parsed_args.log_level
    try:
        return AppConfig.model_validate(overrides)
    except ValueError as exception:
        raise ConfigError(f"Invalid command line option:\n{exception}") from exception


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT, stream=sys.stderr)


def run_self_tests() -> int:
    import importlib

    for module_name in _SELF_TEST_MODULES:
        module = importlib.import_module(module_name)
        module._run_unit_tests()
        print(f"{module_name}.py: ok")
    return 0


def _run_gui(app_config: AppConfig) -> int:
    from PyQt6.QtWidgets import QApplication

    from app_controller import AppController, SessionOptions
    from main_window import MainWindow

    qt_application = QApplication(sys.argv)
    qt_application.setApplicationName("Arrow Drill")

    main_window = MainWindow()
    main_window.resize(int(app_config.window.width), int(app_config.window.height))

    options = SessionOptions(
        difficulty=app_config.gameplay.difficulty,
        sightread=bool(app_config.gameplay.sightread),
        muted=bool(app_config.audio.muted),
        volume=float(app_config.audio.volume),
        sounds_dir=app_config.resolved_sounds_dir(),
        scores_path=app_config.resolved_scores_path(),
        generate_default_sounds=not app_config.audio.sounds_dir.strip(),
    )
    controller = AppController(main_window=main_window, options=options, parent=qt_application)
    qt_application.aboutToQuit.connect(controller.shutdown)

    if app_config.window.fullscreen:
        main_window.showFullScreen()
    else:
        main_window.show()

    controller.start()
    return int(qt_application.exec())


def main(argv: Optional[List[str]] = None) -> int:
    parsed_args = build_argument_parser().parse_args(argv)

    if parsed_args.run_tests:
        return run_self_tests()

    try:
        app_config, config_path = load_config(parsed_args.config)
        app_config = _apply_argument_overrides(app_config, parsed_args)
    except ConfigError as exception:
        error_payload = {"ok": False, "error": str(exception)}
        print(json.dumps(error_payload, ensure_ascii=False, indent=2))
        return 2

    _configure_logging(app_config.logging.level)
    logger.debug("Config loaded from %s", config_path if config_path is not None else "defaults")

    return _run_gui(app_config)


if __name__ == "__main__":
    raise SystemExit(main())
