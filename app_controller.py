# -*- coding: utf-8 -*-
########################
# app_controller.py
########################
# Purpose:
# - Wires the drill pipeline into the Qt application.
# - Integrates InputRouter + GameEngine + ScoreTracker + SoundFeedbackSink + MainWindow.
#
# Design notes:
# - GameEngine is the single owner of gameplay state. This controller forwards decoded
#   directions to GameEngine.on_input and pushes GameEngine snapshots to the board.
# - The board is refreshed on a 16 ms timer so Success and Error flashes pulse.
# - Control panel requests are applied to the engine, then mirrored back to the panel.
#
########################
# Interfaces:
# Public dataclasses:
# - SessionOptions(difficulty: str, sightread: bool, muted: bool, volume: float,
#                  sounds_dir: pathlib.Path, scores_path: pathlib.Path, generate_default_sounds: bool)
#
# Public classes:
# - class AppController(PyQt6.QtCore.QObject)
#   - engine: GameEngine
#   - start() -> None
#   - shutdown() -> None
#   - refresh() -> None
#
# Inputs:
# - QKeyEvent via eventFilter on MainWindow, ControlsPanelWidget requests.
#
# Outputs:
# - GameSnapshot rendered by ComboBoardWidget, feedback sounds.
#
########################

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QEvent, QObject, QTimer
from PyQt6.QtGui import QKeyEvent

from game_engine import GameEngine
from gameplay_models import Direction, policy_for_label
from input_router import InputRouter
from kv_store import JsonFileKeyValueStore
from main_window import MainWindow
from qt_scheduler import QtTaskScheduler
from score_tracker import ScoreTracker
from sound_assets import ensure_default_sounds
from sound_feedback import SoundFeedbackSink

logger = logging.getLogger(__name__)


REFRESH_INTERVAL_MS = 16


@dataclass(frozen=True)
class SessionOptions:
    difficulty: str
    sightread: bool
    muted: bool
    volume: float
    sounds_dir: Path
    scores_path: Path
    generate_default_sounds: bool = False


class AppController(QObject):
    def __init__(self, *, main_window: MainWindow, options: SessionOptions, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._main_window = main_window
        self._options = options

        self._scheduler = QtTaskScheduler(self)
        if options.generate_default_sounds:
            ensure_default_sounds(options.sounds_dir)
        self._sound = SoundFeedbackSink(
            options.sounds_dir,
            volume=float(options.volume),
            muted=bool(options.muted),
            parent=self,
        )
        self._tracker = ScoreTracker(JsonFileKeyValueStore(options.scores_path))
        self._engine = GameEngine(
            scheduler=self._scheduler,
            tracker=self._tracker,
            feedback=self._sound,
            policy=policy_for_label(options.difficulty),
            sightread=bool(options.sightread),
        )

        self._router = InputRouter(parent=self)
        self._router.directionPressed.connect(self._on_direction_pressed)

        controls = self._main_window.controls
        controls.requestDifficultyChanged.connect(self._on_difficulty_requested)
        controls.requestSightreadChanged.connect(self._on_sightread_requested)
        controls.requestMuteChanged.connect(self._on_mute_requested)

        self._refresh_timer = QTimer(self)
        self._refresh_timer.setInterval(REFRESH_INTERVAL_MS)
        self._refresh_timer.timeout.connect(self.refresh)

    @property
    def engine(self) -> GameEngine:
        return self._engine

    def start(self) -> None:
        self._main_window.installEventFilter(self)
        self._main_window.setFocus()
        self._sync_controls()
        self.refresh()
        self._refresh_timer.start()
        logger.info(
            "Drill started: difficulty=%s sightread=%s scores=%s",
            self._engine.policy.label,
            self._engine.sightread,
            self._options.scores_path,
        )

    def shutdown(self) -> None:
        self._refresh_timer.stop()
        self._main_window.removeEventFilter(self)
        self._engine.shutdown()
        self._scheduler.cancel_all()
        logger.info("Drill stopped: %d presses, %d ignored", self._router.total_presses, self._router.ignored_presses)

    def refresh(self) -> None:
        self._main_window.board.set_snapshot(self._engine.snapshot())

    # -----------------
    # Event filter
    # -----------------

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        if event.type() == QEvent.Type.KeyPress and isinstance(event, QKeyEvent):
            if self._router.handle_key_press(event):
                return True
        elif event.type() == QEvent.Type.KeyRelease and isinstance(event, QKeyEvent):
            if self._router.handle_key_release(event):
                return True
        elif event.type() in (QEvent.Type.WindowDeactivate, QEvent.Type.FocusOut):
            self._router.clear_pressed_keys()
        return super().eventFilter(watched, event)

    # -----------------
    # Handlers
    # -----------------

    def _on_direction_pressed(self, direction: Direction) -> None:
        self._engine.on_input(direction)
        self.refresh()

    def _on_difficulty_requested(self, label: str) -> None:
        self._engine.set_policy_by_label(label)
        self._sync_controls()
        self.refresh()

    def _on_sightread_requested(self, enabled: bool) -> None:
        self._engine.set_sightread(bool(enabled))
        self._sync_controls()
        self.refresh()

    def _on_mute_requested(self, muted: bool) -> None:
        self._sound.set_muted(bool(muted))
        self._sync_controls()

    def _sync_controls(self) -> None:
        self._main_window.controls.sync_state(
            difficulty=self._engine.policy.label,
            sightread=self._engine.sightread,
            muted=self._sound.muted,
        )
