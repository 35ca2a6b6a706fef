# -*- coding: utf-8 -*-
########################
# input_router.py
########################
# Purpose:
# - Single keyboard listener for drill input.
# - Translates QKeyEvent into gameplay_models.Direction and emits a Qt signal.
#
# Design notes:
# - This must be the only direction input source. Key names are decoded by key_decoder only.
# - Debounce rules:
#   - Ignore auto repeat.
#   - Track pressed keys to avoid duplicate presses.
# - Registered once on the window. It never touches engine state.
#
########################
# Interfaces:
# Public classes:
# - class InputRouter(PyQt6.QtCore.QObject)
#   - Signals:
#     - directionPressed(gameplay_models.Direction)
#   - Methods:
#     - handle_key_press(event: QKeyEvent) -> bool
#     - handle_key_release(event: QKeyEvent) -> bool
#     - clear_pressed_keys() -> None
#   - Properties:
#     - total_presses: int
#     - ignored_presses: int
#
# Inputs:
# - Raw QKeyEvent from the Qt event loop.
#
# Outputs:
# - Direction values consumed by GameEngine.on_input via AppController wiring.
#
########################

from __future__ import annotations

from typing import Dict, Optional, Set

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QKeyEvent

import key_decoder
from gameplay_models import Direction


def _build_default_key_names() -> Dict[int, str]:
    """
    Qt key codes mapped to key_decoder key names.

    Accepted keys:
      - Arrow keys: Up, Down, Left, Right
      - WASD keys: W, A, S, D
    """
    key_names: Dict[int, str] = {}

    def bind(key_constant: Qt.Key, key_name: str) -> None:
        key_names[int(key_constant.value)] = key_name

    # Arrow keys
    bind(Qt.Key.Key_Up, "arrowup")
    bind(Qt.Key.Key_Down, "arrowdown")
    bind(Qt.Key.Key_Left, "arrowleft")
    bind(Qt.Key.Key_Right, "arrowright")

    # WASD
    bind(Qt.Key.Key_W, "w")
    bind(Qt.Key.Key_A, "a")
    bind(Qt.Key.Key_S, "s")
    bind(Qt.Key.Key_D, "d")

    return key_names


class InputRouter(QObject):
    """
    Central keyboard router for drill input.

    This object never judges input. Its only job is to:
      - map keys to directions
      - emit a Direction for each valid press
    """

    directionPressed = pyqtSignal(object)

    def __init__(
        self,
        parent: Optional[QObject] = None,
        key_names: Optional[Dict[int, str]] = None,
    ) -> None:
        super().__init__(parent)

        self._key_names: Dict[int, str] = dict(key_names) if key_names is not None else _build_default_key_names()

        self._pressed_keys: Set[int] = set()

        self._total_presses: int = 0
        self._ignored_presses: int = 0

    # ------------------------------------------------------------------
    # Public API used by AppController
    # ------------------------------------------------------------------

    def handle_key_press(self, event: QKeyEvent) -> bool:
        """
        Handle a Qt key press.

        Returns True if this router consumed the event, False otherwise.
        """
        key_code = int(event.key())
        direction = self._direction_for(key_code, event.text())

        # Ignore auto repeat so holding a key does not spam input.
        if event.isAutoRepeat():
            if direction is not None:
                self._ignored_presses += 1
                return True
            return False

        # Ignore second press while still held.
        if key_code in self._pressed_keys:
            if direction is not None:
                self._ignored_presses += 1
                return True
            return False

        if direction is None:
            return False

        self._pressed_keys.add(key_code)
        self._total_presses += 1
        self.directionPressed.emit(direction)
        return True

    def handle_key_release(self, event: QKeyEvent) -> bool:
        """
        Handle a Qt key release.

        Returns True if this router consumed the event, False otherwise.
        """
        key_code = int(event.key())
        is_gameplay_key = self._direction_for(key_code, event.text()) is not None

        if event.isAutoRepeat():
            return is_gameplay_key

        self._pressed_keys.discard(key_code)
        return is_gameplay_key

    def clear_pressed_keys(self) -> None:
        """
        Clear pressed state for all keys.

        Called on focus loss or window deactivation.
        """
        self._pressed_keys.clear()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _direction_for(self, key_code: int, key_text: str) -> Optional[Direction]:
        key_name = self._key_names.get(key_code)
        if key_name is not None:
            return key_decoder.decode_key(key_name)
        # Layouts where letters do not share Qt codes still report the typed text.
        return key_decoder.decode_key(key_text or "")

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------

    @property
    def total_presses(self) -> int:
        return self._total_presses

    @property
    def ignored_presses(self) -> int:
        return self._ignored_presses
