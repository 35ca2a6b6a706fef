# -*- coding: utf-8 -*-
########################
# main_window.py
########################
# Purpose:
# - Primary Qt window and UI host.
# - Hosts the combo board above the controls panel.
#
# Design notes:
# - MainWindow never touches GameEngine. Gameplay keys are routed by AppController through
#   an event filter installed on this window.
# - Window-only keys stay here: F11 toggles fullscreen, Escape leaves fullscreen.
#
########################
# Interfaces:
# Public classes:
# - class MainWindow(PyQt6.QtWidgets.QMainWindow)
#   - board: ComboBoardWidget
#   - controls: ControlsPanelWidget
#   - toggle_fullscreen() -> None
#
# Inputs:
# - QKeyEvent for window keys.
#
# Outputs:
# - Widget hosting only.
#
########################
# Unit Tests:
# pip install PyQt6
# - Keep as manual UI smoke:
#   - python arrowdrill.py
########################

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtWidgets import QMainWindow, QVBoxLayout, QWidget

from combo_board import ComboBoardWidget
from controls_panel import ControlsPanelWidget


THEME_BACKGROUND = "#000000"


class MainWindow(QMainWindow):
    def __init__(self, *, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Arrow Drill")
        self.setStyleSheet(f"QMainWindow {{ background: {THEME_BACKGROUND}; }}")

        central_widget = QWidget(self)
        root_layout = QVBoxLayout(central_widget)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(0)

        self._board = ComboBoardWidget(parent=central_widget)
        self._controls = ControlsPanelWidget(parent=central_widget)

        root_layout.addWidget(self._board, stretch=1)
        root_layout.addWidget(self._controls, stretch=0)

        self.setCentralWidget(central_widget)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    @property
    def board(self) -> ComboBoardWidget:
        return self._board

    @property
    def controls(self) -> ControlsPanelWidget:
        return self._controls

    def toggle_fullscreen(self) -> None:
        if self.isFullScreen():
            self.showNormal()
        else:
            self.showFullScreen()

    def keyPressEvent(self, event: QKeyEvent) -> None:  # type: ignore[override]
        key = event.key()
        if key == Qt.Key.Key_F11:
            self.toggle_fullscreen()
            return
        if key == Qt.Key.Key_Escape and self.isFullScreen():
            self.showNormal()
            return
        super().keyPressEvent(event)
