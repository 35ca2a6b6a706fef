"""\
controls_panel.py

Onscreen controls for the drill: difficulty, mute and sightread.

The panel only emits requests. AppController applies them to the engine and
the sound sink, then calls sync_state() so the widgets never drift
from engine state.
"""

from __future__ import annotations

from typing import Optional, Sequence

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QWidget,
)

from gameplay_models import DIFFICULTIES, Policy


class ControlsPanelWidget(QFrame):
    requestDifficultyChanged = pyqtSignal(str)
    requestMuteChanged = pyqtSignal(bool)
    requestSightreadChanged = pyqtSignal(bool)

    def __init__(
        self,
        *,
        policies: Sequence[Policy] = DIFFICULTIES,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)

        self.setObjectName("controlsPanel")
        self.setStyleSheet(
            "QFrame#controlsPanel {"
            "  background: rgba(5, 3, 19, 210);"
            "  border-top: 2px solid rgba(172, 228, 252, 120);"
            "}"
            "QLabel, QCheckBox { color: rgba(243, 240, 252, 230); }"
        )
        # Keyboard input belongs to the board, not to these widgets.
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        self._difficulty_combo = QComboBox(self)
        self._difficulty_combo.addItems([policy.label for policy in policies])
        self._difficulty_combo.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        self._mute_checkbox = QCheckBox("Mute", self)
        self._mute_checkbox.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        self._sightread_checkbox = QCheckBox("Sightread", self)
        self._sightread_checkbox.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        root_layout = QHBoxLayout(self)
        root_layout.setContentsMargins(12, 10, 12, 10)
        root_layout.setSpacing(12)
        root_layout.addStretch(1)
        root_layout.addWidget(QLabel("Difficulty", self))
        root_layout.addWidget(self._difficulty_combo)
        root_layout.addWidget(self._sightread_checkbox)
        root_layout.addWidget(self._mute_checkbox)
        root_layout.addStretch(1)

        self._difficulty_combo.currentTextChanged.connect(self.requestDifficultyChanged.emit)
        self._mute_checkbox.toggled.connect(self.requestMuteChanged.emit)
        self._sightread_checkbox.toggled.connect(self.requestSightreadChanged.emit)

    def sync_state(self, *, difficulty: str, sightread: bool, muted: bool) -> None:
        """Reflect external state without re-emitting requests."""
        for widget in (self._difficulty_combo, self._sightread_checkbox, self._mute_checkbox):
            widget.blockSignals(True)
        try:
            self._difficulty_combo.setCurrentText(difficulty)
            self._sightread_checkbox.setChecked(bool(sightread))
            self._mute_checkbox.setChecked(bool(muted))
        finally:
            for widget in (self._difficulty_combo, self._sightread_checkbox, self._mute_checkbox):
                widget.blockSignals(False)
