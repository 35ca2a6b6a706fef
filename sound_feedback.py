"""\
sound_feedback.py

Feedback sounds for the drill: click on every accepted key, failure on a wrong
key, success on a completed combo.

Sound files are looked up in the configured sounds directory as
click.wav / failure.wav / success.wav (QSoundEffect only decodes
uncompressed WAV). Missing files
are skipped so the game stays playable without assets.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from feedback import FeedbackKind

logger = logging.getLogger(__name__)


SOUND_EXTENSIONS = (".wav",)


def resolve_sound_file(sounds_dir: Path, kind: FeedbackKind) -> Optional[Path]:
    for extension in SOUND_EXTENSIONS:
        candidate_path = Path(sounds_dir) / f"{kind.value}{extension}"
        if candidate_path.exists():
            return candidate_path
    return None


class SoundFeedbackSink(QObject):
    def __init__(
        self,
        sounds_dir: Path,
        *,
        volume: float = 1.0,
        muted: bool = False,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._effects: Dict[FeedbackKind, QSoundEffect] = {}
        self._muted = bool(muted)

        for kind in FeedbackKind:
            sound_path = resolve_sound_file(sounds_dir, kind)
            if sound_path is None:
                logger.warning("No %s sound found in %s", kind.value, sounds_dir)
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(sound_path.resolve())))
            effect.setVolume(max(0.0, min(1.0, float(volume))))
            effect.setMuted(self._muted)
            self._effects[kind] = effect

    @property
    def muted(self) -> bool:
        return self._muted

    def set_muted(self, muted: bool) -> None:
        self._muted = bool(muted)
        for effect in self._effects.values():
            effect.setMuted(self._muted)

    def play(self, kind: FeedbackKind) -> None:
        effect = self._effects.get(kind)
        if effect is None or self._muted:
            return
        # Restart so fast repeated clicks are all audible.
        if effect.isPlaying():
            effect.stop()
        effect.play()
