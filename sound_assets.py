# -*- coding: utf-8 -*-
########################
# sound_assets.py
########################
# Purpose:
# - Default click, failure and success sounds.
# - Writes short synthesized WAV tones into the sounds directory when a file is missing.
#
# Design notes:
# - No Qt usage. Output is 16-bit mono PCM, the format QSoundEffect always decodes.
# - Existing files are never overwritten, so user supplied sounds win.
# - Each file is written to a .tmp sibling and then moved into place.
#
########################
# Interfaces:
# Public dataclasses:
# - ToneSpec(notes: Tuple[Tuple[float, int], ...], volume: float)
#
# Public constants:
# - SAMPLE_RATE_HZ, DEFAULT_TONES
#
# Public functions:
# - render_tone(spec: ToneSpec, sample_rate_hz: int) -> bytes
# - write_wav(file_path: pathlib.Path, pcm_bytes: bytes, sample_rate_hz: int) -> None
# - ensure_default_sounds(sounds_dir: pathlib.Path) -> List[pathlib.Path]
#
########################

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from pathlib import Path
import struct
from typing import Dict, List, Tuple
import wave

from feedback import FeedbackKind

logger = logging.getLogger(__name__)


SAMPLE_RATE_HZ = 22050
_FADE_MS = 5.0


@dataclass(frozen=True)
class ToneSpec:
    # (frequency_hz, duration_ms) played back to back
    notes: Tuple[Tuple[float, int], ...]
    volume: float = 0.6


DEFAULT_TONES: Dict[FeedbackKind, ToneSpec] = {
    FeedbackKind.CLICK: ToneSpec(notes=((1800.0, 25),), volume=0.35),
    FeedbackKind.FAILURE: ToneSpec(notes=((220.0, 90), (160.0, 140)), volume=0.6),
    FeedbackKind.SUCCESS: ToneSpec(notes=((660.0, 90), (880.0, 160)), volume=0.5),
}


def render_tone(spec: ToneSpec, sample_rate_hz: int = SAMPLE_RATE_HZ) -> bytes:
    amplitude = max(0.0, min(1.0, float(spec.volume))) * 32767.0
    fade_samples = max(1, int(sample_rate_hz * _FADE_MS / 1000.0))

    samples: List[int] = []
    for frequency_hz, duration_ms in spec.notes:
        sample_count = max(1, int(sample_rate_hz * int(duration_ms) / 1000.0))
        for index in range(sample_count):
            envelope = min(1.0, index / fade_samples, (sample_count - 1 - index) / fade_samples)
            value = math.sin(2.0 * math.pi * float(frequency_hz) * index / sample_rate_hz)
            samples.append(int(round(amplitude * envelope * value)))

    return struct.pack(f"<{len(samples)}h", *samples)


def write_wav(file_path: Path, pcm_bytes: bytes, sample_rate_hz: int = SAMPLE_RATE_HZ) -> None:
    temporary_path = file_path.with_suffix(file_path.suffix + ".tmp")
    with wave.open(str(temporary_path), "wb") as wav_file:
        wav_file.setnchannels(1)
        wav_file.setsampwidth(2)
        wav_file.setframerate(int(sample_rate_hz))
        wav_file.writeframes(pcm_bytes)
    temporary_path.replace(file_path)


def ensure_default_sounds(sounds_dir: Path) -> List[Path]:
    """
    Write the missing default sounds into sounds_dir.

    Returns the files written. A directory that cannot be written is logged and
    skipped; SoundFeedbackSink then runs without those sounds.
    """
    sounds_dir = Path(sounds_dir)
    written: List[Path] = []
    for kind, spec in DEFAULT_TONES.items():
        target_path = sounds_dir / f"{kind.value}.wav"
        if target_path.exists():
            continue
        try:
            sounds_dir.mkdir(parents=True, exist_ok=True)
            write_wav(target_path, render_tone(spec))
        except OSError as exception:
            logger.warning("Could not write default %s sound to %s: %s", kind.value, target_path, exception)
            continue
        written.append(target_path)

    if written:
        logger.info("Wrote %d default sounds to %s", len(written), sounds_dir)
    return written


def _run_unit_tests() -> None:
    import tempfile

    pcm = render_tone(ToneSpec(notes=((440.0, 100),), volume=1.0), 8000)
    assert len(pcm) == 800 * 2
    assert struct.unpack("<h", pcm[:2])[0] == 0

    with tempfile.TemporaryDirectory() as temporary_dir:
        sounds_dir = Path(temporary_dir) / "sounds"
        written = ensure_default_sounds(sounds_dir)
        assert sorted(path.name for path in written) == ["click.wav", "failure.wav", "success.wav"]
        with wave.open(str(sounds_dir / "click.wav"), "rb") as wav_file:
            assert wav_file.getnchannels() == 1
            assert wav_file.getframerate() == SAMPLE_RATE_HZ
        assert ensure_default_sounds(sounds_dir) == []


if __name__ == "__main__":
    _run_unit_tests()
    print("sound_assets.py: ok")
