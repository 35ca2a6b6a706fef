from __future__ import annotations

import struct
import wave

from feedback import FeedbackKind
from sound_assets import DEFAULT_TONES, SAMPLE_RATE_HZ, ToneSpec, ensure_default_sounds, render_tone


def test_every_feedback_kind_has_a_default_tone():
    assert set(DEFAULT_TONES) == set(FeedbackKind)


def test_render_tone_length_and_fades():
    pcm = render_tone(ToneSpec(notes=((440.0, 50), (880.0, 50)), volume=1.0), 8000)
    samples = struct.unpack(f"<{len(pcm) // 2}h", pcm)

    assert len(samples) == 800
    assert samples[0] == 0
    assert samples[399] == 0
    assert max(abs(sample) for sample in samples) <= 32767


def test_missing_sounds_are_written_as_mono_wav(tmp_path):
    sounds_dir = tmp_path / "sounds"

    written = ensure_default_sounds(sounds_dir)

    assert sorted(path.name for path in written) == ["click.wav", "failure.wav", "success.wav"]
    for kind in FeedbackKind:
        with wave.open(str(sounds_dir / f"{kind.value}.wav"), "rb") as wav_file:
            assert wav_file.getnchannels() == 1
            assert wav_file.getsampwidth() == 2
            assert wav_file.getframerate() == SAMPLE_RATE_HZ
            assert wav_file.getnframes() > 0
    assert not list(sounds_dir.glob("*.tmp"))


def test_existing_sounds_are_kept(tmp_path):
    custom_click = tmp_path / "click.wav"
    custom_click.write_bytes(b"custom")

    written = ensure_default_sounds(tmp_path)

    assert custom_click.read_bytes() == b"custom"
    assert sorted(path.name for path in written) == ["failure.wav", "success.wav"]
    assert ensure_default_sounds(tmp_path) == []


def test_unwritable_directory_is_skipped(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    assert ensure_default_sounds(blocker / "sounds") == []
