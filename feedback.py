from __future__ import annotations

import enum
from typing import List, Protocol


class FeedbackKind(enum.Enum):
    CLICK = "click"
    FAILURE = "failure"
    SUCCESS = "success"


class FeedbackSink(Protocol):
    def play(self, kind: FeedbackKind) -> None: ...


class NullFeedbackSink:
    def play(self, kind: FeedbackKind) -> None:
        return None


class RecordingFeedbackSink:
    """Keeps every notification in order. Used by headless runs and tests."""

    def __init__(self) -> None:
        self.played: List[FeedbackKind] = []

    def play(self, kind: FeedbackKind) -> None:
        self.played.append(kind)
