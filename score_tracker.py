# -*- coding: utf-8 -*-
########################
# score_tracker.py
########################
# Purpose:
# - Round timing and scoring for the combo drill.
# - Keeps a rolling window of the most recent successful round times and the best
#   rolling average (high score) per difficulty and sightread mode.
#
# Design notes:
# - No Qt usage. Time source is injected as a callable returning milliseconds.
# - The round clock starts on the first correct input, so idle time before the
#   player begins is never scored.
# - Persistence problems never propagate. The high score then lives in memory
#   for the rest of the session.
#
########################
# Interfaces:
# Public constants:
# - MAX_TIMES_TO_CONSIDER = 5
# - CORRUPT_HIGH_SCORE_THRESHOLD = 1000.0
#
# Public functions:
# - high_score_key(label: str, sightread: bool) -> str
#
# Public classes:
# - class ScoreTracker
#   - select_key(label: str, sightread: bool) -> None
#   - begin_round() -> None
#   - finish_round(success: bool) -> None
#   - propose_high_score() -> bool
#   - key, window_times_ms, previous_time_ms, rolling_average_seconds,
#     high_score_seconds, round_in_progress
#
# Inputs:
# - Round start and round end notifications from GameEngine.
# - KeyValueStore for high score persistence.
#
# Outputs:
# - Values copied into GameSnapshot for presentation.
#
########################

from __future__ import annotations

from collections import deque
import logging
import math
import time
from typing import Callable, Deque, Optional, Tuple

from kv_store import KeyValueStore, KeyValueStoreError

logger = logging.getLogger(__name__)


MAX_TIMES_TO_CONSIDER = 5

# Stored averages at or above this many seconds come from a malformed sentinel.
CORRUPT_HIGH_SCORE_THRESHOLD = 1000.0


def high_score_key(label: str, sightread: bool) -> str:
    key = f"{label}-{MAX_TIMES_TO_CONSIDER}"
    if sightread:
        key += "-sightread"
    return key


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def _parse_stored_high_score(raw_value: Optional[str]) -> Optional[float]:
    if raw_value is None:
        return None
    try:
        value = float(str(raw_value).strip())
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    if value <= 0.0 or value >= CORRUPT_HIGH_SCORE_THRESHOLD:
        return None
    return value


class ScoreTracker:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Optional[Callable[[], float]] = None,
        window_size: int = MAX_TIMES_TO_CONSIDER,
    ) -> None:
        if int(window_size) <= 0:
            raise ValueError(f"window_size must be positive, got {window_size}")
        self._store = store
        self._clock: Callable[[], float] = clock if clock is not None else _monotonic_ms
        self._window_size = int(window_size)

        self._key: Optional[str] = None
        self._window: Deque[float] = deque(maxlen=self._window_size)
        self._previous_time_ms: Optional[float] = None
        self._round_start_ms: Optional[float] = None
        self._high_score_seconds: Optional[float] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def key(self) -> Optional[str]:
        return self._key

    @property
    def window_size(self) -> int:
        return self._window_size

    @property
    def window_times_ms(self) -> Tuple[float, ...]:
        return tuple(self._window)

    @property
    def previous_time_ms(self) -> Optional[float]:
        return self._previous_time_ms

    @property
    def rolling_average_seconds(self) -> Optional[float]:
        if not self._window:
            return None
        return sum(self._window) / len(self._window) / 1000.0

    @property
    def high_score_seconds(self) -> Optional[float]:
        return self._high_score_seconds

    @property
    def round_in_progress(self) -> bool:
        return self._round_start_ms is not None

    # ------------------------------------------------------------------
    # Key selection
    # ------------------------------------------------------------------

    def select_key(self, label: str, sightread: bool) -> None:
        """
        Switch to the (difficulty, mode) key.

        Clears the rolling window, the previous time and any running round, then
        reloads the stored high score for the new key.
        """
        self._key = high_score_key(label, sightread)
        self._window.clear()
        self._previous_time_ms = None
        self._round_start_ms = None
        self._high_score_seconds = self._load_high_score(self._key)
        logger.debug("Selected score key %s (high score %s)", self._key, self._high_score_seconds)

    def _load_high_score(self, key: str) -> Optional[float]:
        try:
            raw_value = self._store.get(key)
        except KeyValueStoreError as exception:
            logger.warning("High score store unavailable, treating %s as unset: %s", key, exception)
            return None
        value = _parse_stored_high_score(raw_value)
        if raw_value is not None and value is None:
            logger.warning("Ignoring unusable stored high score %r for %s", raw_value, key)
        return value

    # ------------------------------------------------------------------
    # Round notifications
    # ------------------------------------------------------------------

    def begin_round(self) -> None:
        self._round_start_ms = float(self._clock())

    def finish_round(self, success: bool) -> None:
        round_start_ms = self._round_start_ms
        self._round_start_ms = None

        if not success:
            return
        if round_start_ms is None:
            logger.debug("Successful round finished without a start time; no sample recorded")
            return

        elapsed_ms = max(0.0, float(self._clock()) - round_start_ms)
        self._window.append(elapsed_ms)
        self._previous_time_ms = elapsed_ms
        logger.debug("Round time %.0f ms (window %d/%d)", elapsed_ms, len(self._window), self._window_size)
        self.propose_high_score()

    def propose_high_score(self) -> bool:
        """
        Persist the rolling average when the window is full and beats the best.

        Returns True when the high score changed.
        """
        if len(self._window) != self._window_size:
            return False

        average_seconds = sum(self._window) / self._window_size / 1000.0
        if self._high_score_seconds is not None and not average_seconds < self._high_score_seconds:
            return False

        self._high_score_seconds = average_seconds
        if self._key is None:
            return True

        try:
            self._store.set(self._key, repr(average_seconds))
        except KeyValueStoreError as exception:
            logger.warning("Failed to persist high score for %s, keeping it for this session: %s", self._key, exception)
        logger.info("New high score for %s: %.3f s", self._key, average_seconds)
        return True


def _run_unit_tests() -> None:
    from kv_store import InMemoryKeyValueStore

    now = [0.0]
    store = InMemoryKeyValueStore({"Easy-5": "1.2", "Hard-5": "100000"})
    tracker = ScoreTracker(store, clock=lambda: now[0])

    tracker.select_key("Hard", False)
    assert tracker.high_score_seconds is None

    tracker.select_key("Easy", False)
    assert tracker.high_score_seconds == 1.2

    for _ in range(5):
        tracker.begin_round()
        now[0] += 1000.0
        tracker.finish_round(True)
    assert tracker.high_score_seconds == 1.0
    assert store.get("Easy-5") == "1.0"

    tracker.begin_round()
    now[0] += 300.0
    tracker.finish_round(False)
    assert tracker.previous_time_ms == 1000.0
    assert len(tracker.window_times_ms) == 5

    assert high_score_key("Medium", True) == "Medium-5-sightread"


if __name__ == "__main__":
    _run_unit_tests()
    print("score_tracker.py: ok")
