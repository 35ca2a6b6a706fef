# -*- coding: utf-8 -*-
########################
# game_engine.py
########################
# Purpose:
# - Combo matching state machine.
# - Owns the current combo, the progress pointer and the phase, consumes Direction inputs
#   and notifies ScoreTracker and the feedback sink on every transition.
#
# Design notes:
# - No Qt usage. Pure gameplay logic; time and deferral come from the injected scheduler.
# - on_input is the single mutating entry point for gameplay. Presentation reads snapshot().
# - Only Phase.NORMAL accepts input. Success and Error flash for FLASH_DELAY_MS, then exactly
#   one reset fires and draws a fresh combo from the current policy.
# - The flash delay is never shortened or aborted by gameplay. shutdown() cancels it only
#   when the engine itself is being discarded.
#
########################
# Interfaces:
# Public constants:
# - FLASH_DELAY_MS = 500
#
# Public classes:
# - class GameEngine
#   - __init__(*, scheduler: TaskScheduler, tracker: ScoreTracker, feedback: Optional[FeedbackSink] = None,
#              policy: Policy = EASY, sightread: bool = False, rng: Optional[RandomSource] = None)
#   - on_input(direction: Direction) -> Phase
#   - set_policy(policy: Policy) -> None
#   - set_policy_by_label(label: str) -> Policy
#   - set_sightread(enabled: bool) -> None
#   - snapshot() -> GameSnapshot
#   - shutdown() -> None
#   - combo, progress, phase, policy, sightread, reset_pending, tracker
#
# Inputs:
# - Direction values decoded from raw keys by key_decoder / InputRouter.
#
# Outputs:
# - FeedbackKind notifications, ScoreTracker round notifications, GameSnapshot for rendering.
#
########################

from __future__ import annotations

import logging
from typing import Optional, Tuple

from combo_generator import RandomSource, generate_combo
from deferred_tasks import ScheduledTask, TaskScheduler
from feedback import FeedbackKind, FeedbackSink, NullFeedbackSink
from gameplay_models import (
    EASY,
    ComboElement,
    Direction,
    GameSnapshot,
    Phase,
    Policy,
    arrow_status,
    policy_for_label,
)
from score_tracker import ScoreTracker

logger = logging.getLogger(__name__)


FLASH_DELAY_MS = 500


class GameEngine:
    def __init__(
        self,
        *,
        scheduler: TaskScheduler,
        tracker: ScoreTracker,
        feedback: Optional[FeedbackSink] = None,
        policy: Policy = EASY,
        sightread: bool = False,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self._scheduler = scheduler
        self._tracker = tracker
        self._feedback: FeedbackSink = feedback if feedback is not None else NullFeedbackSink()
        self._rng = rng

        self._policy = policy
        self._sightread = bool(sightread)

        self._combo: Tuple[Direction, ...] = ()
        self._progress = 0
        self._phase = Phase.NORMAL
        self._pending_reset: Optional[ScheduledTask] = None

        self._tracker.select_key(self._policy.label, self._sightread)
        self._reset_round()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def combo(self) -> Tuple[Direction, ...]:
        return self._combo

    @property
    def progress(self) -> int:
        return self._progress

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def policy(self) -> Policy:
        return self._policy

    @property
    def sightread(self) -> bool:
        return self._sightread

    @property
    def tracker(self) -> ScoreTracker:
        return self._tracker

    @property
    def reset_pending(self) -> bool:
        return self._pending_reset is not None and self._pending_reset.active

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_input(self, direction: Direction) -> Phase:
        """
        Apply one decoded input and return the resulting phase.

        Inputs received while Success or Error is flashing are dropped without
        feedback.
        """
        if self._phase != Phase.NORMAL:
            return self._phase

        expected = self._combo[self._progress]
        self._play(FeedbackKind.CLICK)
        logger.debug(
            "Input %s expected=%s progress=%d/%d combo=%s",
            direction.value,
            expected.value,
            self._progress,
            len(self._combo),
            ",".join(item.value for item in self._combo),
        )

        if direction != expected:
            self._enter_terminal_phase(Phase.ERROR)
            return self._phase

        if self._progress == 0:
            self._tracker.begin_round()

        if self._progress + 1 == len(self._combo):
            self._progress = len(self._combo)
            self._enter_terminal_phase(Phase.SUCCESS)
            return self._phase

        self._progress += 1
        return self._phase

    def _enter_terminal_phase(self, phase: Phase) -> None:
        self._phase = phase
        is_success = phase == Phase.SUCCESS
        self._play(FeedbackKind.SUCCESS if is_success else FeedbackKind.FAILURE)
        self._tracker.finish_round(is_success)
        logger.debug("Round ended with %s on %s", phase.value, self._policy.label)
        self._pending_reset = self._scheduler.schedule(FLASH_DELAY_MS, self._on_flash_elapsed)

    def _on_flash_elapsed(self) -> None:
        self._pending_reset = None
        self._reset_round()

    def _reset_round(self) -> None:
        self._combo = generate_combo(self._policy, self._rng)
        self._progress = 0
        self._phase = Phase.NORMAL

    def _play(self, kind: FeedbackKind) -> None:
        try:
            self._feedback.play(kind)
        except Exception:
            logger.debug("Feedback sink raised while playing %s", kind.value, exc_info=True)

    # ------------------------------------------------------------------
    # Difficulty and mode
    # ------------------------------------------------------------------

    def set_policy(self, policy: Policy) -> None:
        if policy == self._policy:
            return
        logger.info("Difficulty changed: %s -> %s", self._policy.label, policy.label)
        self._policy = policy
        self._restart_for_new_key()

    def set_policy_by_label(self, label: str) -> Policy:
        policy = policy_for_label(label)
        self.set_policy(policy)
        return policy

    def set_sightread(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self._sightread:
            return
        logger.info("Sightread mode %s", "enabled" if enabled else "disabled")
        self._sightread = enabled
        self._restart_for_new_key()

    def _restart_for_new_key(self) -> None:
        self._tracker.select_key(self._policy.label, self._sightread)
        # A pending flash reset will draw the new combo when it fires.
        if not self.reset_pending:
            self._reset_round()

    # ------------------------------------------------------------------
    # Presentation and teardown
    # ------------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        hide_unrevealed = self._sightread and self._phase == Phase.NORMAL and self._progress == 0
        elements = tuple(
            ComboElement(
                direction=direction,
                status=arrow_status(self._phase, self._progress, index),
                hidden=hide_unrevealed and index > 0,
            )
            for index, direction in enumerate(self._combo)
        )
        return GameSnapshot(
            elements=elements,
            progress=self._progress,
            phase=self._phase,
            policy=self._policy,
            sightread=self._sightread,
            previous_time_ms=self._tracker.previous_time_ms,
            rolling_average_seconds=self._tracker.rolling_average_seconds,
            high_score_seconds=self._tracker.high_score_seconds,
            window_times_ms=self._tracker.window_times_ms,
        )

    def shutdown(self) -> None:
        """Cancel a pending flash reset so no callback outlives the engine."""
        if self._pending_reset is not None:
            self._pending_reset.cancel()
            self._pending_reset = None


def _run_unit_tests() -> None:
    import random

    from deferred_tasks import ManualScheduler
    from feedback import RecordingFeedbackSink
    from kv_store import InMemoryKeyValueStore

    scheduler = ManualScheduler()
    tracker = ScoreTracker(InMemoryKeyValueStore(), clock=lambda: scheduler.now_ms)
    sink = RecordingFeedbackSink()
    engine = GameEngine(scheduler=scheduler, tracker=tracker, feedback=sink, rng=random.Random(3))

    combo = engine.combo
    assert len(combo) == 4
    for index, direction in enumerate(combo):
        scheduler.advance(100)
        engine.on_input(direction)
        if index < len(combo) - 1:
            assert engine.progress == index + 1
    assert engine.phase == Phase.SUCCESS
    assert tracker.previous_time_ms == 300.0

    engine.on_input(combo[0])
    assert engine.phase == Phase.SUCCESS

    scheduler.advance(FLASH_DELAY_MS)
    assert engine.phase == Phase.NORMAL
    assert engine.progress == 0

    wrong = next(direction for direction in Direction if direction != engine.combo[0])
    engine.on_input(wrong)
    assert engine.phase == Phase.ERROR
    assert engine.progress == 0
    assert sink.played[-1] == FeedbackKind.FAILURE

    engine.shutdown()
    assert scheduler.advance(FLASH_DELAY_MS) == 0


if __name__ == "__main__":
    _run_unit_tests()
    print("game_engine.py: ok")
