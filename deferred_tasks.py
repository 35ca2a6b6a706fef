# -*- coding: utf-8 -*-
########################
# deferred_tasks.py
########################
# Purpose:
# - Fixed-delay deferred callbacks used by GameEngine for the flash reset.
# - Deterministic ManualScheduler for headless runs and tests.
#
# Design notes:
# - No Qt usage. qt_scheduler.QtTaskScheduler is the event loop backed implementation.
# - Every scheduled task exposes cancel() so an embedding can tear the engine down mid-flash.
# - A task runs at most once.
#
########################
# Interfaces:
# Public protocols:
# - ScheduledTask: cancel() -> None, active: bool
# - TaskScheduler: schedule(delay_ms: int, callback: Callable[[], None]) -> ScheduledTask
#
# Public classes:
# - class ManualScheduler
#   - now_ms: float
#   - schedule(delay_ms, callback) -> ScheduledTask
#   - advance(delta_ms: float) -> int
#   - pending_count() -> int
#
########################

from __future__ import annotations

from typing import Callable, List, Optional, Protocol


class ScheduledTask(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class TaskScheduler(Protocol):
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask: ...


class _ManualTask:
    def __init__(self, due_ms: float, sequence: int, callback: Callable[[], None]) -> None:
        self.due_ms = float(due_ms)
        self.sequence = int(sequence)
        self._callback: Optional[Callable[[], None]] = callback

    @property
    def active(self) -> bool:
        return self._callback is not None

    def cancel(self) -> None:
        self._callback = None

    def fire(self) -> None:
        callback = self._callback
        self._callback = None
        if callback is not None:
            callback()


class ManualScheduler:
    """
    Virtual time scheduler.

    Time only moves when advance() is called. Tasks due at the same time run in
    the order they were scheduled. The clock can be shared with ScoreTracker by
    passing ``lambda: scheduler.now_ms``.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now_ms = float(start_ms)
        self._tasks: List[_ManualTask] = []
        self._sequence = 0

    @property
    def now_ms(self) -> float:
        return self._now_ms

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> _ManualTask:
        self._sequence += 1
        task = _ManualTask(self._now_ms + max(0.0, float(delay_ms)), self._sequence, callback)
        self._tasks.append(task)
        return task

    def advance(self, delta_ms: float) -> int:
        """Move virtual time forward and run every task that became due. Returns how many ran."""
        target_ms = self._now_ms + max(0.0, float(delta_ms))
        fired = 0
        while True:
            due = [task for task in self._tasks if task.active and task.due_ms <= target_ms]
            if not due:
                break
            task = min(due, key=lambda item: (item.due_ms, item.sequence))
            self._tasks.remove(task)
            self._now_ms = max(self._now_ms, task.due_ms)
            task.fire()
            fired += 1
        self._now_ms = target_ms
        self._tasks = [task for task in self._tasks if task.active]
        return fired

    def pending_count(self) -> int:
        return sum(1 for task in self._tasks if task.active)


def _run_unit_tests() -> None:
    scheduler = ManualScheduler()
    calls: List[str] = []

    scheduler.schedule(500, lambda: calls.append("a"))
    cancelled = scheduler.schedule(100, lambda: calls.append("b"))
    cancelled.cancel()
    assert scheduler.pending_count() == 1

    assert scheduler.advance(499) == 0
    assert scheduler.advance(1) == 1
    assert calls == ["a"]
    assert scheduler.now_ms == 500.0
    assert scheduler.pending_count() == 0


if __name__ == "__main__":
    _run_unit_tests()
    print("deferred_tasks.py: ok")
