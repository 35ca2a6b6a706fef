# -*- coding: utf-8 -*-
########################
# qt_scheduler.py
########################
# Purpose:
# - Qt event loop implementation of deferred_tasks.TaskScheduler.
#
# Design notes:
# - One single-shot QTimer per task. Timers are parented to the scheduler so they die with it.
# - Callbacks run on the Qt thread, the same thread that delivers key input to GameEngine.
#
########################
# Interfaces:
# Public classes:
# - class QtTaskScheduler(PyQt6.QtCore.QObject)
#   - schedule(delay_ms: int, callback: Callable[[], None]) -> QtScheduledTask
#   - cancel_all() -> None
#
########################

from __future__ import annotations

from typing import Callable, List, Optional

from PyQt6.QtCore import QObject, QTimer


class QtScheduledTask:
    def __init__(self, timer: QTimer, callback: Callable[[], None]) -> None:
        self._timer: Optional[QTimer] = timer
        self._callback: Optional[Callable[[], None]] = callback
        timer.timeout.connect(self._fire)

    @property
    def active(self) -> bool:
        return self._callback is not None

    def cancel(self) -> None:
        self._callback = None
        self._release_timer()

    def _fire(self) -> None:
        callback = self._callback
        self._callback = None
        self._release_timer()
        if callback is not None:
            callback()

    def _release_timer(self) -> None:
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.stop()
            timer.deleteLater()


class QtTaskScheduler(QObject):
    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._tasks: List[QtScheduledTask] = []

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> QtScheduledTask:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(max(0, int(delay_ms)))

        task = QtScheduledTask(timer, callback)
        self._tasks = [existing for existing in self._tasks if existing.active]
        self._tasks.append(task)
        timer.start()
        return task

    def cancel_all(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()
