from __future__ import annotations

from deferred_tasks import ManualScheduler


def test_task_fires_once_when_due():
    scheduler = ManualScheduler()
    calls = []
    task = scheduler.schedule(500, lambda: calls.append("reset"))

    assert task.active
    assert scheduler.advance(499) == 0
    assert calls == []
    assert scheduler.advance(1) == 1
    assert calls == ["reset"]
    assert not task.active
    assert scheduler.advance(10_000) == 0
    assert calls == ["reset"]


def test_cancelled_task_never_fires():
    scheduler = ManualScheduler()
    calls = []
    task = scheduler.schedule(100, lambda: calls.append("x"))
    task.cancel()

    assert scheduler.pending_count() == 0
    assert scheduler.advance(1000) == 0
    assert calls == []


def test_same_due_time_runs_in_schedule_order():
    scheduler = ManualScheduler(start_ms=1000)
    calls = []
    scheduler.schedule(50, lambda: calls.append("first"))
    scheduler.schedule(50, lambda: calls.append("second"))
    scheduler.schedule(10, lambda: calls.append("earliest"))

    assert scheduler.advance(50) == 3
    assert calls == ["earliest", "first", "second"]
    assert scheduler.now_ms == 1050


def test_callback_sees_its_due_time_and_can_reschedule():
    scheduler = ManualScheduler()
    seen = []

    def on_first():
        seen.append(scheduler.now_ms)
        scheduler.schedule(100, lambda: seen.append(scheduler.now_ms))

    scheduler.schedule(200, on_first)

    assert scheduler.advance(1000) == 2
    assert seen == [200.0, 300.0]
    assert scheduler.now_ms == 1000.0


def test_negative_values_are_clamped():
    scheduler = ManualScheduler(start_ms=10)
    calls = []
    scheduler.schedule(-5, lambda: calls.append("now"))

    assert scheduler.advance(-20) == 1
    assert calls == ["now"]
    assert scheduler.now_ms == 10
