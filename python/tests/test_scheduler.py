"""PollingScheduler tests — due times, catch-up and cancellation."""

from __future__ import annotations

import pytest

from backend.engine.scheduler import PollingScheduler, Scheduler, TimerHandle


def test_rejects_non_positive_interval(scheduler: PollingScheduler) -> None:
    with pytest.raises(ValueError, match="positive"):
        scheduler.call_every(0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.call_every(-1.0, lambda: None)


def test_satisfies_protocols(scheduler: PollingScheduler) -> None:
    assert isinstance(scheduler, Scheduler)
    assert isinstance(scheduler.call_every(1.0, lambda: None), TimerHandle)


def test_fires_only_when_due(scheduler, clock) -> None:
    calls: list[float] = []
    scheduler.call_every(1.0, lambda: calls.append(clock()))

    clock.advance(0.5)
    assert scheduler.run_pending() == 0
    clock.advance(0.5)
    assert scheduler.run_pending() == 1
    assert calls == [1.0]


def test_catches_up_in_due_order(scheduler, clock) -> None:
    order: list[str] = []
    scheduler.call_every(1.0, lambda: order.append("slow"))
    scheduler.call_every(0.5, lambda: order.append("fast"))

    clock.advance(2.0)
    assert scheduler.run_pending() == 6
    # fast@0.5, slow@1.0 (ties go to the earlier-registered timer), ...
    assert order == ["fast", "slow", "fast", "fast", "slow", "fast"]


def test_cancel_stops_timer(scheduler, clock) -> None:
    calls = []
    timer = scheduler.call_every(1.0, lambda: calls.append(1))
    clock.advance(1.0)
    scheduler.run_pending()

    timer.cancel()
    assert not timer.active
    clock.advance(5.0)
    assert scheduler.run_pending() == 0
    assert calls == [1]
    assert scheduler.time_until_next() is None


def test_cancel_from_inside_callback(scheduler, clock) -> None:
    calls = []

    def once() -> None:
        calls.append(1)
        timer.cancel()

    timer = scheduler.call_every(1.0, once)
    clock.advance(3.0)
    assert scheduler.run_pending() == 1
    assert calls == [1]


def test_timer_added_in_callback_waits_for_next_run(scheduler, clock) -> None:
    calls: list[str] = []

    def spawn() -> None:
        calls.append("outer")
        scheduler.call_every(0.1, lambda: calls.append("inner"))

    outer = scheduler.call_every(1.0, spawn)
    clock.advance(1.0)
    scheduler.run_pending()
    outer.cancel()
    assert calls == ["outer"]

    clock.advance(0.1)
    scheduler.run_pending()
    assert calls == ["outer", "inner"]


def test_time_until_next(scheduler, clock) -> None:
    assert scheduler.time_until_next() is None
    scheduler.call_every(1.0, lambda: None)
    scheduler.call_every(0.25, lambda: None)
    assert scheduler.time_until_next() == 0.25

    clock.advance(0.5)
    assert scheduler.time_until_next() == 0.0


def test_cancel_all(scheduler, clock) -> None:
    timers = [scheduler.call_every(1.0, lambda: None) for _ in range(3)]
    assert all(t.active for t in timers)

    scheduler.cancel_all()
    assert scheduler.time_until_next() is None
    assert not any(t.active for t in timers)
    clock.advance(2.0)
    assert scheduler.run_pending() == 0
