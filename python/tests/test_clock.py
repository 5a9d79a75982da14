"""Tick-driven countdown: single expiry, pause, and delayed callbacks."""

from __future__ import annotations

from wordchains.engine.gamestate.clock import RunClock


def _ticks(clock: RunClock, n: int) -> list[bool]:
    return [clock.tick() for _ in range(n)]


def test_expires_exactly_once() -> None:
    clock = RunClock(30)
    clock.start()
    fired = _ticks(clock, 40)
    assert fired.count(True) == 1
    assert fired.index(True) == 29
    assert clock.remaining == 0


def test_reset_rearms_expiry() -> None:
    clock = RunClock(3)
    clock.start()
    assert _ticks(clock, 3) == [False, False, True]
    clock.reset()
    assert clock.remaining == 3
    assert _ticks(clock, 3) == [False, False, True]


def test_not_running_never_ticks() -> None:
    clock = RunClock(1)
    assert not clock.tick()
    assert clock.remaining == 1


def test_pause_holds_countdown() -> None:
    clock = RunClock(5)
    clock.start()
    clock.tick()
    clock.pause()
    assert _ticks(clock, 10) == [False] * 10
    assert clock.remaining == 4
    clock.resume()
    clock.tick()
    assert clock.remaining == 3


def test_call_later_runs_while_paused() -> None:
    calls: list[int] = []
    clock = RunClock(30)
    clock.start()
    clock.pause()
    clock.call_later(2, lambda: calls.append(1))
    clock.tick()
    assert calls == []
    clock.tick()
    assert calls == [1]
    assert clock.pending == 0


def test_cancel_all_drops_pending() -> None:
    calls: list[int] = []
    clock = RunClock(30)
    clock.start()
    clock.call_later(1, lambda: calls.append(1))
    clock.cancel_all()
    _ticks(clock, 3)
    assert calls == []


def test_restart_drops_callbacks_from_previous_run() -> None:
    calls: list[int] = []
    clock = RunClock(30)
    clock.start()
    clock.call_later(2, lambda: calls.append(1))
    clock.stop()
    clock.start()
    _ticks(clock, 5)
    assert calls == []
    assert clock.remaining == 25


def test_callback_cancelling_the_rest() -> None:
    calls: list[str] = []
    clock = RunClock(30)
    clock.start()

    def first() -> None:
        calls.append("first")
        clock.cancel_all()

    clock.call_later(1, first)
    clock.call_later(1, lambda: calls.append("second"))
    clock.tick()
    assert calls == ["first"]
