"""Per-word countdown driven by explicit one-second ticks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from wordchains.models.categories import TURN_SECONDS


@dataclass
class _Timeout:
    remaining: int
    callback: Callable[[], None]
    generation: int


class RunClock:
    """Countdown with pause/resume and tick-based delayed callbacks.

    The driver calls :meth:`tick` once per real second.  Reaching zero is
    reported exactly once; the latch clears only on :meth:`reset`.  Delayed
    callbacks keep counting down while the countdown is paused and are
    dropped by :meth:`cancel_all`, including any scheduled before a restart.
    """

    def __init__(self, seconds: int = TURN_SECONDS) -> None:
        self.seconds = seconds
        self.remaining: int = seconds
        self._running: bool = False
        self._paused: bool = False
        self._expired: bool = False
        self._generation: int = 0
        self._pending: list[_Timeout] = []

    # -- state ----------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    def start(self) -> None:
        self.reset()
        self._paused = False
        self._running = True

    def stop(self) -> None:
        self._running = False
        self.cancel_all()

    def reset(self, seconds: int | None = None) -> None:
        self.remaining = self.seconds if seconds is None else seconds
        self._expired = False

    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        self._paused = False

    # -- delayed callbacks ----------------------------------------------------

    def call_later(self, delay: int, callback: Callable[[], None]) -> None:
        self._pending.append(_Timeout(delay, callback, self._generation))

    def cancel_all(self) -> None:
        self._generation += 1
        self._pending.clear()

    @property
    def pending(self) -> int:
        return len(self._pending)

    # -- ticking --------------------------------------------------------------

    def tick(self) -> bool:
        """Advance one second.  Returns True on the tick the countdown expires."""
        if not self._running:
            return False

        self._run_due()

        if self._paused or self._expired:
            return False
        if self.remaining > 0:
            self.remaining -= 1
        if self.remaining == 0:
            self._expired = True
            return True
        return False

    def _run_due(self) -> None:
        due: list[_Timeout] = []
        keep: list[_Timeout] = []
        for timeout in self._pending:
            timeout.remaining -= 1
            (due if timeout.remaining <= 0 else keep).append(timeout)
        self._pending = keep
        for timeout in due:
            # A callback may cancel the rest (e.g. by ending the run).
            if timeout.generation == self._generation:
                timeout.callback()
