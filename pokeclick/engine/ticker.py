"""Tick driver — turns wall-clock frames into bounded-rate simulation steps."""

from __future__ import annotations

from collections.abc import Callable

from pokeclick.data.balance import BALANCE
from pokeclick.engine.actions import Action, AdvanceTime, RegisterAction


class TickDriver:
    """Accumulates frame time and dispatches AdvanceTime at most every `interval` seconds.

    Frames can arrive at any rate (display refresh, timer, HTTP request); the
    simulation only ever sees steps of roughly `interval` or more, carrying
    the full accumulated delta so no fractional time is lost.
    """

    def __init__(
        self,
        dispatch: Callable[[Action], object],
        now: float,
        interval: float = BALANCE.session.tick_interval_s,
    ) -> None:
        self._dispatch = dispatch
        self.interval = interval
        self._last_frame = now
        self._last_dispatch = now
        self._accumulated = 0.0

    @property
    def pending(self) -> float:
        """Seconds accumulated but not yet dispatched."""
        return self._accumulated

    def frame(self, now: float) -> bool:
        """Sample the clock. Returns True if an AdvanceTime was dispatched."""
        delta = now - self._last_frame
        self._last_frame = now
        if delta > 0:
            self._accumulated += delta
        # A clock that jumped backwards contributes nothing

        if now - self._last_dispatch < self.interval or self._accumulated <= 0:
            return False

        self._dispatch(AdvanceTime(self._accumulated))
        self._accumulated = 0.0
        self._last_dispatch = now
        return True

    def reset(self, now: float) -> None:
        self._last_frame = now
        self._last_dispatch = now
        self._accumulated = 0.0


class AutoClicker:
    """Turns an auto-clicker rate (clicks/s) into whole RegisterAction dispatches."""

    def __init__(self, dispatch: Callable[[Action], object]) -> None:
        self._dispatch = dispatch
        self._carry = 0.0

    def step(self, rate: float, delta: float) -> int:
        """Advance by `delta` seconds at `rate` clicks/s. Returns clicks fired."""
        if rate <= 0 or delta <= 0:
            self._carry = 0.0
            return 0
        self._carry += rate * delta
        clicks = int(self._carry)
        self._carry -= clicks
        for _ in range(clicks):
            self._dispatch(RegisterAction())
        return clicks
