"""One-second tick engine shared by both timer variants."""

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from four_six.domain.timer import (
    BREWING_INTERVAL,
    EVENT_LOG_LIMIT,
    POUR_SLOT,
    AlertKind,
    TimerEvent,
    TimerEventKind,
    TimerState,
)
from four_six.services.alerts import AlertService

_logger = logging.getLogger(__name__)


class Clock(Protocol):
    """Source of discrete ticks owned by a single timer."""

    @property
    def running(self) -> bool:
        """Whether ticks are currently being delivered."""

    def start(self, on_tick: Callable[[], None]) -> None:
        """Begin delivering ticks to the callback."""

    def stop(self) -> None:
        """Stop delivering ticks; safe to call repeatedly."""


class Cadence(Protocol):
    """Where step boundaries fall on the session clock."""

    @property
    def total_duration(self) -> int | None:
        """Seconds until completion, or None for an unbounded timer."""

    def step_start(self, position: int) -> int:
        """Second at which a 0-based step begins."""

    def step_at(self, second: int) -> int | None:
        """Step whose window starts exactly at this second, if any."""


@dataclass(frozen=True)
class ScheduleCadence:
    """Finite cadence: one 45 s pour window plus 5 s wait per step."""

    step_count: int

    @property
    def total_duration(self) -> int:
        return self.step_count * POUR_SLOT

    def step_start(self, position: int) -> int:
        return position * POUR_SLOT

    def step_at(self, second: int) -> int | None:
        position, offset = divmod(second, POUR_SLOT)
        if offset == 0 and 0 <= position < self.step_count:
            return position
        return None


@dataclass(frozen=True)
class RepeatingCadence:
    """Unbounded cadence with a boundary at every multiple of the interval."""

    interval: int = BREWING_INTERVAL

    @property
    def total_duration(self) -> None:
        return None

    def step_start(self, position: int) -> int:
        return position * self.interval

    def step_at(self, second: int) -> int | None:
        position, offset = divmod(second, self.interval)
        if offset == 0:
            return position
        return None


@dataclass
class TickEngine:
    """Session clock state machine driven by one tick per second.

    ``start``, ``pause`` and ``reset`` complete synchronously between ticks.
    The clock subscription is held only while running and released on pause,
    reset, completion and close. The event log keeps the most recent
    ``EVENT_LOG_LIMIT`` entries.
    """

    cadence: Cadence
    clock: Clock
    alerts: AlertService
    sound_enabled: bool = True
    on_pour_ready: Callable[[int], None] | None = None
    elapsed_seconds: int = field(default=0, init=False)
    running: bool = field(default=False, init=False)
    active_step_index: int = field(default=0, init=False)
    events: deque[TimerEvent] = field(
        default_factory=lambda: deque(maxlen=EVENT_LOG_LIMIT), init=False
    )
    closed: bool = field(default=False, init=False)

    @property
    def completed(self) -> bool:
        total = self.cadence.total_duration
        return total is not None and self.elapsed_seconds >= total

    @property
    def state(self) -> TimerState:
        if self.completed:
            return TimerState.COMPLETED
        if self.running:
            return TimerState.RUNNING
        if self.elapsed_seconds == 0:
            return TimerState.IDLE
        return TimerState.PAUSED

    def start(self) -> None:
        """Run the clock; ignored once completed or closed.

        A running engine whose clock has stopped on its own is restarted.
        """
        if self.closed or self.completed:
            return
        if self.running and self.clock.running:
            return
        self.running = True
        self.clock.start(self.tick)

    def pause(self) -> None:
        """Stop the clock and keep elapsed time."""
        if not self.running:
            return
        self.running = False
        self.clock.stop()

    def reset(self) -> None:
        """Return to idle from any state."""
        self.clock.stop()
        self.running = False
        self.elapsed_seconds = 0
        self.active_step_index = 0
        self.events.clear()

    def close(self) -> None:
        """Release the clock for good."""
        self.clock.stop()
        self.running = False
        self.closed = True

    def tick(self) -> None:
        """Advance the session clock by one second."""
        if not self.running or self.closed:
            return
        now = self.elapsed_seconds + 1
        self.elapsed_seconds = now

        position = self.cadence.step_at(now)
        if position is not None and position != self.active_step_index:
            self.active_step_index = position
            pour_number = position + 1
            self.events.append(
                TimerEvent(
                    kind=TimerEventKind.POUR_READY,
                    at_second=now,
                    pour_number=pour_number,
                )
            )
            self._alert(AlertKind.POUR, now)
            self._notify_pour_ready(pour_number)

        total = self.cadence.total_duration
        if total is not None and now >= total:
            self.running = False
            self.clock.stop()
            self.elapsed_seconds = total
            self.events.append(
                TimerEvent(kind=TimerEventKind.COMPLETED, at_second=total)
            )
            self._alert(AlertKind.COMPLETION, total)

    def _notify_pour_ready(self, pour_number: int) -> None:
        if self.on_pour_ready is None:
            return
        try:
            self.on_pour_ready(pour_number)
        except Exception:  # noqa: BLE001
            _logger.warning(
                "Pour-ready listener failed for pour %s", pour_number, exc_info=True
            )

    def _alert(self, kind: AlertKind, at_second: int) -> None:
        if not self.sound_enabled:
            return
        self.events.append(
            TimerEvent(kind=TimerEventKind.ALERT, at_second=at_second, alert=kind)
        )
        self.alerts.play(kind)
