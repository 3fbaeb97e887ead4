"""Registry of open timer sessions."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from four_six.domain.recipes import PourSchedule
from four_six.services.alerts import AlertService
from four_six.services.ticking import Clock
from four_six.services.timers import BrewingTimer, PourTimer

_logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 32
DEFAULT_IDLE_TIMEOUT_SECONDS = 3600.0


class UnknownTimerError(LookupError):
    """Raised when a timer id is not open."""


@dataclass
class TimerSessionService:
    """Opens, looks up and disposes independent timer sessions.

    Sessions nobody has looked up for ``idle_timeout_seconds`` are closed the
    next time the registry is used. Opening beyond ``max_sessions`` closes the
    least recently used session first.
    """

    clock_factory: Callable[[], Clock]
    alerts: AlertService
    sound_enabled: bool = True
    max_sessions: int = DEFAULT_MAX_SESSIONS
    idle_timeout_seconds: float = DEFAULT_IDLE_TIMEOUT_SECONDS
    monotonic: Callable[[], float] = time.monotonic
    _timers: dict[UUID, PourTimer | BrewingTimer] = field(
        default_factory=dict, init=False, repr=False
    )
    _last_used: dict[UUID, float] = field(default_factory=dict, init=False, repr=False)

    def open_pour_timer(
        self, schedule: PourSchedule, recipe_name: str | None = None
    ) -> tuple[UUID, PourTimer]:
        """Attach a new timer to a schedule."""
        timer = PourTimer(
            schedule=schedule,
            clock=self.clock_factory(),
            alerts=self.alerts,
            sound_enabled_at_start=self.sound_enabled,
            recipe_name=recipe_name,
        )
        return self._register(timer), timer

    def open_brewing_timer(self) -> tuple[UUID, BrewingTimer]:
        """Open a free-running 45 s cadence timer."""
        timer = BrewingTimer(
            clock=self.clock_factory(),
            alerts=self.alerts,
            sound_enabled_at_start=self.sound_enabled,
        )
        return self._register(timer), timer

    def get(self, timer_id: UUID) -> PourTimer | BrewingTimer:
        """Return an open timer."""
        self.expire_idle()
        timer = self._timers.get(timer_id)
        if timer is None:
            raise UnknownTimerError(str(timer_id))
        self._last_used[timer_id] = self.monotonic()
        return timer

    def close(self, timer_id: UUID) -> None:
        """Dispose a timer and release its clock."""
        if timer_id not in self._timers:
            raise UnknownTimerError(str(timer_id))
        self._discard(timer_id)
        _logger.info("Closed timer %s", timer_id)

    def close_all(self) -> None:
        """Dispose every open timer."""
        while self._timers:
            timer_id = next(iter(self._timers))
            self._discard(timer_id)

    def expire_idle(self) -> list[UUID]:
        """Close sessions unused for longer than the idle timeout."""
        cutoff = self.monotonic() - self.idle_timeout_seconds
        expired = [
            timer_id
            for timer_id, last_used in self._last_used.items()
            if last_used <= cutoff
        ]
        for timer_id in expired:
            self._discard(timer_id)
            _logger.info("Expired idle timer %s", timer_id)
        return expired

    def open_ids(self) -> list[UUID]:
        return list(self._timers)

    def _register(self, timer: PourTimer | BrewingTimer) -> UUID:
        self.expire_idle()
        while len(self._timers) >= self.max_sessions:
            oldest = min(self._last_used, key=self._last_used.__getitem__)
            self._discard(oldest)
            _logger.warning("Too many open timers, closed %s", oldest)
        timer_id = uuid4()
        self._timers[timer_id] = timer
        self._last_used[timer_id] = self.monotonic()
        _logger.info("Opened %s %s", type(timer).__name__, timer_id)
        return timer_id

    def _discard(self, timer_id: UUID) -> None:
        timer = self._timers.pop(timer_id)
        self._last_used.pop(timer_id, None)
        timer.close()
