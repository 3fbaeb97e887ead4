"""Guided pour timers built on the shared tick engine."""

from collections.abc import Callable
from dataclasses import dataclass, field
from types import TracebackType
from typing import Self

from four_six.domain.recipes import PourSchedule, PourStep
from four_six.domain.timer import (
    BREWING_INTERVAL,
    POUR_DURATION,
    StepWindow,
    TimerEvent,
    TimerState,
)
from four_six.services.alerts import AlertService
from four_six.services.ticking import (
    Clock,
    RepeatingCadence,
    ScheduleCadence,
    TickEngine,
)


class _EngineTimer:
    """Controls and lifecycle shared by both timer variants."""

    engine: TickEngine

    def start(self) -> None:
        self.engine.start()

    def pause(self) -> None:
        self.engine.pause()

    def reset(self) -> None:
        self.engine.reset()

    def tick(self) -> None:
        self.engine.tick()

    def close(self) -> None:
        self.engine.close()

    def set_sound_enabled(self, enabled: bool) -> None:
        self.engine.sound_enabled = enabled

    @property
    def sound_enabled(self) -> bool:
        return self.engine.sound_enabled

    @property
    def elapsed_seconds(self) -> int:
        return self.engine.elapsed_seconds

    @property
    def running(self) -> bool:
        return self.engine.running

    @property
    def state(self) -> TimerState:
        return self.engine.state

    @property
    def events(self) -> list[TimerEvent]:
        return list(self.engine.events)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


@dataclass
class PourTimer(_EngineTimer):
    """Walks through a pour schedule: 45 s per pour, 5 s wait between pours."""

    schedule: PourSchedule
    clock: Clock
    alerts: AlertService
    sound_enabled_at_start: bool = True
    recipe_name: str | None = None
    on_pour_ready: Callable[[int], None] | None = None
    engine: TickEngine = field(init=False)

    def __post_init__(self) -> None:
        self.engine = TickEngine(
            cadence=ScheduleCadence(len(self.schedule.steps)),
            clock=self.clock,
            alerts=self.alerts,
            sound_enabled=self.sound_enabled_at_start,
            on_pour_ready=self.on_pour_ready,
        )

    @property
    def total_duration(self) -> int:
        return self.engine.cadence.step_start(len(self.schedule.steps))

    @property
    def active_step_index(self) -> int:
        return self.engine.active_step_index

    @property
    def completed(self) -> bool:
        return self.engine.completed

    @property
    def current_step(self) -> PourStep | None:
        steps = self.schedule.steps
        index = self.active_step_index
        return steps[index] if 0 <= index < len(steps) else None

    @property
    def next_step(self) -> PourStep | None:
        steps = self.schedule.steps
        index = self.active_step_index + 1
        return steps[index] if index < len(steps) else None

    @property
    def seconds_until_next_action(self) -> int:
        """Seconds left in the active pour window.

        Negative during the wait that follows the window and after completion.
        """
        active_start = self.engine.cadence.step_start(self.active_step_index)
        return POUR_DURATION - (self.elapsed_seconds - active_start)

    @property
    def seconds_until_next_pour(self) -> int | None:
        """Countdown to the next pour window, None on the last pour."""
        if self.next_step is None:
            return None
        next_start = self.engine.cadence.step_start(self.active_step_index + 1)
        return next_start - self.elapsed_seconds

    @property
    def progress(self) -> float:
        if self.total_duration == 0:
            return 1.0
        return self.elapsed_seconds / self.total_duration

    def timeline(self) -> list[StepWindow]:
        """Window of every step with done/active markers."""
        cadence = self.engine.cadence
        windows = []
        for position in range(len(self.schedule.steps)):
            start = cadence.step_start(position)
            windows.append(
                StepWindow(
                    position=position,
                    start_second=start,
                    end_second=start + POUR_DURATION,
                    done=position < self.active_step_index,
                    active=position == self.active_step_index,
                )
            )
        return windows


@dataclass
class BrewingTimer(_EngineTimer):
    """Free-running timer that cues a pour every 45 seconds."""

    clock: Clock
    alerts: AlertService
    sound_enabled_at_start: bool = True
    interval: int = BREWING_INTERVAL
    engine: TickEngine = field(init=False)

    def __post_init__(self) -> None:
        self.engine = TickEngine(
            cadence=RepeatingCadence(self.interval),
            clock=self.clock,
            alerts=self.alerts,
            sound_enabled=self.sound_enabled_at_start,
        )

    @property
    def current_pour(self) -> int:
        return self.elapsed_seconds // self.interval + 1

    @property
    def seconds_until_next_pour(self) -> int:
        return self.interval - self.elapsed_seconds % self.interval
