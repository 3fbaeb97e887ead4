"""Domain models for guided pour timers."""

from dataclasses import dataclass
from enum import Enum

POUR_DURATION = 45
WAIT_BETWEEN_POURS = 5
POUR_SLOT = POUR_DURATION + WAIT_BETWEEN_POURS
BREWING_INTERVAL = 45
EVENT_LOG_LIMIT = 64


class TimerState(str, Enum):
    """Lifecycle state derived from elapsed time and the running flag."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class TimerEventKind(str, Enum):
    """Kinds of entries in a timer event log."""

    POUR_READY = "pour_ready"
    ALERT = "alert"
    COMPLETED = "completed"


class AlertKind(str, Enum):
    """Audible cue requested by a timer."""

    POUR = "pour"
    COMPLETION = "completion"


@dataclass(frozen=True)
class TimerEvent:
    """Something a timer emitted at a given elapsed second."""

    kind: TimerEventKind
    at_second: int
    pour_number: int | None = None
    alert: AlertKind | None = None


@dataclass(frozen=True)
class StepWindow:
    """Timeline slot of a schedule step."""

    position: int
    start_second: int
    end_second: int
    done: bool
    active: bool
