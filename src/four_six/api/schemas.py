"""Pydantic request and response models for the HTTP API."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from four_six.domain.recipes import (
    FlavorProfile,
    IntensityProfile,
    PourSchedule,
    PourStep,
    SavedRecipe,
)
from four_six.domain.timer import StepWindow, TimerEvent
from four_six.services.recipes import format_clock
from four_six.services.timers import BrewingTimer, PourTimer


class ScheduleRequest(BaseModel):
    """Inputs of the recipe engine."""

    coffee_mass_grams: int = Field(gt=0)
    flavor: FlavorProfile
    intensity: IntensityProfile

    @field_validator("flavor", mode="before")
    @classmethod
    def _parse_flavor(cls, value: object) -> object:
        return FlavorProfile.parse(value) if isinstance(value, str) else value

    @field_validator("intensity", mode="before")
    @classmethod
    def _parse_intensity(cls, value: object) -> object:
        return IntensityProfile.parse(value) if isinstance(value, str) else value


class RecipeIn(ScheduleRequest):
    """Payload for saving or updating a favorite recipe."""

    name: str = Field(min_length=1)


class TimerCreate(BaseModel):
    """Open a pour timer from a saved recipe or explicit inputs."""

    recipe_id: str | None = None
    recipe_name: str | None = None
    schedule: ScheduleRequest | None = None

    @model_validator(mode="after")
    def _require_source(self) -> "TimerCreate":
        if (self.recipe_id is None) == (self.schedule is None):
            raise ValueError("Provide exactly one of recipe_id or schedule")
        return self


class SoundToggle(BaseModel):
    """Enable or disable audible alerts."""

    enabled: bool


class PourStepOut(BaseModel):
    """Single pour in a schedule."""

    index: int
    category: str
    category_label: str
    mass_grams: int
    cumulative_mass_grams: int

    @classmethod
    def from_domain(cls, step: PourStep) -> "PourStepOut":
        return cls(
            index=step.index,
            category=step.category.value,
            category_label=step.category.label,
            mass_grams=step.mass_grams,
            cumulative_mass_grams=step.cumulative_mass_grams,
        )


class ScheduleOut(BaseModel):
    """Computed pour schedule."""

    coffee_mass_grams: int
    total_water_grams: int
    poured_water_grams: int
    flavor: FlavorProfile
    flavor_label: str
    intensity: IntensityProfile
    intensity_label: str
    steps: list[PourStepOut]

    @classmethod
    def from_domain(cls, schedule: PourSchedule) -> "ScheduleOut":
        return cls(
            coffee_mass_grams=schedule.coffee_mass_grams,
            total_water_grams=schedule.total_water_grams,
            poured_water_grams=schedule.poured_water_grams,
            flavor=schedule.flavor,
            flavor_label=schedule.flavor.label,
            intensity=schedule.intensity,
            intensity_label=schedule.intensity.label,
            steps=[PourStepOut.from_domain(step) for step in schedule.steps],
        )


class RecipeOut(BaseModel):
    """Saved favorite recipe."""

    id: str
    name: str
    coffee_mass_grams: int
    flavor: FlavorProfile
    intensity: IntensityProfile
    created_at_epoch_millis: int

    @classmethod
    def from_domain(cls, recipe: SavedRecipe) -> "RecipeOut":
        return cls(
            id=recipe.id,
            name=recipe.name,
            coffee_mass_grams=recipe.coffee_mass_grams,
            flavor=recipe.flavor,
            intensity=recipe.intensity,
            created_at_epoch_millis=recipe.created_at_epoch_millis,
        )


class StepWindowOut(BaseModel):
    """Timeline slot of a schedule step."""

    pour_number: int
    start_second: int
    end_second: int
    start_display: str
    done: bool
    active: bool

    @classmethod
    def from_domain(cls, window: StepWindow) -> "StepWindowOut":
        return cls(
            pour_number=window.position + 1,
            start_second=window.start_second,
            end_second=window.end_second,
            start_display=format_clock(window.start_second),
            done=window.done,
            active=window.active,
        )


class TimerEventOut(BaseModel):
    """Entry of a timer event log."""

    kind: str
    at_second: int
    pour_number: int | None = None
    alert: str | None = None

    @classmethod
    def from_domain(cls, event: TimerEvent) -> "TimerEventOut":
        return cls(
            kind=event.kind.value,
            at_second=event.at_second,
            pour_number=event.pour_number,
            alert=event.alert.value if event.alert else None,
        )


class PourTimerOut(BaseModel):
    """Snapshot of a schedule-bound pour timer."""

    id: UUID
    kind: Literal["pour"] = "pour"
    state: str
    running: bool
    completed: bool
    sound_enabled: bool
    elapsed_seconds: int
    elapsed_display: str
    total_duration: int
    total_display: str
    progress: float
    active_step_index: int
    current_step: PourStepOut | None
    next_step: PourStepOut | None
    seconds_until_next_action: int
    seconds_until_next_pour: int | None
    recipe_name: str | None
    timeline: list[StepWindowOut]
    schedule: ScheduleOut

    @classmethod
    def from_timer(cls, timer_id: UUID, timer: PourTimer) -> "PourTimerOut":
        current, upcoming = timer.current_step, timer.next_step
        return cls(
            id=timer_id,
            state=timer.state.value,
            running=timer.running,
            completed=timer.completed,
            sound_enabled=timer.sound_enabled,
            elapsed_seconds=timer.elapsed_seconds,
            elapsed_display=format_clock(timer.elapsed_seconds),
            total_duration=timer.total_duration,
            total_display=format_clock(timer.total_duration),
            progress=timer.progress,
            active_step_index=timer.active_step_index,
            current_step=PourStepOut.from_domain(current) if current else None,
            next_step=PourStepOut.from_domain(upcoming) if upcoming else None,
            seconds_until_next_action=timer.seconds_until_next_action,
            seconds_until_next_pour=timer.seconds_until_next_pour,
            recipe_name=timer.recipe_name,
            timeline=[StepWindowOut.from_domain(window) for window in timer.timeline()],
            schedule=ScheduleOut.from_domain(timer.schedule),
        )


class BrewingTimerOut(BaseModel):
    """Snapshot of a free-running brewing timer."""

    id: UUID
    kind: Literal["brewing"] = "brewing"
    state: str
    running: bool
    sound_enabled: bool
    elapsed_seconds: int
    elapsed_display: str
    current_pour: int
    seconds_until_next_pour: int

    @classmethod
    def from_timer(cls, timer_id: UUID, timer: BrewingTimer) -> "BrewingTimerOut":
        return cls(
            id=timer_id,
            state=timer.state.value,
            running=timer.running,
            sound_enabled=timer.sound_enabled,
            elapsed_seconds=timer.elapsed_seconds,
            elapsed_display=format_clock(timer.elapsed_seconds),
            current_pour=timer.current_pour,
            seconds_until_next_pour=timer.seconds_until_next_pour,
        )


def timer_snapshot(
    timer_id: UUID, timer: PourTimer | BrewingTimer
) -> PourTimerOut | BrewingTimerOut:
    """Build the snapshot model matching the timer variant."""
    if isinstance(timer, PourTimer):
        return PourTimerOut.from_timer(timer_id, timer)
    return BrewingTimerOut.from_timer(timer_id, timer)
