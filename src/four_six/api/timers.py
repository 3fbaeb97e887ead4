"""Pour timer endpoints.

Handlers are ``async`` so timer clocks run on the server's event loop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from four_six.api.schemas import (
    BrewingTimerOut,
    PourTimerOut,
    SoundToggle,
    TimerCreate,
    TimerEventOut,
    timer_snapshot,
)
from four_six.services.recipes import compute_schedule

if TYPE_CHECKING:
    from four_six.containers import AppContainer

router = APIRouter(prefix="/timers", tags=["timers"])

TimerOut = PourTimerOut | BrewingTimerOut


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("", status_code=status.HTTP_201_CREATED)
async def open_pour_timer(payload: TimerCreate, request: Request) -> PourTimerOut:
    """Open a timer bound to a schedule or a saved recipe."""
    container = _container(request)
    recipe_name = payload.recipe_name
    if payload.recipe_id is not None:
        recipe = container.favorite_recipe_service.get_recipe(payload.recipe_id)
        schedule = container.favorite_recipe_service.schedule_for(recipe.id)
        recipe_name = recipe_name or recipe.name
    else:
        request_schedule = payload.schedule
        schedule = compute_schedule(
            request_schedule.coffee_mass_grams,
            request_schedule.flavor,
            request_schedule.intensity,
        )
    timer_id, timer = container.timer_session_service.open_pour_timer(
        schedule, recipe_name=recipe_name
    )
    return PourTimerOut.from_timer(timer_id, timer)


@router.post("/brewing", status_code=status.HTTP_201_CREATED)
async def open_brewing_timer(request: Request) -> BrewingTimerOut:
    """Open a free-running timer with a pour cue every 45 seconds."""
    timer_id, timer = _container(request).timer_session_service.open_brewing_timer()
    return BrewingTimerOut.from_timer(timer_id, timer)


@router.get("/{timer_id}")
async def get_timer(timer_id: UUID, request: Request) -> TimerOut:
    """Return the current timer snapshot."""
    timer = _container(request).timer_session_service.get(timer_id)
    return timer_snapshot(timer_id, timer)


@router.post("/{timer_id}/start")
async def start_timer(timer_id: UUID, request: Request) -> TimerOut:
    """Start or resume; a completed timer stays completed."""
    timer = _container(request).timer_session_service.get(timer_id)
    timer.start()
    return timer_snapshot(timer_id, timer)


@router.post("/{timer_id}/pause")
async def pause_timer(timer_id: UUID, request: Request) -> TimerOut:
    timer = _container(request).timer_session_service.get(timer_id)
    timer.pause()
    return timer_snapshot(timer_id, timer)


@router.post("/{timer_id}/reset")
async def reset_timer(timer_id: UUID, request: Request) -> TimerOut:
    timer = _container(request).timer_session_service.get(timer_id)
    timer.reset()
    return timer_snapshot(timer_id, timer)


@router.put("/{timer_id}/sound")
async def toggle_sound(
    timer_id: UUID, payload: SoundToggle, request: Request
) -> TimerOut:
    """Turn audible alerts on or off."""
    timer = _container(request).timer_session_service.get(timer_id)
    timer.set_sound_enabled(payload.enabled)
    return timer_snapshot(timer_id, timer)


@router.get("/{timer_id}/events")
async def timer_events(timer_id: UUID, request: Request) -> list[TimerEventOut]:
    """Return what the timer emitted since the last reset."""
    timer = _container(request).timer_session_service.get(timer_id)
    return [TimerEventOut.from_domain(event) for event in timer.events]


@router.delete("/{timer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_timer(timer_id: UUID, request: Request) -> None:
    """Close the timer and stop its clock."""
    _container(request).timer_session_service.close(timer_id)
