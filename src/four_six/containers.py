"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial

from four_six.adapters.asyncio_clock import AsyncioClock
from four_six.adapters.json_recipe_store import JsonRecipeStore
from four_six.adapters.tone_player import LoggingTonePlayer, SubprocessTonePlayer
from four_six.config import Settings
from four_six.services.alerts import AlertService, TonePlayer
from four_six.services.favorites import FavoriteRecipeService
from four_six.services.timer_sessions import TimerSessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    favorite_recipe_service: FavoriteRecipeService
    timer_session_service: TimerSessionService
    close_resources: Callable[[], Awaitable[None]]


def build_tone_player(settings: Settings) -> TonePlayer:
    """Pick the tone output configured for this environment."""
    if settings.tone_output == "log":
        return LoggingTonePlayer()
    return SubprocessTonePlayer(command=settings.tone_command)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    recipe_store = JsonRecipeStore(
        path=resolved_settings.recipes_path,
        storage_key=resolved_settings.recipes_storage_key,
    )
    favorite_recipe_service = FavoriteRecipeService(recipe_store)
    timer_session_service = TimerSessionService(
        clock_factory=partial(
            AsyncioClock, interval_seconds=resolved_settings.tick_interval_seconds
        ),
        alerts=AlertService(build_tone_player(resolved_settings)),
        sound_enabled=resolved_settings.sound_enabled,
        max_sessions=resolved_settings.max_timer_sessions,
        idle_timeout_seconds=resolved_settings.timer_idle_timeout_seconds,
    )

    async def close_resources() -> None:
        timer_session_service.close_all()

    return AppContainer(
        settings=resolved_settings,
        favorite_recipe_service=favorite_recipe_service,
        timer_session_service=timer_session_service,
        close_resources=close_resources,
    )
