"""Shared test fixtures."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from four_six.config import Settings
from four_six.containers import AppContainer
from four_six.domain.recipes import SavedRecipe
from four_six.services.alerts import AlertService, TonePlayer
from four_six.services.favorites import FavoriteRecipeService, RecipeStore
from four_six.services.ticking import Clock
from four_six.services.timer_sessions import TimerSessionService


@dataclass
class InMemoryRecipeStore(RecipeStore):
    """In-memory recipe store for tests."""

    recipes: list[SavedRecipe] = field(default_factory=list)
    saves: int = 0

    def load_recipes(self) -> list[SavedRecipe]:
        return list(self.recipes)

    def save_recipes(self, recipes: Sequence[SavedRecipe]) -> bool:
        self.recipes = list(recipes)
        self.saves += 1
        return True


@dataclass
class RecordingTonePlayer(TonePlayer):
    """Tone player that records every requested tone."""

    tones: list[tuple[float, float]] = field(default_factory=list)

    def play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        self.tones.append((frequency_hz, duration_seconds))


@dataclass
class FailingTonePlayer(TonePlayer):
    """Tone player whose audio device is missing."""

    attempts: int = 0

    def play_tone(self, frequency_hz: float, duration_seconds: float) -> None:
        self.attempts += 1
        raise OSError("no audio device")


@dataclass
class ManualClock(Clock):
    """Clock advanced by hand in tests."""

    on_tick: Callable[[], None] | None = None
    starts: int = 0
    stops: int = 0

    @property
    def running(self) -> bool:
        return self.on_tick is not None

    def start(self, on_tick: Callable[[], None]) -> None:
        self.starts += 1
        self.on_tick = on_tick

    def stop(self) -> None:
        self.stops += 1
        self.on_tick = None

    def advance(self, seconds: int = 1) -> None:
        """Deliver ticks while the subscription is held."""
        for _ in range(seconds):
            if self.on_tick is None:
                return
            self.on_tick()


@pytest.fixture
def tone_player() -> RecordingTonePlayer:
    return RecordingTonePlayer()


@pytest.fixture
def alerts(tone_player: RecordingTonePlayer) -> AlertService:
    return AlertService(tone_player)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        recipes_path=tmp_path / "favorite_recipes.json",
        tone_output="log",
    )


@pytest.fixture
def clocks() -> list[ManualClock]:
    return []


@pytest.fixture
def container(
    settings: Settings, alerts: AlertService, clocks: list[ManualClock]
) -> AppContainer:
    def clock_factory() -> ManualClock:
        created = ManualClock()
        clocks.append(created)
        return created

    timer_session_service = TimerSessionService(
        clock_factory=clock_factory,
        alerts=alerts,
        sound_enabled=settings.sound_enabled,
    )

    async def close_resources() -> None:
        timer_session_service.close_all()

    return AppContainer(
        settings=settings,
        favorite_recipe_service=FavoriteRecipeService(
            InMemoryRecipeStore(), clock_millis=lambda: 1_700_000_000_000
        ),
        timer_session_service=timer_session_service,
        close_resources=close_resources,
    )
