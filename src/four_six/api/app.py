"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from four_six.api.recipes import router as recipes_router
from four_six.api.schemas import ScheduleOut, ScheduleRequest
from four_six.api.timers import router as timers_router
from four_six.app_logging import configure_logging
from four_six.containers import AppContainer
from four_six.domain.recipes import FlavorProfile, IntensityProfile
from four_six.services.favorites import UnknownRecipeError
from four_six.services.recipes import SUGGESTED_COFFEE_RANGE, compute_schedule
from four_six.services.timer_sessions import UnknownTimerError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to release timer resources")

    app = FastAPI(title="Four Six", lifespan=lifespan)
    app.state.container = container

    app.include_router(recipes_router)
    app.include_router(timers_router)

    @app.exception_handler(UnknownRecipeError)
    async def unknown_recipe(request: Request, exc: UnknownRecipeError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": f"Recipe not found: {exc}"},
        )

    @app.exception_handler(UnknownTimerError)
    async def unknown_timer(request: Request, exc: UnknownTimerError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": f"Timer not found: {exc}"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profiles")
    async def profiles() -> dict[str, object]:
        """Return selectable profiles and the suggested coffee range."""
        low, high = SUGGESTED_COFFEE_RANGE
        return {
            "flavors": [
                {"value": flavor.value, "label": flavor.label}
                for flavor in FlavorProfile
            ],
            "intensities": [
                {
                    "value": intensity.value,
                    "label": intensity.label,
                    "pours": intensity.step_count,
                }
                for intensity in IntensityProfile
            ],
            "coffee_mass_grams": {"min": low, "max": high},
        }

    @app.post("/schedules")
    async def schedules(payload: ScheduleRequest) -> ScheduleOut:
        """Compute a pour schedule."""
        schedule = compute_schedule(
            payload.coffee_mass_grams, payload.flavor, payload.intensity
        )
        logger.info(
            "Computed schedule: coffee=%sg flavor=%s intensity=%s water=%sg",
            schedule.coffee_mass_grams,
            schedule.flavor.value,
            schedule.intensity.value,
            schedule.total_water_grams,
        )
        return ScheduleOut.from_domain(schedule)

    return app
