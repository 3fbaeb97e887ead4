"""Favorite recipe endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from four_six.api.schemas import RecipeIn, RecipeOut, ScheduleOut

if TYPE_CHECKING:
    from four_six.containers import AppContainer

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("")
async def list_recipes(request: Request) -> list[RecipeOut]:
    """Return saved recipes, newest first."""
    recipes = _container(request).favorite_recipe_service.list_recipes()
    return [RecipeOut.from_domain(recipe) for recipe in recipes]


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_recipe(payload: RecipeIn, request: Request) -> RecipeOut:
    """Save a new favorite recipe."""
    recipe = _container(request).favorite_recipe_service.add_recipe(
        name=payload.name,
        coffee_mass_grams=payload.coffee_mass_grams,
        flavor=payload.flavor,
        intensity=payload.intensity,
    )
    return RecipeOut.from_domain(recipe)


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: str, request: Request) -> RecipeOut:
    """Return one saved recipe."""
    recipe = _container(request).favorite_recipe_service.get_recipe(recipe_id)
    return RecipeOut.from_domain(recipe)


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: str, payload: RecipeIn, request: Request
) -> RecipeOut:
    """Edit a saved recipe."""
    recipe = _container(request).favorite_recipe_service.update_recipe(
        recipe_id,
        name=payload.name,
        coffee_mass_grams=payload.coffee_mass_grams,
        flavor=payload.flavor,
        intensity=payload.intensity,
    )
    return RecipeOut.from_domain(recipe)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(recipe_id: str, request: Request) -> None:
    """Delete a saved recipe."""
    _container(request).favorite_recipe_service.delete_recipe(recipe_id)


@router.get("/{recipe_id}/schedule")
async def recipe_schedule(recipe_id: str, request: Request) -> ScheduleOut:
    """Compute the pour schedule of a saved recipe."""
    schedule = _container(request).favorite_recipe_service.schedule_for(recipe_id)
    return ScheduleOut.from_domain(schedule)
