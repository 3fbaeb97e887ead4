"""Services for the favorite recipe library."""

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Protocol

from four_six.domain.recipes import (
    FlavorProfile,
    IntensityProfile,
    PourSchedule,
    SavedRecipe,
)
from four_six.services.recipes import compute_schedule


class UnknownRecipeError(LookupError):
    """Raised when a saved recipe id does not exist."""


class RecipeStore(Protocol):
    """Best-effort persistence for the saved recipe list."""

    def load_recipes(self) -> list[SavedRecipe]:
        """Return stored recipes, or an empty list when absent or corrupt."""

    def save_recipes(self, recipes: Sequence[SavedRecipe]) -> bool:
        """Persist the full list; report failure instead of raising."""


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class FavoriteRecipeService:
    """Application service for saved recipes, newest first."""

    store: RecipeStore
    clock_millis: Callable[[], int] = _now_millis
    _recipes: list[SavedRecipe] | None = field(default=None, init=False, repr=False)

    def list_recipes(self) -> list[SavedRecipe]:
        """Return all saved recipes."""
        return list(self._loaded())

    def get_recipe(self, recipe_id: str) -> SavedRecipe:
        """Return a recipe by id."""
        for recipe in self._loaded():
            if recipe.id == recipe_id:
                return recipe
        raise UnknownRecipeError(recipe_id)

    def add_recipe(
        self,
        name: str,
        coffee_mass_grams: int,
        flavor: FlavorProfile,
        intensity: IntensityProfile,
    ) -> SavedRecipe:
        """Save a new recipe at the top of the list."""
        recipes = self._loaded()
        created_at = self.clock_millis()
        recipe = SavedRecipe(
            id=self._unique_id(created_at, recipes),
            name=name,
            coffee_mass_grams=coffee_mass_grams,
            flavor=flavor,
            intensity=intensity,
            created_at_epoch_millis=created_at,
        )
        recipes.insert(0, recipe)
        self.store.save_recipes(recipes)
        return recipe

    def update_recipe(
        self,
        recipe_id: str,
        name: str,
        coffee_mass_grams: int,
        flavor: FlavorProfile,
        intensity: IntensityProfile,
    ) -> SavedRecipe:
        """Replace a recipe's fields, keeping its id and creation time."""
        recipes = self._loaded()
        for position, recipe in enumerate(recipes):
            if recipe.id == recipe_id:
                updated = replace(
                    recipe,
                    name=name,
                    coffee_mass_grams=coffee_mass_grams,
                    flavor=flavor,
                    intensity=intensity,
                )
                recipes[position] = updated
                self.store.save_recipes(recipes)
                return updated
        raise UnknownRecipeError(recipe_id)

    def delete_recipe(self, recipe_id: str) -> None:
        """Remove a recipe; unknown ids raise."""
        recipes = self._loaded()
        remaining = [recipe for recipe in recipes if recipe.id != recipe_id]
        if len(remaining) == len(recipes):
            raise UnknownRecipeError(recipe_id)
        recipes[:] = remaining
        self.store.save_recipes(recipes)

    def schedule_for(self, recipe_id: str) -> PourSchedule:
        """Compute the pour schedule for a saved recipe."""
        recipe = self.get_recipe(recipe_id)
        return compute_schedule(
            recipe.coffee_mass_grams, recipe.flavor, recipe.intensity
        )

    def _loaded(self) -> list[SavedRecipe]:
        if self._recipes is None:
            self._recipes = list(self.store.load_recipes())
        return self._recipes

    @staticmethod
    def _unique_id(created_at: int, recipes: list[SavedRecipe]) -> str:
        taken = {recipe.id for recipe in recipes}
        candidate = created_at
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)
