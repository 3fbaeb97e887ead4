"""JSON file implementation of the recipe store."""

import json
import logging
import os
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from four_six.domain.recipes import FlavorProfile, IntensityProfile, SavedRecipe
from four_six.services.favorites import RecipeStore

_logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "kasuya_favorite_recipes"


@dataclass
class JsonRecipeStore(RecipeStore):
    """Keeps the recipe array under one key of a JSON document on disk."""

    path: Path
    storage_key: str = DEFAULT_STORAGE_KEY

    def load_recipes(self) -> list[SavedRecipe]:
        """Return stored recipes; anything unreadable counts as empty."""
        document = self._read_document()
        stored = document.get(self.storage_key)
        if stored is None:
            return []
        if not isinstance(stored, list):
            _logger.warning(
                "Stored recipes under %s are not a list, ignoring", self.storage_key
            )
            return []
        recipes = []
        for row in stored:
            recipe = _parse_recipe(row)
            if recipe is None:
                _logger.warning("Skipping unreadable stored recipe: %r", row)
                continue
            recipes.append(recipe)
        return recipes

    def save_recipes(self, recipes: Sequence[SavedRecipe]) -> bool:
        """Write the list atomically; failures are logged and reported."""
        document = self._read_document()
        document[self.storage_key] = [_serialize_recipe(recipe) for recipe in recipes]
        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", delete=False, dir=self.path.parent, encoding="utf-8"
            ) as handle:
                tmp_path = Path(handle.name)
                json.dump(document, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            _logger.exception("Error saving favorite recipes to %s", self.path)
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            return False
        return True

    def _read_document(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_text(encoding="utf-8")
            document = json.loads(raw) if raw.strip() else {}
        except (OSError, ValueError):
            _logger.exception("Error loading favorite recipes from %s", self.path)
            return {}
        if not isinstance(document, dict):
            _logger.warning("Recipe file %s is not a JSON object, ignoring", self.path)
            return {}
        return document


def _serialize_recipe(recipe: SavedRecipe) -> dict[str, object]:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "coffeeWeight": recipe.coffee_mass_grams,
        "flavor": recipe.flavor.value,
        "intensity": recipe.intensity.value,
        "createdAt": recipe.created_at_epoch_millis,
    }


def _parse_recipe(row: object) -> SavedRecipe | None:
    if not isinstance(row, dict):
        return None
    try:
        return SavedRecipe(
            id=str(row["id"]),
            name=str(row["name"]),
            coffee_mass_grams=int(row["coffeeWeight"]),
            flavor=FlavorProfile.parse(row["flavor"]),
            intensity=IntensityProfile.parse(row["intensity"]),
            created_at_epoch_millis=int(row["createdAt"]),
        )
    except (KeyError, TypeError, ValueError):
        return None
