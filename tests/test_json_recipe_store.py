"""Tests for the JSON file recipe store."""

import json
import os
from pathlib import Path

from four_six.adapters.json_recipe_store import JsonRecipeStore
from four_six.domain.recipes import FlavorProfile, IntensityProfile, SavedRecipe


def _recipe(recipe_id: str = "1700000000000") -> SavedRecipe:
    return SavedRecipe(
        id=recipe_id,
        name="Morning V60",
        coffee_mass_grams=20,
        flavor=FlavorProfile.SWEETNESS,
        intensity=IntensityProfile.STRONG,
        created_at_epoch_millis=1_700_000_000_000,
    )


def test_missing_file_loads_empty(tmp_path: Path) -> None:
    store = JsonRecipeStore(tmp_path / "missing.json")

    assert store.load_recipes() == []


def test_save_then_load(tmp_path: Path) -> None:
    path = tmp_path / "recipes.json"
    store = JsonRecipeStore(path)

    assert store.save_recipes([_recipe()])

    assert store.load_recipes() == [_recipe()]
    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["kasuya_favorite_recipes"][0] == {
        "id": "1700000000000",
        "name": "Morning V60",
        "coffeeWeight": 20,
        "flavor": "sweetness",
        "intensity": "strong",
        "createdAt": 1_700_000_000_000,
    }


def test_corrupt_json_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "recipes.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonRecipeStore(path).load_recipes() == []


def test_non_array_value_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps({"kasuya_favorite_recipes": {"a": 1}}), encoding="utf-8")

    assert JsonRecipeStore(path).load_recipes() == []


def test_non_object_document_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "recipes.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    assert JsonRecipeStore(path).load_recipes() == []


def test_unreadable_entries_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "recipes.json"
    good = {
        "id": "1",
        "name": "Kept",
        "coffeeWeight": 15,
        "flavor": "acidity",
        "intensity": "soft",
        "createdAt": 1,
    }
    bad_flavor = {**good, "id": "2", "flavor": "bitter"}
    path.write_text(
        json.dumps({"kasuya_favorite_recipes": [good, bad_flavor, "junk"]}),
        encoding="utf-8",
    )

    recipes = JsonRecipeStore(path).load_recipes()

    assert [recipe.name for recipe in recipes] == ["Kept"]


def test_other_keys_survive_saves(tmp_path: Path) -> None:
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")

    JsonRecipeStore(path).save_recipes([_recipe()])

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["theme"] == "dark"
    assert len(document["kasuya_favorite_recipes"]) == 1


def test_custom_storage_key(tmp_path: Path) -> None:
    path = tmp_path / "recipes.json"
    JsonRecipeStore(path, storage_key="other").save_recipes([_recipe()])

    assert JsonRecipeStore(path).load_recipes() == []
    assert JsonRecipeStore(path, storage_key="other").load_recipes() == [_recipe()]


def test_write_failure_reports_false(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = JsonRecipeStore(blocker / "recipes.json")

    assert store.save_recipes([_recipe()]) is False


def test_failed_replace_leaves_no_temp_file(tmp_path: Path, monkeypatch) -> None:
    def refuse_replace(src, dst) -> None:
        raise OSError("read-only target")

    path = tmp_path / "recipes.json"
    monkeypatch.setattr(os, "replace", refuse_replace)

    assert JsonRecipeStore(path).save_recipes([_recipe()]) is False
    assert list(tmp_path.iterdir()) == []
