"""Items the user tracks and the saved tracking state."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from primetracker.data import Data
from primetracker.recipe import MissingDataError, Recipe
from primetracker.requirement import Requirement

_U32_MAX = 2**32 - 1


class StateError(ValueError):
    """The saved tracking file did not have the expected shape."""


@dataclass(frozen=True)
class Tracked:
    """A tracked item with every recipe that makes it and their ingredients."""

    common_name: str
    unique_name: str
    recipes: tuple[tuple[Recipe, tuple[tuple[Requirement, int], ...]], ...]

    @classmethod
    def from_unique_name(cls, db: Data, unique_name: str) -> Tracked:
        """Gather the recipes and ingredients of an item from the database."""
        common_name = db.resource_common_name(unique_name)
        if common_name is None:
            raise MissingDataError(f"Searching for resource common name of {unique_name}")

        recipes = []
        for recipe_unique_name in db.recipes(unique_name):
            recipe = Recipe.from_unique_name(db, recipe_unique_name)
            components = []
            for item, count in db.requirements(recipe_unique_name):
                try:
                    requirement = Requirement.from_unique_name(db, item)
                except MissingDataError as error:
                    raise MissingDataError(
                        f"Generating component data for {item}: {error}"
                    ) from error
                components.append((requirement, count))
            recipes.append((recipe, tuple(components)))

        if not recipes:
            raise MissingDataError(f"Recipe not found for {unique_name}")
        return cls(common_name, unique_name, tuple(recipes))


def _parse_saved(text: str) -> tuple[list[str], dict[str, int]]:
    try:
        root: Any = json.loads(text)
    except json.JSONDecodeError as error:
        raise StateError(f"Parsing tracked file: {error}") from error
    if not isinstance(root, dict):
        raise StateError("Parsing tracked file: expected an object")
    for key in ("tracked", "owned"):
        if key not in root:
            raise StateError(f"Parsing tracked file: missing field `{key}`")

    tracked = root["tracked"]
    if not isinstance(tracked, list) or not all(isinstance(name, str) for name in tracked):
        raise StateError("Parsing tracked file: `tracked` is not a list of names")

    owned = root["owned"]
    if not isinstance(owned, dict):
        raise StateError("Parsing tracked file: `owned` is not an object")
    for count in owned.values():
        if isinstance(count, bool) or not isinstance(count, int) or not 0 <= count <= _U32_MAX:
            raise StateError("Parsing tracked file: `owned` holds an invalid count")
    return tracked, dict(owned)


def load_state(path: str | os.PathLike[str], db: Data) -> tuple[list[Tracked], dict[str, int]]:
    """Load the tracked items and owned counts; a missing file raises FileNotFoundError."""
    text = Path(path).read_bytes().decode("utf-8")
    names, owned = _parse_saved(text)
    tracked = []
    for name in names:
        try:
            tracked.append(Tracked.from_unique_name(db, name))
        except MissingDataError as error:
            raise MissingDataError(f"Enriching {name}: {error}") from error
    return tracked, owned


def save_state(
    path: str | os.PathLike[str], tracked: list[Tracked], owned: dict[str, int]
) -> None:
    """Write the tracked items and the non-zero owned counts."""
    saved = {
        "tracked": [item.unique_name for item in tracked],
        "owned": {name: count for name, count in owned.items() if count != 0},
    }
    Path(path).write_text(json.dumps(saved, separators=(",", ":")), encoding="utf-8")