"""Recipe ingredients, either raw components or items crafted from their own recipe."""

from __future__ import annotations

from dataclasses import dataclass

from primetracker.data import Data
from primetracker.recipe import MissingDataError, Recipe
from primetracker.relic import Relic


@dataclass(frozen=True)
class Requirement:
    """An ingredient; crafted ones show the drop information of their blueprint."""

    common_name: str
    unique_name: str
    active_relics: tuple[Relic, ...] = ()
    resurgence_relics: tuple[Relic, ...] = ()
    available_from_invasion: bool = False
    recipe: Recipe | None = None

    @classmethod
    def from_unique_name(cls, db: Data, unique_name: str) -> Requirement:
        """Describe an ingredient from its unique name."""
        common_name = db.resource_common_name(unique_name)
        if common_name is None:
            raise MissingDataError(f"Looking for common name of {unique_name}")

        recipe_unique_name = db.recipe(unique_name)
        if recipe_unique_name is not None:
            recipe: Recipe | None = Recipe.from_unique_name(db, recipe_unique_name)
            source = recipe
        else:
            recipe = None
            source = Recipe.with_common_name(db, unique_name, common_name)

        return cls(
            common_name,
            unique_name,
            active_relics=source.active_relics,
            resurgence_relics=source.resurgence_relics,
            available_from_invasion=source.available_from_invasion,
            recipe=recipe,
        )