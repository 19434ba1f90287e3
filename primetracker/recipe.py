"""Recipes (blueprints) and the drop information shown for them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from primetracker.data import Data
from primetracker.relic import Relic


class MissingDataError(LookupError):
    """An item or recipe is not described by the database."""


class ItemView(Protocol):
    """What the tracker shows for an item: its names and where it drops."""

    @property
    def common_name(self) -> str: ...

    @property
    def unique_name(self) -> str: ...

    @property
    def active_relics(self) -> tuple[Relic, ...]: ...

    @property
    def resurgence_relics(self) -> tuple[Relic, ...]: ...

    @property
    def available_from_invasion(self) -> bool: ...


@dataclass(frozen=True)
class Recipe:
    """A blueprint; prime ones drop from relics, others may come from invasions."""

    common_name: str
    unique_name: str
    active_relics: tuple[Relic, ...] = ()
    resurgence_relics: tuple[Relic, ...] = ()
    available_from_invasion: bool = False

    @classmethod
    def from_unique_name(cls, db: Data, unique_name: str) -> Recipe:
        """Create a recipe from its unique name, naming it after what it produces."""
        result = db.recipe_result(unique_name)
        if result is None:
            raise MissingDataError(f"Looking for recipe result of {unique_name}")
        common_name = db.resource_common_name(result)
        if common_name is None:
            raise MissingDataError(f"Looking for recipe result common name of {result}")
        return cls.with_common_name(db, unique_name, f"{common_name} Blueprint")

    @classmethod
    def with_common_name(cls, db: Data, unique_name: str, common_name: str) -> Recipe:
        """Create a recipe with a given display name."""
        if "Prime" in common_name:
            return cls(
                common_name,
                unique_name,
                active_relics=tuple(db.active_relics(unique_name) or ()),
                resurgence_relics=tuple(db.resurgence_relics(unique_name) or ()),
            )
        return cls(
            common_name,
            unique_name,
            available_from_invasion=db.available_from_invasion(unique_name),
        )