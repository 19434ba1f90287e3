"""The in-memory database of items, recipes and relics built from the cache."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from primetracker import droptable, manifests, worldstate
from primetracker.index import ManifestIndexError, load_index
from primetracker.relic import Relic
from primetracker.tables import Recipes, RelicRewards, Relics, Requires, Resources

_ARCHWING_PREFIX = "<ARCHWING> "


def normalize_reward_name(name: str) -> str:
    """Drop the "StoreItems" path segment so a reward lines up with item names."""
    return "/".join(segment for segment in name.split("/") if segment != "StoreItems")


@dataclass
class Data:
    """Every lookup the tracker needs, keyed by unique and common names."""

    resources: Resources = field(default_factory=Resources)
    recipe_table: Recipes = field(default_factory=Recipes)
    requires: Requires = field(default_factory=Requires)
    relics: Relics = field(default_factory=Relics)
    relic_rewards: RelicRewards = field(default_factory=RelicRewards)
    active_relic_names: set[str] = field(default_factory=set)
    resurgence_relic_names: set[str] = field(default_factory=set)
    invasion_rewards: set[str] = field(default_factory=set)

    @classmethod
    def from_cache(cls, cache_dir: str | os.PathLike[str]) -> Data:
        """Build the database from the index, manifests and live files in a cache."""
        cache_dir = Path(cache_dir)
        index = load_index(cache_dir / "index_en.txt.lzma")

        def manifest(key: str) -> str:
            try:
                return index[key]
            except KeyError:
                raise ManifestIndexError(f"Manifest missing from index: {key}") from None

        data = cls()
        for entry in manifests.load_resources(cache_dir, manifest("ExportResources_en.json")):
            data.resources.add(entry.unique_name, entry.name)
        for entry in manifests.load_warframes(cache_dir, manifest("ExportWarframes_en.json")):
            data.resources.add(entry.unique_name, entry.name.removeprefix(_ARCHWING_PREFIX))
        for entry in manifests.load_weapons(cache_dir, manifest("ExportWeapons_en.json")):
            data.resources.add(entry.unique_name, entry.name)
        for entry in manifests.load_sentinels(cache_dir, manifest("ExportSentinels_en.json")):
            data.resources.add(entry.unique_name, entry.name)

        for recipe in manifests.load_recipes(cache_dir, manifest("ExportRecipes_en.json")):
            data.recipe_table.add(recipe.unique_name, recipe.result_type)
            for ingredient in recipe.ingredients:
                data.requires.add(recipe.unique_name, ingredient.item_type, ingredient.item_count)

        for relic in manifests.load_relics(cache_dir, manifest("ExportRelicArcane_en.json")):
            data.relics.add(relic.unique_name, relic.name)
            for reward in relic.relic_rewards:
                data.relic_rewards.add(
                    relic.unique_name, normalize_reward_name(reward.reward_name), reward.rarity
                )

        data.active_relic_names.update(droptable.active_relics(cache_dir / "droptable.html"))
        worldstate_path = cache_dir / "worldstate.json"
        data.resurgence_relic_names.update(worldstate.resurgence_relics(worldstate_path))
        data.invasion_rewards.update(worldstate.invasions(worldstate_path))
        return data

    def requirements(self, recipe_unique_name: str) -> Iterator[tuple[str, int]]:
        """Yield (item, count) for each ingredient of a recipe."""
        return self.requires.by_recipe(recipe_unique_name)

    def resource_common_name(self, unique_name: str) -> str | None:
        """Return the display name of an item."""
        return self.resources.by_unique_name(unique_name)

    def resource_unique_name(self, common_name: str) -> str | None:
        """Return the unique name of an item from its display name."""
        return self.resources.by_common_name(common_name)

    def how_many_needed(self, recipe_unique_name: str, resource_unique_name: str) -> int | None:
        """Return how many of an item a recipe needs, if it needs any."""
        return next(
            (count for item, count in self.requirements(recipe_unique_name) if item == resource_unique_name),
            None,
        )

    def _relics_for(
        self, component_unique_name: str, offered: Callable[[str, str], bool]
    ) -> list[Relic] | None:
        found: set[Relic] = set()
        for relic_unique_name, rarity in self.relic_rewards.by_reward(component_unique_name):
            common_name = self.relics.by_unique_name(relic_unique_name)
            if common_name is None:
                return None
            if offered(relic_unique_name, common_name):
                found.add(Relic(common_name, rarity))
        return sorted(found)

    def active_relics(self, component_unique_name: str) -> list[Relic] | None:
        """Relics dropping from missions that yield an item, sorted; None if a relic is unknown."""
        return self._relics_for(
            component_unique_name, lambda _unique, common: common in self.active_relic_names
        )

    def resurgence_relics(self, component_unique_name: str) -> list[Relic] | None:
        """Relics on offer in the resurgence that yield an item, sorted; None if a relic is unknown."""
        return self._relics_for(
            component_unique_name, lambda unique, _common: unique in self.resurgence_relic_names
        )

    def recipes(self, result_type: str) -> Iterator[str]:
        """Yield every recipe that produces an item."""
        return self.recipe_table.by_result_type(result_type)

    def recipe(self, result_type: str) -> str | None:
        """Return the first recipe that produces an item."""
        return next(self.recipes(result_type), None)

    def recipe_result(self, recipe_unique_name: str) -> str | None:
        """Return the item a recipe produces."""
        return self.recipe_table.by_unique_name(recipe_unique_name)

    def available_from_invasion(self, unique_name: str) -> bool:
        """Tell whether an item is a current invasion reward."""
        return unique_name in self.invasion_rewards