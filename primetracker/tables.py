"""Indexed lookup tables built from the export manifests."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator

from primetracker.relic import Rarity


class Recipes:
    """Recipes by their unique name and by the item they produce."""

    def __init__(self) -> None:
        self._result_by_recipe: dict[str, str] = {}
        self._recipes_by_result: defaultdict[str, list[str]] = defaultdict(list)

    def add(self, unique_name: str, result_type: str) -> None:
        self._result_by_recipe[unique_name] = result_type
        self._recipes_by_result[result_type].append(unique_name)

    def by_unique_name(self, unique_name: str) -> str | None:
        """Return the item a recipe produces, if the recipe is known."""
        return self._result_by_recipe.get(unique_name)

    def by_result_type(self, result_type: str) -> Iterator[str]:
        """Yield the unique names of every recipe producing an item."""
        yield from tuple(self._recipes_by_result.get(result_type, ()))


class RelicRewards:
    """Which relic yields which reward, at what rarity."""

    def __init__(self) -> None:
        self._by_relic: defaultdict[str, list[tuple[str, Rarity]]] = defaultdict(list)
        self._by_reward: defaultdict[str, list[tuple[str, Rarity]]] = defaultdict(list)

    def add(self, relic_unique_name: str, reward_unique_name: str, rarity: Rarity) -> None:
        self._by_relic[relic_unique_name].append((reward_unique_name, rarity))
        self._by_reward[reward_unique_name].append((relic_unique_name, rarity))

    def by_relic(self, relic_unique_name: str) -> Iterator[tuple[str, Rarity]]:
        """Yield (reward, rarity) pairs for a relic."""
        yield from tuple(self._by_relic.get(relic_unique_name, ()))

    def by_reward(self, reward_unique_name: str) -> Iterator[tuple[str, Rarity]]:
        """Yield (relic, rarity) pairs for every relic that drops a reward."""
        yield from tuple(self._by_reward.get(reward_unique_name, ()))


class Relics:
    """Relic unique names and common names."""

    def __init__(self) -> None:
        self._common_by_unique: dict[str, str] = {}
        self._unique_by_common: dict[str, str] = {}

    def add(self, unique_name: str, common_name: str) -> None:
        self._common_by_unique[unique_name] = common_name
        self._unique_by_common[common_name] = unique_name

    def by_unique_name(self, unique_name: str) -> str | None:
        """Return the common name of a relic."""
        return self._common_by_unique.get(unique_name)

    def by_common_name(self, common_name: str) -> str | None:
        """Return the unique name of a relic."""
        return self._unique_by_common.get(common_name)


class Resources:
    """Item unique names and common names."""

    def __init__(self) -> None:
        self._common_by_unique: dict[str, str] = {}
        self._unique_by_common: dict[str, str] = {}

    def add(self, unique_name: str, common_name: str) -> None:
        self._common_by_unique[unique_name] = common_name
        self._unique_by_common[common_name] = unique_name

    def by_unique_name(self, unique_name: str) -> str | None:
        """Return the common name of an item."""
        return self._common_by_unique.get(unique_name)

    def by_common_name(self, common_name: str) -> str | None:
        """Return the unique name of an item."""
        return self._unique_by_common.get(common_name)


class Requires:
    """The ingredients each recipe needs and how many of each."""

    def __init__(self) -> None:
        self._by_recipe: defaultdict[str, list[tuple[str, int]]] = defaultdict(list)
        self._by_item: dict[str, tuple[str, int]] = {}

    def add(self, recipe_unique_name: str, item_type: str, count: int) -> None:
        self._by_recipe[recipe_unique_name].append((item_type, count))
        self._by_item[item_type] = (recipe_unique_name, count)

    def by_recipe(self, recipe_unique_name: str) -> Iterator[tuple[str, int]]:
        """Yield (item, count) pairs for the ingredients of a recipe."""
        yield from tuple(self._by_recipe.get(recipe_unique_name, ()))

    def by_item_type(self, item_type: str) -> tuple[str, int] | None:
        """Return (recipe, count) for the last recipe added that uses an item."""
        return self._by_item.get(item_type)