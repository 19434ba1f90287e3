"""Loading of the export manifests from the cache, downloading what is missing."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from primetracker import live
from primetracker.relic import Rarity

_U32_MAX = 2**32 - 1


class ManifestError(ValueError):
    """A manifest did not have the expected shape."""


@dataclass(frozen=True)
class Ingredient:
    item_type: str
    item_count: int


@dataclass(frozen=True)
class RecipeEntry:
    unique_name: str
    result_type: str
    ingredients: tuple[Ingredient, ...]


@dataclass(frozen=True)
class Reward:
    reward_name: str
    rarity: Rarity


@dataclass(frozen=True)
class RelicEntry:
    unique_name: str
    name: str
    relic_rewards: tuple[Reward, ...]


@dataclass(frozen=True)
class NamedEntry:
    """Any manifest entry that only needs its unique name and display name."""

    unique_name: str
    name: str


def load_manifest(cache: str | os.PathLike[str], manifest: str) -> str:
    """Return a manifest's text, downloading and caching it if it is not on disk."""
    path = Path(cache) / manifest
    try:
        contents = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError):
        contents = live.fetch_manifest(manifest)
        path.write_bytes(contents.encode("utf-8"))
    # The published files carry stray line breaks that are not valid JSON.
    return contents.replace("\r\n", "")


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ManifestError(f"Parsing manifest: expected an object for {what}")
    return value


def _field(obj: dict[str, Any], key: str) -> Any:
    if key not in obj:
        raise ManifestError(f"Parsing manifest: missing field `{key}`")
    return obj[key]


def _string(obj: dict[str, Any], key: str) -> str:
    value = _field(obj, key)
    if not isinstance(value, str):
        raise ManifestError(f"Parsing manifest: `{key}` is not a string")
    return value


def _array(obj: dict[str, Any], key: str) -> list[Any]:
    value = _field(obj, key)
    if not isinstance(value, list):
        raise ManifestError(f"Parsing manifest: `{key}` is not an array")
    return value


def _count(obj: dict[str, Any], key: str) -> int:
    value = _field(obj, key)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U32_MAX:
        raise ManifestError(f"Parsing manifest: `{key}` is not a valid count")
    return value


def _export(cache: str | os.PathLike[str], manifest: str, key: str) -> list[Any]:
    text = load_manifest(cache, manifest)
    try:
        root = json.loads(text)
    except json.JSONDecodeError as error:
        raise ManifestError(f"Parsing manifest: {error}") from error
    return _array(_object(root, "the manifest"), key)


def _ingredient(value: Any) -> Ingredient:
    obj = _object(value, "an ingredient")
    return Ingredient(_string(obj, "ItemType"), _count(obj, "ItemCount"))


def _recipe(value: Any) -> RecipeEntry:
    obj = _object(value, "a recipe")
    return RecipeEntry(
        unique_name=_string(obj, "uniqueName"),
        result_type=_string(obj, "resultType"),
        ingredients=tuple(_ingredient(i) for i in _array(obj, "ingredients")),
    )


def _reward(value: Any) -> Reward:
    obj = _object(value, "a relic reward")
    rarity = _field(obj, "rarity")
    if not isinstance(rarity, str):
        raise ManifestError("Parsing manifest: `rarity` is not a string")
    try:
        parsed = Rarity.parse(rarity)
    except ValueError as error:
        raise ManifestError(f"Parsing manifest: {error}") from error
    return Reward(_string(obj, "rewardName"), parsed)


def _named(cache: str | os.PathLike[str], manifest: str, key: str) -> list[NamedEntry]:
    entries = []
    for value in _export(cache, manifest, key):
        obj = _object(value, "an entry")
        entries.append(NamedEntry(_string(obj, "uniqueName"), _string(obj, "name")))
    return entries


def load_recipes(cache: str | os.PathLike[str], manifest: str) -> list[RecipeEntry]:
    """Load every recipe in the recipes manifest."""
    return [_recipe(value) for value in _export(cache, manifest, "ExportRecipes")]


def load_relics(cache: str | os.PathLike[str], manifest: str) -> list[RelicEntry]:
    """Load the relics from the relic/arcane manifest, skipping arcanes."""
    relics = []
    for value in _export(cache, manifest, "ExportRelicArcane"):
        obj = _object(value, "a relic or arcane")
        unique_name = _string(obj, "uniqueName")
        name = _string(obj, "name")
        rewards = obj.get("relicRewards")
        if rewards is None:
            continue
        if not isinstance(rewards, list):
            raise ManifestError("Parsing manifest: `relicRewards` is not an array")
        relics.append(RelicEntry(unique_name, name, tuple(_reward(r) for r in rewards)))
    return relics


def load_resources(cache: str | os.PathLike[str], manifest: str) -> list[NamedEntry]:
    """Load the resources manifest."""
    return _named(cache, manifest, "ExportResources")


def load_warframes(cache: str | os.PathLike[str], manifest: str) -> list[NamedEntry]:
    """Load the warframes manifest."""
    return _named(cache, manifest, "ExportWarframes")


def load_weapons(cache: str | os.PathLike[str], manifest: str) -> list[NamedEntry]:
    """Load the weapons manifest."""
    return _named(cache, manifest, "ExportWeapons")


def load_sentinels(cache: str | os.PathLike[str], manifest: str) -> list[NamedEntry]:
    """Load the sentinels manifest."""
    return _named(cache, manifest, "ExportSentinels")