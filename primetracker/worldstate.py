"""Invasion rewards and resurgence relics from the cached world state."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from primetracker import live

_PROJECTIONS_PREFIX = "/Lotus/StoreItems/Types/Game/Projections/"
_FACTIONS = frozenset({"FC_GRINEER", "FC_CORPUS", "FC_INFESTATION"})


class WorldStateError(ValueError):
    """The world state document did not have the expected shape."""


@dataclass(frozen=True)
class _State:
    invasion_rewards: tuple[str, ...]
    vault_items: tuple[str, ...]


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise WorldStateError(f"Expected an object for {what}")
    return value


def _field(obj: dict[str, Any], key: str) -> Any:
    if key not in obj:
        raise WorldStateError(f"Missing field `{key}`")
    return obj[key]


def _array(obj: dict[str, Any], key: str) -> list[Any]:
    value = _field(obj, key)
    if not isinstance(value, list):
        raise WorldStateError(f"`{key}` is not an array")
    return value


def _string(obj: dict[str, Any], key: str) -> str:
    value = _field(obj, key)
    if not isinstance(value, str):
        raise WorldStateError(f"`{key}` is not a string")
    return value


def _counted_item(value: Any) -> str:
    obj = _object(value, "a counted item")
    count = _field(obj, "ItemCount")
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise WorldStateError("`ItemCount` is not a valid count")
    return _string(obj, "ItemType")


def _reward_items(value: Any) -> list[str]:
    # A reward is either an object listing counted items or an empty placeholder list.
    if isinstance(value, dict):
        return [_counted_item(item) for item in _array(value, "countedItems")]
    if isinstance(value, list) and all(element is None for element in value):
        return []
    raise WorldStateError("Invasion reward is neither a reward nor an empty list")


def _invasion_rewards(value: Any) -> list[str]:
    obj = _object(value, "an invasion")
    faction = _field(obj, "Faction")
    if faction not in _FACTIONS:
        raise WorldStateError(f"Unknown invasion faction: {faction!r}")
    attacker = _reward_items(_field(obj, "AttackerReward"))
    defender = _reward_items(_field(obj, "DefenderReward"))
    return attacker + defender


def _load(path: str | os.PathLike[str]) -> _State:
    path = Path(path)
    if not path.exists():
        path.write_bytes(live.fetch_worldstate().encode("utf-8"))
    try:
        root = json.loads(path.read_bytes().decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise WorldStateError(f"Parsing world state: {error}") from error
    root = _object(root, "the world state")

    rewards = [item for invasion in _array(root, "Invasions") for item in _invasion_rewards(invasion)]
    vault_items = [
        _string(_object(item, "a vault item"), "ItemType")
        for trader in _array(root, "PrimeVaultTraders")
        for item in _array(_object(trader, "a vault trader"), "Manifest")
    ]
    return _State(tuple(rewards), tuple(vault_items))


def invasions(path: str | os.PathLike[str]) -> list[str]:
    """Return the unique names of every current invasion reward, attacker first."""
    return list(_load(path).invasion_rewards)


def resurgence_relics(path: str | os.PathLike[str]) -> list[str]:
    """Return the unique names of relics on offer from the prime vault traders."""
    return [
        "/".join(segment for segment in item.split("/") if segment != "StoreItems")
        for item in _load(path).vault_items
        if item.startswith(_PROJECTIONS_PREFIX)
    ]