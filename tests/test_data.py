import json
import lzma

import pytest

from primetracker.data import Data, normalize_reward_name
from primetracker.index import ManifestIndexError
from primetracker.relic import Rarity, Relic

ASH = "/Lotus/Powersuits/Ash/AshPrime"
ODONATA = "/Lotus/Powersuits/Archwing/Odonata"
SYSTEMS = "/Lotus/Types/Recipes/WarframeRecipes/AshPrimeSystemsComponent"
CELL = "/Lotus/Types/Items/MiscItems/OrokinCell"
BRATON = "/Lotus/Weapons/Tenno/Rifle/Braton"
CARRIER = "/Lotus/Types/Sentinels/Carrier"
ASH_BP = "/Lotus/Types/Recipes/WarframeRecipes/AshPrimeBlueprint"
RELIC_A = "/Lotus/Types/Game/Projections/T1VoidProjectionA"
RELIC_B = "/Lotus/Types/Game/Projections/T2VoidProjectionB"

MANIFESTS = {
    "ExportResources_en.json": {
        "ExportResources": [
            {"uniqueName": SYSTEMS, "name": "Ash Prime Systems"},
            {"uniqueName": CELL, "name": "Orokin Cell"},
        ]
    },
    "ExportWarframes_en.json": {
        "ExportWarframes": [
            {"uniqueName": ASH, "name": "Ash Prime"},
            {"uniqueName": ODONATA, "name": "<ARCHWING> Odonata"},
        ]
    },
    "ExportWeapons_en.json": {"ExportWeapons": [{"uniqueName": BRATON, "name": "Braton"}]},
    "ExportSentinels_en.json": {"ExportSentinels": [{"uniqueName": CARRIER, "name": "Carrier"}]},
    "ExportRecipes_en.json": {
        "ExportRecipes": [
            {
                "uniqueName": ASH_BP,
                "resultType": ASH,
                "ingredients": [
                    {"ItemType": SYSTEMS, "ItemCount": 1},
                    {"ItemType": CELL, "ItemCount": 2},
                ],
            }
        ]
    },
    "ExportRelicArcane_en.json": {
        "ExportRelicArcane": [
            {
                "uniqueName": RELIC_A,
                "name": "Lith A1 Relic",
                "relicRewards": [
                    {"rewardName": "/Lotus/StoreItems/Types/Recipes/WarframeRecipes/AshPrimeSystemsComponent",
                     "rarity": "RARE"}
                ],
            },
            {
                "uniqueName": RELIC_B,
                "name": "Meso B2 Relic",
                "relicRewards": [
                    {"rewardName": "/Lotus/StoreItems/Types/Recipes/WarframeRecipes/AshPrimeSystemsComponent",
                     "rarity": "UNCOMMON"}
                ],
            },
            {"uniqueName": "/Lotus/Upgrades/CosmeticEnhancers/Energize", "name": "Arcane Energize"},
        ]
    },
}

DROPTABLE = """<html><body>
<h3 id="missionRewards">Missions:</h3>
<table>
<tr><td>Lith A1 Relic</td><td>Rare</td></tr>
<tr><td>Lith A1 Relic (Radiant)</td><td>Rare</td></tr>
</table>
</body></html>"""

WORLDSTATE = {
    "Invasions": [
        {
            "Faction": "FC_GRINEER",
            "AttackerReward": [],
            "DefenderReward": {"countedItems": [{"ItemType": CELL, "ItemCount": 1}]},
        }
    ],
    "PrimeVaultTraders": [
        {"Manifest": [{"ItemType": "/Lotus/StoreItems/Types/Game/Projections/T2VoidProjectionB"}]}
    ],
}


def _hashed(key):
    return key + "!" + "A" * 25


def _write_cache(directory, keys):
    index_text = "\n".join(_hashed(key) for key in keys) + "\n"
    (directory / "index_en.txt.lzma").write_bytes(
        lzma.compress(index_text.encode("utf-8"), format=lzma.FORMAT_ALONE)
    )
    for key in keys:
        (directory / _hashed(key)).write_text(json.dumps(MANIFESTS[key]), encoding="utf-8")
    (directory / "droptable.html").write_text(DROPTABLE, encoding="utf-8")
    (directory / "worldstate.json").write_text(json.dumps(WORLDSTATE), encoding="utf-8")


@pytest.fixture
def cached(tmp_path):
    _write_cache(tmp_path, list(MANIFESTS))
    return Data.from_cache(tmp_path)


def test_normalize_reward_name_drops_store_items():
    assert normalize_reward_name("/Lotus/StoreItems/Types/Game/Projections/T1") == (
        "/Lotus/Types/Game/Projections/T1"
    )
    assert normalize_reward_name(SYSTEMS) == SYSTEMS
    assert normalize_reward_name("") == ""


def test_from_cache_names(cached):
    assert cached.resource_unique_name("Ash Prime") == ASH
    assert cached.resource_common_name(ODONATA) == "Odonata"
    assert cached.resource_common_name(BRATON) == "Braton"
    assert cached.resource_common_name(CARRIER) == "Carrier"
    assert cached.resource_common_name("/Lotus/Nothing") is None


def test_from_cache_recipes(cached):
    assert cached.recipe(ASH) == ASH_BP
    assert list(cached.recipes(ASH)) == [ASH_BP]
    assert cached.recipe_result(ASH_BP) == ASH
    assert list(cached.requirements(ASH_BP)) == [(SYSTEMS, 1), (CELL, 2)]
    assert cached.how_many_needed(ASH_BP, CELL) == 2


def test_from_cache_relics_and_invasions(cached):
    assert cached.active_relics(SYSTEMS) == [Relic("Lith A1 Relic", Rarity.RARE)]
    assert cached.resurgence_relics(SYSTEMS) == [Relic("Meso B2 Relic", Rarity.UNCOMMON)]
    assert cached.available_from_invasion(CELL) is True
    assert cached.available_from_invasion(SYSTEMS) is False


def test_from_cache_missing_index_entry(tmp_path):
    _write_cache(tmp_path, [key for key in MANIFESTS if key != "ExportSentinels_en.json"])
    with pytest.raises(ManifestIndexError):
        Data.from_cache(tmp_path)


def _manual():
    db = Data()
    db.relics.add(RELIC_A, "Lith A1 Relic")
    db.relics.add(RELIC_B, "Meso B2 Relic")
    db.relic_rewards.add(RELIC_B, SYSTEMS, Rarity.COMMON)
    db.relic_rewards.add(RELIC_A, SYSTEMS, Rarity.RARE)
    db.relic_rewards.add(RELIC_A, SYSTEMS, Rarity.RARE)
    db.active_relic_names.update({"Lith A1 Relic", "Meso B2 Relic"})
    return db


def test_active_relics_sorted_and_deduplicated():
    relics = _manual().active_relics(SYSTEMS)
    assert relics == sorted(set(relics))
    assert relics == [Relic("Lith A1 Relic", Rarity.RARE), Relic("Meso B2 Relic", Rarity.COMMON)]


def test_relics_for_unknown_component_are_empty():
    db = _manual()
    assert db.active_relics(CELL) == []
    assert db.resurgence_relics(CELL) == []


def test_unknown_relic_gives_none():
    db = _manual()
    db.relic_rewards.add("/Lotus/Types/Game/Projections/Unknown", SYSTEMS, Rarity.RARE)
    assert db.active_relics(SYSTEMS) is None
    assert db.resurgence_relics(SYSTEMS) is None


def test_resurgence_checks_unique_names():
    db = _manual()
    db.resurgence_relic_names.add("Lith A1 Relic")
    assert db.resurgence_relics(SYSTEMS) == []
    db.resurgence_relic_names.add(RELIC_A)
    assert db.resurgence_relics(SYSTEMS) == [Relic("Lith A1 Relic", Rarity.RARE)]


def test_how_many_needed_and_recipe_missing():
    db = Data()
    db.requires.add(ASH_BP, CELL, 3)
    assert db.how_many_needed(ASH_BP, CELL) == 3
    assert db.how_many_needed(ASH_BP, SYSTEMS) is None
    assert db.recipe(ASH) is None
    assert db.recipe_result(ASH_BP) is None