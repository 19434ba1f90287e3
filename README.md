# primetracker

A small desktop tracker for the items you are crafting in Warframe. Add an
item by name and primetracker shows every recipe that builds it, the
components each recipe needs, and how many of each you already own. For parts
you still need, it lists where they drop:

- relics that are currently in the mission drop tables, coloured by reward
  rarity (common, uncommon, rare),
- relics currently offered by the resurgence (prime vault) trader,
- whether the part is a reward of a running invasion.

## Installing

```
pip install .
```

The window is drawn with `tkinter`, which ships with most Python builds; on
some Linux distributions it is a separate system package.

## Running

```
primetracker
```

The command takes no options besides `--help`. On start-up it:

1. creates the cache directory if needed,
2. downloads the public export index and deletes cached `Export*` manifests
   whose hashed file name the index no longer lists, then stores the new index,
3. downloads the current drop table and world state into the cache,
4. loads the resource, warframe, weapon, sentinel, recipe and relic manifests,
   downloading any that are missing from the cache,
5. restores your tracked items and owned counts from `tracked.json`, starting
   empty if that file does not exist, then opens the window.

If any of these steps fails, the error is printed and the command exits with
status 1.

Your list of tracked items and the counts of owned parts are written to
`tracked.json` in the cache directory when the window is closed, and read back
the next time you start the tracker. Parts you own none of are not stored.

## Cache directory

Downloaded manifests, the index, the drop table, the world state and your
saved state live in:

- `~/primes/` on Windows,
- `~/.cache/primes/` everywhere else.

## Using the window

- Type an item name (for example `Rhino Prime`) into the *Add Item* box and
  press *Add*. The text is normalised to capitalised words before lookup, so
  `rhino prime` works too. Names that are unknown, or items with no recipe,
  are ignored. Tracked items are kept sorted by name and laid out seven to a
  row.
- Each recipe is shown as a column: the blueprint first, then its
  ingredients with "owned of required".
- Press *+* and *-* next to a part to change how many you own (never below
  zero). Once you own enough, the part is shown in black and its drop
  information is hidden.
- Press *Del* to stop tracking an item.

## Using it from Python

The building blocks are importable. `Data.from_cache` reads an existing cache,
so the index must already be there (for example after one run of
`primetracker`, or after `primetracker.app.update_index`):

```python
from primetracker.app import cache_dir
from primetracker.data import Data
from primetracker.tracked import Tracked

db = Data.from_cache(cache_dir())
unique_name = db.resource_unique_name("Rhino Prime")
if unique_name is not None:
    item = Tracked.from_unique_name(db, unique_name)
    for recipe, components in item.recipes:
        print(recipe.common_name, [r.common_name for r, _ in recipe.active_relics])
        for requirement, count in components:
            print(" ", count, requirement.common_name)
```

Other useful pieces:

- `primetracker.app.TrackerState` holds the tracked items and owned counts
  with `add`, `remove`, `increment`, `decrement`, `is_fulfilled` and `save`.
- `primetracker.tracked.load_state` and `save_state` read and write
  `tracked.json`.
- `primetracker.live` downloads the drop table, world state, index and
  manifests; failures raise `primetracker.live.FetchError`.

## Running the tests

```
pip install .[test]
pytest
```