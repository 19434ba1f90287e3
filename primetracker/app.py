"""The recipe tracker application: cache refresh, tracking state and window."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path

from primetracker import live
from primetracker.data import Data
from primetracker.index import HASH_SUFFIX_LENGTH, ManifestIndexError, parse_index
from primetracker.recipe import ItemView
from primetracker.relic import Rarity
from primetracker.tracked import Tracked, load_state, save_state

_WINDOW_TITLE = "Recipe Tracker"
_ITEMS_PER_ROW = 7
_BACKGROUND = "#1b1b1b"
_TEXT = "#8c8c8c"
_FULFILLED = "#000000"
_RELIC_COLOURS = {
    Rarity.COMMON: "#a52a2a",
    Rarity.UNCOMMON: "#a0a0a0",
    Rarity.RARE: "#ffd700",
}


def cache_dir() -> Path:
    """Return the directory where manifests and tracking state are kept."""
    relative = "primes" if sys.platform.startswith("win") else ".cache/primes"
    return Path.home() / relative


def remove_old_manifests(directory: Path, index: dict[str, str]) -> None:
    """Delete cached manifests whose hashed name no longer matches the index."""
    for entry in Path(directory).iterdir():
        name = entry.name
        if not name.startswith("Export"):
            continue
        key = name[:-HASH_SUFFIX_LENGTH]
        if key not in index:
            raise ManifestIndexError(f"Manifest missing from index: {key}")
        if name != index[key]:
            print(f"Deleting stale manifest: {name}")
            entry.unlink()


def update_index(directory: Path) -> None:
    """Download the manifest index, prune stale manifests and store the index."""
    directory = Path(directory)
    index = live.fetch_index()
    remove_old_manifests(directory, parse_index(index))
    (directory / "index_en.txt.lzma").write_bytes(index)


def title_case(text: str) -> str:
    """Normalise space-separated words to capitalised words joined by single spaces."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" ") if word)


def relic_colour(rarity: Rarity) -> str:
    """Return the colour a relic of the given reward rarity is shown in."""
    return _RELIC_COLOURS[rarity]


@dataclass
class TrackerState:
    """The tracked items and owned counts the window shows and edits."""

    db: Data
    tracked: list[Tracked] = field(default_factory=list)
    owned: dict[str, int] = field(default_factory=dict)
    cache_dir: Path = field(default_factory=cache_dir)

    def add(self, text: str) -> Tracked | None:
        """Track the item named by the text, if it is known and craftable."""
        added = None
        unique_name = self.db.resource_unique_name(title_case(text))
        if unique_name is not None:
            try:
                added = Tracked.from_unique_name(self.db, unique_name)
            except LookupError:
                added = None
            if added is not None:
                self.tracked.append(added)
        self.tracked.sort(key=lambda item: item.common_name)
        return added

    def remove(self, position: int) -> Tracked:
        """Stop tracking the item at a position."""
        return self.tracked.pop(position)

    def increment(self, unique_name: str) -> int:
        """Count one more owned copy of an item."""
        self.owned[unique_name] = self.owned.get(unique_name, 0) + 1
        return self.owned[unique_name]

    def decrement(self, unique_name: str) -> int:
        """Count one fewer owned copy of an item, never going below zero."""
        self.owned[unique_name] = max(self.owned.get(unique_name, 0) - 1, 0)
        return self.owned[unique_name]

    def is_fulfilled(self, unique_name: str, required: int) -> bool:
        """Tell whether enough copies of an item are owned."""
        return self.owned.get(unique_name, 0) >= required

    def save(self) -> None:
        """Write the tracking state into the cache directory."""
        save_state(self.cache_dir / "tracked.json", self.tracked, self.owned)


def run_gui(state: TrackerState) -> None:
    """Show the tracker window until it is closed, then save the state."""
    import tkinter as tk

    root = tk.Tk()
    root.title(_WINDOW_TITLE)
    root.geometry("1920x1080")
    root.configure(bg=_BACKGROUND)

    def label(parent: tk.Misc, text: str, colour: str = _TEXT, **options: object) -> None:
        tk.Label(parent, text=text, fg=colour, bg=_BACKGROUND, **options).pack(
            side=tk.TOP, anchor="w"
        )

    tk.Label(root, text=_WINDOW_TITLE, fg=_TEXT, bg=_BACKGROUND, font=("TkDefaultFont", 18)).pack(
        anchor="w", padx=8, pady=4
    )
    header = tk.Frame(root, bg=_BACKGROUND)
    header.pack(anchor="w", padx=8)
    tk.Label(header, text="Add Item", fg=_TEXT, bg=_BACKGROUND).pack(side=tk.LEFT)
    search = tk.StringVar()
    tk.Entry(header, textvariable=search).pack(side=tk.LEFT, padx=4)
    grid = tk.Frame(root, bg=_BACKGROUND)
    grid.pack(anchor="nw", padx=8, pady=8, fill=tk.BOTH, expand=True)

    def relic_list(parent: tk.Misc, relics: tuple) -> None:
        for relic in relics:
            label(parent, relic.name, relic_colour(relic.rarity))

    def component_group(parent: tk.Misc, item: ItemView, required: int) -> None:
        name = item.unique_name
        fulfilled = state.is_fulfilled(name, required)
        colour = _FULFILLED if fulfilled else _TEXT
        group = tk.Frame(parent, bg=_BACKGROUND)
        group.pack(side=tk.TOP, anchor="w", pady=2)
        row = tk.Frame(group, bg=_BACKGROUND)
        row.pack(side=tk.TOP, anchor="w")

        def change(step: object) -> None:
            step(name)
            render()

        tk.Button(row, text="-", command=lambda: change(state.decrement)).pack(side=tk.LEFT)
        tk.Button(row, text="+", command=lambda: change(state.increment)).pack(side=tk.LEFT)
        tk.Label(
            row, text=f"{state.owned.get(name, 0)} of {required}", fg=colour, bg=_BACKGROUND
        ).pack(side=tk.LEFT)
        tk.Label(row, text=item.common_name, fg=colour, bg=_BACKGROUND).pack(side=tk.LEFT)

        # Drop information is only useful while more copies are still needed.
        if fulfilled:
            return
        relic_list(group, item.active_relics)
        if item.resurgence_relics:
            label(group, "Resurgence Relics")
            relic_list(group, item.resurgence_relics)
        if item.available_from_invasion:
            label(group, "Invasion")

    def item_group(position: int, tracked: Tracked) -> None:
        frame = tk.Frame(grid, bg=_BACKGROUND, highlightbackground=_TEXT, highlightthickness=1)
        frame.grid(
            row=position // _ITEMS_PER_ROW,
            column=position % _ITEMS_PER_ROW,
            sticky="nw",
            padx=4,
            pady=4,
        )
        top = tk.Frame(frame, bg=_BACKGROUND)
        top.pack(side=tk.TOP, anchor="w")

        def delete() -> None:
            state.remove(position)
            render()

        tk.Button(top, text="Del", command=delete).pack(side=tk.LEFT)
        tk.Label(
            top, text=tracked.common_name, fg=_TEXT, bg=_BACKGROUND, font=("TkDefaultFont", 14)
        ).pack(side=tk.LEFT)
        recipes = tk.Frame(frame, bg=_BACKGROUND)
        recipes.pack(side=tk.TOP, anchor="w")
        for recipe, components in tracked.recipes:
            column = tk.Frame(recipes, bg=_BACKGROUND)
            column.pack(side=tk.LEFT, anchor="n", padx=4)
            component_group(column, recipe, 1)
            for requirement, count in components:
                component_group(column, requirement, count)

    def render() -> None:
        for child in grid.winfo_children():
            child.destroy()
        for position, tracked in enumerate(state.tracked):
            item_group(position, tracked)

    def add() -> None:
        state.add(search.get())
        search.set("")
        render()

    tk.Button(header, text="Add", command=add).pack(side=tk.LEFT)

    def close() -> None:
        state.save()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", close)
    render()
    root.mainloop()


def main(argv: list[str] | None = None) -> int:
    """Refresh the cache, load the tracking state and open the tracker window."""
    argparse.ArgumentParser(prog="primetracker", description="Track prime recipes.").parse_args(
        argv
    )
    try:
        directory = cache_dir()
        directory.mkdir(parents=True, exist_ok=True)
        try:
            update_index(directory)
        except (live.FetchError, ManifestIndexError) as error:
            raise RuntimeError(f"Checking for manifest updates: {error}") from error
        (directory / "droptable.html").write_bytes(live.fetch_droptable().encode("utf-8"))
        (directory / "worldstate.json").write_bytes(live.fetch_worldstate().encode("utf-8"))

        data = Data.from_cache(directory)
        try:
            tracked, owned = load_state(directory / "tracked.json", data)
        except FileNotFoundError:
            print("Could not find tracked file. A new one will be created", file=sys.stderr)
            tracked, owned = [], {}
    except (OSError, ValueError, LookupError, RuntimeError, live.FetchError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    run_gui(TrackerState(data, tracked, owned, directory))
    return 0