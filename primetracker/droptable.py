"""Relics currently dropping from missions, read from the cached drop table page."""

from __future__ import annotations

import os
from pathlib import Path

from bs4 import BeautifulSoup

from primetracker import live

_RELIC_PREFIXES = ("Lith", "Meso", "Neo", "Axi")
_RADIANT_SUFFIX = " (Radiant)"


class DroptableError(ValueError):
    """The drop table page did not have the expected layout."""


def is_relic(item: str) -> bool:
    """Tell whether a drop table entry names a relic."""
    return item.startswith(_RELIC_PREFIXES)


def _strip_radiant(name: str) -> str:
    while name.endswith(_RADIANT_SUFFIX):
        name = name[: -len(_RADIANT_SUFFIX)]
    return name


def active_relics(path: str | os.PathLike[str]) -> list[str]:
    """Return the names of the relics in the mission rewards table."""
    path = Path(path)
    if not path.exists():
        path.write_bytes(live.fetch_droptable().encode("utf-8"))
    document = BeautifulSoup(path.read_bytes().decode("utf-8"), "html.parser")
    table = document.select_one("#missionRewards ~ table")
    if table is None:
        raise DroptableError("Could not find the mission rewards table")

    relics = []
    for cell in table.select("td"):
        text = next(iter(cell.strings), None)
        if text is not None and is_relic(text):
            relics.append(_strip_radiant(str(text)))
    return relics