"""Relic rarities and the relics that drop an item."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Rarity(IntEnum):
    """How likely a relic is to yield a reward, from most to least common."""

    COMMON = 0
    UNCOMMON = 1
    RARE = 2

    @classmethod
    def parse(cls, text: str) -> Rarity:
        """Parse the upper-case rarity name used in the export manifests."""
        try:
            return cls[text]
        except KeyError:
            raise ValueError(f"Unknown rarity: {text}") from None


@dataclass(frozen=True, order=True)
class Relic:
    """A relic, by common name, together with the rarity of one of its rewards."""

    name: str
    rarity: Rarity