"""Shared enums and constants for team balancing and rating."""

from __future__ import annotations

from enum import Enum

TEAM_SIZE = 5


class Side(str, Enum):
    """Which team a player is on."""

    ALPHA = "ALPHA"
    BRAVO = "BRAVO"

    @property
    def opponent(self) -> Side:
        return Side.BRAVO if self is Side.ALPHA else Side.ALPHA


class Role(str, Enum):
    """Weapon class a player can queue for.

    SMG is the flexible class: it never fills a slot by name, only as a fallback.
    """

    SNIPER = "SNIPER"
    T1 = "T1"
    T2 = "T2"
    T3 = "T3"
    T4 = "T4"
    SMG = "SMG"


__all__ = ["Role", "Side", "TEAM_SIZE"]
