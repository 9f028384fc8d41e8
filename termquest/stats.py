"""Resource pools and attributes shared by characters and gear."""

from __future__ import annotations

from dataclasses import astuple, dataclass


@dataclass
class Resources:
    """Health, stamina and mana amounts."""

    health: int = 0
    stamina: int = 0
    mana: int = 0

    def total(self) -> int:
        """Sum of all resource values."""
        return sum(astuple(self))


@dataclass
class Attributes:
    """The five character attributes."""

    strength: int = 0
    intelligence: int = 0
    agility: int = 0
    constitution: int = 0
    luck: int = 0

    def total(self) -> int:
        """Sum of all attribute values."""
        return sum(astuple(self))