"""Polyhedral dice used by the game mechanics."""

from __future__ import annotations

import random
from enum import IntEnum


class Dice(IntEnum):
    """The dice available to the game; the value is the number of faces."""

    D3 = 3
    D4 = 4
    D6 = 6
    D8 = 8
    D10 = 10
    D12 = 12
    D20 = 20

    def __str__(self) -> str:
        return f"d{self.value}"


def roll_dice(dice: Dice | int, rng: random.Random | None = None) -> int:
    """Roll one die and return a value between 1 and its number of faces."""
    source = rng if rng is not None else random
    return source.randrange(int(dice)) + 1


def check_dice(dice: int) -> bool:
    """Return True if ``dice`` names one of the supported dice."""
    return dice in Dice._value2member_map_