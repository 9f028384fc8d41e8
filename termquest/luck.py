"""Luck rolls whose die grows with a character's luck attribute."""

from __future__ import annotations

import logging
import random
from typing import Any

from .dice import Dice, roll_dice

log = logging.getLogger(__name__)

_LUCK_THRESHOLDS = (
    (24, Dice.D20),
    (20, Dice.D12),
    (16, Dice.D10),
    (12, Dice.D8),
    (8, Dice.D6),
    (4, Dice.D4),
    (0, Dice.D3),
)


def luck_dice_for(luck: int) -> Dice | None:
    """Return the die rolled for a luck value, or None if the luck is below 1."""
    return next((dice for threshold, dice in _LUCK_THRESHOLDS if luck > threshold), None)


def roll_luck_dice(character: Any, rng: random.Random | None = None) -> int:
    """Roll the luck die of ``character`` minus one, so zero is possible.

    Returns 0 when there is no character or its luck is invalid.
    """
    if character is None:
        log.error("roll_luck_dice given no character")
        return 0
    luck = character.current_attributes.luck
    dice = luck_dice_for(luck)
    if dice is None:
        log.warning("character has invalid luck value %d", luck)
        return 0
    return roll_dice(dice, rng) - 1