"""Resolving the use of an ability by one combatant on another."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from .dice import Dice, roll_dice
from .luck import roll_luck_dice
from .stats import Attributes, Resources

log = logging.getLogger(__name__)

HEALTH_CHAR = "h"
STAMINA_CHAR = "s"
MANA_CHAR = "m"

SELF_CHAR = "s"
ENEMY_CHAR = "e"

DAMAGE_CHAR = "d"
HEAL_CHAR = "h"

STRENGTH_CHAR = "s"
INTELLIGENCE_CHAR = "i"
AGILITY_CHAR = "a"
CONSTITUTION_CHAR = "c"
LUCK_CHAR = "l"

_RESOURCE_NAMES = {
    HEALTH_CHAR: "health",
    STAMINA_CHAR: "stamina",
    MANA_CHAR: "mana",
}

_ATTRIBUTE_NAMES = {
    STRENGTH_CHAR: "strength",
    INTELLIGENCE_CHAR: "intelligence",
    AGILITY_CHAR: "agility",
    CONSTITUTION_CHAR: "constitution",
    LUCK_CHAR: "luck",
}


class UsageResult(Enum):
    """Outcome of using an ability."""

    SUCCESS = 0
    NOT_ENOUGH_HEALTH = 1
    NOT_ENOUGH_STAMINA = 2
    NOT_ENOUGH_MANA = 3
    MISSED = 4  # only possible when user and target differ
    FAILED = 5  # only possible when user and target are the same
    TARGET_DIED = 6  # success in which the target died
    UNEXPECTED_ERROR = 7


_NOT_ENOUGH = {
    HEALTH_CHAR: UsageResult.NOT_ENOUGH_HEALTH,
    STAMINA_CHAR: UsageResult.NOT_ENOUGH_STAMINA,
    MANA_CHAR: UsageResult.NOT_ENOUGH_MANA,
}


@dataclass
class Combatant:
    """The parts of a character that abilities read and change."""

    current_resources: Resources = field(default_factory=Resources)
    max_resources: Resources = field(default_factory=Resources)
    current_attributes: Attributes = field(default_factory=Attributes)
    u_flag_res: bool = False


@dataclass
class AbilitySpec:
    """What an ability costs, whom it targets and how its effect is rolled."""

    c_target: str = ENEMY_CHAR
    r_cost: str = MANA_CHAR
    v_cost: int = 0
    accuracy_dice: Dice = Dice.D20
    accuracy_rolls: int = 1
    accuracy_scaler: str = AGILITY_CHAR
    accuracy_scale_value: float = 0.0
    effect_type: str = DAMAGE_CHAR
    r_target: str = HEALTH_CHAR
    effect_dice: Dice = Dice.D6
    effect_rolls: int = 1
    effect_scaler: str = STRENGTH_CHAR
    effect_scale_value: float = 0.0


def use_ability(
    user: Combatant,
    target: Combatant,
    ability: AbilitySpec,
    rng: random.Random | None = None,
) -> UsageResult:
    """Pay for ``ability``, check whether it lands and apply its effect."""
    if user is None:
        raise ValueError("user is missing")
    if target is None:
        raise ValueError("target is missing")
    if ability is None:
        raise ValueError("ability is missing")

    res = consume_resource(user, ability)
    if res is not UsageResult.SUCCESS:
        return res

    if ability.c_target == SELF_CHAR:
        chosen = user
    elif ability.c_target == ENEMY_CHAR:
        chosen = target
    else:
        log.warning("invalid target type %r encountered in use_ability", ability.c_target)
        return UsageResult.UNEXPECTED_ERROR

    res = evaluate_accuracy(user, chosen, ability, rng)
    if res is UsageResult.SUCCESS:
        res = use_ability_on(user, chosen, ability, rng)
    return res


def consume_resource(user: Combatant, ability: AbilitySpec) -> UsageResult:
    """Deduct the ability's cost from the user, if the user can afford it."""
    name = _RESOURCE_NAMES.get(ability.r_cost)
    if name is None:
        log.warning("invalid resource cost type %r encountered", ability.r_cost)
        return UsageResult.UNEXPECTED_ERROR
    current = getattr(user.current_resources, name)
    if current < ability.v_cost:
        return _NOT_ENOUGH[ability.r_cost]
    setattr(user.current_resources, name, current - ability.v_cost)
    return UsageResult.SUCCESS


def evaluate_accuracy(
    user: Combatant,
    target: Combatant,
    ability: AbilitySpec,
    rng: random.Random | None = None,
) -> UsageResult:
    """Decide whether the ability lands on ``target``."""
    user_advantage = user.current_attributes.agility >= target.current_attributes.agility
    target_roll = roll_dice(ability.accuracy_dice, rng)
    target_roll += roll_luck_dice(target, rng)

    # Best of the rolls with advantage; without it the roll never drops below 0.
    user_roll = 0
    for _ in range(ability.accuracy_rolls):
        roll = roll_dice(ability.accuracy_dice, rng)
        if user_advantage:
            user_roll = max(user_roll, roll)
        else:
            user_roll = min(user_roll, roll)

    scaler = get_scaler_value(user, ability.accuracy_scaler)
    if scaler < 1:
        return UsageResult.UNEXPECTED_ERROR
    user_roll += int(scaler * ability.accuracy_scale_value)
    user_roll += roll_luck_dice(user, rng)

    if user is target:
        return UsageResult.SUCCESS if user_roll > target_roll else UsageResult.FAILED
    return UsageResult.SUCCESS if user_roll > target_roll else UsageResult.MISSED


def use_ability_on(
    user: Combatant,
    target: Combatant,
    ability: AbilitySpec,
    rng: random.Random | None = None,
) -> UsageResult:
    """Roll the ability's effect and apply it to ``target`` as damage or healing."""
    roll_total = sum(roll_dice(ability.effect_dice, rng) for _ in range(ability.effect_rolls))

    scaler = get_scaler_value(user, ability.effect_scaler)
    if scaler < 1:
        return UsageResult.UNEXPECTED_ERROR
    roll_total += int(scaler * ability.effect_scale_value)

    if ability.effect_type == DAMAGE_CHAR:
        return damage_target(target, ability.r_target, roll_total)
    if ability.effect_type == HEAL_CHAR:
        return heal_target(target, ability.r_target, roll_total)
    log.warning("invalid effect type %r encountered", ability.effect_type)
    return UsageResult.UNEXPECTED_ERROR


def get_scaler_value(user: Combatant, scaler_char: str) -> int:
    """The user's attribute named by ``scaler_char``, or -1 if it names none."""
    name = _ATTRIBUTE_NAMES.get(scaler_char)
    if name is None:
        log.warning("invalid scaler type %r encountered", scaler_char)
        return -1
    return getattr(user.current_attributes, name)


def damage_target(target: Combatant, r_target: str, damage: int) -> UsageResult:
    """Reduce a resource of ``target`` by ``damage``, never below zero."""
    name = _RESOURCE_NAMES.get(r_target)
    if name is None:
        log.warning("invalid resource target %r encountered", r_target)
        return UsageResult.UNEXPECTED_ERROR
    current = getattr(target.current_resources, name)
    remaining = 0 if damage > current else current - damage
    setattr(target.current_resources, name, remaining)
    target.u_flag_res = True
    if r_target == HEALTH_CHAR and remaining == 0:
        return UsageResult.TARGET_DIED
    return UsageResult.SUCCESS


def heal_target(target: Combatant, r_target: str, healing: int) -> UsageResult:
    """Raise a resource of ``target`` by ``healing``, never above its maximum."""
    name = _RESOURCE_NAMES.get(r_target)
    if name is None:
        log.warning("invalid resource target %r encountered", r_target)
        return UsageResult.UNEXPECTED_ERROR
    current = getattr(target.current_resources, name)
    maximum = getattr(target.max_resources, name)
    setattr(target.current_resources, name, min(current + healing, maximum))
    target.u_flag_res = True
    return UsageResult.SUCCESS