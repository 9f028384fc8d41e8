import random

import pytest

from termquest.dice import Dice, check_dice, roll_dice


@pytest.mark.parametrize("dice", list(Dice))
def test_check_dice_accepts_every_supported_die(dice):
    assert check_dice(int(dice)) is True


@pytest.mark.parametrize("value", [0, 1, 2, 5, 7, 100, -4])
def test_check_dice_rejects_unknown_values(value):
    assert check_dice(value) is False


@pytest.mark.parametrize("dice", list(Dice))
def test_roll_dice_stays_within_faces(dice):
    rng = random.Random(1234)
    rolls = [roll_dice(dice, rng) for _ in range(500)]
    assert min(rolls) >= 1
    assert max(rolls) <= int(dice)


def test_roll_dice_hits_every_face():
    rng = random.Random(99)
    rolls = {roll_dice(Dice.D6, rng) for _ in range(1000)}
    assert rolls == set(range(1, 7))


def test_roll_dice_is_reproducible_with_seed():
    first = [roll_dice(Dice.D20, random.Random(7)) for _ in range(1)]
    second = [roll_dice(Dice.D20, random.Random(7)) for _ in range(1)]
    assert first == second


def test_dice_notation():
    assert str(Dice.D10) == "d10"
    assert Dice(20) is Dice.D20