"""Gear items and the table of all gear read from a CSV file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from itertools import islice
from os import PathLike
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Union

from .stats import Attributes, Resources

log = logging.getLogger(__name__)

DEFAULT_GEAR_PATH = Path("resources") / "game_data" / "gear" / "gear_table.csv"

Localizer = Callable[[str], Optional[str]]


class GearId(IntEnum):
    """Identifiers of every piece of gear; each is its row in the gear table."""

    # main-hand
    IRON_SWORD = 0
    STEEL_SWORD = 1
    # off-hand
    IRON_SHIELD = 2
    STEEL_SHIELD = 3
    # head
    IRON_HELMET = 4
    STEEL_HELMET = 5
    # body
    IRON_ARMOR = 6
    STEEL_ARMOR = 7
    # legs
    IRON_LEGGINGS = 8
    STEEL_LEGGINGS = 9
    # hands
    IRON_GLOVES = 10
    STEEL_GLOVES = 11
    # rings
    RING_OF_STRENGTH = 12
    RING_OF_INTELLIGENCE = 13
    RING_OF_AGILITY = 14
    RING_OF_ENDURANCE = 15
    RING_OF_LUCK = 16
    # amulets
    AMULET_OF_HEALING_HEALTH = 17
    AMULET_OF_HEALING_STAMINA = 18
    AMULET_OF_HEALING_MANA = 19


MAX_GEARS = len(GearId)


class GearType(IntEnum):
    """The slot a piece of gear is worn in."""

    HEAD_ARMOR = 0
    BODY_ARMOR = 1
    LEG_ARMOR = 2
    HAND_ARMOR = 3
    RING = 4
    AMULET = 5
    MAIN_HAND = 6
    OFF_HAND = 7
    BOTH_HAND = 8


class GearTableError(Exception):
    """Raised when the gear table cannot be read or holds invalid data."""


@dataclass
class Gear:
    """One piece of gear with its bonuses and the abilities it grants."""

    id: int
    gear_type: GearType
    key_name: str
    local_name: Optional[str]
    resource_bonus: Resources = field(default_factory=Resources)
    attribute_bonus: Attributes = field(default_factory=Attributes)
    ability_ids: tuple[int, ...] = ()

    @property
    def ability_count(self) -> int:
        """Number of abilities connected to this gear."""
        return len(self.ability_ids)


def _next_field(fields: Iterator[str], what: str, line_number: int) -> str:
    text = next(fields, None)
    if text is None:
        raise GearTableError(f"failed to read {what} at line {line_number}")
    return text


def _parse_int(text: str, what: str, line_number: int) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise GearTableError(f"failed to parse {what} at line {line_number}") from None


def _read_int(fields: Iterator[str], what: str, line_number: int) -> int:
    return _parse_int(_next_field(fields, what, line_number), what, line_number)


def _split(text: str, sep: str) -> Iterator[str]:
    # consecutive separators count as one, empty fields are skipped
    return iter([part for part in text.split(sep) if part])


def parse_gear_line(
    line: str, line_number: int, localize: Optional[Localizer] = None
) -> Gear:
    """Parse one data row of the gear table.

    ``line_number`` counts data rows from 1; the gear id on the row must be
    ``line_number - 1``. Without ``localize`` the key name is used as the
    localized name.
    """
    fields = _split(line.rstrip("\r\n"), ",")

    gear_id = _read_int(fields, "gear id", line_number)
    expected = line_number - 1
    if gear_id != expected:
        raise GearTableError(
            f"invalid gear id {gear_id} at line {line_number} should be {expected}."
        )

    gear_type = _read_int(fields, "gear type", line_number)
    if not 0 <= gear_type < len(GearType):
        raise GearTableError(f"invalid gear type {gear_type} at line {line_number}")

    key_name = _next_field(fields, "gear key name", line_number)

    resources = Resources(
        health=_read_int(fields, "resource bonuses (health)", line_number),
        stamina=_read_int(fields, "resource bonuses (stamina)", line_number),
        mana=_read_int(fields, "resource bonuses (mana)", line_number),
    )
    attributes = Attributes(
        strength=_read_int(fields, "attribute bonuses (strength)", line_number),
        intelligence=_read_int(fields, "attribute bonuses (intelligence)", line_number),
        agility=_read_int(fields, "attribute bonuses (agility)", line_number),
        constitution=_read_int(fields, "attribute bonuses (endurance)", line_number),
        luck=_read_int(fields, "attribute bonuses (luck)", line_number),
    )

    ability_count = _read_int(fields, "ability count", line_number)
    ability_ids: tuple[int, ...] = ()
    if ability_count > 0:
        ids_field = _next_field(fields, "ability ids", line_number)
        if ability_count == 1:
            ability_ids = (_parse_int(ids_field, "ability id", line_number),)
        else:
            parts = _split(ids_field, "-")
            ability_ids = tuple(
                _parse_int(_next_field(parts, "ability ids", line_number), "ability id", line_number)
                for _ in range(ability_count)
            )

    return Gear(
        id=gear_id,
        gear_type=GearType(gear_type),
        key_name=key_name,
        local_name=localize(key_name) if localize is not None else key_name,
        resource_bonus=resources,
        attribute_bonus=attributes,
        ability_ids=ability_ids,
    )


class GearTable:
    """All gear, indexed by gear id."""

    def __init__(self, gears: Iterable[Gear] = ()) -> None:
        self._gears = list(gears)

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], localize: Optional[Localizer] = None
    ) -> "GearTable":
        """Build the table from CSV lines; the first line is a header.

        At most ``MAX_GEARS`` data rows are read; later rows are ignored.
        """
        rows = iter(lines)
        next(rows, None)  # header
        gears = [
            parse_gear_line(line, number, localize)
            for number, line in enumerate(islice(rows, MAX_GEARS), start=1)
        ]
        return cls(gears)

    @classmethod
    def load(
        cls,
        path: Union[str, PathLike] = DEFAULT_GEAR_PATH,
        localize: Optional[Localizer] = None,
    ) -> "GearTable":
        """Read the gear table from the CSV file at ``path``."""
        try:
            with open(path, encoding="utf-8") as handle:
                return cls.from_lines(handle, localize)
        except OSError as exc:
            raise GearTableError(f"failed to open gear file {path}") from exc

    def update_localization(self, localize: Localizer) -> None:
        """Refresh the localized names after the language changed."""
        for gear in self._gears:
            if gear.local_name is not None:
                gear.local_name = localize(gear.key_name)

    def __getitem__(self, gear_id: int) -> Gear:
        index = int(gear_id)
        if not 0 <= index < len(self._gears):
            raise KeyError(gear_id)
        return self._gears[index]

    def __len__(self) -> int:
        return len(self._gears)

    def __iter__(self) -> Iterator[Gear]:
        return iter(self._gears)