"""Map tiles, their appearance and the dungeon floor grid."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum

log = logging.getLogger(__name__)


class Tile(IntEnum):
    """Kinds of map tile."""

    WALL = 0
    FLOOR = 1
    START_DOOR = 2
    EXIT_DOOR = 3
    DOOR_KEY = 4
    LIFE_FOUNTAIN = 5
    MANA_FOUNTAIN = 6
    STAMINA_FOUNTAIN = 7
    PLAYER = 8
    ENEMY = 9
    HIDDEN = 10


class Color(Enum):
    """Terminal colours used to draw tiles."""

    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    WHITE = "white"


@dataclass(frozen=True)
class Vector2D:
    """A position or offset on the map."""

    dx: int = 0
    dy: int = 0


# up, down, left, right
DIRECTIONS = (Vector2D(0, -1), Vector2D(0, 1), Vector2D(-1, 0), Vector2D(1, 0))


@dataclass(frozen=True)
class TileAppearance:
    """How a tile is drawn."""

    symbol: str
    foreground: Color
    background: Color


TILE_APPEARANCE = {
    Tile.WALL: TileAppearance("#", Color.BLUE, Color.BLUE),
    Tile.FLOOR: TileAppearance(" ", Color.WHITE, Color.BLACK),
    Tile.START_DOOR: TileAppearance("#", Color.GREEN, Color.BLACK),
    Tile.EXIT_DOOR: TileAppearance("#", Color.YELLOW, Color.BLACK),
    Tile.DOOR_KEY: TileAppearance("$", Color.YELLOW, Color.BLACK),
    Tile.LIFE_FOUNTAIN: TileAppearance("+", Color.RED, Color.BLACK),
    Tile.MANA_FOUNTAIN: TileAppearance("+", Color.BLUE, Color.BLACK),
    Tile.STAMINA_FOUNTAIN: TileAppearance("+", Color.GREEN, Color.BLACK),
    Tile.PLAYER: TileAppearance("@", Color.RED, Color.BLACK),
    Tile.ENEMY: TileAppearance("!", Color.WHITE, Color.RED),
    Tile.HIDDEN: TileAppearance(" ", Color.WHITE, Color.WHITE),
}


@dataclass
class Map:
    """One dungeon floor; tiles are stored column by column (x * height + y)."""

    width: int
    height: int
    floor_nr: int = 0
    enemy_count: int = 0
    exit_unlocked: bool = False
    entry_pos: Vector2D = field(default_factory=Vector2D)
    exit_pos: Vector2D = field(default_factory=Vector2D)
    player_pos: Vector2D = field(default_factory=Vector2D)
    hidden_tiles: list[Tile] = field(default_factory=list)
    revealed_tiles: list[Tile] = field(default_factory=list)

    def tile_index(self, x: int, y: int) -> int:
        """Index of the tile at (x, y) in the tile lists."""
        return x * self.height + y

    def in_bounds(self, x: int, y: int) -> bool:
        """True if (x, y) lies on the map."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _checked_index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise IndexError(f"position ({x}, {y}) is outside the map")
        return self.tile_index(x, y)

    def hidden_at(self, x: int, y: int) -> Tile:
        """The real tile at (x, y)."""
        return self.hidden_tiles[self._checked_index(x, y)]

    def set_hidden(self, x: int, y: int, tile: Tile) -> None:
        """Set the real tile at (x, y)."""
        self.hidden_tiles[self._checked_index(x, y)] = tile

    def revealed_at(self, x: int, y: int) -> Tile:
        """The tile at (x, y) as the player sees it."""
        return self.revealed_tiles[self._checked_index(x, y)]

    def set_revealed(self, x: int, y: int, tile: Tile) -> None:
        """Set the tile at (x, y) as the player sees it."""
        self.revealed_tiles[self._checked_index(x, y)] = tile

    def clear(self) -> None:
        """Drop both tile layers."""
        if not self.hidden_tiles:
            log.warning("map to clear has no hidden tiles")
        if not self.revealed_tiles:
            log.warning("map to clear has no revealed tiles")
        self.hidden_tiles = []
        self.revealed_tiles = []