"""Turns a tile grid into drawable symbols and colours."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .map import TILE_APPEARANCE, Color, Tile, Vector2D


@dataclass(frozen=True)
class ParsedTile:
    """A tile ready for drawing."""

    symbol: str
    foreground_color: Color
    background_color: Color


@dataclass
class ParsedMap:
    """A grid of drawable tiles, stored column by column."""

    width: int
    height: int
    tiles: list[ParsedTile]

    def tile_at(self, x: int, y: int) -> ParsedTile:
        """The drawable tile at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"position ({x}, {y}) is outside the map")
        return self.tiles[x * self.height + y]


def _parse_tile(tile: Tile) -> ParsedTile:
    look = TILE_APPEARANCE[Tile(tile)]
    return ParsedTile(look.symbol, look.foreground, look.background)


def create_parsed_map(
    width: int, height: int, tiles: Sequence[Tile], player_pos: Vector2D
) -> ParsedMap:
    """Convert ``tiles`` into a drawable map with the player drawn at ``player_pos``."""
    if tiles is None:
        raise ValueError("map to parse is missing")
    if width <= 0:
        raise ValueError("width must be greater than 0")
    if height <= 0:
        raise ValueError("height must be greater than 0")
    if len(tiles) < width * height:
        raise ValueError("map to parse has fewer tiles than width * height")

    parsed = [
        _parse_tile(
            Tile.PLAYER
            if (x, y) == (player_pos.dx, player_pos.dy)
            else tiles[x * height + y]
        )
        for x in range(width)
        for y in range(height)
    ]
    return ParsedMap(width=width, height=height, tiles=parsed)