"""Places the key, enemies and fountains on a carved map."""

from __future__ import annotations

import logging
import random

from .map import DIRECTIONS, Map, Tile

log = logging.getLogger(__name__)

STANDARD_ENEMY_COUNT = 5
ENEMY_MIN_DISTANCE = 3


def _random_inner_cell(map_: Map, rng) -> tuple[int, int]:
    x = rng.randrange(map_.width - 2) + 1
    y = rng.randrange(map_.height - 2) + 1
    return x, y


def _is_not_floor(x: int, y: int, map_: Map) -> bool:
    return map_.hidden_tiles[map_.tile_index(x, y)] != Tile.FLOOR


def is_dead_end(x: int, y: int, map_to_check: Map) -> bool:
    """True if exactly one neighbour of (x, y) is not a wall."""
    open_neighbours = sum(
        map_to_check.hidden_tiles[map_to_check.tile_index(x + d.dx, y + d.dy)] != Tile.WALL
        for d in DIRECTIONS
    )
    return open_neighbours == 1


def is_close_to_enemy(x: int, y: int, map_to_check: Map) -> bool:
    """True if an enemy or the start door lies in the window around (x, y)."""
    tiles = map_to_check.hidden_tiles
    offsets = range(-ENEMY_MIN_DISTANCE, ENEMY_MIN_DISTANCE + 2)
    for i in offsets:
        for j in offsets:
            idx = map_to_check.tile_index(x + i, y + j)
            if 0 <= idx < len(tiles) and tiles[idx] in (Tile.ENEMY, Tile.START_DOOR):
                return True
    return False


def _place_on_floor_or_dead_end(map_: Map, tile: Tile, rng) -> tuple[int, int]:
    while True:
        x, y = _random_inner_cell(map_, rng)
        if not (_is_not_floor(x, y, map_) and not is_dead_end(x, y, map_)):
            break
    map_.hidden_tiles[map_.tile_index(x, y)] = tile
    return x, y


def _place_enemies(map_: Map, rng) -> None:
    if map_.enemy_count <= 0:
        map_.enemy_count = STANDARD_ENEMY_COUNT
    for _ in range(map_.enemy_count):
        while True:
            x, y = _random_inner_cell(map_, rng)
            if not (_is_not_floor(x, y, map_) or is_close_to_enemy(x, y, map_)):
                break
        map_.hidden_tiles[map_.tile_index(x, y)] = Tile.ENEMY


def populate_map(map_to_populate: Map, rng: random.Random | None = None) -> None:
    """Place a key, the enemies and a life and a mana fountain on the map."""
    if map_to_populate is None:
        raise ValueError("map to populate is missing")
    if not map_to_populate.hidden_tiles:
        raise ValueError("map to populate is not initialized")
    source = rng if rng is not None else random

    x, y = _place_on_floor_or_dead_end(map_to_populate, Tile.DOOR_KEY, source)
    log.debug("key placed at %d, %d", x, y)
    _place_enemies(map_to_populate, source)
    _place_on_floor_or_dead_end(map_to_populate, Tile.LIFE_FOUNTAIN, source)
    _place_on_floor_or_dead_end(map_to_populate, Tile.MANA_FOUNTAIN, source)