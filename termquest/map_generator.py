"""Carves a maze-like dungeon floor and places its doors and contents."""

from __future__ import annotations

import logging
import random

from .map import DIRECTIONS, Map, Tile, Vector2D
from .map_populator import populate_map

log = logging.getLogger(__name__)

TOP, BOTTOM, LEFT, RIGHT = range(4)

STANDARD_MAP_HEIGHT = 19
STANDARD_MAP_WIDTH = 39


class MapGenerationError(Exception):
    """Raised when a map cannot be generated."""


def _fix_dimensions(map_: Map) -> None:
    if map_.height <= 11 or map_.width <= 11:
        log.warning("defined map dimensions are too small, using default dimensions")
        map_.height = STANDARD_MAP_HEIGHT
        map_.width = STANDARD_MAP_WIDTH
    elif map_.height % 2 == 0 or map_.width % 2 == 0:
        log.warning("map dimensions are not odd, adding 1 to each dimension")
        map_.height += 1
        map_.width += 1


def _init_start_position(map_: Map, rng) -> int:
    """Place the player next to a start door on a random edge; return that edge."""
    width, height = map_.width, map_.height
    start_edge = rng.randrange(4)
    if start_edge == TOP:
        x = 3 + 2 * rng.randrange((width - 5) // 2)
        map_.player_pos = Vector2D(x, 1)
        map_.hidden_tiles[map_.tile_index(x, 0)] = Tile.START_DOOR
    elif start_edge == BOTTOM:
        x = 3 + 2 * rng.randrange((width - 5) // 2)
        map_.player_pos = Vector2D(x, height - 2)
        map_.hidden_tiles[map_.tile_index(x, height - 1)] = Tile.START_DOOR
    elif start_edge == LEFT:
        y = 3 + 2 * rng.randrange((height - 5) // 2)
        map_.player_pos = Vector2D(1, y)
        map_.hidden_tiles[map_.tile_index(0, y)] = Tile.START_DOOR
    else:
        y = 3 + 2 * rng.randrange((height - 5) // 2)
        map_.player_pos = Vector2D(width - 2, y)
        map_.hidden_tiles[map_.tile_index(width - 1, y)] = Tile.START_DOOR
    map_.entry_pos = map_.player_pos
    return start_edge


def _shuffled_directions(rng) -> list[Vector2D]:
    dirs = list(DIRECTIONS)
    for i in range(len(dirs) - 1, 0, -1):
        j = rng.randrange(i + 1)
        dirs[i], dirs[j] = dirs[j], dirs[i]
    return dirs


def _carve_passages(start_x: int, start_y: int, map_: Map, visited: list[bool], rng) -> None:
    """Randomised depth-first carving, two cells per step."""

    def enter(x: int, y: int) -> list:
        idx = map_.tile_index(x, y)
        visited[idx] = True
        map_.hidden_tiles[idx] = Tile.FLOOR
        return [x, y, iter(_shuffled_directions(rng))]

    stack = [enter(start_x, start_y)]
    while stack:
        x, y, remaining = stack[-1]
        for d in remaining:
            nx, ny = x + d.dx * 2, y + d.dy * 2
            if map_.in_bounds(nx, ny) and not visited[map_.tile_index(nx, ny)]:
                map_.hidden_tiles[map_.tile_index(x + d.dx, y + d.dy)] = Tile.FLOOR
                stack.append(enter(nx, ny))
                break
        else:
            stack.pop()


def _add_loops(map_: Map, rng) -> None:
    """Knock down some walls between two opposing floors to create loops."""
    width, height = map_.width, map_.height
    num_loops = (width * height) // 100 + 1
    attempts = num_loops * 10
    count = 0
    while count < num_loops and attempts > 0:
        x = 1 + rng.randrange(width - 2)
        y = 1 + rng.randrange(height - 2)
        if map_.hidden_tiles[map_.tile_index(x, y)] == Tile.WALL:
            open_sides = [
                map_.hidden_tiles[map_.tile_index(x + d.dx, y + d.dy)] == Tile.FLOOR
                for d in DIRECTIONS
            ]
            if sum(open_sides) == 2 and (
                (open_sides[TOP] and open_sides[BOTTOM])
                or (open_sides[LEFT] and open_sides[RIGHT])
            ):
                map_.hidden_tiles[map_.tile_index(x, y)] = Tile.FLOOR
                count += 1
        attempts -= 1


def _place_exit(map_: Map, start_edge: int, rng) -> None:
    width, height = map_.width, map_.height
    tiles = map_.hidden_tiles
    exit_edge = start_edge
    while exit_edge == start_edge:
        exit_edge = rng.randrange(4)

    while True:
        if exit_edge == TOP:
            exit_x, exit_y = 1 + 2 * rng.randrange((width - 2) // 2), 0
            inner = (exit_x, exit_y + 1)
        elif exit_edge == BOTTOM:
            exit_x, exit_y = 1 + 2 * rng.randrange((width - 2) // 2), height - 1
            inner = (exit_x, exit_y - 1)
        elif exit_edge == LEFT:
            exit_x, exit_y = 0, 1 + 2 * rng.randrange((height - 2) // 2)
            inner = (exit_x + 1, exit_y)
        else:
            exit_x, exit_y = width - 1, 1 + 2 * rng.randrange((height - 2) // 2)
            inner = (exit_x - 1, exit_y)
        if tiles[map_.tile_index(*inner)] == Tile.FLOOR:
            break

    tiles[map_.tile_index(exit_x, exit_y)] = Tile.EXIT_DOOR
    map_.exit_pos = {
        TOP: Vector2D(exit_x, 1),
        BOTTOM: Vector2D(exit_x, height - 2),
        LEFT: Vector2D(1, exit_y),
        RIGHT: Vector2D(width - 2, exit_y),
    }[exit_edge]


def generate_map(
    map_to_generate: Map, generate_exit: bool = True, rng: random.Random | None = None
) -> None:
    """Fill ``map_to_generate`` with a freshly carved and populated floor.

    Dimensions that are too small are replaced by the standard size, and even
    dimensions are grown by one. An exit door is only placed when
    ``generate_exit`` is true; otherwise the exit position is (-1, -1).
    """
    if map_to_generate is None:
        raise MapGenerationError("map to generate is missing")
    source = rng if rng is not None else random

    _fix_dimensions(map_to_generate)
    size = map_to_generate.width * map_to_generate.height
    map_to_generate.hidden_tiles = [Tile.WALL] * size
    map_to_generate.revealed_tiles = [Tile.HIDDEN] * size
    visited = [False] * size

    start_edge = _init_start_position(map_to_generate, source)

    pos = map_to_generate.player_pos
    if pos.dx % 2 == 0:
        log.warning("player position x was even, should not be possible")
        map_to_generate.player_pos = Vector2D(pos.dx + 1, pos.dy)
    elif pos.dy % 2 == 0:
        log.warning("player position y was even, should not be possible")
        map_to_generate.player_pos = Vector2D(pos.dx, pos.dy + 1)

    map_to_generate.exit_unlocked = False

    start = map_to_generate.player_pos
    _carve_passages(start.dx, start.dy, map_to_generate, visited, source)
    _add_loops(map_to_generate, source)

    if generate_exit:
        _place_exit(map_to_generate, start_edge, source)
    else:
        map_to_generate.exit_pos = Vector2D(-1, -1)

    try:
        populate_map(map_to_generate, source)
    except ValueError as exc:
        raise MapGenerationError("failed to populate map") from exc