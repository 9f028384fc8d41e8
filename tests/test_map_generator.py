import random
from collections import deque

import pytest

from termquest.map import DIRECTIONS, Map, Tile, Vector2D
from termquest.map_generator import (
    STANDARD_MAP_HEIGHT,
    STANDARD_MAP_WIDTH,
    MapGenerationError,
    generate_map,
)


def _generate(width=39, height=19, seed=1, generate_exit=True):
    m = Map(width=width, height=height)
    generate_map(m, generate_exit, random.Random(seed))
    return m


def _count(m, tile):
    return sum(t == tile for t in m.hidden_tiles)


def _reachable(m):
    start = (m.player_pos.dx, m.player_pos.dy)
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for d in DIRECTIONS:
            nx, ny = x + d.dx, y + d.dy
            if m.in_bounds(nx, ny) and (nx, ny) not in seen and m.hidden_at(nx, ny) != Tile.WALL:
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


def test_small_dimensions_use_standard_size():
    m = _generate(width=5, height=5)
    assert (m.width, m.height) == (STANDARD_MAP_WIDTH, STANDARD_MAP_HEIGHT)
    assert len(m.hidden_tiles) == STANDARD_MAP_WIDTH * STANDARD_MAP_HEIGHT


def test_even_dimensions_grow_by_one():
    m = _generate(width=20, height=14)
    assert (m.width, m.height) == (21, 15)
    assert len(m.revealed_tiles) == 21 * 15


@pytest.mark.parametrize("seed", range(8))
def test_single_doors_and_entry(seed):
    m = _generate(seed=seed)
    assert _count(m, Tile.START_DOOR) == 1
    assert _count(m, Tile.EXIT_DOOR) == 1
    assert m.entry_pos == m.player_pos
    assert m.exit_unlocked is False
    neighbours = [
        m.hidden_at(m.entry_pos.dx + d.dx, m.entry_pos.dy + d.dy) for d in DIRECTIONS
    ]
    assert Tile.START_DOOR in neighbours
    exit_neighbours = [
        m.hidden_at(m.exit_pos.dx + d.dx, m.exit_pos.dy + d.dy) for d in DIRECTIONS
    ]
    assert Tile.EXIT_DOOR in exit_neighbours
    assert m.hidden_at(m.exit_pos.dx, m.exit_pos.dy) != Tile.WALL


@pytest.mark.parametrize("seed", range(8))
def test_every_open_tile_is_reachable(seed):
    m = _generate(seed=seed)
    reachable = _reachable(m)
    open_cells = {
        (x, y)
        for x in range(m.width)
        for y in range(m.height)
        if m.hidden_at(x, y) != Tile.WALL
    }
    assert open_cells == reachable


@pytest.mark.parametrize("seed", range(5))
def test_all_odd_cells_are_carved(seed):
    m = _generate(seed=seed)
    walled_cells = [
        (x, y)
        for x in range(1, m.width - 1, 2)
        for y in range(1, m.height - 1, 2)
        if m.hidden_at(x, y) == Tile.WALL
    ]
    assert walled_cells == []


@pytest.mark.parametrize("seed", range(5))
def test_border_is_wall_except_doors(seed):
    m = _generate(seed=seed)
    border = [
        m.hidden_at(x, y)
        for x in range(m.width)
        for y in range(m.height)
        if x in (0, m.width - 1) or y in (0, m.height - 1)
    ]
    assert set(border) <= {Tile.WALL, Tile.START_DOOR, Tile.EXIT_DOOR}


def test_revealed_layer_starts_hidden():
    m = _generate(seed=3)
    assert set(m.revealed_tiles) == {Tile.HIDDEN}


def test_no_exit_when_not_requested():
    m = _generate(seed=4, generate_exit=False)
    assert m.exit_pos == Vector2D(-1, -1)
    assert _count(m, Tile.EXIT_DOOR) == 0
    assert _count(m, Tile.START_DOOR) == 1


def test_map_is_populated():
    m = _generate(seed=5)
    assert _count(m, Tile.ENEMY) >= 1
    assert m.enemy_count > 0


def test_same_seed_same_map():
    a = _generate(seed=42)
    b = _generate(seed=42)
    assert a.hidden_tiles == b.hidden_tiles
    assert a.player_pos == b.player_pos
    assert a.exit_pos == b.exit_pos


def test_large_map_generates():
    m = _generate(width=201, height=101, seed=7)
    assert len(m.hidden_tiles) == 201 * 101
    assert len(_reachable(m)) == sum(t != Tile.WALL for t in m.hidden_tiles)


def test_missing_map_raises():
    with pytest.raises(MapGenerationError):
        generate_map(None, True, random.Random(0))