import random

import pytest

from termquest.map import Map, Tile, Vector2D
from termquest.map_generator import generate_map
from termquest.map_revealer import reveal_map


def _room(width=9, height=9, player=(4, 4)):
    hidden = [
        Tile.WALL if x in (0, width - 1) or y in (0, height - 1) else Tile.FLOOR
        for x in range(width)
        for y in range(height)
    ]
    return Map(
        width=width,
        height=height,
        player_pos=Vector2D(*player),
        hidden_tiles=hidden,
        revealed_tiles=[Tile.HIDDEN] * (width * height),
    )


def _revealed_cells(m):
    return {
        (x, y)
        for x in range(m.width)
        for y in range(m.height)
        if m.revealed_at(x, y) != Tile.HIDDEN
    }


def test_zero_radius_reveals_nothing():
    m = _room()
    reveal_map(m, 0)
    assert set(m.revealed_tiles) == {Tile.HIDDEN}


def test_radius_one_reveals_orthogonal_neighbours():
    m = _room()
    reveal_map(m, 1)
    assert _revealed_cells(m) == {(4, 3), (4, 5), (3, 4), (5, 4)}


@pytest.mark.parametrize("radius", [1, 2, 3, 5])
def test_revealed_tiles_are_within_manhattan_radius(radius):
    m = _room()
    reveal_map(m, radius)
    cells = _revealed_cells(m)
    assert cells
    assert all(abs(x - 4) + abs(y - 4) <= radius for x, y in cells)


@pytest.mark.parametrize("radius", [2, 4, 8])
def test_revealed_layer_matches_hidden_layer(radius):
    m = _room()
    reveal_map(m, radius)
    for x, y in _revealed_cells(m):
        assert m.revealed_at(x, y) == m.hidden_at(x, y)


def test_larger_radius_reveals_superset():
    small = _room()
    large = _room()
    reveal_map(small, 2)
    reveal_map(large, 4)
    assert _revealed_cells(small) <= _revealed_cells(large)


def test_wall_blocks_view_behind_it():
    m = _room()
    m.set_hidden(4, 3, Tile.WALL)
    reveal_map(m, 3)
    assert m.revealed_at(4, 3) == Tile.WALL
    assert m.revealed_at(4, 2) == Tile.HIDDEN
    assert m.revealed_at(4, 5) == Tile.FLOOR


def test_reveal_is_idempotent():
    m = _room()
    reveal_map(m, 3)
    first = list(m.revealed_tiles)
    reveal_map(m, 3)
    assert m.revealed_tiles == first


@pytest.mark.parametrize("seed", range(5))
def test_reveal_on_generated_map(seed):
    m = Map(width=39, height=19)
    generate_map(m, True, random.Random(seed))
    reveal_map(m, 4)
    cells = _revealed_cells(m)
    assert cells
    px, py = m.player_pos.dx, m.player_pos.dy
    assert all(abs(x - px) + abs(y - py) <= 4 for x, y in cells)
    assert all(m.revealed_at(x, y) == m.hidden_at(x, y) for x, y in cells)


def test_missing_map_raises():
    with pytest.raises(ValueError):
        reveal_map(None, 3)


def test_uninitialized_tiles_raise():
    m = Map(width=9, height=9)
    with pytest.raises(ValueError):
        reveal_map(m, 3)


def test_non_positive_width_raises():
    m = _room()
    m.width = 0
    with pytest.raises(ValueError):
        reveal_map(m, 3)