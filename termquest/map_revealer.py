"""Reveals the tiles around the player that are within the light radius."""

from __future__ import annotations

from .map import DIRECTIONS, Map, Tile, Vector2D

# for up, down, left, right: (diagonal check, reverse check)
_CHECK_VECTORS = (
    (Vector2D(1, 1), Vector2D(1, 0)),
    (Vector2D(-1, -1), Vector2D(-1, 0)),
    (Vector2D(1, -1), Vector2D(0, -1)),
    (Vector2D(-1, 1), Vector2D(0, 1)),
)

_UNREVEALABLE = (Tile.PLAYER, Tile.HIDDEN)


class _WallTracker:
    """Remembers the line of the first wall seen straight ahead in one direction."""

    def __init__(self, direction: Vector2D) -> None:
        self.direction = direction
        self.prev_wall_at = -1

    def must_stop(self, x: int, y: int, j: int) -> bool:
        line = abs(y * self.direction.dy + x * self.direction.dx)
        if j == 0:
            self.prev_wall_at = line
            return True
        return self.prev_wall_at == line


def _hidden_tile(map_: Map, index: int) -> Tile:
    tiles = map_.hidden_tiles
    return tiles[index] if 0 <= index < len(tiles) else Tile.WALL


def reveal_map(map_to_reveal: Map, light_radius: int) -> None:
    """Copy the tiles visible within ``light_radius`` of the player to the revealed layer."""
    if map_to_reveal is None:
        raise ValueError("map to reveal is missing")
    if not map_to_reveal.hidden_tiles:
        raise ValueError("map to reveal is not initialized")
    if not map_to_reveal.revealed_tiles:
        raise ValueError("revealed map is not initialized")
    if map_to_reveal.width <= 0:
        raise ValueError("width must be greater than 0")
    if map_to_reveal.height <= 0:
        raise ValueError("height must be greater than 0")
    if light_radius <= 0:
        return

    player_x = map_to_reveal.player_pos.dx
    player_y = map_to_reveal.player_pos.dy
    height = map_to_reveal.height
    hidden = map_to_reveal.hidden_tiles
    revealed = map_to_reveal.revealed_tiles

    for direction, (diagonal, reverse) in zip(DIRECTIONS, _CHECK_VECTORS):
        walls = _WallTracker(direction)
        for j in range(light_radius + 1):
            start_x = player_x + j * direction.dy
            start_y = player_y + j * direction.dx
            if direction.dx != 0:
                start_y = player_y - j * direction.dx
            if not map_to_reveal.in_bounds(start_x, start_y):
                break

            correction = j
            for k in range(1, light_radius - correction + 1):
                x = start_x + k * direction.dx
                y = start_y + k * direction.dy
                if not map_to_reveal.in_bounds(x, y):
                    break
                idx = x * height + y

                if revealed[idx] == Tile.HIDDEN:
                    rel_diagonal = _hidden_tile(
                        map_to_reveal, (x + diagonal.dx) * height + y + diagonal.dy
                    )
                    rel_reverse = _hidden_tile(
                        map_to_reveal, (x + reverse.dx) * height + y + reverse.dy
                    )
                    if rel_diagonal == Tile.WALL and rel_reverse == Tile.WALL and j > 1:
                        # the tile behind the reverse wall cannot be seen
                        break
                    tile = hidden[idx]
                    if tile not in _UNREVEALABLE:
                        revealed[idx] = tile
                    if tile == Tile.WALL and walls.must_stop(x, y, j):
                        break
                elif revealed[idx] == Tile.WALL and walls.must_stop(x, y, j):
                    break