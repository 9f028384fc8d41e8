"""Saving and loading the game state to numbered save slots on disk."""

from __future__ import annotations

import logging
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from os import PathLike
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from .map import Map, Tile, Vector2D

log = logging.getLogger(__name__)

SAVE_FILE_DIR = Path("save_files")
MAX_SAVE_NAME_LENGTH = 31

_INT = struct.Struct("<i")
_LONG = struct.Struct("<q")
_MAP_HEADER = struct.Struct("<11i")

PathArg = Union[str, PathLike]


class SaveSlot(IntEnum):
    """The available save slots."""

    SLOT_1 = 0
    SLOT_2 = 1
    SLOT_3 = 2
    SLOT_4 = 3
    SLOT_5 = 4


MAX_SAVE_SLOTS = len(SaveSlot)

_SAVE_FILE_NAMES = {slot: f"save_file_{slot.value + 1}.sav" for slot in SaveSlot}


class SaveFileError(Exception):
    """Raised when a save file cannot be written or read."""


class PlayerCodec(ABC):
    """Writes, reads and checksums the player's character data."""

    @abstractmethod
    def write(self, stream: BinaryIO, player: Any) -> None:
        """Write ``player`` to ``stream``."""

    @abstractmethod
    def read(self, stream: BinaryIO) -> Any:
        """Read a player from ``stream``."""

    @abstractmethod
    def checksum(self, player: Any) -> int:
        """A checksum of the player's data."""


@dataclass
class GameState:
    """Everything stored in a save file."""

    maps: list[Map] = field(default_factory=list)
    active_map_index: int = 0
    player: Any = None

    @property
    def max_floors(self) -> int:
        """Number of floors in the game."""
        return len(self.maps)


def _slot(save_slot: int) -> SaveSlot:
    try:
        return SaveSlot(save_slot)
    except ValueError:
        raise SaveFileError(f"given save slot {save_slot} is invalid") from None


def save_file_path(save_slot: int, save_dir: PathArg = SAVE_FILE_DIR) -> Path:
    """Path of the save file belonging to ``save_slot``."""
    name = _SAVE_FILE_NAMES[_slot(save_slot)]
    if len(name) > MAX_SAVE_NAME_LENGTH:
        raise SaveFileError("save name is too long")
    return Path(save_dir) / name


def ensure_save_dir(save_dir: PathArg = SAVE_FILE_DIR) -> Path:
    """Create the save directory if it does not exist yet and return it."""
    path = Path(save_dir)
    try:
        path.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as exc:
        raise SaveFileError(f"failed to create save directory {path}") from exc
    return path


def _wrap_long(value: int) -> int:
    value &= 0xFFFFFFFFFFFFFFFF
    return value - (1 << 64) if value >= 1 << 63 else value


def _map_header(map_: Map) -> tuple[int, ...]:
    return (
        map_.floor_nr,
        map_.width,
        map_.height,
        map_.enemy_count,
        int(map_.exit_unlocked),
        map_.entry_pos.dx,
        map_.entry_pos.dy,
        map_.exit_pos.dx,
        map_.exit_pos.dy,
        map_.player_pos.dx,
        map_.player_pos.dy,
    )


def calculate_checksum(game_state: GameState, codec: PlayerCodec) -> int:
    """Sum of every stored number, plus the player's checksum, as a 64-bit value."""
    checksum = game_state.max_floors + game_state.active_map_index
    for map_ in game_state.maps:
        checksum += sum(_map_header(map_))
        size = map_.width * map_.height
        checksum += sum(int(t) for t in map_.hidden_tiles[:size])
        checksum += sum(int(t) for t in map_.revealed_tiles[:size])
    checksum += codec.checksum(game_state.player)
    return _wrap_long(checksum)


def save_game_state(
    save_slot: int,
    game_state: GameState,
    codec: PlayerCodec,
    save_dir: PathArg = SAVE_FILE_DIR,
) -> Path:
    """Write ``game_state`` to the file of ``save_slot`` and return its path."""
    path = save_file_path(save_slot, save_dir)
    ensure_save_dir(save_dir)

    for index, map_ in enumerate(game_state.maps):
        if map_ is None:
            raise SaveFileError(f"map {index} is missing")
        size = map_.width * map_.height
        if len(map_.hidden_tiles) != size or len(map_.revealed_tiles) != size:
            raise SaveFileError(f"map {index} does not hold width * height tiles")

    timestamp = datetime.now().isoformat(timespec="seconds").encode("ascii") + b"\0"
    checksum = calculate_checksum(game_state, codec)

    try:
        with open(path, "wb") as stream:
            stream.write(_INT.pack(len(timestamp)))
            stream.write(timestamp)
            stream.write(_INT.pack(game_state.max_floors))
            stream.write(_INT.pack(game_state.active_map_index))
            for map_ in game_state.maps:
                stream.write(_MAP_HEADER.pack(*_map_header(map_)))
            for map_ in game_state.maps:
                stream.write(struct.pack(f"<{len(map_.hidden_tiles)}i", *map_.hidden_tiles))
                stream.write(struct.pack(f"<{len(map_.revealed_tiles)}i", *map_.revealed_tiles))
            codec.write(stream, game_state.player)
            stream.write(_LONG.pack(checksum))
    except OSError as exc:
        raise SaveFileError(f"failed to write save file {path}") from exc
    return path


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise SaveFileError(f"failed to read {what} from save file")
    return data


def _read_tiles(stream: BinaryIO, count: int, what: str) -> list[Tile]:
    raw = _read_exact(stream, 4 * count, what)
    try:
        return [Tile(v) for v in struct.unpack(f"<{count}i", raw)]
    except ValueError:
        raise SaveFileError(f"invalid tile in {what}") from None


def load_game_state(
    save_slot: int,
    codec: PlayerCodec,
    save_dir: PathArg = SAVE_FILE_DIR,
) -> GameState:
    """Read the game state stored in the file of ``save_slot``.

    A checksum mismatch is logged as an error but does not stop the load.
    """
    path = save_file_path(save_slot, save_dir)
    ensure_save_dir(save_dir)

    try:
        stream = open(path, "rb")
    except OSError as exc:
        raise SaveFileError(f"failed to open save file {path} for reading") from exc

    with stream:
        (length,) = _INT.unpack(_read_exact(stream, 4, "timestamp length"))
        if length < 0:
            raise SaveFileError("invalid timestamp length in save file")
        _read_exact(stream, length, "timestamp")

        max_floors, active_map_index = struct.unpack("<2i", _read_exact(stream, 8, "floor count"))
        if max_floors < 0:
            raise SaveFileError("invalid floor count in save file")

        maps = []
        for _ in range(max_floors):
            values = _MAP_HEADER.unpack(_read_exact(stream, _MAP_HEADER.size, "map data"))
            floor_nr, width, height, enemies, unlocked, ex, ey, xx, xy, px, py = values
            if width < 0 or height < 0:
                raise SaveFileError("invalid map dimensions in save file")
            maps.append(
                Map(
                    width=width,
                    height=height,
                    floor_nr=floor_nr,
                    enemy_count=enemies,
                    exit_unlocked=bool(unlocked),
                    entry_pos=Vector2D(ex, ey),
                    exit_pos=Vector2D(xx, xy),
                    player_pos=Vector2D(px, py),
                )
            )

        for map_ in maps:
            size = map_.width * map_.height
            map_.hidden_tiles = _read_tiles(stream, size, "hidden tiles")
            map_.revealed_tiles = _read_tiles(stream, size, "revealed tiles")

        try:
            player = codec.read(stream)
        except (EOFError, struct.error, ValueError) as exc:
            raise SaveFileError("failed to read character data") from exc

        (file_checksum,) = _LONG.unpack(_read_exact(stream, 8, "checksum"))

    state = GameState(maps=maps, active_map_index=active_map_index, player=player)
    calculated = calculate_checksum(state, codec)
    if calculated != file_checksum:
        log.error("checksum mismatch: expected %d, got %d", calculated, file_checksum)
    return state


def get_save_infos(save_dir: PathArg = SAVE_FILE_DIR) -> list[Optional[str]]:
    """The save timestamp of every slot, or None where the slot is empty."""
    ensure_save_dir(save_dir)
    dates: list[Optional[str]] = []
    for slot in SaveSlot:
        path = save_file_path(slot, save_dir)
        if not path.exists():
            dates.append(None)
            continue
        try:
            with open(path, "rb") as stream:
                (length,) = _INT.unpack(_read_exact(stream, 4, "timestamp length"))
                if length < 0:
                    raise SaveFileError("invalid timestamp length in save file")
                raw = _read_exact(stream, length + 1, "timestamp string")
        except OSError as exc:
            raise SaveFileError(f"failed to open save file {path} for reading") from exc
        text = raw[:length].split(b"\0", 1)[0]
        dates.append(text.decode("ascii", errors="replace"))
    return dates