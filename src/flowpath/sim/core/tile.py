from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from pygame.math import Vector2

Cell = Tuple[int, int]


class Direction(str, Enum):
    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"

    @property
    def delta(self) -> Cell:
        return _INT_DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def unit_vector(self) -> Vector2:
        # Vector2 is mutable, hand out a copy
        return Vector2(_FLOAT_DELTAS[self])


# Rows grow downward: north is toward row 0.
_INT_DELTAS: Dict[Direction, Cell] = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}

_FLOAT_DELTAS: Dict[Direction, Tuple[float, float]] = {
    direction: (float(dx), float(dy)) for direction, (dx, dy) in _INT_DELTAS.items()
}

_OPPOSITES: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


class TileKind(str, Enum):
    WALL = "Wall"
    TARGET = "Target"
    OPEN = "Open"


@dataclass(frozen=True, slots=True)
class PathInfo:
    distance: int
    next: Direction


@dataclass(frozen=True, slots=True)
class Tile:
    kind: TileKind
    path: Optional[PathInfo] = None

    @property
    def is_wall(self) -> bool:
        return self.kind is TileKind.WALL

    @property
    def path_info(self) -> Optional[PathInfo]:
        if self.kind is not TileKind.OPEN:
            return None
        return self.path


WALL = Tile(TileKind.WALL)
TARGET = Tile(TileKind.TARGET)
OPEN = Tile(TileKind.OPEN)


def cell_of(position: Vector2) -> Cell:
    """Cell holding a continuous board position; cell (c, r) spans [c, c+1) x [r, r+1)."""
    return (int(math.floor(position.x)), int(math.floor(position.y)))


def step_cell(cell: Cell, direction: Direction) -> Cell:
    dx, dy = direction.delta
    return (cell[0] + dx, cell[1] + dy)
