from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Tuple

from ..core.tile import OPEN, Cell, Direction, PathInfo, Tile, TileKind, step_cell

Board = List[List[Tile]]

# Expansion order decides ties: the first parent to reach a cell keeps it.
_EXPANSION_ORDER: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.SOUTH,
    Direction.WEST,
    Direction.EAST,
)


def reset_paths(tiles: Board) -> Board:
    """Copy of the board with every open tile back to unreached."""
    return [[OPEN if tile.kind is TileKind.OPEN else tile for tile in row] for row in tiles]


def propagate_paths(tiles: Board, width: int, height: int, target: Optional[Cell]) -> Board:
    """
    Breadth-first flow field grown outward from `target`.

    Every open cell reachable through non-wall cells receives its hop
    distance to the target and the first step of a shortest path there.
    The input board is not modified; a rebuilt copy is returned.
    """

    board = reset_paths(tiles)
    if target is None:
        return board

    queue: Deque[Tuple[Cell, int, Direction]] = deque()
    # The seed direction is never written: the target tile carries no path.
    queue.append((target, 0, Direction.SOUTH))
    while queue:
        position, distance, next_dir = queue.popleft()
        if not _settle(board, width, height, position, distance, next_dir):
            continue
        for direction in _EXPANSION_ORDER:
            queue.append((step_cell(position, direction), distance + 1, direction.opposite))
    return board


def _settle(board: Board, width: int, height: int, position: Cell, distance: int, next_dir: Direction) -> bool:
    x, y = position
    if not (0 <= x < width and 0 <= y < height):
        return False
    tile = board[y][x]
    if tile.kind is TileKind.OPEN:
        current = tile.path.distance if tile.path is not None else None
        if current is None or distance < current:
            board[y][x] = Tile(TileKind.OPEN, PathInfo(distance=distance, next=next_dir))
            return True
        return False
    return tile.kind is TileKind.TARGET and distance == 0
