from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..systems.flowfield import Board, propagate_paths
from .tile import OPEN, TARGET, WALL, Cell, PathInfo, Tile, TileKind

logger = logging.getLogger(__name__)


class GridField:
    """
    Board of wall / target / open tiles plus the flow field toward the target.

    Edits (`set_wall`, `set_target`) only change tile placement. Callers must
    call `recompute()` after a batch of edits before the field is read for
    simulation or display.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self._tiles: Board = [[OPEN for _ in range(self._width)] for _ in range(self._height)]
        self._target: Optional[Cell] = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def target(self) -> Optional[Cell]:
        return self._target

    def in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell[0] < self._width and 0 <= cell[1] < self._height

    def tile_at(self, cell: Cell) -> Optional[Tile]:
        if not self.in_bounds(cell):
            return None
        return self._tiles[cell[1]][cell[0]]

    def path_at(self, cell: Cell) -> Optional[PathInfo]:
        tile = self.tile_at(cell)
        if tile is None:
            return None
        return tile.path_info

    def set_wall(self, cell: Cell, is_wall: bool) -> bool:
        tile = self.tile_at(cell)
        if tile is None or tile.kind is TileKind.TARGET:
            return False
        if tile.is_wall == is_wall:
            return False
        self._tiles[cell[1]][cell[0]] = WALL if is_wall else OPEN
        return True

    def set_target(self, cell: Optional[Cell]) -> bool:
        if cell is not None and not self.in_bounds(cell):
            return False
        if cell == self._target:
            return False
        if self._target is not None:
            old_x, old_y = self._target
            self._tiles[old_y][old_x] = OPEN
        if cell is not None:
            self._tiles[cell[1]][cell[0]] = TARGET
        self._target = cell
        return True

    def recompute(self) -> None:
        # Build into a fresh board and swap it in so no reader sees a partial reset.
        self._tiles = propagate_paths(self._tiles, self._width, self._height, self._target)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("flow field rebuilt: target=%s reachable=%d", self._target, self.reachable_count())

    def cells(self) -> Iterator[Tuple[Cell, Tile]]:
        for y, row in enumerate(self._tiles):
            for x, tile in enumerate(row):
                yield (x, y), tile

    def walls(self) -> List[Cell]:
        return [cell for cell, tile in self.cells() if tile.is_wall]

    def reachable_count(self) -> int:
        return sum(1 for _, tile in self.cells() if tile.path is not None)

    def export_tiles(self) -> Dict[str, Any]:
        cells = []
        for (x, y), tile in self.cells():
            path = tile.path_info
            cells.append(
                {
                    "x": x,
                    "y": y,
                    "kind": tile.kind.value,
                    "distance": path.distance if path is not None else None,
                    "next": path.next.value if path is not None else None,
                }
            )
        target = list(self._target) if self._target is not None else None
        return {"width": self._width, "height": self._height, "target": target, "cells": cells}
