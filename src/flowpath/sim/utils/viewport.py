from __future__ import annotations

import math
from typing import Optional, Tuple

from ..core.tile import Cell

INITIAL_TILE_SIZE = 50.0


class Viewport:
    """Maps window pixels to board cells, letterboxing the board when the window is resized."""

    def __init__(self, board_width: int, board_height: int, tile_size: float = INITIAL_TILE_SIZE):
        self._board_width = board_width
        self._board_height = board_height
        self.tile_size = tile_size
        self.offset: Tuple[float, float] = (0.0, 0.0)

    def window_size(self) -> Tuple[int, int]:
        return (int(self.tile_size * self._board_width), int(self.tile_size * self._board_height))

    def resize(self, width: float, height: float) -> None:
        self.tile_size = min(width / self._board_width, height / self._board_height)
        self.offset = (
            (width - self.tile_size * self._board_width) / 2.0,
            (height - self.tile_size * self._board_height) / 2.0,
        )

    def to_board(self, px: float, py: float) -> Tuple[float, float]:
        return ((px - self.offset[0]) / self.tile_size, (py - self.offset[1]) / self.tile_size)

    def to_cell(self, px: float, py: float) -> Optional[Cell]:
        # compare as floats so positions just outside the edge don't round onto the board
        x, y = self.to_board(px, py)
        if 0.0 <= x < self._board_width and 0.0 <= y < self._board_height:
            return (int(math.floor(x)), int(math.floor(y)))
        return None

    def to_pixels(self, x: float, y: float) -> Tuple[float, float]:
        return (self.offset[0] + x * self.tile_size, self.offset[1] + y * self.tile_size)
