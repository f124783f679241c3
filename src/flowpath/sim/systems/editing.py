from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from ..core.tile import Cell, TileKind

if TYPE_CHECKING:
    from ..core.grid_field import GridField


class MouseButton(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


@dataclass(slots=True)
class Selection:
    hover: Optional[Cell] = None
    start: Optional[Cell] = None


def order_points(a: Cell, b: Cell) -> Tuple[Cell, Cell]:
    """Corners of the rectangle spanned by `a` and `b`, smallest coordinates first."""
    return (min(a[0], b[0]), min(a[1], b[1])), (max(a[0], b[0]), max(a[1], b[1]))


def move_cursor(selection: Selection, cell: Optional[Cell]) -> None:
    selection.hover = cell
    if cell is None:
        # left the board
        selection.start = None


def begin_selection(selection: Selection) -> bool:
    if selection.hover is None:
        return False
    selection.start = selection.hover
    return True


def apply_selection(field: GridField, selection: Selection) -> int:
    """
    Finish a drag: paint or erase walls over the selected rectangle.

    The tile under the drag start decides the action. An open start paints
    walls, a wall start clears them, and a drag starting on the target does
    nothing. The target tile itself is never overwritten. Returns the number
    of tiles changed; the caller recomputes the field.
    """

    start, end = selection.start, selection.hover
    if start is None or end is None:
        return 0
    selection.start = None

    origin = field.tile_at(start)
    if origin is None or origin.kind is TileKind.TARGET:
        return 0
    make_wall = origin.kind is TileKind.OPEN

    (x0, y0), (x1, y1) = order_points(start, end)
    changed = 0
    for y in range(y0, y1 + 1):
        for x in range(x0, x1 + 1):
            if field.set_wall((x, y), make_wall):
                changed += 1
    return changed


def toggle_target(field: GridField, cell: Optional[Cell]) -> bool:
    """Remove the current target, then place one at `cell` unless it was the old target."""
    if cell is None or not field.in_bounds(cell):
        return False
    if field.target == cell:
        return field.set_target(None)
    return field.set_target(cell)
