from __future__ import annotations

import logging
from typing import Optional

from ..systems import editing
from ..systems.editing import MouseButton, Selection
from ..types.metrics import TickMetrics
from ..types.snapshot import Snapshot, SnapshotMetadata, SnapshotSelection
from ..utils.viewport import Viewport
from .config import SimulationConfig
from .grid_field import GridField
from .rng import DeterministicRng
from .simulator import AgentSimulator
from .tile import Cell

logger = logging.getLogger(__name__)

PAUSE_KEY = "p"


class Sandbox:
    """
    The control-loop context: one board, its drones and the edit state.

    Input handlers take board cells; `pointer_move` maps window pixels through
    the sandbox's `Viewport` first. Every finished edit recomputes the flow
    field before returning.
    """

    def __init__(self, config: SimulationConfig):
        self._config = config
        self._rng = DeterministicRng(config.seed)
        self._field = GridField(config.board.width, config.board.height)
        self._viewport = Viewport(config.board.width, config.board.height)
        self._selection = Selection()
        self._metrics: TickMetrics | None = None
        self._build_board()
        self._simulator = AgentSimulator(self._field, config, self._rng)

    @property
    def field(self) -> GridField:
        return self._field

    @property
    def simulator(self) -> AgentSimulator:
        return self._simulator

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    @property
    def paused(self) -> bool:
        return self._simulator.paused

    def reset(self) -> None:
        self._rng.reset()
        self._field = GridField(self._config.board.width, self._config.board.height)
        self._selection = Selection()
        self._metrics = None
        self._build_board()
        self._simulator = AgentSimulator(self._field, self._config, self._rng)

    def update(self, dt: float) -> Optional[TickMetrics]:
        metrics = self._simulator.tick(dt)
        if metrics is not None:
            self._metrics = metrics
        return metrics

    def step(self) -> TickMetrics:
        self._metrics = self._simulator.step()
        return self._metrics

    def mouse_move(self, cell: Optional[Cell]) -> None:
        if cell is not None and not self._field.in_bounds(cell):
            cell = None
        editing.move_cursor(self._selection, cell)

    def pointer_move(self, px: float, py: float) -> None:
        self.mouse_move(self._viewport.to_cell(px, py))

    def resize(self, width: float, height: float) -> None:
        self._viewport.resize(width, height)

    def mouse_press(self, button: MouseButton) -> None:
        if button == MouseButton.LEFT:
            editing.begin_selection(self._selection)

    def mouse_release(self, button: MouseButton) -> None:
        if button == MouseButton.LEFT:
            changed = editing.apply_selection(self._field, self._selection)
            logger.debug("selection edit changed %d tiles", changed)
        elif button == MouseButton.RIGHT:
            editing.toggle_target(self._field, self._selection.hover)
            logger.debug("target moved to %s", self._field.target)
        self._field.recompute()

    def key_press(self, key: str) -> None:
        if key.lower() == PAUSE_KEY:
            paused = self._simulator.toggle_pause()
            logger.info("simulation %s", "paused" if paused else "resumed")

    def snapshot(self) -> Snapshot:
        config = self._config
        selection = self._selection
        return Snapshot(
            tick=self._simulator.tick_count,
            metrics=self._metrics,
            drones=[{"x": x, "y": y} for x, y in self._simulator.agent_positions()],
            board=self._field.export_tiles(),
            selection=SnapshotSelection(
                hover=list(selection.hover) if selection.hover is not None else None,
                start=list(selection.start) if selection.start is not None else None,
            ),
            metadata=SnapshotMetadata(
                width=self._field.width,
                height=self._field.height,
                tick_interval=config.tick_interval,
                seed=config.seed,
                config_version=config.config_version,
                paused=self._simulator.paused,
            ),
        )

    def _build_board(self) -> None:
        board = self._config.board
        for cell in board.walls:
            self._field.set_wall(cell, True)
        target = board.resolved_target()
        if target is not None and not self._field.set_target(target):
            raise ValueError(f"Target {target} lies outside the {board.width}x{board.height} board")
        self._field.recompute()
        logger.debug(
            "board %dx%d built: walls=%d target=%s",
            board.width,
            board.height,
            len(self._field.walls()),
            self._field.target,
        )
