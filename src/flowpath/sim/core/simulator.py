from __future__ import annotations

import logging
import math
from time import perf_counter
from typing import List, Optional, Tuple

from pygame.math import Vector2

from ..systems import metrics as metrics_system
from ..types.metrics import TickMetrics
from .config import SimulationConfig
from .grid_field import GridField
from .rng import DeterministicRng
from .tile import TileKind, cell_of

logger = logging.getLogger(__name__)


class AgentSimulator:
    """
    Drones stepping along a `GridField` at a fixed tick interval.

    The live drones occupy the front of `_drones`; clones spawned during a
    step are appended behind them and only start moving on the next step.
    """

    def __init__(self, field: GridField, config: SimulationConfig, rng: DeterministicRng | None = None):
        self._field = field
        self._config = config
        self._rng = rng if rng is not None else DeterministicRng(config.seed)
        self._drones: List[Vector2] = []
        self._accumulator = 0.0
        self._tick = 0
        self.paused = False
        self._seed_drones()

    @property
    def population(self) -> int:
        return len(self._drones)

    @property
    def drones(self) -> List[Vector2]:
        return self._drones

    @property
    def tick_count(self) -> int:
        return self._tick

    def agent_positions(self) -> List[Tuple[float, float]]:
        return [(drone.x, drone.y) for drone in self._drones]

    def add_drone(self, position: Tuple[float, float] | Vector2) -> None:
        self._drones.append(Vector2(position))

    def clear(self) -> None:
        self._drones.clear()

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def reset(self) -> None:
        self._rng.reset()
        self._drones.clear()
        self._accumulator = 0.0
        self._tick = 0
        self.paused = False
        self._seed_drones()

    def tick(self, dt: float) -> Optional[TickMetrics]:
        if self.paused:
            return None
        self._accumulator += dt
        if self._accumulator < self._config.tick_interval:
            return None
        # No carry-over: a long frame still produces a single step.
        self._accumulator = 0.0
        return self.step()

    def step(self) -> TickMetrics:
        start = perf_counter()
        drones = self._drones
        field = self._field
        cap = self._config.drones.population_cap
        moved = jittered = removed = spawned = 0

        index = 0
        live = len(drones)
        while index < live:
            position = drones[index]
            tile = field.tile_at(cell_of(position))
            if tile is None or tile.kind is TileKind.WALL:
                live -= 1
                self._swap_remove(index, live)
                removed += 1
                # the slot now holds an unvisited drone
                continue
            if tile.kind is TileKind.OPEN:
                if tile.path is not None:
                    drones[index] = position + tile.path.next.unit_vector()
                    moved += 1
                else:
                    self._jitter(position)
                    jittered += 1
            elif len(drones) < cap:
                drones.append(Vector2(position))
                spawned += 1
            index += 1

        self._tick += 1
        elapsed_ms = (perf_counter() - start) * 1000.0
        if removed or spawned:
            logger.debug("tick %d: removed=%d spawned=%d population=%d", self._tick, removed, spawned, len(drones))
        return metrics_system.create_metrics(
            self._tick, len(drones), moved, jittered, removed, spawned, elapsed_ms
        )

    def _swap_remove(self, index: int, last_live: int) -> None:
        drones = self._drones
        drones[index] = drones[last_live]
        # fill the vacated live slot with the newest clone (or itself) and drop the tail
        drones[last_live] = drones[-1]
        drones.pop()

    def _jitter(self, position: Vector2) -> None:
        offset = self._config.drones.jitter_offset
        extent = self._config.drones.jitter_extent
        low_x = math.floor(position.x)
        low_y = math.floor(position.y)
        x = position.x + (self._rng.next_open01() - 0.5) * 2.0 * offset
        y = position.y + (self._rng.next_open01() - 0.5) * 2.0 * offset
        if low_x <= x <= low_x + extent:
            position.x = x
        if low_y <= y <= low_y + extent:
            position.y = y

    def _seed_drones(self) -> None:
        field = self._field
        for position in self._config.drones.seed_positions(field.width, field.height):
            self._drones.append(Vector2(position))
