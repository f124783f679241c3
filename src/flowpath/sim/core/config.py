from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import yaml


@dataclass
class BoardConfig:
    width: int = 20
    height: int = 15
    # None places the target in the middle of the board
    target: Optional[Tuple[int, int]] = None
    walls: List[Tuple[int, int]] = field(default_factory=list)
    place_target: bool = True

    def resolved_target(self) -> Optional[Tuple[int, int]]:
        if not self.place_target:
            return None
        if self.target is not None:
            return self.target
        return (self.width // 2, self.height // 2)


@dataclass
class DroneConfig:
    population_cap: int = 200
    jitter_offset: float = 0.5
    jitter_extent: float = 0.6
    corner_inset: float = 0.3
    initial_positions: List[Tuple[float, float]] = field(default_factory=list)

    def seed_positions(self, width: int, height: int) -> List[Tuple[float, float]]:
        if self.initial_positions:
            return list(self.initial_positions)
        near = self.corner_inset
        far_x = width - 1.0 + near
        far_y = height - 1.0 + near
        return [(near, near), (near, far_y), (far_x, near), (far_x, far_y)]


@dataclass
class SimulationConfig:
    tick_interval: float = 0.20
    seed: int = 42
    config_version: str = "v1"
    board: BoardConfig = field(default_factory=BoardConfig)
    drones: DroneConfig = field(default_factory=DroneConfig)

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_config(data)


def _cell(value: Sequence[int]) -> Tuple[int, int]:
    return (int(value[0]), int(value[1]))


def _expand_walls(raw_walls: list) -> List[Tuple[int, int]]:
    """Walls are listed as [x, y] cells or [x0, y0, x1, y1] inclusive rectangles."""
    walls: List[Tuple[int, int]] = []
    for entry in raw_walls:
        if len(entry) == 2:
            walls.append(_cell(entry))
        elif len(entry) == 4:
            x0, x1 = sorted((int(entry[0]), int(entry[2])))
            y0, y1 = sorted((int(entry[1]), int(entry[3])))
            walls.extend((x, y) for y in range(y0, y1 + 1) for x in range(x0, x1 + 1))
        else:
            raise ValueError(f"Wall entries need 2 or 4 coordinates, got {entry!r}")
    return walls


def load_config(raw: dict) -> SimulationConfig:
    board_raw = dict(raw.get("board") or {})
    target = board_raw.pop("target", None)
    walls = _expand_walls(board_raw.pop("walls", []))
    board = BoardConfig(
        target=_cell(target) if target is not None else None,
        walls=walls,
        **board_raw,
    )

    drones_raw = dict(raw.get("drones") or {})
    positions = [(float(p[0]), float(p[1])) for p in drones_raw.pop("initial_positions", [])]
    drones = DroneConfig(initial_positions=positions, **drones_raw)

    sim_values = {k: v for k, v in raw.items() if k not in {"board", "drones"}}
    return SimulationConfig(board=board, drones=drones, **sim_values)
