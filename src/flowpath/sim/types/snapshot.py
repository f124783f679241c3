from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .metrics import TickMetrics


@dataclass(slots=True)
class Snapshot:
    tick: int
    metrics: Optional[TickMetrics]
    drones: List[Dict[str, float]]
    board: Dict[str, Any]
    selection: "SnapshotSelection"
    metadata: "SnapshotMetadata"


@dataclass(slots=True)
class SnapshotSelection:
    hover: Optional[List[int]]
    start: Optional[List[int]]


@dataclass(slots=True)
class SnapshotMetadata:
    width: int
    height: int
    tick_interval: float
    seed: int
    config_version: str
    paused: bool
