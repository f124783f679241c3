from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    tick: int
    population: int
    moved: int
    jittered: int
    removed: int
    spawned: int
    tick_duration_ms: float = 0.0
