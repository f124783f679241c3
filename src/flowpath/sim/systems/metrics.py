from __future__ import annotations

from ..types.metrics import TickMetrics


def create_metrics(
    tick: int,
    population: int,
    moved: int,
    jittered: int,
    removed: int,
    spawned: int,
    duration_ms: float,
) -> TickMetrics:
    return TickMetrics(
        tick=tick,
        population=population,
        moved=moved,
        jittered=jittered,
        removed=removed,
        spawned=spawned,
        tick_duration_ms=duration_ms,
    )
