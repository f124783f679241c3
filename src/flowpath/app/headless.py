from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Optional

from ..sim.core.config import SimulationConfig
from ..sim.core.sandbox import Sandbox

logger = logging.getLogger(__name__)

_HEADER = [
    "tick",
    "population",
    "moved",
    "jittered",
    "removed",
    "spawned",
    "tick_ms",
]


def _format_row(metrics: object, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        metrics.population,
        metrics.moved,
        metrics.jittered,
        metrics.removed,
        metrics.spawned,
        f"{tick_ms:.3f}",
    ]


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"mean": 0.0, "min": 0.0, "max": 0.0}
    return {
        "mean": float(sum(values) / len(values)),
        "min": float(min(values)),
        "max": float(max(values)),
    }


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    config_path: Optional[Path] = None,
    summary_path: Optional[Path] = None,
) -> Sandbox:
    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if seed is not None:
        config.seed = seed
    sandbox = Sandbox(config)
    logger.info(
        "running %d steps on a %dx%d board (seed=%d, reachable=%d)",
        steps,
        sandbox.field.width,
        sandbox.field.height,
        config.seed,
        sandbox.field.reachable_count(),
    )

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    population_series: list[float] = []
    tick_ms_series: list[float] = []
    spawned_total = 0
    removed_total = 0
    cap_reached_tick: Optional[int] = None
    cap = config.drones.population_cap

    try:
        for _ in range(steps):
            metrics = sandbox.step()
            tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
            population_series.append(float(metrics.population))
            tick_ms_series.append(tick_ms)
            spawned_total += metrics.spawned
            removed_total += metrics.removed
            if cap_reached_tick is None and metrics.population >= cap:
                cap_reached_tick = metrics.tick
            if writer:
                writer.writerow(_format_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    if summary_path:
        summary = {
            "steps": steps,
            "seed": config.seed,
            "board": {"width": sandbox.field.width, "height": sandbox.field.height},
            "target": list(sandbox.field.target) if sandbox.field.target is not None else None,
            "reachable_cells": sandbox.field.reachable_count(),
            "deterministic_log": deterministic_log,
            "population": _summary_stats(population_series),
            "tick_ms": _summary_stats(tick_ms_series),
            "spawned": spawned_total,
            "removed": removed_total,
            "final_population": sandbox.simulator.population,
            "cap": {"value": cap, "reached_at_tick": cap_reached_tick},
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))

    logger.info("finished with %d drones", sandbox.simulator.population)
    return sandbox


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless flow-field drone simulation")
    parser.add_argument("--steps", type=int, default=300)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML board/drone configuration")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-tick metrics")
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Optional JSON file to write summary stats for the run.",
    )
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_headless(
        args.steps,
        args.seed,
        args.log,
        deterministic_log=args.deterministic_log,
        config_path=args.config,
        summary_path=args.summary,
    )


if __name__ == "__main__":
    main()
