from __future__ import annotations

import argparse
import csv
import json
import logging
import math
from pathlib import Path
from typing import Optional

from ..sim.core.config import SimulationConfig
from ..sim.core.world import World
from ..sim.types.metrics import GenerationMetrics, TickMetrics

logger = logging.getLogger(__name__)

_TICK_HEADER = [
    "tick",
    "generation",
    "alive",
    "reached_goal",
    "dead",
    "evolved",
    "tick_ms",
]

_GENERATION_HEADER = [
    "generation",
    "total_fitness",
    "best_fitness",
    "average_fitness",
    "reached_goal",
    "best_energy",
]


def _format_tick_row(metrics: TickMetrics, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        metrics.generation,
        metrics.alive,
        metrics.reached_goal,
        metrics.dead,
        int(metrics.evolved),
        f"{tick_ms:.3f}",
    ]


def _format_generation_row(metrics: GenerationMetrics) -> list[object]:
    return [
        metrics.generation,
        f"{metrics.total_fitness:.6g}",
        f"{metrics.best_fitness:.6g}",
        f"{metrics.average_fitness:.6g}",
        metrics.reached_goal,
        metrics.best_energy,
    ]


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}
    sorted_values = sorted(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(sum(values) / len(values)),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
        "p95": _percentile(sorted_values, 0.95),
        "p99": _percentile(sorted_values, 0.99),
    }


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    config_path: Optional[Path] = None,
    generations_path: Optional[Path] = None,
    summary_path: Optional[Path] = None,
) -> World:
    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if seed is not None:
        config.seed = seed
    world = World(config)
    logger.info(
        "running %d ticks: %d cells, mutation rate %.3f, seed %d",
        steps,
        config.population.size,
        config.population.mutation_rate,
        config.seed,
    )

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_TICK_HEADER)

    tick_ms_series: list[float] = []
    try:
        for tick in range(steps):
            metrics = world.step(tick)
            tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
            tick_ms_series.append(tick_ms)
            if writer:
                writer.writerow(_format_tick_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    history = world.population.history
    if generations_path:
        with Path(generations_path).open("w", newline="") as handle:
            gen_writer = csv.writer(handle)
            gen_writer.writerow(_GENERATION_HEADER)
            for row in history:
                gen_writer.writerow(_format_generation_row(row))

    if summary_path:
        summary = {
            "steps": steps,
            "seed": config.seed,
            "deterministic_log": deterministic_log,
            "generation": world.generation,
            "generations_completed": len(history),
            "tick_ms": _summary_stats(tick_ms_series),
            "best_fitness": [row.best_fitness for row in history],
            "reached_goal": [row.reached_goal for row in history],
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))

    logger.info("finished at generation %d after %d completed generations", world.generation, len(history))
    return world


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless evolving cells simulation")
    parser.add_argument("--steps", type=int, default=3000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-tick metrics")
    parser.add_argument(
        "--generations",
        type=Path,
        default=None,
        help="CSV file to write one row per completed generation.",
    )
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
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_headless(
        args.steps,
        args.seed,
        args.log,
        deterministic_log=args.deterministic_log,
        config_path=args.config,
        generations_path=args.generations,
        summary_path=args.summary,
    )


if __name__ == "__main__":
    main()
