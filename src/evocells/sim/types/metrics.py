from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    tick: int
    generation: int
    alive: int
    reached_goal: int
    dead: int
    evolved: bool
    tick_duration_ms: float = 0.0


@dataclass(slots=True)
class GenerationMetrics:
    generation: int
    total_fitness: float
    best_fitness: float
    average_fitness: float
    reached_goal: int
    best_energy: int
