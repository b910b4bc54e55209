from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from pygame.math import Vector2

from .agent import CELL_RADIUS, CELL_SPEED, Bounds, Cell, Hazard, Target
from .rng import DeterministicRng
from ..systems.fitness import calc_fitness
from ..systems.genetics import clone_cell, get_child, mutate, spawn_cell
from ..systems.movement import tick_cell
from ..types.metrics import GenerationMetrics
from ..utils.vector import VectorError

logger = logging.getLogger(__name__)

ELITE_COLOR = "#000000"


class Population:
    """A fixed-size generation of cells racing toward one target.

    ``tick`` advances every live cell by one frame. Once the whole generation is
    dead, ``evolve`` breeds the next one by roulette-wheel selection and
    mutation, and keeps an unmutated copy of the best cell as its last member.
    """

    def __init__(
        self,
        size: int,
        mutation_rate: float,
        target: Target,
        hazards: Sequence[Hazard],
        energy_allowance: int,
        start_position: Vector2,
        world_bounds: Bounds,
        rng: DeterministicRng,
        cell_radius: float = CELL_RADIUS,
        speed: float = CELL_SPEED,
        elite_color: str = ELITE_COLOR,
    ):
        if size < 1:
            raise ValueError(f"population size must be positive, got {size}")
        if not 0.0 <= mutation_rate <= 1.0:
            raise ValueError(f"mutation rate must be in [0, 1], got {mutation_rate}")
        if energy_allowance < 1:
            raise ValueError(f"energy allowance must be positive, got {energy_allowance}")
        if target.radius <= cell_radius:
            raise ValueError(
                f"target radius ({target.radius}) must exceed cell radius ({cell_radius})"
            )
        self.size = size
        self.mutation_rate = mutation_rate
        self.target = target
        self.hazards: List[Hazard] = list(hazards)
        self.energy_allowance = energy_allowance
        self.start_position = Vector2(start_position)
        self.bounds = world_bounds
        self.elite_color = elite_color
        self._rng = rng
        self.generation = 1
        self.total_fitness = 0.0
        self.history: List[GenerationMetrics] = []
        self.cells: List[Cell] = [
            spawn_cell(self.start_position, energy_allowance, rng, radius=cell_radius, speed=speed)
            for _ in range(size)
        ]

    @property
    def alive_count(self) -> int:
        return sum(1 for cell in self.cells if cell.alive)

    @property
    def reached_goal_count(self) -> int:
        return sum(1 for cell in self.cells if cell.reached_goal)

    @property
    def all_dead(self) -> bool:
        return all(cell.is_dead for cell in self.cells)

    @property
    def last_generation(self) -> Optional[GenerationMetrics]:
        return self.history[-1] if self.history else None

    def tick(self) -> bool:
        """Step every live cell once; returns True when a new generation began."""
        try:
            for cell in self.cells:
                if cell.alive:
                    tick_cell(cell, self.target, self.hazards, self.bounds)
        except VectorError:
            # cells ahead of the faulting one have already moved this frame
            logger.exception("tick aborted in generation %d, frame partially applied", self.generation)
            raise

        if not self.all_dead:
            return False
        self.evolve()
        self.generation += 1
        return True

    def evolve(self) -> None:
        self.total_fitness = sum(calc_fitness(cell, self.target) for cell in self.cells)

        fittest = self.best_cell()
        reached = self.reached_goal_count
        self.history.append(
            GenerationMetrics(
                generation=self.generation,
                total_fitness=self.total_fitness,
                best_fitness=fittest.fitness,
                average_fitness=self.total_fitness / self.size,
                reached_goal=reached,
                best_energy=fittest.energy,
            )
        )
        logger.info(
            "generation %d: best=%.6g avg=%.6g reached=%d/%d",
            self.generation,
            fittest.fitness,
            self.total_fitness / self.size,
            reached,
            self.size,
        )

        next_cells: List[Cell] = []
        for _ in range(self.size - 1):
            child = get_child(self.select_parent())
            mutate(child, self.mutation_rate, self._rng)
            next_cells.append(child)

        next_cells.append(clone_cell(fittest, color=self.elite_color))
        self.cells = next_cells

    def best_cell(self) -> Cell:
        fittest = self.cells[0]
        for cell in self.cells[1:]:
            if cell.fitness > fittest.fitness:
                fittest = cell
        return fittest

    def select_parent(self) -> Cell:
        remaining = self._rng.next_float() * self.total_fitness
        for cell in self.cells:
            remaining -= cell.fitness
            if remaining <= 0:
                return cell
        # rounding left a sliver above zero
        return self.cells[-1]
