from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Dict, List

from pygame.math import Vector2

from .agent import Body, Bounds, Hazard, Target, make_hazard, make_target
from .config import SimulationConfig
from .population import Population
from .rng import DeterministicRng, derive_stream_seed
from ..types.metrics import TickMetrics
from ..types.snapshot import Snapshot, SnapshotMetadata, SnapshotWorld
from ..utils.vector import from_tuple

logger = logging.getLogger(__name__)

_LAYOUT_RNG_SALT = 0xA51E0EA7E9CA2311


def _body_payload(body: Body) -> Dict[str, Any]:
    return {
        "x": body.position.x,
        "y": body.position.y,
        "radius": body.radius,
        "color": body.color,
    }


class World:
    """Scenario driver: builds the arena from config and steps the population."""

    def __init__(self, config: SimulationConfig):
        self._config = config
        self._rng = DeterministicRng(config.seed)
        self._layout_rng = DeterministicRng(derive_stream_seed(config.seed, _LAYOUT_RNG_SALT))
        self._bootstrap()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def population(self) -> Population:
        return self._population

    @property
    def target(self) -> Target:
        return self._target

    @property
    def hazards(self) -> List[Hazard]:
        return self._hazards

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def generation(self) -> int:
        return self._population.generation

    def reset(self) -> None:
        self._rng.reset()
        self._layout_rng.reset()
        self._bootstrap()

    def _bootstrap(self) -> None:
        config = self._config
        self._bounds = Bounds(0.0, 0.0, config.world_width, config.world_height)
        self._target = make_target(from_tuple(config.resolved_target_position()), radius=config.target.radius)
        self._hazards = self._place_hazards()
        self._population = Population(
            size=config.population.size,
            mutation_rate=config.population.mutation_rate,
            target=self._target,
            hazards=self._hazards,
            energy_allowance=config.cell.energy,
            start_position=from_tuple(config.resolved_start_position()),
            world_bounds=self._bounds,
            rng=self._rng,
            cell_radius=config.cell.radius,
            speed=config.cell.speed,
            elite_color=config.population.elite_color,
        )
        logger.debug(
            "world ready: %d cells, %d hazards, seed %d",
            config.population.size,
            len(self._hazards),
            config.seed,
        )

    def _place_hazards(self) -> List[Hazard]:
        hazard_config = self._config.hazards
        if hazard_config.positions:
            return [make_hazard(from_tuple(pos), radius=hazard_config.radius) for pos in hazard_config.positions]
        width = max(1, int(self._config.world_width))
        height = max(1, int(self._config.world_height))
        hazards = []
        for _ in range(hazard_config.count):
            x = self._layout_rng.next_int(width)
            y = self._layout_rng.next_int(height)
            hazards.append(make_hazard(Vector2(x, y), radius=hazard_config.radius))
        return hazards

    def step(self, tick: int) -> TickMetrics:
        start = perf_counter()
        population = self._population
        generation = population.generation
        evolved = population.tick()
        if evolved:
            # report the generation that just finished, not its replacement
            finished = population.last_generation
            alive = 0
            reached = finished.reached_goal if finished is not None else 0
        else:
            alive = population.alive_count
            reached = population.reached_goal_count
        duration_ms = (perf_counter() - start) * 1000.0
        return TickMetrics(
            tick=tick,
            generation=generation,
            alive=alive,
            reached_goal=reached,
            dead=population.size - alive,
            evolved=evolved,
            tick_duration_ms=duration_ms,
        )

    def snapshot(self, tick: int) -> Snapshot:
        config = self._config
        cells = []
        for index, cell in enumerate(self._population.cells):
            payload = _body_payload(cell.body)
            payload["id"] = index
            payload["state"] = cell.state.value
            payload["energy"] = cell.energy
            cells.append(payload)
        return Snapshot(
            tick=tick,
            generation=self._population.generation,
            cells=cells,
            target=_body_payload(self._target.body),
            hazards=[_body_payload(hazard.body) for hazard in self._hazards],
            world=SnapshotWorld(width=config.world_width, height=config.world_height),
            metadata=SnapshotMetadata(
                seed=config.seed,
                sim_dt=config.time_step,
                tick_rate=1.0 / config.time_step if config.time_step > 0 else 0.0,
                population_size=config.population.size,
                mutation_rate=config.population.mutation_rate,
                config_version=config.config_version,
            ),
        )
