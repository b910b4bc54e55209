from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from .agent import CELL_COLOR, CELL_RADIUS, CELL_SPEED, HAZARD_RADIUS, TARGET_RADIUS
from .population import ELITE_COLOR


@dataclass
class CellConfig:
    radius: float = CELL_RADIUS
    speed: float = CELL_SPEED
    energy: int = 400
    color: str = CELL_COLOR


@dataclass
class TargetConfig:
    # None places the target at the top centre of the world
    position: Optional[tuple[float, float]] = None
    radius: float = TARGET_RADIUS
    top_margin: float = 25.0


@dataclass
class HazardConfig:
    count: int = 30
    radius: float = HAZARD_RADIUS
    # explicit positions replace random placement when provided
    positions: List[tuple[float, float]] = field(default_factory=list)


@dataclass
class PopulationConfig:
    size: int = 1000
    mutation_rate: float = 0.05
    elite_color: str = ELITE_COLOR


@dataclass
class SimulationConfig:
    time_step: float = 1.0 / 60.0
    world_width: float = 800.0
    world_height: float = 600.0
    start_position: Optional[tuple[float, float]] = None
    start_bottom_margin: float = 5.0
    seed: int = 42
    config_version: str = "v1"
    cell: CellConfig = field(default_factory=CellConfig)
    target: TargetConfig = field(default_factory=TargetConfig)
    hazards: HazardConfig = field(default_factory=HazardConfig)
    population: PopulationConfig = field(default_factory=PopulationConfig)

    def resolved_start_position(self) -> tuple[float, float]:
        if self.start_position is not None:
            return self.start_position
        return (self.world_width / 2, self.world_height - self.start_bottom_margin)

    def resolved_target_position(self) -> tuple[float, float]:
        if self.target.position is not None:
            return self.target.position
        return (self.world_width / 2, self.target.top_margin)

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_config(data)


def _pair(value: tuple[float, float] | list[float] | None) -> Optional[tuple[float, float]]:
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return (float(value[0]), float(value[1]))
    if value is None:
        return None
    raise ValueError(f"expected an [x, y] pair, got {value!r}")


def load_config(raw: dict) -> SimulationConfig:
    cell = CellConfig(**raw.get("cell", {}))

    target_raw = dict(raw.get("target", {}))
    target_position = _pair(target_raw.pop("position", None))
    target = TargetConfig(position=target_position, **target_raw)

    hazards_raw = dict(raw.get("hazards", {}))
    positions = [_pair(item) for item in hazards_raw.pop("positions", [])]
    hazards = HazardConfig(positions=positions, **hazards_raw)

    population = PopulationConfig(**raw.get("population", {}))

    sim_values = {k: v for k, v in raw.items() if k not in {"cell", "target", "hazards", "population"}}
    if "start_position" in sim_values:
        sim_values["start_position"] = _pair(sim_values["start_position"])
    return SimulationConfig(cell=cell, target=target, hazards=hazards, population=population, **sim_values)
