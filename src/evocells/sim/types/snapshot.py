from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(slots=True)
class Snapshot:
    tick: int
    generation: int
    cells: List[Dict[str, Any]]
    target: Dict[str, Any]
    hazards: List[Dict[str, Any]]
    world: "SnapshotWorld"
    metadata: "SnapshotMetadata"


@dataclass(slots=True)
class SnapshotWorld:
    width: float
    height: float


@dataclass(slots=True)
class SnapshotMetadata:
    seed: int
    sim_dt: float
    tick_rate: float
    population_size: int
    mutation_rate: float
    config_version: str
