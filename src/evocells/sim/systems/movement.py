from __future__ import annotations

from typing import Iterable

from ..core.agent import Bounds, Cell, CellState, Hazard, Target
from ..utils.vector import normalize


def move(cell: Cell) -> None:
    # The genome only steers; speed stays constant.
    acceleration = cell.genome[cell.energy]
    velocity = normalize(cell.velocity + acceleration) * cell.speed
    cell.acceleration = acceleration
    cell.velocity = velocity
    cell.body.position = cell.body.position + cell.velocity


def hits_hazard(cell: Cell, hazards: Iterable[Hazard]) -> bool:
    for hazard in hazards:
        if cell.body.distance(hazard.body) < hazard.radius:
            return True
    return False


def tick_cell(cell: Cell, target: Target, hazards: Iterable[Hazard], bounds: Bounds) -> CellState:
    """Advance one live cell by a single frame and return its resulting state.

    Terminal cells are left untouched. Every check runs on the same frame, so a
    cell that runs out of energy inside the target still counts as reaching it.
    """
    if not cell.alive:
        return cell.state

    if cell.energy > 0:
        move(cell)
        cell.energy -= 1
    else:
        cell.state = CellState.DEAD

    if bounds.crossed_by(cell.body.position, cell.body.radius):
        cell.state = CellState.DEAD

    if cell.body.distance(target.body) < target.radius:
        cell.state = CellState.REACHED_GOAL

    if cell.alive and hits_hazard(cell, hazards):
        cell.state = CellState.DEAD

    return cell.state
