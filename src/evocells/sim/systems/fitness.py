from __future__ import annotations

from ..core.agent import Cell, Target


def min_distance(cell: Cell, target: Target) -> float:
    return target.radius - cell.radius


def calc_fitness(cell: Cell, target: Target) -> float:
    """Score a finished cell against the target.

    Cells that reached the target score ``1/min_dist**2 + energy**2`` so leftover
    energy ranks them. Everyone else scores ``1/d**2`` with ``d`` clamped to the
    closest reachable centre distance.
    """
    min_dist = min_distance(cell, target)
    if min_dist <= 0:
        raise ValueError(
            f"target radius ({target.radius}) must exceed cell radius ({cell.radius})"
        )
    if cell.reached_goal:
        cell.fitness = 1.0 / (min_dist * min_dist) + float(cell.energy * cell.energy)
    else:
        dist = max(cell.body.distance(target.body), min_dist)
        cell.fitness = 1.0 / (dist * dist)
    return cell.fitness
