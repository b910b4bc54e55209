from __future__ import annotations

import logging
import math

from pygame.math import Vector2

from ..core.agent import CELL_COLOR, CELL_RADIUS, CELL_SPEED, Body, Cell
from ..core.rng import DeterministicRng
from ..utils.color import grayscale

logger = logging.getLogger(__name__)


def spawn_cell(
    start_position: Vector2,
    max_energy: int,
    rng: DeterministicRng,
    radius: float = CELL_RADIUS,
    speed: float = CELL_SPEED,
    color: str = CELL_COLOR,
) -> Cell:
    genome = [rng.next_unit_circle() for _ in range(max_energy)]
    return _fresh_cell(start_position, genome, max_energy, radius, speed, color)


def _fresh_cell(
    start_position: Vector2,
    genome: list[Vector2],
    max_energy: int,
    radius: float,
    speed: float,
    color: str,
) -> Cell:
    # energy doubles as the index of the next gene, read from the end backwards
    return Cell(
        body=Body(position=Vector2(start_position), radius=radius, color=color),
        start_position=Vector2(start_position),
        genome=genome,
        energy=max_energy - 1,
        min_energy=max_energy,
        max_energy=max_energy,
        speed=speed,
    )


def clone_cell(cell: Cell, color: str = CELL_COLOR) -> Cell:
    return _fresh_cell(
        cell.start_position,
        [Vector2(gene) for gene in cell.genome],
        cell.max_energy,
        cell.body.radius,
        cell.speed,
        color,
    )


def get_child(cell: Cell) -> Cell:
    child = clone_cell(cell)
    child.min_energy = cell.energy
    return child


def reserve_span(cell: Cell) -> int:
    return cell.max_energy - cell.min_energy


def mutate(cell: Cell, mutation_rate: float, rng: DeterministicRng) -> int:
    """Mutate the genome in place and return how many loci changed.

    A mutated locus either gets a brand new direction or a copy of a gene from
    the part of the genome the parent never reached, ``[min_energy, max_energy)``.
    A cell with no parent (empty reserve) copies from its whole genome.
    """
    low = cell.min_energy
    if reserve_span(cell) <= 0:
        low = 0
    elif reserve_span(cell) == 1:
        logger.debug("reserve range collapsed to gene %d", low)

    mutations = 0
    for i in range(cell.max_energy):
        if rng.next_float() >= mutation_rate:
            continue
        mutations += 1
        if rng.next_float() < mutation_rate:
            cell.genome[i] = rng.next_unit_circle()
        else:
            j = rng.next_index(low, cell.max_energy)
            cell.genome[i] = Vector2(cell.genome[j])

    channel = math.floor(255 * (1 - mutations / cell.max_energy))
    cell.body.color = grayscale(channel)
    return mutations
