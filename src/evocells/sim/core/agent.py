from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from pygame.math import Vector2

from ..utils.vector import distance

TARGET_RADIUS = 5.0
TARGET_COLOR = "#67b555"
HAZARD_RADIUS = 4.0
HAZARD_COLOR = "#4287f5"
CELL_RADIUS = 2.0
CELL_SPEED = 5.0
CELL_COLOR = "#ffffff"


class CellState(str, Enum):
    ALIVE = "Alive"
    DEAD = "Dead"
    REACHED_GOAL = "ReachedGoal"


@dataclass(slots=True)
class Body:
    position: Vector2
    radius: float
    color: str = CELL_COLOR

    def distance(self, other: "Body") -> float:
        return distance(self.position, other.position)


@dataclass(slots=True)
class Target:
    body: Body

    @property
    def radius(self) -> float:
        return self.body.radius


@dataclass(slots=True)
class Hazard:
    body: Body

    @property
    def radius(self) -> float:
        return self.body.radius


@dataclass(frozen=True, slots=True)
class Bounds:
    left: float
    top: float
    right: float
    bottom: float

    def crossed_by(self, position: Vector2, radius: float) -> bool:
        return (
            position.x + radius >= self.right
            or position.x - radius <= self.left
            or position.y + radius >= self.bottom
            or position.y - radius <= self.top
        )


@dataclass(slots=True)
class Cell:
    body: Body
    start_position: Vector2
    genome: List[Vector2]
    energy: int
    min_energy: int
    max_energy: int
    speed: float = CELL_SPEED
    velocity: Vector2 = field(default_factory=Vector2)
    acceleration: Vector2 = field(default_factory=Vector2)
    fitness: float = 0.0
    state: CellState = CellState.ALIVE

    @property
    def position(self) -> Vector2:
        return self.body.position

    @property
    def radius(self) -> float:
        return self.body.radius

    @property
    def alive(self) -> bool:
        return self.state is CellState.ALIVE

    @property
    def is_dead(self) -> bool:
        return self.state is not CellState.ALIVE

    @property
    def reached_goal(self) -> bool:
        return self.state is CellState.REACHED_GOAL


def make_target(position: Vector2, radius: float = TARGET_RADIUS, color: str = TARGET_COLOR) -> Target:
    return Target(body=Body(position=Vector2(position), radius=radius, color=color))


def make_hazard(position: Vector2, radius: float = HAZARD_RADIUS, color: str = HAZARD_COLOR) -> Hazard:
    return Hazard(body=Body(position=Vector2(position), radius=radius, color=color))
