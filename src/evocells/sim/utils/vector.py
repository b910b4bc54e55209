from __future__ import annotations

import math

from pygame.math import Vector2


class VectorError(ArithmeticError):
    """Raised when a vector operation has no finite result."""


class VectorDivisionError(VectorError, ZeroDivisionError):
    pass


class ZeroVectorError(VectorError):
    pass


def from_angle(theta: float) -> Vector2:
    return Vector2(math.cos(theta), math.sin(theta))


def from_tuple(value: tuple[float, float] | list[float]) -> Vector2:
    return Vector2(float(value[0]), float(value[1]))


def equals(a: Vector2, b: Vector2) -> bool:
    return a.x == b.x and a.y == b.y


def magnitude(vector: Vector2) -> float:
    return math.sqrt(vector.x * vector.x + vector.y * vector.y)


def distance(a: Vector2, b: Vector2) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def divide(vector: Vector2, scalar: float) -> Vector2:
    if scalar == 0:
        raise VectorDivisionError("Division by zero")
    return Vector2(vector.x / scalar, vector.y / scalar)


def normalize(vector: Vector2) -> Vector2:
    mag = magnitude(vector)
    if mag == 0:
        raise ZeroVectorError("Cannot normalize a zero vector")
    return divide(vector, mag)
