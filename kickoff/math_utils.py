"""Centralized math utilities for the simulation.

This module provides pure Python mathematical utilities for the simulation,
including a mutable Vector2 used for entity positions and velocities.
"""

from __future__ import annotations

import math


class Vector2:
    """A 2D vector class for mathematical operations."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> "Vector2":
        length = math.sqrt(self.x * self.x + self.y * self.y)
        if length == 0:
            return Vector2(0, 0)
        return Vector2(self.x / length, self.y / length)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def update(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def copy(self) -> "Vector2":
        """Return a copy of this vector."""
        return Vector2(self.x, self.y)

    def __eq__(self, other: object) -> bool:
        """Check if two vectors are equal."""
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __ne__(self, other: object) -> bool:
        """Check if two vectors are not equal."""
        return not self.__eq__(other)

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"

    def add_inplace(self, other: "Vector2") -> "Vector2":
        """Add another vector to this one in-place."""
        self.x += other.x
        self.y += other.y
        return self

    def scale_inplace(self, scalar: float) -> "Vector2":
        """Multiply this vector by a scalar in-place."""
        self.x *= scalar
        self.y *= scalar
        return self

    @staticmethod
    def from_angle(angle: float, length: float = 1.0) -> "Vector2":
        """Build a vector pointing at ``angle`` radians (0 = +x)."""
        return Vector2(math.cos(angle) * length, math.sin(angle) * length)

    @staticmethod
    def distance_between(a: "Vector2", b: "Vector2") -> float:
        dx = a.x - b.x
        dy = a.y - b.y
        return math.sqrt(dx * dx + dy * dy)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def angle_between(origin: Vector2, target: Vector2) -> float:
    """Angle of the vector from ``origin`` to ``target`` in radians."""
    return math.atan2(target.y - origin.y, target.x - origin.x)


def direction_to(origin: Vector2, target: Vector2) -> Vector2:
    """Unit vector from ``origin`` toward ``target``.

    Coincident points yield ``(1, 0)`` since ``atan2(0, 0) == 0``.
    """
    return Vector2.from_angle(angle_between(origin, target))
