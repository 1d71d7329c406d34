"""Three-dimensional vectors used for points, directions and normals."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector:
    """An immutable 3D vector of floats."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalized(self) -> Vector:
        """Vector of length one pointing the same way.

        Raises ZeroDivisionError for the zero vector.
        """
        return self / self.length()

    def dot(self, other: Vector) -> float:
        """Scalar product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        """Vector product with another vector."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def add_scalar(self, value: float) -> Vector:
        """Add the same number to every component."""
        return Vector(self.x + value, self.y + value, self.z + value)

    def sub_scalar(self, value: float) -> Vector:
        """Subtract the same number from every component."""
        return Vector(self.x - value, self.y - value, self.z - value)

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vector:
        if isinstance(factor, Vector):
            return NotImplemented
        return Vector(self.x * factor, self.y * factor, self.z * factor)

    def __rmul__(self, factor: float) -> Vector:
        return self.__mul__(factor)

    def __truediv__(self, divisor: float) -> Vector:
        if isinstance(divisor, Vector):
            return NotImplemented
        return Vector(self.x / divisor, self.y / divisor, self.z / divisor)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z