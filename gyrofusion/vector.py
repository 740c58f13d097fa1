"""Small immutable 3D vector and quaternion types used by the motion filters."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union


@dataclass(frozen=True)
class Quat:
    """A rotation quaternion stored as (w, x, y, z)."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.w
        yield self.x
        yield self.y
        yield self.z

    def __mul__(self, other: Quat) -> Quat:
        if not isinstance(other, Quat):
            return NotImplemented
        return Quat(
            self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
            self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
            self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
            self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
        )

    def normalized(self) -> Quat:
        """Return this quaternion scaled to unit length."""
        length = math.sqrt(self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z)
        if length == 0.0:
            raise ZeroDivisionError("cannot normalize a zero-length quaternion")
        factor = 1.0 / length
        return Quat(self.w * factor, self.x * factor, self.y * factor, self.z * factor)

    def inverse(self) -> Quat:
        """Return the conjugate, which is the inverse of a unit quaternion."""
        return Quat(self.w, -self.x, -self.y, -self.z)


@dataclass(frozen=True)
class Vec:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @staticmethod
    def splat(value: float) -> Vec:
        """Return a vector with every component set to ``value``."""
        return Vec(value, value, value)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalized(self) -> Vec:
        """Return a unit vector in the same direction; a zero vector stays zero."""
        length = self.length()
        if length == 0.0:
            return self
        factor = 1.0 / length
        return Vec(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other: Vec) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec) -> Vec:
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def min(self, other: Vec) -> Vec:
        """Component-wise minimum."""
        return Vec(
            self.x if self.x < other.x else other.x,
            self.y if self.y < other.y else other.y,
            self.z if self.z < other.z else other.z,
        )

    def max(self, other: Vec) -> Vec:
        """Component-wise maximum."""
        return Vec(
            self.x if self.x > other.x else other.x,
            self.y if self.y > other.y else other.y,
            self.z if self.z > other.z else other.z,
        )

    def abs(self) -> Vec:
        return Vec(
            self.x if self.x > 0 else -self.x,
            self.y if self.y > 0 else -self.y,
            self.z if self.z > 0 else -self.z,
        )

    def lerp(self, other: Vec, factor: Union[float, Vec]) -> Vec:
        """Interpolate towards ``other`` by a scalar or per-component factor."""
        if isinstance(factor, Vec):
            return Vec(
                self.x + (other.x - self.x) * factor.x,
                self.y + (other.y - self.y) * factor.y,
                self.z + (other.z - self.z) * factor.z,
            )
        return self + (other - self) * factor

    def rotated(self, quat: Quat) -> Vec:
        """Rotate this vector by ``quat`` (q * v * q^-1)."""
        result = quat * Quat(0.0, self.x, self.y, self.z) * quat.inverse()
        return Vec(result.x, result.y, result.z)

    def __add__(self, other: Vec) -> Vec:
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec) -> Vec:
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec:
        if isinstance(scalar, (Vec, Quat)):
            return NotImplemented
        return Vec(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vec:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vec:
        if isinstance(scalar, (Vec, Quat)):
            return NotImplemented
        return Vec(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vec:
        return Vec(-self.x, -self.y, -self.z)


def angle_axis(angle: float, x: float, y: float, z: float) -> Quat:
    """Build a quaternion rotating ``angle`` radians about the axis (x, y, z)."""
    sin_half = math.sin(angle * 0.5)
    axis = Vec(x, y, z).normalized() * sin_half
    return Quat(math.cos(angle * 0.5), axis.x, axis.y, axis.z)