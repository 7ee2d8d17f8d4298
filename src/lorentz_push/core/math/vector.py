"""Three-vector value type.

Components are plain floats. Division and square roots go through NumPy so that
a zero divisor or a negative radicand yields inf/nan instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray


ArrayF = NDArray[np.float64]


def safe_divide(a: float, b: float) -> float:
    """Return a / b with IEEE-754 semantics (inf/nan on a zero divisor)."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(np.float64(a) / np.float64(b))


def safe_sqrt(a: float) -> float:
    """Return sqrt(a), nan for negative input."""
    with np.errstate(invalid="ignore"):
        return float(np.sqrt(np.float64(a)))


@dataclass(frozen=True, slots=True)
class Vector3:
    x: float
    y: float
    z: float

    @classmethod
    def zero(cls) -> "Vector3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_array(cls, a: ArrayLike) -> "Vector3":
        arr = np.asarray(a, dtype=np.float64)
        if arr.shape != (3,):
            raise ValueError("vector must have shape (3,)")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> ArrayF:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def add(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, s: float) -> "Vector3":
        return Vector3(self.x * s, self.y * s, self.z * s)

    def divide(self, s: float) -> "Vector3":
        return Vector3(
            safe_divide(self.x, s),
            safe_divide(self.y, s),
            safe_divide(self.z, s),
        )

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        """Right-handed cross product self x other."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def squared(self) -> float:
        return self.dot(self)

    def norm(self) -> float:
        return safe_sqrt(self.squared())

    def cosine(self, other: "Vector3") -> float:
        """Cosine of the angle to other; nan if either vector is zero."""
        return safe_divide(self.dot(other), self.norm() * other.norm())

    def sine(self, other: "Vector3") -> float:
        """Sine of the angle to other (always >= 0); nan if either vector is zero."""
        return safe_divide(self.cross(other).norm(), self.norm() * other.norm())

    def __add__(self, other: "Vector3") -> "Vector3":
        return self.add(other)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return self.subtract(other)

    def __mul__(self, s: float) -> "Vector3":
        return self.scale(s)

    def __rmul__(self, s: float) -> "Vector3":
        return self.scale(s)

    def __truediv__(self, s: float) -> "Vector3":
        return self.divide(s)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)
