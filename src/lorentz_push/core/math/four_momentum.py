"""Relativistic four-momentum.

Conventions:
- Natural units, c = 1.
- Storage order: [p0, p1, p2, p3], p0 is the energy-like time component.
- Metric signature (-, +, +, +).
- u denotes the proper velocity (gamma * beta) = spatial momentum / rest mass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .vector import Vector3, safe_divide, safe_sqrt


ArrayF = NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class FourMomentum:
    p0: float
    p1: float
    p2: float
    p3: float

    @classmethod
    def from_mass_and_velocity(cls, mass: float, v: Vector3) -> "FourMomentum":
        """Build p = gamma * mass * (1, v) from a coordinate velocity |v| < 1."""
        gamma = safe_divide(1.0, safe_sqrt(1.0 - v.squared()))
        return cls(1.0, v.x, v.y, v.z).scale(gamma * mass)

    @classmethod
    def from_mass_and_gamma_beta(cls, mass: float, u: Vector3) -> "FourMomentum":
        """Build p = mass * (sqrt(1 + |u|^2), u) from a proper velocity."""
        gamma = safe_sqrt(1.0 + u.squared())
        return cls(gamma, u.x, u.y, u.z).scale(mass)

    @classmethod
    def from_array(cls, a: ArrayLike) -> "FourMomentum":
        arr = np.asarray(a, dtype=np.float64)
        if arr.shape != (4,):
            raise ValueError("four-momentum must have shape (4,)")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]), float(arr[3]))

    def to_array(self) -> ArrayF:
        return np.array([self.p0, self.p1, self.p2, self.p3], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        yield self.p0
        yield self.p1
        yield self.p2
        yield self.p3

    def spatial(self) -> Vector3:
        return Vector3(self.p1, self.p2, self.p3)

    def add(self, other: "FourMomentum") -> "FourMomentum":
        return FourMomentum(
            self.p0 + other.p0,
            self.p1 + other.p1,
            self.p2 + other.p2,
            self.p3 + other.p3,
        )

    def subtract(self, other: "FourMomentum") -> "FourMomentum":
        return FourMomentum(
            self.p0 - other.p0,
            self.p1 - other.p1,
            self.p2 - other.p2,
            self.p3 - other.p3,
        )

    def scale(self, s: float) -> "FourMomentum":
        return FourMomentum(self.p0 * s, self.p1 * s, self.p2 * s, self.p3 * s)

    def divide(self, s: float) -> "FourMomentum":
        return FourMomentum(
            safe_divide(self.p0, s),
            safe_divide(self.p1, s),
            safe_divide(self.p2, s),
            safe_divide(self.p3, s),
        )

    def contract(self, other: "FourMomentum") -> float:
        """Minkowski inner product with signature (-, +, +, +)."""
        return (
            -self.p0 * other.p0
            + self.p1 * other.p1
            + self.p2 * other.p2
            + self.p3 * other.p3
        )

    def rest_mass(self) -> float:
        """Invariant mass; nan for spacelike momenta."""
        return safe_sqrt(-self.contract(self))

    def lorentz_factor(self) -> float:
        u = self.gamma_beta_vector().norm()
        return safe_sqrt(1.0 + u * u)

    def gamma_beta_vector(self) -> Vector3:
        return self.spatial().divide(self.rest_mass())

    def velocity_vector(self) -> Vector3:
        return self.gamma_beta_vector().divide(self.lorentz_factor())

    def __add__(self, other: "FourMomentum") -> "FourMomentum":
        return self.add(other)

    def __sub__(self, other: "FourMomentum") -> "FourMomentum":
        return self.subtract(other)

    def __mul__(self, s: float) -> "FourMomentum":
        return self.scale(s)

    def __rmul__(self, s: float) -> "FourMomentum":
        return self.scale(s)

    def __truediv__(self, s: float) -> "FourMomentum":
        return self.divide(s)
