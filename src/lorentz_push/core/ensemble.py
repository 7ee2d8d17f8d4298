"""Vectorised Boris push over an ensemble of independent particles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .math.four_momentum import FourMomentum
from .math.vector import Vector3
from .particle import ChargedParticle


ArrayF = NDArray[np.float64]


@dataclass(slots=True)
class ParticleEnsemble:
    """Array-of-particles state.

    u holds proper velocities (gamma * beta), one row per particle.
    """
    charge: ArrayF
    pos: ArrayF
    u: ArrayF
    mass: ArrayF

    def __post_init__(self) -> None:
        self.charge = np.ascontiguousarray(self.charge, dtype=np.float64)
        self.pos = np.ascontiguousarray(self.pos, dtype=np.float64)
        self.u = np.ascontiguousarray(self.u, dtype=np.float64)
        self.mass = np.ascontiguousarray(self.mass, dtype=np.float64)
        self.validate()

    def validate(self) -> None:
        if self.pos.ndim != 2 or self.pos.shape[1] != 3:
            raise ValueError("pos must have shape (N, 3)")
        if self.u.shape != self.pos.shape:
            raise ValueError("u must have shape (N, 3)")
        n = self.pos.shape[0]
        if self.mass.ndim != 1 or self.mass.shape[0] != n:
            raise ValueError("mass must have shape (N,)")
        if self.charge.ndim != 1 or self.charge.shape[0] != n:
            raise ValueError("charge must have shape (N,)")

    def __len__(self) -> int:
        return self.pos.shape[0]

    def gamma(self) -> ArrayF:
        return np.sqrt(1.0 + np.sum(self.u * self.u, axis=1))

    def copy(self) -> "ParticleEnsemble":
        return ParticleEnsemble(
            charge=self.charge.copy(),
            pos=self.pos.copy(),
            u=self.u.copy(),
            mass=self.mass.copy(),
        )

    @classmethod
    def from_particles(cls, particles: Sequence[ChargedParticle]) -> "ParticleEnsemble":
        if not particles:
            empty = np.zeros((0, 3), dtype=np.float64)
            return cls(charge=np.zeros(0), pos=empty, u=empty.copy(), mass=np.zeros(0))
        return cls(
            charge=np.array([p.charge for p in particles], dtype=np.float64),
            pos=np.array([p.position.to_array() for p in particles], dtype=np.float64),
            u=np.array(
                [p.momentum.gamma_beta_vector().to_array() for p in particles],
                dtype=np.float64,
            ),
            mass=np.array([p.momentum.rest_mass() for p in particles], dtype=np.float64),
        )

    def to_particles(self) -> list[ChargedParticle]:
        gamma = self.gamma()
        out = []
        for i in range(len(self)):
            momentum = FourMomentum(
                float(gamma[i]), float(self.u[i, 0]), float(self.u[i, 1]), float(self.u[i, 2])
            ) * float(self.mass[i])
            out.append(
                ChargedParticle(
                    charge=float(self.charge[i]),
                    position=Vector3.from_array(self.pos[i]),
                    momentum=momentum,
                )
            )
        return out


def _broadcast_field(field: ArrayLike, n: int, name: str) -> ArrayF:
    f = np.asarray(field, dtype=np.float64)
    if f.shape == (3,):
        return np.broadcast_to(f, (n, 3))
    if f.shape != (n, 3):
        raise ValueError(f"{name} must have shape (3,) or (N, 3)")
    return f


def boris_push_ensemble(
    ensemble: ParticleEnsemble,
    electric: ArrayLike,
    magnetic: ArrayLike,
    dt: float,
) -> ParticleEnsemble:
    """Apply one Boris step to every particle; returns a new ensemble."""
    n = len(ensemble)
    e = _broadcast_field(electric, n, "electric")
    b = _broadcast_field(magnetic, n, "magnetic")

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        half_h = (0.5 * dt * ensemble.charge / ensemble.mass)[:, np.newaxis]
        u_minus = ensemble.u + e * half_h
        gamma_minus = np.sqrt(1.0 + np.sum(u_minus * u_minus, axis=1))
        t = b * (half_h / gamma_minus[:, np.newaxis])
        t2 = np.sum(t * t, axis=1)
        s = 2.0 * t / (1.0 + t2)[:, np.newaxis]
        u_prime = u_minus + np.cross(u_minus, t)
        u_plus = u_minus + np.cross(u_prime, s)
        u_new = u_plus + e * half_h
        gamma_new = np.sqrt(1.0 + np.sum(u_new * u_new, axis=1))
        pos_new = ensemble.pos + u_new * dt / gamma_new[:, np.newaxis]

    return ParticleEnsemble(
        charge=ensemble.charge.copy(),
        pos=pos_new,
        u=u_new,
        mass=ensemble.mass.copy(),
    )
