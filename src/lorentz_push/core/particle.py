"""Charged particle state and single-step pushers."""

from __future__ import annotations

from dataclasses import dataclass

from .fields import FieldSampler
from .math.four_momentum import FourMomentum
from .math.vector import Vector3, safe_divide, safe_sqrt


@dataclass(frozen=True, slots=True)
class ChargedParticle:
    """Instantaneous state of one relativistic point charge.

    Pushers never mutate the receiver; each returns a new particle carrying the
    same charge and rest mass.
    """
    charge: float
    position: Vector3
    momentum: FourMomentum

    @classmethod
    def from_velocity(
        cls, charge: float, mass: float, position: Vector3, velocity: Vector3
    ) -> "ChargedParticle":
        return cls(
            charge=charge,
            position=position,
            momentum=FourMomentum.from_mass_and_velocity(mass, velocity),
        )

    def total_energy(self) -> float:
        return self.momentum.rest_mass() * self.momentum.lorentz_factor()

    def boris_push(self, electric: Vector3, magnetic: Vector3, dt: float) -> "ChargedParticle":
        """Advance by dt with the relativistic Boris scheme in static fields."""
        q = self.charge
        m = self.momentum.rest_mass()
        h = safe_divide(q, m) * dt

        u = self.momentum.gamma_beta_vector()
        u_minus = u + electric * (0.5 * h)
        gamma_minus = safe_sqrt(1.0 + u_minus.squared())
        t = magnetic * safe_divide(0.5 * h, gamma_minus)
        s = t.divide(1.0 + t.squared()) * 2.0
        u_prime = u_minus + u_minus.cross(t)
        u_plus = u_minus + u_prime.cross(s)
        u_new = u_plus + electric * (0.5 * h)
        gamma_new = safe_sqrt(1.0 + u_new.squared())

        position = self.position + (u_new * dt).divide(gamma_new)
        momentum = FourMomentum(gamma_new, u_new.x, u_new.y, u_new.z) * m
        return ChargedParticle(charge=q, position=position, momentum=momentum)

    def rk4_push(self, fields: FieldSampler, time: float, dt: float) -> "ChargedParticle":
        """Advance by dt with classic RK4 on (position, proper velocity).

        fields is sampled at the start, twice at the midpoint and at the end of
        the step.
        """
        q = self.charge
        m = self.momentum.rest_mass()
        qm = safe_divide(q, m)

        def derivative(x: Vector3, u: Vector3, t: float) -> tuple[Vector3, Vector3]:
            electric, magnetic = fields(x, t)
            v = u.divide(safe_sqrt(1.0 + u.squared()))
            return v, (electric + v.cross(magnetic)) * qm

        x0 = self.position
        u0 = self.momentum.gamma_beta_vector()
        half = 0.5 * dt

        k1x, k1u = derivative(x0, u0, time)
        k2x, k2u = derivative(x0 + k1x * half, u0 + k1u * half, time + half)
        k3x, k3u = derivative(x0 + k2x * half, u0 + k2u * half, time + half)
        k4x, k4u = derivative(x0 + k3x * dt, u0 + k3u * dt, time + dt)

        w = dt / 6.0
        x1 = x0 + (k1x + k2x * 2.0 + k3x * 2.0 + k4x) * w
        u1 = u0 + (k1u + k2u * 2.0 + k3u * 2.0 + k4u) * w
        momentum = FourMomentum.from_mass_and_gamma_beta(m, u1)
        return ChargedParticle(charge=q, position=x1, momentum=momentum)
