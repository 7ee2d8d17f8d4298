"""Integrator interfaces and implementations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..fields import FieldSampler
from ..particle import ChargedParticle


class Integrator(Protocol):
    name: str

    def step(
        self, particle: ChargedParticle, fields: FieldSampler, time: float, dt: float
    ) -> ChargedParticle:
        """Return the particle advanced by one fixed step (non-mutating)."""


@dataclass(frozen=True, slots=True)
class BorisPusher:
    """Boris push with fields sampled once at the start-of-step position."""

    name: str = "boris"

    def step(
        self, particle: ChargedParticle, fields: FieldSampler, time: float, dt: float
    ) -> ChargedParticle:
        electric, magnetic = fields(particle.position, time)
        return particle.boris_push(electric, magnetic, dt)


@dataclass(frozen=True, slots=True)
class RungeKutta4:
    name: str = "rk4"

    def step(
        self, particle: ChargedParticle, fields: FieldSampler, time: float, dt: float
    ) -> ChargedParticle:
        return particle.rk4_push(fields, time, dt)


INTEGRATORS: dict[str, type] = {
    "boris": BorisPusher,
    "rk4": RungeKutta4,
}


def integrator_from_name(name: str) -> Integrator:
    if name not in INTEGRATORS:
        raise ValueError(f"unsupported integrator: {name}")
    return INTEGRATORS[name]()
