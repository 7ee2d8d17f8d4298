"""Particle diagnostics."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .math.vector import Vector3, safe_divide
from .particle import ChargedParticle


def kinetic_energy(particle: ChargedParticle) -> float:
    """Return m * (gamma - 1)."""
    m = particle.momentum.rest_mass()
    return m * (particle.momentum.lorentz_factor() - 1.0)


def energy_drift(particles: Sequence[ChargedParticle]) -> float:
    """Max relative deviation of total energy from the first sample."""
    if not particles:
        raise ValueError("cannot compute energy drift for empty trajectory")
    energy = np.array([p.total_energy() for p in particles], dtype=np.float64)
    return float(np.max(np.abs(energy - energy[0])) / abs(energy[0]))


def mass_drift(particles: Sequence[ChargedParticle]) -> float:
    """Max absolute deviation of rest mass from the first sample."""
    if not particles:
        raise ValueError("cannot compute mass drift for empty trajectory")
    mass = np.array([p.momentum.rest_mass() for p in particles], dtype=np.float64)
    return float(np.max(np.abs(mass - mass[0])))


def gyro_radius(particle: ChargedParticle, magnetic: Vector3) -> float:
    """Larmor radius m * |u_perp| / (|q| * |B|)."""
    u = particle.momentum.gamma_beta_vector()
    b_norm = magnetic.norm()
    u_par = magnetic * safe_divide(u.dot(magnetic), b_norm * b_norm)
    u_perp = u - u_par
    m = particle.momentum.rest_mass()
    return safe_divide(m * u_perp.norm(), abs(particle.charge) * b_norm)


def gyro_frequency(particle: ChargedParticle, magnetic: Vector3) -> float:
    """Lab-frame angular gyration frequency |q| * |B| / (m * gamma)."""
    m = particle.momentum.rest_mass()
    gamma = particle.momentum.lorentz_factor()
    return safe_divide(abs(particle.charge) * magnetic.norm(), m * gamma)
