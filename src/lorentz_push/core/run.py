"""Fixed-step run loop with optional sampling."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from .fields import FieldSampler
from .integrators import Integrator
from .particle import ChargedParticle


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunResult:
    final_particle: ChargedParticle
    time: np.ndarray | None = None
    positions: np.ndarray | None = None
    momenta: np.ndarray | None = None
    samples: list[ChargedParticle] = field(default_factory=list)


def _is_finite(particle: ChargedParticle) -> bool:
    return all(math.isfinite(c) for c in particle.position) and all(
        math.isfinite(c) for c in particle.momentum
    )


def run(
    particle: ChargedParticle,
    fields: FieldSampler,
    integrator: Integrator,
    dt: float,
    steps: int,
    t0: float = 0.0,
    sample_every: int | None = None,
    callback: Callable[[int, ChargedParticle], None] | None = None,
) -> RunResult:
    if sample_every is not None and sample_every <= 0:
        raise ValueError("sample_every must be > 0")

    times: list[float] = []
    samples: list[ChargedParticle] = []

    def sample(step: int, p: ChargedParticle) -> None:
        times.append(t0 + step * dt)
        samples.append(p)

    logger.debug(
        "run start: integrator=%s dt=%g steps=%d t0=%g",
        getattr(integrator, "name", type(integrator).__name__),
        dt,
        steps,
        t0,
    )

    if sample_every is not None:
        sample(0, particle)

    warned = False
    for step in range(1, steps + 1):
        particle = integrator.step(particle, fields, t0 + (step - 1) * dt, dt)
        if not warned and not _is_finite(particle):
            logger.warning("non-finite particle state at step %d", step)
            warned = True
        if callback is not None:
            callback(step, particle)
        if sample_every is not None and step % sample_every == 0:
            sample(step, particle)

    logger.info("run finished after %d steps (t=%g)", steps, t0 + steps * dt)

    if sample_every is None:
        return RunResult(final_particle=particle)

    return RunResult(
        final_particle=particle,
        time=np.asarray(times, dtype=np.float64),
        positions=np.array([p.position.to_array() for p in samples], dtype=np.float64),
        momenta=np.array([p.momentum.to_array() for p in samples], dtype=np.float64),
        samples=samples,
    )
