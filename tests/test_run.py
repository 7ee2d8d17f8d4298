from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from lorentz_push.core.fields import UniformField, zero_field
from lorentz_push.core.integrators import BorisPusher, RungeKutta4
from lorentz_push.core.math import FourMomentum, Vector3
from lorentz_push.core.particle import ChargedParticle
from lorentz_push.core.run import run


def _particle() -> ChargedParticle:
    return ChargedParticle.from_velocity(1.0, 1.0, Vector3.zero(), Vector3(0.5, 0.0, 0.0))


class RecordingIntegrator:
    name = "recording"

    def __init__(self) -> None:
        self.times: list[float] = []

    def step(self, particle, fields, time, dt):
        self.times.append(time)
        return particle.rk4_push(fields, time, dt)


def test_run_without_sampling_returns_final_only() -> None:
    result = run(_particle(), zero_field, RungeKutta4(), 0.1, 10)
    assert result.time is None
    assert result.positions is None
    assert result.samples == []
    assert result.final_particle.position.x == pytest.approx(0.5, abs=1e-12)


def test_run_sampling_shapes() -> None:
    result = run(_particle(), zero_field, BorisPusher(), 0.1, 10, sample_every=2)
    assert result.time.shape == (6,)
    assert result.positions.shape == (6, 3)
    assert result.momenta.shape == (6, 4)
    assert np.allclose(result.time, np.arange(6) * 0.2)
    assert np.allclose(result.positions[:, 0], np.arange(6) * 0.1, atol=1e-12)
    assert result.samples[0] == _particle()
    assert result.samples[-1] == result.final_particle


def test_run_passes_step_start_times() -> None:
    integrator = RecordingIntegrator()
    run(_particle(), zero_field, integrator, 0.25, 4, t0=1.0)
    assert integrator.times == pytest.approx([1.0, 1.25, 1.5, 1.75])


def test_run_callback_called_every_step() -> None:
    seen: list[int] = []
    run(_particle(), zero_field, RungeKutta4(), 0.1, 5, callback=lambda step, p: seen.append(step))
    assert seen == [1, 2, 3, 4, 5]


def test_run_rejects_bad_sample_every() -> None:
    with pytest.raises(ValueError, match="sample_every must be > 0"):
        run(_particle(), zero_field, RungeKutta4(), 0.1, 5, sample_every=0)


def test_run_does_not_alter_input_particle() -> None:
    p = _particle()
    fields = UniformField(electric=Vector3.zero(), magnetic=Vector3(0.0, 0.0, 1.0))
    run(p, fields, BorisPusher(), 0.1, 20)
    assert p == _particle()


def test_run_warns_on_non_finite_state(caplog: pytest.LogCaptureFixture) -> None:
    p = ChargedParticle(1.0, Vector3.zero(), FourMomentum(0.0, 0.0, 0.0, 0.0))
    with caplog.at_level(logging.WARNING, logger="lorentz_push.core.run"):
        result = run(p, zero_field, BorisPusher(), 0.1, 3)
    assert math.isnan(result.final_particle.position.x)
    warnings = [r for r in caplog.records if "non-finite" in r.getMessage()]
    assert len(warnings) == 1
