from __future__ import annotations

import math

import numpy as np
import pytest

from lorentz_push.core.fields import UniformField, zero_field
from lorentz_push.core.math import FourMomentum, Vector3
from lorentz_push.core.particle import ChargedParticle


def _particle(
    velocity: Vector3,
    charge: float = 1.0,
    mass: float = 1.0,
    position: Vector3 | None = None,
) -> ChargedParticle:
    return ChargedParticle.from_velocity(
        charge=charge,
        mass=mass,
        position=position if position is not None else Vector3.zero(),
        velocity=velocity,
    )


def _gyration_start(u: float) -> ChargedParticle:
    # q = m = 1 in B = z-hat: u(t) = u (cos wt, -sin wt, 0), w = 1 / gamma
    return ChargedParticle(
        charge=1.0,
        position=Vector3.zero(),
        momentum=FourMomentum.from_mass_and_gamma_beta(1.0, Vector3(u, 0.0, 0.0)),
    )


def _gyration_exact(u: float, t: float) -> tuple[np.ndarray, np.ndarray]:
    w = 1.0 / math.sqrt(1.0 + u * u)
    pos = u * np.array([math.sin(w * t), math.cos(w * t) - 1.0, 0.0])
    mom = u * np.array([math.cos(w * t), -math.sin(w * t), 0.0])
    return pos, mom


MAGNETIC_Z = Vector3(0.0, 0.0, 1.0)


def test_rk4_zero_field_is_uniform_motion() -> None:
    p = _particle(Vector3(0.5, 0.0, 0.0))
    out = p.rk4_push(zero_field, 0.0, 0.1)

    assert out.position.x == pytest.approx(0.05, abs=1e-12)
    assert out.position.y == 0.0
    assert out.position.z == 0.0
    for a, b in zip(out.momentum, p.momentum):
        assert a == pytest.approx(b, abs=1e-12)


def test_boris_zero_field_is_uniform_motion() -> None:
    p = _particle(Vector3(0.5, 0.0, 0.0))
    out = p.boris_push(Vector3.zero(), Vector3.zero(), 0.1)

    assert out.position.x == pytest.approx(0.05, abs=1e-12)
    for a, b in zip(out.momentum, p.momentum):
        assert a == pytest.approx(b, abs=1e-12)


def test_boris_pure_electric_step_matches_hand_calculation() -> None:
    p = _particle(Vector3.zero())
    dt = 0.1
    out = p.boris_push(Vector3(1.0, 0.0, 0.0), Vector3.zero(), dt)

    u = out.momentum.gamma_beta_vector()
    assert u.x == pytest.approx(0.1, rel=1e-12)
    assert out.position.x == pytest.approx(0.1 * dt / math.sqrt(1.01), rel=1e-12)


def test_boris_conserves_energy_in_magnetic_field() -> None:
    p = _particle(Vector3(0.6, 0.2, 0.3), charge=-2.0, mass=1.5)
    magnetic = Vector3(0.3, -0.5, 2.0)
    mass0 = p.momentum.rest_mass()
    gamma0 = p.momentum.lorentz_factor()

    for _ in range(10000):
        p = p.boris_push(Vector3.zero(), magnetic, 0.05)

    assert p.momentum.rest_mass() == pytest.approx(mass0, abs=1e-9)
    assert p.momentum.lorentz_factor() == pytest.approx(gamma0, abs=1e-9)


def test_boris_gyration_stays_on_circle() -> None:
    u = 1.0
    p = _gyration_start(u)
    for _ in range(2000):
        p = p.boris_push(Vector3.zero(), MAGNETIC_Z, 0.01)
    assert p.momentum.gamma_beta_vector().norm() == pytest.approx(u, abs=1e-9)


@pytest.mark.parametrize("pusher", ["boris", "rk4"])
def test_charge_and_mass_invariance(pusher: str) -> None:
    p = _particle(Vector3(0.2, -0.7, 0.1), charge=3.0, mass=0.25)
    fields = UniformField(electric=Vector3(0.4, 1.0, -2.0), magnetic=Vector3(1.0, 0.5, 0.2))
    mass0 = p.momentum.rest_mass()

    t = 0.0
    for _ in range(100):
        if pusher == "boris":
            p_next = p.boris_push(fields.electric, fields.magnetic, 0.01)
        else:
            p_next = p.rk4_push(fields, t, 0.01)
        assert p_next.charge == p.charge
        assert p_next.momentum.rest_mass() == pytest.approx(mass0, abs=1e-9)
        p = p_next
        t += 0.01


def test_rk4_samples_fields_at_stage_times() -> None:
    calls: list[tuple[Vector3, float]] = []

    def sampler(position: Vector3, time: float) -> tuple[Vector3, Vector3]:
        calls.append((position, time))
        return Vector3.zero(), Vector3.zero()

    p = _particle(Vector3(0.5, 0.0, 0.0), position=Vector3(1.0, 2.0, 3.0))
    p.rk4_push(sampler, 2.0, 0.2)

    assert [t for _, t in calls] == pytest.approx([2.0, 2.1, 2.1, 2.2])
    assert calls[0][0] == Vector3(1.0, 2.0, 3.0)
    assert calls[1][0].x == pytest.approx(1.05, abs=1e-12)
    assert calls[3][0].x == pytest.approx(1.1, abs=1e-12)


def test_rk4_tracks_time_dependent_field() -> None:
    # E_x(t) = t gives u_x(t) = t^2 / 2; with no B field RK4 reduces to
    # Simpson quadrature, exact for cubics in t.
    def sampler(position: Vector3, time: float) -> tuple[Vector3, Vector3]:
        return Vector3(time, 0.0, 0.0), Vector3.zero()

    p = _particle(Vector3.zero())
    t = 0.0
    dt = 0.1
    for _ in range(10):
        p = p.rk4_push(sampler, t, dt)
        t += dt
    assert p.momentum.gamma_beta_vector().x == pytest.approx(0.5, rel=1e-12)


def test_rk4_hyperbolic_motion_in_constant_electric_field() -> None:
    p = _particle(Vector3.zero())
    fields = UniformField(electric=Vector3(1.0, 0.0, 0.0), magnetic=Vector3.zero())
    dt = 0.05
    t = 0.0
    for _ in range(40):
        p = p.rk4_push(fields, t, dt)
        t += dt

    assert p.momentum.gamma_beta_vector().x == pytest.approx(t, rel=1e-12)
    assert p.position.x == pytest.approx(math.sqrt(1.0 + t * t) - 1.0, abs=1e-8)


def _rk4_position_error(u: float, steps: int) -> float:
    gamma = math.sqrt(1.0 + u * u)
    period = 2.0 * math.pi * gamma
    dt = period / steps
    fields = UniformField(electric=Vector3.zero(), magnetic=MAGNETIC_Z)
    p = _gyration_start(u)
    for n in range(steps):
        p = p.rk4_push(fields, n * dt, dt)
    exact, _ = _gyration_exact(u, period)
    return float(np.linalg.norm(p.position.to_array() - exact))


def _boris_momentum_error(u: float, steps: int) -> float:
    gamma = math.sqrt(1.0 + u * u)
    period = 2.0 * math.pi * gamma
    dt = period / steps
    p = _gyration_start(u)
    for _ in range(steps):
        p = p.boris_push(Vector3.zero(), MAGNETIC_Z, dt)
    _, exact = _gyration_exact(u, period)
    return float(np.linalg.norm(p.momentum.gamma_beta_vector().to_array() - exact))


def test_rk4_is_fourth_order() -> None:
    coarse = _rk4_position_error(1.0, 40)
    fine = _rk4_position_error(1.0, 80)
    assert 12.0 < coarse / fine < 20.0


def test_boris_is_second_order() -> None:
    coarse = _boris_momentum_error(1.0, 40)
    fine = _boris_momentum_error(1.0, 80)
    assert 3.5 < coarse / fine < 4.5


def test_pushers_do_not_mutate_input() -> None:
    p = _particle(Vector3(0.1, 0.2, 0.3))
    before = (p.charge, p.position, p.momentum)
    p.boris_push(Vector3(1.0, 0.0, 0.0), MAGNETIC_Z, 0.1)
    p.rk4_push(UniformField(Vector3(1.0, 0.0, 0.0), MAGNETIC_Z), 0.0, 0.1)
    assert (p.charge, p.position, p.momentum) == before


def test_zero_mass_propagates_nan() -> None:
    p = ChargedParticle(charge=1.0, position=Vector3.zero(), momentum=FourMomentum(0.0, 0.0, 0.0, 0.0))
    out = p.boris_push(Vector3(1.0, 0.0, 0.0), MAGNETIC_Z, 0.1)
    assert math.isnan(out.position.x)
    out = p.rk4_push(zero_field, 0.0, 0.1)
    assert math.isnan(out.position.x)


def test_total_energy_is_mass_times_gamma() -> None:
    p = _particle(Vector3(0.6, 0.0, 0.0), mass=2.0)
    assert p.total_energy() == pytest.approx(2.5, rel=1e-12)
