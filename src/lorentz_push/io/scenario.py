"""Scenario I/O and adapters."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

import numpy as np

from ..core.fields import CompositeField, FieldSampler, UniformField
from ..core.integrators import INTEGRATORS, Integrator, integrator_from_name
from ..core.math.four_momentum import FourMomentum
from ..core.math.vector import Vector3
from ..core.particle import ChargedParticle


logger = logging.getLogger(__name__)

ScenarioDefinition = dict[str, Any]

FIELD_KINDS = {"uniform"}


def load_scenario(path: str | Path) -> ScenarioDefinition:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    logger.debug("loaded scenario from %s", path)
    return _validate_scenario_v1(data)


def save_scenario(path: str | Path, defn: ScenarioDefinition) -> None:
    Path(path).write_text(
        json.dumps(defn, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def scenario_to_runtime(
    defn: ScenarioDefinition,
) -> tuple[ChargedParticle, FieldSampler, Integrator, float, int, float]:
    sim = defn["simulation"]
    dt = float(sim["dt"])
    steps = int(sim["steps"])
    t0 = float(sim.get("t0", 0.0))
    integrator = integrator_from_name(sim["integrator"])

    p = defn["particle"]
    mass = float(p["mass"])
    position = Vector3.from_array(p.get("position", [0.0, 0.0, 0.0]))
    if "velocity" in p:
        momentum = FourMomentum.from_mass_and_velocity(mass, Vector3.from_array(p["velocity"]))
    else:
        momentum = FourMomentum.from_mass_and_gamma_beta(mass, Vector3.from_array(p["gamma_beta"]))
    particle = ChargedParticle(charge=float(p["charge"]), position=position, momentum=momentum)

    fields: list[FieldSampler] = []
    for entry in defn.get("fields", []):
        if "uniform" in entry:
            cfg = entry["uniform"]
            fields.append(
                UniformField(
                    electric=Vector3.from_array(cfg.get("electric", [0.0, 0.0, 0.0])),
                    magnetic=Vector3.from_array(cfg.get("magnetic", [0.0, 0.0, 0.0])),
                )
            )
        else:
            raise ValueError(f"unknown field entry: {entry}")

    sampler: FieldSampler = fields[0] if len(fields) == 1 else CompositeField(fields=fields)
    return particle, sampler, integrator, dt, steps, t0


def _require(obj: dict[str, Any], key: str, ctx: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing required field: {ctx}.{key}")
    return obj[key]


def _validate_vector(value: Any, ctx: str) -> np.ndarray:
    try:
        a = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{ctx} must be a list of 3 numbers") from exc
    if a.shape != (3,):
        raise ValueError(f"{ctx} must have length 3")
    if not np.all(np.isfinite(a)):
        raise ValueError(f"{ctx} must be finite")
    return a


def _validate_number(value: Any, ctx: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{ctx} must be a finite number")
    if not math.isfinite(value):
        raise ValueError(f"{ctx} must be a finite number")
    return float(value)


def _validate_scenario_v1(data: dict[str, Any]) -> ScenarioDefinition:
    if not isinstance(data, dict):
        raise ValueError("scenario must be a JSON object")
    if data.get("schema_version") != 1:
        raise ValueError("schema_version must be 1")

    sim = _require(data, "simulation", "scenario")
    _require(sim, "dt", "simulation")
    _require(sim, "steps", "simulation")
    _require(sim, "integrator", "simulation")
    if _validate_number(sim["dt"], "simulation.dt") <= 0.0:
        raise ValueError("simulation.dt must be > 0")
    if sim["steps"] < 0:
        raise ValueError("simulation.steps must be >= 0")
    if sim["integrator"] not in INTEGRATORS:
        raise ValueError("simulation.integrator invalid")

    if "sampling" in data:
        every = data["sampling"].get("every")
        if every is not None and every <= 0:
            raise ValueError("sampling.every must be > 0")

    p = _require(data, "particle", "scenario")
    _validate_number(_require(p, "charge", "particle"), "particle.charge")
    mass = _validate_number(_require(p, "mass", "particle"), "particle.mass")
    if mass <= 0.0:
        raise ValueError("particle.mass must be > 0")
    if "position" in p:
        _validate_vector(p["position"], "particle.position")
    has_v = "velocity" in p
    has_u = "gamma_beta" in p
    if has_v == has_u:
        raise ValueError("particle requires exactly one of velocity or gamma_beta")
    if has_v:
        v = _validate_vector(p["velocity"], "particle.velocity")
        if float(np.dot(v, v)) >= 1.0:
            raise ValueError("particle.velocity must have magnitude < 1")
    else:
        _validate_vector(p["gamma_beta"], "particle.gamma_beta")

    fields = data.get("fields", [])
    if not isinstance(fields, list):
        raise ValueError("fields must be a list")
    for entry in fields:
        if not isinstance(entry, dict) or len(entry) != 1:
            raise ValueError("each field entry must be an object with one key")
        key = next(iter(entry))
        cfg = entry[key]
        if key not in FIELD_KINDS:
            raise ValueError(f"unknown field type: {key}")
        if not isinstance(cfg, dict):
            raise ValueError(f"fields.{key} must be an object")
        if "electric" in cfg:
            _validate_vector(cfg["electric"], f"fields.{key}.electric")
        if "magnetic" in cfg:
            _validate_vector(cfg["magnetic"], f"fields.{key}.magnetic")

    return data
