"""Run a scenario JSON and optionally save the trajectory."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from . import __version__
from .core.diagnostics import energy_drift, mass_drift
from .core.run import run
from .io import load_scenario, save_samples, scenario_to_runtime, write_trajectory
from .io.trajectory import format_position


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lorentz-push")
    parser.add_argument("scenario", type=Path)
    parser.add_argument(
        "--trajectory",
        type=Path,
        default=None,
        help="write x y z for every step (overrides sampling.every)",
    )
    parser.add_argument("--out", type=Path, default=None, help="write sampled npz archive")
    parser.add_argument(
        "--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    parser.add_argument("--version", action="version", version=f"lorentz_push v{__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    defn = load_scenario(args.scenario)
    particle, fields, integrator, dt, steps, t0 = scenario_to_runtime(defn)
    sample_every = defn.get("sampling", {}).get("every")
    if args.trajectory is not None:
        if sample_every not in (None, 1):
            logger.info("--trajectory given, sampling every step instead of every %d", sample_every)
        sample_every = 1
    elif sample_every is None and args.out is not None:
        sample_every = 1
    logger.info("running %s with %s for %d steps", args.scenario, integrator.name, steps)

    result = run(particle, fields, integrator, dt, steps, t0=t0, sample_every=sample_every)
    final = result.final_particle

    print("steps:", steps)
    print("dt:", dt)
    print("sim time:", t0 + dt * steps)
    print("final position:", format_position(final.position))
    print("final energy:", final.total_energy())
    if result.samples:
        print("energy drift:", energy_drift(result.samples))
        print("mass drift:", mass_drift(result.samples))

    if args.trajectory is not None and result.positions is not None:
        write_trajectory(args.trajectory, result.positions)
        print("saved trajectory to:", args.trajectory)
    if args.out is not None and result.time is not None:
        save_samples(args.out, result)
        print("saved samples to:", args.out)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
