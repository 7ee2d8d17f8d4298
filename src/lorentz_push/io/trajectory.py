"""Trajectory text and sample archive I/O.

Text layout: one line per step, "x y z" separated by single spaces.
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import IO

import numpy as np
from numpy.typing import ArrayLike

from ..core.math.vector import Vector3
from ..core.run import RunResult


FLOAT_FMT = "%.17g"


def format_position(v: Vector3) -> str:
    return " ".join(FLOAT_FMT % c for c in v)


def write_trajectory(target: str | Path | IO[str], positions: ArrayLike) -> None:
    pos = np.asarray(positions, dtype=np.float64)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError("positions must have shape (K, 3)")
    if isinstance(target, (str, Path)):
        target = str(target)
    np.savetxt(target, pos, fmt=FLOAT_FMT, delimiter=" ")


def read_trajectory(path: str | Path) -> np.ndarray:
    with warnings.catch_warnings():
        # empty files return an empty array
        warnings.simplefilter("ignore", UserWarning)
        pos = np.loadtxt(path, dtype=np.float64, ndmin=2)
    if pos.size == 0:
        return np.zeros((0, 3), dtype=np.float64)
    if pos.shape[1] != 3:
        raise ValueError(f"trajectory must have 3 columns, got {pos.shape[1]}")
    return pos


def save_samples(path: str | Path, result: RunResult) -> None:
    if result.time is None:
        raise ValueError("run result has no samples")
    np.savez_compressed(
        path,
        time=result.time,
        positions=result.positions,
        momenta=result.momenta,
    )
