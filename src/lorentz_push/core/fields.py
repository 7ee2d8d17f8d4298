"""Field sampler interfaces and stock field models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np
from numpy.typing import ArrayLike

from .math.vector import Vector3


FieldSample = tuple[Vector3, Vector3]


class FieldSampler(Protocol):
    def __call__(self, position: Vector3, time: float) -> FieldSample:
        """Return (electric, magnetic) at a lab-frame position and time."""


def zero_field(position: Vector3, time: float) -> FieldSample:
    return Vector3.zero(), Vector3.zero()


@dataclass(frozen=True, slots=True)
class UniformField:
    electric: Vector3
    magnetic: Vector3

    def __call__(self, position: Vector3, time: float) -> FieldSample:
        return self.electric, self.magnetic


@dataclass(frozen=True, slots=True)
class CompositeField:
    """Superposition of several field samplers."""

    fields: Sequence[FieldSampler]

    def __call__(self, position: Vector3, time: float) -> FieldSample:
        electric = Vector3.zero()
        magnetic = Vector3.zero()
        for field in self.fields:
            e, b = field(position, time)
            electric = electric + e
            magnetic = magnetic + b
        return electric, magnetic


def field_from_arrays(electric: ArrayLike, magnetic: ArrayLike) -> UniformField:
    e = np.asarray(electric, dtype=np.float64)
    b = np.asarray(magnetic, dtype=np.float64)
    if e.shape != (3,):
        raise ValueError("electric must have shape (3,)")
    if b.shape != (3,):
        raise ValueError("magnetic must have shape (3,)")
    return UniformField(electric=Vector3.from_array(e), magnetic=Vector3.from_array(b))
