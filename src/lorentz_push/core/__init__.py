"""Numerical core: value types, fields, pushers and the run loop."""

from .fields import CompositeField, FieldSampler, UniformField, zero_field  # noqa: F401
from .math import FourMomentum, Vector3  # noqa: F401
from .particle import ChargedParticle  # noqa: F401
