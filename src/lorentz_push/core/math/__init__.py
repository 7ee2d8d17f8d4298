"""Math utilities namespace."""

from .four_momentum import FourMomentum  # noqa: F401
from .vector import Vector3, safe_divide, safe_sqrt  # noqa: F401
