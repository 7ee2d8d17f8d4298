"""Relativistic charged-particle pushers (Boris and RK4) in natural units."""

__version__ = "0.1.0"
