"""Scenario and trajectory I/O."""

from .scenario import load_scenario, save_scenario, scenario_to_runtime  # noqa: F401
from .trajectory import (  # noqa: F401
    format_position,
    read_trajectory,
    save_samples,
    write_trajectory,
)
