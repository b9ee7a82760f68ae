"""Simulation engine implementations."""

from .reporters import LoggingReporter, PropertyReporter, Reporter, ReporterGroup
from .simulation import Simulation, SimulationError

__all__ = [
    "Simulation",
    "SimulationError",
    "Reporter",
    "ReporterGroup",
    "PropertyReporter",
    "LoggingReporter",
]
