"""Integrator, thermostat and propagator implementations."""

from .base import Integrator, Thermostat
from .propagator import MolecularDynamics, Propagator
from .thermostats import Berendsen, NoseHoover, NullThermostat
from .velocity_verlet import VelocityVerlet

__all__ = [
    # Base classes
    "Integrator",
    "Thermostat",
    "Propagator",
    # Integrators
    "VelocityVerlet",
    # Thermostats
    "NullThermostat",
    "Berendsen",
    "NoseHoover",
    # Propagators
    "MolecularDynamics",
]
