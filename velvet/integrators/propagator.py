"""Propagation of a system through one time step."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .thermostats import NullThermostat

if TYPE_CHECKING:
    from ..potentials import Potentials
    from ..system import System
    from .base import Integrator, Thermostat


class Propagator(ABC):
    """Advances a system by one step of some simulation algorithm."""

    @abstractmethod
    def setup(self, system: System, potentials: Potentials) -> None:
        ...

    @abstractmethod
    def propagate(self, system: System, potentials: Potentials) -> None:
        ...

    def close(self) -> None:
        """Release resources held by the propagator."""
        pass


class MolecularDynamics(Propagator):
    """
    Molecular dynamics: an integrator wrapped by a thermostat.

    Each step runs ``thermostat.pre_integrate``, ``integrator.integrate``
    and ``thermostat.post_integrate`` in that order.

    Attributes:
        integrator: Time integration algorithm.
        thermostat: Temperature control; :class:`NullThermostat` if omitted.
    """

    def __init__(
        self, integrator: Integrator, thermostat: Thermostat | None = None
    ) -> None:
        self.integrator = integrator
        self.thermostat = thermostat if thermostat is not None else NullThermostat()

    @property
    def timestep(self) -> float:
        """Return the integration timestep."""
        return self.integrator.timestep

    def setup(self, system: System, potentials: Potentials) -> None:
        """Set up the integrator and thermostat against the initial state."""
        self.integrator.setup(system, potentials)
        self.thermostat.setup(system)

    def propagate(self, system: System, potentials: Potentials) -> None:
        """Advance the system by one thermostatted step."""
        self.thermostat.pre_integrate(system)
        self.integrator.integrate(system, potentials)
        self.thermostat.post_integrate(system)

    def close(self) -> None:
        """Shut down the integrator's parallel backend."""
        backend = getattr(self.integrator, "backend", None)
        if backend is not None:
            backend.close()
