"""Base interfaces for integrators and thermostats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..potentials import Potentials
    from ..system import System


class Integrator(ABC):
    """
    Abstract base class for time integration algorithms.

    An integrator is a small state machine: :meth:`setup` must be called
    once against the initial system before the first :meth:`integrate`.
    """

    @abstractmethod
    def setup(self, system: System, potentials: Potentials) -> None:
        """
        Prepare the integrator for the initial state.

        Args:
            system: Initial system.
            potentials: Potentials acting in the system.
        """
        ...

    @abstractmethod
    def integrate(self, system: System, potentials: Potentials) -> None:
        """
        Advance the system in place by one time step.

        Args:
            system: Current system.
            potentials: Potentials acting in the system.

        Raises:
            RuntimeError: If called before :meth:`setup`.
        """
        ...

    @property
    @abstractmethod
    def timestep(self) -> float:
        """Return the integration timestep."""
        ...


class Thermostat(ABC):
    """
    Abstract base class for temperature control algorithms.

    A thermostat wraps each integration step: :meth:`pre_integrate` runs
    before the position update and :meth:`post_integrate` after the
    velocity update. :meth:`setup` must be called once before either hook.
    """

    def __init__(self) -> None:
        self._is_setup = False

    def setup(self, system: System) -> None:
        """
        Prepare the thermostat for the initial state.

        Args:
            system: Initial system.
        """
        self._is_setup = True

    @abstractmethod
    def pre_integrate(self, system: System) -> None:
        """Adjust velocities before the integration step."""
        ...

    @abstractmethod
    def post_integrate(self, system: System) -> None:
        """Adjust velocities after the integration step."""
        ...

    def _require_setup(self) -> None:
        if not self._is_setup:
            raise RuntimeError(
                f"{type(self).__name__}.setup() must be called before integration"
            )
