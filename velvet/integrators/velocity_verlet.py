"""Velocity Verlet integrator implementation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..properties import Forces
from .base import Integrator

if TYPE_CHECKING:
    from ..parallel import ParallelBackend
    from ..potentials import Potentials
    from ..system import System

logger = logging.getLogger(__name__)


class VelocityVerlet(Integrator):
    """
    Velocity Verlet integrator.

    The standard symplectic integrator for molecular dynamics with
    excellent energy conservation and time-reversibility.

    Algorithm:
        r(t + dt) = r(t) + dt * v(t) + 0.5 * dt^2 * a(t)
        a(t + dt) = F(r(t + dt)) / m
        v(t + dt) = v(t) + 0.5 * dt * (a(t) + a(t + dt))

    The acceleration from the previous step is cached, so each step costs
    one force evaluation.

    Attributes:
        dt: Integration timestep.
    """

    def __init__(self, timestep: float, backend: ParallelBackend | None = None) -> None:
        """
        Initialize Velocity Verlet integrator.

        Args:
            timestep: Integration timestep.
            backend: Parallel backend used for force evaluation.
        """
        if not timestep > 0.0:
            raise ValueError(f"timestep must be positive, got {timestep}")
        self._dt = float(timestep)
        self._forces = Forces(backend)
        self._accelerations: NDArray[np.floating] | None = None

    @property
    def timestep(self) -> float:
        """Return the integration timestep."""
        return self._dt

    @property
    def backend(self) -> ParallelBackend:
        """Return the parallel backend used for force evaluation."""
        return self._forces.backend

    @property
    def accelerations(self) -> NDArray[np.floating] | None:
        """Return the cached accelerations, or None before setup."""
        return self._accelerations

    def _accelerate(self, system: System, potentials: Potentials) -> NDArray[np.floating]:
        forces = self._forces.calculate(system, potentials)
        return forces / system.masses[:, np.newaxis]

    def setup(self, system: System, potentials: Potentials) -> None:
        """Compute and cache the initial accelerations."""
        system.validate()
        self._accelerations = self._accelerate(system, potentials)
        logger.debug("VelocityVerlet set up with dt=%g", self._dt)

    def integrate(self, system: System, potentials: Potentials) -> None:
        """
        Perform one Velocity Verlet step in place.

        Raises:
            RuntimeError: If called before :meth:`setup`.
        """
        if self._accelerations is None:
            raise RuntimeError("VelocityVerlet.setup() must be called before integrate()")

        dt = system.dtype.type(self._dt)
        accel = self._accelerations

        # Drift with the cached acceleration
        system.positions += dt * system.velocities + 0.5 * dt * dt * accel

        # Forces at the new positions
        accel_new = self._accelerate(system, potentials)

        # Kick with the average of old and new accelerations
        system.velocities += 0.5 * dt * (accel + accel_new)

        self._accelerations = accel_new

    def reset(self) -> None:
        """Return to the uninitialized state."""
        self._accelerations = None
