"""Thermostat implementations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from ..constants import BOLTZMANN
from ..properties import KineticEnergy, Temperature
from .base import Thermostat

if TYPE_CHECKING:
    from ..system import System

logger = logging.getLogger(__name__)


class NullThermostat(Thermostat):
    """Placeholder thermostat which applies no temperature control."""

    def pre_integrate(self, system: System) -> None:
        self._require_setup()

    def post_integrate(self, system: System) -> None:
        self._require_setup()


class Berendsen(Thermostat):
    """
    Berendsen weak-coupling thermostat.

    Scales velocities toward target temperature with a characteristic
    relaxation time. Does not produce correct canonical ensemble but
    is useful for equilibration due to gentle temperature control.

    dT/dt = (T_target - T) / tau

    Attributes:
        target: Target temperature in K.
        tau: Coupling time constant.
        timestep: Integration timestep.
    """

    def __init__(self, target: float, tau: float, timestep: float = 1.0) -> None:
        """
        Initialize Berendsen thermostat.

        Args:
            target: Target temperature in K.
            tau: Coupling time constant (same units as ``timestep``).
            timestep: Integration timestep. With the default of 1.0,
                ``tau`` is measured in steps.
        """
        super().__init__()
        if not tau > 0.0:
            raise ValueError(f"tau must be positive, got {tau}")
        if not timestep > 0.0:
            raise ValueError(f"timestep must be positive, got {timestep}")
        self.target = float(target)
        self.tau = float(tau)
        self.timestep = float(timestep)

    def pre_integrate(self, system: System) -> None:
        self._require_setup()

    def post_integrate(self, system: System) -> None:
        """
        Apply Berendsen thermostat coupling.

        lambda = sqrt(1 + dt/tau * (T_target/T - 1))
        """
        self._require_setup()
        current = float(Temperature().calculate_intrinsic(system))

        # Can't rescale from zero temperature
        if current < 1e-10:
            return

        scale_sq = 1.0 + (self.timestep / self.tau) * (self.target / current - 1.0)
        if scale_sq < 0:
            scale_sq = 0.0

        system.velocities *= system.dtype.type(np.sqrt(scale_sq))


class NoseHoover(Thermostat):
    """
    Nosé-Hoover thermostat.

    Extended system thermostat that couples the particles to a friction
    coordinate ``xi`` with thermal inertia

        Q = 3 * N * k_B * T_target * tau^2

    The friction evolves as ``xi_dot = (2 * KE - 3 * N * k_B * T_target) / Q``
    and damps the velocities through ``exp(-xi * dt / 2)`` in each half
    step. Both ``xi`` and ``xi_dot`` persist across steps and are exposed
    through :meth:`checkpoint` / :meth:`restore`.

    Attributes:
        target: Target temperature in K.
        tau: Characteristic relaxation time.
        timestep: Integration timestep.
    """

    def __init__(self, target: float, tau: float, timestep: float) -> None:
        """
        Initialize Nosé-Hoover thermostat.

        Args:
            target: Target temperature in K.
            tau: Characteristic relaxation time.
            timestep: Integration timestep.
        """
        super().__init__()
        if not target > 0.0:
            raise ValueError(f"target must be positive, got {target}")
        if not tau > 0.0:
            raise ValueError(f"tau must be positive, got {tau}")
        if not timestep > 0.0:
            raise ValueError(f"timestep must be positive, got {timestep}")
        self.target = float(target)
        self.tau = float(tau)
        self.timestep = float(timestep)

        self.xi = 0.0
        self.xi_dot = 0.0
        self._q: float | None = None
        self._n_dof: int | None = None

    @property
    def thermal_inertia(self) -> float | None:
        """Return Q, or None before setup."""
        return self._q

    def setup(self, system: System) -> None:
        """Derive the thermal inertia from the particle count."""
        if system.size == 0:
            raise ValueError("NoseHoover requires a system with particles")
        self._n_dof = 3 * system.size
        self._q = self._n_dof * BOLTZMANN * self.target * self.tau**2
        self.xi = 0.0
        self.xi_dot = 0.0
        super().setup(system)
        logger.debug("NoseHoover set up with Q=%g", self._q)

    def _friction_rate(self, system: System) -> float:
        kinetic = float(KineticEnergy().calculate_intrinsic(system))
        return (2.0 * kinetic - self._n_dof * BOLTZMANN * self.target) / self._q

    def _damp(self, system: System) -> None:
        scale = np.exp(-0.5 * self.xi * self.timestep)
        system.velocities *= system.dtype.type(scale)

    def pre_integrate(self, system: System) -> None:
        """Advance ``xi`` half a step, then damp velocities."""
        self._require_setup()
        self.xi_dot = self._friction_rate(system)
        self.xi += 0.5 * self.timestep * self.xi_dot
        self._damp(system)

    def post_integrate(self, system: System) -> None:
        """Damp velocities, then advance ``xi`` the second half step."""
        self._require_setup()
        self._damp(system)
        self.xi_dot = self._friction_rate(system)
        self.xi += 0.5 * self.timestep * self.xi_dot

    def checkpoint(self) -> dict[str, Any]:
        """Return the persistent thermostat state."""
        return {"xi": self.xi, "xi_dot": self.xi_dot, "q": self._q, "n_dof": self._n_dof}

    def restore(self, state: dict[str, Any]) -> None:
        """Restore state produced by :meth:`checkpoint`."""
        self.xi = float(state["xi"])
        self.xi_dot = float(state["xi_dot"])
        self._q = state["q"]
        self._n_dof = state["n_dof"]
        self._is_setup = self._q is not None
