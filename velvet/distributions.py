"""Initial velocity distributions."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from .constants import BOLTZMANN
from .properties import Temperature

if TYPE_CHECKING:
    from .system import System

logger = logging.getLogger(__name__)


class VelocityDistribution(ABC):
    """Shared behavior for algorithms that initialize particle velocities."""

    @abstractmethod
    def apply(self, system: System) -> None:
        """Assign velocities to every particle of ``system`` in place."""
        ...


class Boltzmann(VelocityDistribution):
    """
    Maxwell-Boltzmann velocity distribution.

    Each velocity component is drawn from a normal distribution with
    standard deviation sqrt(k_B * T / m), then every velocity is scaled so
    the instantaneous temperature is exactly the target. Every call draws a
    fresh sample.

    Attributes:
        target: Target temperature in K.
    """

    def __init__(self, target: float, seed: int | None = None) -> None:
        """
        Initialize the distribution.

        Args:
            target: Target temperature in K.
            seed: Random seed for reproducibility.
        """
        if target < 0.0:
            raise ValueError(f"Target temperature must be non-negative, got {target}")
        self.target = float(target)
        self._rng = np.random.default_rng(seed)

    def apply(self, system: System) -> None:
        """
        Sample velocities for ``system`` at the target temperature.

        Empty systems and a zero target get all-zero velocities without
        sampling.
        """
        if system.size < 1 or self.target == 0.0:
            system.velocities[...] = 0.0
            return

        sigma = np.sqrt(BOLTZMANN * self.target / system.masses)
        velocities = self._rng.standard_normal((system.size, 3)) * sigma[:, np.newaxis]
        system.velocities[...] = velocities

        realized = float(Temperature().calculate_intrinsic(system))
        system.velocities *= system.dtype.type(np.sqrt(self.target / realized))
        logger.debug(
            "Sampled velocities at %.3f K (raw draw %.3f K)", self.target, realized
        )
