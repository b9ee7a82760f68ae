"""Instantaneous temperature."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ..constants import BOLTZMANN
from .base import IntrinsicProperty
from .energy import KineticEnergy

if TYPE_CHECKING:
    from ..system import System


class Temperature(IntrinsicProperty):
    """
    Instantaneous temperature of the system.

    Uses equipartition over 3N degrees of freedom:
    T = 2 * KE / (3 * N * k_B). Returns 0 for an empty system.
    """

    @property
    def name(self) -> str:
        return "temperature"

    def calculate_intrinsic(self, system: System) -> np.floating:
        if system.size == 0:
            return system.dtype.type(0.0)
        kinetic = KineticEnergy().calculate_intrinsic(system)
        n_dof = 3 * system.size
        return system.dtype.type(2.0 * kinetic / (n_dof * BOLTZMANN))
