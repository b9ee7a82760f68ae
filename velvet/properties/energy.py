"""Energy evaluators."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ..parallel import get_backend
from .base import IntrinsicProperty, Property
from .kernels import fan_out, pairs_within_cutoff

if TYPE_CHECKING:
    from ..parallel import ParallelBackend
    from ..potentials import Potentials
    from ..system import System


def _pair_kernel(system, potential, meta, selection) -> np.floating:
    _, _, _, r = pairs_within_cutoff(system, selection, meta.cutoff)
    return np.sum(potential.energy(r), dtype=system.dtype)


def _coulomb_kernel(system, potential, meta, selection) -> np.floating:
    i, j, _, r = pairs_within_cutoff(system, selection, meta.cutoff)
    charges = system.charges
    return np.sum(potential.energy(charges[i], charges[j], r), dtype=system.dtype)


def _sum(system: System, partials: list[np.floating]) -> np.floating:
    return np.sum(np.asarray(partials, dtype=system.dtype), dtype=system.dtype)


class _EnergyProperty(Property):
    """Shared plumbing for the potential energy evaluators."""

    def __init__(self, backend: ParallelBackend | None = None) -> None:
        self._backend = backend

    @property
    def backend(self) -> ParallelBackend:
        return get_backend(self._backend)


class PairEnergy(_EnergyProperty):
    """Potential energy due to pairwise potentials."""

    @property
    def name(self) -> str:
        return "pair_energy"

    def calculate(self, system: System, potentials: Potentials) -> np.floating:
        partials = fan_out(
            system, potentials.pair_entries(system), self.backend, _pair_kernel
        )
        return _sum(system, partials)


class CoulombicEnergy(_EnergyProperty):
    """Potential energy due to coulombic potentials."""

    @property
    def name(self) -> str:
        return "coulombic_energy"

    def calculate(self, system: System, potentials: Potentials) -> np.floating:
        partials = fan_out(
            system,
            potentials.coulombic_entries(system),
            self.backend,
            _coulomb_kernel,
        )
        return _sum(system, partials)


class PotentialEnergy(_EnergyProperty):
    """Potential energy of the whole system: pair plus coulombic."""

    @property
    def name(self) -> str:
        return "potential_energy"

    def calculate(self, system: System, potentials: Potentials) -> np.floating:
        pair = PairEnergy(self._backend).calculate(system, potentials)
        coulombic = CoulombicEnergy(self._backend).calculate(system, potentials)
        return pair + coulombic


class KineticEnergy(IntrinsicProperty):
    """Kinetic energy of the whole system: sum(0.5 * m * v^2)."""

    @property
    def name(self) -> str:
        return "kinetic_energy"

    def calculate_intrinsic(self, system: System) -> np.floating:
        return np.sum(
            0.5 * system.masses[:, np.newaxis] * system.velocities**2,
            dtype=system.dtype,
        )


class TotalEnergy(_EnergyProperty):
    """Sum of kinetic and potential energy, recomputed on every call."""

    @property
    def name(self) -> str:
        return "total_energy"

    def calculate(self, system: System, potentials: Potentials) -> np.floating:
        kinetic = KineticEnergy().calculate(system, potentials)
        potential = PotentialEnergy(self._backend).calculate(system, potentials)
        return kinetic + potential
