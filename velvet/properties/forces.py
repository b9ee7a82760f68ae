"""Force evaluators."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..parallel import get_backend
from .base import Property
from .kernels import accumulate_forces, fan_out, pairs_within_cutoff

if TYPE_CHECKING:
    from ..parallel import ParallelBackend
    from ..potentials import Potentials
    from ..system import System


def _pair_kernel(system, potential, meta, selection) -> NDArray[np.floating]:
    i, j, dr, r = pairs_within_cutoff(system, selection, meta.cutoff)
    return accumulate_forces(system, i, j, dr, r, potential.force(r))


def _coulomb_kernel(system, potential, meta, selection) -> NDArray[np.floating]:
    i, j, dr, r = pairs_within_cutoff(system, selection, meta.cutoff)
    charges = system.charges
    return accumulate_forces(
        system, i, j, dr, r, potential.force(charges[i], charges[j], r)
    )


class _ForceProperty(Property):
    """Shared plumbing for the force evaluators."""

    def __init__(self, backend: ParallelBackend | None = None) -> None:
        """
        Args:
            backend: Parallel backend for pair fan-out. Defaults to the
                process-wide default backend.
        """
        self._backend = backend

    @property
    def backend(self) -> ParallelBackend:
        return get_backend(self._backend)

    def _reduce(
        self, system: System, partials: list[NDArray[np.floating]]
    ) -> NDArray[np.floating]:
        return self.backend.reduce_forces(partials, system.size, system.dtype)


class PairForces(_ForceProperty):
    """Force acting on each atom due to pairwise potentials."""

    @property
    def name(self) -> str:
        return "pair_forces"

    def calculate(
        self, system: System, potentials: Potentials
    ) -> NDArray[np.floating]:
        """
        Compute pair forces.

        Returns:
            Forces array of shape (N, 3).
        """
        backend = self.backend
        partials = fan_out(
            system, potentials.pair_entries(system), backend, _pair_kernel
        )
        return self._reduce(system, partials)


class CoulombicForces(_ForceProperty):
    """Force acting on each atom due to coulombic potentials."""

    @property
    def name(self) -> str:
        return "coulombic_forces"

    def calculate(
        self, system: System, potentials: Potentials
    ) -> NDArray[np.floating]:
        """
        Compute coulombic forces.

        Returns:
            Forces array of shape (N, 3).
        """
        backend = self.backend
        partials = fan_out(
            system, potentials.coulombic_entries(system), backend, _coulomb_kernel
        )
        return self._reduce(system, partials)


class Forces(_ForceProperty):
    """
    Total force acting on each atom in the system.

    For every eligible pair within its potential's cutoff the scalar force
    is projected along the minimum image direction from the second particle
    to the first; ``+f`` is accumulated on the first particle and ``-f``
    on the second.
    """

    @property
    def name(self) -> str:
        return "forces"

    def calculate(
        self, system: System, potentials: Potentials
    ) -> NDArray[np.floating]:
        """
        Compute pair plus coulombic forces.

        Returns:
            Forces array of shape (N, 3).
        """
        backend = self.backend
        partials = fan_out(
            system, potentials.pair_entries(system), backend, _pair_kernel
        )
        partials += fan_out(
            system, potentials.coulombic_entries(system), backend, _coulomb_kernel
        )
        return self._reduce(system, partials)
