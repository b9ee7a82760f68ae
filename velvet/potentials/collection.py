"""Registry of the potentials acting in a system."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

import numpy as np
from numpy.typing import NDArray

from .base import (
    CoulombicPotential,
    CoulombicPotentialMeta,
    PairPotential,
    PairPotentialMeta,
    Restriction,
)

if TYPE_CHECKING:
    from ..system import Specie, System

logger = logging.getLogger(__name__)

P = TypeVar("P")
M = TypeVar("M")


@dataclass
class PotentialEntry(Generic[P, M]):
    """
    A registered potential with its metadata and eligible pairs.

    Attributes:
        potential: The potential function.
        meta: Where the potential applies.
        selection: Eligible index pairs ``(i, j)`` with ``i < j``, shape
            (n_pairs, 2), or None until the registry is set up.
    """

    potential: P
    meta: M
    selection: NDArray[np.integer] | None = None

    def __iter__(self) -> Iterator:
        yield self.potential
        yield self.meta
        yield self.selection


def select_pairs(
    system: System,
    species: tuple[Specie, Specie] | None,
    restriction: Restriction,
) -> NDArray[np.integer]:
    """
    Compute the index pairs a potential may act on.

    A pair ``(i, j)`` with ``i < j`` is eligible when the two particle
    species match ``species`` in either order (any pair when ``species`` is
    None) and the molecular restriction holds. Distances are not considered.

    Args:
        system: System providing types and molecule ids.
        species: Unordered specie pair, or None for every pair.
        restriction: Intra/intermolecular restriction.

    Returns:
        Integer array of shape (n_pairs, 2).
    """
    i_indices, j_indices = np.triu_indices(system.size, k=1)
    mask = np.ones(len(i_indices), dtype=bool)

    if species is not None:
        first, second = species
        # identity comparison against the type table, then broadcast per particle
        is_first = np.array([s == first for s in system.species], dtype=bool)
        is_second = np.array([s == second for s in system.species], dtype=bool)
        is_first = is_first[system.type_ids]
        is_second = is_second[system.type_ids]
        mask &= (is_first[i_indices] & is_second[j_indices]) | (
            is_second[i_indices] & is_first[j_indices]
        )

    if restriction is not Restriction.NONE:
        mask &= restriction.applies(
            system.molecules[i_indices], system.molecules[j_indices]
        )

    return np.column_stack((i_indices[mask], j_indices[mask])).astype(np.intp)


class Potentials:
    """
    Collection of the pair and coulombic potentials acting in a system.

    Entries are kept in registration order. Each entry carries a selection
    of eligible particle pairs, built by :meth:`setup` and refreshed by
    :meth:`update`; cutoffs are applied by the property evaluators because
    distances change every step.

    Example:
        potentials = Potentials()
        potentials.add_pair(
            LennardJones(epsilon=0.24, sigma=3.4),
            PairPotentialMeta((argon, argon), cutoff=8.5),
        )
        potentials.setup(system)

    Attributes:
        update_interval: Rebuild selections every this many steps in
            :meth:`update`; 0 means the topology is static.
    """

    def __init__(self, update_interval: int = 0) -> None:
        if update_interval < 0:
            raise ValueError(
                f"update_interval must be non-negative, got {update_interval}"
            )
        self.update_interval = update_interval
        self._pair_entries: list[PotentialEntry[PairPotential, PairPotentialMeta]] = []
        self._coulomb_entries: list[
            PotentialEntry[CoulombicPotential, CoulombicPotentialMeta]
        ] = []
        self._system: System | None = None

    def __len__(self) -> int:
        return len(self._pair_entries) + len(self._coulomb_entries)

    @property
    def is_setup(self) -> bool:
        """Check whether selections have been built for a system."""
        return self._system is not None

    def add_pair(self, potential: PairPotential, meta: PairPotentialMeta) -> None:
        """
        Register a pair potential.

        Args:
            potential: Pair potential function.
            meta: Specie pair, cutoff and restriction.

        Raises:
            TypeError: If the arguments have the wrong types.
        """
        if not isinstance(potential, PairPotential):
            raise TypeError(
                f"Expected a PairPotential, got {type(potential).__name__}"
            )
        if not isinstance(meta, PairPotentialMeta):
            raise TypeError(f"Expected PairPotentialMeta, got {type(meta).__name__}")
        entry = PotentialEntry(potential, meta)
        if self._system is not None:
            entry.selection = select_pairs(
                self._system, meta.species, meta.restriction
            )
        self._pair_entries.append(entry)
        logger.debug("Registered pair potential %r (cutoff %.3f)", potential, meta.cutoff)

    def add_coulombic(
        self, potential: CoulombicPotential, meta: CoulombicPotentialMeta
    ) -> None:
        """
        Register a coulombic potential.

        Args:
            potential: Coulombic potential function.
            meta: Cutoff, restriction and optional specie pair.

        Raises:
            TypeError: If the arguments have the wrong types.
        """
        if not isinstance(potential, CoulombicPotential):
            raise TypeError(
                f"Expected a CoulombicPotential, got {type(potential).__name__}"
            )
        if not isinstance(meta, CoulombicPotentialMeta):
            raise TypeError(
                f"Expected CoulombicPotentialMeta, got {type(meta).__name__}"
            )
        entry = PotentialEntry(potential, meta)
        if self._system is not None:
            entry.selection = select_pairs(
                self._system, meta.species, meta.restriction
            )
        self._coulomb_entries.append(entry)
        logger.debug(
            "Registered coulombic potential %r (cutoff %.3f)", potential, meta.cutoff
        )

    def setup(self, system: System) -> None:
        """
        Bind the registry to a system and build every selection.

        Args:
            system: System the potentials act on.

        Raises:
            ValueError: If the system fails validation.
        """
        system.validate()
        self._system = system
        self._rebuild(system)
        logger.info(
            "Potentials set up: %d pair, %d coulombic entries, %d eligible pairs",
            len(self._pair_entries),
            len(self._coulomb_entries),
            self.n_selected,
        )

    def update(self, system: System, step: int) -> None:
        """
        Refresh selections after a step when molecular membership can change.

        Args:
            system: System the potentials act on.
            step: Index of the step just completed.
        """
        if self.update_interval == 0 and self._system is system:
            return
        if self._system is not system:
            self.setup(system)
            return
        if step % self.update_interval == 0:
            self._rebuild(system)
            logger.debug("Selections rebuilt at step %d", step)

    def pairs(self) -> Iterator[tuple[PairPotential, PairPotentialMeta]]:
        """Iterate over registered pair potentials in registration order."""
        return ((e.potential, e.meta) for e in self._pair_entries)

    def coulombic(
        self,
    ) -> Iterator[tuple[CoulombicPotential, CoulombicPotentialMeta]]:
        """Iterate over registered coulombic potentials in registration order."""
        return ((e.potential, e.meta) for e in self._coulomb_entries)

    def pair_entries(
        self, system: System
    ) -> list[PotentialEntry[PairPotential, PairPotentialMeta]]:
        """Return pair entries with selections valid for ``system``."""
        self._ensure(system)
        return list(self._pair_entries)

    def coulombic_entries(
        self, system: System
    ) -> list[PotentialEntry[CoulombicPotential, CoulombicPotentialMeta]]:
        """Return coulombic entries with selections valid for ``system``."""
        self._ensure(system)
        return list(self._coulomb_entries)

    @property
    def n_selected(self) -> int:
        """Return the total number of selected pairs over all entries."""
        return sum(
            len(e.selection)
            for e in (*self._pair_entries, *self._coulomb_entries)
            if e.selection is not None
        )

    def _ensure(self, system: System) -> None:
        if self._system is not system:
            logger.debug("Potentials not set up for this system; setting up")
            self.setup(system)

    def _rebuild(self, system: System) -> None:
        for entry in (*self._pair_entries, *self._coulomb_entries):
            entry.selection = select_pairs(
                system, entry.meta.species, entry.meta.restriction
            )
