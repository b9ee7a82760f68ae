"""Base interfaces and metadata for interatomic potentials."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..system.species import Specie


class Restriction(Enum):
    """Molecular restriction applied to a potential."""

    NONE = "none"
    INTERMOLECULAR = "intermolecular"
    INTRAMOLECULAR = "intramolecular"

    def applies(
        self, molecule_i: ArrayLike, molecule_j: ArrayLike
    ) -> NDArray[np.bool_]:
        """
        Evaluate the restriction for pairs of molecule ids.

        Args:
            molecule_i: Molecule ids of the first particles.
            molecule_j: Molecule ids of the second particles.

        Returns:
            Boolean mask, True where the potential may act.
        """
        molecule_i = np.asarray(molecule_i)
        molecule_j = np.asarray(molecule_j)
        if self is Restriction.INTERMOLECULAR:
            return molecule_i != molecule_j
        if self is Restriction.INTRAMOLECULAR:
            return molecule_i == molecule_j
        return np.ones(np.broadcast(molecule_i, molecule_j).shape, dtype=bool)


class PairPotential(ABC):
    """
    Shared behavior for pair potentials.

    Both methods accept a scalar or an array of distances and must be pure.
    ``force`` returns the scalar force along the line of centers, -dV/dr.
    """

    @abstractmethod
    def energy(self, r: ArrayLike) -> NDArray[np.floating]:
        """Return the potential energy at separation ``r``."""
        ...

    @abstractmethod
    def force(self, r: ArrayLike) -> NDArray[np.floating]:
        """Return the force magnitude at separation ``r``."""
        ...


class CoulombicPotential(ABC):
    """
    Shared behavior for charge-charge potentials.

    Charges and distances may be scalars or index-aligned arrays.
    """

    @abstractmethod
    def energy(
        self, qi: ArrayLike, qj: ArrayLike, r: ArrayLike
    ) -> NDArray[np.floating]:
        """Return the electrostatic energy of charges ``qi``, ``qj`` at ``r``."""
        ...

    @abstractmethod
    def force(
        self, qi: ArrayLike, qj: ArrayLike, r: ArrayLike
    ) -> NDArray[np.floating]:
        """Return the force magnitude of charges ``qi``, ``qj`` at ``r``."""
        ...


def _check_common(cutoff: float, restriction: Restriction) -> float:
    cutoff = float(cutoff)
    if not cutoff > 0.0:
        raise ValueError(f"Potential cutoff must be positive, got {cutoff}")
    if not isinstance(restriction, Restriction):
        raise TypeError(
            f"restriction must be a Restriction, got {type(restriction).__name__}"
        )
    return cutoff


@dataclass(frozen=True)
class PairPotentialMeta:
    """
    Where a pair potential applies.

    Attributes:
        species: Unordered pair of species the potential acts between.
        cutoff: Separation beyond which the potential contributes nothing.
        restriction: Intra/intermolecular restriction.
    """

    species: tuple[Specie, Specie]
    cutoff: float
    restriction: Restriction = Restriction.NONE

    def __post_init__(self) -> None:
        species = tuple(self.species)
        if len(species) != 2 or not all(isinstance(s, Specie) for s in species):
            raise TypeError("species must be a pair of Specie instances")
        object.__setattr__(self, "species", species)
        object.__setattr__(
            self, "cutoff", _check_common(self.cutoff, self.restriction)
        )


@dataclass(frozen=True)
class CoulombicPotentialMeta:
    """
    Where a coulombic potential applies.

    Attributes:
        cutoff: Separation beyond which the potential contributes nothing.
        restriction: Intra/intermolecular restriction.
        species: Optional unordered specie pair; None applies to every pair.
    """

    cutoff: float
    restriction: Restriction = Restriction.NONE
    species: tuple[Specie, Specie] | None = None

    def __post_init__(self) -> None:
        if self.species is not None:
            species = tuple(self.species)
            if len(species) != 2 or not all(isinstance(s, Specie) for s in species):
                raise TypeError("species must be a pair of Specie instances")
            object.__setattr__(self, "species", species)
        object.__setattr__(
            self, "cutoff", _check_common(self.cutoff, self.restriction)
        )
