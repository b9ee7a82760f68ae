"""Simulation state representation."""

from __future__ import annotations

import copy
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..constants import resolve_dtype
from .cell import Cell
from .species import Specie


@dataclass
class System:
    """
    Mutable state of a simulated system of particles.

    Per-particle arrays are index-aligned and all have ``size`` rows.
    Particle types are stored once in ``species`` and referenced by index
    through ``type_ids``, so every particle of a type shares the same
    :class:`Specie` record.

    Attributes:
        cell: Periodic simulation cell.
        species: Type table.
        type_ids: Index into ``species`` for each particle, shape (N,).
        positions: Particle positions, shape (N, 3).
        velocities: Particle velocities, shape (N, 3).
        charges: Per-particle charges, shape (N,).
        molecules: Molecule id of each particle, shape (N,).
        bonds: Bonded pairs as index tuples (data only).
        angles: Angle triplets as index tuples (data only).
        dihedrals: Dihedral quadruplets as index tuples (data only).
        dtype: Floating precision shared by every float array.
    """

    cell: Cell
    species: list[Specie]
    type_ids: NDArray[np.integer]
    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    charges: NDArray[np.floating]
    molecules: NDArray[np.integer]
    bonds: list[tuple[int, int]] = field(default_factory=list)
    angles: list[tuple[int, int, int]] = field(default_factory=list)
    dihedrals: list[tuple[int, int, int, int]] = field(default_factory=list)
    dtype: np.dtype | str | None = None

    def __post_init__(self) -> None:
        """Convert arrays to the system precision and validate."""
        if self.dtype is None:
            positions = np.asarray(self.positions)
            self.dtype = positions.dtype if positions.dtype.kind == "f" else None
        self.dtype = resolve_dtype(self.dtype)

        self.species = list(self.species)
        type_ids = np.array(self.type_ids, dtype=np.intp)
        type_ids.flags.writeable = False
        self.type_ids = type_ids

        self.positions = np.asarray(self.positions, dtype=self.dtype)
        self.velocities = np.asarray(self.velocities, dtype=self.dtype)
        self.charges = np.asarray(self.charges, dtype=self.dtype)
        self.molecules = np.asarray(self.molecules, dtype=np.intp)

        self.validate()

        masses = np.array([specie.mass for specie in self.species], dtype=self.dtype)
        masses = masses[self.type_ids]
        masses.flags.writeable = False
        self._masses = masses

    @property
    def size(self) -> int:
        """Return the number of particles."""
        return len(self.type_ids)

    @property
    def masses(self) -> NDArray[np.floating]:
        """Return per-particle masses, shape (N,)."""
        return self._masses

    def validate(self) -> None:
        """
        Check the structural invariants of the system.

        Raises:
            ValueError: If an array has the wrong shape or precision, a type
                index is out of range, or the cell is missing.
        """
        if not isinstance(self.cell, Cell):
            raise ValueError(f"System requires a Cell, got {type(self.cell).__name__}")
        if len(self.species) == 0 and self.size > 0:
            raise ValueError("System with particles requires a non-empty type table")

        n = self.size
        if self.type_ids.ndim != 1:
            raise ValueError(f"type_ids must be 1-D, got shape {self.type_ids.shape}")
        if n > 0 and (
            self.type_ids.min() < 0 or self.type_ids.max() >= len(self.species)
        ):
            raise ValueError(
                f"type_ids must index into a type table of {len(self.species)} "
                "species"
            )

        for name, shape in (
            ("positions", (n, 3)),
            ("velocities", (n, 3)),
            ("charges", (n,)),
            ("molecules", (n,)),
        ):
            array = getattr(self, name)
            if array.shape != shape:
                raise ValueError(
                    f"{name} shape {array.shape} incompatible with {n} particles"
                )

        for name in ("positions", "velocities", "charges"):
            array = getattr(self, name)
            if array.dtype != self.dtype:
                raise ValueError(
                    f"{name} has dtype {array.dtype}, system precision is {self.dtype}"
                )

        for name, width in (("bonds", 2), ("angles", 3), ("dihedrals", 4)):
            for entry in getattr(self, name):
                if len(entry) != width or any(not 0 <= k < n for k in entry):
                    raise ValueError(f"Invalid {name} entry {entry!r}")

    @classmethod
    def create(
        cls,
        cell: Cell,
        species: Sequence[Specie],
        type_ids: ArrayLike,
        positions: ArrayLike,
        velocities: ArrayLike | None = None,
        charges: ArrayLike | None = None,
        molecules: ArrayLike | None = None,
        bonds: Sequence[tuple[int, int]] | None = None,
        angles: Sequence[tuple[int, int, int]] | None = None,
        dihedrals: Sequence[tuple[int, int, int, int]] | None = None,
        precision: str | np.dtype | None = "f64",
    ) -> System:
        """
        Create a System, filling in defaults for optional fields.

        Args:
            cell: Periodic simulation cell.
            species: Type table.
            type_ids: Index into ``species`` for each particle.
            positions: Particle positions, shape (N, 3).
            velocities: Particle velocities. Defaults to zeros.
            charges: Per-particle charges. Defaults to the specie charges.
            molecules: Molecule ids. Defaults to a single molecule.
            bonds: Bonded pairs. Defaults to none.
            angles: Angle triplets. Defaults to none.
            dihedrals: Dihedral quadruplets. Defaults to none.
            precision: ``"f32"`` or ``"f64"``.

        Returns:
            New System instance.
        """
        dtype = resolve_dtype(precision)
        species = list(species)
        type_ids = np.asarray(type_ids, dtype=np.intp)
        n = len(type_ids)
        positions = np.asarray(positions, dtype=dtype)
        if positions.size == 0:
            positions = positions.reshape(0, 3)

        if velocities is None:
            velocities = np.zeros((n, 3), dtype=dtype)
        if charges is None:
            if n and (type_ids.min() < 0 or type_ids.max() >= len(species)):
                raise ValueError(
                    f"type_ids must index into a type table of {len(species)} "
                    "species"
                )
            charges = np.array([species[t].charge for t in type_ids], dtype=dtype)
        if molecules is None:
            molecules = np.zeros(n, dtype=np.intp)

        return cls(
            cell=cell,
            species=species,
            type_ids=type_ids,
            positions=positions,
            velocities=velocities,
            charges=charges,
            molecules=molecules,
            bonds=[tuple(b) for b in bonds] if bonds else [],
            angles=[tuple(a) for a in angles] if angles else [],
            dihedrals=[tuple(d) for d in dihedrals] if dihedrals else [],
            dtype=dtype,
        )

    def copy(self) -> System:
        """Create a deep copy of this system; cell and species are shared."""
        return System(
            cell=self.cell,
            species=self.species,
            type_ids=self.type_ids.copy(),
            positions=self.positions.copy(),
            velocities=self.velocities.copy(),
            charges=self.charges.copy(),
            molecules=self.molecules.copy(),
            bonds=copy.copy(self.bonds),
            angles=copy.copy(self.angles),
            dihedrals=copy.copy(self.dihedrals),
            dtype=self.dtype,
        )

    def specie_of(self, index: int) -> Specie:
        """Return the specie of particle ``index``."""
        return self.species[self.type_ids[index]]
