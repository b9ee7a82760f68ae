"""Shared setup for the argon examples."""

import numpy as np

from velvet import (
    Cell,
    Element,
    LennardJones,
    PairPotentialMeta,
    Potentials,
    Specie,
    System,
)

# FCC lattice constant of solid argon in angstrom
LATTICE_CONSTANT = 5.26


def argon_fcc(n_cells=3, precision="f64"):
    """Build an FCC argon crystal of 4 * n_cells^3 atoms."""
    argon = Specie.from_element(Element.Ar)
    basis = np.array(
        [[0.0, 0.0, 0.0], [0.5, 0.5, 0.0], [0.5, 0.0, 0.5], [0.0, 0.5, 0.5]]
    )
    cells = np.array(
        [[i, j, k] for i in range(n_cells) for j in range(n_cells) for k in range(n_cells)]
    )
    positions = (cells[:, np.newaxis, :] + basis[np.newaxis, :, :]).reshape(-1, 3)
    positions *= LATTICE_CONSTANT

    system = System.create(
        Cell.cubic(n_cells * LATTICE_CONSTANT),
        [argon],
        np.zeros(len(positions), dtype=int),
        positions,
        precision=precision,
    )
    return system, argon


def argon_potentials(argon, cutoff=7.5):
    """Lennard-Jones argon in kcal/mol and angstrom."""
    potentials = Potentials()
    potentials.add_pair(
        LennardJones(epsilon=0.238, sigma=3.4),
        PairPotentialMeta((argon, argon), cutoff),
    )
    return potentials
