"""Vectorised pair kernels shared by the force and energy evaluators."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..parallel import ParallelBackend
    from ..potentials import PotentialEntry
    from ..system import System


def pairs_within_cutoff(
    system: System, selection: NDArray[np.integer], cutoff: float
) -> tuple[
    NDArray[np.integer], NDArray[np.integer], NDArray[np.floating], NDArray[np.floating]
]:
    """
    Keep the selected pairs whose minimum image distance is within cutoff.

    Args:
        system: Current system.
        selection: Index pairs, shape (n_pairs, 2).
        cutoff: Cutoff radius.

    Returns:
        Tuple of (i_indices, j_indices, displacements i->j, distances).
    """
    i_indices = selection[:, 0]
    j_indices = selection[:, 1]
    positions = system.positions
    dr = system.cell.displacement(positions[i_indices], positions[j_indices])
    r = np.linalg.norm(dr, axis=1)

    mask = r <= cutoff
    return i_indices[mask], j_indices[mask], dr[mask], r[mask]


def chunk_entries(
    entries: Iterable[PotentialEntry], backend: ParallelBackend
) -> list[tuple[Any, Any, NDArray[np.integer]]]:
    """
    Split every entry's selection into per-worker chunks.

    Returns:
        List of (potential, meta, selection chunk) work items.
    """
    items = []
    for potential, meta, selection in entries:
        if selection is None or len(selection) == 0:
            continue
        for start, end in backend.partition_pairs(len(selection)):
            items.append((potential, meta, selection[start:end]))
    return items


def accumulate_forces(
    system: System,
    i_indices: NDArray[np.integer],
    j_indices: NDArray[np.integer],
    dr: NDArray[np.floating],
    r: NDArray[np.floating],
    magnitude: NDArray[np.floating],
) -> NDArray[np.floating]:
    """
    Project scalar pair forces onto the line of centers and accumulate.

    Each force is projected on the unit vector pointing from the second
    particle to the first, so a positive (repulsive) magnitude pushes the
    pair apart. ``+f`` is added to the first particle of each pair and
    ``-f`` to the second, so the result sums to zero.
    """
    forces = np.zeros((system.size, 3), dtype=system.dtype)
    if len(r) == 0:
        return forces
    # dr points from i to j
    direction = -dr / r[:, np.newaxis]
    force_vectors = (magnitude[:, np.newaxis] * direction).astype(
        system.dtype, copy=False
    )
    np.add.at(forces, i_indices, force_vectors)
    np.add.at(forces, j_indices, -force_vectors)
    return forces


def fan_out(
    system: System,
    entries: Iterable[PotentialEntry],
    backend: ParallelBackend,
    kernel: Callable[[System, Any, Any, NDArray[np.integer]], Any],
) -> list[Any]:
    """Run ``kernel`` over every work item and return the partial results."""
    items = chunk_entries(entries, backend)
    return backend.parallel_map(
        lambda item: kernel(system, item[0], item[1], item[2]), items
    )
