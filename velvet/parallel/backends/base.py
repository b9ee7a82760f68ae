"""Abstract base class for parallel backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray


class ParallelBackend(ABC):
    """
    Abstract base class for shared-memory fan-out of pair work.

    A backend splits the pairs of one evaluation call into chunks, runs a
    worker function on each chunk, and sums the per-chunk partial results.
    Workers never write to shared arrays, so no locking is needed.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return backend name."""
        ...

    @property
    @abstractmethod
    def n_workers(self) -> int:
        """Return number of parallel workers."""
        ...

    def parallel_map(
        self,
        func: Callable[..., Any],
        items: Sequence[Any],
    ) -> list[Any]:
        """
        Apply function to items in parallel.

        Default implementation is serial; backends can override.

        Args:
            func: Function to apply.
            items: Items to process.

        Returns:
            Results for each item, in input order.
        """
        return [func(item) for item in items]

    def partition_pairs(self, n_pairs: int) -> list[tuple[int, int]]:
        """
        Split a pair range into one contiguous chunk per worker.

        Args:
            n_pairs: Total number of pairs.

        Returns:
            List of (start_index, end_index) tuples; empty chunks are dropped.
        """
        pairs_per_worker = n_pairs // self.n_workers
        remainder = n_pairs % self.n_workers

        bounds = []
        start = 0
        for rank in range(self.n_workers):
            end = start + pairs_per_worker + (1 if rank < remainder else 0)
            if end > start:
                bounds.append((start, end))
            start = end
        return bounds

    def reduce_forces(
        self,
        partial_forces: Sequence[NDArray[np.floating]],
        n_atoms: int,
        dtype: np.dtype = np.dtype(np.float64),
    ) -> NDArray[np.floating]:
        """
        Sum per-chunk force contributions.

        Args:
            partial_forces: Force arrays of shape (n_atoms, 3), one per chunk.
            n_atoms: Total number of atoms.
            dtype: Result precision.

        Returns:
            Total forces, shape (n_atoms, 3).
        """
        total = np.zeros((n_atoms, 3), dtype=dtype)
        for forces in partial_forces:
            total += forces
        return total

    def close(self) -> None:
        """Release worker resources."""

    def __enter__(self) -> ParallelBackend:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
