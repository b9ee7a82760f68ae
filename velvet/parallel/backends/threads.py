"""Thread-pool backend for shared-memory pair fan-out."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from .base import ParallelBackend

logger = logging.getLogger(__name__)


class ThreadBackend(ParallelBackend):
    """
    Thread-pool backend.

    The vectorised numpy kernels release the GIL, so chunks of pairs run
    concurrently on separate threads. Each chunk returns its own partial
    result; the caller sums them after all chunks complete.
    """

    def __init__(self, n_workers: int | None = None) -> None:
        """
        Initialize thread backend.

        Args:
            n_workers: Number of worker threads. Defaults to CPU count.
        """
        if n_workers is not None and n_workers < 1:
            raise ValueError(f"n_workers must be at least 1, got {n_workers}")
        self._n_workers = n_workers or os.cpu_count() or 1
        self._executor: ThreadPoolExecutor | None = None

    @property
    def name(self) -> str:
        """Return backend name."""
        return "threads"

    @property
    def n_workers(self) -> int:
        """Return number of parallel workers."""
        return self._n_workers

    def parallel_map(
        self,
        func: Callable[..., Any],
        items: Sequence[Any],
    ) -> list[Any]:
        """
        Apply function to items on the thread pool.

        Args:
            func: Function to apply.
            items: Items to process.

        Returns:
            Results for each item, in input order.
        """
        if len(items) == 0:
            return []
        if len(items) == 1:
            return [func(items[0])]

        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._n_workers, thread_name_prefix="velvet"
            )
            logger.debug("Started thread pool with %d workers", self._n_workers)
        return list(self._executor.map(func, items))

    def close(self) -> None:
        """Shut down the thread pool."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
