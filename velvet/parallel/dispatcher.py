"""Resolution of the backend used for pair evaluation."""

from __future__ import annotations

from .backends.base import ParallelBackend
from .backends.serial import SerialBackend
from .backends.threads import ThreadBackend

# Stateless, so one instance serves every evaluator without a backend
_serial = SerialBackend()


def get_backend(backend: ParallelBackend | None = None) -> ParallelBackend:
    """Return ``backend``, or the shared serial backend when it is None."""
    if backend is None:
        return _serial
    return backend


def backend_for(n_workers: int) -> ParallelBackend:
    """
    Create the backend for a worker count.

    Args:
        n_workers: Number of workers; 1 runs serially.

    Raises:
        ValueError: If ``n_workers`` is less than 1.
    """
    if n_workers < 1:
        raise ValueError(f"n_workers must be at least 1, got {n_workers}")
    if n_workers == 1:
        return SerialBackend()
    return ThreadBackend(n_workers)
