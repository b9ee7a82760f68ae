"""Shared-memory parallelism for pair evaluation."""

from .backends import ParallelBackend, SerialBackend, ThreadBackend
from .dispatcher import backend_for, get_backend

__all__ = [
    "ParallelBackend",
    "SerialBackend",
    "ThreadBackend",
    "backend_for",
    "get_backend",
]
