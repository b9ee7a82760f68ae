"""Periodic simulation cell."""

from __future__ import annotations

import itertools
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


@dataclass(frozen=True)
class Cell:
    """
    Periodic simulation cell.

    Stored as a 3x3 matrix whose rows are the cell vectors [a, b, c]. The
    usual crystallographic form (three edge lengths and three angles in
    degrees) is converted to the lower-triangular convention with ``a``
    along x and ``b`` in the xy plane.

    Attributes:
        a, b, c: Edge lengths.
        alpha, beta, gamma: Angles in degrees (alpha between b and c,
            beta between a and c, gamma between a and b).
    """

    a: float
    b: float
    c: float
    alpha: float = 90.0
    beta: float = 90.0
    gamma: float = 90.0

    def __post_init__(self) -> None:
        """Validate edge lengths, angles and volume."""
        for name in ("a", "b", "c"):
            value = float(getattr(self, name))
            if not value > 0.0:
                raise ValueError(f"Cell edge {name} must be positive, got {value}")
            object.__setattr__(self, name, value)
        for name in ("alpha", "beta", "gamma"):
            value = float(getattr(self, name))
            if not 0.0 < value < 180.0:
                raise ValueError(
                    f"Cell angle {name} must lie in (0, 180) degrees, got {value}"
                )
            object.__setattr__(self, name, value)

        matrix = _matrix_from_parameters(
            self.a, self.b, self.c, self.alpha, self.beta, self.gamma
        )
        volume = float(np.abs(np.linalg.det(matrix)))
        if not np.isfinite(volume) or volume < 1e-12:
            raise ValueError("Cell is degenerate (zero volume)")

        matrix.flags.writeable = False
        inverse = np.linalg.inv(matrix)
        inverse.flags.writeable = False
        object.__setattr__(self, "_matrix", matrix)
        object.__setattr__(self, "_inverse", inverse)
        # Lattice translations to the 26 neighbouring images and the origin
        offsets = np.array(
            list(itertools.product((-1, 0, 1), repeat=3)), dtype=np.float64
        )
        images = offsets @ matrix
        images.flags.writeable = False
        object.__setattr__(self, "_images", images)

    @classmethod
    def cubic(cls, length: float) -> Cell:
        """Create a cubic cell with the given edge length."""
        return cls(length, length, length)

    @classmethod
    def orthorhombic(cls, a: float, b: float, c: float) -> Cell:
        """Create a rectangular cell with the given edge lengths."""
        return cls(a, b, c)

    @classmethod
    def from_matrix(cls, vectors: ArrayLike) -> Cell:
        """
        Create a cell from a 3x3 matrix of row vectors.

        The cell is re-oriented into the lower-triangular convention;
        lengths and angles are preserved.
        """
        vectors = np.asarray(vectors, dtype=np.float64)
        if vectors.shape != (3, 3):
            raise ValueError(f"Cell matrix must be (3, 3), got {vectors.shape}")
        lengths = np.linalg.norm(vectors, axis=1)
        if np.any(lengths <= 0.0):
            raise ValueError("Cell vectors must have nonzero length")
        a_vec, b_vec, c_vec = vectors
        alpha = _angle(b_vec, c_vec)
        beta = _angle(a_vec, c_vec)
        gamma = _angle(a_vec, b_vec)
        return cls(*lengths, alpha, beta, gamma)

    @property
    def matrix(self) -> NDArray[np.floating]:
        """Return the (read-only) 3x3 matrix of cell vectors."""
        return self._matrix

    @property
    def lengths(self) -> NDArray[np.floating]:
        """Return edge lengths [a, b, c]."""
        return np.array([self.a, self.b, self.c])

    @property
    def angles(self) -> NDArray[np.floating]:
        """Return angles [alpha, beta, gamma] in degrees."""
        return np.array([self.alpha, self.beta, self.gamma])

    @property
    def volume(self) -> float:
        """Return cell volume."""
        return float(np.abs(np.linalg.det(self._matrix)))

    @property
    def is_orthorhombic(self) -> bool:
        """Check if every cell angle is a right angle."""
        return bool(np.allclose(self.angles, 90.0))

    def wrap(self, positions: ArrayLike) -> NDArray[np.floating]:
        """
        Fold positions into the primary cell.

        Args:
            positions: Positions array of shape (3,) or (N, 3).

        Returns:
            Wrapped positions with the input dtype.
        """
        positions = np.asarray(positions)
        dtype = positions.dtype if positions.dtype.kind == "f" else np.float64
        if self.is_orthorhombic:
            lengths = self.lengths.astype(dtype)
            return positions - lengths * np.floor(positions / lengths)
        fractional = positions @ self._inverse.astype(dtype)
        fractional = fractional - np.floor(fractional)
        return fractional @ self._matrix.astype(dtype)

    def displacement(self, p1: ArrayLike, p2: ArrayLike) -> NDArray[np.floating]:
        """
        Compute the minimum image displacement vector from p1 to p2.

        In a sheared cell, rounding the fractional displacement can land on
        a longer image, so the neighbouring images of the rounded result
        are searched for the shortest one.

        Args:
            p1: First position(s), shape (3,) or (N, 3).
            p2: Second position(s), shape (3,) or (N, 3).

        Returns:
            Displacement vector(s) ``p2 - p1`` under the minimum image
            convention.
        """
        dr = np.asarray(p2) - np.asarray(p1)
        dtype = dr.dtype if dr.dtype.kind == "f" else np.float64
        if self.is_orthorhombic:
            lengths = self.lengths.astype(dtype)
            return dr - lengths * np.round(dr / lengths)
        fractional = dr @ self._inverse.astype(dtype)
        fractional = fractional - np.round(fractional)
        dr = fractional @ self._matrix.astype(dtype)
        candidates = dr[..., np.newaxis, :] + self._images.astype(dtype)
        lengths_sq = np.einsum("...ij,...ij->...i", candidates, candidates)
        best = np.expand_dims(np.argmin(lengths_sq, axis=-1), (-2, -1))
        return np.take_along_axis(candidates, best, axis=-2)[..., 0, :]

    def distance(
        self, p1: ArrayLike, p2: ArrayLike
    ) -> float | NDArray[np.floating]:
        """
        Compute the minimum image distance between positions.

        Args:
            p1: First position(s), shape (3,) or (N, 3).
            p2: Second position(s), shape (3,) or (N, 3).

        Returns:
            Distance(s) under the minimum image convention.
        """
        return np.linalg.norm(self.displacement(p1, p2), axis=-1)

    def direction(self, p1: ArrayLike, p2: ArrayLike) -> NDArray[np.floating]:
        """
        Compute the unit vector along the minimum image displacement p1 -> p2.

        Coincident points give NaN components; callers are expected to avoid
        overlapping particles.
        """
        dr = self.displacement(p1, p2)
        r = np.linalg.norm(dr, axis=-1)
        return dr / np.expand_dims(r, -1)


def _matrix_from_parameters(
    a: float, b: float, c: float, alpha: float, beta: float, gamma: float
) -> NDArray[np.floating]:
    """Build lower-triangular cell vectors from lengths and angles."""
    cos_alpha = _cos_degrees(alpha)
    cos_beta = _cos_degrees(beta)
    cos_gamma = _cos_degrees(gamma)
    sin_gamma = np.sin(np.radians(gamma))

    cx = c * cos_beta
    cy = c * (cos_alpha - cos_beta * cos_gamma) / sin_gamma
    cz_sq = c * c - cx * cx - cy * cy
    cz = np.sqrt(cz_sq) if cz_sq > 0.0 else 0.0

    return np.array(
        [
            [a, 0.0, 0.0],
            [b * cos_gamma, b * sin_gamma, 0.0],
            [cx, cy, cz],
        ],
        dtype=np.float64,
    )


def _cos_degrees(angle: float) -> float:
    # exact zero for right angles keeps orthorhombic matrices diagonal
    if angle == 90.0:
        return 0.0
    return float(np.cos(np.radians(angle)))


def _angle(u: NDArray[np.floating], v: NDArray[np.floating]) -> float:
    cosine = np.dot(u, v) / (np.linalg.norm(u) * np.linalg.norm(v))
    return float(np.degrees(np.arccos(np.clip(cosine, -1.0, 1.0))))
