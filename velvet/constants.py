"""Physical constants in the internal unit system and precision handling.

Units: distance in angstrom, energy in kcal/mol, mass in amu, charge in
elementary charges, temperature in kelvin.
"""

from __future__ import annotations

from typing import Literal

import numpy as np

# Boltzmann constant in kcal/(mol*K)
BOLTZMANN = 0.001985875

# Coulomb energy constant: 4 * pi * epsilon0
FOUR_PI_EPSILON_0 = 7.19759

# 2 / sqrt(pi), used by damped coulombic sums
FRAC_2_SQRT_PI = float(2.0 / np.sqrt(np.pi))

Precision = Literal["f32", "f64"]

_PRECISIONS: dict[str, type[np.floating]] = {
    "f32": np.float32,
    "float32": np.float32,
    "f64": np.float64,
    "float64": np.float64,
}


def resolve_dtype(precision: str | np.dtype | type | None) -> np.dtype:
    """
    Map a precision specifier onto a numpy floating dtype.

    Args:
        precision: ``"f32"``, ``"f64"``, a numpy dtype, or None for float64.

    Returns:
        The matching numpy dtype.

    Raises:
        ValueError: If the specifier is not a supported floating precision.
    """
    if precision is None:
        return np.dtype(np.float64)
    if isinstance(precision, str):
        try:
            return np.dtype(_PRECISIONS[precision.lower()])
        except KeyError:
            raise ValueError(
                f"Unknown precision: {precision}. Available: f32, f64"
            ) from None
    dtype = np.dtype(precision)
    if dtype not in (np.dtype(np.float32), np.dtype(np.float64)):
        raise ValueError(f"Unsupported precision dtype: {dtype}")
    return dtype
