"""Coulombic potential implementations."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.special import erfc

from ..constants import FOUR_PI_EPSILON_0, FRAC_2_SQRT_PI
from .base import CoulombicPotential


class StandardCoulombic(CoulombicPotential):
    """
    Plain cutoff Coulomb interaction.

    V(r) = q_i * q_j / (4 * pi * epsilon_0 * dielectric * r)

    Attributes:
        dielectric: Relative permittivity of the medium.
    """

    def __init__(self, dielectric: float = 1.0) -> None:
        if not dielectric > 0.0:
            raise ValueError(f"dielectric must be positive, got {dielectric}")
        self.dielectric = float(dielectric)
        self._prefactor = 1.0 / (FOUR_PI_EPSILON_0 * self.dielectric)

    def energy(
        self, qi: ArrayLike, qj: ArrayLike, r: ArrayLike
    ) -> NDArray[np.floating]:
        return self._prefactor * np.asarray(qi) * np.asarray(qj) / np.asarray(r)

    def force(
        self, qi: ArrayLike, qj: ArrayLike, r: ArrayLike
    ) -> NDArray[np.floating]:
        r = np.asarray(r)
        return self._prefactor * np.asarray(qi) * np.asarray(qj) / (r * r)

    def __repr__(self) -> str:
        return f"StandardCoulombic(dielectric={self.dielectric})"


class DampedShiftedForce(CoulombicPotential):
    """
    Damped shifted force (DSF) electrostatics of Fennell and Gezelter.

    A pairwise alternative to Ewald summation: the screened Coulomb term
    erfc(alpha*r)/r is shifted so that both energy and force vanish at the
    cutoff. The cutoff given here should match the one in the potential's
    metadata.

    Attributes:
        alpha: Damping parameter (inverse length).
        cutoff: Cutoff radius at which energy and force reach zero.
        dielectric: Relative permittivity of the medium.
    """

    def __init__(self, alpha: float, cutoff: float, dielectric: float = 1.0) -> None:
        if not alpha >= 0.0:
            raise ValueError(f"alpha must be non-negative, got {alpha}")
        if not cutoff > 0.0:
            raise ValueError(f"cutoff must be positive, got {cutoff}")
        self.alpha = float(alpha)
        self.cutoff = float(cutoff)
        self.dielectric = float(dielectric)
        self._prefactor = 1.0 / (FOUR_PI_EPSILON_0 * self.dielectric)

        rc = self.cutoff
        alpha_rc = self.alpha * rc
        self._energy_shift = float(erfc(alpha_rc)) / rc
        self._force_shift = float(erfc(alpha_rc)) / (rc * rc) + float(
            FRAC_2_SQRT_PI * self.alpha * np.exp(-alpha_rc * alpha_rc) / rc
        )

    def energy(
        self, qi: ArrayLike, qj: ArrayLike, r: ArrayLike
    ) -> NDArray[np.floating]:
        r = np.asarray(r)
        screened = erfc(self.alpha * r) / r
        shifted = (
            screened
            - self._energy_shift
            + self._force_shift * (r - self.cutoff)
        )
        return self._prefactor * np.asarray(qi) * np.asarray(qj) * shifted

    def force(
        self, qi: ArrayLike, qj: ArrayLike, r: ArrayLike
    ) -> NDArray[np.floating]:
        r = np.asarray(r)
        alpha_r = self.alpha * r
        screened = erfc(alpha_r) / (r * r) + (
            FRAC_2_SQRT_PI * self.alpha * np.exp(-alpha_r * alpha_r) / r
        )
        return (
            self._prefactor
            * np.asarray(qi)
            * np.asarray(qj)
            * (screened - self._force_shift)
        )

    def __repr__(self) -> str:
        return (
            f"DampedShiftedForce(alpha={self.alpha}, cutoff={self.cutoff}, "
            f"dielectric={self.dielectric})"
        )
