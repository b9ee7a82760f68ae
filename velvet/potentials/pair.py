"""Pair potential implementations."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .base import PairPotential


class Harmonic(PairPotential):
    """
    Harmonic pair potential.

    V(r) = 0.5 * k * (r - x0)^2

    ``force`` returns k * (r - x0), so a pair stretched past ``x0`` is
    pushed further apart and a compressed pair is pulled together.
    The force is therefore not the negative gradient of the energy, and a
    harmonic pair does not conserve energy under time integration. Use it
    for static force evaluation, not for dynamics.

    Attributes:
        k: Spring constant.
        x0: Equilibrium separation.
    """

    def __init__(self, k: float, x0: float) -> None:
        self.k = float(k)
        self.x0 = float(x0)

    def energy(self, r: ArrayLike) -> NDArray[np.floating]:
        dr = np.asarray(r) - self.x0
        return 0.5 * self.k * dr * dr

    def force(self, r: ArrayLike) -> NDArray[np.floating]:
        dr = np.asarray(r) - self.x0
        return self.k * dr

    def __repr__(self) -> str:
        return f"Harmonic(k={self.k}, x0={self.x0})"


class LennardJones(PairPotential):
    """
    Lennard-Jones 12-6 potential.

    V(r) = 4 * epsilon * [(sigma/r)^12 - (sigma/r)^6]

    Attributes:
        epsilon: Well depth.
        sigma: Separation at which the energy crosses zero.
    """

    def __init__(self, epsilon: float, sigma: float) -> None:
        self.epsilon = float(epsilon)
        self.sigma = float(sigma)

    def energy(self, r: ArrayLike) -> NDArray[np.floating]:
        sig_over_r_6 = (self.sigma / np.asarray(r)) ** 6
        sig_over_r_12 = sig_over_r_6 * sig_over_r_6
        return 4.0 * self.epsilon * (sig_over_r_12 - sig_over_r_6)

    def force(self, r: ArrayLike) -> NDArray[np.floating]:
        # F = -dV/dr = 24 * epsilon * [2*(sigma/r)^12 - (sigma/r)^6] / r
        r = np.asarray(r)
        sig_over_r_6 = (self.sigma / r) ** 6
        sig_over_r_12 = sig_over_r_6 * sig_over_r_6
        return 24.0 * self.epsilon * (2.0 * sig_over_r_12 - sig_over_r_6) / r

    def __repr__(self) -> str:
        return f"LennardJones(epsilon={self.epsilon}, sigma={self.sigma})"


class Mie(PairPotential):
    """
    Mie n-m potential, a generalized Lennard-Jones form.

    V(r) = C * epsilon * [(sigma/r)^n - (sigma/r)^m]
    C = n / (n - m) * (n / m)^(m / (n - m))

    With n=12 and m=6 this reduces to Lennard-Jones.

    Attributes:
        epsilon: Well depth.
        sigma: Separation at which the energy crosses zero.
        n: Repulsive exponent.
        m: Attractive exponent.
    """

    def __init__(self, epsilon: float, sigma: float, n: float, m: float) -> None:
        if not n > m > 0:
            raise ValueError(f"Mie exponents require n > m > 0, got n={n}, m={m}")
        self.epsilon = float(epsilon)
        self.sigma = float(sigma)
        self.n = float(n)
        self.m = float(m)
        self.prefactor = (
            self.n / (self.n - self.m) * (self.n / self.m) ** (self.m / (self.n - self.m))
        )

    def energy(self, r: ArrayLike) -> NDArray[np.floating]:
        sig_over_r = self.sigma / np.asarray(r)
        return (
            self.prefactor
            * self.epsilon
            * (sig_over_r**self.n - sig_over_r**self.m)
        )

    def force(self, r: ArrayLike) -> NDArray[np.floating]:
        r = np.asarray(r)
        sig_over_r = self.sigma / r
        return (
            self.prefactor
            * self.epsilon
            * (self.n * sig_over_r**self.n - self.m * sig_over_r**self.m)
            / r
        )

    def __repr__(self) -> str:
        return (
            f"Mie(epsilon={self.epsilon}, sigma={self.sigma}, n={self.n}, m={self.m})"
        )


class Morse(PairPotential):
    """
    Morse potential.

    V(r) = d_e * [1 - exp(-a * (r - r_e))]^2

    Attributes:
        a: Width of the well.
        d_e: Well depth.
        r_e: Equilibrium separation.
    """

    def __init__(self, a: float, d_e: float, r_e: float) -> None:
        self.a = float(a)
        self.d_e = float(d_e)
        self.r_e = float(r_e)

    def energy(self, r: ArrayLike) -> NDArray[np.floating]:
        exp = np.exp(-self.a * (np.asarray(r) - self.r_e))
        return self.d_e * (1.0 - exp) ** 2

    def force(self, r: ArrayLike) -> NDArray[np.floating]:
        exp = np.exp(-self.a * (np.asarray(r) - self.r_e))
        return -2.0 * self.a * self.d_e * exp * (1.0 - exp)

    def __repr__(self) -> str:
        return f"Morse(a={self.a}, d_e={self.d_e}, r_e={self.r_e})"
