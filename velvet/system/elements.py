"""Chemical elements."""

from __future__ import annotations

from enum import Enum


class Element(Enum):
    """
    Chemical elements H through Kr.

    Each member's value is ``(symbol, atomic number, standard atomic mass)``.
    """

    H = ("H", 1, 1.008)
    He = ("He", 2, 4.0026)
    Li = ("Li", 3, 6.94)
    Be = ("Be", 4, 9.0122)
    B = ("B", 5, 10.81)
    C = ("C", 6, 12.011)
    N = ("N", 7, 14.007)
    O = ("O", 8, 15.999)  # noqa: E741
    F = ("F", 9, 18.998)
    Ne = ("Ne", 10, 20.180)
    Na = ("Na", 11, 22.990)
    Mg = ("Mg", 12, 24.305)
    Al = ("Al", 13, 26.982)
    Si = ("Si", 14, 28.085)
    P = ("P", 15, 30.974)
    S = ("S", 16, 32.06)
    Cl = ("Cl", 17, 35.45)
    Ar = ("Ar", 18, 39.948)
    K = ("K", 19, 39.098)
    Ca = ("Ca", 20, 40.078)
    Sc = ("Sc", 21, 44.956)
    Ti = ("Ti", 22, 47.867)
    V = ("V", 23, 50.942)
    Cr = ("Cr", 24, 51.996)
    Mn = ("Mn", 25, 54.938)
    Fe = ("Fe", 26, 55.845)
    Co = ("Co", 27, 58.933)
    Ni = ("Ni", 28, 58.693)
    Cu = ("Cu", 29, 63.546)
    Zn = ("Zn", 30, 65.38)
    Ga = ("Ga", 31, 69.723)
    Ge = ("Ge", 32, 72.630)
    As = ("As", 33, 74.922)
    Se = ("Se", 34, 78.971)
    Br = ("Br", 35, 79.904)
    Kr = ("Kr", 36, 83.798)

    @property
    def symbol(self) -> str:
        """Return the element symbol."""
        return self.value[0]

    @property
    def number(self) -> int:
        """Return the atomic number."""
        return self.value[1]

    @property
    def mass(self) -> float:
        """Return the standard atomic mass in amu."""
        return self.value[2]

    @property
    def charge(self) -> float:
        """Return the formal charge of the neutral atom."""
        return 0.0

    @classmethod
    def from_symbol(cls, symbol: str) -> Element:
        """Look up an element by its symbol (case-insensitive)."""
        for element in cls:
            if element.symbol.lower() == symbol.strip().lower():
                return element
        raise ValueError(f"Unknown element symbol: {symbol!r}")
