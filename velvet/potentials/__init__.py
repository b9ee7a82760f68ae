"""Interatomic potentials and the registry that applies them."""

from .base import (
    CoulombicPotential,
    CoulombicPotentialMeta,
    PairPotential,
    PairPotentialMeta,
    Restriction,
)
from .collection import Potentials, PotentialEntry, select_pairs
from .coulomb import DampedShiftedForce, StandardCoulombic
from .pair import Harmonic, LennardJones, Mie, Morse

__all__ = [
    # Interfaces and metadata
    "PairPotential",
    "CoulombicPotential",
    "PairPotentialMeta",
    "CoulombicPotentialMeta",
    "Restriction",
    # Registry
    "Potentials",
    "PotentialEntry",
    "select_pairs",
    # Pair potentials
    "Harmonic",
    "LennardJones",
    "Mie",
    "Morse",
    # Coulombic potentials
    "StandardCoulombic",
    "DampedShiftedForce",
]
