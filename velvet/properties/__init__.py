"""Properties derived from the system and its potentials."""

from .base import IntrinsicProperty, Property
from .energy import (
    CoulombicEnergy,
    KineticEnergy,
    PairEnergy,
    PotentialEnergy,
    TotalEnergy,
)
from .forces import CoulombicForces, Forces, PairForces
from .temperature import Temperature

__all__ = [
    "Property",
    "IntrinsicProperty",
    "Forces",
    "PairForces",
    "CoulombicForces",
    "PairEnergy",
    "CoulombicEnergy",
    "PotentialEnergy",
    "KineticEnergy",
    "TotalEnergy",
    "Temperature",
]
