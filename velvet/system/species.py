"""Particle types shared by reference across particles."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from .elements import Element


@dataclass(frozen=True, eq=False)
class Specie:
    """
    Immutable particle type.

    Two species are equal only when their ids match, so species created
    with identical mass and charge remain distinct unless they were built
    from the same element.

    Attributes:
        mass: Particle mass in amu.
        charge: Particle charge in elementary charges.
        id: Unique identity (random for custom species, the atomic
            number for elements).
    """

    mass: float
    charge: float = 0.0
    id: int = field(default_factory=lambda: uuid.uuid4().int)

    def __post_init__(self) -> None:
        if not self.mass > 0.0:
            raise ValueError(f"Specie mass must be positive, got {self.mass}")
        object.__setattr__(self, "mass", float(self.mass))
        object.__setattr__(self, "charge", float(self.charge))

    @classmethod
    def from_element(cls, element: Element) -> Specie:
        """Create the specie describing a neutral atom of an element."""
        return cls(mass=element.mass, charge=element.charge, id=element.number)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Specie):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
