"""System state, cell geometry and particle types."""

from .cell import Cell
from .elements import Element
from .species import Specie
from .system import System

__all__ = ["Cell", "Element", "Specie", "System"]
