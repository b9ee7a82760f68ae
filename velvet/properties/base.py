"""Base interfaces for system properties."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..potentials import Potentials
    from ..system import System


class Property(ABC):
    """
    A system-wide quantity evaluated from the system and its potentials.

    Properties are stateless: calling :meth:`calculate` twice on an
    unchanged system gives the same result.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the property name used in reports."""
        ...

    @abstractmethod
    def calculate(self, system: System, potentials: Potentials) -> Any:
        """
        Evaluate the property.

        Args:
            system: Current system.
            potentials: Potentials acting in the system.

        Returns:
            The property value.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class IntrinsicProperty(Property):
    """A property that depends on the system alone, not on the potentials."""

    @abstractmethod
    def calculate_intrinsic(self, system: System) -> Any:
        """
        Evaluate the property from the system alone.

        Args:
            system: Current system.

        Returns:
            The property value.
        """
        ...

    def calculate(self, system: System, potentials: Potentials | None = None) -> Any:
        """Evaluate the property; ``potentials`` is ignored."""
        return self.calculate_intrinsic(system)
