"""Reporter implementations for simulation output."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from ..potentials import Potentials
    from ..properties import Property
    from ..system import System

logger = logging.getLogger(__name__)


class Reporter(ABC):
    """
    Abstract base class for simulation reporters.

    Reporters are called periodically during simulation to read the
    system through property evaluators.
    """

    @abstractmethod
    def report(self, step: int, system: System, potentials: Potentials) -> None:
        """
        Generate report for current state.

        Args:
            step: Index of the step just completed.
            system: Current system.
            potentials: Potentials acting in the system.
        """
        ...

    @property
    @abstractmethod
    def frequency(self) -> int:
        """Return reporting frequency (every N steps)."""
        ...

    def should_report(self, step: int) -> bool:
        """Check if reporter should run at this step."""
        return step % self.frequency == 0

    def initialize(self, system: System) -> None:
        """Initialize reporter (called before simulation)."""
        pass

    def finalize(self, system: System) -> None:
        """Finalize reporter (called after simulation)."""
        pass


class ReporterGroup:
    """
    Collection of reporters with automatic frequency handling.
    """

    def __init__(self, reporters: list[Reporter] | None = None) -> None:
        self._reporters: list[Reporter] = reporters if reporters else []

    def __len__(self) -> int:
        return len(self._reporters)

    def add(self, reporter: Reporter) -> None:
        """Add a reporter to the group."""
        self._reporters.append(reporter)

    def remove(self, reporter: Reporter) -> None:
        """Remove a reporter from the group."""
        self._reporters.remove(reporter)

    def initialize(self, system: System) -> None:
        """Initialize all reporters."""
        for reporter in self._reporters:
            reporter.initialize(system)

    def report(
        self, step: int, system: System, potentials: Potentials, force: bool = False
    ) -> None:
        """Run all reporters that should fire at this step (all if ``force``)."""
        for reporter in self._reporters:
            if force or reporter.should_report(step):
                reporter.report(step, system, potentials)

    def finalize(self, system: System) -> None:
        """Finalize all reporters."""
        for reporter in self._reporters:
            reporter.finalize(system)


class PropertyReporter(Reporter):
    """
    Reporter that records property values in memory.

    Example:
        reporter = PropertyReporter([TotalEnergy(), Temperature()], frequency=10)
        simulation.add_reporter(reporter)
        simulation.run(1000)
        energies = reporter.values("total_energy")
    """

    def __init__(self, properties: Sequence[Property], frequency: int = 1) -> None:
        """
        Initialize property reporter.

        Args:
            properties: Properties evaluated at each report.
            frequency: Reporting frequency (every N steps).
        """
        if frequency < 1:
            raise ValueError(f"frequency must be at least 1, got {frequency}")
        self._properties = list(properties)
        self._frequency = frequency
        self._steps: list[int] = []
        self._values: dict[str, list[Any]] = {p.name: [] for p in self._properties}

    @property
    def frequency(self) -> int:
        return self._frequency

    def report(self, step: int, system: System, potentials: Potentials) -> None:
        self._steps.append(step)
        for prop in self._properties:
            self._values[prop.name].append(prop.calculate(system, potentials))

    @property
    def steps(self) -> np.ndarray:
        """Return the reported step indices."""
        return np.array(self._steps, dtype=int)

    def values(self, name: str) -> np.ndarray:
        """Return the recorded values of property ``name``."""
        return np.array(self._values[name])

    def clear(self) -> None:
        """Clear recorded data."""
        self._steps.clear()
        for values in self._values.values():
            values.clear()


class LoggingReporter(Reporter):
    """Reporter that writes property values through :mod:`logging`."""

    def __init__(
        self,
        properties: Sequence[Property],
        frequency: int = 1,
        level: int = logging.INFO,
    ) -> None:
        """
        Initialize logging reporter.

        Args:
            properties: Properties evaluated at each report.
            frequency: Reporting frequency (every N steps).
            level: Logging level of the report records.
        """
        if frequency < 1:
            raise ValueError(f"frequency must be at least 1, got {frequency}")
        self._properties = list(properties)
        self._frequency = frequency
        self._level = level

    @property
    def frequency(self) -> int:
        return self._frequency

    def report(self, step: int, system: System, potentials: Potentials) -> None:
        if not logger.isEnabledFor(self._level):
            return
        logger.log(self._level, "Results for timestep: %d", step)
        for prop in self._properties:
            value = prop.calculate(system, potentials)
            if np.ndim(value) == 0:
                logger.log(self._level, "    %s: %.6g", prop.name, float(value))
            else:
                logger.log(self._level, "    %s: %s", prop.name, np.array2string(value))
