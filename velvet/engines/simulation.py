"""Simulation driver."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import numpy as np

from ..config import Configuration
from ..constants import resolve_dtype
from .reporters import LoggingReporter, Reporter, ReporterGroup

if TYPE_CHECKING:
    from ..integrators import Propagator
    from ..potentials import Potentials
    from ..system import System

logger = logging.getLogger(__name__)


class SimulationError(RuntimeError):
    """
    Numeric fault raised while propagating a simulation.

    Attributes:
        step: Index of the step that failed.
    """

    def __init__(self, step: int, message: str) -> None:
        super().__init__(f"Simulation failed at step {step}: {message}")
        self.step = step


class Simulation:
    """
    Drives a system through a number of propagation steps.

    Example usage:
        simulation = Simulation(system, potentials, propagator, config)
        simulation.add_reporter(PropertyReporter([TotalEnergy()], frequency=10))
        simulation.run(1000)
        system, potentials = simulation.consume()

    Attributes:
        system: System being simulated, mutated in place.
        potentials: Potentials acting in the system.
        propagator: Step algorithm.
        config: Run configuration.
    """

    def __init__(
        self,
        system: System,
        potentials: Potentials,
        propagator: Propagator | None = None,
        config: Configuration | None = None,
    ) -> None:
        """
        Initialize the simulation.

        Args:
            system: Initial system.
            potentials: Potentials acting in the system.
            propagator: Step algorithm. Built from ``config`` if omitted.
            config: Run configuration. Defaults to ``Configuration()``.

        Raises:
            ValueError: If the system precision differs from ``config.precision``.
        """
        self.config = config if config is not None else Configuration()
        if system.dtype != resolve_dtype(self.config.precision):
            raise ValueError(
                f"System precision {system.dtype} does not match configured "
                f"precision {self.config.precision!r}"
            )
        self.system = system
        self.potentials = potentials
        self.propagator = (
            propagator if propagator is not None else self.config.build_propagator()
        )

        self._reporters = ReporterGroup()
        if self.config.outputs:
            self._reporters.add(
                LoggingReporter(self.config.outputs, self.config.output_interval)
            )

        self._total_steps = 0
        self._wall_time = 0.0
        self._propagator_ready = False

    @property
    def total_steps(self) -> int:
        """Return the number of steps completed over all runs."""
        return self._total_steps

    @property
    def performance(self) -> dict[str, float]:
        """Return performance statistics."""
        if self._wall_time == 0:
            return {"steps_per_second": 0.0}
        return {
            "steps_per_second": self._total_steps / self._wall_time,
            "wall_time": self._wall_time,
            "total_steps": self._total_steps,
        }

    def add_reporter(self, reporter: Reporter) -> None:
        """Add a reporter."""
        self._reporters.add(reporter)

    def remove_reporter(self, reporter: Reporter) -> None:
        """Remove a reporter."""
        self._reporters.remove(reporter)

    def _check_finite(self, step: int) -> None:
        # Faults raised in worker threads escape np.errstate, so check the state too
        if not (
            np.all(np.isfinite(self.system.positions))
            and np.all(np.isfinite(self.system.velocities))
        ):
            raise SimulationError(step, "non-finite positions or velocities")

    def run(self, steps: int) -> None:
        """
        Run the simulation for ``steps`` steps.

        Potentials are set up against the current state on every call; the
        propagator only on the first, so a later call continues the same
        trajectory with its cached accelerations and thermostat state. Each
        step propagates the system and lets the potentials refresh their
        selections. Reporters fire at their own frequency and on the final
        step.

        Args:
            steps: Number of steps to run.

        Raises:
            ValueError: If ``steps`` is negative.
            SimulationError: If a step produces a numeric fault.
        """
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}")

        self.potentials.setup(self.system)
        if not self._propagator_ready:
            self.propagator.setup(self.system, self.potentials)
            self._propagator_ready = True
        self._reporters.initialize(self.system)

        logger.info("Starting iteration loop for %d steps", steps)
        start_time = time.perf_counter()

        try:
            for i in range(steps):
                try:
                    with np.errstate(over="raise", invalid="raise", divide="raise"):
                        self.propagator.propagate(self.system, self.potentials)
                        self.potentials.update(self.system, i)
                except FloatingPointError as exc:
                    raise SimulationError(i, str(exc)) from exc
                self._check_finite(i)
                self._total_steps += 1

                last = i == steps - 1
                self._reporters.report(i, self.system, self.potentials, force=last)
        finally:
            self._wall_time += time.perf_counter() - start_time
            self._reporters.finalize(self.system)

        logger.info("Iteration loop finished after %d steps", steps)

    def consume(self) -> tuple[System, Potentials]:
        """Hand back the system and potentials, closing the worker pool."""
        self.propagator.close()
        return self.system, self.potentials
