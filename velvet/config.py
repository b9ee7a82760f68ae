"""Run configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from .constants import resolve_dtype
from .integrators import (
    Berendsen,
    MolecularDynamics,
    NoseHoover,
    NullThermostat,
    Thermostat,
    VelocityVerlet,
)
from .parallel import ParallelBackend, backend_for
from .properties import (
    CoulombicEnergy,
    KineticEnergy,
    PairEnergy,
    PotentialEnergy,
    Property,
    Temperature,
    TotalEnergy,
)

THERMOSTATS = ("none", "berendsen", "nose-hoover")

# Properties that can be requested by name in a configuration mapping
OUTPUTS: dict[str, type[Property]] = {
    "pair_energy": PairEnergy,
    "coulombic_energy": CoulombicEnergy,
    "potential_energy": PotentialEnergy,
    "kinetic_energy": KineticEnergy,
    "total_energy": TotalEnergy,
    "temperature": Temperature,
}


def _default_outputs() -> list[Property]:
    return [PotentialEnergy(), KineticEnergy(), TotalEnergy(), Temperature()]


@dataclass
class Configuration:
    """
    Settings consumed by a simulation run.

    Attributes:
        timestep: Integration timestep.
        target_temperature: Thermostat target in K.
        thermostat: ``"none"``, ``"berendsen"`` or ``"nose-hoover"``.
        tau: Thermostat coupling time constant.
        precision: Floating precision of the run, ``"f32"`` or ``"f64"``.
        output_interval: Report every this many steps.
        outputs: Properties reported at each output step.
        n_workers: Threads used for pair evaluation; 1 runs serially.
    """

    timestep: float = 1.0
    target_temperature: float | None = None
    thermostat: str = "none"
    tau: float = 100.0
    precision: str = "f64"
    output_interval: int = 1
    outputs: list[Property] = field(default_factory=_default_outputs)
    n_workers: int = 1

    def __post_init__(self) -> None:
        """Validate settings."""
        if not self.timestep > 0.0:
            raise ValueError(f"timestep must be positive, got {self.timestep}")
        self.thermostat = self.thermostat.lower().replace("_", "-")
        if self.thermostat not in THERMOSTATS:
            raise ValueError(
                f"Unknown thermostat: {self.thermostat}. "
                f"Available: {', '.join(THERMOSTATS)}"
            )
        if self.thermostat != "none" and self.target_temperature is None:
            raise ValueError(f"Thermostat {self.thermostat!r} needs target_temperature")
        if self.target_temperature is not None and self.target_temperature < 0.0:
            raise ValueError(
                f"target_temperature must be non-negative, got {self.target_temperature}"
            )
        if not self.tau > 0.0:
            raise ValueError(f"tau must be positive, got {self.tau}")
        resolve_dtype(self.precision)
        if self.output_interval < 1:
            raise ValueError(
                f"output_interval must be at least 1, got {self.output_interval}"
            )
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be at least 1, got {self.n_workers}")
        for output in self.outputs:
            if not isinstance(output, Property):
                raise TypeError(f"outputs must be Property instances, got {output!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Configuration:
        """
        Build a configuration from a plain mapping.

        ``outputs`` may be given as property names (see :data:`OUTPUTS`).

        Raises:
            ValueError: On unknown keys or output names.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        kwargs = dict(data)
        if "outputs" in kwargs:
            outputs = []
            for output in kwargs["outputs"]:
                if isinstance(output, str):
                    try:
                        output = OUTPUTS[output]()
                    except KeyError:
                        raise ValueError(
                            f"Unknown output: {output}. "
                            f"Available: {', '.join(OUTPUTS)}"
                        ) from None
                outputs.append(output)
            kwargs["outputs"] = outputs
        return cls(**kwargs)

    def build_backend(self) -> ParallelBackend:
        """Create the parallel backend for pair evaluation."""
        return backend_for(self.n_workers)

    def build_thermostat(self) -> Thermostat:
        """Create the configured thermostat."""
        if self.thermostat == "berendsen":
            return Berendsen(self.target_temperature, self.tau, self.timestep)
        if self.thermostat == "nose-hoover":
            return NoseHoover(self.target_temperature, self.tau, self.timestep)
        return NullThermostat()

    def build_propagator(self) -> MolecularDynamics:
        """Create a velocity Verlet propagator with the configured thermostat."""
        integrator = VelocityVerlet(self.timestep, backend=self.build_backend())
        return MolecularDynamics(integrator, self.build_thermostat())
