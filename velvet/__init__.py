"""
velvet: a classical molecular dynamics engine.

Systems of point particles in a periodic cell are propagated with
velocity Verlet under pairwise and coulombic potentials, with optional
Berendsen or Nosé-Hoover temperature control.

Example:
    system = System.create(Cell.cubic(10.0), [argon], type_ids, positions)
    potentials = Potentials()
    potentials.add_pair(LennardJones(0.238, 3.4), PairPotentialMeta((argon, argon), 8.5))
    Boltzmann(300.0, seed=1).apply(system)
    simulation = Simulation(system, potentials, config=Configuration(timestep=1.0))
    simulation.run(1000)
"""

from .config import Configuration
from .constants import BOLTZMANN, FOUR_PI_EPSILON_0
from .distributions import Boltzmann, VelocityDistribution
from .engines import LoggingReporter, PropertyReporter, Simulation, SimulationError
from .integrators import (
    Berendsen,
    MolecularDynamics,
    NoseHoover,
    NullThermostat,
    VelocityVerlet,
)
from .potentials import (
    CoulombicPotentialMeta,
    DampedShiftedForce,
    Harmonic,
    LennardJones,
    Mie,
    Morse,
    PairPotentialMeta,
    Potentials,
    Restriction,
    StandardCoulombic,
)
from .properties import (
    CoulombicForces,
    Forces,
    KineticEnergy,
    PairForces,
    PotentialEnergy,
    Temperature,
    TotalEnergy,
)
from .system import Cell, Element, Specie, System

__version__ = "0.1.0"

__all__ = [
    "BOLTZMANN",
    "FOUR_PI_EPSILON_0",
    "Configuration",
    "Cell",
    "Element",
    "Specie",
    "System",
    "Potentials",
    "PairPotentialMeta",
    "CoulombicPotentialMeta",
    "Restriction",
    "Harmonic",
    "LennardJones",
    "Mie",
    "Morse",
    "StandardCoulombic",
    "DampedShiftedForce",
    "Forces",
    "PairForces",
    "CoulombicForces",
    "KineticEnergy",
    "PotentialEnergy",
    "TotalEnergy",
    "Temperature",
    "Boltzmann",
    "VelocityDistribution",
    "VelocityVerlet",
    "NullThermostat",
    "Berendsen",
    "NoseHoover",
    "MolecularDynamics",
    "Simulation",
    "SimulationError",
    "PropertyReporter",
    "LoggingReporter",
]
