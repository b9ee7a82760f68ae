"""Thermostat and force throughput on an argon crystal."""

import time

import numpy as np
import pytest

from velvet.distributions import Boltzmann
from velvet.integrators import Berendsen, NoseHoover
from velvet.parallel import SerialBackend, ThreadBackend
from velvet.potentials import LennardJones, PairPotentialMeta, Potentials
from velvet.properties import Forces, Temperature
from velvet.system import Cell, Element, Specie, System

TARGET = 100.0
ITERATIONS = 2000


@pytest.fixture
def argon_crystal():
    """108-atom FCC argon crystal at the target temperature."""
    argon = Specie.from_element(Element.Ar)
    basis = np.array(
        [[0.0, 0.0, 0.0], [0.5, 0.5, 0.0], [0.5, 0.0, 0.5], [0.0, 0.5, 0.5]]
    )
    cells = np.array([[i, j, k] for i in range(3) for j in range(3) for k in range(3)])
    positions = (cells[:, np.newaxis, :] + basis[np.newaxis, :, :]).reshape(-1, 3) * 5.26
    system = System.create(
        Cell.cubic(3 * 5.26), [argon], np.zeros(len(positions), dtype=int), positions
    )
    Boltzmann(TARGET, seed=0).apply(system)
    return system, argon


def _throughput(func, iterations):
    start = time.perf_counter()
    for _ in range(iterations):
        func()
    elapsed = time.perf_counter() - start
    return iterations / elapsed if elapsed > 0 else float("inf")


class TestThermostatThroughput:
    """Thermostat hooks on a 108-atom system."""

    def test_berendsen(self, argon_crystal):
        """Berendsen pre/post hooks."""
        system, _ = argon_crystal
        thermostat = Berendsen(TARGET, 2.0)
        thermostat.setup(system)

        def step():
            thermostat.pre_integrate(system)
            thermostat.post_integrate(system)

        rate = _throughput(step, ITERATIONS)
        print(f"\nberendsen: {rate:.0f} steps/s")
        assert Temperature().calculate(system) == pytest.approx(TARGET, rel=1e-6)

    def test_nose_hoover(self, argon_crystal):
        """Nosé-Hoover pre/post hooks."""
        system, _ = argon_crystal
        thermostat = NoseHoover(TARGET, 1.5, 1.0)
        thermostat.setup(system)

        def step():
            thermostat.pre_integrate(system)
            thermostat.post_integrate(system)

        rate = _throughput(step, ITERATIONS)
        print(f"\nnose_hoover: {rate:.0f} steps/s")
        assert np.isfinite(thermostat.xi)
        assert np.all(np.isfinite(system.velocities))


class TestForceThroughput:
    """Force evaluation on a 108-atom system."""

    @pytest.mark.parametrize("backend", [SerialBackend(), ThreadBackend(4)], ids=["serial", "threads"])
    def test_forces(self, argon_crystal, backend):
        """Lennard-Jones forces with each backend."""
        system, argon = argon_crystal
        potentials = Potentials()
        potentials.add_pair(
            LennardJones(0.238, 3.4), PairPotentialMeta((argon, argon), 7.5)
        )
        potentials.setup(system)
        forces = Forces(backend)

        rate = _throughput(lambda: forces.calculate(system, potentials), 50)
        result = forces.calculate(system, potentials)
        backend.close()
        print(f"\nforces[{backend.name}]: {rate:.0f} evaluations/s")
        # perfect lattice: forces cancel by symmetry
        assert np.allclose(result, 0.0, atol=1e-10)
