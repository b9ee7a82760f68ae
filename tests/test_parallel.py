"""Tests for parallel infrastructure."""

import numpy as np
import pytest

from velvet.distributions import Boltzmann
from velvet.integrators import VelocityVerlet
from velvet.parallel import (
    ParallelBackend,
    SerialBackend,
    ThreadBackend,
    backend_for,
    get_backend,
)
from velvet.potentials import (
    CoulombicPotentialMeta,
    DampedShiftedForce,
    LennardJones,
    PairPotentialMeta,
    Potentials,
)
from velvet.properties import Forces, PotentialEnergy
from velvet.system import Cell, Specie, System


@pytest.fixture
def charged_gas():
    """Random mixture of two charged species with LJ and DSF potentials."""
    rng = np.random.default_rng(4)
    cation = Specie(mass=22.99, charge=1.0)
    anion = Specie(mass=35.45, charge=-1.0)
    n_atoms = 64
    grid = np.arange(4) * 4.0
    positions = np.array([[x, y, z] for x in grid for y in grid for z in grid])
    positions += rng.uniform(-0.3, 0.3, size=positions.shape)
    system = System.create(Cell.cubic(16.0), [cation, anion], np.arange(n_atoms) % 2, positions)

    potentials = Potentials()
    for pair in ((cation, cation), (cation, anion), (anion, anion)):
        potentials.add_pair(LennardJones(0.1, 3.0), PairPotentialMeta(pair, 7.5))
    potentials.add_coulombic(DampedShiftedForce(0.2, 7.5), CoulombicPotentialMeta(7.5))
    return system, potentials


class TestSerialBackend:
    """Tests for serial backend."""

    def test_serial_backend_properties(self):
        """Test serial backend basic properties."""
        backend = SerialBackend()
        assert backend.name == "serial"
        assert backend.n_workers == 1

    def test_parallel_map(self):
        """Test that map preserves order."""
        backend = SerialBackend()
        assert backend.parallel_map(lambda x: x * x, [1, 2, 3]) == [1, 4, 9]

    def test_single_partition(self):
        """Test that serial partitioning yields one chunk."""
        assert SerialBackend().partition_pairs(10) == [(0, 10)]
        assert SerialBackend().partition_pairs(0) == []

    def test_reduce_forces(self):
        """Test summing partial force arrays."""
        backend = SerialBackend()
        partials = [np.ones((3, 3)), 2 * np.ones((3, 3))]
        total = backend.reduce_forces(partials, 3)
        assert np.allclose(total, 3.0)

    def test_reduce_forces_empty(self):
        """Test that no partials give zero forces."""
        total = SerialBackend().reduce_forces([], 4, np.dtype(np.float32))
        assert total.shape == (4, 3)
        assert total.dtype == np.float32
        assert np.all(total == 0.0)


class TestThreadBackend:
    """Tests for the thread-pool backend."""

    def test_properties(self):
        """Test thread backend basic properties."""
        backend = ThreadBackend(4)
        assert backend.name == "threads"
        assert backend.n_workers == 4
        assert isinstance(backend, ParallelBackend)

    def test_invalid_workers(self):
        """Test that zero workers raise an error."""
        with pytest.raises(ValueError):
            ThreadBackend(0)

    def test_partition_covers_range(self):
        """Test that chunks are contiguous and cover every pair."""
        chunks = ThreadBackend(4).partition_pairs(10)
        assert chunks == [(0, 3), (3, 6), (6, 8), (8, 10)]

    def test_partition_fewer_pairs_than_workers(self):
        """Test that empty chunks are dropped."""
        assert ThreadBackend(4).partition_pairs(2) == [(0, 1), (1, 2)]

    def test_parallel_map(self):
        """Test that map preserves order across threads."""
        with ThreadBackend(3) as backend:
            assert backend.parallel_map(lambda x: x + 1, list(range(20))) == list(
                range(1, 21)
            )

    def test_forces_match_serial(self, charged_gas):
        """Test threaded forces equal the serial reference."""
        system, potentials = charged_gas
        serial = Forces(SerialBackend()).calculate(system, potentials)
        with ThreadBackend(4) as backend:
            threaded = Forces(backend).calculate(system, potentials)
        assert np.allclose(threaded, serial, rtol=1e-10, atol=1e-10)
        assert np.allclose(threaded.sum(axis=0), 0.0, atol=1e-8)

    def test_energy_matches_serial(self, charged_gas):
        """Test threaded energy equals the serial reference."""
        system, potentials = charged_gas
        serial = PotentialEnergy(SerialBackend()).calculate(system, potentials)
        with ThreadBackend(4) as backend:
            threaded = PotentialEnergy(backend).calculate(system, potentials)
        assert threaded == pytest.approx(serial, rel=1e-9)

    def test_trajectory_matches_serial(self, charged_gas):
        """Test a short threaded trajectory follows the serial one."""
        system, potentials = charged_gas
        Boltzmann(300.0, seed=9).apply(system)
        reference = system.copy()

        serial = VelocityVerlet(0.01, backend=SerialBackend())
        serial.setup(reference, potentials)
        with ThreadBackend(3) as backend:
            threaded = VelocityVerlet(0.01, backend=backend)
            threaded.setup(system, potentials)
            for _ in range(10):
                serial.integrate(reference, potentials)
                threaded.integrate(system, potentials)
        assert np.allclose(system.positions, reference.positions, atol=1e-10)


class TestDispatcher:
    """Tests for backend selection."""

    def test_default_is_serial(self):
        """Test the default backend."""
        backend = get_backend()
        assert backend.name == "serial"
        assert get_backend() is backend

    def test_instance_passthrough(self):
        """Test that instances are returned unchanged."""
        backend = ThreadBackend(2)
        assert get_backend(backend) is backend

    def test_backend_for_worker_count(self):
        """Test that one worker is serial and more use threads."""
        assert backend_for(1).name == "serial"
        with backend_for(2) as backend:
            assert backend.name == "threads"
            assert backend.n_workers == 2

    def test_invalid_worker_count(self):
        """Test that fewer than one worker raises errors."""
        with pytest.raises(ValueError):
            backend_for(0)

    def test_evaluators_share_serial_default(self):
        """Test that evaluators without a backend use the shared serial one."""
        assert Forces().backend is get_backend()
        assert PotentialEnergy().backend is get_backend()
