"""Tests for run configuration."""

import numpy as np
import pytest

from velvet.config import Configuration
from velvet.engines import Simulation
from velvet.integrators import Berendsen, MolecularDynamics, NoseHoover, NullThermostat
from velvet.parallel import SerialBackend, ThreadBackend
from velvet.potentials import LennardJones, PairPotentialMeta, Potentials
from velvet.properties import KineticEnergy, Temperature, TotalEnergy
from velvet.system import Cell, Element, Specie, System


class TestConfiguration:
    """Test configuration defaults and validation."""

    def test_defaults(self):
        """Test default settings."""
        config = Configuration()
        assert config.timestep == 1.0
        assert config.thermostat == "none"
        assert config.precision == "f64"
        assert config.output_interval == 1
        assert config.n_workers == 1
        assert [p.name for p in config.outputs] == [
            "potential_energy",
            "kinetic_energy",
            "total_energy",
            "temperature",
        ]

    def test_outputs_not_shared(self):
        """Test that default outputs are per instance."""
        first = Configuration()
        second = Configuration()
        first.outputs.clear()
        assert len(second.outputs) == 4

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"timestep": 0.0},
            {"thermostat": "andersen", "target_temperature": 300.0},
            {"thermostat": "berendsen"},
            {"target_temperature": -1.0},
            {"tau": 0.0},
            {"precision": "f16"},
            {"output_interval": 0},
            {"n_workers": 0},
        ],
    )
    def test_invalid(self, kwargs):
        """Test that invalid settings raise errors."""
        with pytest.raises(ValueError):
            Configuration(**kwargs)

    def test_invalid_output(self):
        """Test that outputs must be properties."""
        with pytest.raises(TypeError):
            Configuration(outputs=["temperature"])

    def test_thermostat_name_normalized(self):
        """Test thermostat names are case and separator insensitive."""
        config = Configuration(thermostat="Nose_Hoover", target_temperature=300.0)
        assert config.thermostat == "nose-hoover"


class TestFromDict:
    """Test building configurations from mappings."""

    def test_from_dict(self):
        """Test a full mapping."""
        config = Configuration.from_dict(
            {
                "timestep": 0.5,
                "target_temperature": 300.0,
                "thermostat": "berendsen",
                "tau": 2.0,
                "precision": "f32",
                "output_interval": 10,
                "outputs": ["kinetic_energy", "temperature"],
                "n_workers": 2,
            }
        )
        assert config.timestep == 0.5
        assert config.precision == "f32"
        assert isinstance(config.outputs[0], KineticEnergy)
        assert isinstance(config.outputs[1], Temperature)

    def test_property_instances_allowed(self):
        """Test outputs given as property instances."""
        config = Configuration.from_dict({"outputs": [TotalEnergy()]})
        assert isinstance(config.outputs[0], TotalEnergy)

    def test_unknown_key(self):
        """Test that unknown keys raise errors."""
        with pytest.raises(ValueError):
            Configuration.from_dict({"steps": 100})

    def test_unknown_output(self):
        """Test that unknown output names raise errors."""
        with pytest.raises(ValueError):
            Configuration.from_dict({"outputs": ["pressure"]})


class TestBuilders:
    """Test building runtime objects from a configuration."""

    def test_null_thermostat(self):
        """Test the default propagator."""
        propagator = Configuration(timestep=0.5).build_propagator()
        assert isinstance(propagator, MolecularDynamics)
        assert isinstance(propagator.thermostat, NullThermostat)
        assert propagator.timestep == 0.5

    def test_berendsen(self):
        """Test building a Berendsen thermostat."""
        config = Configuration(
            timestep=0.5, thermostat="berendsen", target_temperature=300.0, tau=2.0
        )
        thermostat = config.build_propagator().thermostat
        assert isinstance(thermostat, Berendsen)
        assert thermostat.target == 300.0
        assert thermostat.tau == 2.0
        assert thermostat.timestep == 0.5

    def test_nose_hoover(self):
        """Test building a Nosé-Hoover thermostat."""
        config = Configuration(
            timestep=1.0, thermostat="nose-hoover", target_temperature=300.0, tau=1.5
        )
        thermostat = config.build_thermostat()
        assert isinstance(thermostat, NoseHoover)
        assert thermostat.tau == 1.5

    def test_backends(self):
        """Test worker count selects the backend."""
        assert isinstance(Configuration().build_backend(), SerialBackend)
        backend = Configuration(n_workers=3).build_backend()
        assert isinstance(backend, ThreadBackend)
        assert backend.n_workers == 3

    def test_simulation_from_config(self):
        """Test a simulation built only from configuration."""
        argon = Specie.from_element(Element.Ar)
        system = System.create(
            Cell.cubic(30.0),
            [argon],
            [0, 0],
            [[10.0, 10.0, 10.0], [14.0, 10.0, 10.0]],
        )
        potentials = Potentials()
        potentials.add_pair(
            LennardJones(0.238, 3.4), PairPotentialMeta((argon, argon), 10.0)
        )
        config = Configuration(timestep=0.02, n_workers=2, outputs=[])
        simulation = Simulation(system, potentials, config=config)
        simulation.run(10)
        simulation.consume()
        assert system.positions[0, 0] > 10.0
        assert np.all(np.isfinite(system.velocities))
