"""Tests for System, Specie and Element."""

import numpy as np
import pytest

from velvet.system import Cell, Element, Specie, System


@pytest.fixture
def argon():
    """Argon specie."""
    return Specie.from_element(Element.Ar)


@pytest.fixture
def water_like():
    """Two distinct species forming a small molecule."""
    oxygen = Specie(mass=15.999, charge=-0.8)
    hydrogen = Specie(mass=1.008, charge=0.4)
    return oxygen, hydrogen


class TestElement:
    """Test Element enumeration."""

    def test_properties(self):
        """Test element symbol, number and mass."""
        assert Element.Ar.symbol == "Ar"
        assert Element.Ar.number == 18
        assert Element.Ar.mass == pytest.approx(39.948)
        assert Element.F.charge == 0.0

    def test_from_symbol(self):
        """Test looking up an element by symbol."""
        assert Element.from_symbol("ar") is Element.Ar
        with pytest.raises(ValueError):
            Element.from_symbol("Xx")


class TestSpecie:
    """Test Specie identity semantics."""

    def test_from_element(self, argon):
        """Test species built from elements."""
        assert argon.mass == pytest.approx(39.948)
        assert argon.charge == 0.0
        assert argon == Specie.from_element(Element.Ar)
        assert argon != Specie.from_element(Element.Ne)

    def test_identity_equality(self):
        """Test that equal parameters do not make species equal."""
        first = Specie(mass=10.0)
        second = Specie(mass=10.0)
        assert first != second
        assert first == first
        assert len({first, second}) == 2

    def test_invalid_mass(self):
        """Test that a non-positive mass raises an error."""
        with pytest.raises(ValueError):
            Specie(mass=0.0)


class TestSystemCreation:
    """Test system construction and validation."""

    def test_create_defaults(self, argon):
        """Test that optional fields are filled in."""
        system = System.create(
            Cell.cubic(10.0), [argon], [0, 0], [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]
        )
        assert system.size == 2
        assert system.dtype == np.float64
        assert np.all(system.velocities == 0.0)
        assert np.all(system.charges == 0.0)
        assert np.all(system.molecules == 0)
        assert system.bonds == []

    def test_charges_from_species(self, water_like):
        """Test that charges default to the specie charges."""
        oxygen, hydrogen = water_like
        system = System.create(
            Cell.cubic(10.0),
            [oxygen, hydrogen],
            [0, 1, 1],
            np.zeros((3, 3)),
        )
        assert np.allclose(system.charges, [-0.8, 0.4, 0.4])

    def test_masses_follow_types(self, water_like):
        """Test per-particle masses resolved through the type table."""
        oxygen, hydrogen = water_like
        system = System.create(
            Cell.cubic(10.0), [oxygen, hydrogen], [1, 0, 1], np.zeros((3, 3))
        )
        assert np.allclose(system.masses, [1.008, 15.999, 1.008])
        assert system.specie_of(1) is oxygen

    def test_type_table_shared(self, water_like):
        """Test that particles of a type share one specie record."""
        oxygen, hydrogen = water_like
        system = System.create(
            Cell.cubic(10.0), [oxygen, hydrogen], [0, 1, 1], np.zeros((3, 3))
        )
        assert system.specie_of(1) is system.specie_of(2)

    def test_single_precision(self, argon):
        """Test creating a single precision system."""
        system = System.create(
            Cell.cubic(10.0), [argon], [0], [[1.0, 2.0, 3.0]], precision="f32"
        )
        assert system.dtype == np.float32
        assert system.positions.dtype == np.float32
        assert system.velocities.dtype == np.float32
        assert system.masses.dtype == np.float32

    def test_unknown_precision(self, argon):
        """Test that an unknown precision raises an error."""
        with pytest.raises(ValueError):
            System.create(Cell.cubic(10.0), [argon], [0], [[0.0, 0.0, 0.0]], precision="f16")

    def test_empty_system(self):
        """Test that a system without particles is valid."""
        system = System.create(Cell.cubic(10.0), [], [], np.zeros((0, 3)))
        assert system.size == 0
        assert system.positions.shape == (0, 3)

    def test_mismatched_positions(self, argon):
        """Test that positions of the wrong length raise errors."""
        with pytest.raises(ValueError):
            System.create(Cell.cubic(10.0), [argon], [0, 0], [[0.0, 0.0, 0.0]])

    def test_dangling_type_id(self, argon):
        """Test that a type index outside the table raises errors."""
        with pytest.raises(ValueError):
            System.create(Cell.cubic(10.0), [argon], [0, 1], np.zeros((2, 3)))

    def test_mismatched_molecules(self, argon):
        """Test that molecules of the wrong length raise errors."""
        with pytest.raises(ValueError):
            System.create(
                Cell.cubic(10.0), [argon], [0, 0], np.zeros((2, 3)), molecules=[0]
            )

    def test_invalid_bond(self, argon):
        """Test that bonds referencing missing particles raise errors."""
        with pytest.raises(ValueError):
            System.create(
                Cell.cubic(10.0), [argon], [0, 0], np.zeros((2, 3)), bonds=[(0, 2)]
            )

    def test_missing_cell(self, argon):
        """Test that a system requires a Cell."""
        with pytest.raises(ValueError):
            System.create(None, [argon], [0], np.zeros((1, 3)))

    def test_type_ids_read_only(self, argon):
        """Test that type assignments cannot be mutated in place."""
        system = System.create(Cell.cubic(10.0), [argon], [0], np.zeros((1, 3)))
        with pytest.raises(ValueError):
            system.type_ids[0] = 1


class TestSystemCopy:
    """Test system copying."""

    def test_copy_is_independent(self, argon):
        """Test that copies do not share mutable arrays."""
        system = System.create(
            Cell.cubic(10.0), [argon], [0, 0], [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]
        )
        clone = system.copy()
        clone.positions[0, 0] = 5.0
        clone.velocities[1, 1] = 1.0
        assert system.positions[0, 0] == 0.0
        assert system.velocities[1, 1] == 0.0
        assert clone.cell is system.cell
        assert clone.species[0] is system.species[0]
