#!/usr/bin/env python
"""
NVE simulation of 108 argon atoms.

This example demonstrates:
- Building a system and a Lennard-Jones potential
- Sampling initial velocities from a Maxwell-Boltzmann distribution
- Recording total energy with a PropertyReporter

Usage:
    python examples/run_nve.py
"""

import logging

import numpy as np
from argon import argon_fcc, argon_potentials

from velvet import Boltzmann, Configuration, PropertyReporter, Simulation, TotalEnergy

STEPS = 5000
INTERVAL = 10


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    system, argon = argon_fcc()
    potentials = argon_potentials(argon)
    Boltzmann(300.0, seed=1).apply(system)

    config = Configuration(timestep=0.05, output_interval=1000)
    simulation = Simulation(system, potentials, config=config)
    energy = PropertyReporter([TotalEnergy()], frequency=INTERVAL)
    simulation.add_reporter(energy)
    simulation.run(STEPS)
    simulation.consume()

    total = energy.values("total_energy")
    print("\nSummary:")
    print(f"  Steps: {STEPS}")
    print(f"  Mean total energy: {total.mean():.4f} kcal/mol")
    print(f"  Std total energy: {total.std():.2e} kcal/mol")
    print(f"  Relative drift: {np.ptp(total) / abs(total.mean()):.2e}")


if __name__ == "__main__":
    main()
