#!/usr/bin/env python
"""
NVT simulation of argon with a Nosé-Hoover thermostat.

The run is driven entirely from a configuration mapping.

Usage:
    python examples/run_nvt.py
"""

import logging

import numpy as np
from argon import argon_fcc, argon_potentials

from velvet import Boltzmann, Configuration, PropertyReporter, Simulation, Temperature

TARGET = 300.0

SETTINGS = {
    "timestep": 0.05,
    "target_temperature": TARGET,
    "thermostat": "nose-hoover",
    "tau": 1.5,
    "output_interval": 1000,
    "outputs": ["temperature", "total_energy"],
    "n_workers": 4,
}


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    system, argon = argon_fcc()
    potentials = argon_potentials(argon)
    Boltzmann(TARGET, seed=1).apply(system)

    simulation = Simulation(system, potentials, config=Configuration.from_dict(SETTINGS))
    temperature = PropertyReporter([Temperature()], frequency=10)
    simulation.add_reporter(temperature)
    simulation.run(5000)
    simulation.consume()

    values = temperature.values("temperature")
    # skip the first half as equilibration
    production = values[len(values) // 2 :]
    print("\nSummary:")
    print(f"  Target temperature: {TARGET}")
    print(f"  Mean temperature: {production.mean():.2f}")
    print(f"  Std temperature: {np.std(production):.2f}")
    print(f"  Within 5%: {abs(production.mean() - TARGET) < 0.05 * TARGET}")


if __name__ == "__main__":
    main()
