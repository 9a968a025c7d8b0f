"""
Pendulum simulation environment and its energy recorder.
"""
from simulation.energy_history import EnergyHistory
from simulation.pendulum import Pendulum

__all__ = ["EnergyHistory", "Pendulum"]
